from setuptools import setup, find_packages

__version__ = '1.0.0'

requirements = [
    'coloredlogs',
]

setup(
    name='tokenledger',
    version=__version__,
    description='Fungible token ledger with balances, allowances and owner-restricted supply changes.',
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=requirements,
    extras_require={
        'test': ['pytest'],
    },
    python_requires='>=3.6',
    classifiers=[
        'Programming Language :: Python :: 3',
    ],
    zip_safe=True,
    include_package_data=True,
)
