DELIMITER = ':'
INDEX_SEPARATOR = '.'

MAX_HASH_DIMENSIONS = 16
MAX_KEY_SIZE = 1024

# Longer identity keys are digested so an allowance pair always fits in MAX_KEY_SIZE
MAX_IDENTITY_KEY_SIZE = 256

# Amounts are unsigned and must fit in 128 bits
AMOUNT_BITS = 128
MAX_AMOUNT = 2 ** AMOUNT_BITS - 1

PRIVATE_METHOD_PREFIX = '_'

TOTAL_SUPPLY_KEY = 'total_supply'
OWNER_KEY = 'owner'
BALANCES_KEY = 'balances'
ALLOWANCES_KEY = 'allowances'

DEFAULT_LEDGER_NAME = 'ledger'
DEFAULT_SIGNER = 'sys'

EXPORTED_FUNCTIONS = {
    'owner',
    'total_supply',
    'balance_of',
    'allowance',
    'approval',
    'transfer',
    'approve',
    'transfer_from',
    'mint',
    'burn'
}
