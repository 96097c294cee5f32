from tokenledger.execution.executor import Executor
from tokenledger.db.driver import ContractDriver
from tokenledger.ledger import Ledger, storage_key
from tokenledger.exceptions import LedgerNotFound
from functools import partial

from . import config


class LedgerProxy:
    def __init__(self, name, signer, executor: Executor, client=None):
        self.name = name
        self.signer = signer
        self.executor = executor
        self.client = client

        # each exported function is a partial that allows signer overriding per call
        for func in config.EXPORTED_FUNCTIONS:
            setattr(self, func, partial(self._abstract_function_call,
                                        executor=self.executor,
                                        ledger_name=self.name,
                                        func=func))

    def keys(self):
        return self.executor.driver.get_ledger_keys(self.name)

    def quick_read(self, variable, key=None, args=None):
        # Hash keys of a ledger are identities, stored under their storage keys
        a = []

        if key is not None:
            a.append(storage_key(key))

        if args is not None and isinstance(args, list):
            for arg in args:
                a.append(storage_key(arg))

        k = self.executor.driver.make_key(contract=self.name, variable=variable, args=a)
        return self.executor.driver.get(k)

    def run_private_function(self, f, signer=None, **kwargs):
        # Let executor access private functions
        self.executor.bypass_privates = True

        try:
            return self._abstract_function_call(executor=self.executor, ledger_name=self.name,
                                                func=f, signer=signer, **kwargs)
        finally:
            # Set executor back to restricted mode
            self.executor.bypass_privates = False

    def _abstract_function_call(self, executor, ledger_name, func, signer=None, **kwargs):
        output = executor.execute(sender=signer if signer is not None else self.signer,
                                  ledger_name=ledger_name,
                                  function_name=func,
                                  kwargs=kwargs)

        if self.client is not None:
            self.client.last_output = output

        if output['status_code'] == 1:
            raise output['result']

        return output['result']

    @property
    def ledger(self):
        """A direct view of the stored state, for reads outside the executor."""
        return Ledger(name=self.name, driver=self.executor.driver)


class LedgerClient:
    def __init__(self, signer=config.DEFAULT_SIGNER, driver=None):
        self.raw_driver = driver if driver is not None else ContractDriver()
        self.executor = Executor(driver=self.raw_driver)
        self.signer = signer
        self.last_output = None

    @property
    def last_events(self):
        if self.last_output is None:
            return []
        return self.last_output['events']

    def flush(self):
        self.raw_driver.flush()
        self.last_output = None

    def deploy(self, initial_supply, name=config.DEFAULT_LEDGER_NAME, signer=None):
        output = self.executor.construct(sender=signer if signer is not None else self.signer,
                                         ledger_name=name,
                                         initial_supply=initial_supply)
        self.last_output = output

        if output['status_code'] == 1:
            raise output['result']

        return self.get_ledger(name, signer=signer)

    # Returns a proxy with a partial mapped to each exported ledger function.
    def get_ledger(self, name=config.DEFAULT_LEDGER_NAME, signer=None):
        if not self.raw_driver.ledger_exists(name):
            raise LedgerNotFound(name=name)

        return LedgerProxy(name=name,
                           signer=signer if signer is not None else self.signer,
                           executor=self.executor,
                           client=self)

    def get_ledgers(self):
        ledgers = []
        suffix = config.INDEX_SEPARATOR + config.OWNER_KEY
        for key in self.raw_driver.keys():
            if key.endswith(suffix):
                ledgers.append(key[:-len(suffix)])
        return ledgers

    def get_var(self, ledger, variable, arguments=(), mark=False):
        return self.raw_driver.get_var(ledger, variable, arguments, mark)

    def set_var(self, ledger, variable, arguments=(), value=None):
        self.raw_driver.set_var(ledger, variable, arguments, value)
        self.raw_driver.commit()
