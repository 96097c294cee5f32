from tokenledger.execution import runtime
from tokenledger.execution.runtime import calling
from tokenledger.db.driver import ContractDriver
from tokenledger.exceptions import PrivateFunctionCall
from tokenledger.ledger import Ledger
from tokenledger.logger import get_logger
from tokenledger import config
from copy import deepcopy
import traceback

log = get_logger('EXECUTOR')


class Executor:
    def __init__(self, driver=None, bypass_privates=False):
        self.driver = driver

        if not self.driver:
            self.driver = ContractDriver()

        self.bypass_privates = bypass_privates

        runtime.rt.env.update({'__Driver': self.driver})

    def construct(self, sender, ledger_name, initial_supply, auto_commit=True) -> dict:
        return self._run(sender, ledger_name, '__construct__', lambda ledger: ledger._construct(initial_supply),
                         auto_commit=auto_commit)

    def execute(self, sender, ledger_name, function_name, kwargs, auto_commit=True) -> dict:
        def call(ledger):
            if not self.bypass_privates:
                if function_name.startswith(config.PRIVATE_METHOD_PREFIX) or \
                        function_name not in config.EXPORTED_FUNCTIONS:
                    raise PrivateFunctionCall(function=function_name)

            func = getattr(ledger, function_name)
            return func(**kwargs)

        return self._run(sender, ledger_name, function_name, call, auto_commit=auto_commit)

    def _run(self, sender, ledger_name, function_name, call, auto_commit=True) -> dict:
        driver = self.driver
        runtime.rt.env.update({'__Driver': driver})
        runtime.rt.set_up()

        checkpoint = driver.checkpoint()

        try:
            ledger = Ledger(name=ledger_name, driver=driver)

            with calling(sender, this=ledger_name, signer=sender):
                result = call(ledger)

            status_code = 0
            events = runtime.rt.events.drain()
            previous = checkpoint[0]
            writes = {k: deepcopy(v) for k, v in driver.pending_writes.items()
                      if k not in previous or previous[k] != v}

            log.debug('{} called {}.{}, {} writes, {} events'.format(
                sender, ledger_name, function_name, len(writes), len(events))
            )

            if auto_commit:
                driver.commit()
        except Exception as e:
            result = e
            status_code = 1
            events = []
            writes = {}

            log.error('{} failed calling {}.{}: {}'.format(sender, ledger_name, function_name, e))
            log.debug(traceback.format_exc())

            # Nothing from a failed invocation may become visible
            driver.restore(checkpoint)

        runtime.rt.clean_up()

        output = {
            'status_code': status_code,
            'result': result,
            'events': events,
            'writes': writes,
        }

        return output
