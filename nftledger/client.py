from nftledger.execution.executor import Executor
from nftledger.db.driver import LedgerDriver
from nftledger.exceptions import ConfigError
from nftledger.ledger import Ledger
from functools import partial

from . import config


class LedgerHandle:
    def __init__(self, ledger_name, signer, executor: Executor):
        self.ledger_name = ledger_name
        self.signer = signer
        self.executor = executor

        # set up virtual functions
        for func in sorted(Ledger.EXPORTS):
            # each function is a partial that allows the signer to be overridden per call
            setattr(self, func, partial(self._abstract_function_call,
                                        signer=self.signer,
                                        executor=self.executor,
                                        func=func))

    def keys(self):
        return self.executor.driver.get_ledger_keys(self.ledger_name)

    def quick_read(self, variable, key=None, args=None):
        a = []

        if key is not None:
            a.append(key)

        if args is not None and isinstance(args, list):
            for arg in args:
                a.append(arg)

        k = self.executor.driver.make_key(ledger=self.ledger_name, variable=variable, args=a)
        return self.executor.driver.get(k)

    def as_signer(self, signer):
        return LedgerHandle(ledger_name=self.ledger_name, signer=signer, executor=self.executor)

    def _abstract_function_call(self, signer, executor, func, **kwargs):
        output = executor.execute(sender=signer,
                                  function_name=func,
                                  kwargs=kwargs)

        if output['status_code'] == 1:
            raise output['result']

        return output['result']


class LedgerClient:
    def __init__(self, signer=config.DEFAULT_SIGNER, driver=None):
        self.raw_driver = driver or LedgerDriver()
        self.signer = signer
        self.executors = {}

    def flush(self):
        self.raw_driver.flush()

    def _executor(self, name):
        executor = self.executors.get(name)

        if executor is None:
            executor = Executor(driver=self.raw_driver, name=name)
            self.executors[name] = executor

        return executor

    def deploy(self, name, symbol, max_supply, ledger=config.DEFAULT_LEDGER_NAME, owner=None):
        if not isinstance(ledger, str) or ledger == '' or \
                config.DELIMITER in ledger or config.INDEX_SEPARATOR in ledger:
            raise ConfigError(reason='invalid ledger name {!r}'.format(ledger))

        handle = LedgerHandle(ledger_name=ledger, signer=owner or self.signer, executor=self._executor(ledger))
        handle.construct(name=name, symbol=symbol, max_supply=max_supply)

        return handle

    # Returns a handle which has partial methods mapped to each exported function.
    def get_ledger(self, name=config.DEFAULT_LEDGER_NAME, signer=None):
        if not self.raw_driver.ledger_exists(name):
            return None

        return LedgerHandle(ledger_name=name, signer=signer or self.signer, executor=self._executor(name))

    def get_ledgers(self):
        ledgers = []
        for key in self.raw_driver.keys():
            suffix = '{}{}'.format(config.INDEX_SEPARATOR, config.MAX_SUPPLY_KEY)
            if key.endswith(suffix):
                ledgers.append(key[:-len(suffix)])
        return ledgers

    def delete_ledger(self, name):
        with self.raw_driver.lock:
            self.raw_driver.delete_ledger(name)
        self.executors.pop(name, None)

    def execute(self, sender, function, ledger=config.DEFAULT_LEDGER_NAME, kwargs=None):
        return self._executor(ledger).execute(sender=sender, function_name=function, kwargs=kwargs)

    def subscribe(self, callback, ledger=config.DEFAULT_LEDGER_NAME):
        self._executor(ledger).subscribe(callback)

    def get_var(self, ledger, variable, arguments=[]):
        return self.raw_driver.get_var(ledger, variable, arguments)
