from nftledger.db.driver import LedgerDriver
from nftledger.execution.runtime import Runtime
from nftledger.exceptions import ConfigError, PrivateMethod, UnknownFunction
from nftledger.ledger import Ledger
from nftledger.logger import get_logger
from nftledger import config
from copy import deepcopy
import traceback

log = get_logger('Executor')


class Executor:
    """
    Runs ledger operations one at a time. Each call to execute is a single
    critical section: the caller context is set, the operation runs, and its
    writes and events are either committed together or discarded together.
    """
    def __init__(self, driver=None, name=config.DEFAULT_LEDGER_NAME):
        self.driver = driver

        if not self.driver:
            self.driver = LedgerDriver()

        self.name = name
        self.runtime = Runtime()
        self.ledger = Ledger(name=name, driver=self.driver, runtime=self.runtime)

    def subscribe(self, callback):
        self.runtime.events.subscribe(callback)

    def unsubscribe(self, callback):
        self.runtime.events.unsubscribe(callback)

    def _resolve(self, function_name):
        if function_name.startswith(config.PRIVATE_METHOD_PREFIX):
            raise PrivateMethod(function=function_name)

        if function_name not in self.ledger.EXPORTS:
            raise UnknownFunction(function=function_name)

        if function_name != 'construct' and not self.driver.ledger_exists(self.name):
            raise ConfigError(reason="ledger '{}' has not been constructed".format(self.name))

        return getattr(self.ledger, function_name)

    def execute(self, sender, function_name, kwargs=None) -> dict:
        kwargs = kwargs or {}

        with self.driver.lock:
            events = []
            writes = {}

            try:
                self.runtime.set_up(sender=sender)

                func = self._resolve(function_name)
                result = func(**kwargs)

                status_code = 0
                writes = deepcopy(self.driver.pending_writes)

                self.driver.commit()
                events = self.runtime.events.publish()

            except Exception as e:
                result = e
                status_code = 1

                log.error('{} failed for {}: {}'.format(function_name, sender, e))
                log.debug(traceback.format_exc())

                self.driver.clear_pending_state()
            finally:
                self.runtime.clean_up()

        output = {
            'status_code': status_code,
            'result': result,
            'writes': writes,
            'events': events,
        }

        return output
