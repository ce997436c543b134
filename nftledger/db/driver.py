from nftledger.db.encoder import encode, decode, make_key
from nftledger.logger import get_logger
from nftledger import config
from copy import deepcopy
import threading


# DB maps bytes to bytes
# Driver maps string to python object


class InMemDriver:
    def __init__(self):
        self.db = {}

    def get(self, item: str):
        key = item.encode()
        res = self.db.get(key)
        if res is None:
            return None
        return decode(res)

    def set(self, key: str, value):
        if value is None:
            self.__delitem__(key)
        else:
            self.db[key.encode()] = encode(value).encode()

    def delete(self, key: str):
        self.__delitem__(key)

    def iter(self, prefix: str):
        p = prefix.encode()
        return [k.decode() for k in sorted(self.db.keys()) if k.startswith(p)]

    def keys(self):
        return sorted([k.decode() for k in self.db.keys()])

    def flush(self):
        self.db.clear()

    def __delitem__(self, key: str):
        k = key.encode()
        try:
            del self.db[k]
        except KeyError:
            pass


class CacheDriver:
    def __init__(self, driver=None):
        self.pending_writes = {}  # L1 cache
        self.driver = driver or InMemDriver()  # L0 cache

    def find(self, key: str):
        if key in self.pending_writes:
            return deepcopy(self.pending_writes[key])

        return self.driver.get(key)

    def get(self, key: str):
        return self.find(key)

    def set(self, key, value):
        self.pending_writes[key] = deepcopy(value)

    def commit(self):
        for k, v in self.pending_writes.items():
            if v is None:
                self.driver.delete(k)
            else:
                self.driver.set(k, v)

        self.pending_writes.clear()

    def rollback(self):
        # Returns to disk state which should be whatever it was prior to any write sessions
        self.pending_writes.clear()

    def clear_pending_state(self):
        self.rollback()


class LedgerDriver(CacheDriver):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.delimiter = config.INDEX_SEPARATOR
        self.log = get_logger('Driver')

        # Executors sharing this driver serialize on one lock
        self.lock = threading.RLock()

    def items(self, prefix=''):
        # Get all of the items in the cache currently
        _items = {}
        keys = set()

        for k, v in self.pending_writes.items():
            if k.startswith(prefix):
                keys.add(k)
                if v is not None:
                    _items[k] = v

        # Get all of the keys we need
        db_keys = set(self.driver.iter(prefix=prefix))

        # Subtract the already gotten keys
        for k in db_keys - keys:
            _items[k] = self.get(k)

        return dict(sorted(_items.items()))

    def keys(self, prefix=''):
        return list(self.items(prefix).keys())

    def make_key(self, ledger, variable, args=[]):
        return make_key(ledger, variable, args)

    def get_var(self, ledger, variable, arguments=[]):
        key = self.make_key(ledger, variable, arguments)
        return self.get(key)

    def ledger_exists(self, name):
        return self.get_var(name, config.MAX_SUPPLY_KEY) is not None

    def get_ledger_keys(self, name):
        return self.keys(name + self.delimiter)

    def delete_ledger(self, name):
        for key in self.get_ledger_keys(name):
            self.pending_writes.pop(key, None)
            self.driver.delete(key)

        self.log.debug('Deleted ledger {}'.format(name))

    def flush(self):
        self.driver.flush()
        self.clear_pending_state()
