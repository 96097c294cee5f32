from tokenledger.db.encoder import encode, decode, make_key
from tokenledger import config
import logging

logger = logging.getLogger(__name__)

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
        k = key.encode()
        if value is None:
            self.__delitem__(key)
        else:
            self.db[k] = encode(value).encode()

    def delete(self, key: str):
        self.__delitem__(key)

    def iter(self, prefix: str, length=0):
        p = prefix.encode()

        l = []
        for k in sorted(self.db.keys()):
            if k.startswith(p):
                l.append(k.decode())
            if 0 < length <= len(l):
                break

        return l

    def keys(self):
        return sorted([k.decode() for k in self.db.keys()])

    def flush(self):
        self.db.clear()

    def __getitem__(self, item: str):
        value = self.get(item)
        if value is None:
            raise KeyError(item)
        return value

    def __setitem__(self, key: str, value):
        self.set(key, value)

    def __delitem__(self, key: str):
        k = key.encode()
        try:
            del self.db[k]
        except KeyError:
            pass


class CacheDriver:
    def __init__(self, driver=None):
        self.pending_writes = {}  # L1 cache
        self.driver = driver if driver is not None else InMemDriver()  # L0

        self.pending_reads = {}

    def find(self, key: str):
        # A pending None is a pending delete and shadows the stored value
        if key in self.pending_writes:
            return self.pending_writes[key]

        return self.driver.get(key)

    def get(self, key: str, save: bool = True):
        value = self.find(key)

        if save and key not in self.pending_reads:
            self.pending_reads[key] = value

        return value

    def set(self, key, value):
        if key not in self.pending_reads:
            self.get(key)

        self.pending_writes[key] = value

    def delete(self, key):
        self.set(key, None)

    def commit(self):
        for k, v in self.pending_writes.items():
            if v is None:
                self.driver.delete(k)
            else:
                self.driver.set(k, v)

        logger.debug('Committed {} writes'.format(len(self.pending_writes)))

        self.pending_writes.clear()
        self.pending_reads = {}

    def rollback(self):
        # Returns to the committed state, whatever it was prior to any pending writes
        logger.debug('Discarding {} pending writes'.format(len(self.pending_writes)))
        self.pending_reads = {}
        self.pending_writes.clear()

    def clear_pending_state(self):
        self.rollback()

    def checkpoint(self):
        return dict(self.pending_writes), dict(self.pending_reads)

    def restore(self, checkpoint):
        writes, reads = checkpoint
        self.pending_writes = dict(writes)
        self.pending_reads = dict(reads)


class ContractDriver(CacheDriver):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.delimiter = config.INDEX_SEPARATOR

    def items(self, prefix=''):
        _items = {}
        keys = set()

        for k, v in self.pending_writes.items():
            if k.startswith(prefix):
                keys.add(k)
                if v is not None:
                    _items[k] = v

        # Keys already resolved from pending writes shadow the stored ones
        for k in set(self.driver.iter(prefix=prefix)) - keys:
            _items[k] = self.get(k)

        return dict(sorted(_items.items()))

    def keys(self, prefix=''):
        return list(self.items(prefix).keys())

    def values(self, prefix=''):
        return list(self.items(prefix).values())

    def make_key(self, contract, variable, args=()):
        return make_key(contract, variable, args)

    def get_var(self, contract, variable, arguments=(), mark=True):
        key = self.make_key(contract, variable, arguments)
        return self.get(key, save=mark)

    def set_var(self, contract, variable, arguments=(), value=None):
        key = self.make_key(contract, variable, arguments)
        self.set(key, value)

    def get_owner(self, name):
        return self.get_var(name, config.OWNER_KEY)

    def ledger_exists(self, name):
        return self.get_owner(name) is not None

    def get_ledger_keys(self, name):
        return self.keys(name + config.INDEX_SEPARATOR)

    def flush(self):
        self.driver.flush()
        self.clear_pending_state()
