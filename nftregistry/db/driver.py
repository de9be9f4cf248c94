from nftregistry.db.encoder import encode, decode
from nftregistry.logger import get_logger
from nftregistry import config

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

    def iter(self, prefix: str, length=0):
        p = prefix.encode()

        l = []
        for k in sorted(self.db.keys()):
            if k.startswith(p):
                l.append(k.decode())
            if 0 < length <= len(l):
                break

        return l

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
        try:
            del self.db[key.encode()]
        except KeyError:
            pass


class CacheDriver:
    def __init__(self, driver=None):
        self.pending_writes = {}  # L2 cache
        self.cache = {}  # L1 cache
        self.driver = driver or InMemDriver()  # L0 cache

        self.pending_reads = {}

    def find(self, key: str):
        if key in self.pending_writes:
            return self.pending_writes[key]

        value = self.cache.get(key)
        if value is not None:
            return value

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

    # Moves the pending writes into the backing store
    def commit(self):
        self.cache.update(self.pending_writes)

        for k, v in self.cache.items():
            if v is None:
                self.driver.delete(k)
            else:
                self.driver.set(k, v)

        self.cache.clear()
        self.pending_writes.clear()
        self.pending_reads = {}

    def rollback(self):
        # Returns to the backing store state, which is whatever was there before the write session
        self.cache.clear()
        self.pending_reads = {}
        self.pending_writes.clear()

    def clear_pending_state(self):
        self.rollback()


class ContractDriver(CacheDriver):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.delimiter = config.INDEX_SEPARATOR
        self.log = get_logger('Driver')

    def items(self, prefix=''):
        # Get all of the items in the cache currently
        _items = {}
        keys = set()

        for k, v in self.pending_writes.items():
            if k.startswith(prefix):
                keys.add(k)
                if v is not None:
                    _items[k] = v

        for k, v in self.cache.items():
            if k.startswith(prefix) and k not in keys:
                keys.add(k)
                if v is not None:
                    _items[k] = v

        # Get all of the keys we need
        db_keys = set(self.driver.iter(prefix=prefix))

        # Subtract the already gotten keys
        for k in db_keys - keys:
            _items[k] = self.get(k)

        return _items

    def keys(self, prefix=''):
        return sorted(self.items(prefix).keys())

    def make_key(self, contract, variable, args=[]):
        contract_variable = self.delimiter.join((contract, variable))
        if args:
            return config.DELIMITER.join((contract_variable, *[str(arg) for arg in args]))
        return contract_variable

    def commit(self):
        self.log.debug('Committing {} pending writes'.format(len(self.pending_writes)))
        super().commit()

    def flush(self):
        self.driver.flush()
        self.clear_pending_state()
