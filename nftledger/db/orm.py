from nftledger.db.driver import LedgerDriver
from nftledger import config


class Datum:
    def __init__(self, ledger, name, driver: LedgerDriver):
        self._driver = driver
        self._key = self._driver.make_key(ledger, name)


class Variable(Datum):
    def __init__(self, ledger, name, driver: LedgerDriver, default_value=None):
        self._default_value = default_value

        super().__init__(ledger, name, driver=driver)

    def set(self, value):
        self._driver.set(self._key, value)

    def get(self):
        value = self._driver.get(self._key)
        if value is None:
            return self._default_value
        return value


class Hash(Datum):
    def __init__(self, ledger, name, driver: LedgerDriver, default_value=None):
        super().__init__(ledger, name, driver=driver)
        self._delimiter = config.DELIMITER
        self._default_value = default_value

    def _set(self, key, value):
        self._driver.set('{}{}{}'.format(self._key, self._delimiter, key), value)

    def _get(self, item):
        value = self._driver.get('{}{}{}'.format(self._key, self._delimiter, item))

        # Add Python defaultdict behavior
        if value is None:
            value = self._default_value

        return value

    def _validate_key(self, key):
        if isinstance(key, tuple):
            assert len(key) <= config.MAX_HASH_DIMENSIONS, 'Too many dimensions ({}) for hash. Max is {}'.format(
                len(key), config.MAX_HASH_DIMENSIONS
            )

            new_key_str = ''
            for k in key:
                assert not isinstance(k, slice), 'Slices prohibited in hashes.'

                k = str(k)

                assert config.DELIMITER not in k, 'Illegal delimiter in key.'
                assert config.INDEX_SEPARATOR not in k, 'Illegal separator in key.'

                new_key_str += '{}{}'.format(k, self._delimiter)

            key = new_key_str[:-len(self._delimiter)]
        else:
            key = str(key)

            assert config.DELIMITER not in key, 'Illegal delimiter in key.'
            assert config.INDEX_SEPARATOR not in key, 'Illegal separator in key.'

        assert len(key) <= config.MAX_KEY_SIZE, 'Key is too long ({}). Max is {}.'.format(len(key), config.MAX_KEY_SIZE)
        return key

    def _prefix_for_args(self, args):
        multi = self._validate_key(args)
        prefix = '{}{}'.format(self._key, self._delimiter)
        if multi != '':
            prefix += '{}{}'.format(multi, self._delimiter)

        return prefix

    def items(self, *args):
        prefix = self._prefix_for_args(args)
        return {k[len(prefix):]: v for k, v in self._driver.items(prefix=prefix).items()}

    def __setitem__(self, key, value):
        # handle multiple hashes differently
        key = self._validate_key(key)
        self._set(key, value)

    def __getitem__(self, key):
        key = self._validate_key(key)
        return self._get(key)

    def __delitem__(self, key):
        key = self._validate_key(key)
        self._set(key, None)
