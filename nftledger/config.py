import os

DELIMITER = ':'
INDEX_SEPARATOR = '.'

MAX_HASH_DIMENSIONS = 16
MAX_KEY_SIZE = 1024

# Two accounts joined by the delimiter must fit in one key
MAX_ACCOUNT_SIZE = (MAX_KEY_SIZE - len(DELIMITER)) // 2

# Reserved account that never holds a token
ZERO_ADDRESS = '0x' + '0' * 40

DEFAULT_LEDGER_NAME = 'nft'
DEFAULT_SIGNER = 'sys'

PRIVATE_METHOD_PREFIX = '_'

# Ledger variable names
NAME_KEY = '__name__'
SYMBOL_KEY = '__symbol__'
MAX_SUPPLY_KEY = '__max_supply__'
OWNER_KEY = '__owner__'

WEB_SERVER_PORT = int(os.getenv('NFTLEDGER_PORT', 8080))
NUM_WORKERS = 1
