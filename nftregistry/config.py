import os

DELIMITER = ':'
INDEX_SEPARATOR = '.'

MAX_HASH_DIMENSIONS = 16
MAX_KEY_SIZE = 1024

PRIVATE_METHOD_PREFIX = '__'
EXPORT_ATTRIBUTE = '__export__'

CONTRACT_NAME = 'nft'

# Stands in for "no address" wherever an address is expected
ZERO_ADDRESS = '0x' + '0' * 40

WEI_PER_ETHER = 10 ** 18

# 0.01 ether
FEE = 10 ** 16
MAX_SUPPLY = 1000

# Set to False to mint past MAX_SUPPLY the way the deployed contract does
ENFORCE_MAX_SUPPLY = True

WEB_SERVER_HOST = '0.0.0.0'
WEB_SERVER_PORT = int(os.getenv('NFT_WEB_PORT', 8080))
NUM_WORKERS = 1
