import json
from nftledger.config import INDEX_SEPARATOR, DELIMITER

MAX_SAFE_INT = 2 ** 63 - 1
MIN_SAFE_INT = -(2 ** 63)


def encode_int(value: int):
    if isinstance(value, bool):
        return value

    if MIN_SAFE_INT < value < MAX_SAFE_INT:
        return value

    return {
        '__big_int__': str(value)
    }


def encode_ints(data):
    if isinstance(data, bool):
        return data
    elif isinstance(data, int):
        return encode_int(data)
    elif isinstance(data, dict):
        return {k: encode_ints(v) for k, v in data.items()}
    elif isinstance(data, (list, tuple)):
        return [encode_ints(i) for i in data]
    return data


def encode(data):
    """ NOTE:
    Integers outside the 64 bit range are not portable JSON numbers, and the
    encoder's 'default' hook is never called for ints, so they are tagged here
    before dumping.
    """
    return json.dumps(encode_ints(data), separators=(',', ':'))


def as_object(d):
    if '__big_int__' in d:
        return int(d['__big_int__'])
    return dict(d)


# Decode has a hook for JSON objects, which are just Python dictionaries. You have to specify the logic in this hook.
def decode(data):
    if data is None:
        return None

    if isinstance(data, bytes):
        data = data.decode()

    try:
        return json.loads(data, object_hook=as_object)
    except json.decoder.JSONDecodeError:
        return None


def make_key(ledger, variable, args=[]):
    ledger_variable = INDEX_SEPARATOR.join((ledger, variable))
    if args:
        return DELIMITER.join((ledger_variable, *[str(arg) for arg in args]))
    return ledger_variable
