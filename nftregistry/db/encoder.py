import json

MAX_SAFE_INT = 2 ** 63 - 1
MIN_SAFE_INT = -(2 ** 63)

##
# Values are stored as compact JSON. Integers outside the signed 64 bit range are wrapped so that
# wei amounts and big token ids survive a trip through stores that cap integer width.
##


def encode_int(value: int):
    if MIN_SAFE_INT < value < MAX_SAFE_INT:
        return value

    return {
        '__big_int__': str(value)
    }


def _encode_ints(data):
    if isinstance(data, bool):
        return data
    elif isinstance(data, int):
        return encode_int(data)
    elif isinstance(data, dict):
        return {k: _encode_ints(v) for k, v in data.items()}
    elif isinstance(data, (list, tuple)):
        return [_encode_ints(i) for i in data]
    return data


def encode(data):
    return json.dumps(_encode_ints(data), separators=(',', ':'))


def as_object(d):
    if '__big_int__' in d:
        return int(d['__big_int__'])
    return dict(d)


# Decode has a hook for JSON objects, which are just Python dictionaries.
def decode(data):
    if data is None:
        return None

    if isinstance(data, bytes):
        data = data.decode()

    try:
        return json.loads(data, object_hook=as_object)
    except json.decoder.JSONDecodeError:
        return None
