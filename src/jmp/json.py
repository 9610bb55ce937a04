''' Wrapper module to select the most performant available library to handle
    the equivalent of :func:`json.loads` and :func:`json.dumps` for the
    JSON segments of a message.
'''

# The business about conditionally importing the libraries is intended to
# avoid importing less efficient libraries if they are not available. msgspec
# is a declared dependency; the others are only reached in stripped-down
# environments.

msgspec = None
orjson = None
json = None

try:
    import msgspec
except ImportError:
    pass

if msgspec is None:
    try:
        import orjson
    except ImportError:
        pass

if msgspec is None and orjson is None:
    import json


# The msgspec 'encode' operation returns bytes, as does orjson.dumps. The
# signature is computed over exactly the bytes put on the wire, so all 'dumps'
# methods need to return bytes.

def json_dumps(*args, **kwargs):
    return json.dumps(*args, **kwargs).encode()


# DecodeError is whatever the selected library raises for malformed input,
# including input that is not valid UTF-8.

if msgspec is not None:
    encoder = msgspec.json.Encoder()
    decoder = msgspec.json.Decoder()
    dumps = encoder.encode
    loads = decoder.decode
    DecodeError = msgspec.DecodeError
elif orjson is not None:
    dumps = orjson.dumps
    loads = orjson.loads
    DecodeError = orjson.JSONDecodeError
else:
    dumps = json_dumps
    loads = json.loads
    DecodeError = ValueError

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
