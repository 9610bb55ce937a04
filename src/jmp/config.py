""" Configuration defaults for jmp sockets. The values here are consumed
    when a :class:`jmp.Socket` is created without an explicit *scheme* or
    *key*; each can be overridden via the environment, or the signing
    parameters can be read from a Jupyter connection file with :func:`load`.
"""

import os

from . import json
from .protocol import fields


# The hashing scheme is the name of a hashlib algorithm; the key is the
# shared secret. An empty key disables signing altogether.

scheme = os.environ.get('JMP_SCHEME', fields.DEFAULT_SCHEME)
key = os.environ.get('JMP_KEY', '')

# The largest frame that will be converted to text during decoding. This
# matches the largest string a V8-based peer is able to construct; anything
# larger is dropped rather than parsed.

maximum_frame_size = int(os.environ.get('JMP_MAXIMUM_FRAME_SIZE', (1 << 29) - 24))


def load(filename):
    """ Read a Jupyter connection file and return a (scheme, key) tuple
        suitable for constructing a :class:`jmp.Socket`. The connection file
        identifies the scheme as 'hmac-sha256', and so on; the leading 'hmac-'
        is removed here.
    """

    with open(filename, 'rb') as contents:
        contents = contents.read()

    connection = json.loads(contents)

    try:
        connection_scheme = connection['signature_scheme']
    except KeyError:
        connection_scheme = fields.DEFAULT_SCHEME
    else:
        if connection_scheme.startswith('hmac-'):
            connection_scheme = connection_scheme[5:]

    connection_key = connection.get('key', '')
    return (connection_scheme, connection_key)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
