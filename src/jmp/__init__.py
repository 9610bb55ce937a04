""" Python implementation of the Jupyter messaging protocol. This includes
    the :class:`Message` class, the codec mapping messages to and from the
    multipart frames on the wire, and :class:`Socket`, a ZeroMQ socket that
    sends and receives :class:`Message` instances directly.
"""

# The ZeroMQ bindings are re-exported for convenience, to get at the socket
# types and options: jmp.zmq.ROUTER, jmp.zmq.IDENTITY, etc.

import zmq

# Utility components.

from . import json

# Submodules used by multiple other components.

from . import protocol
from . import config
from . import transport

# Primary public-facing interfaces.

from .protocol.fields import DELIMITER
from .protocol.message import Message, new_header
from .protocol.wire import Decoded, decode, encode, sign
from .transport.zmq.socket import Socket

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
