from . import fields
from . import message
from . import wire


"""
jmp Protocol Layer
==================

The protocol layer defines the Jupyter message and its mapping to and from
the multipart frames on the wire. It MUST NOT depend on the transport
implementation beyond the error taxonomy in :mod:`jmp.transport.base`.

Message Model (message.py)
    - Message
    - new_header(), Message.reply(), Message.respond()

Codec (wire.py)
    - encode(), decode(), sign()
    - Decoded: tagged decode outcome

Field Vocabulary (fields.py)
    Delimiter, default scheme, header keys, decode failure reasons
"""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
