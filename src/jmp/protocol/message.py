""" A class representation of a Jupyter message, along with the helpers
    used to build fresh headers and replies.
"""

import uuid

from . import fields


def new_header(msg_type, session=None, username='', version=None):
    """ Return a freshly generated header dictionary for a message of the
        given *msg_type*. Every header gets a new, unique message id; a new
        session id is generated if one is not provided. The protocol *version*
        is only included if it is specified.
    """

    if session is None:
        session = str(uuid.uuid4())

    header = dict()
    header[fields.MSG_ID] = str(uuid.uuid4())
    header[fields.USERNAME] = username
    header[fields.SESSION] = session
    header[fields.MSG_TYPE] = msg_type

    if version:
        header[fields.VERSION] = version

    return header


def _as_bytes(frame):
    try:
        frame.encode
    except AttributeError:
        pass
    else:
        return frame.encode()

    try:
        return frame.bytes
    except AttributeError:
        return bytes(memoryview(frame))


class Message:
    """ The :class:`Message` is the unit of exchange for the protocol. The
        fields are in the order of their representation on the wire:

        :ivar idents: Routing identity frames, echoed back in any reply.
        :ivar header: Identity of this message: id, session, type, etc.
        :ivar parent_header: The header of the message this one replies to;
            empty for messages that are not replies.
        :ivar metadata: Free-form dictionary, passed through unmodified.
        :ivar content: The application payload.
        :ivar buffers: Raw binary frames following the JSON segments.
        :ivar signature: The signature received with a decoded message. This
            is always an empty string for a locally constructed message, and
            does not participate in comparisons.

        None of the fields are ever None; the dictionaries default to empty
        dictionaries, and the sequences default to empty lists.
    """

    def __init__(self, idents=(), header=None, parent_header=None,
                       metadata=None, content=None, buffers=()):

        if header is None:
            header = dict()
        if parent_header is None:
            parent_header = dict()
        if metadata is None:
            metadata = dict()
        if content is None:
            content = dict()

        self.idents = list(idents)
        self.header = header
        self.parent_header = parent_header
        self.metadata = metadata
        self.content = content
        self.buffers = list(buffers)
        self.signature = ''


    def __eq__(self, other):

        if not isinstance(other, Message):
            return NotImplemented

        if self.header != other.header:
            return False
        if self.parent_header != other.parent_header:
            return False
        if self.metadata != other.metadata:
            return False
        if self.content != other.content:
            return False

        # Frames arrive as bytes but may have been constructed as strings,
        # memoryviews, zmq.Frame instances, etc.; compare the raw bytes.

        mine = [_as_bytes(frame) for frame in self.idents]
        theirs = [_as_bytes(frame) for frame in other.idents]
        if mine != theirs:
            return False

        mine = [_as_bytes(frame) for frame in self.buffers]
        theirs = [_as_bytes(frame) for frame in other.buffers]
        return mine == theirs


    __hash__ = None


    def __repr__(self):
        return '%s(idents=%r, header=%r, parent_header=%r, metadata=%r, content=%r, buffers=<%d>)' % (
                self.__class__.__name__, self.idents, self.header,
                self.parent_header, self.metadata, self.content,
                len(self.buffers))


    @property
    def msg_type(self):
        return self.header.get(fields.MSG_TYPE)


    def reply(self, msg_type, content=None, metadata=None, protocol_version=None):
        """ Construct, but do not send, a reply to this message. The new
            message is routed back to the original requester via the same
            *idents*, and its parent header is the header of this message.
            The username and session are inherited, if present; so is the
            protocol version, unless *protocol_version* is specified.

            A message whose header has been replaced with something other
            than a dictionary cannot be replied to; the resulting exception
            is not trapped.
        """

        original = self.header

        header = dict()
        header[fields.MSG_ID] = str(uuid.uuid4())

        for field in (fields.USERNAME, fields.SESSION):
            try:
                header[field] = original[field]
            except KeyError:
                pass

        header[fields.MSG_TYPE] = msg_type

        try:
            header[fields.VERSION] = original[fields.VERSION]
        except KeyError:
            pass

        if protocol_version:
            header[fields.VERSION] = protocol_version

        reply = Message(self.idents, header, original, metadata, content)
        return reply


    def respond(self, socket, msg_type, content=None, metadata=None, protocol_version=None):
        """ Construct a reply to this message via :func:`reply` and send it
            via the provided *socket*, which is expected to be a
            :class:`jmp.Socket` so that the message is encoded and signed
            with the socket's scheme and key. The reply is returned so that
            the caller can inspect what was sent.
        """

        reply = self.reply(msg_type, content, metadata, protocol_version)
        socket.send(reply)
        return reply


# end of class Message


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
