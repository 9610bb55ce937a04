"""Message codec: map a :class:`Message` to and from multipart frames.

Layout, one frame per entry:

    ident_0 ... ident_k, <IDS|MSG>, signature,
    header, parent_header, metadata, content,
    buffer_0 ... buffer_n

The signature is the lowercase hex HMAC of the four JSON segments, in that
order, or an empty frame if signing is disabled (the key is empty). Buffers
are never interpreted.
"""

from __future__ import annotations

import hmac
import logging
from typing import Iterable, List, NamedTuple, Optional, Sequence

from .. import config
from .. import json
from ..transport.base import FrameTooLarge
from . import fields
from .message import Message


logger = logging.getLogger(__name__)


class Decoded(NamedTuple):
    """Outcome of :func:`decode`.

    Exactly one of ``message`` and ``reason`` is set; ``reason`` is one of
    the failure constants in :mod:`jmp.protocol.fields`. A failed decode
    evaluates as false.
    """

    message: Optional[Message]
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.message is not None


def _digestmod(scheme: str) -> str:
    # Connection files spell the scheme 'hmac-sha256'.
    if scheme.startswith("hmac-"):
        return scheme[5:]
    return scheme


def _key_bytes(key) -> bytes:
    try:
        return key.encode()
    except AttributeError:
        return bytes(key)


def sign(scheme: str, key, segments: Iterable[bytes]) -> str:
    """Return the hex HMAC of *segments*, fed to the digest in order."""

    digest = hmac.new(_key_bytes(key), digestmod=_digestmod(scheme))
    for segment in segments:
        digest.update(segment)
    return digest.hexdigest()


def _frame_bytes(frame) -> bytes:
    """Return the raw bytes of a received frame.

    Raises :class:`FrameTooLarge` for frames beyond
    ``config.maximum_frame_size``; anything that is not bytes-like raises
    TypeError.
    """

    try:
        size = frame.nbytes
    except AttributeError:
        size = len(frame)

    maximum = config.maximum_frame_size
    if size > maximum:
        raise FrameTooLarge(size, maximum)

    if isinstance(frame, bytes):
        return frame
    if isinstance(frame, str):
        return frame.encode()

    try:
        return frame.bytes
    except AttributeError:
        return bytes(memoryview(frame))


def _outgoing(frame):
    # Strings are the only frames that need conversion for the wire.
    if isinstance(frame, str):
        return frame.encode()
    return frame


def _segment(raw: bytes) -> dict:
    value = json.loads(raw)
    if not isinstance(value, dict):
        raise ValueError(f"expected a JSON object, got {type(value).__name__}")
    return value


def decode(parts: Sequence, scheme: str = fields.DEFAULT_SCHEME, key="") -> Decoded:
    """Decode one multipart delivery into a :class:`Message`.

    Protocol-level problems (no delimiter, too few frames, a bad signature,
    unparseable JSON, an oversized frame) produce a failed :class:`Decoded`;
    nothing is raised for them. Any other exception propagates.
    """

    try:
        return _decode(parts, scheme, key)
    except FrameTooLarge as exc:
        logger.debug("dropping message: %s", exc)
        return Decoded(None, fields.OVERSIZED)


def _decode(parts: Sequence, scheme: str, key) -> Decoded:

    parts = list(parts)
    idents = []
    delimiter = None

    for index, part in enumerate(parts):
        if _frame_bytes(part) == fields.DELIMITER:
            delimiter = index
            break
        idents.append(part)

    if delimiter is None:
        logger.debug("dropping message: no delimiter in %d frames", len(parts))
        return Decoded(None, fields.MALFORMED)

    remaining = len(parts) - delimiter - 1
    if remaining < fields.SIGNED_FRAMES:
        logger.debug("dropping message: %d frames after delimiter", remaining)
        return Decoded(None, fields.MALFORMED)

    first = delimiter + 2
    segments = [_frame_bytes(part) for part in parts[first:first + 4]]

    signature = ""
    if key:
        signature = _frame_bytes(parts[delimiter + 1])
        expected = sign(scheme, key, segments).encode()
        if not hmac.compare_digest(signature, expected):
            logger.warning("dropping message: incorrect signature %r", signature)
            return Decoded(None, fields.SIGNATURE)
        signature = signature.decode()

    try:
        header, parent_header, metadata, content = [_segment(raw) for raw in segments]
    except (json.DecodeError, ValueError) as exc:
        logger.debug("dropping message: invalid JSON segment: %s", exc)
        return Decoded(None, fields.JSON)

    buffers = parts[first + 4:]

    message = Message(idents, header, parent_header, metadata, content, buffers)
    message.signature = signature
    return Decoded(message)


def encode(message: Message, scheme: str = fields.DEFAULT_SCHEME, key="") -> List:
    """Encode *message* as a list of frames ready for ``send_multipart()``."""

    segments = [
        json.dumps(message.header),
        json.dumps(message.parent_header),
        json.dumps(message.metadata),
        json.dumps(message.content),
    ]

    signature = b""
    if key:
        signature = sign(scheme, key, segments).encode()

    frames = [_outgoing(ident) for ident in message.idents]
    frames.append(fields.DELIMITER)
    frames.append(signature)
    frames.extend(segments)
    frames.extend(_outgoing(buffer) for buffer in message.buffers)
    return frames
