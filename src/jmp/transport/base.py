"""Transport error taxonomy.

Decoding failures are not exceptions; see :class:`jmp.protocol.wire.Decoded`.
The classes here cover the failures that are raised, either to be caught
inside the codec or to reach the caller.
"""


class TransportError(Exception):
    """Base class for all transport-layer errors."""


class FrameTooLarge(TransportError):
    """A frame exceeds the largest size that will be converted to text."""

    def __init__(self, size: int, maximum: int):
        super().__init__(f"frame of {size} bytes exceeds maximum of {maximum}")
        self.size = size
        self.maximum = maximum


class TransportClosed(TransportError):
    """An operation was attempted on a socket that has been closed."""
