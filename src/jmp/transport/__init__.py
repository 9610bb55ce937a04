"""Transport layer implementations.

Only the error taxonomy is imported here; the codec depends on it, and the
ZeroMQ sockets depend on the codec.
"""

from .base import (
    TransportError,
    FrameTooLarge,
    TransportClosed,
)
