"""Framed socket: a ZeroMQ socket that speaks Jupyter messages.

The framed socket holds a transport (by default a
:class:`jmp.transport.zmq.events.Socket`) and delegates everything to it,
except for two things: a :class:`Message` passed to :meth:`Socket.send` is
encoded and signed first, and listeners for the ``"message"`` event receive
a decoded :class:`Message` instead of raw frames. Deliveries that fail to
decode never reach the listeners.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, List, Optional

import zmq

from ... import config
from ...protocol import wire
from ...protocol.message import Message
from . import events
from .events import MESSAGE, same_listener


logger = logging.getLogger(__name__)


class _Listener:
    """Pairs an application listener with the wrapper registered for it."""

    def __init__(self, unwrapped: Callable, wrapped: Callable):
        self.unwrapped = unwrapped
        self.wrapped = wrapped


class Socket:
    """ZeroMQ socket that encodes, decodes and signs Jupyter messages.

    *socket_type* is either a ZeroMQ socket type, in which case a new
    transport is created for it, or an existing transport to wrap. *scheme*
    and *key* default to the values in :mod:`jmp.config`; an empty key
    disables signing.
    """

    def __init__(self, socket_type, scheme: Optional[str] = None, key=None,
                 context: Optional[zmq.Context] = None):

        if isinstance(socket_type, int):
            transport = events.Socket(socket_type, context)
        else:
            transport = socket_type

        if scheme is None:
            scheme = config.scheme
        if key is None:
            key = config.key

        self.transport = transport
        self.scheme = scheme
        self.key = key
        self._listeners: List[_Listener] = []

        # The listener list is changed from the dispatch thread by once()
        # wrappers, as well as by the application.
        self._lock = threading.Lock()

    def __getattr__(self, name):
        # Everything not intercepted here belongs to the transport.
        if name in ("transport", "_listeners", "_lock"):
            raise AttributeError(name)
        return getattr(self.transport, name)

    def send(self, message, flags: int = 0):
        """Send a :class:`Message`, or frames that are already encoded."""

        if isinstance(message, Message):
            frames = wire.encode(message, self.scheme, self.key)
            logger.debug("sending %s", message)
        else:
            frames = message

        return self.transport.send(frames, flags)

    def _decode(self, parts) -> Optional[Message]:
        # wire.decode() logs the reason for any failure.
        return wire.decode(parts, self.scheme, self.key).message

    def on(self, event: str, listener: Callable) -> "Socket":
        if event != MESSAGE:
            self.transport.on(event, listener)
            return self

        def wrapped(*parts):
            message = self._decode(parts)
            if message is not None:
                listener(message)

        with self._lock:
            self._listeners.append(_Listener(listener, wrapped))
        self.transport.on(event, wrapped)
        return self

    add_listener = on

    def once(self, event: str, listener: Callable) -> "Socket":
        """Like :meth:`on`, but only for the first decoded message.

        Deliveries that fail to decode do not count. The registration is
        removed before any exception raised by *listener* propagates.
        """

        if event != MESSAGE:
            self.transport.once(event, listener)
            return self

        def wrapped(*parts):
            message = self._decode(parts)
            if message is None:
                return
            try:
                listener(message)
            finally:
                self._forget(entry)

        entry = _Listener(listener, wrapped)
        with self._lock:
            self._listeners.append(entry)
        self.transport.on(event, wrapped)
        return self

    def _forget(self, entry: _Listener) -> None:
        with self._lock:
            try:
                self._listeners.remove(entry)
            except ValueError:
                # Already removed via remove_listener() or remove_all_listeners().
                return
        self.transport.remove_listener(MESSAGE, entry.wrapped)

    def remove_listener(self, event: str, listener: Callable) -> "Socket":
        if event == MESSAGE:
            found = None
            with self._lock:
                for entry in self._listeners:
                    if same_listener(entry.unwrapped, listener):
                        found = entry
                        break
                if found is not None:
                    self._listeners.remove(found)

            if found is not None:
                self.transport.remove_listener(event, found.wrapped)
                return self

        self.transport.remove_listener(event, listener)
        return self

    def remove_all_listeners(self, event: Optional[str] = None) -> "Socket":
        if event is None or event == MESSAGE:
            with self._lock:
                del self._listeners[:]

        if event is None:
            self.transport.remove_all_listeners()
        else:
            self.transport.remove_all_listeners(event)
        return self
