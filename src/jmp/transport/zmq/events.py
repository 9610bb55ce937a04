"""Event-emitting ZeroMQ socket.

A pyzmq socket has no notion of listeners. This module supplies the small
event emitter the framed socket is built on: callbacks are registered per
event name, and every multipart delivery is emitted as a ``"message"`` event
whose arguments are the raw frames.

Dispatch happens on whichever thread calls :meth:`Socket.poll`, or on the
background thread started by :meth:`Socket.start`. While the background
thread is running, sends are queued and handed to that thread via an inproc
PAIR socket, so that only one thread ever touches the ZeroMQ socket.
"""

from __future__ import annotations

import atexit
import itertools
import logging
import queue
import threading
from typing import Callable, Dict, List, Optional

import zmq

from ..base import TransportClosed


logger = logging.getLogger(__name__)

zmq_context = zmq.Context()
_sequence = itertools.count()

MESSAGE = "message"
CLOSE = "close"


def same_listener(registered: Callable, listener: Callable) -> bool:
    """Whether *registered* and *listener* are the same callback.

    Bound methods are recreated on every attribute access; two bound
    methods match if they wrap the same function bound to the same instance.
    """

    if registered is listener:
        return True

    try:
        registered.__self__
        listener.__self__
    except AttributeError:
        return False

    return registered == listener


class _Once:
    """Wrapper that removes itself before invoking a one-time listener."""

    def __init__(self, emitter: "Socket", event: str, listener: Callable):
        self.emitter = emitter
        self.event = event
        self.listener = listener

    def __call__(self, *args):
        self.emitter.remove_listener(self.event, self)
        return self.listener(*args)


class Socket:
    """A ZeroMQ socket with listener registration."""

    timeout = 1000

    def __init__(self, socket_type: int, context: Optional[zmq.Context] = None):
        self.context = context or zmq_context
        self.socket = self.context.socket(socket_type)
        self.socket.setsockopt(zmq.LINGER, 0)

        self._events: Dict[str, List[Callable]] = {}
        self._lock = threading.Lock()

        try:
            self._outbox = queue.SimpleQueue()
        except AttributeError:
            self._outbox = queue.Queue()

        internal = f"inproc://jmp.events.Socket:signal:{id(self)}:{next(_sequence)}"
        self._signal_rx = self.context.socket(zmq.PAIR)
        self._signal_rx.bind(internal)
        self._signal_tx = self.context.socket(zmq.PAIR)
        self._signal_tx.connect(internal)

        self.closed = False
        self.shutdown = False
        self.thread: Optional[threading.Thread] = None

    def __getattr__(self, name):
        # bind(), connect(), setsockopt(), getsockopt(), identity, etc.
        if name in ("socket", "_events"):
            raise AttributeError(name)
        return getattr(self.socket, name)

    # --- listener registration ---

    def on(self, event: str, listener: Callable) -> "Socket":
        with self._lock:
            self._events.setdefault(event, []).append(listener)
        return self

    add_listener = on

    def once(self, event: str, listener: Callable) -> "Socket":
        return self.on(event, _Once(self, event, listener))

    def remove_listener(self, event: str, listener: Callable) -> "Socket":
        """Remove the most recently added registration of *listener*."""

        with self._lock:
            registered = self._events.get(event, [])
            for index in range(len(registered) - 1, -1, -1):
                candidate = registered[index]
                if same_listener(candidate, listener) or (
                    isinstance(candidate, _Once) and same_listener(candidate.listener, listener)
                ):
                    del registered[index]
                    break

            if not registered:
                self._events.pop(event, None)

        return self

    def remove_all_listeners(self, event: Optional[str] = None) -> "Socket":
        with self._lock:
            if event is None:
                self._events.clear()
            else:
                self._events.pop(event, None)
        return self

    def listeners(self, event: str) -> List[Callable]:
        with self._lock:
            return list(self._events.get(event, ()))

    def listener_count(self, event: str) -> int:
        with self._lock:
            return len(self._events.get(event, ()))

    def emit(self, event: str, *args) -> bool:
        """Invoke every listener for *event*, in registration order.

        The listeners are those registered when the emit begins; returns
        whether there were any.
        """

        listeners = self.listeners(event)
        for listener in listeners:
            listener(*args)
        return bool(listeners)

    # --- sending ---

    def send(self, frames, flags: int = 0) -> None:
        """Send *frames* as one multipart message."""

        if self.closed:
            raise TransportClosed("send() on a closed socket")

        if self.thread is None:
            self.socket.send_multipart(frames, flags=flags)
            return

        self._outbox.put((frames, flags))
        self._signal_tx.send(b"")

    def _send_one(self) -> None:
        self._signal_rx.recv(flags=zmq.NOBLOCK)

        # An empty outbox means the signal was a wakeup from close().
        try:
            frames, flags = self._outbox.get(block=False)
        except queue.Empty:
            return

        self.socket.send_multipart(frames, flags=flags)

    # --- event loop ---

    def poll(self, timeout: Optional[int] = None) -> int:
        """Run one pass of the event loop.

        Waits up to *timeout* milliseconds (forever if None) for activity,
        sends anything queued, and emits a ``"message"`` event for each
        multipart delivery that is waiting. Returns the number of deliveries
        emitted.
        """

        if self.closed:
            raise TransportClosed("poll() on a closed socket")

        poller = zmq.Poller()
        poller.register(self.socket, zmq.POLLIN)
        poller.register(self._signal_rx, zmq.POLLIN)

        delivered = 0

        for active, _flag in poller.poll(timeout):
            if active == self._signal_rx:
                self._send_one()
            elif active == self.socket:
                while True:
                    try:
                        parts = self.socket.recv_multipart(flags=zmq.NOBLOCK)
                    except zmq.Again:
                        break
                    delivered += 1
                    self.emit(MESSAGE, *parts)

        return delivered

    def run(self) -> None:
        while not self.shutdown:
            try:
                self.poll(self.timeout)
            except TransportClosed:
                break
            except Exception:
                logger.exception("listener failed during dispatch")

    def start(self) -> "Socket":
        """Dispatch events on a background thread."""

        if self.thread is None:
            self.thread = threading.Thread(target=self.run, daemon=True)
            self.thread.start()
        return self

    def close(self) -> None:
        if self.closed:
            return

        self.shutdown = True
        thread = self.thread
        if thread is not None and thread is not threading.current_thread():
            self._signal_tx.send(b"")
            thread.join()

        self.closed = True
        self.socket.close()
        self._signal_rx.close()
        self._signal_tx.close()
        self.emit(CLOSE)


def _cleanup() -> None:
    try:
        zmq_context.destroy(linger=0)
    except Exception:
        pass


atexit.register(_cleanup)
