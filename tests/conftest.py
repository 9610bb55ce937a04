import itertools
import pytest

import jmp


_endpoints = itertools.count()

SCHEME = 'sha256'
KEY = 'f388c63a-9fb9-4ee9-83f0-1bb790ffc7c7'


def _deliver(socket, expected=1, attempts=50):
    """ Drive the event loop of *socket* until *expected* deliveries have
        been emitted, or the attempts run out. Returns the number delivered.
    """

    delivered = 0

    for attempt in range(attempts):
        delivered += socket.poll(100)
        if delivered >= expected:
            break

    return delivered


@pytest.fixture
def deliver():
    return _deliver


@pytest.fixture
def endpoint():
    return 'inproc://jmp-test-%d' % (next(_endpoints))


@pytest.fixture
def router_dealer(endpoint):
    """ A connected ROUTER (server) and DEALER (client) pair of jmp sockets
        sharing the same signing key. The client has a fixed identity, so
        that the idents seen by the server are predictable.
    """

    server = jmp.Socket(jmp.zmq.ROUTER, SCHEME, KEY)
    client = jmp.Socket(jmp.zmq.DEALER, SCHEME, KEY)
    client.setsockopt(jmp.zmq.IDENTITY, b'client')

    server.bind(endpoint)
    client.connect(endpoint)

    yield server, client

    client.close()
    server.close()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
