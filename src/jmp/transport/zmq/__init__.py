"""ZeroMQ transport: an event-emitting socket, and the framed socket on top."""
