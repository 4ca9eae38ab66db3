"""Publish/subscribe transport of messages over ZeroMQ."""

import functools
import typing

import zmq

from sensefuse.stamped import Stamped


@functools.lru_cache(maxsize=None)
def get_context():
    """Return the process-wide ZeroMQ context with one I/O thread."""
    return zmq.Context(io_threads=1)


def _decoder(data_type):
    """Return ``(multipart, decode)`` for receiving values of ``data_type``."""
    origin = typing.get_origin(data_type)
    if isinstance(origin, type) and issubclass(origin, Stamped):
        (inner,) = typing.get_args(data_type)
        return True, lambda frames: origin.from_frames(frames, inner)
    if isinstance(data_type, type) and issubclass(data_type, Stamped):
        raise TypeError("stamped data must be given as Stamped[DataType]")
    if hasattr(data_type, "from_frames"):
        return True, data_type.from_frames
    if hasattr(data_type, "from_bytes"):
        return False, data_type.from_bytes
    raise TypeError(f"cannot decode messages of type {data_type!r}")


class Sender:
    """Publishes messages on a TCP port.

    Objects with ``to_frames`` go out as multipart messages; others are sent
    as a single frame from ``to_bytes`` and dropped if they cannot be queued.
    """

    def __init__(self, port):
        self._socket = get_context().socket(zmq.PUB)
        try:
            self._socket.setsockopt(zmq.SNDHWM, 2)
            self._socket.setsockopt(zmq.LINGER, 0)
            self._socket.bind(f"tcp://*:{port}")
        except zmq.ZMQError:
            self._socket.close()
            raise

    def send(self, data):
        """Publish ``data``."""
        if hasattr(data, "to_frames"):
            self._socket.send_multipart(data.to_frames())
        else:
            try:
                self._socket.send(data.to_bytes(), zmq.NOBLOCK)
            except zmq.Again:
                pass

    def close(self):
        """Close the socket."""
        self._socket.close(linger=0)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return None


class Receiver:
    """Subscribes to every message published at ``addr:port``.

    ``data_type`` is a class with ``from_frames`` or ``from_bytes``, or
    ``Stamped[DataType]`` for stamped data.
    """

    def __init__(self, addr, port, data_type, timeout_ms=100):
        if not addr:
            raise ValueError("Can't connect to address ''")
        if timeout_ms < 0:
            raise ValueError("Invalid timeout chosen")
        self._multipart, self._decode = _decoder(data_type)
        self._timeout_ms = timeout_ms
        self._socket = get_context().socket(zmq.SUB)
        try:
            self._socket.setsockopt(zmq.LINGER, 0)
            self._socket.connect(f"tcp://{addr}:{port}")
            self._socket.setsockopt(zmq.SUBSCRIBE, b"")
        except zmq.ZMQError:
            self._socket.close()
            raise
        self._poller = zmq.Poller()
        self._poller.register(self._socket, zmq.POLLIN)

    def poll_successful(self):
        """Return whether a message arrived within the timeout."""
        events = dict(self._poller.poll(self._timeout_ms))
        return bool(events.get(self._socket, 0) & zmq.POLLIN)

    def receive(self):
        """Return the next message, or ``None`` if none arrived within the timeout."""
        if not self.poll_successful():
            return None
        if self._multipart:
            return self._decode(self._socket.recv_multipart())
        return self._decode(self._socket.recv())

    def close(self):
        """Close the socket."""
        self._poller.unregister(self._socket)
        self._socket.close(linger=0)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return None