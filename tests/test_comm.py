import socket

import pytest
import zmq

from sensefuse.comm import Receiver, Sender, get_context
from sensefuse.imu import AngularVelocity, Imu, LinearAcceleration, MagneticField
from sensefuse.point_cloud import PointCloud
from sensefuse.stamped import Stamped
from sensefuse.transform import Transform


def _free_port():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def _exchange(sender, receiver, message, attempts=50):
    for _ in range(attempts):
        sender.send(message)
        received = receiver.receive()
        if received is not None:
            return received
    return None


def test_context_is_shared():
    context = get_context()
    assert context.closed is False
    again = get_context()
    assert again is context


def test_empty_address_raises():
    with pytest.raises(ValueError):
        Receiver("", _free_port(), Imu)


def test_negative_timeout_raises():
    with pytest.raises(ValueError):
        Receiver("127.0.0.1", _free_port(), Imu, timeout_ms=-1)


def test_undecodable_type_raises():
    with pytest.raises(TypeError):
        Receiver("127.0.0.1", _free_port(), int)


def test_bare_stamped_type_raises():
    with pytest.raises(TypeError):
        Receiver("127.0.0.1", _free_port(), Stamped)


def test_receive_without_sender_times_out():
    with Receiver("127.0.0.1", _free_port(), Imu, timeout_ms=10) as receiver:
        assert receiver.receive() is None
        assert receiver.poll_successful() is False


def test_imu_over_socket():
    port = _free_port()
    imu = Imu(
        LinearAcceleration(1.0, 2.0, 3.0),
        AngularVelocity(0.5, -0.5, 0.25),
        MagneticField(0.0, 1.0, 0.0),
    )
    with Sender(port) as sender, Receiver("127.0.0.1", port, Imu) as receiver:
        assert _exchange(sender, receiver, imu) == imu


def test_transform_over_socket():
    port = _free_port()
    transform = Transform((0.0, 0.0, 1.0, 0.0), (1.5, 2.5, -3.5), 2.0)
    with Sender(port) as sender, Receiver("127.0.0.1", port, Transform) as receiver:
        assert _exchange(sender, receiver, transform) == transform


def test_stamped_point_cloud_over_socket():
    port = _free_port()
    message = Stamped(PointCloud([(1, 2, 3), (4, 5, 6)], rings=2, scaling=0.5), 123456789)
    with Sender(port) as sender, Receiver(
        "127.0.0.1", port, Stamped[PointCloud]
    ) as receiver:
        received = _exchange(sender, receiver, message)
    assert received == message
    assert received.timestamp == message.timestamp


def test_stamped_imu_over_socket():
    port = _free_port()
    message = Stamped(Imu(acc=LinearAcceleration(0.0, 0.0, 9.5)), 42)
    with Sender(port) as sender, Receiver("127.0.0.1", port, Stamped[Imu]) as receiver:
        received = _exchange(sender, receiver, message)
    assert received == message


def test_binding_same_port_twice_fails():
    port = _free_port()
    with Sender(port):
        with pytest.raises(zmq.ZMQError) as info:
            Sender(port)
    assert info.value.errno == zmq.EADDRINUSE