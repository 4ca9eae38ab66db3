import pytest

from sensefuse.tsdf_entry import TSDFEntry
from sensefuse.tsdf_msg import TSDFMessage


def _sample():
    return TSDFMessage(
        tau=192.0,
        size=(10, 20, 30),
        pos=(-1, 2, -3),
        offset=(4, -5, 6),
        scaling=0.5,
        tsdf_data=[TSDFEntry(5, 32), TSDFEntry(-7, -1), TSDFEntry(0, 0)],
    )


def test_defaults():
    message = TSDFMessage()
    assert message.tau == 0.0
    assert message.size == (0, 0, 0)
    assert message.scaling == 1.0
    assert message.tsdf_data == []


def test_round_trip():
    message = _sample()
    assert TSDFMessage.from_frames(message.to_frames()) == message


def test_frame_layout():
    frames = _sample().to_frames()
    assert len(frames) == 6
    assert [len(frame) for frame in frames[:5]] == [4, 12, 12, 12, 4]
    assert len(frames[5]) == 3 * 4
    assert frames[5][:4] == TSDFEntry(5, 32).to_bytes()


def test_partial_entry_is_ignored():
    frames = _sample().to_frames()
    frames[5] = frames[5] + b"\x01"
    assert TSDFMessage.from_frames(frames).tsdf_data == _sample().tsdf_data


def test_missing_frames_raise():
    with pytest.raises(ValueError):
        TSDFMessage.from_frames(_sample().to_frames()[:5])


def test_wrong_vector_size_raises():
    frames = _sample().to_frames()
    frames[1] = frames[1][:8]
    with pytest.raises(ValueError):
        TSDFMessage.from_frames(frames)