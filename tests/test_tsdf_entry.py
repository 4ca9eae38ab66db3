import pytest

from sensefuse.tsdf_entry import TSDFEntry


def test_wire_layout_value_first_little_endian():
    assert TSDFEntry(1, 2).to_bytes() == b"\x01\x00\x02\x00"


def test_raw_of_negative_value():
    assert TSDFEntry(-1, 0).raw() == 0xFFFF


def test_from_raw_splits_halves():
    entry = TSDFEntry.from_raw(0xFFFF0001)
    assert (entry.value, entry.weight) == (1, -1)


@pytest.mark.parametrize(
    "value, weight", [(0, 0), (-32768, 32767), (123, -456), (32767, -32768)]
)
def test_raw_round_trip(value, weight):
    entry = TSDFEntry(value, weight)
    assert TSDFEntry.from_raw(entry.raw()) == entry
    assert 0 <= entry.raw() <= 0xFFFFFFFF


@pytest.mark.parametrize("value, weight", [(5, 7), (-300, 32), (0, -1)])
def test_bytes_round_trip(value, weight):
    entry = TSDFEntry(value, weight)
    data = entry.to_bytes()
    assert len(data) == 4
    assert TSDFEntry.from_bytes(data) == entry


def test_values_wrap_to_int16():
    entry = TSDFEntry(1 << 16, (1 << 16) - 1)
    assert entry == TSDFEntry(0, -1)


def test_equality_follows_raw():
    assert TSDFEntry(3, 4) == TSDFEntry.from_raw(TSDFEntry(3, 4).raw())
    assert TSDFEntry(3, 4).raw() != TSDFEntry(4, 3).raw()


def test_from_bytes_wrong_length_raises():
    with pytest.raises(ValueError):
        TSDFEntry.from_bytes(b"abc")