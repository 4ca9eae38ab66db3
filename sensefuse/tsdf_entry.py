"""A TSDF map cell holding a 16-bit value and a 16-bit weight."""

import struct
from dataclasses import dataclass

_LAYOUT = struct.Struct("<hh")


def _to_int16(v):
    v &= 0xFFFF
    return v - 0x10000 if v & 0x8000 else v


@dataclass(frozen=True, slots=True)
class TSDFEntry:
    """A TSDF value and its weight, packed into 32 bits with the value in the low half."""

    value: int = 0
    weight: int = 0

    def __post_init__(self):
        object.__setattr__(self, "value", _to_int16(self.value))
        object.__setattr__(self, "weight", _to_int16(self.weight))

    @classmethod
    def from_raw(cls, raw):
        """Build an entry from its packed 32-bit representation."""
        raw &= 0xFFFFFFFF
        return cls(raw & 0xFFFF, raw >> 16)

    def raw(self):
        """Return the packed 32-bit representation."""
        return (self.value & 0xFFFF) | ((self.weight & 0xFFFF) << 16)

    def to_bytes(self):
        """Return the 4-byte little-endian wire form."""
        return _LAYOUT.pack(self.value, self.weight)

    @classmethod
    def from_bytes(cls, data):
        """Parse the 4-byte little-endian wire form."""
        if len(data) != _LAYOUT.size:
            raise ValueError(f"TSDF entry needs {_LAYOUT.size} bytes, got {len(data)}")
        return cls(*_LAYOUT.unpack(data))