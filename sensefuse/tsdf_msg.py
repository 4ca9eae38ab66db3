"""TSDF map snapshot message and its multipart wire form."""

import struct
from dataclasses import dataclass, field

from sensefuse.tsdf_entry import TSDFEntry

_FLOAT = struct.Struct("<f")
_VECTOR = struct.Struct("<3i")
_ENTRY_SIZE = 4


def _unpack_exact(layout, frame, what):
    frame = bytes(frame)
    if len(frame) != layout.size:
        raise ValueError(f"{what} frame needs {layout.size} bytes, got {len(frame)}")
    return layout.unpack(frame)


@dataclass
class TSDFMessage:
    """A local TSDF map: truncation distance, size, position, shift offset, scaling and cells."""

    tau: float = 0.0
    size: tuple = (0, 0, 0)
    pos: tuple = (0, 0, 0)
    offset: tuple = (0, 0, 0)
    scaling: float = 1.0
    tsdf_data: list = field(default_factory=list)

    def to_frames(self):
        """Return the six wire frames: tau, size, pos, offset, scaling and the packed cells."""
        try:
            return [
                _FLOAT.pack(self.tau),
                _VECTOR.pack(*self.size),
                _VECTOR.pack(*self.pos),
                _VECTOR.pack(*self.offset),
                _FLOAT.pack(self.scaling),
                b"".join(entry.to_bytes() for entry in self.tsdf_data),
            ]
        except struct.error as exc:
            raise ValueError(f"TSDF message does not fit its wire form: {exc}") from exc

    @classmethod
    def from_frames(cls, frames):
        """Build a message from its wire frames.

        Trailing bytes in the cell frame that do not form a whole entry are ignored.
        """
        frames = list(frames)
        if len(frames) < 6:
            raise ValueError(f"TSDF message needs 6 frames, got {len(frames)}")
        (tau,) = _unpack_exact(_FLOAT, frames[0], "tau")
        size = _unpack_exact(_VECTOR, frames[1], "size")
        pos = _unpack_exact(_VECTOR, frames[2], "pos")
        offset = _unpack_exact(_VECTOR, frames[3], "offset")
        (scaling,) = _unpack_exact(_FLOAT, frames[4], "scaling")
        cells = bytes(frames[5])
        usable = len(cells) - len(cells) % _ENTRY_SIZE
        data = [
            TSDFEntry.from_bytes(cells[start : start + _ENTRY_SIZE])
            for start in range(0, usable, _ENTRY_SIZE)
        ]
        return cls(tau, size, pos, offset, scaling, data)