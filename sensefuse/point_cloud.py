"""Lidar point clouds and their multipart wire form."""

import struct
from dataclasses import dataclass, field

_RINGS = struct.Struct("<H")
_POINT = struct.Struct("<3i")
_SCALING = struct.Struct("<f")


def _unpack_exact(layout, frame, what):
    frame = bytes(frame)
    if len(frame) != layout.size:
        raise ValueError(f"{what} frame needs {layout.size} bytes, got {len(frame)}")
    return layout.unpack(frame)


@dataclass
class PointCloud:
    """A scan of integer points with a fixed number of rings.

    Points are stored column by column: every column holds one point of each
    ring, so ring ``r`` of column ``c`` is ``points[c * rings + r]``.
    """

    points: list = field(default_factory=list)
    rings: int = 0
    scaling: float = 1.0

    def to_frames(self):
        """Return the three wire frames: rings, packed int32 points, float32 scaling."""
        try:
            packed = b"".join(_POINT.pack(*point[:3]) for point in self.points)
            return [
                _RINGS.pack(self.rings),
                packed,
                _SCALING.pack(self.scaling),
            ]
        except struct.error as exc:
            raise ValueError(f"point cloud does not fit its wire form: {exc}") from exc

    @classmethod
    def from_frames(cls, frames):
        """Build a point cloud from its wire frames.

        Trailing bytes in the points frame that do not form a whole point are ignored.
        """
        frames = list(frames)
        if len(frames) < 3:
            raise ValueError(f"point cloud needs 3 frames, got {len(frames)}")
        (rings,) = _unpack_exact(_RINGS, frames[0], "rings")
        point_data = bytes(frames[1])
        usable = len(point_data) - len(point_data) % _POINT.size
        points = list(_POINT.iter_unpack(point_data[:usable]))
        (scaling,) = _unpack_exact(_SCALING, frames[2], "scaling")
        return cls(points, rings, scaling)