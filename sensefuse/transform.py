"""Rigid transform with scaling and its multipart wire form."""

import struct
from dataclasses import dataclass

_TRANSLATION = struct.Struct("<3f")
_ROTATION = struct.Struct("<4f")
_SCALING = struct.Struct("<f")


def _unpack_exact(layout, frame, what):
    frame = bytes(frame)
    if len(frame) != layout.size:
        raise ValueError(f"{what} frame needs {layout.size} bytes, got {len(frame)}")
    return layout.unpack(frame)


@dataclass
class Transform:
    """A rotation quaternion ``(x, y, z, w)``, a translation and a scaling factor."""

    rotation: tuple = (0.0, 0.0, 0.0, 1.0)
    translation: tuple = (0.0, 0.0, 0.0)
    scaling: float = 1.0

    def to_frames(self):
        """Return the three wire frames: translation, rotation as x, y, z, w, scaling."""
        return [
            _TRANSLATION.pack(*self.translation),
            _ROTATION.pack(*self.rotation),
            _SCALING.pack(self.scaling),
        ]

    @classmethod
    def from_frames(cls, frames):
        """Build a transform from its wire frames."""
        frames = list(frames)
        if len(frames) < 3:
            raise ValueError(f"transform needs 3 frames, got {len(frames)}")
        translation = _unpack_exact(_TRANSLATION, frames[0], "translation")
        rotation = _unpack_exact(_ROTATION, frames[1], "rotation")
        (scaling,) = _unpack_exact(_SCALING, frames[2], "scaling")
        return cls(rotation, translation, scaling)