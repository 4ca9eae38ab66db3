"""Data paired with the time it was recorded, and its multipart wire form."""

import struct
import time
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")

_TIMESTAMP = struct.Struct("<q")


def now():
    """Return the current time in nanoseconds since the epoch."""
    return time.time_ns()


@dataclass
class Stamped(Generic[T]):
    """A value and its timestamp in nanoseconds since the epoch.

    On the wire the first frame holds the timestamp as a little-endian 64-bit
    integer. Data with ``to_frames``/``from_frames`` contributes its own frames;
    other data is sent as one frame from ``to_bytes``/``from_bytes``.
    """

    data: T
    timestamp: int = field(default_factory=now)

    def update_time(self):
        """Set the timestamp to now."""
        self.timestamp = now()

    def to_frames(self):
        """Return the message as a list of byte frames."""
        frames = [_TIMESTAMP.pack(self.timestamp)]
        if hasattr(self.data, "to_frames"):
            frames.extend(self.data.to_frames())
        else:
            frames.append(self.data.to_bytes())
        return frames

    @classmethod
    def from_frames(cls, frames, data_type):
        """Build a stamped value of ``data_type`` from a list of frames."""
        frames = [bytes(frame) for frame in frames]
        if not frames:
            raise ValueError("stamped message has no timestamp frame")
        head, rest = frames[0], frames[1:]
        if len(head) != _TIMESTAMP.size:
            raise ValueError(
                f"timestamp frame needs {_TIMESTAMP.size} bytes, got {len(head)}"
            )
        (timestamp,) = _TIMESTAMP.unpack(head)
        if hasattr(data_type, "from_frames"):
            data = data_type.from_frames(rest)
        else:
            if not rest:
                raise ValueError("stamped message has no data frame")
            data = data_type.from_bytes(rest[0])
        return cls(data, timestamp)