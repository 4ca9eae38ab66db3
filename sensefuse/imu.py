"""IMU measurements: linear acceleration, angular velocity and magnetic field."""

import math
import struct
from dataclasses import dataclass, field
from numbers import Real

from sensefuse.constants import G

#: Conversion factor from degrees to radians.
DEGREES_TO_RADIANS = math.pi / 180.0

#: Value the phidget driver reports for an unknown double.
PUNK_DBL = 1e300

_F32 = struct.Struct("<f")
_IMU_LAYOUT = struct.Struct("<9f")


def _f32(value):
    """Round ``value`` to single precision."""
    value = float(value)
    if math.isnan(value) or math.isinf(value):
        return value
    try:
        return _F32.unpack(_F32.pack(value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _fdiv(a, b):
    """Divide with IEEE semantics instead of raising on a zero divisor."""
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


@dataclass(frozen=True, slots=True)
class Vector3:
    """Three single-precision components with component-wise arithmetic."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "x", _f32(self.x))
        object.__setattr__(self, "y", _f32(self.y))
        object.__setattr__(self, "z", _f32(self.z))

    def __add__(self, other):
        if not isinstance(other, Vector3):
            return NotImplemented
        return type(self)(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other):
        if not isinstance(other, Vector3):
            return NotImplemented
        return type(self)(self.x - other.x, self.y - other.y, self.z - other.z)

    def __truediv__(self, other):
        """Divide component-wise by another vector or by a scalar."""
        if isinstance(other, Vector3):
            divisors = tuple(other)
        elif isinstance(other, Real):
            divisors = (_f32(other),) * 3
        else:
            return NotImplemented
        return type(self)(*(_fdiv(a, b) for a, b in zip(self, divisors)))

    def __getitem__(self, index):
        return (self.x, self.y, self.z)[index]

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z


class LinearAcceleration(Vector3):
    """Linear acceleration in m/s^2."""

    __slots__ = ()

    @classmethod
    def from_phidget(cls, acceleration):
        """Convert a phidget reading in g (sign inverted by the device) to m/s^2."""
        return cls(*(-a * G for a in acceleration[:3]))


class AngularVelocity(Vector3):
    """Angular velocity in rad/s."""

    __slots__ = ()

    @classmethod
    def from_phidget(cls, angular_rate):
        """Convert a phidget reading in deg/s to rad/s."""
        return cls(*(r * DEGREES_TO_RADIANS for r in angular_rate[:3]))


class MagneticField(Vector3):
    """Magnetic field in Tesla."""

    __slots__ = ()

    @classmethod
    def from_phidget(cls, magnetic_field):
        """Convert a phidget reading in Gauss to Tesla; unknown readings become NaN."""
        if magnetic_field[0] != PUNK_DBL:
            return cls(*(m * 1e-4 for m in magnetic_field[:3]))
        return cls(math.nan, math.nan, math.nan)


@dataclass(frozen=True, slots=True)
class Imu:
    """One IMU sample."""

    acc: LinearAcceleration = field(default_factory=LinearAcceleration)
    ang: AngularVelocity = field(default_factory=AngularVelocity)
    mag: MagneticField = field(default_factory=MagneticField)

    @classmethod
    def from_phidget(cls, acceleration, angular_rate, magnetic_field):
        """Build a sample from raw phidget driver readings."""
        return cls(
            LinearAcceleration.from_phidget(acceleration),
            AngularVelocity.from_phidget(angular_rate),
            MagneticField.from_phidget(magnetic_field),
        )

    def __add__(self, other):
        if not isinstance(other, Imu):
            return NotImplemented
        return Imu(self.acc + other.acc, self.ang + other.ang, self.mag + other.mag)

    def __sub__(self, other):
        if not isinstance(other, Imu):
            return NotImplemented
        return Imu(self.acc - other.acc, self.ang - other.ang, self.mag - other.mag)

    def __truediv__(self, other):
        """Divide component-wise by another sample or by a scalar."""
        if isinstance(other, Imu):
            return Imu(self.acc / other.acc, self.ang / other.ang, self.mag / other.mag)
        if isinstance(other, Real):
            return Imu(self.acc / other, self.ang / other, self.mag / other)
        return NotImplemented

    def __str__(self):
        parts = []
        for label, vector in (("acc", self.acc), ("ang", self.ang), ("mag", self.mag)):
            parts.append(f"-- {label} --\n")
            parts.extend(f"{c:g}\n" for c in vector)
        return "".join(parts)

    def to_bytes(self):
        """Return the 36-byte wire form: nine little-endian floats."""
        return _IMU_LAYOUT.pack(*self.acc, *self.ang, *self.mag)

    @classmethod
    def from_bytes(cls, data):
        """Parse the 36-byte wire form."""
        if len(data) != _IMU_LAYOUT.size:
            raise ValueError(f"IMU sample needs {_IMU_LAYOUT.size} bytes, got {len(data)}")
        values = _IMU_LAYOUT.unpack(data)
        return cls(
            LinearAcceleration(*values[0:3]),
            AngularVelocity(*values[3:6]),
            MagneticField(*values[6:9]),
        )