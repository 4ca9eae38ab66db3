"""Integer points used by the fixed-point TSDF arithmetic."""

from dataclasses import dataclass

from sensefuse.constants import MAP_RESOLUTION, hls_abs, hls_sqrt_approx


def _tdiv(a, b):
    """Integer division that truncates toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


@dataclass(slots=True)
class PointHW:
    """Integer point in millimetres or map cells; division truncates toward zero."""

    x: int = 0
    y: int = 0
    z: int = 0

    @classmethod
    def filled(cls, value):
        """Return a point with all three coordinates set to ``value``."""
        return cls(value, value, value)

    def __add__(self, rhs):
        if not isinstance(rhs, PointHW):
            return NotImplemented
        return PointHW(self.x + rhs.x, self.y + rhs.y, self.z + rhs.z)

    def __sub__(self, rhs):
        if not isinstance(rhs, PointHW):
            return NotImplemented
        return PointHW(self.x - rhs.x, self.y - rhs.y, self.z - rhs.z)

    def __mul__(self, rhs):
        if not isinstance(rhs, int):
            return NotImplemented
        return PointHW(self.x * rhs, self.y * rhs, self.z * rhs)

    def __truediv__(self, rhs):
        if not isinstance(rhs, int):
            return NotImplemented
        return PointHW(_tdiv(self.x, rhs), _tdiv(self.y, rhs), _tdiv(self.z, rhs))

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def norm2(self):
        """Return the squared length."""
        return self.x * self.x + self.y * self.y + self.z * self.z

    def norm(self):
        """Return the length rounded to the nearest integer."""
        return hls_sqrt_approx(self.norm2())

    def abs(self):
        """Return the component-wise absolute value."""
        return PointHW(hls_abs(self.x), hls_abs(self.y), hls_abs(self.z))

    def sign(self):
        """Return -1 for negative components and 1 otherwise."""
        return PointHW(*(-1 if c < 0 else 1 for c in self))

    def to_map(self):
        """Convert millimetres to map cell indices."""
        return self / MAP_RESOLUTION

    def to_mm(self):
        """Convert map cell indices to the millimetre centre of the cell."""
        half = MAP_RESOLUTION // 2
        return PointHW(*(c * MAP_RESOLUTION + half for c in self))


@dataclass(slots=True)
class PointArith:
    """Wide integer point used for fixed-point vector arithmetic."""

    x: int = 0
    y: int = 0
    z: int = 0

    @classmethod
    def filled(cls, value):
        """Return a point with all three coordinates set to ``value``."""
        return cls(value, value, value)

    def __add__(self, rhs):
        if not isinstance(rhs, PointArith):
            return NotImplemented
        return PointArith(self.x + rhs.x, self.y + rhs.y, self.z + rhs.z)

    def __sub__(self, rhs):
        if not isinstance(rhs, PointArith):
            return NotImplemented
        return PointArith(self.x - rhs.x, self.y - rhs.y, self.z - rhs.z)

    def __mul__(self, rhs):
        if not isinstance(rhs, int):
            return NotImplemented
        return PointArith(self.x * rhs, self.y * rhs, self.z * rhs)

    def __truediv__(self, rhs):
        if not isinstance(rhs, int):
            return NotImplemented
        return PointArith(_tdiv(self.x, rhs), _tdiv(self.y, rhs), _tdiv(self.z, rhs))

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def norm2(self):
        """Return the squared length."""
        return self.x * self.x + self.y * self.y + self.z * self.z

    def norm(self):
        """Return the length rounded to the nearest integer."""
        return hls_sqrt_approx(self.norm2())

    def cross(self, rhs):
        """Return the cross product with ``rhs``."""
        return PointArith(
            self.y * rhs.z - self.z * rhs.y,
            self.z * rhs.x - self.x * rhs.z,
            self.x * rhs.y - self.y * rhs.x,
        )


def floor_divide(a, b):
    """Return ``floor(a / b)`` component-wise for an integer 3-vector ``a``."""
    return tuple(c // b for c in a)