import math

import pytest

from sensefuse.constants import (
    MAP_RESOLUTION,
    hls_abs,
    hls_sincos,
    hls_sqrt_approx,
    hls_sqrt_float,
)


@pytest.mark.parametrize("value", [-MAP_RESOLUTION, MAP_RESOLUTION, 0, -7, 7])
def test_abs_is_non_negative_and_same_magnitude(value):
    result = hls_abs(value)
    assert result >= 0
    assert result in (value, -value)


def test_abs_of_negative_resolution():
    assert hls_abs(-MAP_RESOLUTION) == MAP_RESOLUTION


@pytest.mark.parametrize("n", range(0, 50))
def test_sqrt_approx_of_perfect_square(n):
    assert hls_sqrt_approx(n * n) == n


def test_sqrt_approx_rounds_to_nearest():
    for n in range(0, 500):
        r = hls_sqrt_approx(n)
        assert (r - 0.5) ** 2 <= n <= (r + 0.5) ** 2


def test_sqrt_approx_negative_raises():
    with pytest.raises(ValueError):
        hls_sqrt_approx(-1)


def test_sqrt_float_squares_back():
    for value in (0.25, 2.0, 10.0, 1234.5):
        assert hls_sqrt_float(value) ** 2 == pytest.approx(value)


@pytest.mark.parametrize("angle", [0.0, 0.3, math.pi / 2, -1.7, 5.0])
def test_sincos_matches_math_and_identity(angle):
    s, c = hls_sincos(angle)
    assert s == pytest.approx(math.sin(angle))
    assert c == pytest.approx(math.cos(angle))
    assert s * s + c * c == pytest.approx(1.0)