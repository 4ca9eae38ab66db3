"""Fixed-point resolutions, sensor parameters and small numeric helpers."""

import math

#: Resolution of the map in millimetres per cell.
MAP_RESOLUTION = 64

#: Integer representation of a weight of 1.0.
WEIGHT_RESOLUTION = 32

#: Integer representation of 1.0 in fixed-point matrix and division arithmetic.
MATRIX_RESOLUTION = 1 << 15

#: Number of parallel TSDF update lanes.
TSDF_SPLIT_FACTOR = 4

#: Default timeout in milliseconds for non-blocking pops in worker loops.
DEFAULT_POP_TIMEOUT = 100

# IMU parameters
G = 9.80665
MAX_TIMEDIFF_SECONDS = 0.1

SERIAL_NUMBER = -1
PERIOD_MS = 4

ANGULAR_VELOCITY_STDEV = 0.02 * (math.pi / 180.0)
LINEAR_ACCELERATION_STDEV = 300.0 * 1e-6 * G
MAGNETIC_FIELD_STDEV = 0.095 * (math.pi / 180.0)

# Compass correction parameters
CC_MAG_FIELD = 0.52859
CC_OFFSET0 = 0.03921
CC_OFFSET1 = 0.19441
CC_OFFSET2 = -0.03493
CC_GAIN0 = 1.81704
CC_GAIN1 = 1.81028
CC_GAIN2 = 2.04819
CC_T0 = 0.00142
CC_T1 = -0.03591
CC_T2 = 0.00160
CC_T3 = -0.05038
CC_T4 = -0.03942
CC_T5 = -0.05673


def hls_abs(x):
    """Return the absolute value of ``x``."""
    return -x if x < 0 else x


def hls_sqrt_approx(x):
    """Return the square root of ``x`` rounded to the nearest integer."""
    return math.floor(math.sqrt(x) + 0.5)


def hls_sqrt_float(x):
    """Return the square root of ``x`` as a float."""
    return math.sqrt(x)


def hls_sincos(angle):
    """Return ``(sin(angle), cos(angle))`` for an angle in radians."""
    return math.sin(angle), math.cos(angle)