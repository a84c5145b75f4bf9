"""Numeric constants and small helpers shared by the renderer."""

import math

PI = 3.14159265358979323846
INV_PI = 1.0 / PI
TWO_PI = 2.0 * PI
INV_TWO_PI = 1.0 / TWO_PI
FOUR_PI = 4.0 * PI
INV_FOUR_PI = 1.0 / FOUR_PI
PI_OVER_TWO = 0.5 * PI
PI_OVER_FOUR = 0.25 * PI

INFINITY = math.inf


def to_lowercase(s):
    """Return ``s`` with every character lower-cased."""
    return s.lower()


def modulo(a, b):
    """Remainder of ``a / b`` shifted by ``b`` when it comes out negative.

    The remainder is truncated toward zero (as ``fmod`` does); integers give
    integers and floats give floats.
    """
    if isinstance(a, int) and isinstance(b, int):
        if b == 0:
            raise ZeroDivisionError("integer modulo by zero")
        r = abs(a) % abs(b)
        if a < 0:
            r = -r
    else:
        r = math.fmod(a, b)
    return r + b if r < 0 else r


def radians(deg):
    """Convert degrees to radians."""
    return (PI / 180.0) * deg


def degrees(rad):
    """Convert radians to degrees."""
    return (180.0 / PI) * rad