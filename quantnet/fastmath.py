"""Fast, approximate scalar math routines used by the quantized operators."""

from __future__ import annotations

import math
import struct

__all__ = [
    "EN",
    "power",
    "sqrt_quick",
    "sqrt_reciprocal_quick",
    "sqrt_newton",
    "root_newton",
    "atan",
    "atan2",
    "acos",
    "asin",
    "exp_fast",
]

EN = 0.00001
"""Convergence tolerance of the Newton iterations."""

_MAX_ITERATIONS = 1000
_HALF_PI = 1.57079633
_PI = 3.14159265


def _float_bits(x: float) -> int:
    """Return the bits of ``x`` as a float32, read as a signed 32-bit integer."""
    return struct.unpack("<i", struct.pack("<f", x))[0]


def _bits_float(bits: int) -> float:
    """Return the float32 whose bit pattern is the low 32 bits of ``bits``."""
    return struct.unpack("<f", struct.pack("<I", bits & 0xFFFFFFFF))[0]


def power(x: float, a: int) -> float:
    """Return ``x`` raised to the integer power ``a`` by repeated multiplication."""
    result = 1.0
    for _ in range(abs(a)):
        result *= x
    if a < 0:
        return 1.0 / result
    return result


def sqrt_quick(x: float) -> float:
    """Approximate ``sqrt(x)`` with a single bit manipulation."""
    return _bits_float(0x1FBB4000 + (_float_bits(x) >> 1))


def sqrt_reciprocal_quick(x: float) -> float:
    """Approximate ``1 / sqrt(x)`` with a magic constant and one Newton step."""
    xhalf = 0.5 * x
    guess = _bits_float(0x5F375A86 - (_float_bits(x) >> 1))
    return guess * (1.5 - xhalf * guess * guess)


def sqrt_newton(x: float) -> float:
    """Return ``sqrt(x)`` found by Newton iteration."""
    if x < 0:
        raise ValueError(f"square root of negative number {x}")
    if x == 0.0:
        return 0.0
    result = float(x)
    for _ in range(_MAX_ITERATIONS):
        last_value = result
        result = (last_value + x / last_value) * 0.5
        if abs(result - last_value) <= EN:
            break
    return result


def root_newton(x: float, n: int) -> float:
    """Return the ``n``-th root of ``x`` found by Newton iteration."""
    if n == 2:
        return sqrt_newton(x)
    if n == 0:
        return 1.0
    if n == 1:
        return x
    if x == 0.0:
        return 0.0
    if x < 0 and n % 2 == 0:
        raise ValueError(f"even root of negative number {x}")
    result = float(x)
    for _ in range(_MAX_ITERATIONS):
        last_value = result
        result = ((n - 1) * last_value + x / power(last_value, n - 1)) / n
        if abs(result - last_value) <= EN:
            break
    return result


def atan(x: float) -> float:
    """Approximate ``atan(x)``; accurate for ``|x| <= 1``."""
    ax = abs(x)
    return x * (0.78539816 - (ax - 1) * (0.2447 + 0.0663 * ax))


def atan2(x: float, y: float) -> float:
    """Approximate the angle of the point ``(x, y)``, in ``[-pi, pi]``."""
    ax = abs(x)
    ay = abs(y)
    eps = 1e-8
    r = atan(min(ax, ay) / (max(ax, ay) + eps))
    if ay > ax:
        r = _HALF_PI - r
    if x < 0:
        r = _PI - r
    if y < 0:
        r = -r
    return r


def acos(x: float) -> float:
    """Approximate ``acos(x)`` for ``x`` in ``[-1, 1]``."""
    return atan2(x, sqrt_newton(1.0 - x * x))


def asin(x: float) -> float:
    """Approximate ``asin(x)`` for ``x`` in ``[-1, 1]``."""
    return atan2(sqrt_newton(1.0 - x * x), x)


def exp_fast(x: float, steps: int = 8) -> float:
    """Approximate ``e**x`` as ``(1 + x / 2**steps) ** (2**steps)``."""
    value = 1.0 + x / (1 << steps)
    for _ in range(steps):
        value *= value
        if math.isinf(value):
            break
    return value