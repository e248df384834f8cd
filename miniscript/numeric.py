"""Numeric and character built-in functions."""

from __future__ import annotations

import math
import random
from typing import Optional

_MASK64 = (1 << 64) - 1
_MASK32 = 0xFFFFFFFF
_NAN = float("nan")

_rng = random.Random()
_rng_initialized = False


def _domain(func, x: float) -> float:
    try:
        return func(x)
    except ValueError:
        return _NAN


def _c_log(x: float) -> float:
    if math.isnan(x) or x < 0:
        return _NAN
    if x == 0:
        return -math.inf
    return math.log(x)


def _c_div(num: float, den: float) -> float:
    if den != 0:
        return num / den
    if num == 0 or math.isnan(num):
        return _NAN
    return math.copysign(math.inf, num) * math.copysign(1.0, den)


def _c_round(v: float) -> float:
    if not math.isfinite(v):
        return v
    a = abs(v)
    r = math.floor(a)
    if a - r >= 0.5:
        r += 1
    return math.copysign(float(r), v)


def _split(value: float) -> tuple[bool, int]:
    value = float(value)
    negative = math.copysign(1.0, value) < 0
    magnitude = abs(value)
    if not math.isfinite(magnitude):
        return negative, 0
    return negative, int(magnitude) & _MASK64


def _combine(negative: bool, magnitude: int) -> float:
    result = float(magnitude)
    return -result if negative else result


def abs_value(x: float = 0) -> float:
    return math.fabs(x)


def acos(x: float = 0) -> float:
    return _domain(math.acos, x)


def asin(x: float = 0) -> float:
    return _domain(math.asin, x)


def atan(y: float = 0, x: float = 1) -> float:
    """Arctangent of y, or of y/x using the signs of both when x is not 1."""
    if x == 1.0:
        return math.atan(y)
    return math.atan2(y, x)


def bit_and(i: float = 0, j: float = 0) -> float:
    """Bitwise AND of magnitudes; the result is negative if both are."""
    si, mi = _split(i)
    sj, mj = _split(j)
    return _combine(si and sj, mi & mj)


def bit_or(i: float = 0, j: float = 0) -> float:
    """Bitwise OR of magnitudes; the result is negative if either is."""
    si, mi = _split(i)
    sj, mj = _split(j)
    return _combine(si or sj, mi | mj)


def bit_xor(i: float = 0, j: float = 0) -> float:
    """Bitwise XOR of magnitudes; the result is negative if exactly one is."""
    si, mi = _split(i)
    sj, mj = _split(j)
    return _combine(si != sj, mi ^ mj)


def ceil(x: float = 0) -> float:
    return float(math.ceil(x)) if math.isfinite(x) else float(x)


def floor(x: float = 0) -> float:
    return float(math.floor(x)) if math.isfinite(x) else float(x)


def cos(radians: float = 0) -> float:
    return _domain(math.cos, radians)


def sin(radians: float = 0) -> float:
    return _domain(math.sin, radians)


def tan(radians: float = 0) -> float:
    return _domain(math.tan, radians)


def sqrt(x: float = 0) -> float:
    return _domain(math.sqrt, x)


def log(x: float = 0, base: float = 10) -> float:
    """Logarithm of *x*; a base within 1e-6 of 2.718282 means the natural log."""
    if abs(base - 2.718282) < 0.000001:
        return _c_log(x)
    return _c_div(_c_log(x), _c_log(base))


def round_to(x: float = 0, decimal_places: float = 0) -> float:
    """Round half away from zero to *decimal_places* digits (may be negative)."""
    places = int(decimal_places)
    if places == 0:
        return _c_round(x)
    try:
        factor = math.pow(10, places)
    except OverflowError:
        factor = math.inf
    return _c_div(_c_round(x * factor), factor)


def sign(x: float = 0) -> int:
    if x < 0:
        return -1
    if x > 0:
        return 1
    return 0


def char(code_point: float = 65) -> str:
    """The one-character string for a Unicode code point."""
    return chr(int(code_point))


def code(s: Optional[object] = None) -> int:
    """Code point of the first character of *s*; 0 for None or empty."""
    if s is None:
        return 0
    text = s if isinstance(s, str) else str(s)
    return ord(text[0]) if text else 0


def init_rand(seed: Optional[int] = None) -> None:
    """Seed the shared generator; None seeds it unpredictably."""
    global _rng_initialized
    if seed is None:
        _rng.seed()
    else:
        _rng.seed(int(seed) & _MASK32)
    _rng_initialized = True


def _generator() -> random.Random:
    if not _rng_initialized:
        init_rand()
    return _rng


def rnd(seed: Optional[float] = None) -> float:
    """A random number in [0, 1); a seed reseeds first, making results repeatable."""
    if seed is None:
        return _generator().random()
    init_rand(int(seed))
    return _rng.random()