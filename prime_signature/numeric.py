"""
Integer Helpers

Primality, Legendre signs, binomials, rounding and the wrapping 32-bit
hash fold shared by Fitting ideals and module signatures.
"""

import math
from typing import Iterable, Union

from .constants import HASH_MULTIPLIER, INT32_SIGN, MASK32

Number = Union[int, float]


def is_prime(n: int) -> bool:
    """Trial-division primality test."""
    if n < 2:
        return False
    if n == 2:
        return True
    if n % 2 == 0:
        return False
    for i in range(3, math.isqrt(n) + 1, 2):
        if n % i == 0:
            return False
    return True


def legendre_symbol(a: int, p: int) -> int:
    """
    Quadratic residue sign of ``a`` modulo ``p`` by Euler's criterion.

    Returns 0 when ``p`` is 2 or not prime, or when ``p`` divides ``a``;
    otherwise +1 for a residue and -1 for a non-residue.
    """
    if p == 2 or not is_prime(p):
        return 0
    a %= p
    if a == 0:
        return 0
    return 1 if pow(a, (p - 1) // 2, p) == 1 else -1


def binomial(n: int, k: int) -> int:
    """C(n, k), zero outside 0 <= k <= n."""
    if k < 0 or k > n:
        return 0
    return math.comb(n, k)


def round_half_up(x: float) -> int:
    """Round to nearest integer, ties toward +infinity (-0.5 -> 0, 1.5 -> 2)."""
    return math.floor(x + 0.5)


def to_int32(value: Number) -> int:
    """Truncate toward zero, then wrap into the signed 32-bit range."""
    value = int(value) & MASK32
    return value - (1 << 32) if value & INT32_SIGN else value


def fold_hash(h: int, value: Number) -> int:
    """
    One step of the wrapping fold ``h = h*31 + value`` in signed 32-bit.

    The shift is wrapped before the subtraction and the sum is truncated
    afterwards, so fractional values fold exactly like the reference
    ``((h << 5) - h + value) | 0``.
    """
    shifted = to_int32(h << 5)
    return to_int32(shifted - h + value)


def fold_hash_sequence(values: Iterable[Number], h: int = 0) -> int:
    """Fold every value into ``h`` in order; returns a signed 32-bit int."""
    for value in values:
        h = fold_hash(h, value)
    return h


def to_uint32(h: int) -> int:
    """Coerce a signed 32-bit hash to its unsigned value."""
    return h & MASK32


assert HASH_MULTIPLIER == (1 << 5) - 1, "fold_hash assumes a multiplier of 31"
