"""Payload predicates shared by Option and Result."""

from __future__ import annotations

import cmath
import math
import numbers
from decimal import Decimal

__all__ = ['identical', 'is_absent']

# Immutable scalars compared by value in `eq`; everything else by identity.
_SCALARS: tuple[type, ...] = (bool, int, float, complex, str, bytes)
_NUMBERS: tuple[type, ...] = (int, float)


def is_absent(value: object) -> bool:
    """Return True if `value` is None or a not-a-number value.

    NaN is treated as an absence signal rather than a value, so
    `Option.from_(float('nan'))` is Nothing.

    Examples:
        >>> is_absent(None), is_absent(float('nan')), is_absent(0)
        (True, True, False)
    """
    if value is None:
        return True
    if isinstance(value, Decimal):
        return value.is_nan()
    if isinstance(value, complex):
        return cmath.isnan(value)
    # Rationals (int, bool, Fraction) can never be NaN; skip them so huge
    # integers never go through a float conversion.
    if isinstance(value, numbers.Real) and not isinstance(value, numbers.Rational):
        return math.isnan(value)
    return False


def identical(a: object, b: object) -> bool:
    """Return True if two payloads are the same value.

    Scalars of the same type compare with `==` (so NaN never matches);
    anything else must be the very same object. `int` and `float` count as
    one number type, so `identical(1, 1.0)` is True, but bools only match
    bools.

    Examples:
        >>> identical(1, 1.0), identical(True, 1), identical([], [])
        (True, False, False)
    """
    if isinstance(a, bool) or isinstance(b, bool):
        return a is b
    if isinstance(a, _NUMBERS) and isinstance(b, _NUMBERS):
        return a == b
    if type(a) is type(b) and isinstance(a, _SCALARS):
        return a == b
    return a is b
