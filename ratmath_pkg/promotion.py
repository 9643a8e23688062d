"""Type promotion across the numeric tower.

The tower is Integer (rank 0) ⊂ Rational (rank 1) ⊂ RationalInterval (rank 2).
Fraction and FractionInterval sit beside it and enter arithmetic through
their Rational / RationalInterval conversions.

Binary operations widen both operands to the higher rank, then operate.
``narrow`` goes the other way and returns the narrowest exact type holding
the same value.
"""

from __future__ import annotations

from typing import Any, Union

from .fraction import Fraction, FractionInterval
from .integer import Integer
from .interval import RationalInterval
from .operators import exponent_value
from .rational import Rational

Number = Union[Integer, Rational, RationalInterval]

INTEGER_RANK = 0
RATIONAL_RANK = 1
INTERVAL_RANK = 2

_OPERAND_TYPES = (int, Integer, Rational, RationalInterval, Fraction, FractionInterval)


def is_operand(value: Any) -> bool:
    """True for values that ``coerce`` accepts."""
    return isinstance(value, _OPERAND_TYPES) and not isinstance(value, bool)


def coerce(value: Any) -> Number:
    """Map any accepted operand onto the numeric tower.

    Raises:
        TypeError: For values outside the closed set of numeric types
    """
    if isinstance(value, (Integer, Rational, RationalInterval)):
        return value
    if isinstance(value, bool):
        raise TypeError("bool is not a numeric operand")
    if isinstance(value, int):
        return Integer(value)
    if isinstance(value, Fraction):
        return value.to_rational()
    if isinstance(value, FractionInterval):
        return value.to_rational_interval()
    raise TypeError(f"Unsupported operand type: {type(value).__name__}")


def rank(value: Any) -> int:
    return coerce(value).rank


def widen(value: Any, level: int) -> Number:
    """Promote ``value`` to rank ``level``; values already at or above it pass through."""
    value = coerce(value)
    if value.rank >= level:
        return value
    if level == RATIONAL_RANK:
        return value.to_rational()
    if level == INTERVAL_RANK:
        return value.to_interval()
    raise ValueError(f"Unknown promotion level: {level}")


def to_common_type(left: Any, right: Any) -> tuple[Number, Number]:
    left, right = coerce(left), coerce(right)
    level = max(left.rank, right.rank)
    return widen(left, level), widen(right, level)


def narrow(value: Any) -> Number:
    """Collapse point intervals to Rationals and whole Rationals to Integers."""
    value = coerce(value)
    if isinstance(value, RationalInterval):
        if not value.is_point():
            return value
        value = value.low
    if isinstance(value, Rational) and value.is_integer():
        return Integer(value.numerator)
    return value


def add(left: Any, right: Any) -> Number:
    left, right = to_common_type(left, right)
    return left.add(right)


def subtract(left: Any, right: Any) -> Number:
    left, right = to_common_type(left, right)
    return left.subtract(right)


def multiply(left: Any, right: Any) -> Number:
    left, right = to_common_type(left, right)
    return left.multiply(right)


def divide(left: Any, right: Any) -> Number:
    """Divide after widening; two Integers give an Integer when exact."""
    left, right = to_common_type(left, right)
    return left.divide(right)


def negate(value: Any) -> Number:
    return coerce(value).negate()


def e_notation(value: Any, exponent: Any) -> Number:
    return coerce(value).e_notation(exponent_value(exponent))


def power(value: Any, exponent: Any) -> Number:
    return coerce(value).pow(exponent_value(exponent))


def multiply_power(value: Any, exponent: Any) -> RationalInterval:
    """Repeated multiplication of the value, lifted to an interval, by itself."""
    return widen(value, INTERVAL_RANK).mpow(exponent_value(exponent))
