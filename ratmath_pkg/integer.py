"""Exact arbitrary-precision integers.

Integer is the narrowest member of the numeric tower. Operations close over
Integer except where the exact result needs a wider type: inexact division and
negative powers return a Rational, and any operation with a Rational or
RationalInterval operand widens ``self`` first and delegates.
"""

from __future__ import annotations

import math
from functools import total_ordering
from typing import TYPE_CHECKING, Any

from .config import INTEGER_RE
from .operators import ArithmeticMixin, exponent_value
from .types import DivisionByZeroError, FormatError, UndefinedFactorialError, UndefinedPowerError

if TYPE_CHECKING:
    from .interval import RationalInterval
    from .rational import Rational


def _coerce(value: Any):
    from .promotion import coerce

    return coerce(value)


def _is_exact(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, int) or getattr(value, "rank", None) in (0, 1)


@total_ordering
class Integer(ArithmeticMixin):
    """Immutable whole number backed by a Python ``int``."""

    __slots__ = ("_value",)
    rank = 0

    def __init__(self, value: int | str | Integer = 0):
        if isinstance(value, Integer):
            value = value._value
        elif isinstance(value, str):
            text = value.strip()
            if not INTEGER_RE.match(text):
                raise FormatError(f"Invalid integer format: {value!r}", "INVALID_INTEGER")
            value = int(text)
        elif isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Integer() argument must be int, str or Integer, not {type(value).__name__}")
        self._value = value

    @property
    def value(self) -> int:
        return self._value

    # arithmetic

    def add(self, other: Any):
        other = _coerce(other)
        if isinstance(other, Integer):
            return Integer(self._value + other._value)
        return self.to_rational().add(other)

    def subtract(self, other: Any):
        other = _coerce(other)
        if isinstance(other, Integer):
            return Integer(self._value - other._value)
        return self.to_rational().subtract(other)

    def multiply(self, other: Any):
        other = _coerce(other)
        if isinstance(other, Integer):
            return Integer(self._value * other._value)
        return self.to_rational().multiply(other)

    def divide(self, other: Any):
        """Divide, returning an Integer when exact and a Rational otherwise.

        Raises:
            DivisionByZeroError: If the divisor is zero
        """
        other = _coerce(other)
        if isinstance(other, Integer):
            if other._value == 0:
                raise DivisionByZeroError("Division by zero")
            quotient, remainder = divmod(self._value, other._value)
            if remainder == 0:
                return Integer(quotient)
            from .rational import Rational

            return Rational(self._value, other._value)
        return self.to_rational().divide(other)

    def modulo(self, other: Any) -> Integer:
        """Remainder of truncated division; the result has the sign of the dividend."""
        other = _coerce(other)
        if not isinstance(other, Integer):
            raise TypeError("Modulo requires Integer operands")
        if other._value == 0:
            raise DivisionByZeroError("Modulo by zero")
        remainder = abs(self._value) % abs(other._value)
        return Integer(-remainder if self._value < 0 else remainder)

    def pow(self, exponent: Any):
        """Raise to an integer power.

        A negative exponent on a nonzero base returns the Rational reciprocal
        power.

        Raises:
            UndefinedPowerError: For ``0^0`` and zero to a negative power
        """
        n = exponent_value(exponent)
        if n == 0:
            if self._value == 0:
                raise UndefinedPowerError("Zero cannot be raised to the power of zero")
            return Integer(1)
        if n < 0:
            if self._value == 0:
                raise UndefinedPowerError("Zero cannot be raised to a negative power")
            from .rational import Rational

            return Rational(1, self._value ** -n)
        return Integer(self._value**n)

    def negate(self) -> Integer:
        return Integer(-self._value)

    def abs(self) -> Integer:
        return Integer(abs(self._value))

    def sign(self) -> Integer:
        return Integer((self._value > 0) - (self._value < 0))

    def gcd(self, other: Any) -> Integer:
        other = Integer(other)
        return Integer(math.gcd(self._value, other._value))

    def lcm(self, other: Any) -> Integer:
        other = Integer(other)
        if self._value == 0 or other._value == 0:
            return Integer(0)
        return Integer(abs(self._value * other._value) // math.gcd(self._value, other._value))

    def factorial(self) -> Integer:
        if self._value < 0:
            raise UndefinedFactorialError("Factorial is not defined for negative integers")
        return Integer(math.factorial(self._value))

    def double_factorial(self) -> Integer:
        if self._value < 0:
            raise UndefinedFactorialError(
                "Double factorial is not defined for negative integers"
            )
        return Integer(math.prod(range(self._value, 0, -2)))

    def e_notation(self, exponent: Any):
        """Multiply by ``10**exponent``; negative exponents give a Rational."""
        n = exponent_value(exponent)
        if n >= 0:
            return Integer(self._value * 10**n)
        from .rational import Rational

        return Rational(self._value, 10**-n)

    # predicates

    def is_even(self) -> bool:
        return self._value % 2 == 0

    def is_odd(self) -> bool:
        return self._value % 2 != 0

    def is_zero(self) -> bool:
        return self._value == 0

    def is_positive(self) -> bool:
        return self._value > 0

    def is_negative(self) -> bool:
        return self._value < 0

    def bit_length(self) -> int:
        return abs(self._value).bit_length()

    # conversion

    def to_rational(self) -> Rational:
        from .rational import Rational

        return Rational(self._value, 1)

    def to_interval(self) -> RationalInterval:
        from .interval import RationalInterval

        return RationalInterval(self._value, self._value)

    @classmethod
    def from_rational(cls, rational: Rational) -> Integer:
        if rational.denominator != 1:
            raise FormatError(
                f"Cannot convert {rational} to an Integer: not a whole number",
                "NOT_A_WHOLE_NUMBER",
            )
        return cls(rational.numerator)

    # comparison

    def compare_to(self, other: Any) -> int:
        other = _coerce(other)
        if isinstance(other, Integer):
            return (self._value > other._value) - (self._value < other._value)
        return self.to_rational().compare_to(other)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Integer):
            return self._value == other._value
        if isinstance(other, int) and not isinstance(other, bool):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: Any) -> bool:
        if not _is_exact(other):
            return NotImplemented
        return self.compare_to(other) < 0

    def __hash__(self) -> int:
        return hash(self._value)

    def __mod__(self, other: Any):
        if isinstance(other, bool) or not isinstance(other, (int, Integer)):
            return NotImplemented
        return self.modulo(other)

    def __abs__(self) -> Integer:
        return self.abs()

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    def __str__(self) -> str:
        return str(self._value)

    def __repr__(self) -> str:
        return f"Integer({self._value})"
