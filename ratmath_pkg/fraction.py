"""Unreduced fractions and intervals of them.

A Fraction keeps the numerator and denominator exactly as written, so
``2/4`` and ``1/2`` are distinct values until ``reduce()`` is called. This is
what mediant-based constructions (Farey and Stern-Brocot style bisection)
need: the mediant of ``a/b`` and ``c/d`` is ``(a+c)/(b+d)``, which depends on
the representation and not only on the value.
"""

from __future__ import annotations

import math
from functools import cmp_to_key
from typing import Any, Callable

from .config import FRACTION_RE, INTEGER_RE
from .integer import Integer
from .interval import RationalInterval
from .operators import exponent_value
from .rational import Rational
from .types import DivisionByZeroError, FormatError, UndefinedPowerError, ValidationError


def _component(value: Any) -> int:
    if isinstance(value, Integer):
        return value.value
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Fraction components must be int or Integer, not {type(value).__name__}")
    return value


class Fraction:
    """Immutable ``numerator/denominator`` pair stored without reduction."""

    __slots__ = ("_numerator", "_denominator")

    def __init__(self, numerator: int | str | Integer = 0, denominator: int | Integer = 1):
        if isinstance(numerator, str):
            text = numerator.strip()
            match = FRACTION_RE.match(text)
            if match:
                num, den = int(match.group(1)), int(match.group(2))
            elif INTEGER_RE.match(text):
                num, den = int(text), 1
            else:
                raise FormatError("Invalid fraction format. Use 'a/b' or 'a'", "INVALID_FRACTION")
        else:
            num, den = _component(numerator), _component(denominator)
        if den == 0:
            raise DivisionByZeroError("Denominator cannot be zero", "ZERO_DENOMINATOR")
        self._numerator = num
        self._denominator = den

    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    def add(self, other: Fraction) -> Fraction:
        if self._denominator != other._denominator:
            raise ValidationError(
                "Addition only supported for equal denominators", "DENOMINATOR_MISMATCH"
            )
        return Fraction(self._numerator + other._numerator, self._denominator)

    def subtract(self, other: Fraction) -> Fraction:
        if self._denominator != other._denominator:
            raise ValidationError(
                "Subtraction only supported for equal denominators", "DENOMINATOR_MISMATCH"
            )
        return Fraction(self._numerator - other._numerator, self._denominator)

    def multiply(self, other: Fraction) -> Fraction:
        return Fraction(
            self._numerator * other._numerator, self._denominator * other._denominator
        )

    def divide(self, other: Fraction) -> Fraction:
        if other._numerator == 0:
            raise DivisionByZeroError("Division by zero")
        return Fraction(
            self._numerator * other._denominator, self._denominator * other._numerator
        )

    def pow(self, exponent: Any) -> Fraction:
        """Raise numerator and denominator to an integer power.

        Raises:
            UndefinedPowerError: For ``0^0`` and zero to a negative power
        """
        n = exponent_value(exponent)
        if self._numerator == 0 and n == 0:
            raise UndefinedPowerError("Zero cannot be raised to the power of zero")
        if n >= 0:
            return Fraction(self._numerator**n, self._denominator**n)
        if self._numerator == 0:
            raise UndefinedPowerError("Zero cannot be raised to a negative power")
        return Fraction(self._denominator**-n, self._numerator**-n)

    def negate(self) -> Fraction:
        return Fraction(-self._numerator, self._denominator)

    def scale(self, factor: int | Integer) -> Fraction:
        """Multiply numerator and denominator by ``factor`` (same value, new representation)."""
        factor = _component(factor)
        if factor == 0:
            raise DivisionByZeroError("Cannot scale a fraction by zero")
        return Fraction(self._numerator * factor, self._denominator * factor)

    def reduce(self) -> Fraction:
        """Return the lowest-terms representation with a positive denominator."""
        divisor = math.gcd(self._numerator, self._denominator)
        num, den = self._numerator // divisor, self._denominator // divisor
        if den < 0:
            num, den = -num, -den
        return Fraction(num, den)

    def e_notation(self, exponent: Any) -> Fraction:
        n = exponent_value(exponent)
        if n >= 0:
            return Fraction(self._numerator * 10**n, self._denominator)
        return Fraction(self._numerator, self._denominator * 10**-n)

    @staticmethod
    def mediant(left: Fraction, right: Fraction) -> Fraction:
        return Fraction(
            left._numerator + right._numerator, left._denominator + right._denominator
        )

    def to_rational(self) -> Rational:
        return Rational(self._numerator, self._denominator)

    @classmethod
    def from_rational(cls, rational: Rational) -> Fraction:
        return cls(rational.numerator, rational.denominator)

    def compare_value(self, other: Fraction) -> int:
        """Compare by value; correct for negative denominators."""
        difference = self._numerator * other._denominator - other._numerator * self._denominator
        if (self._denominator < 0) != (other._denominator < 0):
            difference = -difference
        return (difference > 0) - (difference < 0)

    def same_value(self, other: Fraction) -> bool:
        return self.compare_value(other) == 0

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Fraction):
            return NotImplemented
        return (
            self._numerator == other._numerator
            and self._denominator == other._denominator
        )

    def __hash__(self) -> int:
        return hash(("fraction", self._numerator, self._denominator))

    def __lt__(self, other: Fraction) -> bool:
        if not isinstance(other, Fraction):
            return NotImplemented
        return self.compare_value(other) < 0

    def __le__(self, other: Fraction) -> bool:
        if not isinstance(other, Fraction):
            return NotImplemented
        return self.compare_value(other) <= 0

    def __gt__(self, other: Fraction) -> bool:
        if not isinstance(other, Fraction):
            return NotImplemented
        return self.compare_value(other) > 0

    def __ge__(self, other: Fraction) -> bool:
        if not isinstance(other, Fraction):
            return NotImplemented
        return self.compare_value(other) >= 0

    def __str__(self) -> str:
        if self._denominator == 1:
            return str(self._numerator)
        return f"{self._numerator}/{self._denominator}"

    def __repr__(self) -> str:
        return f"Fraction({self._numerator}, {self._denominator})"


class FractionInterval:
    """Closed interval of Fractions supporting mediant partitioning."""

    __slots__ = ("_low", "_high")

    def __init__(self, low: Fraction, high: Fraction):
        if not isinstance(low, Fraction) or not isinstance(high, Fraction):
            raise TypeError("FractionInterval endpoints must be Fraction objects")
        if low > high:
            low, high = high, low
        self._low = low
        self._high = high

    @property
    def low(self) -> Fraction:
        return self._low

    @property
    def high(self) -> Fraction:
        return self._high

    def mediant_split(self) -> tuple[FractionInterval, FractionInterval]:
        """Split at the mediant of the endpoints."""
        middle = Fraction.mediant(self._low, self._high)
        return FractionInterval(self._low, middle), FractionInterval(middle, self._high)

    def partition_with_mediants(self, depth: int = 1) -> list[FractionInterval]:
        """Recursively mediant-split ``depth`` times, giving ``2**depth`` pieces."""
        if depth < 0:
            raise ValidationError("Depth must be non-negative", "INVALID_DEPTH")
        pieces = [self]
        for _ in range(depth):
            pieces = [half for piece in pieces for half in piece.mediant_split()]
        return pieces

    def partition_with(
        self, cut_points: Callable[[Fraction, Fraction], list[Fraction]]
    ) -> list[FractionInterval]:
        """Partition at caller-supplied points.

        Args:
            cut_points: Called with ``(low, high)``; returns Fractions inside the interval

        Returns:
            Adjacent FractionIntervals covering ``[low, high]``

        Raises:
            ValidationError: If a point is not a Fraction or lies outside the interval
        """
        points = cut_points(self._low, self._high)
        for point in points:
            if not isinstance(point, Fraction):
                raise ValidationError(
                    "Partition points must be Fraction objects", "INVALID_PARTITION"
                )
            if point < self._low or point > self._high:
                raise ValidationError(
                    "Partition points should be within the interval", "INVALID_PARTITION"
                )
        ordered = sorted(points, key=cmp_to_key(Fraction.compare_value))
        boundaries = [self._low]
        for point in ordered:
            if point.same_value(boundaries[-1]) or point.same_value(self._high):
                continue
            boundaries.append(point)
        boundaries.append(self._high)
        return [
            FractionInterval(left, right) for left, right in zip(boundaries, boundaries[1:])
        ]

    def to_rational_interval(self) -> RationalInterval:
        return RationalInterval(self._low.to_rational(), self._high.to_rational())

    @classmethod
    def from_rational_interval(cls, interval: RationalInterval) -> FractionInterval:
        return cls(Fraction.from_rational(interval.low), Fraction.from_rational(interval.high))

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, FractionInterval):
            return NotImplemented
        return self._low == other._low and self._high == other._high

    def __hash__(self) -> int:
        return hash(("fraction_interval", self._low, self._high))

    def __str__(self) -> str:
        return f"{self._low}:{self._high}"

    def __repr__(self) -> str:
        return f"FractionInterval({self._low}, {self._high})"
