"""Closed intervals with exact Rational endpoints.

Interval arithmetic follows the usual endpoint rules: sums and differences
combine matching or opposite endpoints, products and quotients take the
extremes of the four endpoint combinations. Two power operators exist:

- ``pow(n)`` treats the interval as a set of values and raises each value to
  ``n``, so ``[-1, 1]^2`` is ``[0, 1]``.
- ``mpow(n)`` multiplies the interval by itself ``n`` times, so
  ``[-1, 1]**2`` is ``[-1, 1]``.
"""

from __future__ import annotations

import math
import random
from typing import Any

from .config import (
    DECIMAL_MAX_DIGITS,
    INTERVAL_RE,
    POINT_DECIMAL_SEARCH_LIMIT,
    RANDOM_MAX_DENOMINATOR,
    RELATIVE_DECIMAL_SEARCH_LIMIT,
)
from .integer import Integer
from .operators import ArithmeticMixin, exponent_value
from .rational import Rational
from .types import DivisionByZeroError, FormatError, UndefinedPowerError, ValidationError


def _coerce(value: Any):
    from .promotion import coerce

    return coerce(value)


def _endpoint(value: Any) -> Rational:
    if isinstance(value, str):
        return Rational(value)
    value = _coerce(value)
    if isinstance(value, Integer):
        return value.to_rational()
    if isinstance(value, Rational):
        return value
    raise TypeError(f"Interval endpoints must be exact numbers, not {type(value).__name__}")


def _floor_to(value: Rational, lower: int, upper: int) -> int:
    return min(max(value.floor(), lower), upper)


def _decimal_up(offset: Rational) -> str:
    scale = 10**DECIMAL_MAX_DIGITS
    return Rational((offset * scale).ceil(), scale).to_decimal()


class RationalInterval(ArithmeticMixin):
    """Immutable closed interval ``[low, high]`` of Rationals."""

    __slots__ = ("_low", "_high")
    rank = 2

    def __init__(self, low: Any, high: Any = None):
        first = _endpoint(low)
        second = first if high is None else _endpoint(high)
        if first > second:
            first, second = second, first
        self._low = first
        self._high = second

    @classmethod
    def point(cls, value: Any) -> RationalInterval:
        return cls(value, value)

    @classmethod
    def from_string(cls, text: str) -> RationalInterval:
        """Parse ``"a:b"`` where each side is any Rational string form."""
        match = INTERVAL_RE.match(text.strip())
        if not match:
            raise FormatError("Invalid interval format. Use 'a:b'", "INVALID_INTERVAL")
        return cls(Rational(match.group(1)), Rational(match.group(2)))

    @property
    def low(self) -> Rational:
        return self._low

    @property
    def high(self) -> Rational:
        return self._high

    @property
    def width(self) -> Rational:
        return self._high - self._low

    def is_point(self) -> bool:
        return self._low == self._high

    def bit_length(self) -> int:
        """Bits needed by the larger endpoint, as measured by Rational.bit_length."""
        return max(self._low.bit_length(), self._high.bit_length())

    def _operand(self, other: Any) -> RationalInterval:
        other = _coerce(other)
        if isinstance(other, RationalInterval):
            return other
        return RationalInterval(other, other)

    # arithmetic

    def add(self, other: Any) -> RationalInterval:
        other = self._operand(other)
        return RationalInterval(self._low + other._low, self._high + other._high)

    def subtract(self, other: Any) -> RationalInterval:
        other = self._operand(other)
        return RationalInterval(self._low - other._high, self._high - other._low)

    def multiply(self, other: Any) -> RationalInterval:
        other = self._operand(other)
        products = [
            self._low * other._low,
            self._low * other._high,
            self._high * other._low,
            self._high * other._high,
        ]
        return RationalInterval(min(products), max(products))

    def divide(self, other: Any) -> RationalInterval:
        """Divide by another interval.

        Raises:
            DivisionByZeroError: If the divisor is ``[0, 0]`` or contains zero
        """
        other = self._operand(other)
        if other._low.is_zero() and other._high.is_zero():
            raise DivisionByZeroError("Division by zero")
        if other.contains_zero():
            raise DivisionByZeroError(
                "Cannot divide by an interval containing zero", "INTERVAL_CONTAINS_ZERO"
            )
        quotients = [
            self._low / other._low,
            self._low / other._high,
            self._high / other._low,
            self._high / other._high,
        ]
        return RationalInterval(min(quotients), max(quotients))

    def reciprocate(self) -> RationalInterval:
        if self.contains_zero():
            raise DivisionByZeroError(
                "Cannot reciprocate an interval containing zero", "INTERVAL_CONTAINS_ZERO"
            )
        return RationalInterval(self._high.reciprocal(), self._low.reciprocal())

    def negate(self) -> RationalInterval:
        return RationalInterval(self._high.negate(), self._low.negate())

    def pow(self, exponent: Any) -> RationalInterval:
        """Raise every value in the interval to an integer power.

        Raises:
            UndefinedPowerError: For a zero exponent or negative exponent when
                the interval contains zero
        """
        n = exponent_value(exponent)
        if n == 0:
            if self.is_point() and self._low.is_zero():
                raise UndefinedPowerError("Zero cannot be raised to the power of zero")
            if self.contains_zero():
                raise UndefinedPowerError(
                    "Cannot raise an interval containing zero to the power of zero"
                )
            return RationalInterval(1, 1)
        if n < 0:
            if self.contains_zero():
                raise UndefinedPowerError(
                    "Cannot raise an interval containing zero to a negative power"
                )
            return self.pow(-n).reciprocate()
        low_power = self._low.pow(n)
        high_power = self._high.pow(n)
        if n % 2 == 0:
            if self._low <= 0 <= self._high:
                return RationalInterval(0, max(low_power, high_power))
            if self._high < 0:
                return RationalInterval(high_power, low_power)
        return RationalInterval(low_power, high_power)

    def mpow(self, exponent: Any) -> RationalInterval:
        """Multiply the interval by itself ``exponent`` times.

        Raises:
            UndefinedPowerError: If ``exponent`` is zero
        """
        n = exponent_value(exponent)
        if n == 0:
            raise UndefinedPowerError(
                "Multiplicative exponentiation requires at least one factor"
            )
        base = self.reciprocate() if n < 0 else self
        result = base
        for _ in range(abs(n) - 1):
            result = result.multiply(base)
        return result

    def e_notation(self, exponent: Any) -> RationalInterval:
        n = exponent_value(exponent)
        return RationalInterval(self._low.e_notation(n), self._high.e_notation(n))

    # set relations

    def overlaps(self, other: RationalInterval) -> bool:
        return not (self._high < other._low or other._high < self._low)

    def contains(self, other: RationalInterval) -> bool:
        return self._low <= other._low and other._high <= self._high

    def contains_value(self, value: Any) -> bool:
        value = _endpoint(value)
        return self._low <= value <= self._high

    def contains_zero(self) -> bool:
        return self._low <= 0 <= self._high

    def intersection(self, other: RationalInterval) -> RationalInterval | None:
        if not self.overlaps(other):
            return None
        return RationalInterval(max(self._low, other._low), min(self._high, other._high))

    def union(self, other: RationalInterval) -> RationalInterval | None:
        """Merge overlapping or integer-adjacent intervals; None otherwise."""
        adjacent = other._low == self._high + 1 or self._low == other._high + 1
        if not (self.overlaps(other) or adjacent):
            return None
        return RationalInterval(min(self._low, other._low), max(self._high, other._high))

    # representatives

    def mediant(self) -> Rational:
        return Rational(
            self._low.numerator + self._high.numerator,
            self._low.denominator + self._high.denominator,
        )

    def midpoint(self) -> Rational:
        return (self._low + self._high) / 2

    def shortest_decimal(self, base: int = 10) -> Rational | None:
        """Return the value in the interval with the smallest power-of-base denominator.

        For a proper interval the search always succeeds: once
        ``base**k * width >= 1`` some integer numerator falls in range. A
        point interval is tried up to ``POINT_DECIMAL_SEARCH_LIMIT`` powers
        and gives None when it has no finite base-``base`` expansion.

        Raises:
            ValidationError: If ``base`` is not greater than 1
        """
        if base <= 1:
            raise ValidationError("Base must be greater than 1", "INVALID_BASE")
        if self.is_point():
            for power in range(POINT_DECIMAL_SEARCH_LIMIT + 1):
                scale = base**power
                scaled = self._low * scale
                if scaled.is_integer():
                    return Rational(scaled.numerator, scale)
            return None
        power = 0
        while True:
            scale = base**power
            numerator = (self._low * scale).ceil()
            if numerator <= (self._high * scale).floor():
                return Rational(numerator, scale)
            power += 1

    def random_rational(
        self, max_denominator: int = RANDOM_MAX_DENOMINATOR, rng: random.Random | None = None
    ) -> Rational:
        """Pick a reduced fraction with denominator at most ``max_denominator`` uniformly.

        Every candidate is enumerated, so cost grows with width times
        ``max_denominator**2``. Falls back to the midpoint when the interval
        holds no such fraction.

        Args:
            max_denominator: Largest denominator considered
            rng: Random source with a ``choice`` method (defaults to the ``random`` module)
        """
        if max_denominator <= 0:
            raise ValidationError("Maximum denominator must be positive", "INVALID_DENOMINATOR")
        source = rng if rng is not None else random
        candidates = []
        for denominator in range(1, max_denominator + 1):
            first = (self._low * denominator).ceil()
            last = (self._high * denominator).floor()
            for numerator in range(first, last + 1):
                if math.gcd(numerator, denominator) == 1:
                    candidates.append((numerator, denominator))
        if not candidates:
            return self.midpoint()
        return Rational(*source.choice(candidates))

    # rendering

    def __str__(self) -> str:
        return f"{self._low}:{self._high}"

    def __repr__(self) -> str:
        return f"RationalInterval({self._low}, {self._high})"

    def to_mixed_string(self) -> str:
        return f"{self._low.to_mixed_string()}:{self._high.to_mixed_string()}"

    def to_repeating_decimal(self) -> str:
        return f"{self._low.to_repeating_decimal()}:{self._high.to_repeating_decimal()}"

    def compacted_decimal_interval(self) -> str:
        """Factor out the shared decimal prefix: ``1.2356:1.2367`` becomes ``1.23[56,67]``.

        Falls back to ``low:high`` when the prefix is trivial or the differing
        tails are not equal-length digit runs.
        """
        low_text = self._low.to_decimal()
        high_text = self._high.to_decimal()
        plain = f"{low_text}:{high_text}"

        prefix_length = 0
        for low_char, high_char in zip(low_text, high_text):
            if low_char != high_char:
                break
            prefix_length += 1
        prefix = low_text[:prefix_length]
        if len(prefix) <= 1 or (prefix.startswith("-") and len(prefix) <= 2):
            return plain

        low_tail = low_text[prefix_length:]
        high_tail = high_text[prefix_length:]
        if not low_tail or not high_tail or len(low_tail) != len(high_tail):
            return plain
        if not (low_tail.isdigit() and high_tail.isdigit()):
            return plain
        return f"{prefix}[{low_tail},{high_tail}]"

    def relative_mid_decimal_interval(self) -> str:
        """Render as ``midpoint[+-half_width]``.

        A midpoint with a long expansion is cut to its ``to_decimal`` form and
        the offset grows to cover both endpoints from there.
        """
        center_text = self.midpoint().to_decimal()
        center = Rational(center_text)
        offset = max(center - self._low, self._high - center)
        return f"{center_text}[+-{_decimal_up(offset)}]"

    def relative_decimal_interval(self) -> str:
        """Render around the shortest decimal nearest the midpoint.

        Offsets are absolute: ``1.224:1.235`` becomes ``1.23[+0.005,-0.006]``
        and equal offsets collapse to ``[+-o]``. Offsets with long expansions are
        rounded up in the last digit so the rendering still encloses the interval.
        """
        center_text = self._nearest_short_decimal().to_decimal()
        center = Rational(center_text)
        offset_low = max(center - self._low, Rational(0))
        offset_high = max(self._high - center, Rational(0))
        if offset_low == offset_high:
            return f"{center_text}[+-{_decimal_up(offset_high)}]"
        return f"{center_text}[+{_decimal_up(offset_high)},-{_decimal_up(offset_low)}]"

    def _nearest_short_decimal(self) -> Rational:
        midpoint = self.midpoint()
        for places in range(RELATIVE_DECIMAL_SEARCH_LIMIT + 1):
            scale = 10**places
            lowest = (self._low * scale).ceil()
            highest = (self._high * scale).floor()
            if lowest > highest:
                continue
            below = _floor_to(midpoint * scale, lowest, highest)
            above = min(below + 1, highest)
            best = Rational(below, scale)
            candidate = Rational(above, scale)
            if abs(candidate - midpoint) < abs(best - midpoint):
                best = candidate
            return best
        return midpoint

    # comparison

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, RationalInterval):
            return NotImplemented
        return self._low == other._low and self._high == other._high

    def __hash__(self) -> int:
        return hash(("interval", self._low, self._high))
