"""Exact rational numbers in lowest terms.

A Rational is always stored reduced with a positive denominator; zero is
``0/1``. Strings are accepted in four strict forms:

    "3/4"       numerator/denominator
    "-7"        integer
    "1.25"      terminating decimal
    "-2..3/4"   mixed number (the sign applies to the whole value)

Besides arithmetic the class owns the decimal renderers: truncated
``to_decimal``, cycle-detecting ``to_repeating_decimal_with_period`` and the
mixed-number form.
"""

from __future__ import annotations

import math
from functools import total_ordering
from typing import TYPE_CHECKING, Any

from .config import (
    DECIMAL_MAX_DIGITS,
    DECIMAL_RE,
    DEFAULT_PERIOD_DIGITS,
    FRACTION_RE,
    INTEGER_RE,
    MAX_PERIOD_CHECK,
    MIXED_RE,
    SCIENTIFIC_PRECISION,
)
from .integer import Integer
from .operators import ArithmeticMixin, exponent_value
from .types import (
    DecimalMetadata,
    DivisionByZeroError,
    FormatError,
    RepeatingDecimal,
    UndefinedPowerError,
    ValidationError,
)

if TYPE_CHECKING:
    from .interval import RationalInterval


def _coerce(value: Any):
    from .promotion import coerce

    return coerce(value)


def _as_int(value: Any) -> int:
    if isinstance(value, Integer):
        return value.value
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(
            f"Rational() components must be int or Integer, not {type(value).__name__}"
        )
    return value


def parse_rational_string(text: str) -> tuple[int, int]:
    """Split a rational literal into an unreduced ``(numerator, denominator)``.

    Args:
        text: One of ``"a/b"``, ``"a"``, ``"n.ddd"`` or ``"w..n/d"``

    Returns:
        Tuple of numerator and denominator (denominator may be zero or negative)

    Raises:
        FormatError: If the text matches none of the accepted forms
    """
    text = text.strip()
    if ".." in text:
        match = MIXED_RE.match(text)
        if not match:
            raise FormatError("Invalid mixed number format. Use 'a..b/c'", "INVALID_MIXED")
        sign, whole, numerator, denominator = match.groups()
        den = int(denominator)
        num = int(whole) * den + int(numerator)
        return (-num if sign else num), den
    if "." in text:
        if text.count(".") > 1:
            raise FormatError(
                "Invalid decimal format - multiple decimal points", "INVALID_DECIMAL"
            )
        match = DECIMAL_RE.match(text)
        if not match or not (match.group(2) or match.group(3)):
            raise FormatError("Invalid decimal format", "INVALID_DECIMAL")
        sign, whole, fractional = match.groups()
        den = 10 ** len(fractional)
        num = int(whole or "0") * den + int(fractional or "0")
        return (-num if sign else num), den
    match = FRACTION_RE.match(text)
    if match:
        return int(match.group(1)), int(match.group(2))
    if INTEGER_RE.match(text):
        return int(text), 1
    raise FormatError(
        "Invalid rational format. Use 'a/b', 'a', or 'a..b/c'", "INVALID_RATIONAL"
    )


@total_ordering
class Rational(ArithmeticMixin):
    """Immutable reduced fraction ``numerator/denominator``."""

    __slots__ = ("_numerator", "_denominator")
    rank = 1

    def __init__(self, numerator: int | str | Integer | Rational = 0, denominator: int | Integer = 1):
        if isinstance(numerator, str):
            if denominator != 1:
                raise TypeError("Rational() cannot take a denominator with a string argument")
            num, den = parse_rational_string(numerator)
        elif isinstance(numerator, Rational):
            num = numerator._numerator
            den = numerator._denominator * _as_int(denominator)
        else:
            num, den = _as_int(numerator), _as_int(denominator)

        if den == 0:
            raise DivisionByZeroError("Denominator cannot be zero", "ZERO_DENOMINATOR")
        if den < 0:
            num, den = -num, -den
        divisor = math.gcd(num, den)
        self._numerator = num // divisor
        self._denominator = den // divisor

    @classmethod
    def from_value(cls, value: Any) -> Rational:
        """Build a Rational from an int, Integer, Rational, Fraction or string."""
        if isinstance(value, (str, Rational)):
            return cls(value)
        value = _coerce(value)
        if isinstance(value, Integer):
            return value.to_rational()
        if isinstance(value, Rational):
            return value
        raise TypeError(f"Cannot convert {type(value).__name__} to Rational")

    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    def _operand(self, other: Any):
        other = _coerce(other)
        if isinstance(other, Integer):
            return other.to_rational()
        return other

    # arithmetic

    def add(self, other: Any):
        other = self._operand(other)
        if not isinstance(other, Rational):
            return self.to_interval().add(other)
        return Rational(
            self._numerator * other._denominator + other._numerator * self._denominator,
            self._denominator * other._denominator,
        )

    def subtract(self, other: Any):
        other = self._operand(other)
        if not isinstance(other, Rational):
            return self.to_interval().subtract(other)
        return Rational(
            self._numerator * other._denominator - other._numerator * self._denominator,
            self._denominator * other._denominator,
        )

    def multiply(self, other: Any):
        other = self._operand(other)
        if not isinstance(other, Rational):
            return self.to_interval().multiply(other)
        return Rational(
            self._numerator * other._numerator, self._denominator * other._denominator
        )

    def divide(self, other: Any):
        other = self._operand(other)
        if not isinstance(other, Rational):
            return self.to_interval().divide(other)
        if other._numerator == 0:
            raise DivisionByZeroError("Division by zero")
        return Rational(
            self._numerator * other._denominator, self._denominator * other._numerator
        )

    def negate(self) -> Rational:
        return Rational(-self._numerator, self._denominator)

    def reciprocal(self) -> Rational:
        if self._numerator == 0:
            raise DivisionByZeroError("Cannot take reciprocal of zero")
        return Rational(self._denominator, self._numerator)

    def pow(self, exponent: Any) -> Rational:
        """Raise to an integer power.

        Raises:
            UndefinedPowerError: For ``0^0`` and zero to a negative power
        """
        n = exponent_value(exponent)
        if n == 0:
            if self._numerator == 0:
                raise UndefinedPowerError("Zero cannot be raised to the power of zero")
            return Rational(1)
        if n < 0:
            if self._numerator == 0:
                raise UndefinedPowerError("Zero cannot be raised to a negative power")
            return self.reciprocal().pow(-n)
        return Rational(self._numerator**n, self._denominator**n)

    def abs(self) -> Rational:
        return Rational(abs(self._numerator), self._denominator)

    def e_notation(self, exponent: Any) -> Rational:
        """Multiply by ``10**exponent``."""
        n = exponent_value(exponent)
        if n >= 0:
            return Rational(self._numerator * 10**n, self._denominator)
        return Rational(self._numerator, self._denominator * 10**-n)

    # integer parts

    def floor(self) -> int:
        return self._numerator // self._denominator

    def ceil(self) -> int:
        return -(-self._numerator // self._denominator)

    def whole_part(self) -> int:
        """Integer part truncated toward zero."""
        whole = abs(self._numerator) // self._denominator
        return -whole if self._numerator < 0 else whole

    def is_integer(self) -> bool:
        return self._denominator == 1

    def is_zero(self) -> bool:
        return self._numerator == 0

    def is_negative(self) -> bool:
        return self._numerator < 0

    # conversion

    def to_integer(self) -> Integer:
        return Integer.from_rational(self)

    def to_interval(self) -> RationalInterval:
        from .interval import RationalInterval

        return RationalInterval(self, self)

    # comparison

    def compare_to(self, other: Any) -> int:
        """Return -1, 0 or 1 by cross-multiplication."""
        other = self._operand(other)
        if not isinstance(other, Rational):
            raise TypeError(f"Cannot order a Rational against {type(other).__name__}")
        difference = (
            self._numerator * other._denominator - other._numerator * self._denominator
        )
        return (difference > 0) - (difference < 0)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Rational):
            return (
                self._numerator == other._numerator
                and self._denominator == other._denominator
            )
        if isinstance(other, Integer):
            return self._denominator == 1 and self._numerator == other.value
        if isinstance(other, int) and not isinstance(other, bool):
            return self._denominator == 1 and self._numerator == other
        return NotImplemented

    def __lt__(self, other: Any) -> bool:
        if isinstance(other, bool) or not isinstance(other, (int, Integer, Rational)):
            return NotImplemented
        return self.compare_to(other) < 0

    def __hash__(self) -> int:
        if self._denominator == 1:
            return hash(self._numerator)
        return hash((self._numerator, self._denominator))

    def __abs__(self) -> Rational:
        return self.abs()

    def __bool__(self) -> bool:
        return self._numerator != 0

    # rendering

    def __str__(self) -> str:
        if self._denominator == 1:
            return str(self._numerator)
        return f"{self._numerator}/{self._denominator}"

    def __repr__(self) -> str:
        return f"Rational({self._numerator}, {self._denominator})"

    def to_mixed_string(self) -> str:
        """Render as ``w..n/d``; values below one in magnitude render as ``n/d``."""
        if self._denominator == 1:
            return str(self._numerator)
        sign = "-" if self._numerator < 0 else ""
        whole, remainder = divmod(abs(self._numerator), self._denominator)
        if whole == 0:
            return f"{sign}{remainder}/{self._denominator}"
        return f"{sign}{whole}..{remainder}/{self._denominator}"

    def to_decimal(self, max_digits: int = DECIMAL_MAX_DIGITS) -> str:
        """Long division truncated after ``max_digits`` fractional digits."""
        if self._denominator == 1:
            return str(self._numerator)
        sign = "-" if self._numerator < 0 else ""
        whole, remainder = divmod(abs(self._numerator), self._denominator)
        digits = []
        while remainder and len(digits) < max_digits:
            digit, remainder = divmod(remainder * 10, self._denominator)
            digits.append(str(digit))
        return f"{sign}{whole}.{''.join(digits)}"

    def to_repeating_decimal_with_period(self) -> RepeatingDecimal:
        """Exact decimal expansion with the repeating block marked by ``#``.

        Long division records where each remainder first appeared; the
        expansion stops when the remainder reaches zero (rendered with a
        trailing ``#0``) or repeats (the digits since its first appearance
        form the cycle).

        Returns:
            RepeatingDecimal such as ``("0.#3", 1)``, ``("1.25#0", 0)`` or ``("7", 0)``
        """
        if self._denominator == 1:
            return RepeatingDecimal(str(self._numerator), 0)
        sign = "-" if self._numerator < 0 else ""
        whole, remainder = divmod(abs(self._numerator), self._denominator)
        digits: list[str] = []
        seen: dict[int, int] = {}
        while remainder and remainder not in seen:
            seen[remainder] = len(digits)
            digit, remainder = divmod(remainder * 10, self._denominator)
            digits.append(str(digit))
        if remainder == 0:
            return RepeatingDecimal(f"{sign}{whole}.{''.join(digits)}#0", 0)
        start = seen[remainder]
        prefix = "".join(digits[:start])
        cycle = "".join(digits[start:])
        return RepeatingDecimal(f"{sign}{whole}.{prefix}#{cycle}", len(cycle))

    def to_repeating_decimal(self) -> str:
        return self.to_repeating_decimal_with_period().decimal

    def decimal_metadata(self, max_period_digits: int = DEFAULT_PERIOD_DIGITS) -> DecimalMetadata:
        """Describe the decimal expansion of ``abs(self)`` without rendering it.

        The non-repeating segment is as long as the larger power of 2 or 5 in
        the denominator. The period length is the multiplicative order of 10
        modulo the rest of the denominator, or -1 past ``MAX_PERIOD_CHECK``.

        Args:
            max_period_digits: Most digits of the cycle to produce

        Returns:
            DecimalMetadata such as ``(0, "1", "6", 1, False)`` for ``1/6``
        """
        whole, remainder = divmod(abs(self._numerator), self._denominator)
        if remainder == 0:
            return DecimalMetadata(whole, "", "", 0, True)

        twos = _multiplicity(self._denominator, 2)
        fives = _multiplicity(self._denominator, 5)
        reduced = self._denominator // (2**twos * 5**fives)
        initial = []
        for _ in range(max(twos, fives)):
            digit, remainder = divmod(remainder * 10, self._denominator)
            initial.append(str(digit))
        if reduced == 1:
            return DecimalMetadata(whole, "".join(initial), "", 0, True)

        period_length = 1
        power = 10 % reduced
        while power != 1 and period_length < MAX_PERIOD_CHECK:
            period_length += 1
            power = power * 10 % reduced
        if power != 1:
            period_length = -1

        count = max_period_digits if period_length == -1 else min(period_length, max_period_digits)
        period = []
        for _ in range(count):
            digit, remainder = divmod(remainder * 10, self._denominator)
            period.append(str(digit))
        return DecimalMetadata(whole, "".join(initial), "".join(period), period_length, False)

    def to_scientific_notation(
        self, precision: int = SCIENTIFIC_PRECISION, show_period_info: bool = False
    ) -> str:
        """Render as ``mantissaEexponent`` with the mantissa in [1, 10).

        The mantissa uses the ``#`` notation of ``to_repeating_decimal``
        without the ``#0`` terminator: ``1/3`` gives ``3.#3E-1`` and ``1000``
        gives ``1E3``. A cycle longer than ``precision`` allows is cut but keeps
        at least one digit.

        Args:
            precision: Maximum significant digits in the mantissa
            show_period_info: Append ``{period: n}`` (and leading-zero counts) for repeating values

        Raises:
            ValidationError: If ``precision`` is less than 1
        """
        if precision < 1:
            raise ValidationError("Precision must be at least 1", "INVALID_PRECISION")
        if self._numerator == 0:
            return "0"

        magnitude = self.abs()
        exponent = len(str(magnitude._numerator)) - len(str(magnitude._denominator))
        mantissa = magnitude.e_notation(-exponent)
        if mantissa < 1:
            exponent -= 1
            mantissa = mantissa.e_notation(1)

        head, _, cycle = mantissa.to_repeating_decimal().partition("#")
        significant = len(head.replace(".", ""))
        repeating = bool(cycle) and cycle != "0"
        if repeating:
            text = f"{head}#{cycle[: max(1, precision - significant)]}"
        elif significant > precision:
            text = head[: precision + 1].rstrip(".")
        else:
            text = head
        sign = "-" if self._numerator < 0 else ""
        result = f"{sign}{text}E{exponent}"
        if show_period_info and repeating:
            result += f" {{{_period_info(self.decimal_metadata())}}}"
        return result

    def bit_length(self) -> int:
        """Bits in the larger of numerator and denominator."""
        return max(abs(self._numerator).bit_length(), self._denominator.bit_length())


def _multiplicity(value: int, prime: int) -> int:
    count = 0
    while value % prime == 0:
        value //= prime
        count += 1
    return count


def _period_info(metadata: DecimalMetadata) -> str:
    info = []
    if metadata.initial_leading_zeros:
        info.append(f"initial: {metadata.initial_leading_zeros} zeros")
    if metadata.period_leading_zeros:
        info.append(f"period starts: +{metadata.period_leading_zeros} zeros")
    if metadata.period_length == -1:
        info.append(f"period: >{MAX_PERIOD_CHECK}")
    else:
        info.append(f"period: {metadata.period_length}")
    return ", ".join(info)
