"""Error hierarchy, parse options and result dataclasses for consistent API responses."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Stable classification shared by every ratmath error."""

    FORMAT = "format"
    DIVISION_BY_ZERO = "division_by_zero"
    UNDEFINED_POWER = "undefined_power"
    UNDEFINED_FACTORIAL = "undefined_factorial"
    SYNTAX = "syntax"
    VALIDATION = "validation"


class RatmathError(Exception):
    """Base class for errors raised by the arithmetic kernel and parser."""

    kind: ErrorKind = ErrorKind.VALIDATION
    default_code = "RATMATH_ERROR"

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.default_code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class FormatError(RatmathError, ValueError):
    """Raised when a numeric string does not match any accepted form."""

    kind = ErrorKind.FORMAT
    default_code = "FORMAT_ERROR"


class DivisionByZeroError(RatmathError, ZeroDivisionError):
    """Raised on a zero divisor, zero denominator or interval divisor containing zero."""

    kind = ErrorKind.DIVISION_BY_ZERO
    default_code = "DIVISION_BY_ZERO"


class UndefinedPowerError(RatmathError, ArithmeticError):
    """Raised for 0^0, zero to a negative power and their interval analogues."""

    kind = ErrorKind.UNDEFINED_POWER
    default_code = "UNDEFINED_POWER"


class UndefinedFactorialError(RatmathError, ArithmeticError):
    """Raised when a factorial operand is not a non-negative integer."""

    kind = ErrorKind.UNDEFINED_FACTORIAL
    default_code = "UNDEFINED_FACTORIAL"


class ExpressionSyntaxError(RatmathError, ValueError):
    """Raised when expression text cannot be parsed completely."""

    kind = ErrorKind.SYNTAX
    default_code = "SYNTAX_ERROR"


class ValidationError(RatmathError, ValueError):
    """Raised when input validation fails."""

    kind = ErrorKind.VALIDATION
    default_code = "VALIDATION_ERROR"


@dataclass(frozen=True)
class ParseOptions:
    """Options accepted by :func:`ratmath_pkg.parser.parse`."""

    type_aware: bool = True

    @classmethod
    def coerce(cls, options: ParseOptions | dict[str, Any] | None) -> ParseOptions:
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        unknown = set(options) - {"type_aware"}
        if unknown:
            raise ValidationError(
                f"Unknown parse option(s): {', '.join(sorted(unknown))}",
                "UNKNOWN_OPTION",
            )
        return cls(type_aware=bool(options.get("type_aware", True)))


@dataclass(frozen=True)
class RepeatingDecimal:
    """Repeating-decimal rendering of a Rational and the length of its cycle."""

    decimal: str
    period: int


@dataclass(frozen=True)
class DecimalMetadata:
    """Layout of a decimal expansion: ``whole.initial(period)``.

    ``period_digits`` may be a prefix of the cycle when the period is longer
    than the digits requested; ``period_length`` is -1 when it was too long to
    measure.
    """

    whole_part: int
    initial_segment: str
    period_digits: str
    period_length: int
    is_terminating: bool

    @property
    def initial_leading_zeros(self) -> int:
        return len(self.initial_segment) - len(self.initial_segment.lstrip("0"))

    @property
    def period_leading_zeros(self) -> int:
        return len(self.period_digits) - len(self.period_digits.lstrip("0"))


@dataclass
class EvalResult:
    """Result of evaluating an expression."""

    ok: bool
    result: str | None = None
    kind: str | None = None  # "integer", "rational" or "interval"
    decimal: str | None = None
    repeating: str | None = None
    period: int | None = None
    mixed: str | None = None
    scientific: str | None = None
    error: str | None = None
    error_code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        for field_name in (
            "result",
            "kind",
            "decimal",
            "repeating",
            "period",
            "mixed",
            "scientific",
            "error",
            "error_code",
        ):
            value = getattr(self, field_name)
            if value is not None:
                result_dict[field_name] = value
        return result_dict

    def __repr__(self) -> str:
        """Return string representation of the result."""
        if not self.ok:
            return f"EvalResult(ok=False, error={self.error!r}, error_code={self.error_code!r})"
        parts = [f"ok={self.ok}"]
        if self.result is not None:
            parts.append(f"result={self.result!r}")
        if self.kind is not None:
            parts.append(f"kind={self.kind!r}")
        if self.decimal is not None:
            parts.append(f"decimal={self.decimal!r}")
        if self.repeating is not None:
            parts.append(f"repeating={self.repeating!r}")
        return f"EvalResult({', '.join(parts)})"
