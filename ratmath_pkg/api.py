"""Public API for ratmath - returns structured objects without side effects."""

from __future__ import annotations

from typing import Any

import sympy as sp

from .config import MAX_INPUT_LENGTH
from .fraction import Fraction, FractionInterval
from .integer import Integer
from .interval import RationalInterval
from .logging_config import get_logger
from .parser import parse
from .promotion import Number
from .rational import Rational
from .types import EvalResult, ParseOptions, RatmathError, ValidationError

logger = get_logger("api")


def _check_length(expression: str) -> None:
    if len(expression) > MAX_INPUT_LENGTH:
        raise ValidationError(
            f"Input too long (max {MAX_INPUT_LENGTH} characters)", "TOO_LONG"
        )


def _kind(value: Number) -> str:
    if isinstance(value, Integer):
        return "integer"
    if isinstance(value, Rational):
        return "rational"
    return "interval"


def describe(value: Number) -> EvalResult:
    """Render a parsed value into every textual form the calculator displays."""
    if isinstance(value, RationalInterval):
        return EvalResult(
            ok=True,
            result=str(value),
            kind="interval",
            decimal=value.compacted_decimal_interval(),
            repeating=value.to_repeating_decimal(),
            mixed=value.to_mixed_string(),
        )
    rational = value.to_rational() if isinstance(value, Integer) else value
    repeating = rational.to_repeating_decimal_with_period()
    return EvalResult(
        ok=True,
        result=str(value),
        kind=_kind(value),
        decimal=rational.to_decimal(),
        repeating=repeating.decimal,
        period=repeating.period,
        mixed=rational.to_mixed_string(),
        scientific=rational.to_scientific_notation(),
    )


def evaluate(expression: str, type_aware: bool = True) -> EvalResult:
    """Evaluate an expression.

    Args:
        expression: Expression string (e.g., "1/2 + 1/3", "1.5[+-0.2] * 2")
        type_aware: Narrow results to the smallest exact type

    Returns:
        EvalResult with the value in several renderings, or the error

    Example:
        >>> from ratmath_pkg.api import evaluate
        >>> evaluate("1/2 + 1/3").result
        '5/6'
        >>> evaluate("1/3").repeating
        '0.#3'
    """
    try:
        _check_length(expression)
        value = parse(expression, ParseOptions(type_aware=type_aware))
    except RatmathError as exc:
        logger.info(
            "Evaluation of %r failed: %s", expression[:80], exc.message, extra={"error_code": exc.code}
        )
        return EvalResult(ok=False, error=exc.message, error_code=exc.code)
    return describe(value)


def validate_expression(expression: str) -> tuple[bool, str | None]:
    """Validate an expression without keeping its value.

    Returns:
        Tuple of (is_valid, error_message)
    """
    result = evaluate(expression)
    return result.ok, result.error


def parse_exact(expression: str) -> Number:
    """Parse with type-aware narrowing (Integer, Rational or RationalInterval)."""
    _check_length(expression)
    return parse(expression, ParseOptions(type_aware=True))


def parse_fraction(expression: str) -> Fraction | FractionInterval:
    """Parse without narrowing and view the result as unreduced fractions.

    Point intervals become a Fraction, others a FractionInterval.
    """
    _check_length(expression)
    value = parse(expression, ParseOptions(type_aware=False))
    if not isinstance(value, RationalInterval):
        value = value.to_interval()
    if value.is_point():
        return Fraction.from_rational(value.low)
    return FractionInterval.from_rational_interval(value)


def to_sympy(value: Any) -> sp.Basic:
    """Convert a ratmath value into the equivalent SymPy object."""
    if isinstance(value, Integer):
        return sp.Integer(value.value)
    if isinstance(value, (Rational, Fraction)):
        return sp.Rational(value.numerator, value.denominator)
    if isinstance(value, FractionInterval):
        value = value.to_rational_interval()
    if isinstance(value, RationalInterval):
        return sp.Interval(to_sympy(value.low), to_sympy(value.high))
    raise TypeError(f"Cannot convert {type(value).__name__} to SymPy")


def from_sympy(expr: sp.Basic) -> Number:
    """Convert a SymPy Integer, Rational or closed rational Interval.

    Raises:
        ValidationError: For anything that is not an exact rational quantity
    """
    if isinstance(expr, sp.Integer):
        return Integer(int(expr))
    if isinstance(expr, sp.Rational):
        return Rational(int(expr.p), int(expr.q))
    if isinstance(expr, sp.Interval):
        if expr.left_open or expr.right_open:
            raise ValidationError("Only closed intervals are supported", "OPEN_INTERVAL")
        low, high = from_sympy(expr.start), from_sympy(expr.end)
        return RationalInterval(low, high)
    if isinstance(expr, sp.FiniteSet) and len(expr) == 1:
        point = from_sympy(next(iter(expr)))
        return RationalInterval(point, point)
    raise ValidationError(f"Not an exact rational value: {expr}", "NOT_RATIONAL")
