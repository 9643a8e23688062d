"""ratmath package: exact integers, rationals and rational intervals with an expression parser."""

from .api import evaluate, parse_exact, parse_fraction, to_sympy, validate_expression
from .fraction import Fraction, FractionInterval
from .integer import Integer
from .interval import RationalInterval
from .literals import parse_repeating_decimal
from .parser import parse
from .rational import Rational
from .types import (
    DecimalMetadata,
    DivisionByZeroError,
    ErrorKind,
    EvalResult,
    ExpressionSyntaxError,
    FormatError,
    ParseOptions,
    RatmathError,
    UndefinedFactorialError,
    UndefinedPowerError,
    ValidationError,
)

__all__ = [
    "Integer",
    "Rational",
    "RationalInterval",
    "Fraction",
    "FractionInterval",
    "parse",
    "parse_repeating_decimal",
    "ParseOptions",
    "evaluate",
    "validate_expression",
    "parse_exact",
    "parse_fraction",
    "to_sympy",
    "EvalResult",
    "DecimalMetadata",
    "ErrorKind",
    "RatmathError",
    "FormatError",
    "DivisionByZeroError",
    "UndefinedPowerError",
    "UndefinedFactorialError",
    "ExpressionSyntaxError",
    "ValidationError",
]
