"""Recursive-descent parser and evaluator for exact-arithmetic expressions.

Grammar, from lowest to highest precedence::

    expression := term (('+' | '-') term)*
    term       := factor (('*' | '/' | 'E') factor)*
    factor     := '(' expression ')' postfix
                | uncertainty-literal postfix
                | '-' interval-literal postfix    (the minus signs the low endpoint)
                | '-' factor
                | literal postfix
    postfix    := ('!!' | '!')? ('^' exponent | '**' exponent)?
    exponent   := '-'? digit+

Operators are applied as soon as both operands are known, so the parser
returns values rather than a tree. In type-aware mode every reduced term and
expression is narrowed to the smallest exact type (point interval to
Rational, whole Rational to Integer) unless the user wrote an explicit
interval ``a:b`` or an ``n/1`` fraction, or the value came from ``**``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .config import (
    DECIMAL_LITERAL_RE,
    DIGITS_RE,
    DIVISION_SENTINEL,
    E_SUFFIX_RE,
    EXPONENT_RE,
    INTEGER_LITERAL_RE,
    REPEATING_RE,
    SPACED_DIVISION_RE,
    SPACED_E,
    SPACED_E_RE,
    UNCERTAINTY_RE,
    WHITESPACE_RE,
)
from .integer import Integer
from .interval import RationalInterval
from .literals import parse_decimal_uncertainty, parse_non_repeating_decimal, parse_repeating_decimal
from .logging_config import get_logger
from .promotion import INTERVAL_RANK, Number, narrow, widen
from .rational import Rational
from .types import (
    DivisionByZeroError,
    ExpressionSyntaxError,
    FormatError,
    ParseOptions,
    RatmathError,
    UndefinedFactorialError,
)

logger = get_logger("parser")


@dataclass(frozen=True)
class ParsedValue:
    """A value plus the flags that control narrowing."""

    value: Number
    explicit: bool = False
    skip_promotion: bool = False


@dataclass(frozen=True)
class _NumberLiteral:
    value: Rational
    kind: str  # "integer", "fraction", "mixed", "decimal" or "repeating"
    text: str
    exponent: int | None = None
    explicit_fraction: bool = False


class _Cursor:
    """Read position over an immutable buffer."""

    __slots__ = ("text", "pos")

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self, offset: int = 0) -> str:
        index = self.pos + offset
        return self.text[index] if index < len(self.text) else ""

    def startswith(self, prefix: str) -> bool:
        return self.text.startswith(prefix, self.pos)

    def advance(self, count: int = 1) -> None:
        self.pos += count

    def match(self, pattern):
        found = pattern.match(self.text, self.pos)
        if found:
            self.pos = found.end()
        return found

    def remaining(self) -> str:
        rest = self.text[self.pos :]
        return rest.replace(SPACED_E, " E").replace(DIVISION_SENTINEL, " ")


def preprocess(source_text: str) -> str:
    """Encode operator-forcing whitespace as sentinels, then drop all whitespace.

    Whitespace before ``E`` makes it the E operator; whitespace after ``/``
    makes it the division operator rather than a fraction bar.
    """
    if SPACED_E in source_text or DIVISION_SENTINEL in source_text:
        raise ExpressionSyntaxError("Unexpected control character in expression", "INVALID_CHARACTER")
    text = SPACED_E_RE.sub(SPACED_E, source_text)
    text = SPACED_DIVISION_RE.sub("/" + DIVISION_SENTINEL, text)
    return WHITESPACE_RE.sub("", text)


class ExpressionParser:
    """Single-use parser over one preprocessed expression."""

    def __init__(self, text: str, type_aware: bool = True):
        self._cursor = _Cursor(text)
        self._type_aware = type_aware

    def parse(self) -> Number:
        result = self._expression()
        if not self._cursor.at_end():
            raise ExpressionSyntaxError(
                f"Unexpected token at end: {self._cursor.remaining()}", "UNEXPECTED_TOKEN"
            )
        return result.value

    # grammar

    def _expression(self) -> ParsedValue:
        result = self._term()
        while self._cursor.peek() in ("+", "-"):
            operator = self._cursor.peek()
            self._cursor.advance()
            right = self._term()
            if operator == "+":
                result = ParsedValue(result.value.add(right.value))
            else:
                result = ParsedValue(result.value.subtract(right.value))
        return self._promote(result)

    def _term(self) -> ParsedValue:
        cursor = self._cursor
        result = self._factor()
        while True:
            operator = cursor.peek()
            if operator == "*":
                cursor.advance()
                right = self._factor()
                result = ParsedValue(result.value.multiply(right.value))
            elif operator == "/":
                cursor.advance()
                if cursor.peek() == DIVISION_SENTINEL:
                    cursor.advance()
                right = self._factor()
                result = ParsedValue(result.value.divide(right.value))
            elif operator in ("E", SPACED_E):
                cursor.advance()
                right = self._factor()
                exponent = _integer_exponent(right.value)
                result = ParsedValue(result.value.e_notation(exponent))
            else:
                break
        return self._promote(result)

    def _factor(self) -> ParsedValue:
        cursor = self._cursor
        if cursor.peek() == "(":
            cursor.advance()
            inner = self._expression()
            if cursor.peek() != ")":
                raise ExpressionSyntaxError("Missing closing parenthesis", "UNBALANCED_PARENTHESES")
            cursor.advance()
            suffix = cursor.match(E_SUFFIX_RE)
            if suffix:
                inner = ParsedValue(inner.value.e_notation(int(suffix.group(1))))
            return self._postfix(inner)

        uncertainty = cursor.peek() != "-" and cursor.match(UNCERTAINTY_RE)
        if uncertainty:
            interval = parse_decimal_uncertainty(uncertainty.group(0))
            return self._postfix(ParsedValue(interval, explicit=True))

        if cursor.peek() == "-":
            signed = self._signed_interval()
            if signed is not None:
                return self._postfix(signed)
            cursor.advance()
            operand = self._factor()
            return ParsedValue(
                operand.value.negate(), operand.explicit, operand.skip_promotion
            )

        return self._postfix(self._literal())

    def _postfix(self, operand: ParsedValue) -> ParsedValue:
        cursor = self._cursor
        if cursor.startswith("!!"):
            cursor.advance(2)
            operand = ParsedValue(_factorial(operand.value, double=True))
        elif cursor.peek() == "!":
            cursor.advance()
            operand = ParsedValue(_factorial(operand.value, double=False))

        if cursor.peek() == "^":
            cursor.advance()
            operand = ParsedValue(operand.value.pow(self._exponent()))
        elif cursor.startswith("**"):
            cursor.advance(2)
            base = widen(operand.value, INTERVAL_RANK)
            operand = ParsedValue(base.mpow(self._exponent()), skip_promotion=True)
        return operand

    def _exponent(self) -> int:
        found = self._cursor.match(EXPONENT_RE)
        if not found:
            raise ExpressionSyntaxError("Invalid exponent", "INVALID_EXPONENT")
        return int(found.group(0))

    # literals

    def _signed_interval(self) -> ParsedValue | None:
        """Read ``-a:b`` as an interval whose low endpoint is negative.

        Returns None, with the cursor untouched, when the minus is not the
        sign of an interval endpoint.
        """
        cursor = self._cursor
        start = cursor.pos
        try:
            first = self._number()
        except RatmathError:
            cursor.pos = start
            return None
        if cursor.peek() != ":":
            cursor.pos = start
            return None
        cursor.advance()
        second = self._number()
        return ParsedValue(RationalInterval(first.value, second.value), explicit=True)

    def _literal(self) -> ParsedValue:
        cursor = self._cursor
        first = self._number()
        if cursor.peek() == ":":
            cursor.advance()
            second = self._number()
            return ParsedValue(RationalInterval(first.value, second.value), explicit=True)

        if not self._type_aware:
            if first.kind == "decimal":
                negative = first.text.startswith("-")
                value = parse_non_repeating_decimal(first.text.lstrip("-"), negative)
                if first.exponent is not None:
                    value = value.e_notation(first.exponent)
            else:
                value = RationalInterval.point(first.value)
            return ParsedValue(value)

        return self._promote(ParsedValue(first.value, explicit=first.explicit_fraction))

    def _number(self) -> _NumberLiteral:
        cursor = self._cursor
        found = cursor.match(REPEATING_RE)
        if found:
            literal = _NumberLiteral(parse_repeating_decimal(found.group(0)), "repeating", found.group(0))
        else:
            found = cursor.match(DECIMAL_LITERAL_RE)
            if not found:
                return self._fraction()
            if cursor.peek() == ".":
                raise FormatError(
                    "Invalid decimal format - multiple decimal points", "INVALID_DECIMAL"
                )
            literal = _NumberLiteral(Rational(found.group(0)), "decimal", found.group(0))

        suffix = cursor.match(E_SUFFIX_RE)
        if suffix:
            exponent = int(suffix.group(1))
            return _NumberLiteral(
                literal.value.e_notation(exponent), literal.kind, literal.text, exponent
            )
        return literal

    def _fraction(self) -> _NumberLiteral:
        """Read ``n``, ``n/d`` or ``w..n/d`` with an optional E suffix on plain integers."""
        cursor = self._cursor
        whole = cursor.match(INTEGER_LITERAL_RE)
        if not whole:
            if cursor.at_end():
                raise ExpressionSyntaxError("Unexpected end of expression", "UNEXPECTED_END")
            raise ExpressionSyntaxError(
                f"Invalid number format at: {cursor.remaining()}", "INVALID_NUMBER"
            )
        whole_text = whole.group(0)
        negative = whole_text.startswith("-")

        if cursor.startswith(".."):
            cursor.advance(2)
            numerator = cursor.match(DIGITS_RE)
            if not numerator:
                raise ExpressionSyntaxError(
                    'Invalid mixed number format: missing numerator after ".."', "INVALID_MIXED"
                )
            if cursor.peek() != "/" or not cursor.peek(1).isdigit():
                raise ExpressionSyntaxError(
                    "Invalid mixed number format: missing denominator", "INVALID_MIXED"
                )
            cursor.advance()
            denominator = _denominator(cursor.match(DIGITS_RE).group(0))
            magnitude = abs(int(whole_text)) * denominator + int(numerator.group(0))
            if cursor.peek() == "E":
                raise ExpressionSyntaxError(
                    "E notation not allowed directly after mixed number without parentheses",
                    "AMBIGUOUS_E_NOTATION",
                )
            value = Rational(-magnitude if negative else magnitude, denominator)
            return _NumberLiteral(value, "mixed", whole_text)

        if cursor.peek() == "/" and cursor.peek(1).isdigit():
            cursor.advance()
            denominator = _denominator(cursor.match(DIGITS_RE).group(0))
            if cursor.peek() == "E":
                raise ExpressionSyntaxError(
                    "E notation not allowed directly after fraction without parentheses",
                    "AMBIGUOUS_E_NOTATION",
                )
            return _NumberLiteral(
                Rational(int(whole_text), denominator),
                "fraction",
                whole_text,
                explicit_fraction=denominator == 1,
            )

        value = Rational(int(whole_text))
        suffix = cursor.match(E_SUFFIX_RE)
        if suffix:
            exponent = int(suffix.group(1))
            return _NumberLiteral(value.e_notation(exponent), "integer", whole_text, exponent)
        return _NumberLiteral(value, "integer", whole_text)

    # promotion

    def _promote(self, parsed: ParsedValue) -> ParsedValue:
        if not self._type_aware or parsed.skip_promotion:
            return parsed
        value = parsed.value
        if isinstance(value, RationalInterval):
            if parsed.explicit or not value.is_point():
                return parsed
            return ParsedValue(narrow(value))
        if isinstance(value, Rational) and value.is_integer() and not parsed.explicit:
            return ParsedValue(Integer(value.numerator))
        return parsed


def _denominator(digits: str) -> int:
    denominator = int(digits)
    if denominator == 0:
        raise DivisionByZeroError("Denominator cannot be zero", "ZERO_DENOMINATOR")
    return denominator


def _integer_exponent(value: Number) -> int:
    if isinstance(value, Integer):
        return value.value
    if isinstance(value, Rational) and value.is_integer():
        return value.numerator
    if isinstance(value, RationalInterval) and value.is_point() and value.low.is_integer():
        return value.low.numerator
    raise ExpressionSyntaxError("E notation exponent must be an integer", "INVALID_EXPONENT")


def _factorial(value: Number, double: bool) -> Number:
    """Apply ``!`` or ``!!`` to an exact non-negative integer, keeping its type."""
    name = "Double factorial" if double else "Factorial"
    if isinstance(value, Integer):
        whole = value
    elif isinstance(value, Rational) and value.is_integer():
        whole = Integer(value.numerator)
    elif isinstance(value, RationalInterval) and value.is_point() and value.low.is_integer():
        whole = Integer(value.low.numerator)
    else:
        raise UndefinedFactorialError(
            f"{name} requires a non-negative integer", "NON_INTEGER_FACTORIAL"
        )
    result = whole.double_factorial() if double else whole.factorial()
    if isinstance(value, Rational):
        return result.to_rational()
    if isinstance(value, RationalInterval):
        return result.to_interval()
    return result


def parse(source_text: str, options: ParseOptions | dict[str, Any] | None = None) -> Number:
    """Parse and evaluate an expression.

    Args:
        source_text: Expression such as ``"1/2 + 1/3"`` or ``"(-1:1)^2"``
        options: ParseOptions or a mapping with ``type_aware`` (default True)

    Returns:
        Integer, Rational or RationalInterval

    Raises:
        ExpressionSyntaxError: On empty input, malformed syntax or trailing characters
        FormatError: On malformed numeric literals
        DivisionByZeroError: On zero divisors and zero denominators
        UndefinedPowerError: On 0^0 and related indeterminate powers
        UndefinedFactorialError: On factorials of negative or non-integer values
    """
    options = ParseOptions.coerce(options)
    if not isinstance(source_text, str) or not source_text.strip():
        raise ExpressionSyntaxError("Expression cannot be empty", "EMPTY_EXPRESSION")
    text = preprocess(source_text)
    value = ExpressionParser(text, options.type_aware).parse()
    logger.debug("Parsed %r -> %s (%s)", source_text, value, type(value).__name__)
    return value
