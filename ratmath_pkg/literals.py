"""Readers for repeating-decimal and uncertainty literals.

Notation handled here:

    0.1#6          repeating decimal, digits after '#' repeat forever
    1.25#0         terminating decimal written in repeating form
    0.#3:0.5#0     interval of repeating decimals
    1.5[+-0.2]     symmetric uncertainty, 1.3:1.7
    1.5[+0.3,-0.1] asymmetric uncertainty, 1.4:1.8
    1.5[3,7]       digit range appended to the base, 1.53:1.57
    1.[5,#6]       endpoints written after the decimal point
    1.5            (as a measurement) half a unit in the last place, 1.45:1.55

Uncertainty offsets are absolute values and may themselves be repeating
decimals or carry an E suffix (``1[+-5E-3]``).
"""

from __future__ import annotations

import re

from .config import UNCERTAINTY_RE
from .interval import RationalInterval
from .rational import Rational
from .types import FormatError

_DIGITS_ONLY = re.compile(r"^\d*$")
_RANGE_VALUE = re.compile(r"^\d+(\.\d+)?$")
_PLAIN_NUMBER = re.compile(r"^-?(\d+\.?\d*|\.\d+)$")
_EXPONENT = re.compile(r"^-?\d+$")
_BASE_ENDS_WITH_POINT = re.compile(r"^-?\d+\.$")


def parse_repeating_decimal(text: str) -> Rational | RationalInterval:
    """Read a repeating decimal, an interval of them, or an uncertainty literal.

    A decimal without '#' is read as a measurement: integers are exact,
    anything with fractional digits becomes the interval of half a unit in
    the last place around it.

    Args:
        text: Literal such as ``"0.1#6"``, ``"-0.#3"``, ``"0.#3:0.5#0"`` or ``"1.5[+-0.2]"``

    Returns:
        Rational for exact forms, RationalInterval otherwise

    Raises:
        FormatError: If the literal is malformed
    """
    if not isinstance(text, str) or not text.strip():
        raise FormatError("Input must be a non-empty string", "EMPTY_LITERAL")
    text = text.strip()
    if "[" in text and "]" in text:
        return parse_decimal_uncertainty(text, allow_integer_range=False)
    if ":" in text:
        return _parse_repeating_interval(text)

    negative = text.startswith("-")
    body = text[1:] if negative else text
    if "#" not in body:
        return parse_non_repeating_decimal(body, negative)

    parts = body.split("#")
    if len(parts) != 2:
        raise FormatError(
            'Invalid repeating decimal format. Use format like "0.12#45"', "INVALID_REPEATING"
        )
    leading, repeating = parts
    if not repeating or not _DIGITS_ONLY.match(repeating):
        raise FormatError("Repeating part must contain only digits", "INVALID_REPEATING")
    decimal_parts = leading.split(".")
    if len(decimal_parts) > 2:
        raise FormatError(
            "Invalid decimal format - multiple decimal points", "INVALID_REPEATING"
        )
    integer_part = decimal_parts[0] or "0"
    fractional_part = decimal_parts[1] if len(decimal_parts) == 2 else ""
    if not (_DIGITS_ONLY.match(integer_part) and _DIGITS_ONLY.match(fractional_part)):
        raise FormatError(
            "Non-repeating part must contain only digits and at most one decimal point",
            "INVALID_REPEATING",
        )

    # x = 0.ab(c) with n = len(b) and m = len(c) gives x = (abc - ab) / (10^n * (10^m - 1))
    with_cycle = int(integer_part + fractional_part + repeating)
    without_cycle = int(integer_part + fractional_part)
    denominator = 10 ** len(fractional_part) * (10 ** len(repeating) - 1)
    value = Rational(with_cycle - without_cycle, denominator)
    return value.negate() if negative else value


def parse_non_repeating_decimal(text: str, negative: bool = False) -> Rational | RationalInterval:
    """Read an unsigned decimal as a measurement.

    Args:
        text: Digits with at most one decimal point, without sign
        negative: Whether the literal carried a leading minus

    Returns:
        Exact Rational for integers, otherwise the half-unit interval
    """
    decimal_parts = text.split(".")
    if len(decimal_parts) > 2:
        raise FormatError("Invalid decimal format - multiple decimal points", "INVALID_DECIMAL")
    integer_part = decimal_parts[0] or "0"
    fractional_part = decimal_parts[1] if len(decimal_parts) == 2 else ""
    if not (integer_part.isdigit() and _DIGITS_ONLY.match(fractional_part)):
        raise FormatError(
            "Decimal must contain only digits and at most one decimal point", "INVALID_DECIMAL"
        )
    if not fractional_part:
        value = Rational(int(integer_part))
        return value.negate() if negative else value

    scale = 10 ** (len(fractional_part) + 1)
    digits = int(integer_part + fractional_part) * 10
    if negative:
        return RationalInterval(Rational(-(digits + 5), scale), Rational(-(digits - 5), scale))
    return RationalInterval(Rational(digits - 5, scale), Rational(digits + 5, scale))


def parse_decimal_uncertainty(text: str, allow_integer_range: bool = True) -> RationalInterval:
    """Read ``base[bracket]`` uncertainty notation into an interval.

    Args:
        text: Complete literal, e.g. ``"1.5[+-0.2]"``
        allow_integer_range: Whether ``12[3,4]`` (digit range on an integer base) is accepted

    Raises:
        FormatError: If the base or the bracket contents are malformed
    """
    match = UNCERTAINTY_RE.fullmatch(text.strip())
    if not match:
        raise FormatError("Invalid uncertainty format", "INVALID_UNCERTAINTY")
    base_text, bracket = match.group(1), match.group(2).strip()
    if not bracket:
        raise FormatError("Uncertainty brackets cannot be empty", "INVALID_UNCERTAINTY")

    symmetric = bracket.startswith("+-") or bracket.startswith("-+")
    if _BASE_ENDS_WITH_POINT.match(base_text) and not symmetric:
        return _parse_decimal_point_range(base_text, bracket)

    base = Rational(base_text)
    base_places = len(base_text.split(".")[1]) if "." in base_text else 0

    if "," in bracket and "+" not in bracket and "-" not in bracket:
        if base_places == 0 and not allow_integer_range:
            raise FormatError(
                "Range notation on integer bases is not supported in this context",
                "INVALID_UNCERTAINTY",
            )
        return _parse_digit_range(base_text, bracket, base_places)

    if symmetric:
        offset_text = bracket[2:]
        if not offset_text:
            raise FormatError(
                "Symmetric notation must have a valid number after +- or -+",
                "INVALID_UNCERTAINTY",
            )
        offset = parse_offset(offset_text)
        return RationalInterval(base - offset, base + offset)

    parts = [part.strip() for part in bracket.split(",")]
    if len(parts) != 2:
        raise FormatError(
            "Relative notation must have exactly two values separated by comma",
            "INVALID_UNCERTAINTY",
        )
    positive = negative = None
    for part in parts:
        sign, offset_text = part[:1], part[1:]
        if sign not in ("+", "-"):
            raise FormatError(
                "Relative notation values must start with + or -", "INVALID_UNCERTAINTY"
            )
        if not offset_text:
            raise FormatError("Offset must be a valid number", "INVALID_UNCERTAINTY")
        if sign == "+":
            if positive is not None:
                raise FormatError("Only one positive offset allowed", "INVALID_UNCERTAINTY")
            positive = parse_offset(offset_text)
        else:
            if negative is not None:
                raise FormatError("Only one negative offset allowed", "INVALID_UNCERTAINTY")
            negative = parse_offset(offset_text)
    return RationalInterval(base - negative, base + positive)


def parse_offset(text: str) -> Rational:
    """Read an uncertainty offset: plain decimal, repeating decimal, or either with an E suffix."""
    mantissa, _, exponent = text.partition("E")
    if exponent and not _EXPONENT.match(exponent):
        raise FormatError("E notation exponent must be an integer", "INVALID_EXPONENT")
    if "E" in text and not exponent:
        raise FormatError("E notation exponent must be an integer", "INVALID_EXPONENT")
    if "#" in mantissa:
        value = parse_repeating_decimal(mantissa)
        if isinstance(value, RationalInterval):
            raise FormatError(f"Invalid offset: {text}", "INVALID_UNCERTAINTY")
    elif _PLAIN_NUMBER.match(mantissa):
        value = Rational(mantissa)
    else:
        raise FormatError(f"Invalid offset: {text}", "INVALID_UNCERTAINTY")
    return value.e_notation(int(exponent)) if exponent else value


def _parse_digit_range(base_text: str, bracket: str, base_places: int) -> RationalInterval:
    parts = [part.strip() for part in bracket.split(",")]
    if len(parts) != 2:
        raise FormatError(
            "Range notation must have exactly two values separated by comma",
            "INVALID_UNCERTAINTY",
        )
    lower_text, upper_text = parts
    if not (_RANGE_VALUE.match(lower_text) and _RANGE_VALUE.match(upper_text)):
        raise FormatError("Range values must be valid decimal numbers", "INVALID_UNCERTAINTY")
    if base_places == 0:
        lower_digits = len(lower_text.split(".")[0])
        upper_digits = len(upper_text.split(".")[0])
        if lower_digits != upper_digits:
            raise FormatError(
                f"Invalid range notation: {base_text}[{lower_text},{upper_text}] - integer "
                "parts of range values must have the same number of digits",
                "INVALID_UNCERTAINTY",
            )
    return RationalInterval(Rational(base_text + lower_text), Rational(base_text + upper_text))


def _parse_decimal_point_range(base_text: str, bracket: str) -> RationalInterval:
    parts = [part.strip() for part in bracket.split(",")]
    if len(parts) != 2:
        raise FormatError(
            "Invalid uncertainty format for decimal point notation", "INVALID_UNCERTAINTY"
        )
    return RationalInterval(
        _decimal_point_endpoint(base_text, parts[0]),
        _decimal_point_endpoint(base_text, parts[1]),
    )


def _decimal_point_endpoint(base_text: str, endpoint: str) -> Rational:
    if endpoint.startswith("#") and endpoint[1:].isdigit():
        return parse_repeating_decimal(base_text + endpoint)
    if endpoint.isdigit():
        return Rational(base_text + endpoint)
    raise FormatError(f"Invalid endpoint format: {endpoint}", "INVALID_UNCERTAINTY")


def _parse_repeating_interval(text: str) -> RationalInterval:
    parts = text.split(":")
    if len(parts) != 2:
        raise FormatError(
            'Invalid interval format. Use format like "0.#3:0.5#0"', "INVALID_INTERVAL"
        )
    left = parse_repeating_decimal(parts[0])
    right = parse_repeating_decimal(parts[1])
    if isinstance(left, RationalInterval) or isinstance(right, RationalInterval):
        raise FormatError("Nested intervals are not supported", "NESTED_INTERVAL")
    return RationalInterval(left, right)
