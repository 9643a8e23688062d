"""Test error codes and kinds raised across the kernel and parser."""

import unittest

from ratmath_pkg.api import evaluate
from ratmath_pkg.integer import Integer
from ratmath_pkg.parser import parse, preprocess
from ratmath_pkg.rational import Rational
from ratmath_pkg.types import (
    DivisionByZeroError,
    ErrorKind,
    ExpressionSyntaxError,
    FormatError,
    RatmathError,
    UndefinedFactorialError,
    UndefinedPowerError,
    ValidationError,
)


class TestErrorCodes(unittest.TestCase):
    """Test that failures carry stable codes."""

    def assert_code(self, expression, error_type, code):
        with self.assertRaises(error_type) as ctx:
            parse(expression)
        self.assertEqual(ctx.exception.code, code, f"{expression!r} gave {ctx.exception.code}")

    def test_empty_expression(self):
        self.assert_code("", ExpressionSyntaxError, "EMPTY_EXPRESSION")

    def test_control_character(self):
        with self.assertRaises(ExpressionSyntaxError) as ctx:
            preprocess("1\x012")
        self.assertEqual(ctx.exception.code, "INVALID_CHARACTER")

    def test_unbalanced_parentheses(self):
        self.assert_code("(1", ExpressionSyntaxError, "UNBALANCED_PARENTHESES")

    def test_unexpected_end(self):
        self.assert_code("2*", ExpressionSyntaxError, "UNEXPECTED_END")

    def test_invalid_number(self):
        self.assert_code("2*x", ExpressionSyntaxError, "INVALID_NUMBER")

    def test_ambiguous_e_notation(self):
        self.assert_code("1/2E3", ExpressionSyntaxError, "AMBIGUOUS_E_NOTATION")

    def test_zero_denominator(self):
        self.assert_code("3/0", DivisionByZeroError, "ZERO_DENOMINATOR")

    def test_interval_divisor_containing_zero(self):
        self.assert_code("1/(-1:2)", DivisionByZeroError, "INTERVAL_CONTAINS_ZERO")

    def test_undefined_power(self):
        self.assert_code("0^-1", UndefinedPowerError, "UNDEFINED_POWER")

    def test_undefined_factorial(self):
        self.assert_code("(0-1)!", UndefinedFactorialError, "UNDEFINED_FACTORIAL")
        self.assert_code("(1/2)!!", UndefinedFactorialError, "NON_INTEGER_FACTORIAL")

    def test_invalid_repeating(self):
        self.assert_code("0.1#", FormatError, "INVALID_REPEATING")

    def test_invalid_uncertainty(self):
        self.assert_code("1.5[+1]", FormatError, "INVALID_UNCERTAINTY")

    def test_invalid_integer_string(self):
        with self.assertRaises(FormatError) as ctx:
            Integer("12a")
        self.assertEqual(ctx.exception.code, "INVALID_INTEGER")

    def test_invalid_rational_string(self):
        with self.assertRaises(FormatError):
            Rational("1/2/3")

    def test_too_long_evaluation(self):
        result = evaluate("1" * 10001)
        self.assertFalse(result.ok)
        self.assertEqual(result.error_code, "TOO_LONG")
        self.assertIn("too long", result.error.lower())


class TestErrorKinds(unittest.TestCase):
    """Test the classification shared by every error."""

    def test_kinds(self):
        self.assertEqual(FormatError("x").kind, ErrorKind.FORMAT)
        self.assertEqual(DivisionByZeroError("x").kind, ErrorKind.DIVISION_BY_ZERO)
        self.assertEqual(UndefinedPowerError("x").kind, ErrorKind.UNDEFINED_POWER)
        self.assertEqual(UndefinedFactorialError("x").kind, ErrorKind.UNDEFINED_FACTORIAL)
        self.assertEqual(ExpressionSyntaxError("x").kind, ErrorKind.SYNTAX)
        self.assertEqual(ValidationError("x").kind, ErrorKind.VALIDATION)

    def test_builtin_bases(self):
        self.assertIsInstance(DivisionByZeroError("x"), ZeroDivisionError)
        self.assertIsInstance(FormatError("x"), ValueError)
        self.assertIsInstance(UndefinedPowerError("x"), ArithmeticError)
        self.assertIsInstance(ExpressionSyntaxError("x"), RatmathError)

    def test_message_and_default_code(self):
        error = ValidationError("bad input")
        self.assertEqual(str(error), "bad input")
        self.assertEqual(error.code, "VALIDATION_ERROR")


if __name__ == "__main__":
    unittest.main()
