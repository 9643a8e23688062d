"""Unit tests for the Integer type."""

import unittest

from ratmath_pkg.integer import Integer
from ratmath_pkg.interval import RationalInterval
from ratmath_pkg.rational import Rational
from ratmath_pkg.types import (
    DivisionByZeroError,
    FormatError,
    UndefinedFactorialError,
    UndefinedPowerError,
)


class TestConstruction(unittest.TestCase):
    """Test building Integers from ints and strings."""

    def test_from_int_and_string(self):
        self.assertEqual(Integer(42).value, 42)
        self.assertEqual(Integer("-17").value, -17)
        self.assertEqual(Integer(Integer(5)).value, 5)

    def test_big_values_stay_exact(self):
        big = Integer("123456789012345678901234567890")
        self.assertEqual(str(big.multiply(big)), str(123456789012345678901234567890**2))

    def test_invalid_string(self):
        with self.assertRaises(FormatError):
            Integer("1.5")
        with self.assertRaises(FormatError):
            Integer("abc")

    def test_rejects_non_integers(self):
        with self.assertRaises(TypeError):
            Integer(1.5)
        with self.assertRaises(TypeError):
            Integer(True)


class TestArithmetic(unittest.TestCase):
    """Test closed and widening arithmetic."""

    def test_add_subtract_multiply(self):
        self.assertEqual(Integer(7).add(Integer(5)), Integer(12))
        self.assertEqual(Integer(7).subtract(Integer(10)), Integer(-3))
        self.assertEqual(Integer(-4).multiply(Integer(6)), Integer(-24))

    def test_python_operators(self):
        self.assertEqual(Integer(2) + 3, Integer(5))
        self.assertEqual(3 - Integer(2), Integer(1))
        self.assertEqual(-Integer(4), Integer(-4))
        self.assertEqual(Integer(2) ** 10, Integer(1024))

    def test_exact_division_stays_integer(self):
        result = Integer(12).divide(Integer(4))
        self.assertIsInstance(result, Integer)
        self.assertEqual(result, Integer(3))

    def test_inexact_division_gives_rational(self):
        result = Integer(1).divide(Integer(3))
        self.assertIsInstance(result, Rational)
        self.assertEqual(str(result), "1/3")

    def test_division_by_zero(self):
        with self.assertRaises(DivisionByZeroError):
            Integer(1).divide(Integer(0))
        with self.assertRaises(ZeroDivisionError):
            Integer(1) / 0

    def test_modulo_follows_dividend_sign(self):
        self.assertEqual(Integer(7).modulo(Integer(3)), Integer(1))
        self.assertEqual(Integer(-7).modulo(Integer(3)), Integer(-1))
        self.assertEqual(Integer(7).modulo(Integer(-3)), Integer(1))
        with self.assertRaises(DivisionByZeroError):
            Integer(7).modulo(Integer(0))

    def test_widening_with_rational(self):
        result = Integer(1).add(Rational(1, 2))
        self.assertIsInstance(result, Rational)
        self.assertEqual(result, Rational(3, 2))

    def test_widening_with_interval(self):
        result = Integer(2).multiply(RationalInterval(1, 3))
        self.assertIsInstance(result, RationalInterval)
        self.assertEqual(result, RationalInterval(2, 6))


class TestPower(unittest.TestCase):
    """Test integer exponentiation rules."""

    def test_positive_power(self):
        self.assertEqual(Integer(3).pow(4), Integer(81))
        self.assertEqual(Integer(-2).pow(3), Integer(-8))

    def test_zero_exponent(self):
        self.assertEqual(Integer(5).pow(0), Integer(1))
        with self.assertRaises(UndefinedPowerError):
            Integer(0).pow(0)

    def test_negative_exponent(self):
        result = Integer(2).pow(-3)
        self.assertIsInstance(result, Rational)
        self.assertEqual(result, Rational(1, 8))
        self.assertEqual(Integer(-2).pow(-3), Rational(-1, 8))
        with self.assertRaises(UndefinedPowerError):
            Integer(0).pow(-1)


class TestNumberTheory(unittest.TestCase):
    """Test gcd, lcm and factorials."""

    def test_gcd_lcm(self):
        self.assertEqual(Integer(12).gcd(Integer(18)), Integer(6))
        self.assertEqual(Integer(4).lcm(Integer(6)), Integer(12))
        self.assertEqual(Integer(0).lcm(Integer(6)), Integer(0))
        self.assertEqual(Integer(-4).gcd(6), Integer(2))

    def test_factorial(self):
        self.assertEqual(Integer(0).factorial(), Integer(1))
        self.assertEqual(Integer(5).factorial(), Integer(120))
        with self.assertRaises(UndefinedFactorialError):
            Integer(-1).factorial()

    def test_double_factorial(self):
        self.assertEqual(Integer(0).double_factorial(), Integer(1))
        self.assertEqual(Integer(1).double_factorial(), Integer(1))
        self.assertEqual(Integer(5).double_factorial(), Integer(15))
        self.assertEqual(Integer(6).double_factorial(), Integer(48))
        with self.assertRaises(UndefinedFactorialError):
            Integer(-3).double_factorial()


class TestHelpers(unittest.TestCase):
    """Test predicates, sign, comparison and conversion."""

    def test_predicates(self):
        self.assertTrue(Integer(4).is_even())
        self.assertTrue(Integer(-3).is_odd())
        self.assertTrue(Integer(0).is_zero())
        self.assertTrue(Integer(2).is_positive())
        self.assertTrue(Integer(-2).is_negative())

    def test_sign_and_abs(self):
        self.assertEqual(Integer(-9).sign(), Integer(-1))
        self.assertEqual(Integer(0).sign(), Integer(0))
        self.assertEqual(abs(Integer(-9)), Integer(9))

    def test_ordering(self):
        self.assertLess(Integer(2), Integer(3))
        self.assertGreater(Integer(2), Rational(3, 2))
        self.assertEqual(Integer(2).compare_to(Integer(2)), 0)
        self.assertEqual(Integer(1).compare_to(Rational(3, 2)), -1)

    def test_e_notation(self):
        self.assertEqual(Integer(15).e_notation(2), Integer(1500))
        self.assertEqual(Integer(15).e_notation(-1), Rational(3, 2))

    def test_from_rational(self):
        self.assertEqual(Integer.from_rational(Rational(6, 3)), Integer(2))
        with self.assertRaises(FormatError):
            Integer.from_rational(Rational(1, 2))

    def test_equality_and_hash_match_ints(self):
        self.assertEqual(Integer(3), 3)
        self.assertEqual(hash(Integer(3)), hash(3))
        self.assertEqual(len({Integer(3), Rational(3)}), 1)

    def test_bit_length_ignores_sign(self):
        self.assertEqual(Integer(0).bit_length(), 0)
        self.assertEqual(Integer(255).bit_length(), 8)
        self.assertEqual(Integer(-256).bit_length(), 9)


if __name__ == "__main__":
    unittest.main()
