"""Unit tests for Fraction and FractionInterval."""

import pytest

from ratmath_pkg.fraction import Fraction, FractionInterval
from ratmath_pkg.interval import RationalInterval
from ratmath_pkg.rational import Rational
from ratmath_pkg.types import DivisionByZeroError, FormatError, UndefinedPowerError, ValidationError


class TestFraction:
    def test_keeps_representation(self):
        value = Fraction(2, 4)
        assert (value.numerator, value.denominator) == (2, 4)
        assert value != Fraction(1, 2)
        assert value.same_value(Fraction(1, 2))

    def test_string_construction(self):
        assert Fraction("6/8") == Fraction(6, 8)
        assert Fraction("5") == Fraction(5, 1)
        with pytest.raises(FormatError):
            Fraction("1.5")
        with pytest.raises(DivisionByZeroError):
            Fraction(1, 0)

    def test_add_subtract_need_equal_denominators(self):
        assert Fraction(1, 4).add(Fraction(2, 4)) == Fraction(3, 4)
        assert Fraction(3, 4).subtract(Fraction(2, 4)) == Fraction(1, 4)
        with pytest.raises(ValidationError) as exc_info:
            Fraction(1, 2).add(Fraction(1, 3))
        assert exc_info.value.code == "DENOMINATOR_MISMATCH"
        with pytest.raises(ValidationError):
            Fraction(1, 2).subtract(Fraction(1, 3))

    def test_multiply_divide_pow(self):
        assert Fraction(2, 3).multiply(Fraction(3, 4)) == Fraction(6, 12)
        assert Fraction(2, 3).divide(Fraction(4, 5)) == Fraction(10, 12)
        assert Fraction(2, 3).pow(2) == Fraction(4, 9)
        assert Fraction(2, 3).pow(-2) == Fraction(9, 4)
        assert Fraction(0, 3).pow(2) == Fraction(0, 9)
        with pytest.raises(UndefinedPowerError):
            Fraction(0, 3).pow(0)
        with pytest.raises(UndefinedPowerError):
            Fraction(0, 3).pow(-1)
        with pytest.raises(DivisionByZeroError):
            Fraction(1, 2).divide(Fraction(0, 5))

    def test_scale_and_reduce(self):
        assert Fraction(1, 2).scale(3) == Fraction(3, 6)
        assert Fraction(6, -8).reduce() == Fraction(-3, 4)
        assert Fraction(0, 7).reduce() == Fraction(0, 1)

    def test_mediant(self):
        assert Fraction.mediant(Fraction(1, 2), Fraction(2, 3)) == Fraction(3, 5)
        assert Fraction.mediant(Fraction(2, 4), Fraction(2, 3)) == Fraction(4, 7)

    def test_ordering_handles_negative_denominators(self):
        assert Fraction(1, -2) < Fraction(1, 3)
        assert Fraction(-1, -2) > Fraction(1, 3)
        assert Fraction(1, 2) <= Fraction(2, 4)

    def test_rational_conversion(self):
        assert Fraction(2, 4).to_rational() == Rational(1, 2)
        assert Fraction.from_rational(Rational(3, 4)) == Fraction(3, 4)

    def test_e_notation(self):
        assert Fraction(1, 2).e_notation(2) == Fraction(100, 2)
        assert Fraction(1, 2).e_notation(-1) == Fraction(1, 20)

    def test_str(self):
        assert str(Fraction(2, 4)) == "2/4"
        assert str(Fraction(3)) == "3"


class TestFractionInterval:
    def test_requires_fraction_endpoints(self):
        with pytest.raises(TypeError):
            FractionInterval(Rational(0), Fraction(1))

    def test_orders_endpoints(self):
        value = FractionInterval(Fraction(1, 1), Fraction(0, 1))
        assert value.low == Fraction(0, 1)
        assert value.high == Fraction(1, 1)

    def test_mediant_split(self):
        left, right = FractionInterval(Fraction(0, 1), Fraction(1, 1)).mediant_split()
        assert left == FractionInterval(Fraction(0, 1), Fraction(1, 2))
        assert right == FractionInterval(Fraction(1, 2), Fraction(1, 1))

    def test_partition_with_mediants_builds_farey_sequence(self):
        pieces = FractionInterval(Fraction(0, 1), Fraction(1, 1)).partition_with_mediants(2)
        assert [str(piece) for piece in pieces] == ["0:1/3", "1/3:1/2", "1/2:2/3", "2/3:1"]

    def test_partition_with_mediants_depth_zero_and_negative(self):
        whole = FractionInterval(Fraction(0, 1), Fraction(1, 1))
        assert whole.partition_with_mediants(0) == [whole]
        with pytest.raises(ValidationError):
            whole.partition_with_mediants(-1)

    def test_partition_with_points(self):
        whole = FractionInterval(Fraction(0, 1), Fraction(1, 1))

        def quarters(low, high):
            return [Fraction(3, 4), Fraction(1, 4), Fraction(2, 4), Fraction(1, 2)]

        pieces = whole.partition_with(quarters)
        assert [str(piece) for piece in pieces] == ["0:1/4", "1/4:2/4", "2/4:3/4", "3/4:1"]

    def test_partition_with_endpoint_duplicates(self):
        whole = FractionInterval(Fraction(0, 1), Fraction(1, 1))
        pieces = whole.partition_with(lambda low, high: [low, Fraction(1, 2), high])
        assert len(pieces) == 2
        assert pieces[0].low == Fraction(0, 1)
        assert pieces[1].high == Fraction(1, 1)

    def test_partition_with_rejects_outside_points(self):
        whole = FractionInterval(Fraction(0, 1), Fraction(1, 1))
        with pytest.raises(ValidationError, match="within the interval"):
            whole.partition_with(lambda low, high: [Fraction(3, 2)])
        with pytest.raises(ValidationError):
            whole.partition_with(lambda low, high: [Rational(1, 2)])

    def test_rational_interval_conversion(self):
        value = FractionInterval(Fraction(2, 4), Fraction(3, 4))
        assert value.to_rational_interval() == RationalInterval(Rational(1, 2), Rational(3, 4))
        back = FractionInterval.from_rational_interval(RationalInterval(Rational(1, 3), 1))
        assert back == FractionInterval(Fraction(1, 3), Fraction(1, 1))
