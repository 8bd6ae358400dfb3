"""
Tests for the scaled fixed-point decimal.
"""

import pytest
from decimal import Decimal

from slice_engine import RoundedDecimal, RoundedDecimalParseError, ScaleMismatchError
from Shared_Utils.precision import zero_like


class TestConstruction:

    def test_from_int_has_no_places(self):
        assert RoundedDecimal.from_int(5) == RoundedDecimal(5, 0)

    @pytest.mark.parametrize("text,expected", [
        ("1", RoundedDecimal(1, 0)),
        ("0.1", RoundedDecimal(1, 1)),
        ("0.10", RoundedDecimal(10, 2)),
        ("12.345", RoundedDecimal(12345, 3)),
        ("-0.5", RoundedDecimal(-5, 1)),
        ("+2.5", RoundedDecimal(25, 1)),
        ("-7", RoundedDecimal(-7, 0)),
    ])
    def test_from_str(self, text, expected):
        assert RoundedDecimal.from_str(text) == expected

    def test_trailing_zeros_keep_their_scale(self):
        value = RoundedDecimal.from_str("0.10")

        assert value.places == 2
        assert str(value) == "0.10"
        assert value != RoundedDecimal.from_str("0.1")

    @pytest.mark.parametrize("text", ["a", "a.a", "1.", ".5", "1.-5", "", "1e3", "\u0661.\u0665", "\uff15"])
    def test_from_str_rejects_garbage(self, text):
        with pytest.raises(RoundedDecimalParseError):
            RoundedDecimal.from_str(text)

    def test_more_than_one_dot(self):
        with pytest.raises(RoundedDecimalParseError) as exc_info:
            RoundedDecimal.from_str("1.2.3")

        assert exc_info.value.reason == "Invalid dot number."
        assert exc_info.value.text == "1.2.3"

    def test_parse_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            RoundedDecimal.from_str("abc")

    def test_invalid_fields_are_rejected(self):
        with pytest.raises(TypeError):
            RoundedDecimal(1.5, 0)
        with pytest.raises(TypeError):
            RoundedDecimal(True, 0)
        with pytest.raises(ValueError):
            RoundedDecimal(1, -1)

    def test_zero_of_a_scale(self):
        assert RoundedDecimal.zero(2) == RoundedDecimal(0, 2)
        assert zero_like(RoundedDecimal(123, 2)) == RoundedDecimal(0, 2)


class TestRendering:

    @pytest.mark.parametrize("value,text", [
        (RoundedDecimal(10, 2), "0.10"),
        (RoundedDecimal(5, 3), "0.005"),
        (RoundedDecimal(-5, 1), "-0.5"),
        (RoundedDecimal(1234, 2), "12.34"),
        (RoundedDecimal(42, 0), "42"),
    ])
    def test_str(self, value, text):
        assert str(value) == text

    def test_repr(self):
        assert repr(RoundedDecimal(10, 2)) == "RoundedDecimal(10, 2)"

    def test_to_decimal(self):
        assert RoundedDecimal(10, 2).to_decimal() == Decimal("0.10")
        assert str(RoundedDecimal(10, 2).to_decimal()) == "0.10"

    def test_rescale(self):
        assert RoundedDecimal(15, 1).rescale(3) == RoundedDecimal(1500, 3)
        assert RoundedDecimal(159, 2).rescale(1) == RoundedDecimal(15, 1)
        assert RoundedDecimal(-159, 2).rescale(1) == RoundedDecimal(-15, 1)


class TestArithmetic:

    def test_add_and_subtract_same_scale(self):
        a = RoundedDecimal(10, 2)
        b = RoundedDecimal(5, 2)

        assert a + b == RoundedDecimal(15, 2)
        assert a - b == RoundedDecimal(5, 2)

    def test_ints_are_promoted_to_the_scale(self):
        a = RoundedDecimal(10, 2)

        assert a + 1 == RoundedDecimal(110, 2)
        assert 1 + a == RoundedDecimal(110, 2)
        assert 1 - a == RoundedDecimal(90, 2)

    def test_mixed_scale_add_is_refused(self):
        with pytest.raises(ScaleMismatchError) as exc_info:
            RoundedDecimal(10, 2) + RoundedDecimal(1, 1)

        assert exc_info.value.operation == 'add'
        assert (exc_info.value.left_places, exc_info.value.right_places) == (2, 1)

    def test_multiplication_is_exact(self):
        assert RoundedDecimal(15, 1) * RoundedDecimal(3, 2) == RoundedDecimal(45, 3)
        assert RoundedDecimal(15, 1) * 2 == RoundedDecimal(30, 1)
        assert 2 * RoundedDecimal(15, 1) == RoundedDecimal(30, 1)

    def test_division_truncates_toward_zero(self):
        assert RoundedDecimal(100, 2) / RoundedDecimal(3, 0) == RoundedDecimal(33, 2)
        assert RoundedDecimal(-100, 2) / 3 == RoundedDecimal(-33, 2)
        assert 10 / RoundedDecimal(3, 0) == RoundedDecimal(3, 0)

    def test_division_scale_is_difference_of_places(self):
        assert RoundedDecimal(1530, 3) / RoundedDecimal(50, 1) == RoundedDecimal(30, 2)

    def test_division_into_negative_scale_is_refused(self):
        with pytest.raises(ScaleMismatchError):
            RoundedDecimal(1, 0) / RoundedDecimal(1, 2)

    def test_division_by_zero(self):
        with pytest.raises(ZeroDivisionError):
            RoundedDecimal(1, 1) / RoundedDecimal(0, 0)

    def test_unsupported_operand(self):
        with pytest.raises(TypeError):
            RoundedDecimal(1, 1) + Decimal("0.1")

    def test_unary(self):
        assert -RoundedDecimal(5, 1) == RoundedDecimal(-5, 1)
        assert abs(RoundedDecimal(-5, 1)) == RoundedDecimal(5, 1)
        assert not RoundedDecimal(0, 3)
        assert RoundedDecimal(1, 3)


class TestOrdering:

    def test_same_scale_ordering(self):
        assert RoundedDecimal(5, 1) < RoundedDecimal(6, 1)
        assert RoundedDecimal(6, 1) >= RoundedDecimal(6, 1)
        assert sorted([RoundedDecimal(3, 1), RoundedDecimal(1, 1)]) == [RoundedDecimal(1, 1), RoundedDecimal(3, 1)]

    def test_compare_with_int(self):
        assert RoundedDecimal(5, 1) > 0
        assert RoundedDecimal(5, 1) < 1

    def test_mixed_scale_compare_is_refused(self):
        with pytest.raises(ScaleMismatchError):
            RoundedDecimal(5, 1) < RoundedDecimal(6, 2)

    def test_hashable(self):
        assert len({RoundedDecimal(1, 1), RoundedDecimal(1, 1), RoundedDecimal(1, 2)}) == 2


class TestEquality:

    def test_structural_between_decimals(self):
        assert RoundedDecimal(10, 2) == RoundedDecimal(10, 2)
        assert RoundedDecimal(10, 2) != RoundedDecimal(1, 1)

    def test_ints_are_promoted_like_in_ordering(self):
        five = RoundedDecimal(5, 0)

        assert five <= 5 and five >= 5
        assert five == 5
        assert 5 == five
        assert RoundedDecimal(50, 1) == 5
        assert RoundedDecimal(55, 1) != 5

    def test_other_types_are_not_equal(self):
        assert RoundedDecimal(5, 0) != Decimal("5")
        assert RoundedDecimal(1, 0) != True

    def test_lists_compare_with_mixed_types(self):
        assert [RoundedDecimal(50, 0), RoundedDecimal(200, 1)] == [50, 20]

    def test_hash_agrees_with_int_equality(self):
        assert hash(RoundedDecimal(5, 0)) == hash(5)
        assert hash(RoundedDecimal(-50, 1)) == hash(-5)
        assert {RoundedDecimal(5, 0), 5} == {5}
