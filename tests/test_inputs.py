"""Tests for raw field validation."""

import pytest

from snap_eligibility.inputs import (
    EmptyValueError,
    InputError,
    NegativeValueError,
    NotANumberError,
    parse_household_size,
    parse_positive_integer,
    parse_positive_number,
    round_currency,
    sum_amounts,
)


class TestParsePositiveNumber:
    """Tests for parse_positive_number."""

    @pytest.mark.parametrize(
        "raw,expected",
        [("0", 0.0), ("12.5", 12.5), (" 7 ", 7.0), ("1e3", 1000.0), ("0034", 34.0)],
    )
    def test_non_negative_text_parses(self, raw, expected):
        """Non-negative numeric text parses to its value."""
        assert parse_positive_number(raw) == expected

    def test_numbers_pass_through(self):
        """Plain numbers from batch files are accepted."""
        assert parse_positive_number(5) == 5.0
        assert parse_positive_number(2.25) == 2.25

    @pytest.mark.parametrize("raw", ["", "   ", None])
    def test_empty_value(self, raw):
        """Blank input raises EmptyValueError."""
        with pytest.raises(EmptyValueError, match="Value cannot be empty."):
            parse_positive_number(raw)

    @pytest.mark.parametrize("raw", ["abc", "12a", "1_000", "nan", "inf", "$5"])
    def test_not_a_number(self, raw):
        """Text that is not a finite number raises NotANumberError."""
        with pytest.raises(NotANumberError, match="Value must be a number."):
            parse_positive_number(raw)

    def test_boolean_is_not_a_number(self):
        """Booleans are rejected even though they are ints."""
        with pytest.raises(NotANumberError):
            parse_positive_number(True)

    @pytest.mark.parametrize("raw", ["-1", "-0.01", -3])
    def test_negative_value(self, raw):
        """Negative amounts raise NegativeValueError."""
        with pytest.raises(NegativeValueError, match="Value cannot be negative."):
            parse_positive_number(raw)

    def test_zero_rejected_when_not_allowed(self):
        """Zero is rejected with allow_zero=False, with the 'or zero' message."""
        with pytest.raises(NegativeValueError) as exc:
            parse_positive_number("0", allow_zero=False)
        assert exc.value.reason == "Value cannot be negative or zero."
        assert exc.value.allow_zero is False

    def test_error_carries_field(self):
        """Errors name the logical field and keep the raw value."""
        with pytest.raises(InputError) as exc:
            parse_positive_number("x", field="earned_income[2]")
        assert exc.value.field == "earned_income[2]"
        assert exc.value.value == "x"
        assert str(exc.value) == "earned_income[2]: Value must be a number."

    def test_errors_are_value_errors(self):
        """InputError kinds can be caught as ValueError."""
        assert issubclass(EmptyValueError, ValueError)
        assert issubclass(NotANumberError, InputError)


class TestParsePositiveInteger:
    """Tests for parse_positive_integer and parse_household_size."""

    def test_truncates_toward_zero(self):
        """Non-integer input truncates instead of failing."""
        assert parse_positive_integer("2.9") == 2
        assert parse_positive_integer("3") == 3

    def test_validates_before_truncating(self):
        """A fraction above zero passes the positive check, then truncates to 0."""
        assert parse_positive_integer("0.5", allow_zero=False) == 0

    def test_negative_rejected(self):
        """Negative integers are rejected."""
        with pytest.raises(NegativeValueError):
            parse_positive_integer("-2")

    def test_household_size(self):
        """Household size must be at least one."""
        assert parse_household_size("4") == 4
        assert parse_household_size(12) == 12
        with pytest.raises(NegativeValueError) as exc:
            parse_household_size("0")
        assert exc.value.field == "household_size"

    def test_household_size_truncating_to_zero(self):
        """A size that truncates to zero is rejected."""
        with pytest.raises(NegativeValueError):
            parse_household_size("0.5")


class TestSumAmounts:
    """Tests for sum_amounts."""

    def test_totals_valid_items(self):
        """Valid items are summed."""
        total, errors = sum_amounts(["100", "250.5", 49.5], "earned_income")
        assert total == 400
        assert errors == []

    def test_collects_every_error_in_order(self):
        """Every bad item is reported, in entry order, with its index."""
        _, errors = sum_amounts(["10", "", "abc", "-1"], "unearned_income")
        assert [type(e) for e in errors] == [EmptyValueError, NotANumberError, NegativeValueError]
        assert [e.field for e in errors] == [
            "unearned_income[1]",
            "unearned_income[2]",
            "unearned_income[3]",
        ]

    def test_zero_rejected_when_not_allowed(self):
        """Explicit zero lines fail when zero is not allowed."""
        _, errors = sum_amounts(["0"], "deduction", allow_zero=False)
        assert errors[0].field == "deduction[0]"


class TestRoundCurrency:
    """Tests for whole-dollar rounding."""

    def test_halves_round_up(self):
        """Halves round up, unlike Python's round()."""
        assert round_currency(0.5) == 1
        assert round_currency(2.5) == 3
        assert round_currency(-0.5) == 0

    def test_other_values(self):
        """Everything else rounds to nearest."""
        assert round_currency(1.4) == 1
        assert round_currency(1.6) == 2
        assert round_currency(-5.0) == -5
