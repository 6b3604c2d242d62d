"""Tests for raw bid amount validation."""

from decimal import Decimal

import pytest

from rentbid.services.admission import (
    AMOUNT_TOO_LARGE_MESSAGE,
    AMOUNT_TOO_SMALL_MESSAGE,
    BLANK_AMOUNT_MESSAGE,
    NOT_A_NUMBER_MESSAGE,
    is_blank,
    parse_number,
    validate_amount,
)


class TestValidateAmount:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            (200, Decimal("200")),
            ("200", Decimal("200")),
            (199.5, Decimal("199.5")),
            ("0.75", Decimal("0.75")),
            (".5", Decimal("0.5")),
            ("-10", Decimal("-10")),
            ("+10", Decimal("10")),
            ("1e3", Decimal("1000")),
            (Decimal("42.10"), Decimal("42.10")),
        ],
    )
    def test_numeric_amounts_are_valid(self, raw, expected):
        result = validate_amount(raw)

        assert result.is_valid
        assert result.value == expected
        assert result.message == ""

    @pytest.mark.parametrize("raw", ["", "   ", "\t\n", None])
    def test_blank_amounts_report_both_errors_in_order(self, raw):
        result = validate_amount(raw)

        assert not result.is_valid
        assert result.errors == (BLANK_AMOUNT_MESSAGE, NOT_A_NUMBER_MESSAGE)
        assert result.message == "Bid can't be blank and Bid is not a number"

    @pytest.mark.parametrize(
        "raw", ["hej", "12abc", "1,000", "1_000", "NaN", "Infinity", "inf", True, False, [200], {"a": 1}]
    )
    def test_non_numeric_amounts(self, raw):
        result = validate_amount(raw)

        assert result.errors == (NOT_A_NUMBER_MESSAGE,)
        assert result.message == "Bid is not a number"
        assert result.value is None

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("1.005", Decimal("1.01")),
            ("12.3456", Decimal("12.35")),
            (0.125, Decimal("0.13")),
            ("-2.675", Decimal("-2.68")),
        ],
    )
    def test_amounts_are_rounded_to_cents(self, raw, expected):
        result = validate_amount(raw)

        assert result.is_valid
        assert result.value == expected
        assert result.value.as_tuple().exponent == -2

    @pytest.mark.parametrize("raw", ["9999999999.99", "-9999999999.99", 9999999999])
    def test_largest_storable_amounts_are_valid(self, raw):
        assert validate_amount(raw).is_valid

    @pytest.mark.parametrize(
        "raw",
        ["10000000000", "99999999999", "1e11", "1e999999", "9999999999.995", 10**12],
    )
    def test_amounts_too_large_for_storage(self, raw):
        result = validate_amount(raw)

        assert result.errors == (AMOUNT_TOO_LARGE_MESSAGE,)
        assert result.message == "Bid must be less than 10000000000"
        assert result.value is None

    @pytest.mark.parametrize("raw", ["-10000000000", "-1e11", "-9999999999.995"])
    def test_amounts_too_small_for_storage(self, raw):
        result = validate_amount(raw)

        assert result.errors == (AMOUNT_TOO_SMALL_MESSAGE,)
        assert result.message == "Bid must be greater than -10000000000"

    def test_tiny_exponent_rounds_to_zero(self):
        result = validate_amount("1e-999999")

        assert result.is_valid
        assert result.value == Decimal("0")


class TestHelpers:
    def test_zero_is_not_blank(self):
        assert is_blank(0) is False
        assert parse_number(0) == Decimal("0")

    def test_non_finite_values_are_not_numbers(self):
        assert parse_number(float("inf")) is None
        assert parse_number(float("nan")) is None
        assert parse_number(Decimal("NaN")) is None
