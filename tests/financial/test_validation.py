"""Tests for ratesense.financial.validation."""

import math

import pytest

from ratesense.core.exceptions import InvalidInputError, RateSenseError
from ratesense.financial.calculators.credit_card import PaymentPolicy
from ratesense.financial.validation import (
    parse_manual_schedule,
    parse_number,
    validate_card_inputs,
    validate_loan_inputs,
    validate_refinance_inputs,
)


class TestLoanInputs:
    def test_valid(self):
        validate_loan_inputs(350_000, 6.5, 360, 0)
        validate_loan_inputs(1_000, 0, 12)

    @pytest.mark.parametrize(
        "args, message",
        [
            ((0, 6.5, 360), "Principal must be greater than 0."),
            ((-5, 6.5, 360), "Principal must be greater than 0."),
            ((1_000, -0.1, 360), "APR cannot be negative."),
            ((1_000, 6.5, 0), "Term must be greater than 0 months."),
            ((1_000, 6.5, 360, -10), "Extra payment cannot be negative."),
        ],
    )
    def test_rejects(self, args, message):
        with pytest.raises(InvalidInputError) as exc_info:
            validate_loan_inputs(*args)
        assert str(exc_info.value) == message

    def test_non_numbers(self):
        with pytest.raises(InvalidInputError, match="Principal must be a number"):
            validate_loan_inputs(None, 6.5, 360)
        with pytest.raises(InvalidInputError, match="APR must be a number"):
            validate_loan_inputs(1_000, math.nan, 360)
        with pytest.raises(InvalidInputError, match="Term must be a number"):
            validate_loan_inputs(1_000, 6.5, math.inf)

    def test_error_is_also_value_error(self):
        with pytest.raises(ValueError):
            validate_loan_inputs(0, 6.5, 360)
        with pytest.raises(RateSenseError):
            validate_loan_inputs(0, 6.5, 360)


class TestCardInputs:
    def test_minimum_policy(self):
        assert validate_card_inputs(4_000, 24.0, "minimum") is PaymentPolicy.MINIMUM

    def test_fixed_policy(self):
        assert validate_card_inputs(4_000, 24.0, PaymentPolicy.FIXED, 200) is PaymentPolicy.FIXED

    def test_fixed_needs_payment(self):
        with pytest.raises(InvalidInputError, match="fixed payment amount is required"):
            validate_card_inputs(4_000, 24.0, "fixed")
        with pytest.raises(InvalidInputError, match="Fixed payment must be greater than 0"):
            validate_card_inputs(4_000, 24.0, "fixed", 0)

    def test_bad_balance_and_apr(self):
        with pytest.raises(InvalidInputError, match="Balance must be greater than 0"):
            validate_card_inputs(0, 24.0, "minimum")
        with pytest.raises(InvalidInputError, match="APR cannot be negative"):
            validate_card_inputs(100, -1, "minimum")

    def test_unknown_policy(self):
        with pytest.raises(InvalidInputError, match="Unknown payment policy"):
            validate_card_inputs(4_000, 24.0, "avalanche")


class TestRefinanceInputs:
    def test_valid(self):
        validate_refinance_inputs(0, 12)

    def test_rejects(self):
        with pytest.raises(InvalidInputError, match="Closing costs cannot be negative"):
            validate_refinance_inputs(-1, 12)
        with pytest.raises(InvalidInputError, match="Holding period must be greater than 0"):
            validate_refinance_inputs(1_000, 0)


class TestParsing:
    def test_parse_number(self):
        assert parse_number(" 6.25 ") == 6.25
        assert parse_number("abc") is None
        assert parse_number("") is None
        assert parse_number(None) is None
        assert parse_number("nan") is None

    def test_parse_manual_schedule(self):
        assert parse_manual_schedule("4.5, 5.0 5.25\n6") == [4.5, 5.0, 5.25, 6.0]
        assert parse_manual_schedule("4.5,,x, 5") == [4.5, 5.0]
        assert parse_manual_schedule("") == []
        assert parse_manual_schedule(None) == []
