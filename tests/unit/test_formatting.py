"""Unit tests for rupee formatting and derived text blocks."""

import pytest

from taxcalc.sdk.taxes import TaxBracket, compute_tax, format_tax_context
from taxcalc.sdk.taxes.formatting import (
    bracket_label,
    format_inr,
    round_percent,
    round_to_rupee,
    rupees,
)


class TestFormatInr:
    """Indian digit grouping: last three digits, then pairs."""

    @pytest.mark.parametrize("amount,expected", [
        (0, "0"),
        (999, "999"),
        (1000, "1,000"),
        (75000, "75,000"),
        (100000, "1,00,000"),
        (2400000, "24,00,000"),
        (12345678, "1,23,45,678"),
        (1234567890, "1,23,45,67,890"),
    ])
    def test_grouping(self, amount, expected):
        assert format_inr(amount) == expected

    def test_fraction_kept_up_to_three_digits(self):
        assert format_inr(1234.5) == "1,234.5"
        assert format_inr(0.0005) == "0.001"
        assert format_inr(2400.0064) == "2,400.006"

    def test_float_noise_dropped(self):
        assert format_inr(33800.000000000004) == "33,800"

    def test_max_fraction_digits(self):
        assert format_inr(20.666, 2) == "20.67"

    def test_negative(self):
        assert format_inr(-150000) == "-1,50,000"

    def test_amount_wider_than_default_precision(self):
        assert format_inr(1e30) == "10," + "00," * 13 + "000"
        assert format_inr(-1e30).startswith("-10,00,")

    def test_rupees_prefix(self):
        assert rupees(400000) == "₹4,00,000"


class TestRounding:

    def test_half_rounds_up(self):
        assert round_to_rupee(2.5) == 3
        assert round_to_rupee(2.4999) == 2
        assert round_to_rupee(62400.156) == 62400

    def test_percent(self):
        assert round_percent(6.5) == 6.5
        assert round_percent(20.669999999999998) == 20.67
        assert round_percent(0.125) == 0.13


class TestBracketLabel:

    def test_bounded(self):
        bracket = TaxBracket(lower_bound=400000, upper_bound=800000, rate=5)
        assert bracket_label(bracket) == "₹4,00,000 - ₹8,00,000"

    def test_unbounded(self):
        bracket = TaxBracket(lower_bound=1000000, rate=30)
        assert bracket_label(bracket) == "₹10,00,000 - Above"


class TestTaxContext:
    """Context block handed to an advisory assistant."""

    def test_new_regime_context(self):
        result = compute_tax(1_500_000, "new")

        assert format_tax_context(result) == (
            "Tax Calculation (NEW Regime):\n"
            "- Annual CTC: ₹15,00,000\n"
            "- Taxable Income: ₹14,25,000\n"
            "- Total Tax: ₹97,500\n"
            "- Effective Tax Rate: 6.5%\n"
            "- Annual Take-Home: ₹14,02,500\n"
            "- Monthly Take-Home: ₹1,16,875"
        )
