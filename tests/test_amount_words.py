"""Tests for Indian-style amount in words."""

from decimal import Decimal

import pytest

from app.domain.errors import ValidationError
from app.domain.services.amount_words import amount_in_words, number_to_words


class TestNumberToWords:
    @pytest.mark.parametrize(
        "num,expected",
        [
            (0, "Zero"),
            (7, "Seven"),
            (10, "Ten"),
            (13, "Thirteen"),
            (20, "Twenty"),
            (45, "Forty Five"),
            (100, "One Hundred"),
            (101, "One Hundred One"),
            (999, "Nine Hundred Ninety Nine"),
            (1000, "One Thousand"),
            (10275, "Ten Thousand Two Hundred Seventy Five"),
            (100000, "One Lakh"),
            (250000, "Two Lakh Fifty Thousand"),
            (9999999, "Ninety Nine Lakh Ninety Nine Thousand Nine Hundred Ninety Nine"),
            (10000000, "One Crore"),
            (123456789, "Twelve Crore Thirty Four Lakh Fifty Six Thousand Seven Hundred Eighty Nine"),
            (1000000000, "One Hundred Crore"),
        ],
    )
    def test_words(self, num, expected):
        assert number_to_words(num) == expected


class TestAmountInWords:
    def test_zero(self):
        assert amount_in_words(0) == "INR Zero Only"

    def test_hundred(self):
        assert amount_in_words(100) == "INR One Hundred Only"

    def test_with_paise(self):
        words = amount_in_words(10275.02)
        assert words.startswith("INR Ten Thousand Two Hundred Seventy Five")
        assert words.endswith("and Two Paise Only")

    def test_decimal_input(self):
        assert amount_in_words(Decimal("118")) == "INR One Hundred Eighteen Only"
        assert amount_in_words(Decimal("0.50")) == "INR Zero and Fifty Paise Only"

    def test_paise_rounded_half_up(self):
        assert amount_in_words("1.005") == "INR One and One Paise Only"
        assert amount_in_words("1.999") == "INR Two Only"

    def test_currency_label(self):
        assert amount_in_words(5, currency_label="Rupees") == "Rupees Five Only"

    @pytest.mark.parametrize("bad", [-1, Decimal("-0.01"), float("nan"), float("inf"), "abc", None, True])
    def test_rejects_bad_amounts(self, bad):
        with pytest.raises(ValidationError):
            amount_in_words(bad)
