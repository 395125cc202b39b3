# app/domain/services/amount_words.py
"""
Amount in words for printed invoices, Indian numbering (crore / lakh).

    >>> amount_in_words(125050.5)
    'INR One Lakh Twenty Five Thousand Fifty and Fifty Paise Only'
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from app.domain.errors import ValidationError

ONES = ("", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine")
TEENS = (
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen",
    "Fifteen", "Sixteen", "Seventeen", "Eighteen", "Nineteen",
)
TENS = ("", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety")

# (divisor, label), largest first
_GROUPS = (
    (10_000_000, "Crore"),
    (100_000, "Lakh"),
    (1_000, "Thousand"),
)


def number_to_words(num: int) -> str:
    """Render a non-negative integer in words, e.g. 10275 -> 'Ten Thousand Two Hundred Seventy Five'."""
    if num < 0:
        raise ValidationError("Cannot render a negative number in words")
    if num == 0:
        return "Zero"

    words: list[str] = []
    for divisor, label in _GROUPS:
        if num >= divisor:
            # crore count may itself exceed 99, so recurse
            words.append(f"{number_to_words(num // divisor)} {label}")
            num %= divisor

    if num >= 100:
        words.append(f"{ONES[num // 100]} Hundred")
        num %= 100

    if num >= 20:
        words.append(TENS[num // 10])
        num %= 10
    elif num >= 10:
        words.append(TEENS[num - 10])
        num = 0

    if num > 0:
        words.append(ONES[num])

    return " ".join(words)


def _to_decimal(amount) -> Decimal:
    if isinstance(amount, bool):
        raise ValidationError("Amount must be a number")
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f"Amount {amount!r} is not a number") from None
    if not value.is_finite():
        raise ValidationError("Amount must be finite")
    if value < 0:
        raise ValidationError("Amount cannot be negative")
    return value


def amount_in_words(amount, currency_label: str = "INR") -> str:
    """Format ``amount`` as '<label> <rupees> [and <paise> Paise] Only'."""
    value = _to_decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    rupees = int(value)
    paise = int((value - rupees) * 100)

    words = f"{currency_label} {number_to_words(rupees)}"
    if paise > 0:
        words += f" and {number_to_words(paise)} Paise"
    return words + " Only"
