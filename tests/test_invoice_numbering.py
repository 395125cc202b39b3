"""Tests for monthly invoice number allocation."""

from datetime import date

import pytest

from app.domain.errors import FormatError
from app.domain.services.invoice_numbering import current_period, next_invoice_number


class TestNextInvoiceNumber:
    def test_first_in_period(self):
        assert next_invoice_number("202501", None) == "202501-001"

    def test_increments(self):
        assert next_invoice_number("202501", "202501-007") == "202501-008"
        assert next_invoice_number("202501", "202501-099") == "202501-100"

    def test_grows_past_three_digits(self):
        assert next_invoice_number("202501", "202501-999") == "202501-1000"
        assert next_invoice_number("202501", "202501-1000") == "202501-1001"

    def test_unpadded_suffix_accepted(self):
        assert next_invoice_number("202501", "202501-7") == "202501-008"

    @pytest.mark.parametrize(
        "last",
        [
            "202412-005",   # other period
            "202501-",      # no digits
            "202501-00A",
            "INV-2025-001",
            "202501005",
            "",
        ],
    )
    def test_malformed_last_number(self, last):
        with pytest.raises(FormatError):
            next_invoice_number("202501", last)

    @pytest.mark.parametrize("period", ["2025-01", "202513", "202500", "25011", ""])
    def test_malformed_period(self, period):
        with pytest.raises(FormatError, match="period"):
            next_invoice_number(period, None)

    def test_sequence_resets_each_period(self):
        # caller looks up last-in-period, so a new month starts from None
        assert next_invoice_number("202502", None) == "202502-001"


class TestCurrentPeriod:
    def test_from_date(self):
        assert current_period(date(2025, 1, 31)) == "202501"
        assert current_period(date(2024, 12, 1)) == "202412"

    def test_defaults_to_today(self):
        today = date.today()
        assert current_period() == f"{today.year}{today.month:02d}"
