# app/domain/services/invoice_numbering.py
"""
Sequential invoice numbers of the form ``YYYYMM-NNN``.

The sequence restarts at 001 every calendar month.  Three digits is a
minimum width: the 1000th invoice of a month is ``YYYYMM-1000``.

Callers must serialize "read last number, allocate next" per period
(see ``InvoiceRepository.lock_period``); this module only does the math.
"""

from __future__ import annotations

import re
from datetime import date

from app.domain.errors import FormatError

PERIOD_RE = re.compile(r"^([0-9]{4})(0[1-9]|1[0-2])$")
SEQUENCE_WIDTH = 3


def current_period(today: date | None = None) -> str:
    """Return the ``YYYYMM`` period for ``today`` (defaults to the local date)."""
    today = today or date.today()
    return f"{today.year:04d}{today.month:02d}"


def _check_period(period: str) -> str:
    period = str(period or "").strip()
    if not PERIOD_RE.match(period):
        raise FormatError(f"Invalid invoice period {period!r}: expected YYYYMM")
    return period


def format_invoice_number(period: str, sequence: int) -> str:
    return f"{_check_period(period)}-{sequence:0{SEQUENCE_WIDTH}d}"


def next_invoice_number(period: str, last_issued_in_period: str | None) -> str:
    """
    Return the number following ``last_issued_in_period`` within ``period``.

    ``None`` means nothing has been issued yet this period.  Raises
    ``FormatError`` when the last number is not ``<period>-<digits>``.
    """
    period = _check_period(period)
    if last_issued_in_period is None:
        return format_invoice_number(period, 1)

    last = last_issued_in_period.strip()
    m = re.fullmatch(rf"{period}-([0-9]+)", last)
    if not m:
        raise FormatError(
            f"Last invoice number {last_issued_in_period!r} does not match {period}-<digits>"
        )
    return format_invoice_number(period, int(m.group(1)) + 1)
