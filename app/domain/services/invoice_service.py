# app/domain/services/invoice_service.py
"""
Invoice creation and update.

Glues the pure billing core (breakdown, numbering) to the persistence
collaborator.  Creation allocates the invoice number under a per-period
lock held for the rest of the transaction; updates recompute the
breakdown but never touch the number.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Iterable, Mapping

from app.domain.models.billing import GSTBreakdown, LineItem, PartyInfo
from app.domain.services.gst_calculator import compute_breakdown
from app.domain.services.invoice_numbering import current_period, next_invoice_number
from app.infrastructure.db.models import Invoice, InvoiceItem

logger = logging.getLogger("invoice_service")

_PARTY_FIELDS = {
    "name": "name",
    "state_name": "state",
    "state_code": "state_code",
    "tax_id": "gstin",
}


# ---------------------------------------------------------------------------
# ORM <-> domain helpers
# ---------------------------------------------------------------------------

def party_from_invoice(invoice: Invoice, role: str) -> PartyInfo:
    """Read the ``seller`` or ``buyer`` snapshot stored on an invoice row."""
    return PartyInfo(**{
        attr: getattr(invoice, f"{role}_{column}")
        for attr, column in _PARTY_FIELDS.items()
    })


def _apply_party(invoice: Invoice, role: str, party: PartyInfo) -> None:
    for attr, column in _PARTY_FIELDS.items():
        value = getattr(party, attr)
        setattr(invoice, f"{role}_{column}", value.strip() if isinstance(value, str) else value)


def items_from_invoice(invoice: Invoice) -> list[LineItem]:
    return [
        LineItem(
            product_id=row.product_id,
            description=row.description or "",
            hsn_code=row.hsn_code or "",
            quantity=row.quantity,
            unit=row.unit or "NOS",
            rate=row.rate,
            gst_rate=row.gst_rate,
        )
        for row in invoice.items
    ]


def _item_rows(breakdown: GSTBreakdown) -> list[InvoiceItem]:
    return [
        InvoiceItem(
            position=position,
            product_id=item.product_id,
            description=item.description,
            hsn_code=item.hsn_code or None,
            quantity=item.quantity,
            unit=item.unit,
            rate=item.rate,
            gst_rate=item.gst_rate,
            amount=item.amount,
            gst_amount=item.gst_amount,
        )
        for position, item in enumerate(breakdown.items)
    ]


def _apply_breakdown(invoice: Invoice, breakdown: GSTBreakdown) -> None:
    invoice.subtotal = breakdown.subtotal
    invoice.cgst = breakdown.cgst
    invoice.sgst = breakdown.sgst
    invoice.igst = breakdown.igst
    invoice.round_off = breakdown.round_off
    invoice.total = breakdown.total
    invoice.is_intra_state = breakdown.is_intra_state


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

async def create_invoice(
    repo: Any,
    *,
    items: Iterable[LineItem | Mapping[str, Any]],
    seller: PartyInfo,
    buyer: PartyInfo,
    invoice_date: date | None = None,
    notes: str | None = None,
    today: date | None = None,
) -> Invoice:
    """
    Compute the breakdown, allocate the next number for the current period
    and persist the invoice with its lines.

    Raises ``ValidationError`` before any database work when the input is
    bad, and ``FormatError`` when the stored numbering is corrupt.
    """
    breakdown = compute_breakdown(items, seller, buyer)

    today = today or date.today()
    period = current_period(today)

    try:
        await repo.lock_period(period)
        last_number = await repo.latest_number_for_period(period)
        invoice_number = next_invoice_number(period, last_number)

        invoice = Invoice(
            invoice_number=invoice_number,
            invoice_date=invoice_date or today,
            status="draft",
            notes=notes,
        )
        _apply_party(invoice, "seller", seller)
        _apply_party(invoice, "buyer", buyer)
        _apply_breakdown(invoice, breakdown)
        invoice.items = _item_rows(breakdown)

        await repo.add(invoice)
        await repo.commit()
    except Exception:
        await repo.rollback()
        raise

    await repo.refresh(invoice)
    logger.info(
        "invoice_service: created %s total=%s intra_state=%s",
        invoice_number, breakdown.total, breakdown.is_intra_state,
    )
    return invoice


async def update_invoice(
    repo: Any,
    invoice: Invoice,
    *,
    items: Iterable[LineItem | Mapping[str, Any]] | None = None,
    seller: PartyInfo | None = None,
    buyer: PartyInfo | None = None,
    invoice_date: date | None = None,
    status: str | None = None,
    notes: str | None = None,
) -> Invoice:
    """
    Recompute and store the breakdown from new (or existing) items and
    parties.  The invoice number is allocated once and never changes.
    """
    seller = seller or party_from_invoice(invoice, "seller")
    buyer = buyer or party_from_invoice(invoice, "buyer")
    line_items = list(items) if items is not None else items_from_invoice(invoice)

    breakdown = compute_breakdown(line_items, seller, buyer)

    _apply_party(invoice, "seller", seller)
    _apply_party(invoice, "buyer", buyer)
    _apply_breakdown(invoice, breakdown)
    if invoice_date is not None:
        invoice.invoice_date = invoice_date
    if status is not None:
        invoice.status = status
    if notes is not None:
        invoice.notes = notes

    try:
        await repo.replace_items(invoice, _item_rows(breakdown))
        await repo.commit()
    except Exception:
        await repo.rollback()
        raise

    await repo.refresh(invoice)
    logger.info("invoice_service: updated %s total=%s", invoice.invoice_number, breakdown.total)
    return invoice


async def peek_next_number(repo: Any, today: date | None = None) -> str:
    """Next number for the current period without reserving it."""
    period = current_period(today)
    return next_invoice_number(period, await repo.latest_number_for_period(period))
