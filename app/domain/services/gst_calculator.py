# app/domain/services/gst_calculator.py
"""
GST breakdown for a set of invoice line items.

Per-line amounts are rounded to paise where they are computed so that the
printed lines always add up to the printed subtotal.  Intra-state supplies
split the aggregated tax evenly into CGST and SGST; inter-state supplies
carry the whole tax as IGST.  The grand total is rounded to whole rupees
and the difference is reported as ``round_off``.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable, Mapping

from pydantic import ValidationError as PydanticValidationError

from app.domain.errors import ValidationError
from app.domain.models.billing import (
    ComputedLineItem,
    GSTBreakdown,
    JurisdictionInfo,
    LineItem,
)
from app.domain.services.state_codes import resolve_intra_state

logger = logging.getLogger("gst_calculator")

ZERO = Decimal("0")
HUNDRED = Decimal("100")

STANDARD_GST_SLABS: tuple[Decimal, ...] = tuple(
    Decimal(r) for r in ("0", "5", "12", "18", "28")
)


def round_half_up(value: Decimal, places: int = 2) -> Decimal:
    """Round half away from zero to ``places`` decimals."""
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def is_standard_slab(gst_rate: Decimal | int | float | str) -> bool:
    try:
        return Decimal(str(gst_rate)) in STANDARD_GST_SLABS
    except InvalidOperation:
        return False


# ---------------------------------------------------------------------------
# Input checks
# ---------------------------------------------------------------------------

def _coerce_item(raw: LineItem | Mapping[str, Any], index: int) -> LineItem:
    if isinstance(raw, LineItem):
        return raw
    if isinstance(raw, Mapping):
        try:
            return LineItem.model_validate(dict(raw))
        except PydanticValidationError as exc:
            raise ValidationError(f"Item {index + 1} is malformed: {exc.errors()[0]['msg']}") from exc
    raise ValidationError(f"Item {index + 1} must be a line item, got {type(raw).__name__}")


def _check_item(item: LineItem, index: int) -> None:
    label = f"Item {index + 1}"
    for field_name in ("quantity", "rate", "gst_rate"):
        if not getattr(item, field_name).is_finite():
            raise ValidationError(f"{label}: {field_name} must be a finite number")
    if item.quantity < ZERO:
        raise ValidationError(f"{label}: quantity cannot be negative")
    if item.rate < ZERO:
        raise ValidationError(f"{label}: rate cannot be negative")
    if item.gst_rate < ZERO or item.gst_rate > HUNDRED:
        raise ValidationError(f"{label}: GST rate must be between 0 and 100")


def _check_party(info: JurisdictionInfo | None, role: str) -> JurisdictionInfo:
    if info is None or info.is_empty():
        raise ValidationError(
            f"{role} jurisdiction is missing: provide a state name, state code or GSTIN"
        )
    return info


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def compute_line(item: LineItem) -> ComputedLineItem:
    """Attach ``amount`` and ``gst_amount`` (both rounded to paise)."""
    amount = round_half_up(item.rate * item.quantity)
    gst_amount = round_half_up(amount * item.gst_rate / HUNDRED)
    return ComputedLineItem(
        **item.model_dump(),
        amount=amount,
        gst_amount=gst_amount,
    )


def compute_breakdown(
    items: Iterable[LineItem | Mapping[str, Any]],
    seller: JurisdictionInfo | None,
    buyer: JurisdictionInfo | None,
) -> GSTBreakdown:
    """
    Compute the GST breakdown for ``items`` sold by ``seller`` to ``buyer``.

    Inputs are never mutated.  Raises ``ValidationError`` for an empty item
    list, negative quantity or rate, a GST rate outside [0, 100], or a party
    with no jurisdiction signal at all.
    """
    line_items = [_coerce_item(raw, i) for i, raw in enumerate(items or [])]
    if not line_items:
        raise ValidationError("Invoice must contain at least one item")

    for i, item in enumerate(line_items):
        _check_item(item, i)
        if not is_standard_slab(item.gst_rate):
            logger.warning(
                "gst_calculator: non-standard GST rate %s%% on item %d", item.gst_rate, i + 1
            )

    seller = _check_party(seller, "Seller")
    buyer = _check_party(buyer, "Buyer")

    computed = [compute_line(item) for item in line_items]
    is_intra_state = resolve_intra_state(seller, buyer)

    subtotal = sum((c.amount for c in computed), ZERO)
    total_gst = sum((c.gst_amount for c in computed), ZERO)

    if is_intra_state:
        # halve the aggregate, not each line
        cgst = sgst = round_half_up(total_gst / 2)
        igst = ZERO
    else:
        cgst = sgst = ZERO
        igst = total_gst

    before_round = subtotal + cgst + sgst + igst
    total = round_half_up(before_round, 0)
    round_off = round_half_up(total - before_round)

    breakdown = GSTBreakdown(
        items=computed,
        subtotal=round_half_up(subtotal),
        cgst=round_half_up(cgst),
        sgst=round_half_up(sgst),
        igst=round_half_up(igst),
        round_off=round_off,
        total=total,
        is_intra_state=is_intra_state,
    )
    logger.debug(
        "gst_calculator: %d items, subtotal=%s tax=%s total=%s intra_state=%s",
        len(computed), breakdown.subtotal, breakdown.total_tax, breakdown.total, is_intra_state,
    )
    return breakdown
