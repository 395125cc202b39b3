# app/api/v1/routes/invoices.py
"""
Invoice CRUD plus the stateless GST calculation preview.
"""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.v1.deps import get_invoice_repository
from app.api.v1.envelope import ok, paginated
from app.api.v1.schemas.invoices import (
    STATUS_PATTERN,
    BreakdownOut,
    CalculateRequest,
    DashboardStats,
    InvoiceCreate,
    InvoiceDetail,
    InvoiceUpdate,
    LineItemOut,
    NextNumberResponse,
    PartyOut,
)
from app.core.config import settings
from app.domain.services.amount_words import amount_in_words
from app.domain.services.gst_calculator import compute_breakdown
from app.domain.services.invoice_numbering import current_period
from app.domain.services.invoice_service import (
    create_invoice as create_invoice_record,
    peek_next_number,
    update_invoice as update_invoice_record,
)
from app.infrastructure.db.models import Invoice
from app.infrastructure.db.repositories.invoice_repository import InvoiceRepository

logger = logging.getLogger("api.v1.invoices")

router = APIRouter(prefix="/invoices", tags=["Invoices"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _party_out(inv: Invoice, role: str) -> PartyOut:
    return PartyOut(
        name=getattr(inv, f"{role}_name"),
        state_name=getattr(inv, f"{role}_state"),
        state_code=getattr(inv, f"{role}_state_code"),
        gstin=getattr(inv, f"{role}_gstin"),
    )


def _invoice_to_detail(inv: Invoice) -> dict:
    """Convert an Invoice ORM object to InvoiceDetail dict."""
    return InvoiceDetail(
        id=str(inv.id),
        invoice_number=inv.invoice_number,
        invoice_date=inv.invoice_date,
        status=inv.status,
        notes=inv.notes,
        seller=_party_out(inv, "seller"),
        buyer=_party_out(inv, "buyer"),
        items=[LineItemOut.model_validate(row) for row in inv.items],
        subtotal=inv.subtotal,
        cgst=inv.cgst,
        sgst=inv.sgst,
        igst=inv.igst,
        round_off=inv.round_off,
        total=inv.total,
        is_intra_state=inv.is_intra_state,
        amount_in_words=amount_in_words(inv.total, settings.CURRENCY_LABEL),
        created_at=inv.created_at,
        updated_at=inv.updated_at,
    ).model_dump(mode="json")


async def _get_or_404(repo: InvoiceRepository, invoice_id: uuid.UUID) -> Invoice:
    inv = await repo.get(invoice_id)
    if not inv:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invoice not found")
    return inv


# ---------------------------------------------------------------------------
# Calculation preview
# ---------------------------------------------------------------------------

@router.post("/calculate", response_model=dict)
async def calculate(body: CalculateRequest):
    """Compute the GST breakdown without saving anything."""
    breakdown = compute_breakdown(
        [item.to_domain() for item in body.items],
        body.seller.to_domain(),
        body.buyer.to_domain(),
    )
    out = BreakdownOut(
        items=[LineItemOut.model_validate(item.model_dump()) for item in breakdown.items],
        subtotal=breakdown.subtotal,
        cgst=breakdown.cgst,
        sgst=breakdown.sgst,
        igst=breakdown.igst,
        round_off=breakdown.round_off,
        total=breakdown.total,
        is_intra_state=breakdown.is_intra_state,
        amount_in_words=amount_in_words(breakdown.total, settings.CURRENCY_LABEL),
    )
    return ok(data=out.model_dump(mode="json"))


@router.get("/next-number", response_model=dict)
async def next_number(repo: InvoiceRepository = Depends(get_invoice_repository)):
    """Advisory preview of the next number; creation allocates under a lock."""
    number = await peek_next_number(repo)
    return ok(data=NextNumberResponse(period=current_period(), invoice_number=number).model_dump())


@router.get("/dashboard/stats", response_model=dict)
async def dashboard_stats(repo: InvoiceRepository = Depends(get_invoice_repository)):
    """Invoice count, total revenue and the five most recent invoices."""
    count, revenue, recent = await repo.dashboard_stats(recent=5)
    stats = DashboardStats(
        total_invoices=count,
        total_revenue=revenue,
        recent_invoices=[_invoice_to_detail(inv) for inv in recent],
    )
    return ok(data=stats.model_dump(mode="json"))


# ---------------------------------------------------------------------------
# CRUD
# ---------------------------------------------------------------------------

@router.get("", response_model=dict)
async def list_invoices(
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    search: str | None = Query(default=None, max_length=20, description="Part of an invoice number"),
    status_filter: str | None = Query(default=None, alias="status", pattern=STATUS_PATTERN),
    repo: InvoiceRepository = Depends(get_invoice_repository),
):
    invoices, total = await repo.list_page(limit=limit, offset=offset, search=search, status=status_filter)
    return paginated(
        items=[_invoice_to_detail(inv) for inv in invoices],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.get("/{invoice_id}", response_model=dict)
async def get_invoice(
    invoice_id: uuid.UUID,
    repo: InvoiceRepository = Depends(get_invoice_repository),
):
    inv = await _get_or_404(repo, invoice_id)
    return ok(data=_invoice_to_detail(inv))


@router.post("", response_model=dict, status_code=status.HTTP_201_CREATED)
async def create_invoice(
    body: InvoiceCreate,
    repo: InvoiceRepository = Depends(get_invoice_repository),
):
    """Create an invoice; the number is allocated for the current month."""
    inv = await create_invoice_record(
        repo,
        items=[item.to_domain() for item in body.items],
        seller=body.seller.to_domain(),
        buyer=body.buyer.to_domain(),
        invoice_date=body.invoice_date,
        notes=body.notes,
    )
    return ok(data=_invoice_to_detail(inv), message="Invoice created")


@router.put("/{invoice_id}", response_model=dict)
async def update_invoice(
    invoice_id: uuid.UUID,
    body: InvoiceUpdate,
    repo: InvoiceRepository = Depends(get_invoice_repository),
):
    inv = await _get_or_404(repo, invoice_id)
    inv = await update_invoice_record(
        repo,
        inv,
        items=[item.to_domain() for item in body.items] if body.items is not None else None,
        seller=body.seller.to_domain() if body.seller else None,
        buyer=body.buyer.to_domain() if body.buyer else None,
        invoice_date=body.invoice_date,
        status=body.status,
        notes=body.notes,
    )
    return ok(data=_invoice_to_detail(inv), message="Invoice updated")


@router.delete("/{invoice_id}", response_model=dict)
async def delete_invoice(
    invoice_id: uuid.UUID,
    repo: InvoiceRepository = Depends(get_invoice_repository),
):
    inv = await _get_or_404(repo, invoice_id)
    await repo.delete(inv)
    await repo.commit()
    logger.info("invoices: deleted %s", inv.invoice_number)
    return ok(message="Invoice deleted")
