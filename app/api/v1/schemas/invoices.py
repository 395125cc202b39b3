# app/api/v1/schemas/invoices.py
"""Request and response schemas for invoice endpoints."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from app.domain.models.billing import LineItem, PartyInfo

STATUS_PATTERN = "^(draft|issued|paid|cancelled)$"


class LineItemIn(BaseModel):
    """One invoice line. ``amount`` / ``gst_amount`` are always computed server-side."""

    product_id: str | None = Field(default=None, max_length=64)
    description: str = Field(default="", max_length=500)
    hsn_code: str = Field(default="", max_length=8)
    quantity: Decimal
    unit: str = Field(default="NOS", max_length=10)
    rate: Decimal
    gst_rate: Decimal = Decimal("0")

    def to_domain(self) -> LineItem:
        return LineItem(**self.model_dump())


class PartyIn(BaseModel):
    name: str | None = Field(default=None, max_length=200)
    state_name: str | None = Field(default=None, max_length=100)
    state_code: str | None = Field(default=None, max_length=2)
    gstin: str | None = Field(default=None, max_length=15)

    def to_domain(self) -> PartyInfo:
        return PartyInfo(
            name=self.name,
            state_name=self.state_name,
            state_code=self.state_code,
            tax_id=self.gstin,
        )


class CalculateRequest(BaseModel):
    """Stateless breakdown preview."""

    items: list[LineItemIn]
    seller: PartyIn
    buyer: PartyIn


class InvoiceCreate(CalculateRequest):
    invoice_date: date | None = None
    notes: str | None = None


class InvoiceUpdate(BaseModel):
    """Any omitted field keeps its stored value; the number never changes."""

    items: list[LineItemIn] | None = None
    seller: PartyIn | None = None
    buyer: PartyIn | None = None
    invoice_date: date | None = None
    status: str | None = Field(default=None, pattern=STATUS_PATTERN)
    notes: str | None = None


class LineItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    product_id: str | None
    description: str
    hsn_code: str | None
    quantity: Decimal
    unit: str
    rate: Decimal
    gst_rate: Decimal
    amount: Decimal
    gst_amount: Decimal


class BreakdownOut(BaseModel):
    items: list[LineItemOut]
    subtotal: Decimal
    cgst: Decimal
    sgst: Decimal
    igst: Decimal
    round_off: Decimal
    total: Decimal
    is_intra_state: bool
    amount_in_words: str


class PartyOut(BaseModel):
    name: str | None
    state_name: str | None
    state_code: str | None
    gstin: str | None


class InvoiceDetail(BaseModel):
    """Full invoice detail returned in responses."""

    id: str
    invoice_number: str
    invoice_date: date
    status: str
    notes: str | None

    seller: PartyOut
    buyer: PartyOut
    items: list[LineItemOut]

    subtotal: Decimal
    cgst: Decimal
    sgst: Decimal
    igst: Decimal
    round_off: Decimal
    total: Decimal
    is_intra_state: bool
    amount_in_words: str

    created_at: datetime | None
    updated_at: datetime | None


class NextNumberResponse(BaseModel):
    period: str
    invoice_number: str


class DashboardStats(BaseModel):
    total_invoices: int
    total_revenue: Decimal
    recent_invoices: list[InvoiceDetail]
