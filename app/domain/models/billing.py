from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class LineItem(BaseModel):
    """One invoice line as supplied by the caller (tax-exclusive rate)."""

    product_id: Optional[str] = None
    description: str = ""
    hsn_code: str = ""
    quantity: Decimal
    unit: str = "NOS"
    rate: Decimal
    gst_rate: Decimal = Field(default=Decimal("0"))


class ComputedLineItem(LineItem):
    amount: Decimal
    gst_amount: Decimal


class JurisdictionInfo(BaseModel):
    """State signals for one party. Only used to decide intra/inter-state."""

    state_name: Optional[str] = None
    state_code: Optional[str] = None
    tax_id: Optional[str] = None

    def is_empty(self) -> bool:
        return not any(
            (value or "").strip()
            for value in (self.state_name, self.state_code, self.tax_id)
        )


class GSTBreakdown(BaseModel):
    items: list[ComputedLineItem] = Field(default_factory=list)
    subtotal: Decimal = Field(default=Decimal("0.00"))
    cgst: Decimal = Field(default=Decimal("0.00"))
    sgst: Decimal = Field(default=Decimal("0.00"))
    igst: Decimal = Field(default=Decimal("0.00"))
    round_off: Decimal = Field(default=Decimal("0.00"))
    total: Decimal = Field(default=Decimal("0"))
    is_intra_state: bool = False

    @property
    def total_tax(self) -> Decimal:
        return self.cgst + self.sgst + self.igst


class PartyInfo(JurisdictionInfo):
    """A seller or buyer on a persisted invoice."""

    name: Optional[str] = None
