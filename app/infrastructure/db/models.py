import uuid

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from app.infrastructure.db.base import Base


class Invoice(Base):
    __tablename__ = "invoices"
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    invoice_number = Column(String(20), unique=True, nullable=False, index=True)
    invoice_date = Column(Date, nullable=False)
    status = Column(String(20), nullable=False, default="draft")
    notes = Column(Text)

    # Seller / buyer snapshot at invoicing time
    seller_name = Column(String(200))
    seller_state = Column(String(100))
    seller_state_code = Column(String(2))
    seller_gstin = Column(String(15))
    buyer_name = Column(String(200))
    buyer_state = Column(String(100))
    buyer_state_code = Column(String(2))
    buyer_gstin = Column(String(15))

    # Computed breakdown
    subtotal = Column(Numeric(14, 2), nullable=False)
    cgst = Column(Numeric(14, 2), nullable=False)
    sgst = Column(Numeric(14, 2), nullable=False)
    igst = Column(Numeric(14, 2), nullable=False)
    round_off = Column(Numeric(6, 2), nullable=False)
    total = Column(Numeric(14, 0), nullable=False)
    is_intra_state = Column(Boolean, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"))
    updated_at = Column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=text("CURRENT_TIMESTAMP"),
    )

    items = relationship(
        "InvoiceItem",
        back_populates="invoice",
        cascade="all, delete-orphan",
        order_by="InvoiceItem.position",
        lazy="selectin",
    )


class InvoiceItem(Base):
    __tablename__ = "invoice_items"
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    invoice_id = Column(UUID(as_uuid=True), ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    product_id = Column(String(64))
    description = Column(String(500), nullable=False, default="")
    hsn_code = Column(String(8))
    # unscaled: inputs are stored exactly as supplied
    quantity = Column(Numeric, nullable=False)
    unit = Column(String(10), nullable=False, default="NOS")
    rate = Column(Numeric, nullable=False)
    gst_rate = Column(Numeric, nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)
    gst_amount = Column(Numeric(14, 2), nullable=False)

    invoice = relationship("Invoice", back_populates="items")
