"""Create invoices and invoice_items

Revision ID: 3f2a9c1d7e4b
Revises:
Create Date: 2026-10-19 10:12:41.208113

"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = "3f2a9c1d7e4b"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "invoices",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("invoice_number", sa.String(20), nullable=False),
        sa.Column("invoice_date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="draft"),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("seller_name", sa.String(200), nullable=True),
        sa.Column("seller_state", sa.String(100), nullable=True),
        sa.Column("seller_state_code", sa.String(2), nullable=True),
        sa.Column("seller_gstin", sa.String(15), nullable=True),
        sa.Column("buyer_name", sa.String(200), nullable=True),
        sa.Column("buyer_state", sa.String(100), nullable=True),
        sa.Column("buyer_state_code", sa.String(2), nullable=True),
        sa.Column("buyer_gstin", sa.String(15), nullable=True),
        sa.Column("subtotal", sa.Numeric(14, 2), nullable=False),
        sa.Column("cgst", sa.Numeric(14, 2), nullable=False),
        sa.Column("sgst", sa.Numeric(14, 2), nullable=False),
        sa.Column("igst", sa.Numeric(14, 2), nullable=False),
        sa.Column("round_off", sa.Numeric(6, 2), nullable=False),
        sa.Column("total", sa.Numeric(14, 0), nullable=False),
        sa.Column("is_intra_state", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP")),
    )
    op.create_index("ix_invoices_invoice_number", "invoices", ["invoice_number"], unique=True)

    op.create_table(
        "invoice_items",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "invoice_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("invoices.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("product_id", sa.String(64), nullable=True),
        sa.Column("description", sa.String(500), nullable=False, server_default=""),
        sa.Column("hsn_code", sa.String(8), nullable=True),
        sa.Column("quantity", sa.Numeric(), nullable=False),
        sa.Column("unit", sa.String(10), nullable=False, server_default="NOS"),
        sa.Column("rate", sa.Numeric(), nullable=False),
        sa.Column("gst_rate", sa.Numeric(), nullable=False),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("gst_amount", sa.Numeric(14, 2), nullable=False),
    )
    op.create_index("ix_invoice_items_invoice_id", "invoice_items", ["invoice_id"])


def downgrade() -> None:
    op.drop_index("ix_invoice_items_invoice_id", table_name="invoice_items")
    op.drop_table("invoice_items")
    op.drop_index("ix_invoices_invoice_number", table_name="invoices")
    op.drop_table("invoices")
