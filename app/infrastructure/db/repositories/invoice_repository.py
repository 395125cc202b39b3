# app/infrastructure/db/repositories/invoice_repository.py
"""Repository for Invoice rows and the per-period numbering lookup."""

from __future__ import annotations

import uuid
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.db.models import Invoice, InvoiceItem


class InvoiceRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    # ---------- numbering ----------

    async def lock_period(self, period: str) -> None:
        """
        Take a transaction-scoped advisory lock for ``period``.

        Held until the surrounding transaction commits or rolls back, so
        concurrent creators in the same month allocate one after another.
        """
        key = f"invoice-number:{period}"
        await self.db.execute(select(func.pg_advisory_xact_lock(func.hashtext(key))))

    async def latest_number_for_period(self, period: str) -> str | None:
        """
        Greatest invoice number issued in ``period`` (``YYYYMM``), or None.

        Ordered by length first so ``YYYYMM-1000`` ranks above ``YYYYMM-999``.
        """
        stmt = (
            select(Invoice.invoice_number)
            .where(Invoice.invoice_number.like(f"{period}-%"))
            .order_by(
                func.length(Invoice.invoice_number).desc(),
                Invoice.invoice_number.desc(),
            )
            .limit(1)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    # ---------- CRUD ----------

    async def add(self, invoice: Invoice) -> Invoice:
        self.db.add(invoice)
        await self.db.flush()
        return invoice

    async def get(self, invoice_id: uuid.UUID) -> Invoice | None:
        result = await self.db.execute(select(Invoice).where(Invoice.id == invoice_id))
        return result.scalar_one_or_none()

    async def list_page(
        self,
        limit: int = 20,
        offset: int = 0,
        search: str | None = None,
        status: str | None = None,
    ) -> tuple[list[Invoice], int]:
        """
        Return one page of invoices (newest first) plus the filtered count.

        ``search`` matches anywhere in the invoice number, case-insensitively.
        """
        filters = []
        if search:
            filters.append(Invoice.invoice_number.ilike(f"%{search.strip()}%"))
        if status:
            filters.append(Invoice.status == status)

        count_stmt = select(func.count()).select_from(Invoice).where(*filters)
        total = (await self.db.execute(count_stmt)).scalar() or 0

        stmt = (
            select(Invoice)
            .where(*filters)
            .order_by(Invoice.invoice_date.desc(), Invoice.invoice_number.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all()), total

    async def dashboard_stats(self, recent: int = 5) -> tuple[int, Decimal, list[Invoice]]:
        """Invoice count, revenue (sum of totals) and the most recent invoices."""
        count, revenue = (
            await self.db.execute(
                select(func.count(Invoice.id), func.coalesce(func.sum(Invoice.total), 0))
            )
        ).one()

        stmt = (
            select(Invoice)
            .order_by(Invoice.invoice_date.desc(), Invoice.invoice_number.desc())
            .limit(recent)
        )
        result = await self.db.execute(stmt)
        return count or 0, Decimal(str(revenue)), list(result.scalars().all())

    async def replace_items(self, invoice: Invoice, items: list[InvoiceItem]) -> None:
        """Swap the invoice lines; the delete-orphan cascade removes the old rows."""
        invoice.items = items
        await self.db.flush()

    async def delete(self, invoice: Invoice) -> None:
        await self.db.delete(invoice)

    async def commit(self) -> None:
        await self.db.commit()

    async def rollback(self) -> None:
        await self.db.rollback()

    async def refresh(self, invoice: Invoice) -> None:
        await self.db.refresh(invoice)
