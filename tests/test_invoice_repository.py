# tests/test_invoice_repository.py
"""InvoiceRepository against a real (in-memory sqlite) database."""

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.domain.models.billing import LineItem, PartyInfo
from app.domain.services.invoice_service import create_invoice, update_invoice
from app.infrastructure.db.base import Base
from app.infrastructure.db.models import Invoice
from app.infrastructure.db.repositories.invoice_repository import InvoiceRepository


class SqliteInvoiceRepository(InvoiceRepository):
    """sqlite has no advisory locks; a single connection is already serial."""

    async def lock_period(self, period):
        return None


@pytest.fixture
def session_factory(event_loop):
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)

    async def _create():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    event_loop.run_until_complete(_create())
    yield async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    event_loop.run_until_complete(engine.dispose())


def _with_repo(event_loop, session_factory, work):
    async def _go():
        async with session_factory() as session:
            return await work(SqliteInvoiceRepository(session))

    return event_loop.run_until_complete(_go())


def _invoice(number, *, status="draft", total="118", invoice_date=date(2025, 1, 15)):
    return Invoice(
        invoice_number=number,
        invoice_date=invoice_date,
        status=status,
        subtotal=Decimal("100.00"),
        cgst=Decimal("0.00"),
        sgst=Decimal("0.00"),
        igst=Decimal("18.00"),
        round_off=Decimal("0.00"),
        total=Decimal(total),
        is_intra_state=False,
    )


def _seed(event_loop, session_factory, invoices):
    async def work(repo):
        for inv in invoices:
            await repo.add(inv)
        await repo.commit()

    _with_repo(event_loop, session_factory, work)


class TestLatestNumber:
    def test_four_digit_sequence_ranks_above_three(self, event_loop, session_factory):
        _seed(event_loop, session_factory, [
            _invoice("202501-998"),
            _invoice("202501-1000"),
            _invoice("202501-999"),
            _invoice("202502-005"),
            _invoice("202412-2000"),
        ])

        async def work(repo):
            return await repo.latest_number_for_period("202501")

        assert _with_repo(event_loop, session_factory, work) == "202501-1000"

    def test_other_periods_ignored(self, event_loop, session_factory):
        _seed(event_loop, session_factory, [_invoice("202412-2000"), _invoice("202502-005")])

        async def work(repo):
            return (
                await repo.latest_number_for_period("202501"),
                await repo.latest_number_for_period("202502"),
            )

        assert _with_repo(event_loop, session_factory, work) == (None, "202502-005")


class TestListPage:
    @pytest.fixture(autouse=True)
    def seeded(self, event_loop, session_factory):
        _seed(event_loop, session_factory, [
            _invoice("202501-001"),
            _invoice("202501-002", status="issued"),
            _invoice("202502-001", status="issued", invoice_date=date(2025, 2, 3)),
        ])

    def _page(self, event_loop, session_factory, **kwargs):
        async def work(repo):
            rows, total = await repo.list_page(**kwargs)
            return [row.invoice_number for row in rows], total

        return _with_repo(event_loop, session_factory, work)

    def test_unfiltered_newest_first(self, event_loop, session_factory):
        numbers, total = self._page(event_loop, session_factory)
        assert total == 3
        assert numbers == ["202502-001", "202501-002", "202501-001"]

    def test_search_matches_part_of_number(self, event_loop, session_factory):
        numbers, total = self._page(event_loop, session_factory, search="202501")
        assert total == 2
        assert numbers == ["202501-002", "202501-001"]

    def test_status_filter(self, event_loop, session_factory):
        numbers, total = self._page(event_loop, session_factory, status="issued")
        assert total == 2
        assert numbers == ["202502-001", "202501-002"]

    def test_search_and_status_combined(self, event_loop, session_factory):
        numbers, total = self._page(event_loop, session_factory, search="202501-", status="issued", limit=1)
        assert total == 1
        assert numbers == ["202501-002"]


def test_dashboard_stats(event_loop, session_factory):
    _seed(event_loop, session_factory, [
        _invoice(f"202501-{n:03d}", total="100", invoice_date=date(2025, 1, n)) for n in range(1, 8)
    ])

    async def work(repo):
        count, revenue, recent = await repo.dashboard_stats(recent=5)
        return count, revenue, [inv.invoice_number for inv in recent]

    count, revenue, recent = _with_repo(event_loop, session_factory, work)
    assert count == 7
    assert revenue == Decimal("700")
    assert recent == ["202501-007", "202501-006", "202501-005", "202501-004", "202501-003"]


def test_dashboard_stats_empty(event_loop, session_factory):
    async def work(repo):
        return await repo.dashboard_stats()

    assert _with_repo(event_loop, session_factory, work) == (0, Decimal("0"), [])


def test_update_after_reload_keeps_subtotal(event_loop, session_factory, seller_party):
    items = [LineItem(description="Wire", quantity=Decimal("100"), rate=Decimal("10.004"), gst_rate=Decimal("18"))]
    buyer = PartyInfo(name="A", state_code="33")

    async def create(repo):
        inv = await create_invoice(repo, items=items, seller=seller_party, buyer=buyer, today=date(2025, 1, 15))
        return inv.id

    invoice_id = _with_repo(event_loop, session_factory, create)

    async def rename_buyer(repo):
        inv = await repo.get(invoice_id)
        stored = (inv.items[0].rate, inv.items[0].quantity, inv.items[0].amount)
        inv = await update_invoice(repo, inv, buyer=PartyInfo(name="B", state_code="33"))
        return stored, inv.subtotal, inv.buyer_name

    (rate, quantity, amount), subtotal, buyer_name = _with_repo(event_loop, session_factory, rename_buyer)

    assert rate == Decimal("10.004")
    assert amount == Decimal("1000.40")
    assert rate * quantity == amount
    assert subtotal == Decimal("1000.40")
    assert buyer_name == "B"
