"""Shared test fixtures for the GST billing test suite."""

import asyncio
from decimal import Decimal

import pytest

from app.domain.models.billing import JurisdictionInfo, LineItem, PartyInfo


@pytest.fixture(scope="session")
def event_loop():
    """Use a single event loop for the entire test session."""
    loop = asyncio.new_event_loop()
    yield loop
    loop.close()


@pytest.fixture
def single_item() -> list[LineItem]:
    """One line: 1 x Rs 100 at 18% GST."""
    return [
        LineItem(
            description="Test Item",
            hsn_code="123",
            quantity=Decimal("1"),
            rate=Decimal("100"),
            gst_rate=Decimal("18"),
        )
    ]


@pytest.fixture
def puducherry() -> JurisdictionInfo:
    return JurisdictionInfo(state_name="Puducherry", state_code="34", tax_id="34AABCU9603R1ZM")


@pytest.fixture
def tamil_nadu() -> JurisdictionInfo:
    return JurisdictionInfo(state_name="Tamil Nadu", state_code="33", tax_id="33AADCB2230M1ZP")


@pytest.fixture
def seller_party() -> PartyInfo:
    return PartyInfo(name="ABC Traders", state_name="Puducherry", state_code="34", tax_id="34AABCU9603R1ZM")


@pytest.fixture
def buyer_party() -> PartyInfo:
    return PartyInfo(name="XYZ Enterprises", state_name="Tamil Nadu", state_code="33", tax_id="33AADCB2230M1ZP")
