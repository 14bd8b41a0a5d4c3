"""
Shared test fixtures for the Currency API.

Provides a fresh rate store per test, an async HTTP client wired to it,
and a small eurofxref feed sample.
"""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from currency_api.schemas.rate import ExchangeRate
from currency_api.services.rate_store import RateStore, get_rate_store


SAMPLE_FEED = b"""<?xml version="1.0" encoding="UTF-8"?>
<gesmes:Envelope xmlns:gesmes="http://www.gesmes.org/xml/2002-08-01" xmlns="http://www.ecb.int/vocabulary/2002-08-01/eurofxref">
    <gesmes:subject>Reference rates</gesmes:subject>
    <gesmes:Sender>
        <gesmes:name>European Central Bank</gesmes:name>
    </gesmes:Sender>
    <Cube>
        <Cube time="2024-01-16">
            <Cube currency="USD" rate="1.0877"/>
            <Cube currency="JPY" rate="160.34"/>
            <Cube currency="XAU" rate="0.00053"/>
            <Cube currency="GBP" rate="0.85945"/>
        </Cube>
        <Cube time="2024-01-15">
            <Cube currency="USD" rate="1.0945"/>
            <Cube currency="JPY" rate="160.12"/>
            <Cube currency="XAU" rate="0.00052"/>
            <Cube currency="GBP" rate="0.85990"/>
        </Cube>
    </Cube>
</gesmes:Envelope>
"""


def _rate(currency: str, rate: str) -> ExchangeRate:
    return ExchangeRate(currency=currency, rate=Decimal(rate))


@pytest.fixture
def make_rate():
    """Factory fixture for ExchangeRate instances."""
    return _rate


@pytest.fixture
def sample_feed():
    return SAMPLE_FEED


@pytest.fixture
def store():
    """Empty rate store, isolated from the module-level one."""
    return RateStore()


@pytest.fixture
def populated_store(store):
    """Store holding 2024-01-15 with USD 1.10 and JPY 160.0."""
    store.merge("2024-01-15", [_rate("USD", "1.10"), _rate("JPY", "160.0")])
    return store


@pytest.fixture
def mock_source(sample_feed):
    """AsyncMock feed source returning the sample feed."""
    source = AsyncMock()
    source.fetch = AsyncMock(return_value=sample_feed)
    return source


@pytest_asyncio.fixture
async def client(populated_store):
    """
    Async HTTP test client with get_rate_store overridden to use the
    populated test store. The lifespan (and so the scheduler) is not run.
    """
    from currency_api.main import app

    app.dependency_overrides[get_rate_store] = lambda: populated_store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
