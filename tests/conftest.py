"""Shared fixtures: an in-memory database and fake rate sources."""
from __future__ import annotations

import sys
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from uuid import uuid4

import httpx
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from dairy.core.config import AuthSettings, CurrencySettings, DatabaseSettings, Settings  # noqa: E402
from dairy.core.errors import ConversionFailure  # noqa: E402
from dairy.core.log import init_logging  # noqa: E402
from dairy.db import create_sync_engine, get_sessionmaker, init_db  # noqa: E402
from dairy.models import Farm, MilkProduction  # noqa: E402
from dairy.repositories import FarmerRepository, FarmRepository, ProductionRepository  # noqa: E402
from dairy.services import CurrencyConverter  # noqa: E402

TEST_SECRET = "test-secret-key-with-enough-bytes-for-hs256"
RATES_URL = "https://rates.test/v6/latest"


@pytest.fixture(autouse=True, scope="session")
def quiet_logging():
    init_logging("WARNING", rich_tracebacks=False)
    yield


@pytest.fixture
def engine():
    engine = create_sync_engine("sqlite:///:memory:")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return get_sessionmaker(engine=engine)


@pytest.fixture
def session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        database=DatabaseSettings(
            driver="sqlite", host="", port=0, user="", password="", name=":memory:"
        ),
        auth=AuthSettings(secret_key=TEST_SECRET, algorithm="HS256", access_token_expire_minutes=30),
        currency=CurrencySettings(rates_base_url=RATES_URL, timeout_seconds=1.0),
        log_level="WARNING",
        log_dir=None,
    )


def rates_client(rates: dict[str, object], *, status_code: int = 200) -> httpx.AsyncClient:
    """An ``AsyncClient`` answering every rate request with ``rates``."""

    def handler(request: httpx.Request) -> httpx.Response:
        base = request.url.path.rsplit("/", 1)[-1]
        return httpx.Response(status_code, json={"result": "success", "base_code": base, "rates": rates})

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def converter() -> CurrencyConverter:
    return CurrencyConverter(RATES_URL, client=rates_client({"BRL": 1, "USD": 0.2}))


class FlakyConverter:
    """Converter double that fails on the n-th call and records every amount."""

    def __init__(self, rate: Decimal = Decimal("0.2"), *, fail_on_call: int | None = None) -> None:
        self.rate = rate
        self.fail_on_call = fail_on_call
        self.calls: list[Decimal] = []
        self.closed = False

    async def convert(self, amount, from_currency="BRL", to_currency="USD") -> Decimal:
        self.calls.append(amount)
        if self.fail_on_call is not None and len(self.calls) == self.fail_on_call:
            raise ConversionFailure(from_currency, to_currency, "rate source unavailable")
        return Decimal(amount) * self.rate

    async def aclose(self) -> None:
        self.closed = True


def make_farm(session, *, distance_km: float | str = "30", email: str | None = None) -> Farm:
    farmer = FarmerRepository(session).create_farmer(
        {
            "name": "Ana Souza",
            "email": email or f"farmer-{uuid4().hex[:12]}@example.com",
            "phone": "+55 31 99999-0001",
        }
    )
    return FarmRepository(session).create_farm(
        {
            "farmer_id": farmer.id,
            "name": "Sitio Boa Vista",
            "location_lat": -19.92,
            "location_lng": -43.94,
            "distance_to_factory_km": Decimal(str(distance_km)),
        }
    )


def add_production(session, farm: Farm, when: datetime, volume: str | int) -> MilkProduction:
    return ProductionRepository(session).create_production(
        {
            "farm_id": farm.id,
            "farmer_id": farm.farmer_id,
            "date": when,
            "volume_liters": Decimal(str(volume)),
        }
    )
