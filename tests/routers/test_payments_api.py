"""HTTP-level tests for the payment and production routes."""
from __future__ import annotations

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from conftest import RATES_URL, FlakyConverter, add_production, make_farm, rates_client
from dairy.core.security import AuthenticatedUser, SecurityProvider
from dairy.main import create_app
from dairy.services import CurrencyConverter


@pytest.fixture
def auth_headers(settings) -> dict[str, str]:
    token = SecurityProvider(settings.auth).create_access_token(
        AuthenticatedUser(user_id="a" * 32, email="ops@example.com")
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def client(settings, session_factory, converter):
    app = create_app(settings, session_factory=session_factory, currency_converter=converter)
    with TestClient(app) as test_client:
        yield test_client


def test_requests_without_token_are_rejected(client) -> None:
    response = client.get(f"/payments/{'0' * 32}/price-per-liter", params={"year": 2024, "month": 3})

    assert response.status_code == 401
    assert response.json() == {"error": "Access denied. No token provided."}


def test_requests_with_bad_token_are_rejected(client) -> None:
    response = client.get("/users", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid token."}


def test_health_is_public(client) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_price_per_liter_for_unknown_farm_is_a_message(client, auth_headers) -> None:
    response = client.get(
        f"/payments/{'0' * 32}/price-per-liter",
        params={"year": 2024, "month": 3},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.json() == {"message": "Farm not found"}


def test_price_per_liter_rejects_malformed_farm_id(client, auth_headers) -> None:
    response = client.get(
        "/payments/not-an-id/price-per-liter",
        params={"year": 2024, "month": 3},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid ID format: not-an-id"}


def test_price_per_liter_validates_month(client, auth_headers) -> None:
    response = client.get(
        f"/payments/{'0' * 32}/price-per-liter",
        params={"year": 2024, "month": 13},
        headers=auth_headers,
    )

    assert response.status_code == 422


def test_create_payment_then_read_price(client, auth_headers, session) -> None:
    farm = make_farm(session, distance_km="30")
    add_production(session, farm, datetime(2024, 3, 5), 2500)
    add_production(session, farm, datetime(2024, 3, 6), 2500)

    created = client.post(
        "/payments", json={"farm_id": farm.id, "year": 2024, "month": 3}, headers=auth_headers
    )
    assert created.status_code == 201
    assert created.json()["price_per_liter"] == pytest.approx(0.30)
    assert created.json()["total_payment"] == pytest.approx(1500.0)

    response = client.get(
        f"/payments/{farm.id}/price-per-liter",
        params={"year": 2024, "month": 3},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.json() == {
        "month": 3,
        "price_per_liter": {"BRL": "R$\u00a00,30", "USD": "$0.06"},
        "price_per_liter_amount": {"BRL": "0.30", "USD": "0.06"},
        "total_payment": "1500.00",
        "total_volume_liters": "5000.00",
    }


def test_price_per_liter_without_snapshot_is_a_message(client, auth_headers, session) -> None:
    farm = make_farm(session)

    response = client.get(
        f"/payments/{farm.id}/price-per-liter",
        params={"year": 2024, "month": 3},
        headers=auth_headers,
    )

    assert response.json() == {"message": "No payment data found for this period"}


def test_create_payment_without_production_is_not_found(client, auth_headers, session) -> None:
    farm = make_farm(session)

    response = client.post(
        "/payments", json={"farm_id": farm.id, "year": 2024, "month": 3}, headers=auth_headers
    )

    assert response.status_code == 404
    assert response.json() == {"error": "No milk production data found for this period"}


def test_create_payment_rejects_extra_fields(client, auth_headers, session) -> None:
    farm = make_farm(session)

    response = client.post(
        "/payments",
        json={"farm_id": farm.id, "year": 2024, "month": 3, "price_per_liter": 9},
        headers=auth_headers,
    )

    assert response.status_code == 422


def test_price_per_liter_year_lists_months(client, auth_headers, session) -> None:
    farm = make_farm(session, distance_km="30")
    for month in (2, 8):
        add_production(session, farm, datetime(2024, month, 10), 1000)
        client.post("/payments", json={"farm_id": farm.id, "year": 2024, "month": month}, headers=auth_headers)

    response = client.get(
        f"/payments/{farm.id}/price-per-liter-year", params={"year": 2024}, headers=auth_headers
    )

    assert response.status_code == 200
    body = response.json()
    assert [entry["month"] for entry in body] == [2, 8]
    assert body[1]["price_per_liter"]["BRL"] == "R$\u00a00,45"


def test_price_per_liter_year_conversion_failure_is_bad_gateway(settings, session_factory, session) -> None:
    farm = make_farm(session, distance_km="30")
    add_production(session, farm, datetime(2024, 1, 10), 1000)
    add_production(session, farm, datetime(2024, 2, 10), 1000)
    app = create_app(
        settings,
        session_factory=session_factory,
        currency_converter=FlakyConverter(fail_on_call=2),
    )

    with TestClient(app) as client:
        headers = {
            "Authorization": "Bearer "
            + SecurityProvider(settings.auth).create_access_token(
                AuthenticatedUser(user_id="a" * 32, email="ops@example.com")
            )
        }
        for month in (1, 2):
            client.post("/payments", json={"farm_id": farm.id, "year": 2024, "month": month}, headers=headers)
        response = client.get(
            f"/payments/{farm.id}/price-per-liter-year", params={"year": 2024}, headers=headers
        )

    assert response.status_code == 502
    assert response.json() == {"error": "Currency conversion failed"}


def test_rate_source_outage_is_bad_gateway(settings, session_factory, session) -> None:
    farm = make_farm(session, distance_km="30")
    add_production(session, farm, datetime(2024, 3, 10), 1000)
    converter = CurrencyConverter(RATES_URL, client=rates_client({}, status_code=500))
    app = create_app(settings, session_factory=session_factory, currency_converter=converter)
    token = SecurityProvider(settings.auth).create_access_token(
        AuthenticatedUser(user_id="a" * 32, email="ops@example.com")
    )

    with TestClient(app) as client:
        headers = {"auth": f"Bearer {token}"}
        client.post("/payments", json={"farm_id": farm.id, "year": 2024, "month": 3}, headers=headers)
        response = client.get(
            f"/payments/{farm.id}/price-per-liter", params={"year": 2024, "month": 3}, headers=headers
        )

    assert response.status_code == 502


def test_payment_crud_round(client, auth_headers, session) -> None:
    farm = make_farm(session)
    add_production(session, farm, datetime(2024, 3, 10), 1000)
    payment_id = client.post(
        "/payments", json={"farm_id": farm.id, "year": 2024, "month": 3}, headers=auth_headers
    ).json()["id"]

    patched = client.patch(f"/payments/{payment_id}", json={"total_payment": 42}, headers=auth_headers)
    assert patched.status_code == 200
    assert patched.json()["total_payment"] == pytest.approx(42.0)

    bad_patch = client.patch(f"/payments/{payment_id}", json={"farm_id": farm.id}, headers=auth_headers)
    assert bad_patch.status_code == 422

    deleted = client.delete(f"/payments/{payment_id}", headers=auth_headers)
    assert deleted.json() == {"deleted": {"payments": 1}}

    missing = client.get(f"/payments/{payment_id}", headers=auth_headers)
    assert missing.status_code == 404
    assert missing.json() == {"error": "Payment not found"}


def test_monthly_production_view(client, auth_headers, session) -> None:
    farm = make_farm(session)
    add_production(session, farm, datetime(2024, 2, 1), 100)
    add_production(session, farm, datetime(2024, 2, 29, 23, 59, 59), 201)

    response = client.get(
        f"/milk-productions/{farm.id}", params={"year": 2024, "month": 2}, headers=auth_headers
    )

    assert response.status_code == 200
    body = response.json()
    assert body["totalVolumeLiters"] == "301.00"
    assert body["averageLiters"] == "150.50"
    assert len(body["dailyProductions"]) == 2


def test_monthly_production_without_records_is_a_message(client, auth_headers, session) -> None:
    farm = make_farm(session)

    response = client.get(
        f"/milk-productions/{farm.id}", params={"year": 2024, "month": 2}, headers=auth_headers
    )

    assert response.json() == {"message": "No milk production data found for this period"}
