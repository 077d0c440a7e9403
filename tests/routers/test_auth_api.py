"""Registration, login and farmer routes through the HTTP layer."""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from dairy.main import create_app


@pytest.fixture
def client(settings, session_factory, converter):
    app = create_app(settings, session_factory=session_factory, currency_converter=converter)
    with TestClient(app) as test_client:
        yield test_client


def _login(client) -> dict[str, str]:
    client.post(
        "/auth/register",
        json={"name": "Operator", "email": "ops@example.com", "password": "secret-pass"},
    )
    response = client.post("/auth/login", json={"email": "ops@example.com", "password": "secret-pass"})
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def test_register_and_login(client) -> None:
    registered = client.post(
        "/auth/register",
        json={"name": "Operator", "email": "ops@example.com", "password": "secret-pass"},
    )
    assert registered.status_code == 201
    assert "password_hash" not in registered.json()

    duplicate = client.post(
        "/auth/register",
        json={"name": "Operator", "email": "ops@example.com", "password": "secret-pass"},
    )
    assert duplicate.status_code == 409

    login = client.post("/auth/login", json={"email": "ops@example.com", "password": "secret-pass"})
    assert login.status_code == 200
    assert login.json()["token_type"] == "bearer"
    assert login.json()["expires_in"] == 30 * 60


def test_login_with_wrong_password(client) -> None:
    _login(client)

    response = client.post("/auth/login", json={"email": "ops@example.com", "password": "nope"})

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid credentials"}


def test_users_listing_requires_login(client) -> None:
    headers = _login(client)

    response = client.get("/users", headers=headers)

    assert response.status_code == 200
    assert [user["email"] for user in response.json()] == ["ops@example.com"]


def test_farmer_and_farm_lifecycle(client) -> None:
    headers = _login(client)

    farmer = client.post(
        "/farmers",
        json={"name": "Ana Souza", "email": "ana@example.com", "phone": "+55 31 99999-0001"},
        headers=headers,
    )
    assert farmer.status_code == 201
    farmer_id = farmer.json()["id"]

    farm = client.post(
        "/farms",
        json={
            "farmer_id": farmer_id,
            "name": "Sitio Boa Vista",
            "location": {"lat": -19.92, "lng": -43.94},
            "distance_to_factory_km": 30,
        },
        headers=headers,
    )
    assert farm.status_code == 201
    assert farm.json()["location"] == {"lat": -19.92, "lng": -43.94}

    detail = client.get(f"/farmers/{farmer_id}", headers=headers)
    assert [item["id"] for item in detail.json()["farms"]] == [farm.json()["id"]]

    deleted = client.delete(f"/farmers/{farmer_id}", headers=headers)
    assert deleted.json() == {
        "deleted": {"farmer": 1, "farms": 1, "milk_production": 0, "payments": 0}
    }

    missing = client.get(f"/farms/{farm.json()['id']}", headers=headers)
    assert missing.status_code == 404
    assert missing.json() == {"error": "Farm not found"}
