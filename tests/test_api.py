"""
End-to-end tests of the HTTP surface with mock adapters.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from salon.main import app
from salon.wiring import dependencies


@pytest.fixture()
def client():
    dependencies.get_identity.cache_clear()
    dependencies.get_booking_store.cache_clear()
    dependencies.reset_booking_composer()
    with TestClient(app) as test_client:
        yield test_client
    dependencies.reset_booking_composer()


def _sign_up_and_login(client: TestClient) -> None:
    resp = client.post("/auth/signup", json={"name": "Ana", "email": "ana@example.com", "password": "secret1"})
    assert resp.status_code == 201
    resp = client.post("/auth/login", json={"email": "ana@example.com", "password": "secret1"})
    assert resp.status_code == 200


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_catalog_lists_services_in_order(client):
    data = client.get("/catalog").json()
    assert data["currency"] == "₹"
    assert [s["id"] for s in data["services"]] == ["1", "2", "3", "4", "5"]
    assert data["services"][0]["price"] == 500
    assert data["services"][2]["name"].startswith("Hair Coloring")
    assert data["services"][2]["price"] == 800


def test_toggle_updates_total_and_rejects_unknown(client):
    client.post("/booking/draft/services/1/toggle")
    data = client.post("/booking/draft/services/2/toggle").json()
    assert data["selected_service_ids"] == ["1", "2"]
    assert data["total_price"] == 800
    assert data["can_submit"] is True

    resp = client.post("/booking/draft/services/99/toggle")
    assert resp.status_code == 400
    assert client.get("/booking/draft").json()["total_price"] == 800


def test_padded_service_id_in_path_selects_catalog_id(client):
    data = client.post("/booking/draft/services/%201/toggle").json()
    assert data["selected_service_ids"] == ["1"]
    assert data["total_price"] == 500


def test_date_and_time_compose(client):
    client.put("/booking/draft/time", json={"time": "15:30:00"})
    data = client.put("/booking/draft/date", json={"date": "2099-05-04"}).json()
    assert data["date"] == "2099-05-04"
    assert data["time"] == "03:30 PM"


def test_submit_requires_selection_and_login(client):
    resp = client.post("/booking/submit")
    assert resp.status_code == 400

    client.post("/booking/draft/services/1/toggle")
    resp = client.post("/booking/submit")
    assert resp.status_code == 401
    assert client.get("/booking/draft").json()["selected_service_ids"] == ["1"]


def test_full_booking_then_profile_lists_it(client):
    _sign_up_and_login(client)

    client.put("/booking/draft/date", json={"date": "2099-05-04"})
    client.put("/booking/draft/time", json={"time": "10:00:00"})
    client.post("/booking/draft/services/4/toggle")
    client.post("/booking/draft/services/1/toggle")

    resp = client.post("/booking/submit")
    assert resp.status_code == 200
    confirmation = resp.json()
    assert confirmation["services"] == ["Haircut ✂️", "Scalp Treatment 💆"]
    assert confirmation["total_price"] == 1200
    assert confirmation["date"] == "2099-05-04"
    assert confirmation["time"] == "10:00 AM"

    assert client.get("/booking/draft").json()["selected_service_ids"] == []

    profile = client.get("/profile").json()
    assert profile["name"] == "Ana"
    assert [b["id"] for b in profile["upcoming"]] == [confirmation["booking_id"]]
    assert profile["upcoming"][0]["status"] == "pending"


def test_discarding_draft_starts_fresh(client):
    client.post("/booking/draft/services/1/toggle")
    data = client.delete("/booking/draft").json()
    assert data["selected_service_ids"] == []
    assert data["total_price"] == 0


def test_auth_errors(client):
    resp = client.post("/auth/login", json={"email": "", "password": ""})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Email and password cannot be empty!"

    resp = client.post("/auth/login", json={"email": "nobody@example.com", "password": "secret1"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "No account found with this email!"

    resp = client.post("/auth/signup", json={"name": "Ana", "email": "ana@example.com", "password": "123"})
    assert resp.status_code == 400


def test_profile_requires_login_and_logout_ends_session(client):
    assert client.get("/profile").status_code == 401

    _sign_up_and_login(client)
    assert client.get("/profile").status_code == 200

    assert client.post("/auth/logout").status_code == 204
    assert client.get("/profile").status_code == 401
