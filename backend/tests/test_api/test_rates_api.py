"""Tests for rates API endpoints."""

from __future__ import annotations


def test_current_is_null_before_first_submission(client):
    response = client.get("/api/v1/rates/current")
    assert response.status_code == 200
    assert response.json() is None


def test_post_creates_current_quote(client, rate_payload):
    first = client.post("/api/v1/rates/", json=rate_payload)
    assert first.status_code == 201
    second = client.post("/api/v1/rates/", json=dict(rate_payload, gold_24k_sale=73000))
    assert second.status_code == 201

    current = client.get("/api/v1/rates/current").json()
    assert current["id"] == second.json()["id"]
    assert current["gold_24k_sale"] == 73000
    assert current["is_active"] is True


def test_post_rejects_negative_rate(client, rate_payload):
    response = client.post("/api/v1/rates/", json=dict(rate_payload, gold_18k_sale=-10))
    assert response.status_code == 422
    assert client.get("/api/v1/rates/current").json() is None


def test_put_updates_in_place(client, rate_payload):
    created = client.post("/api/v1/rates/", json=rate_payload).json()
    response = client.put(f"/api/v1/rates/{created['id']}", json={"gold_22k_sale": 66000})
    assert response.status_code == 200
    assert response.json()["gold_22k_sale"] == 66000
    assert response.json()["is_active"] is True


def test_put_unknown_returns_404(client):
    response = client.put("/api/v1/rates/77", json={"gold_22k_sale": 1})
    assert response.status_code == 404
