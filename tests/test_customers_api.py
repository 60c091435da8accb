from __future__ import annotations

import pytest

from surfacecrm.core.config import settings

ACME = {
    "name": "Acme",
    "country": "US",
    "city": "LA",
    "contactPerson": "J",
    "email": "j@acme.com",
    "customerType": "Retailer",
    "status": "Lead",
    "priority": "High",
}


@pytest.mark.asyncio
async def test_create_customer_returns_defaults(client):
    resp = await client.post("/api/customers", json=ACME)
    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["id"]
    assert body["status"] == "Lead"
    assert body["tags"] == []
    assert body["valueTier"] == "Standard"
    assert body["contactPerson"] == "J"
    assert body["isHotLead"] is False


@pytest.mark.asyncio
async def test_create_accepts_snake_case_too(client):
    payload = {**ACME, "contact_person": "Jane"}
    del payload["contactPerson"]
    resp = await client.post("/api/customers", json=payload)
    assert resp.status_code == 201
    assert resp.json()["contactPerson"] == "Jane"


@pytest.mark.asyncio
async def test_create_rejects_missing_required_fields(client):
    resp = await client.post("/api/customers", json={"name": "Acme", "email": "not-an-email"})
    assert resp.status_code == 400
    body = resp.json()
    assert body["detail"] == "Validation failed"
    fields = {e["field"] for e in body["errors"]}
    assert {"email", "country", "city", "contactPerson"} <= fields


@pytest.mark.asyncio
async def test_create_rejects_bad_enum_and_date(client):
    resp = await client.post("/api/customers", json={**ACME, "status": "Maybe", "nextFollowUpDate": "soon"})
    assert resp.status_code == 400
    fields = {e["field"] for e in resp.json()["errors"]}
    assert {"status", "nextFollowUpDate"} <= fields


@pytest.mark.asyncio
async def test_get_update_and_delete(client):
    created = (await client.post("/api/customers", json=ACME)).json()
    url = f"/api/customers/{created['id']}"

    resp = await client.get(url)
    assert resp.status_code == 200
    assert resp.json()["name"] == "Acme"

    resp = await client.patch(url, json={"status": "Won", "nextFollowUpDate": "2024-06-01T10:00:00"})
    assert resp.status_code == 200
    assert resp.json()["status"] == "Won"
    assert resp.json()["nextFollowUpDate"] == "2024-06-01"
    assert resp.json()["priority"] == "High"

    resp = await client.put(url, json={**ACME, "name": "Acme Renamed"})
    assert resp.status_code == 200
    assert resp.json()["name"] == "Acme Renamed"
    assert resp.json()["status"] == "Lead"

    resp = await client.delete(url)
    assert resp.status_code == 204

    resp = await client.get(url)
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Customer not found"

    resp = await client.delete(url)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_list_filters_and_sorting(client):
    for name, status, country in [
        ("w1", "Won", "Canada"),
        ("l1", "Lead", "Japan"),
        ("w2", "Won", "Japan"),
        ("l2", "Lead", "Canada"),
        ("w3", "Won", "Canada"),
    ]:
        resp = await client.post("/api/customers", json={**ACME, "name": name, "status": status, "country": country})
        assert resp.status_code == 201

    resp = await client.get("/api/customers", params={"status": "Won"})
    assert [c["name"] for c in resp.json()] == ["w1", "w2", "w3"]

    resp = await client.get("/api/customers", params={"status": "Won", "country": "Canada"})
    assert [c["name"] for c in resp.json()] == ["w1", "w3"]

    resp = await client.get("/api/customers", params={"search": "L"})
    assert [c["name"] for c in resp.json()] == ["l1", "l2"]

    resp = await client.get("/api/customers", params={"sort": "name", "order": "desc"})
    assert [c["name"] for c in resp.json()] == ["w3", "w2", "w1", "l2", "l1"]

    resp = await client.get("/api/customers", params={"sort": "email_hash"})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_toggles_and_activity_feed(client):
    created = (await client.post("/api/customers", json=ACME)).json()
    url = f"/api/customers/{created['id']}"

    resp = await client.patch(f"{url}/toggle-hot-lead")
    assert resp.status_code == 200
    assert resp.json()["isHotLead"] is True

    resp = await client.post(f"{url}/toggle-pinned")
    assert resp.json()["isPinned"] is True

    resp = await client.get("/api/customers/needs-attention")
    assert [c["id"] for c in resp.json()] == [created["id"]]

    resp = await client.get(f"{url}/activity-logs")
    actions = sorted(e["action"] for e in resp.json())
    assert actions == ["Customer Pinned", "Hot Lead Added"]

    resp = await client.get("/api/activity-logs", params={"limit": 1})
    feed = resp.json()
    assert len(feed) == 1
    assert feed[0]["customerName"] == "Acme"

    resp = await client.patch("/api/customers/missing/toggle-hot-lead")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_activity_feed_returns_everything_without_limit(client, monkeypatch):
    monkeypatch.setattr(settings, "activity_feed_limit", 1)
    created = (await client.post("/api/customers", json=ACME)).json()
    url = f"/api/customers/{created['id']}"

    await client.patch(f"{url}/toggle-hot-lead")
    await client.patch(f"{url}/toggle-pinned")
    await client.patch(f"{url}/toggle-hot-lead")

    resp = await client.get("/api/activity-logs")
    assert len(resp.json()) == 3

    resp = await client.get("/api/activity-logs", params={"limit": 2})
    assert len(resp.json()) == 2
