from __future__ import annotations

import pytest


@pytest.fixture
async def customer_id(client):
    resp = await client.post(
        "/api/customers",
        json={"name": "Acme", "contactPerson": "J", "email": "j@acme.com", "country": "US", "city": "LA"},
    )
    return resp.json()["id"]


@pytest.mark.asyncio
async def test_note_lifecycle(client, customer_id):
    resp = await client.post(
        f"/api/customers/{customer_id}/notes",
        json={"text": "Initial meeting", "nextStep": "Send catalog", "images": ["data:image/png;base64,AAAA"]},
    )
    assert resp.status_code == 201, resp.text
    note = resp.json()
    assert note["customerId"] == customer_id
    assert note["isKey"] is False
    assert note["images"] == ["data:image/png;base64,AAAA"]

    resp = await client.patch(f"/api/notes/{note['id']}/toggle-key")
    assert resp.json()["isKey"] is True

    resp = await client.put(f"/api/notes/{note['id']}", json={"text": "Initial meeting (edited)", "isKey": True})
    assert resp.status_code == 200
    assert resp.json()["text"] == "Initial meeting (edited)"
    assert resp.json()["nextStep"] == ""

    resp = await client.get(f"/api/customers/{customer_id}/notes")
    assert [n["id"] for n in resp.json()] == [note["id"]]

    resp = await client.delete(f"/api/notes/{note['id']}")
    assert resp.status_code == 204
    resp = await client.get(f"/api/notes/{note['id']}")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Note not found"


@pytest.mark.asyncio
async def test_note_needs_text_and_customer(client, customer_id):
    resp = await client.post(f"/api/customers/{customer_id}/notes", json={"text": "   "})
    assert resp.status_code == 400

    resp = await client.post("/api/customers/missing/notes", json={"text": "hello"})
    assert resp.status_code == 404

    resp = await client.get("/api/customers/missing/notes")
    assert resp.status_code == 404
