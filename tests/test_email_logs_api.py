from __future__ import annotations

import pytest


@pytest.mark.asyncio
async def test_logging_an_email_records_activity(client):
    customer = (
        await client.post(
            "/api/customers",
            json={"name": "Acme", "contactPerson": "J", "email": "j@acme.com", "country": "US", "city": "LA"},
        )
    ).json()

    resp = await client.post(
        f"/api/customers/{customer['id']}/email-logs",
        json={"subject": "Marble samples", "content": "Shipping Monday", "sentBy": "sales"},
    )
    assert resp.status_code == 201, resp.text
    email = resp.json()
    assert email["subject"] == "Marble samples"
    assert email["sentBy"] == "sales"

    resp = await client.get(f"/api/customers/{customer['id']}/email-logs")
    assert [e["id"] for e in resp.json()] == [email["id"]]

    resp = await client.get(f"/api/customers/{customer['id']}/activity-logs")
    entries = resp.json()
    assert [e["action"] for e in entries] == ["Email Logged"]
    assert entries[0]["description"] == 'Email "Marble samples" was logged'

    resp = await client.delete(f"/api/email-logs/{email['id']}")
    assert resp.status_code == 204
    resp = await client.delete(f"/api/email-logs/{email['id']}")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Email log not found"


@pytest.mark.asyncio
async def test_summary_is_accepted_as_content(client):
    customer = (
        await client.post(
            "/api/customers",
            json={"name": "Acme", "contactPerson": "J", "email": "j@acme.com", "country": "US", "city": "LA"},
        )
    ).json()

    resp = await client.post(
        f"/api/customers/{customer['id']}/email-logs",
        json={"subject": "Quote", "summary": "Sent the quote"},
    )
    assert resp.status_code == 201
    assert resp.json()["content"] == "Sent the quote"


@pytest.mark.asyncio
async def test_email_log_for_unknown_customer(client):
    resp = await client.post("/api/customers/missing/email-logs", json={"subject": "x", "content": "y"})
    assert resp.status_code == 404
