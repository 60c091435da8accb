from __future__ import annotations

import pytest

ACME = {"name": "Acme", "contactPerson": "J", "email": "j@acme.com", "country": "US", "city": "LA"}


@pytest.mark.asyncio
async def test_export_csv_download(client):
    await client.post("/api/customers", json={**ACME, "tags": ["Luxury", "Commercial"]})

    resp = await client.get("/api/customers/export", params={"format": "csv"})
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert 'filename="customers_' in resp.headers["content-disposition"]
    text = resp.content.decode("utf-8-sig")
    assert text.splitlines()[0].startswith("Customer Name,Country")
    assert '"Luxury, Commercial"' in text


@pytest.mark.asyncio
async def test_export_rejects_unknown_format(client):
    resp = await client.get("/api/customers/export", params={"format": "pdf"})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_import_csv_reports_counts(client):
    content = (
        "Company,Contact,Email,Country,City,type,status\n"
        "Beta,K,k@beta.com,Canada,Toronto,retailer,won\n"
        "Broken,L,,Canada,Toronto,,\n"
    ).encode("utf-8")

    resp = await client.post("/api/customers/import", files={"file": ("customers.csv", content, "text/csv")})
    assert resp.status_code == 200, resp.text
    result = resp.json()
    assert result["imported"] == 1
    assert result["failed"] == 1
    assert result["errors"][0]["row"] == 2

    customers = (await client.get("/api/customers")).json()
    assert [(c["name"], c["customerType"], c["status"]) for c in customers] == [("Beta", "Retailer", "Won")]


@pytest.mark.asyncio
async def test_export_then_import_round_trip(client):
    await client.post("/api/customers", json={**ACME, "status": "Negotiation", "isHotLead": True, "tags": ["Hotel"]})
    exported = await client.get("/api/customers/export", params={"format": "xlsx"})

    resp = await client.post(
        "/api/customers/import",
        files={"file": ("customers.xlsx", exported.content, exported.headers["content-type"])},
    )
    assert resp.json() == {"imported": 1, "failed": 0, "errors": []}

    customers = (await client.get("/api/customers")).json()
    assert len(customers) == 2
    copy = customers[1]
    assert copy["status"] == "Negotiation"
    assert copy["isHotLead"] is True
    assert copy["tags"] == ["Hotel"]


@pytest.mark.asyncio
async def test_unreadable_upload_is_rejected(client):
    resp = await client.post("/api/customers/import", files={"file": ("customers.txt", b"hello", "text/plain")})
    assert resp.status_code == 400
    assert "Unsupported file type" in resp.json()["detail"]
