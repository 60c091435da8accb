from __future__ import annotations

import pytest
from sqlalchemy.exc import OperationalError

from surfacecrm.core.errors import StorageUnavailableError
from surfacecrm.services import customer_service, import_mapper


def _down(*args, **kwargs):
    raise OperationalError("SELECT 1", {}, Exception("connection refused"))


@pytest.mark.asyncio
async def test_unreachable_database_is_503(client, monkeypatch):
    monkeypatch.setattr(customer_service, "list_customers", _down)

    resp = await client.get("/api/customers")

    assert resp.status_code == 503
    assert resp.json() == {"detail": "Storage unavailable"}


def test_import_aborts_when_database_goes_away(db, monkeypatch):
    monkeypatch.setattr(customer_service, "create_customer", _down)
    rows = [{"name": "Beta", "contact": "K", "email": "k@beta.com", "country": "Canada", "city": "Toronto"}]

    with pytest.raises(StorageUnavailableError):
        import_mapper.import_rows(db, rows)


@pytest.mark.asyncio
async def test_unknown_ids_are_404_with_entity_name(client):
    assert (await client.get("/api/customers/nope")).json() == {"detail": "Customer not found"}
    assert (await client.delete("/api/notes/nope")).json() == {"detail": "Note not found"}
    assert (await client.delete("/api/email-logs/nope")).status_code == 404


@pytest.mark.asyncio
async def test_query_validation_is_400(client):
    resp = await client.get("/api/activity-logs", params={"limit": 0})
    assert resp.status_code == 400
    assert resp.json()["errors"][0]["field"] == "limit"
