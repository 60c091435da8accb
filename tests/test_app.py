from __future__ import annotations

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from surfacecrm.core.config import settings
from surfacecrm.db.base import Base
from surfacecrm.db.session import SessionLocal, build_engine, storage_backend, use_memory_fallback
from surfacecrm.main import init_storage
from surfacecrm.models import Customer
from surfacecrm.services import customer_service


@pytest.mark.asyncio
async def test_health(client):
    resp = await client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["service"] == "Surfaces CRM"
    assert body["storage"] == "memory"


@pytest.mark.asyncio
async def test_root_redirects_to_dashboard(client):
    resp = await client.get("/")
    assert resp.status_code == 302
    assert resp.headers["location"] == "/dashboard"


@pytest.mark.asyncio
async def test_dashboard_page_renders(client, make_customer):
    make_customer(name="Acme Tile Distributors", is_pinned=True)
    resp = await client.get("/dashboard")
    assert resp.status_code == 200
    assert "Total customers: 1" in resp.text
    assert "Acme Tile Distributors" in resp.text
    assert "No activity yet." in resp.text


@pytest.mark.asyncio
async def test_dashboard_page_caps_recent_activity(client, db, make_customer, monkeypatch):
    monkeypatch.setattr(settings, "activity_feed_limit", 1)
    customer = make_customer(name="Acme Tile Distributors")
    customer_service.toggle_hot_lead(db, customer.id)
    customer_service.toggle_pinned(db, customer.id)

    resp = await client.get("/dashboard")
    assert resp.status_code == 200
    assert resp.text.count("Acme Tile Distributors: ") == 1


@pytest.mark.asyncio
async def test_customers_page_filters_from_query_string(client, make_customer):
    make_customer(name="Acme Tile Distributors", country="United States")
    make_customer(name="Modern Design Studio", country="Canada")

    resp = await client.get("/customers", params={"country": "Canada"})
    assert resp.status_code == 200
    assert "Modern Design Studio" in resp.text
    assert "Acme Tile Distributors</td>" not in resp.text
    assert "Showing 1 of 2" in resp.text


@pytest.mark.asyncio
async def test_customers_form_creates_and_redirects(client):
    form = {
        "name": "Build Right Construction",
        "contact_person": "Robert Johnson",
        "email": "robert@buildright.co.uk",
        "country": "United Kingdom",
        "city": "London",
        "tags": "Commercial, Flooring",
    }
    resp = await client.post("/customers", data=form)
    assert resp.status_code == 302

    customers = (await client.get("/api/customers")).json()
    assert customers[0]["name"] == "Build Right Construction"
    assert customers[0]["tags"] == ["Commercial", "Flooring"]


@pytest.mark.asyncio
async def test_customers_form_shows_validation_problems(client):
    resp = await client.post("/customers", data={"name": "No Email"})
    assert resp.status_code == 400
    assert "Please check" in resp.text


@pytest.mark.asyncio
async def test_follow_ups_page_renders(client, make_customer):
    make_customer(name="Acme Tile Distributors", next_follow_up_date="2000-01-01")
    resp = await client.get("/follow-ups")
    assert resp.status_code == 200
    assert "2000-01-01" in resp.text
    assert "overdue" in resp.text


def test_startup_falls_back_to_memory_storage(monkeypatch):
    monkeypatch.setitem(SessionLocal.kw, "bind", build_engine("sqlite:////nonexistent-dir/crm.db"))
    monkeypatch.setattr(settings, "storage_fallback", True)

    assert init_storage() == "memory"


def test_startup_without_fallback_raises(monkeypatch):
    monkeypatch.setitem(SessionLocal.kw, "bind", build_engine("sqlite:////nonexistent-dir/crm.db"))
    monkeypatch.setattr(settings, "storage_fallback", False)

    with pytest.raises(OperationalError):
        init_storage()


def test_fallback_store_keeps_sessions_apart(monkeypatch):
    monkeypatch.setitem(SessionLocal.kw, "bind", SessionLocal.kw["bind"])
    fallback = use_memory_fallback()
    Base.metadata.create_all(bind=fallback)
    assert storage_backend() == "memory"

    writer = SessionLocal()
    other = SessionLocal()
    try:
        writer.add(
            Customer(
                name="Acme",
                contact_person="J",
                email="j@acme.com",
                country="US",
                city="LA",
            )
        )
        writer.flush()

        # Another request failing and rolling back must not touch the writer's transaction
        other.get(Customer, "missing")
        other.rollback()

        writer.commit()
    finally:
        writer.close()
        other.close()

    reader = SessionLocal()
    try:
        assert reader.scalar(select(func.count()).select_from(Customer)) == 1
    finally:
        reader.close()
        fallback.dispose()
