"""
Test configuration and fixtures.

Provides:
- A fresh in-memory SQLite database per test
- A session bound to it (app code commits freely)
- HTTPX AsyncClient wired to the app with get_db overridden
"""
import os
from typing import AsyncGenerator, Callable, Generator

# Never touch a real database from the test run
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENV"] = "test"

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from surfacecrm.main import app
from surfacecrm.db.base import Base
from surfacecrm.db.session import MEMORY_DATABASE_URL, SessionLocal, build_engine, get_db
from surfacecrm.models import Customer
from surfacecrm.schemas.customers import CustomerCreate
from surfacecrm.services import customer_service


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture(scope="function")
def engine() -> Generator[Engine, None, None]:
    eng = build_engine(MEMORY_DATABASE_URL)
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture(scope="function")
def db(engine: Engine) -> Generator[Session, None, None]:
    session = SessionLocal(bind=engine)
    yield session
    session.close()


@pytest.fixture(scope="function")
def make_customer(db: Session) -> Callable[..., Customer]:
    """Create a stored customer; any CustomerCreate field can be overridden (snake_case)."""

    def _make(**overrides) -> Customer:
        data = {
            "name": "Acme Tile Distributors",
            "contact_person": "John Smith",
            "email": "john@acmetile.com",
            "country": "United States",
            "city": "Los Angeles",
        }
        data.update(overrides)
        return customer_service.create_customer(db, CustomerCreate(**data))

    return _make


# =============================================================================
# Client Fixtures
# =============================================================================

@pytest.fixture(scope="function")
async def client(db: Session) -> AsyncGenerator[AsyncClient, None]:
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
