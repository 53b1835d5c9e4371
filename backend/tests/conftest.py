import os

# Configure the app for an in-memory database before anything imports it
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["ADMIN_AUTH_ENABLED"] = "true"
os.environ["ADMIN_TOKENS"] = "test-admin-token,rotated-admin-token"
os.environ["SEED_SAMPLE_DATA"] = "false"
os.environ.pop("FRONTEND_DIR", None)

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from marketplace.db.base import Base
from marketplace.db.session import SessionLocal, engine
from marketplace.main import app

ADMIN_TOKEN = "test-admin-token"


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """HTTP client running the app lifespan against a fresh database."""
    Base.metadata.drop_all(bind=engine)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def db() -> Generator[Session, None, None]:
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"X-Admin-Token": ADMIN_TOKEN}


@pytest.fixture
def lamp() -> dict:
    return {
        "name": "Lamp",
        "description": "Desk lamp",
        "price": 19.99,
        "category": "home",
    }
