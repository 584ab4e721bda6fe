"""
==============================================================================
Pytest Configuration and Fixtures
==============================================================================

Provides test database, store, client and admin credential fixtures.

==============================================================================
"""

import base64
import os

# Keep the app off the on-disk database and start with the admin area locked
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.pop("ADMIN_USER", None)
os.environ.pop("ADMIN_PASS", None)

import pytest
from typing import Dict, Generator, Tuple
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from fimenu.main import app
from fimenu.config import get_settings
from fimenu.db import Base, KeyValueStore, get_db


# ============================================================================
# DATABASE FIXTURES
# ============================================================================

SQLALCHEMY_TEST_DATABASE_URL = "sqlite://"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(autouse=True)
def fresh_settings() -> Generator[None, None, None]:
    """Re-read settings from the environment for every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def store(db: Session) -> KeyValueStore:
    """Key-value store on the test database."""
    return KeyValueStore(db)


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """Create test client with database override."""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ============================================================================
# ADMIN FIXTURES
# ============================================================================

ADMIN_USER = "manager"
ADMIN_PASS = "s3cret:with-colon"


def basic_auth(username: str, password: str) -> Dict[str, str]:
    """Authorization header for HTTP Basic credentials."""
    raw = f"{username}:{password}".encode("utf-8")
    return {"Authorization": "Basic " + base64.b64encode(raw).decode("ascii")}


@pytest.fixture
def admin_credentials(monkeypatch) -> Generator[Tuple[str, str], None, None]:
    """Configure ADMIN_USER / ADMIN_PASS for the duration of a test."""
    monkeypatch.setenv("ADMIN_USER", ADMIN_USER)
    monkeypatch.setenv("ADMIN_PASS", ADMIN_PASS)
    get_settings.cache_clear()
    yield ADMIN_USER, ADMIN_PASS
    get_settings.cache_clear()


@pytest.fixture
def admin_headers(admin_credentials: Tuple[str, str]) -> Dict[str, str]:
    """Authorization headers matching the configured admin."""
    return basic_auth(*admin_credentials)


@pytest.fixture
def make_auth():
    """Factory for arbitrary Basic headers."""
    return basic_auth
