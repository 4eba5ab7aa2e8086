"""
==============================================================================
Pytest Configuration and Fixtures
==============================================================================

Provides test database, services, client, and admin session fixtures.

==============================================================================
"""

import os

# Settings are cached on first use, so the test environment is set first
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("KDF_ROUNDS", "1000")
os.environ.setdefault("APP_ENV", "development")

from datetime import datetime, timedelta, timezone
from typing import Dict, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from furniture_visualizer.main import app
from furniture_visualizer.catalog import BarcodeCatalog
from furniture_visualizer.config import get_settings
from furniture_visualizer.core.security import SecurityManager
# Import get_db from the location the API endpoints use
from furniture_visualizer.core.dependencies import get_db
from furniture_visualizer.db.database import Base
from furniture_visualizer.services import AuthService, StorageService
from furniture_visualizer.storage import KeyValueStore


ADMIN_PASSWORD = "secret1"


# ============================================================================
# DATABASE FIXTURES
# ============================================================================

# In-memory SQLite for testing
SQLALCHEMY_TEST_DATABASE_URL = "sqlite://"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a fresh database for each test."""
    # Create all tables
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        # Drop all tables after test
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def store(db: Session) -> KeyValueStore:
    """Slot store on the test database."""
    return KeyValueStore(db)


@pytest.fixture
def broken_store(db: Session) -> KeyValueStore:
    """Store whose table has been dropped underneath it."""
    db.commit()
    Base.metadata.drop_all(bind=engine)
    return KeyValueStore(db)


# ============================================================================
# CLOCK & SECURITY FIXTURES
# ============================================================================

class FakeClock:
    """Settable clock so expiry can be tested without sleeping."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    """Clock fixed at a known instant."""
    return FakeClock(datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def security() -> SecurityManager:
    """Security manager with a low KDF round count."""
    return SecurityManager(rounds=1000)


# ============================================================================
# SERVICE FIXTURES
# ============================================================================

@pytest.fixture
def auth_service(store: KeyValueStore, security: SecurityManager, clock: FakeClock) -> AuthService:
    """Auth Gate on the test database with a controllable clock."""
    return AuthService(store, security=security, settings=get_settings(), clock=clock)


@pytest.fixture
def storage_service(store: KeyValueStore, clock: FakeClock) -> StorageService:
    """Application data storage on the test database."""
    return StorageService(store, settings=get_settings(), clock=clock)


@pytest.fixture
def catalog() -> BarcodeCatalog:
    """Catalog holding only the built-in records."""
    return BarcodeCatalog()


# ============================================================================
# CLIENT FIXTURES
# ============================================================================

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
    app.state.text_generator = None


# ============================================================================
# ADMIN SESSION FIXTURES
# ============================================================================

@pytest.fixture
def admin_token(client: TestClient) -> str:
    """Set up the admin password and return the session token."""
    response = client.post("/api/v1/auth/setup", json={"password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return response.json()["access_token"]


@pytest.fixture
def admin_headers(admin_token: str) -> Dict[str, str]:
    """Authorization headers for the admin session."""
    return {"Authorization": f"Bearer {admin_token}"}
