"""Shared test fixtures."""

from datetime import UTC, datetime

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

from checkin_service.core.config import Settings
from checkin_service.core.database import create_memory_engine
from checkin_service.directory.seed import SEED_EVENTS
from checkin_service.directory.store import EventStore
from checkin_service.main import create_app

FIXED_NOW = datetime(2025, 9, 15, 12, 5, 30, 250000, tzinfo=UTC)


@pytest.fixture(name="engine")
def engine_fixture():
    """Create an empty in-memory database for testing."""
    engine = create_memory_engine()
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Create a new database session for each test."""
    with Session(engine) as session:
        yield session


@pytest.fixture(name="store")
def store_fixture(engine) -> EventStore:
    """Create a store loaded with the built-in seed."""
    store = EventStore(engine)
    store.seed(SEED_EVENTS)
    return store


@pytest.fixture(name="fixed_clock_store")
def fixed_clock_store_fixture(engine) -> EventStore:
    """Create a seeded store whose clock always returns FIXED_NOW."""
    store = EventStore(engine, clock=lambda: FIXED_NOW)
    store.seed(SEED_EVENTS)
    return store


@pytest.fixture(name="settings")
def settings_fixture() -> Settings:
    """Settings with auth disabled and default paging."""
    return Settings(_env_file=None, token=None, default_page_limit=20, max_page_limit=None)


@pytest.fixture(name="client")
def client_fixture(settings: Settings, store: EventStore):
    """Create a test client backed by the seeded store."""
    app = create_app(settings=settings, store=store)
    yield TestClient(app)


@pytest.fixture(name="auth_client")
def auth_client_fixture(store: EventStore):
    """Create a test client with the bearer-token guard enabled."""
    settings = Settings(_env_file=None, token="s3cret")
    app = create_app(settings=settings, store=store)
    yield TestClient(app)
