"""Pytest fixtures — throwaway SQLite database and a frozen clock for isolated tests."""
from datetime import datetime, timezone

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from flourish.clock import get_clock
from flourish.database import Base, get_db
from flourish.main import app

# Import all models so they register with Base.metadata
from flourish.models.user import User                                        # noqa: F401
from flourish.models.event import Event                                      # noqa: F401
from flourish.models.service import ServiceProvider, EventServiceBooking     # noqa: F401
from flourish.models.memory import EventMemory, EventComment                 # noqa: F401
from flourish.models.calendar_entry import UserCalendarEvent                 # noqa: F401

SQLITE_URL = "sqlite:///./test.db"

# 2025-06-01 09:00 UTC, a Sunday morning
DEFAULT_NOW = datetime(2025, 6, 1, 9, 0, tzinfo=timezone.utc)


class FrozenClock:
    """A clock the test can move by assigning ``now``."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})

    # Enable WAL mode for better concurrency
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db(db_engine):
    """Yield a database session bound to the test engine."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def frozen_clock():
    return FrozenClock(DEFAULT_NOW)


@pytest.fixture(scope="function")
def client(db_engine, frozen_clock):
    """FastAPI TestClient with the database and clock dependencies overridden."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def _override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_clock] = lambda: frozen_clock
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helpers: create rows via the API, return the JSON response dict
# ---------------------------------------------------------------------------
def create_test_user(client: TestClient, name: str = "Test User", email: str = None) -> dict:
    """Helper — POST /api/users and return response JSON."""
    resp = client.post("/api/users/", json={"display_name": name, "email": email})
    assert resp.status_code == 201, resp.text
    return resp.json()


def create_test_event(client: TestClient, organizer_id: str, title: str = "Test Event",
                      event_date: str = "2025-06-01", event_time: str = "18:00", **extra) -> dict:
    """Helper — POST /api/events and return response JSON."""
    payload = {
        "organizer_id": organizer_id,
        "title": title,
        "event_date": event_date,
        "event_time": event_time,
        **extra,
    }
    resp = client.post("/api/events/", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()


def publish(client: TestClient, event: dict) -> dict:
    resp = client.post(f"/api/events/{event['id']}/publish?actor_id={event['organizer_id']}")
    assert resp.status_code == 200, resp.text
    return resp.json()


def create_test_provider(client: TestClient, name: str = "Sound Co", category: str = "audio",
                         base_price: float = 150.0, **extra) -> dict:
    resp = client.post("/api/providers/", json={
        "name": name,
        "category": category,
        "base_price": base_price,
        **extra,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()
