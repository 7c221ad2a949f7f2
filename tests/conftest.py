"""Shared fixtures: a throwaway SQLite database and an API client."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest
from sqlalchemy import event

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "evenza_api_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["APP_TIMEZONE"] = "UTC"

from app.config import get_settings  # noqa: E402

get_settings.cache_clear()

from app.infrastructure.database import Base, SessionLocal, engine  # noqa: E402
from app.infrastructure import models  # noqa: E402,F401
from app.infrastructure.models import EventModel, RegistrationModel  # noqa: E402
from app.infrastructure.security import create_access_token  # noqa: E402


@pytest.fixture()
def db_session():
    """Yield a session bound to a freshly created schema."""

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client(db_session):
    """Return a test client bound to a clean application instance."""

    pytest.importorskip("httpx")
    from fastapi.testclient import TestClient

    from main import create_app

    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def make_event(db_session):
    """Insert an event and registrations for the given user ids."""

    def _make_event(
        title: str = "Launch Party",
        registrants: tuple[int, ...] = (),
        *,
        status: str = "confirmed",
    ) -> int:
        event = EventModel(title=title)
        db_session.add(event)
        db_session.flush()
        for user_id in registrants:
            db_session.add(
                RegistrationModel(event_id=event.id, user_id=user_id, status=status)
            )
        db_session.commit()
        return event.id

    return _make_event


@pytest.fixture()
def auth_headers():
    """Build bearer headers for a user id."""

    def _auth_headers(user_id: int) -> dict[str, str]:
        token = create_access_token({"user_id": user_id, "username": f"user{user_id}"})
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture()
def enforce_foreign_keys(db_session):
    """Make SQLite check foreign keys the way server databases do."""

    def _enable(dbapi_connection, _connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    event.listen(engine, "connect", _enable)
    engine.dispose()
    yield
    event.remove(engine, "connect", _enable)
    engine.dispose()
