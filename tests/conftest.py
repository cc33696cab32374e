"""Shared test fixtures for the Cabinet test suite.

All tests share one in-memory SQLite database (StaticPool keeps it alive
across sessions). Every table is emptied before each test, ensuring
complete isolation.
"""

import os

# Use the in-memory database before any cabinet imports.
os.environ["DATABASE_URL"] = os.environ.get("TEST_DATABASE_URL", "sqlite://")
os.environ["LOG_FORMAT"] = "text"
os.environ.pop("LEGACY_ROOT", None)

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from cabinet.database import Base, SessionLocal, get_db, init_db
from cabinet.main import app
from cabinet.schemas import NewFile


@pytest.fixture(scope="session", autouse=True)
def _create_schema():
    init_db()
    yield


@pytest.fixture(autouse=True)
def _clean_tables():
    """Delete all rows before each test, children before parents.

    Runs before the test (not after) so test failures leave data
    available for debugging.
    """
    db = SessionLocal()
    try:
        for table in reversed(Base.metadata.sorted_tables):
            db.execute(table.delete())
        db.commit()
    finally:
        db.close()
    yield


@pytest.fixture()
def db():
    """Per-test database session."""
    session = SessionLocal()
    yield session
    session.rollback()
    session.close()


@pytest.fixture()
def client(db):
    """FastAPI TestClient with the DB dependency overridden to use the test session."""

    def _override_get_db():
        try:
            yield db
        finally:
            # Discard whatever a failed request left in the shared session.
            db.rollback()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


T0 = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def make_file(path: str = "a/b/c.txt", content: bytes = b"hi", **overrides) -> NewFile:
    """Factory for NewFile values."""
    data = {"path": path, "content": content, "mode": 0o644, "modified": T0}
    data.update(overrides)
    return NewFile(**data)
