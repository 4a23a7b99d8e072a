"""Pytest configuration and fixtures."""

import os

# must be set before fittrack.db builds its engine
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from fittrack.db import get_db
from fittrack.main import app
from fittrack.models import Base
from fittrack.services.schedule import week_bounds


@pytest.fixture
def engine():
    """Fresh in-memory database per test."""
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(eng)
    yield eng
    Base.metadata.drop_all(eng)
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(
        bind=engine,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
        future=True,
    )


@pytest.fixture
def db(session_factory):
    s = session_factory()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def client(session_factory):
    """Test client wired to the in-memory database."""
    def _override_get_db():
        s = session_factory()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def next_monday():
    """Monday of next week, so every day of that week is still skippable."""
    monday, _ = week_bounds(date.today() + timedelta(days=7))
    return monday


@pytest.fixture
def make_routine(client):
    def _make(user_id=1, name="Full Body", days=("A", "B", "C"), days_per_week=None, is_public=False):
        resp = client.post(
            "/routines",
            json={
                "user_id": user_id,
                "name": name,
                "days_per_week": days_per_week,
                "is_public": is_public,
                "days": [{"name": d} for d in days],
            },
        )
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _make


@pytest.fixture
def make_assignment(client):
    def _make(routine_id, client_id=1, plan_type="flexible", start_date=None):
        body = {"client_id": client_id, "routine_id": routine_id, "plan_type": plan_type}
        if start_date is not None:
            body["start_date"] = start_date.isoformat()
        resp = client.post("/assignments", json=body)
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _make
