"""
Shared pytest fixtures.

Uses a file-backed SQLite database so no Postgres is required for tests.
Every test creates its own user, so rows never bleed between tests even
though the database lives for the whole session.
"""
import itertools

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

import goaltrack.models  # noqa: F401  (register tables on Base.metadata)
from goaltrack.db.base import Base, get_db
from goaltrack.main import app
from goaltrack.services.users import create_user

SQLITE_URL = "sqlite:///./test_goaltrack.db"

engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

_user_seq = itertools.count(1)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session", autouse=True)
def create_tables():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def make_user(db):
    """Factory: make_user(daily_goal_hours=2, weekly_goal_hours=10) -> User."""
    def _make(daily_goal_hours=2, weekly_goal_hours=10):
        n = next(_user_seq)
        return create_user(
            db,
            email=f"user{n}@example.com",
            name=f"User {n}",
            daily_goal_hours=daily_goal_hours,
            weekly_goal_hours=weekly_goal_hours,
        )
    return _make


@pytest.fixture()
def client(db):
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
