"""
Shared fixtures: in-memory SQLite database, API client and row helpers.

Run tests with: python -m pytest tests/ -v
"""
import os
from datetime import datetime, timedelta, timezone

# Keep the application engine off PostgreSQL during tests
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from property_api.main import app
from property_api.database import Base, enable_sqlite_foreign_keys, get_db
from property_api.models import Property, User


# =====================================================
# TEST DATABASE SETUP
# =====================================================

# Use SQLite in-memory for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    """Override database dependency for testing."""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


# Override the dependency
app.dependency_overrides[get_db] = override_get_db

BASE_TIME = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture(scope="function")
def db():
    """Fresh schema plus a session for arranging and inspecting rows."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """Create test client with fresh database."""
    yield TestClient(app)


@pytest.fixture
def make_property(db):
    """
    Insert a property directly, bypassing the API.

    ``age_minutes`` sets created_at relative to a fixed base time so ordering
    tests do not depend on the clock.
    """
    counter = {"n": 0}

    def _make(age_minutes=None, **fields):
        counter["n"] += 1
        if age_minutes is None:
            age_minutes = 1000 - counter["n"]
        created = BASE_TIME - timedelta(minutes=age_minutes)
        fields.setdefault("title", f"Property {counter['n']}")
        fields.setdefault("status", "disponible")
        fields.setdefault("created_at", created)
        fields.setdefault("updated_at", created)
        property_obj = Property(**fields)
        db.add(property_obj)
        db.commit()
        db.refresh(property_obj)
        return property_obj

    return _make


@pytest.fixture
def make_user(db):
    """Insert an owner."""
    def _make(name="Ana López", email="ana@example.com"):
        user = User(name=name, email=email)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make
