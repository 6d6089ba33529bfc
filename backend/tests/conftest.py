"""
Central pytest configuration for the clinic service tests.

This file provides common fixtures and test setup for both unit and
integration tests. Environment variables are set before any ``clinic``
module is imported so the lazy engine picks up the in-memory database.
"""

import os

# Test database configuration (set early so the lazy engine uses it)
TEST_DATABASE_URL = "sqlite:///:memory:"  # In-memory SQLite for fast tests
os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ["TESTING"] = "true"
os.environ["LOG_TO_FILE"] = "false"
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret"
os.environ["FLASK_SECRET_KEY"] = "test-secret-key"
os.environ.pop("SEED_DEMO_DATA", None)

import pytest  # noqa: E402

from clinic.db.seed import ensure_demo_identities  # noqa: E402
from clinic.db.session import SessionLocal, create_tables, drop_tables  # noqa: E402
from tests.config.markers import (  # noqa: E402,F401
    pytest_collection_modifyitems,
    pytest_configure,
)
from tests.factories.model_factories import bearer  # noqa: E402

SECRETARY_ID = "demo-secretary"
DOCTOR_ID = "demo-doctor"
ADMIN_ID = "demo-admin"


# =====================================================
# DATABASE FIXTURES
# =====================================================


@pytest.fixture
def clean_database():
    """Fresh schema for every test; the in-memory DB is shared per process."""
    drop_tables()
    create_tables()
    yield
    drop_tables()


@pytest.fixture
def db_session(clean_database):
    """Database session for repository tests."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seeded_identities(clean_database):
    """One identity per role: demo-secretary, demo-doctor, demo-admin."""
    ensure_demo_identities()


# =====================================================
# APPLICATION FIXTURES
# =====================================================


@pytest.fixture
def app(seeded_identities):
    """Create a Flask application for testing."""
    from clinic.main import create_app

    app = create_app()
    app.config.update({"TESTING": True})
    return app


@pytest.fixture
def client(app):
    """Flask test client; every request gets its own app context."""
    return app.test_client()


@pytest.fixture
def secretary_headers():
    return bearer(SECRETARY_ID)


@pytest.fixture
def doctor_headers():
    return bearer(DOCTOR_ID)


@pytest.fixture
def admin_headers():
    return bearer(ADMIN_ID)
