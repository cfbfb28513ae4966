"""
Shared pytest fixtures

Settings are read when grant_portal.config is first imported, so the test
environment is set up here before any test module imports the package.
"""
import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["DOCUMENT_VERIFIER_BACKEND"] = "coverage"
os.environ["SEED_DEMO_DATA"] = "false"

import pytest

from grant_portal.database import Base, SessionLocal, engine, init_db
from grant_portal.models.init_data import init_default_data


@pytest.fixture
def db():
    """Empty schema, fresh session"""
    init_db()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def seeded_db(db):
    """Schema with admin, applicant types, programs and scheduled jobs"""
    init_default_data(db)
    return db


@pytest.fixture
def client(seeded_db):
    from fastapi.testclient import TestClient
    from grant_portal.main import app

    # No context manager: startup hooks (scheduler) stay off
    return TestClient(app)
