"""Shared test fixtures for the CraftFunds tests.

Uses a SQLite database so tests run without MySQL.
"""

from __future__ import annotations

import os

# Set before importing anything from craftfunds: Settings reads the
# environment when it is first built.
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["DATABASE_USERNAME"] = "craftfunds"
os.environ["DATABASE_PASSWORD"] = "secret"

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from craftfunds.core.config import Settings, get_settings
from craftfunds.core.database import Base
from craftfunds.main import app
from craftfunds.services.funding.service import FundingService, get_funding_service

# Use SQLite file-based database for tests (no MySQL needed)
TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def make_settings(**overrides) -> Settings:
    """Build a Settings instance with valid test credentials."""
    defaults = {
        "database_url": TEST_DATABASE_URL,
        "database_username": "craftfunds",
        "database_password": "secret",
        "donation_url": "https://donate.example.org/craftfunds",
    }
    defaults.update(overrides)
    return Settings(**defaults)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session, settings):
    """FastAPI test client reading through the test session."""

    def override_get_funding_service(
        current: Settings = Depends(get_settings),
    ) -> FundingService:
        return FundingService(current, db=db_session)

    app.dependency_overrides[get_funding_service] = override_get_funding_service
    app.dependency_overrides[get_settings] = lambda: settings
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def settings_factory():
    """Return ``make_settings`` so tests can build variants."""
    return make_settings
