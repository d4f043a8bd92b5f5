"""
Test configuration and shared fixtures for the Vault Backend test suite.

Every test gets its own in-memory SQLite database, created from the model
metadata, so tests never share state.
"""

import os

# Must be set before core.database creates the application engine
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite://")
os.environ["DATABASE_URL"] = TEST_DATABASE_URL

import pytest
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from core.database import Base

# Import all models to ensure they're registered with SQLAlchemy
import models  # noqa: F401


@pytest.fixture(scope="function")
def db_engine():
    """
    Create a fresh database engine for one test.

    StaticPool keeps the single in-memory connection alive for the whole
    test; check_same_thread is off so TestClient worker threads can use it.
    """
    engine = create_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        echo=False,
    )
    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine) -> Generator[Session, None, None]:
    """Provide a database session bound to the per-test database."""
    TestingSession = sessionmaker(bind=db_engine, autoflush=False, expire_on_commit=False)
    session = TestingSession()

    yield session

    session.close()


@pytest.fixture(autouse=True)
def fresh_cleanup_registry(monkeypatch):
    """Start every test without the process-wide cleanup registry, locator and scheduler."""
    from services import cleanup_scheduler, cleanup_service

    monkeypatch.setattr(cleanup_service, "_cleanup_registry", None)
    monkeypatch.setattr(cleanup_service, "_cleanup_locator", None)
    monkeypatch.setattr(cleanup_scheduler, "_cleanup_scheduler", None)
