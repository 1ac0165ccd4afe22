"""Shared test fixtures for all tests."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest

from config.settings import reset_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop the settings singleton so env overrides apply per test."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def fixed_now():
    """Fixed resolution time: 2026-01-11 14:30:05 UTC."""
    return datetime(2026, 1, 11, 14, 30, 5, tzinfo=UTC)


@pytest.fixture
def mock_db_session():
    """Mock database session."""
    session = AsyncMock()
    session.execute = AsyncMock()
    session.merge = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    return session


@pytest.fixture
def policy_cache():
    """Isolated policy cache with caching enabled."""
    from repositories.policy_repos import PolicyCache

    return PolicyCache(ttl=60)
