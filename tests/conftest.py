"""Shared fixtures: a file-backed SQLite store, a pinned clock and a fake Steam."""

from datetime import datetime, timezone

import pytest
import pytest_asyncio

from fakes import FakeClock, FakeSteamSource
from steam_cache.application.services import (
    FetchOrchestrator,
    FreshnessOracle,
    UpsertCoordinator,
)
from steam_cache.domain.entities import CachePolicy
from steam_cache.infrastructure.database import Database, SQLAlchemyEntityStore

# ── Fixtures ──


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def policy() -> CachePolicy:
    return CachePolicy(threshold_hours=24.0, default_page_size=10, max_page_size=100)


@pytest.fixture
def steam() -> FakeSteamSource:
    return FakeSteamSource()


@pytest_asyncio.fixture
async def database(tmp_path):
    """File-backed SQLite: every transaction scope opens its own connection."""
    db = Database(f"sqlite:///{tmp_path / 'steam_cache.db'}")
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
def store(database) -> SQLAlchemyEntityStore:
    return SQLAlchemyEntityStore(database)


@pytest.fixture
def freshness(policy, clock) -> FreshnessOracle:
    return FreshnessOracle(policy.threshold_hours, clock=clock)


@pytest.fixture
def upserts(store, clock) -> UpsertCoordinator:
    return UpsertCoordinator(store, clock=clock)


@pytest.fixture
def orchestrator(store, steam, policy, freshness, upserts) -> FetchOrchestrator:
    return FetchOrchestrator(store, steam, policy, freshness=freshness, upserts=upserts)
