"""Fixtures for exercising the HTTP API against the SQLite store and a fake Steam."""

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from steam_cache.config import Settings
from steam_cache.main import create_app


def _build_app(database, store, steam):
    """The lifespan does not run under ASGITransport, so wire app.state by hand."""
    settings = Settings(database_url=database.url, preload_delay_seconds=0)
    app = create_app(settings)
    app.state.database = database
    app.state.entity_store = store
    app.state.steam_source = steam
    return app


@pytest_asyncio.fixture
async def api_client(database, store, steam):
    transport = ASGITransport(app=_build_app(database, store, steam))
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
