"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from steam_cache.config import Settings, get_settings
from steam_cache.domain.exceptions import StoreUnavailable
from steam_cache.infrastructure.database import Database, SQLAlchemyEntityStore
from steam_cache.infrastructure.logging.log_config import setup_logging
from steam_cache.infrastructure.steam import SteamStoreClient
from steam_cache.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


async def _ensure_database_exists(database_url: str) -> None:
    """Create the PostgreSQL database if it does not yet exist.

    Connects to the default ``postgres`` maintenance database, checks for the
    target database name, and issues ``CREATE DATABASE`` when missing.
    """
    from urllib.parse import urlparse

    import asyncpg

    if not database_url.startswith("postgresql://"):
        return
    parsed = urlparse(database_url)
    db_name = parsed.path.lstrip("/")
    if not db_name:
        return

    # Build a connection URL pointing at the default 'postgres' database
    maintenance_url = database_url.rsplit("/", 1)[0] + "/postgres"

    try:
        conn = await asyncpg.connect(maintenance_url)
        try:
            exists = await conn.fetchval(
                "SELECT 1 FROM pg_database WHERE datname = $1", db_name
            )
            if not exists:
                # CREATE DATABASE cannot run inside a transaction block
                await conn.execute(f'CREATE DATABASE "{db_name}"')
                logger.info("Created database '%s'", db_name)
            else:
                logger.debug("Database '%s' already exists", db_name)
        finally:
            await conn.close()
    except (OSError, asyncpg.PostgresError) as exc:
        logger.warning("Could not auto-create database '%s': %s", db_name, exc)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — create tables, open the store and the Steam client."""
    settings: Settings = app.state.settings
    setup_logging(settings)

    # 1. Ensure the PostgreSQL database exists (auto-create if missing)
    await _ensure_database_exists(settings.database_url)

    # 2. Create all database tables
    database = Database(settings.database_url, echo=settings.log_level_sql.upper() == "DEBUG")
    await database.create_all()

    # 3. Shared Steam HTTP client (connection pooling across requests)
    http_client = httpx.AsyncClient(timeout=settings.steam_http_timeout)

    app.state.database = database
    app.state.entity_store = SQLAlchemyEntityStore(database)
    app.state.steam_source = SteamStoreClient(
        store_base_url=settings.steam_store_base_url,
        community_base_url=settings.steam_community_base_url,
        timeout=settings.steam_http_timeout,
        http_client=http_client,
    )
    logger.info(
        "Steam cache ready — freshness window %.1fh",
        settings.cache_expiration_hours,
    )

    yield

    # Shutdown
    await http_client.aclose()
    await database.dispose()


async def _store_unavailable_handler(request: Request, exc: StoreUnavailable) -> JSONResponse:
    logger.error("Entity store unavailable on %s: %s", request.url.path, exc.message)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"success": False, "detail": str(exc)},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StoreUnavailable, _store_unavailable_handler)

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "steam_cache.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
