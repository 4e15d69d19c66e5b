"""Health check endpoint — reports the app and whether the store answers."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from steam_cache.application.interfaces import EntityStore
from steam_cache.config import Settings
from steam_cache.infrastructure.dependencies import get_app_settings, get_entity_store

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(
    store: EntityStore = Depends(get_entity_store),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    """Returns the current application health status."""
    database_ok = await store.health_check()
    return {
        "status": "healthy" if database_ok else "degraded",
        "database": "ok" if database_ok else "unavailable",
        "version": settings.app_version,
        "environment": settings.app_env,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
