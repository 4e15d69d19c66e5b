"""Cache maintenance endpoints — metrics and preload."""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, status

from steam_cache.application.schemas import (
    CacheOverviewResponse,
    PreloadAccepted,
    PreloadRequest,
)
from steam_cache.application.services import CacheMetricsService, PreloadService
from steam_cache.config import Settings
from steam_cache.domain.exceptions import StoreUnavailable
from steam_cache.infrastructure.dependencies import (
    get_app_settings,
    get_cache_metrics_service,
    get_preload_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cache", tags=["Cache"])


@router.get("/overview", response_model=CacheOverviewResponse)
async def cache_overview(
    service: CacheMetricsService = Depends(get_cache_metrics_service),
) -> CacheOverviewResponse:
    """How much is cached and how much of it is stale."""
    overview = await service.overview()
    return CacheOverviewResponse.model_validate(overview)


async def _run_preload(service: PreloadService, app_ids: list[str]) -> None:
    try:
        await service.preload(app_ids)
    except StoreUnavailable:
        logger.exception("Preload stopped: entity store unavailable")


@router.post(
    "/preload",
    response_model=PreloadAccepted,
    status_code=status.HTTP_202_ACCEPTED,
)
async def preload(
    background_tasks: BackgroundTasks,
    data: PreloadRequest | None = None,
    service: PreloadService = Depends(get_preload_service),
    settings: Settings = Depends(get_app_settings),
) -> PreloadAccepted:
    """Warm the cache in the background."""
    data = data or PreloadRequest()
    app_ids = (data.app_ids or settings.preload_app_ids)[: data.limit]
    background_tasks.add_task(_run_preload, service, app_ids)
    return PreloadAccepted(message="Preload started in background", total=len(app_ids))
