"""Game endpoints — metadata, review stats and rankings."""

from typing import Literal

from fastapi import APIRouter, Depends, Query, Response, status

from steam_cache.application.schemas import (
    GameBundleResponse,
    GameDetailsResponse,
    LanguageCountResponse,
    RankedGameResponse,
    TopGamesResponse,
)
from steam_cache.application.services import FetchOrchestrator, SearchService
from steam_cache.infrastructure.dependencies import get_fetch_orchestrator, get_search_service

router = APIRouter(prefix="/games", tags=["Games"])


@router.get("/top", response_model=TopGamesResponse)
async def top_rated_games(
    limit: int = Query(50, ge=1, le=500),
    min_reviews: int = Query(100, ge=0),
    sort: Literal["rating", "reviews", "recent"] = "rating",
    service: SearchService = Depends(get_search_service),
) -> TopGamesResponse:
    """Games with enough reviews, best first."""
    games = await service.top_rated_games(limit=limit, min_reviews=min_reviews, sort=sort)
    return TopGamesResponse(
        games=[RankedGameResponse.model_validate(g) for g in games],
        total=len(games),
    )


@router.get("/{app_id}", response_model=GameBundleResponse)
async def get_game(
    app_id: str,
    response: Response,
    orchestrator: FetchOrchestrator = Depends(get_fetch_orchestrator),
) -> GameBundleResponse:
    """Game metadata plus review stats, refreshed from Steam when stale."""
    bundle = await orchestrator.fetch_game_bundle(app_id)
    if not bundle.success:
        response.status_code = status.HTTP_502_BAD_GATEWAY
    return GameBundleResponse.from_result(bundle)


@router.get("/{app_id}/details", response_model=GameDetailsResponse)
async def get_game_details(
    app_id: str,
    response: Response,
    orchestrator: FetchOrchestrator = Depends(get_fetch_orchestrator),
) -> GameDetailsResponse:
    """Game metadata only."""
    details = await orchestrator.fetch_game_details(app_id)
    if not details.success:
        response.status_code = status.HTTP_502_BAD_GATEWAY
    return GameDetailsResponse.from_result(details)


@router.get("/{app_id}/freshness")
async def get_freshness(
    app_id: str,
    orchestrator: FetchOrchestrator = Depends(get_fetch_orchestrator),
) -> dict:
    """Whether the next request for this game would go to Steam."""
    return {
        "app_id": app_id,
        "refresh_needed": await orchestrator.is_refresh_needed(app_id),
    }


@router.get("/{app_id}/languages", response_model=list[LanguageCountResponse])
async def get_review_languages(
    app_id: str,
    service: SearchService = Depends(get_search_service),
) -> list[LanguageCountResponse]:
    """Stored reviews per language."""
    stats = await service.review_language_stats(app_id)
    return [LanguageCountResponse.model_validate(s) for s in stats]
