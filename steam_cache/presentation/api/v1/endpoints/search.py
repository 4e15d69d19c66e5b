"""Search endpoints — by game name and by review keywords."""

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from steam_cache.application.schemas import (
    GameSearchHitResponse,
    GameSearchResponse,
    KeywordGameMatchResponse,
    KeywordSearchResponse,
)
from steam_cache.application.services import SearchService, parse_keywords
from steam_cache.application.services.search_service import MIN_TERM_LENGTH
from steam_cache.infrastructure.dependencies import get_search_service

router = APIRouter(prefix="/search", tags=["Search"])


@router.get("", response_model=GameSearchResponse)
async def search_games(
    response: Response,
    q: str = Query(..., description="Game name or part of it"),
    limit: int = Query(10, ge=1, le=50),
    service: SearchService = Depends(get_search_service),
) -> GameSearchResponse:
    """Search games by name: stored games first, then cached hits, then Steam."""
    if len(q.strip()) < MIN_TERM_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Type at least {MIN_TERM_LENGTH} characters to search",
        )
    result = await service.search_games(q, limit=limit)
    if not result.success:
        response.status_code = status.HTTP_502_BAD_GATEWAY
    return GameSearchResponse(
        success=result.success,
        from_cache=result.from_cache,
        message=result.message,
        games=[GameSearchHitResponse.model_validate(g) for g in result.games],
    )


@router.get("/keywords", response_model=KeywordSearchResponse)
async def search_games_by_keywords(
    keywords: str = Query(..., min_length=1, description="Separated by commas, semicolons or spaces"),
    limit: int = Query(20, ge=1, le=100),
    min_matches: int = Query(1, ge=1),
    service: SearchService = Depends(get_search_service),
) -> KeywordSearchResponse:
    """Games whose stored reviews mention the keywords, most relevant first."""
    keyword_list = parse_keywords(keywords)
    if not keyword_list:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="No valid keywords given"
        )
    matches = await service.search_games_by_keywords(
        keyword_list, limit=limit, min_matches=min_matches
    )
    return KeywordSearchResponse(
        keywords=keyword_list,
        games=[KeywordGameMatchResponse.model_validate(m) for m in matches],
        total=len(matches),
    )
