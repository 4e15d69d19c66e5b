"""Review feed endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from steam_cache.application.schemas import (
    KeywordReviewsResponse,
    ReviewResponse,
    ReviewsPageResponse,
)
from steam_cache.application.services import FetchOrchestrator, SearchService, parse_keywords
from steam_cache.infrastructure.dependencies import get_fetch_orchestrator, get_search_service

router = APIRouter(prefix="/games", tags=["Reviews"])


@router.get("/{app_id}/reviews", response_model=ReviewsPageResponse)
async def get_reviews(
    app_id: str,
    response: Response,
    cursor: str = "*",
    page_size: int | None = Query(None, ge=1),
    language: str = "all",
    review_filter: str = Query("recent", alias="filter"),
    orchestrator: FetchOrchestrator = Depends(get_fetch_orchestrator),
) -> ReviewsPageResponse:
    """One page of reviews. Pass the returned ``cursor`` back for the next page."""
    try:
        page = await orchestrator.fetch_reviews_page(
            app_id,
            cursor=cursor,
            page_size=page_size,
            language=language,
            review_filter=review_filter,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if not page.success:
        response.status_code = status.HTTP_502_BAD_GATEWAY
    return ReviewsPageResponse.from_result(page)


@router.get("/{app_id}/reviews/keywords", response_model=KeywordReviewsResponse)
async def get_reviews_with_keywords(
    app_id: str,
    keywords: str = Query(..., min_length=1),
    limit: int = Query(10, ge=1, le=100),
    service: SearchService = Depends(get_search_service),
) -> KeywordReviewsResponse:
    """Stored reviews of one game mentioning any keyword, most helpful first."""
    keyword_list = parse_keywords(keywords)
    if not keyword_list:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="No valid keywords given"
        )
    reviews = await service.search_reviews_by_keywords(app_id, keyword_list, limit=limit)
    return KeywordReviewsResponse(
        app_id=app_id,
        keywords=keyword_list,
        reviews=[ReviewResponse.model_validate(r) for r in reviews],
        total=len(reviews),
    )
