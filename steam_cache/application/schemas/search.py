"""Pydantic DTOs for name and keyword search."""

from pydantic import BaseModel

from .games import RankedGameResponse


class GameSearchHitResponse(BaseModel):
    app_id: str
    name: str
    header_image: str

    model_config = {"from_attributes": True}


class GameSearchResponse(BaseModel):
    success: bool
    from_cache: bool
    message: str = ""
    games: list[GameSearchHitResponse]


class KeywordGameMatchResponse(BaseModel):
    game: RankedGameResponse
    review_matches: int
    keyword_coverage: int
    helpful_votes: int
    relevance_score: float

    model_config = {"from_attributes": True}


class KeywordSearchResponse(BaseModel):
    success: bool = True
    keywords: list[str]
    games: list[KeywordGameMatchResponse]
    total: int
