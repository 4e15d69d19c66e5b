"""Pydantic DTOs for users and favorites."""

from datetime import datetime

from pydantic import BaseModel, Field

from .games import GameResponse, ReviewAggregateResponse


class UserCreate(BaseModel):
    """Schema for registering a user."""

    email: str = Field(..., min_length=3, max_length=320, examples=["player@example.com"])
    display_name: str | None = Field(None, max_length=255)


class UserResponse(BaseModel):
    id: str
    email: str
    display_name: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class FavoriteCreate(BaseModel):
    """Schema for favoriting a game — the note is optional."""

    app_id: str = Field(..., min_length=1, max_length=32, examples=["730"])
    notes: str | None = None


class FavoriteResponse(BaseModel):
    user_id: str
    app_id: str
    notes: str | None
    created_at: datetime
    game: GameResponse | None = None
    review_stats: ReviewAggregateResponse | None = Field(None, validation_alias="aggregate")

    model_config = {"from_attributes": True}
