"""User and favorite endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from steam_cache.application.schemas import (
    FavoriteCreate,
    FavoriteResponse,
    UserCreate,
    UserResponse,
)
from steam_cache.application.services import FavoriteService
from steam_cache.domain.exceptions import DuplicateEntityError, EntityNotFoundError
from steam_cache.infrastructure.dependencies import get_favorite_service

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    data: UserCreate,
    service: FavoriteService = Depends(get_favorite_service),
) -> UserResponse:
    """Register a user by email."""
    try:
        user = await service.create_user(data.email, data.display_name)
    except DuplicateEntityError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return UserResponse.model_validate(user)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    service: FavoriteService = Depends(get_favorite_service),
) -> UserResponse:
    try:
        user = await service.get_user(user_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return UserResponse.model_validate(user)


@router.get("/{user_id}/favorites", response_model=list[FavoriteResponse])
async def list_favorites(
    user_id: str,
    service: FavoriteService = Depends(get_favorite_service),
) -> list[FavoriteResponse]:
    """Favorites with their game and review stats, newest first."""
    try:
        favorites = await service.list_favorites(user_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return [FavoriteResponse.model_validate(f) for f in favorites]


@router.post(
    "/{user_id}/favorites",
    response_model=FavoriteResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_favorite(
    user_id: str,
    data: FavoriteCreate,
    service: FavoriteService = Depends(get_favorite_service),
) -> FavoriteResponse:
    """Favorite a game; re-adding only updates the note."""
    try:
        favorite = await service.add_favorite(user_id, data.app_id, data.notes)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return FavoriteResponse.model_validate(favorite)


@router.delete("/{user_id}/favorites/{app_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_favorite(
    user_id: str,
    app_id: str,
    service: FavoriteService = Depends(get_favorite_service),
) -> None:
    if not await service.remove_favorite(user_id, app_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Favorite '{app_id}' not found for user '{user_id}'",
        )
