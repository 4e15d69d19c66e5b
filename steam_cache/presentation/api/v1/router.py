"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from steam_cache.presentation.api.v1.endpoints.health import router as health_router
from steam_cache.presentation.api.v1.endpoints.games import router as games_router
from steam_cache.presentation.api.v1.endpoints.reviews import router as reviews_router
from steam_cache.presentation.api.v1.endpoints.search import router as search_router
from steam_cache.presentation.api.v1.endpoints.users import router as users_router
from steam_cache.presentation.api.v1.endpoints.cache import router as cache_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(games_router)
router.include_router(reviews_router)
router.include_router(search_router)
router.include_router(users_router)
router.include_router(cache_router)
