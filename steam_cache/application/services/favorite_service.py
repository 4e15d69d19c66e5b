"""Application service (use case) for users and their favorite games."""

from steam_cache.application.interfaces import EntityStore
from steam_cache.application.services.upsert_coordinator import UpsertCoordinator
from steam_cache.domain.entities import Favorite, User, normalize_email
from steam_cache.domain.exceptions import DuplicateEntityError, EntityNotFoundError


class FavoriteService:
    """Orchestrates user and favorite logic. Depends on the store port (DI)."""

    def __init__(self, store: EntityStore, upserts: UpsertCoordinator):
        self._store = store
        self._upserts = upserts

    async def create_user(self, email: str, display_name: str | None = None) -> User:
        normalized = normalize_email(email)
        if not normalized:
            raise ValueError("email is required")
        async with self._store.transaction() as scope:
            if await scope.users.get_by_email(normalized) is not None:
                raise DuplicateEntityError("User", "email", normalized)
            return await scope.users.create(User(email=normalized, display_name=display_name))

    async def get_user(self, user_id: str) -> User:
        async with self._store.transaction() as scope:
            user = await scope.users.get_by_id(user_id)
        if user is None:
            raise EntityNotFoundError("User", user_id)
        return user

    async def add_favorite(self, user_id: str, app_id: str, notes: str | None = None) -> Favorite:
        """Favorite a game, creating a placeholder game row if it was never fetched.

        Re-adding keeps the pair and only replaces the note when one is given.
        """
        await self.get_user(user_id)
        await self._upserts.upsert_placeholder_game(app_id)
        async with self._store.transaction() as scope:
            return await scope.favorites.upsert(
                Favorite(user_id=user_id, app_id=str(app_id), notes=notes)
            )

    async def list_favorites(self, user_id: str) -> list[Favorite]:
        await self.get_user(user_id)
        async with self._store.transaction() as scope:
            return await scope.favorites.list_for_user(user_id)

    async def remove_favorite(self, user_id: str, app_id: str) -> bool:
        """Returns False when the favorite did not exist."""
        async with self._store.transaction() as scope:
            return await scope.favorites.delete(user_id, str(app_id))
