"""Abstract repository interfaces (ports) for users and favorites."""

from abc import ABC, abstractmethod

from steam_cache.domain.entities import Favorite, User


class UserRepository(ABC):

    @abstractmethod
    async def get_by_id(self, user_id: str) -> User | None:
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> User | None:
        """Look up by normalized email."""
        ...

    @abstractmethod
    async def create(self, user: User) -> User:
        """Persist a new user.

        Raises:
            DuplicateEntityError: If the email is already registered.
        """
        ...


class FavoriteRepository(ABC):

    @abstractmethod
    async def upsert(self, favorite: Favorite) -> Favorite:
        """Insert, or keep the pair and replace its note when a new one is given."""
        ...

    @abstractmethod
    async def list_for_user(self, user_id: str) -> list[Favorite]:
        """Favorites joined with their game and aggregate, newest first."""
        ...

    @abstractmethod
    async def delete(self, user_id: str, app_id: str) -> bool:
        ...
