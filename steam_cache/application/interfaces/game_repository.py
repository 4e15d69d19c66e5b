"""Abstract repository interface (port) for games."""

from abc import ABC, abstractmethod

from steam_cache.domain.entities import Game, RankedGame


class GameRepository(ABC):
    """Port for game persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get(self, app_id: str) -> Game | None:
        """Return the stored game, or None when it was never fetched."""
        ...

    @abstractmethod
    async def upsert(self, game: Game) -> Game:
        """Insert the game or overwrite every column of the existing row."""
        ...

    @abstractmethod
    async def insert_if_absent(self, game: Game) -> bool:
        """Insert the game unless a row already exists. Returns True if inserted."""
        ...

    @abstractmethod
    async def search_by_name(self, term: str, limit: int = 10) -> list[Game]:
        """Case-insensitive name search: exact, then prefix, then substring."""
        ...

    @abstractmethod
    async def top_rated(
        self, limit: int = 50, min_reviews: int = 100, sort: str = "rating"
    ) -> list[RankedGame]:
        """Games with at least ``min_reviews`` reviews, ordered by ``sort``."""
        ...
