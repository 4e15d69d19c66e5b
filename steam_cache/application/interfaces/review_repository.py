"""Abstract repository interface (port) for reviews and the review feed state."""

from abc import ABC, abstractmethod
from datetime import datetime

from steam_cache.domain.entities import KeywordGameMatch, LanguageCount, Review


class ReviewRepository(ABC):
    """Port for review persistence."""

    @abstractmethod
    async def insert_if_absent(self, review: Review) -> bool:
        """Insert unless the recommendation id exists. Returns True if inserted.

        Raises:
            InvalidPayload: If the row violates a store constraint.
        """
        ...

    @abstractmethod
    async def get_many(self, recommendation_ids: list[str]) -> list[Review]:
        """Stored rows for the given ids, in the order asked; unknown ids are skipped."""
        ...

    @abstractmethod
    async def list_page(
        self, app_id: str, *, limit: int, offset: int, language: str | None = None
    ) -> tuple[list[Review], int]:
        """Return one page (newest first) and the total matching count.

        ``language`` is a normalized stored value, or None for all languages.
        Page and total are read from the same snapshot.
        """
        ...

    @abstractmethod
    async def count(self, app_id: str, language: str | None = None) -> int:
        ...

    @abstractmethod
    async def get_feed_last_updated(self, app_id: str) -> datetime | None:
        """Latest of the feed sync mark and the newest ingested review."""
        ...

    @abstractmethod
    async def mark_feed_synced(self, app_id: str, synced_at: datetime) -> None:
        """Record a successful answer from the upstream review feed."""
        ...

    @abstractmethod
    async def language_stats(self, app_id: str) -> list[LanguageCount]:
        ...

    @abstractmethod
    async def search_games_by_keywords(
        self, keywords: list[str], *, limit: int = 20, min_matches: int = 1
    ) -> list[KeywordGameMatch]:
        """Rank games by how well their stored reviews match the keywords."""
        ...

    @abstractmethod
    async def search_by_keywords(
        self, app_id: str, keywords: list[str], *, limit: int = 10
    ) -> list[Review]:
        """Reviews of one game mentioning any keyword, most helpful first."""
        ...
