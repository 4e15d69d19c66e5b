"""Abstract repository interface (port) for remembered search results."""

from abc import ABC, abstractmethod

from steam_cache.domain.entities import SearchCacheEntry


class SearchCacheRepository(ABC):

    @abstractmethod
    async def insert_if_absent(self, entry: SearchCacheEntry) -> bool:
        """Insert unless (search_term, app_id) exists. Returns True if inserted."""
        ...

    @abstractmethod
    async def search(self, term: str, limit: int = 10) -> list[SearchCacheEntry]:
        """Entries whose term contains ``term``, one per app id, newest first."""
        ...
