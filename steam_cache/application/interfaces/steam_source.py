"""Abstract Steam source interface — port for the upstream store API.

The application layer only needs four calls. Cursors are opaque: the
caller passes them through and never interprets them.
"""

from abc import ABC, abstractmethod

from steam_cache.application.schemas.steam import (
    AppMetadataEnvelope,
    AppSearchHitPayload,
    ReviewsPageEnvelope,
    ReviewSummaryEnvelope,
)


class SteamSource(ABC):
    """Port — what the cache needs from Steam."""

    @abstractmethod
    async def get_app_metadata(self, app_id: str, locale: str) -> AppMetadataEnvelope:
        """Fetch store metadata for one application.

        Raises:
            UpstreamUnavailable: On transport errors or non-2xx answers.
            InvalidPayload: If the answer does not describe ``app_id``.
        """
        ...

    @abstractmethod
    async def get_review_summary(
        self, app_id: str, first_page_size: int = 0
    ) -> ReviewSummaryEnvelope:
        """Fetch the review counters for one application.

        With ``first_page_size`` > 0 the same call also returns the first
        page of the feed (newest first) and Steam's cursor for the next one.
        """
        ...

    @abstractmethod
    async def get_reviews_page(
        self,
        app_id: str,
        cursor: str,
        page_size: int,
        review_filter: str = "recent",
        language: str = "all",
    ) -> ReviewsPageEnvelope:
        """Fetch one page of the review feed. ``"*"`` is the start of the feed."""
        ...

    @abstractmethod
    async def search_apps(self, term: str) -> list[AppSearchHitPayload]:
        """Search applications by name."""
        ...
