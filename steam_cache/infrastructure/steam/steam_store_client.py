"""Steam store client — implements the SteamSource interface.

Talks to the public Steam endpoints with httpx:

    appdetails     {store}/api/appdetails?appids=<id>&l=<locale>
    appreviews     {store}/appreviews/<id>?json=1&...
    SearchApps     {community}/actions/SearchApps/<term>

No API key is needed. Nothing is retried here.
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter, ValidationError

from steam_cache.application.interfaces.steam_source import SteamSource
from steam_cache.application.schemas.steam import (
    AppMetadataEnvelope,
    AppSearchHitPayload,
    ReviewsPageEnvelope,
    ReviewSummaryEnvelope,
)
from steam_cache.domain.exceptions import InvalidPayload, UpstreamUnavailable

logger = logging.getLogger(__name__)

_SEARCH_HITS = TypeAdapter(list[AppSearchHitPayload])


class SteamStoreClient(SteamSource):
    """Infrastructure adapter — connects to the Steam store and community sites.

    An ``httpx.AsyncClient`` may be injected (tests use ``MockTransport``);
    otherwise a short-lived client is created per call.
    """

    def __init__(
        self,
        store_base_url: str = "https://store.steampowered.com",
        community_base_url: str = "https://steamcommunity.com",
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._store_base_url = store_base_url.rstrip("/")
        self._community_base_url = community_base_url.rstrip("/")
        self._timeout = timeout
        self._http_client = http_client

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def _get_json(self, source: str, url: str, params: dict[str, Any] | None = None) -> Any:
        client = await self._get_client()
        should_close = self._http_client is None

        try:
            response = await client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise UpstreamUnavailable(source, f"{type(exc).__name__}: {exc}") from exc
        finally:
            if should_close:
                await client.aclose()

        if response.status_code < 200 or response.status_code >= 300:
            raise UpstreamUnavailable(source, response.text[:200], status_code=response.status_code)
        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamUnavailable(
                source, "response body is not JSON", status_code=response.status_code
            ) from exc

    async def get_app_metadata(self, app_id: str, locale: str) -> AppMetadataEnvelope:
        data = await self._get_json(
            "appdetails",
            f"{self._store_base_url}/api/appdetails",
            params={"appids": app_id, "l": locale},
        )
        if not isinstance(data, dict) or str(app_id) not in data:
            raise InvalidPayload("Game", f"appdetails answer does not mention app {app_id}")
        try:
            envelope = AppMetadataEnvelope.model_validate(data[str(app_id)] or {})
        except ValidationError as exc:
            raise InvalidPayload("Game", str(exc)) from exc
        logger.debug("appdetails for %s: success=%s", app_id, envelope.success)
        return envelope

    async def get_review_summary(
        self, app_id: str, first_page_size: int = 0
    ) -> ReviewSummaryEnvelope:
        data = await self._get_json(
            "appreviews",
            f"{self._store_base_url}/appreviews/{quote(str(app_id), safe='')}",
            params={
                "json": 1,
                "num_per_page": max(0, first_page_size),
                "cursor": "*",
                "filter": "recent",
                "language": "all",
                "purchase_type": "all",
            },
        )
        if not isinstance(data, dict):
            raise InvalidPayload("ReviewAggregate", "appreviews answer is not an object")
        try:
            return ReviewSummaryEnvelope(
                success=bool(data.get("success")),
                summary=data.get("query_summary"),
                reviews=data.get("reviews") or [],
                next_cursor=data.get("cursor"),
            )
        except ValidationError as exc:
            raise InvalidPayload("ReviewAggregate", str(exc)) from exc

    async def get_reviews_page(
        self,
        app_id: str,
        cursor: str,
        page_size: int,
        review_filter: str = "recent",
        language: str = "all",
    ) -> ReviewsPageEnvelope:
        data = await self._get_json(
            "appreviews",
            f"{self._store_base_url}/appreviews/{quote(str(app_id), safe='')}",
            params={
                "json": 1,
                "num_per_page": page_size,
                "cursor": cursor or "*",
                "language": language,
                "filter": review_filter,
                "purchase_type": "all",
            },
        )
        if not isinstance(data, dict):
            raise InvalidPayload("Review", "appreviews answer is not an object")
        try:
            return ReviewsPageEnvelope(
                success=bool(data.get("success")),
                reviews=data.get("reviews") or [],
                next_cursor=data.get("cursor"),
                summary=data.get("query_summary"),
            )
        except ValidationError as exc:
            raise InvalidPayload("Review", str(exc)) from exc

    async def search_apps(self, term: str) -> list[AppSearchHitPayload]:
        data = await self._get_json(
            "SearchApps",
            f"{self._community_base_url}/actions/SearchApps/{quote(term, safe='')}",
        )
        if data is None:
            return []
        try:
            return _SEARCH_HITS.validate_python(data)
        except ValidationError as exc:
            raise InvalidPayload("SearchCacheEntry", str(exc)) from exc
