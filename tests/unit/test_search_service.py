"""Unit tests for search input handling."""

import pytest

from fakes import FakeSteamSource
from steam_cache.application.services import SearchService, parse_keywords


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("graphics, story", ["graphics", "story"]),
        ("Graphics;STORY  bugs", ["graphics", "story", "bugs"]),
        ("bugs bugs,Bugs", ["bugs"]),
        (" ,; ", []),
        (None, []),
        (["fun game", "Lag"], ["fun", "game", "lag"]),
    ],
)
def test_parse_keywords(raw, expected):
    assert parse_keywords(raw) == expected


class _UnusedStore:
    """Fails loudly if the service touches the store."""

    def transaction(self):
        raise AssertionError("store should not be used")

    async def health_check(self) -> bool:
        return True


@pytest.mark.asyncio
@pytest.mark.parametrize("term", ["", "a", "  b  ", None])
async def test_short_terms_are_rejected_without_any_lookup(term):
    steam = FakeSteamSource()
    service = SearchService(_UnusedStore(), steam, upserts=None)

    result = await service.search_games(term)

    assert result.success is False
    assert result.games == []
    assert steam.calls == []


@pytest.mark.asyncio
async def test_empty_keyword_lists_return_nothing():
    service = SearchService(_UnusedStore(), FakeSteamSource(), upserts=None)

    assert await service.search_games_by_keywords([]) == []
    assert await service.search_reviews_by_keywords("730", []) == []
