"""Integration tests for the FetchOrchestrator against a real SQLite store."""

import asyncio

import pytest

from fakes import COUNTER_STRIKE_METADATA, COUNTER_STRIKE_SUMMARY, review_item
from steam_cache.application.schemas.steam import ReviewItemPayload
from steam_cache.application.services import FetchOrchestrator, FreshnessOracle
from steam_cache.domain.entities import CachePolicy, SideFetchStatus
from steam_cache.domain.exceptions import StoreUnavailable
from steam_cache.infrastructure.database import Database, SQLAlchemyEntityStore


@pytest.fixture
def counter_strike(steam):
    steam.metadata["730"] = COUNTER_STRIKE_METADATA
    steam.summaries["730"] = COUNTER_STRIKE_SUMMARY
    return steam


@pytest.mark.asyncio
async def test_first_request_goes_to_steam_and_is_stored(orchestrator, counter_strike):
    assert await orchestrator.is_refresh_needed("730") is True

    bundle = await orchestrator.fetch_game_bundle("730")

    assert bundle.success is True
    assert bundle.from_cache is False
    assert bundle.game.name == "Counter-Strike 2"
    assert bundle.aggregate.total_reviews == 8_000_000
    assert bundle.side_fetch.status is SideFetchStatus.FETCHED
    assert counter_strike.count("metadata") == 1
    assert counter_strike.count("summary") == 1


@pytest.mark.asyncio
async def test_fresh_data_is_served_without_calling_steam(orchestrator, counter_strike):
    first = await orchestrator.fetch_game_bundle("730")
    calls_after_first = len(counter_strike.calls)

    assert await orchestrator.is_refresh_needed("730") is False
    second = await orchestrator.fetch_game_bundle("730")

    assert second.from_cache is True
    assert len(counter_strike.calls) == calls_after_first
    assert second.game == first.game
    assert second.aggregate == first.aggregate


@pytest.mark.asyncio
async def test_stale_aggregate_is_refreshed_without_refetching_metadata(
    orchestrator, counter_strike, clock
):
    await orchestrator.fetch_game_bundle("730")
    clock.advance(hours=25)

    assert await orchestrator.is_refresh_needed("730") is True
    bundle = await orchestrator.fetch_game_bundle("730")

    assert bundle.from_cache is False
    assert bundle.side_fetch.status is SideFetchStatus.SKIPPED
    assert bundle.aggregate.updated_at == clock()
    assert counter_strike.count("metadata") == 1
    assert counter_strike.count("summary") == 2


@pytest.mark.asyncio
async def test_longer_freshness_window_keeps_serving_from_store(store, counter_strike, clock):
    policy = CachePolicy(threshold_hours=26)
    orchestrator = FetchOrchestrator(
        store, counter_strike, policy, freshness=FreshnessOracle(26, clock=clock)
    )
    await orchestrator.fetch_game_bundle("730")
    clock.advance(hours=25)

    bundle = await orchestrator.fetch_game_bundle("730")

    assert bundle.from_cache is True


@pytest.mark.asyncio
async def test_metadata_failure_creates_a_placeholder(orchestrator, steam):
    steam.fail_metadata = True
    steam.summaries["730"] = COUNTER_STRIKE_SUMMARY

    bundle = await orchestrator.fetch_game_bundle("730")

    assert bundle.success is True
    assert bundle.game.name == "Game 730"
    assert bundle.game.is_placeholder is True
    assert bundle.side_fetch.status is SideFetchStatus.PLACEHOLDER
    assert "connection refused" in bundle.side_fetch.error


@pytest.mark.asyncio
async def test_placeholder_is_upgraded_on_the_next_refresh(orchestrator, steam, clock):
    steam.fail_metadata = True
    steam.summaries["730"] = COUNTER_STRIKE_SUMMARY
    await orchestrator.fetch_game_bundle("730")

    steam.fail_metadata = False
    steam.metadata["730"] = COUNTER_STRIKE_METADATA
    clock.advance(hours=25)
    bundle = await orchestrator.fetch_game_bundle("730")

    assert bundle.game.name == "Counter-Strike 2"
    assert bundle.game.is_placeholder is False
    assert bundle.side_fetch.status is SideFetchStatus.FETCHED


@pytest.mark.asyncio
async def test_summary_failure_reports_error_but_keeps_placeholder(orchestrator, store, steam):
    steam.fail_metadata = True
    steam.fail_summary = True

    bundle = await orchestrator.fetch_game_bundle("730")

    assert bundle.success is False
    assert bundle.from_cache is False
    assert "bad gateway" in bundle.message
    async with store.transaction() as scope:
        game = await scope.games.get("730")
        aggregate = await scope.aggregates.get("730")
    assert game.name == "Game 730"
    assert aggregate is None


@pytest.mark.asyncio
async def test_unsuccessful_summary_envelope_is_a_failure(orchestrator, steam):
    steam.metadata["730"] = COUNTER_STRIKE_METADATA

    bundle = await orchestrator.fetch_game_bundle("730")

    assert bundle.success is False
    assert bundle.side_fetch.status is SideFetchStatus.FETCHED


@pytest.mark.asyncio
async def test_get_review_aggregate_never_calls_steam(orchestrator, counter_strike):
    assert await orchestrator.get_review_aggregate("730") is None
    await orchestrator.fetch_game_bundle("730")
    calls = len(counter_strike.calls)

    aggregate = await orchestrator.get_review_aggregate("730")

    assert aggregate.review_score_desc == "Very Positive"
    assert len(counter_strike.calls) == calls


@pytest.mark.asyncio
async def test_game_details_are_cached_after_first_fetch(orchestrator, counter_strike):
    first = await orchestrator.fetch_game_details("730")
    second = await orchestrator.fetch_game_details("730")

    assert first.from_cache is False
    assert second.from_cache is True
    assert second.game.developers == ["Valve"]
    assert counter_strike.count("metadata") == 1


@pytest.mark.asyncio
async def test_game_details_failure_does_not_create_placeholder(orchestrator, store, steam):
    steam.fail_metadata = True

    details = await orchestrator.fetch_game_details("730")

    assert details.success is False
    assert details.game is None
    async with store.transaction() as scope:
        assert await scope.games.get("730") is None


@pytest.mark.asyncio
async def test_unreachable_store_raises_store_unavailable(tmp_path, steam):
    database = Database(f"sqlite:///{tmp_path / 'missing' / 'dir' / 'cache.db'}")
    orchestrator = FetchOrchestrator(SQLAlchemyEntityStore(database), steam, CachePolicy())

    try:
        with pytest.raises(StoreUnavailable):
            await orchestrator.fetch_game_bundle("730")
        assert await SQLAlchemyEntityStore(database).health_check() is False
    finally:
        await database.dispose()
    assert steam.calls == []


@pytest.mark.asyncio
async def test_bundle_fetch_stores_the_first_review_page(orchestrator, counter_strike, store):
    counter_strike.review_pages[("730", "*")] = {
        "reviews": [review_item(1), review_item(2)],
        "cursor": "AoJ4next",
    }

    await orchestrator.fetch_game_bundle("730")

    assert counter_strike.calls[-1] == ("summary", "730", 10)
    assert counter_strike.count("reviews") == 0
    async with store.transaction() as scope:
        assert await scope.reviews.count("730") == 2


@pytest.mark.asyncio
async def test_stale_bundle_refresh_pulls_newest_reviews(orchestrator, counter_strike, upserts, clock):
    await upserts.upsert_reviews("730", [ReviewItemPayload(**review_item(1))])
    clock.advance(hours=30)
    counter_strike.review_pages[("730", "*")] = {"reviews": [review_item(99)], "cursor": "AoJ4next"}

    bundle = await orchestrator.fetch_game_bundle("730")
    page = await orchestrator.fetch_reviews_page("730", "*")

    assert bundle.success is True
    assert page.from_cache is True
    assert "99" in [r.recommendation_id for r in page.reviews]
    assert page.total_count == 2


@pytest.mark.asyncio
async def test_bad_first_review_page_keeps_bundle_but_leaves_feed_stale(
    orchestrator, counter_strike, store
):
    counter_strike.review_pages[("730", "*")] = {
        "reviews": [review_item(1), review_item(2, recommendationid=None)],
        "cursor": "AoJ4next",
    }

    bundle = await orchestrator.fetch_game_bundle("730")

    assert bundle.success is True
    assert bundle.aggregate.total_reviews == 8_000_000
    assert await orchestrator.is_refresh_needed("730") is True
    async with store.transaction() as scope:
        assert await scope.reviews.count("730") == 0


@pytest.mark.asyncio
async def test_concurrent_bundle_and_review_requests_store_each_row_once(
    orchestrator, counter_strike, store
):
    counter_strike.review_pages[("730", "*")] = {
        "reviews": [review_item(n) for n in range(1, 6)],
        "cursor": "AoJ4next",
    }

    results = await asyncio.gather(
        *[orchestrator.fetch_game_bundle("730") for _ in range(5)],
        *[orchestrator.fetch_reviews_page("730", "*") for _ in range(5)],
        return_exceptions=True,
    )

    assert [r for r in results if isinstance(r, BaseException)] == []
    assert all(r.success for r in results)
    async with store.transaction() as scope:
        games = await scope.games.search_by_name("Counter-Strike", 10)
        assert [g.app_id for g in games] == ["730"]
        assert await scope.aggregates.get("730") is not None
        assert await scope.reviews.count("730") == 5
