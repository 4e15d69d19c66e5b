"""Integration tests for idempotent, atomic upserts into the SQLite store."""

import pytest

from fakes import COUNTER_STRIKE_METADATA, COUNTER_STRIKE_SUMMARY, review_item
from steam_cache.application.schemas.steam import (
    AppMetadataPayload,
    AppSearchHitPayload,
    ReviewItemPayload,
    ReviewSummaryPayload,
)
from steam_cache.domain.exceptions import InvalidPayload


def _reviews(*items: dict) -> list[ReviewItemPayload]:
    return [ReviewItemPayload.model_validate(item) for item in items]


async def _count_reviews(store, app_id: str = "730") -> int:
    async with store.transaction() as scope:
        return await scope.reviews.count(app_id)


@pytest.mark.asyncio
async def test_review_batch_is_idempotent(store, upserts):
    batch = _reviews(review_item(1), review_item(2))

    first = await upserts.upsert_reviews("730", batch)
    second = await upserts.upsert_reviews("730", batch)

    assert first == 2
    assert second == 0
    assert await _count_reviews(store) == 2


@pytest.mark.asyncio
async def test_first_write_wins_for_reviews(store, upserts):
    await upserts.upsert_reviews("730", _reviews(review_item(1, review="Original text")))
    await upserts.upsert_reviews("730", _reviews(review_item(1, review="Edited text", votes_up=99)))

    async with store.transaction() as scope:
        reviews, total = await scope.reviews.list_page("730", limit=10, offset=0)

    assert total == 1
    assert reviews[0].review == "Original text"
    assert reviews[0].votes_up == 1


@pytest.mark.asyncio
async def test_constraint_violation_rolls_back_whole_batch(store, upserts):
    batch = _reviews(
        review_item(1),
        review_item(2),
        review_item(3, votes_up=-5),
        review_item(4),
        review_item(5),
    )

    with pytest.raises(InvalidPayload):
        await upserts.upsert_reviews("730", batch)

    assert await _count_reviews(store) == 0


@pytest.mark.asyncio
async def test_missing_recommendation_id_rolls_back_whole_batch(store, upserts):
    batch = _reviews(review_item(1), review_item(2), review_item(3, recommendationid=None))

    with pytest.raises(InvalidPayload):
        await upserts.upsert_reviews("730", batch)

    assert await _count_reviews(store) == 0
    async with store.transaction() as scope:
        assert await scope.reviews.get_feed_last_updated("730") is None


@pytest.mark.asyncio
async def test_game_upsert_overwrites_every_column(store, upserts, clock):
    await upserts.upsert_game("730", AppMetadataPayload.model_validate(COUNTER_STRIKE_METADATA))
    clock.advance(hours=1)
    stored = await upserts.upsert_game(
        "730", AppMetadataPayload(name="Counter-Strike 2", developers=["Valve", "Hidden Path"])
    )

    assert stored.short_description is None
    assert stored.developers == ["Valve", "Hidden Path"]
    assert stored.updated_at == clock()
    async with store.transaction() as scope:
        assert (await scope.games.get("730")).release_date is None


@pytest.mark.asyncio
async def test_placeholder_never_overwrites_real_metadata(upserts):
    await upserts.upsert_game("730", AppMetadataPayload.model_validate(COUNTER_STRIKE_METADATA))

    game = await upserts.upsert_placeholder_game("730")

    assert game.name == "Counter-Strike 2"
    assert game.is_placeholder is False


@pytest.mark.asyncio
async def test_placeholder_is_replaced_by_real_metadata(upserts):
    placeholder = await upserts.upsert_placeholder_game("730")
    real = await upserts.upsert_game("730", AppMetadataPayload.model_validate(COUNTER_STRIKE_METADATA))

    assert placeholder.name == "Game 730"
    assert placeholder.is_placeholder is True
    assert real.is_placeholder is False


@pytest.mark.asyncio
async def test_aggregate_is_replaced_wholesale(store, upserts, clock):
    await upserts.upsert_review_aggregate(
        "730", ReviewSummaryPayload.model_validate(COUNTER_STRIKE_SUMMARY)
    )
    clock.advance(hours=2)
    stored = await upserts.upsert_review_aggregate(
        "730", ReviewSummaryPayload(total_reviews=10, total_positive=4, total_negative=6)
    )

    assert stored.total_reviews == 10
    assert stored.review_score_desc is None
    assert stored.updated_at == clock()


@pytest.mark.asyncio
async def test_review_batch_marks_the_feed_synced(store, upserts, clock):
    await upserts.upsert_reviews("730", [])

    async with store.transaction() as scope:
        assert await scope.reviews.get_feed_last_updated("730") == clock()


@pytest.mark.asyncio
async def test_search_results_are_stored_lower_case_and_once(store, upserts):
    hits = [
        AppSearchHitPayload(appid=620, name="Portal 2"),
        AppSearchHitPayload(appid=400, name="Portal"),
    ]

    assert await upserts.save_search_results("  PORTAL ", hits) == 2
    assert await upserts.save_search_results("portal", hits) == 0

    async with store.transaction() as scope:
        entries = await scope.search_cache.search("portal")
    assert {entry.app_id for entry in entries} == {"620", "400"}
    assert all(entry.search_term == "portal" for entry in entries)
