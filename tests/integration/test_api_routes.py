"""HTTP-level tests for the v1 API."""

import pytest
from httpx import ASGITransport, AsyncClient

from fakes import COUNTER_STRIKE_METADATA, COUNTER_STRIKE_SUMMARY, review_item
from steam_cache.config import Settings
from steam_cache.infrastructure.database import Database, SQLAlchemyEntityStore
from steam_cache.main import create_app


@pytest.fixture
def counter_strike(steam):
    steam.metadata["730"] = COUNTER_STRIKE_METADATA
    steam.summaries["730"] = COUNTER_STRIKE_SUMMARY
    steam.review_pages[("730", "*")] = {
        "reviews": [review_item(1, review="great maps"), review_item(2, review="aim aim aim")],
        "cursor": "AoJ4next",
    }
    return steam


# ── Games ──


@pytest.mark.asyncio
async def test_get_game_fetches_then_serves_from_cache(api_client, counter_strike):
    first = await api_client.get("/api/v1/games/730")
    second = await api_client.get("/api/v1/games/730")

    assert first.status_code == 200
    body = first.json()
    assert body["from_cache"] is False
    assert body["game"]["name"] == "Counter-Strike 2"
    assert body["review_stats"]["positive_percentage"] == 87.5
    assert body["side_fetch"]["status"] == "fetched"
    assert second.json()["from_cache"] is True
    assert counter_strike.count("summary") == 1


@pytest.mark.asyncio
async def test_get_game_upstream_failure_is_bad_gateway(api_client, steam):
    steam.fail_summary = True

    response = await api_client.get("/api/v1/games/730")

    assert response.status_code == 502
    body = response.json()
    assert body["success"] is False
    assert body["side_fetch"]["status"] == "placeholder"


@pytest.mark.asyncio
async def test_game_freshness_flips_after_fetch(api_client, counter_strike):
    before = await api_client.get("/api/v1/games/730/freshness")
    await api_client.get("/api/v1/games/730")
    after = await api_client.get("/api/v1/games/730/freshness")

    assert before.json() == {"app_id": "730", "refresh_needed": True}
    assert after.json()["refresh_needed"] is False


@pytest.mark.asyncio
async def test_game_details_and_top_rated(api_client, counter_strike):
    details = await api_client.get("/api/v1/games/730/details")
    await api_client.get("/api/v1/games/730")
    top = await api_client.get("/api/v1/games/top", params={"sort": "reviews"})

    assert details.status_code == 200
    assert details.json()["game"]["developers"] == ["Valve"]
    assert top.status_code == 200
    assert [g["app_id"] for g in top.json()["games"]] == ["730"]


@pytest.mark.asyncio
async def test_top_rated_rejects_unknown_sort(api_client):
    response = await api_client.get("/api/v1/games/top", params={"sort": "hype"})

    assert response.status_code == 422


# ── Reviews ──


@pytest.mark.asyncio
async def test_reviews_page_returns_next_cursor(api_client, counter_strike):
    response = await api_client.get("/api/v1/games/730/reviews", params={"page_size": 2})

    assert response.status_code == 200
    body = response.json()
    assert body["from_cache"] is False
    assert body["cursor"] == "steam:AoJ4next"
    assert [r["recommendation_id"] for r in body["reviews"]] == ["1", "2"]


@pytest.mark.asyncio
async def test_reviews_served_locally_once_fresh(api_client, counter_strike):
    await api_client.get("/api/v1/games/730/reviews", params={"page_size": 2})

    response = await api_client.get("/api/v1/games/730/reviews", params={"page_size": 1})

    body = response.json()
    assert body["from_cache"] is True
    assert body["total_count"] == 2
    assert body["cursor"] == "local:2"


@pytest.mark.asyncio
async def test_malformed_cursor_is_bad_request(api_client):
    response = await api_client.get("/api/v1/games/730/reviews", params={"cursor": "local:abc"})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_review_languages_and_keywords(api_client, counter_strike):
    await api_client.get("/api/v1/games/730/reviews")

    languages = await api_client.get("/api/v1/games/730/languages")
    keywords = await api_client.get(
        "/api/v1/games/730/reviews/keywords", params={"keywords": "MAPS, aim"}
    )

    assert languages.json() == [{"language": "english", "total": 2}]
    assert keywords.status_code == 200
    assert keywords.json()["keywords"] == ["maps", "aim"]
    assert keywords.json()["total"] == 2


@pytest.mark.asyncio
async def test_review_keywords_require_a_keyword(api_client):
    response = await api_client.get(
        "/api/v1/games/730/reviews/keywords", params={"keywords": " ,; "}
    )

    assert response.status_code == 400


# ── Search ──


@pytest.mark.asyncio
async def test_search_short_term_is_bad_request(api_client):
    response = await api_client.get("/api/v1/search", params={"q": "a"})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_search_falls_back_to_steam(api_client, steam):
    steam.search_results["hades"] = [{"appid": 1145360, "name": "Hades"}]

    response = await api_client.get("/api/v1/search", params={"q": "hades"})

    assert response.status_code == 200
    assert response.json()["games"][0]["app_id"] == "1145360"


@pytest.mark.asyncio
async def test_search_skips_steam_hits_without_app_id(api_client, steam):
    steam.search_results["portal"] = [{"appid": "", "name": "?"}, {"appid": "400", "name": "Portal"}]

    response = await api_client.get("/api/v1/search", params={"q": "portal"})

    assert response.status_code == 200
    assert [g["app_id"] for g in response.json()["games"]] == ["400"]


@pytest.mark.asyncio
async def test_search_upstream_failure_is_bad_gateway(api_client, steam):
    steam.fail_search = True

    response = await api_client.get("/api/v1/search", params={"q": "hades"})

    assert response.status_code == 502
    assert response.json()["success"] is False


@pytest.mark.asyncio
async def test_keyword_game_search(api_client, counter_strike):
    await api_client.get("/api/v1/games/730")
    await api_client.get("/api/v1/games/730/reviews")

    response = await api_client.get("/api/v1/search/keywords", params={"keywords": "maps"})

    body = response.json()
    assert body["total"] == 1
    assert body["games"][0]["game"]["app_id"] == "730"
    assert body["games"][0]["review_matches"] == 1


# ── Users and favorites ──


@pytest.mark.asyncio
async def test_user_lifecycle_with_favorites(api_client, counter_strike):
    created = await api_client.post("/api/v1/users", json={"email": "Player@Example.com"})
    user_id = created.json()["id"]

    duplicate = await api_client.post("/api/v1/users", json={"email": "player@example.com"})
    added = await api_client.post(
        f"/api/v1/users/{user_id}/favorites", json={"app_id": "440", "notes": "hats"}
    )
    listed = await api_client.get(f"/api/v1/users/{user_id}/favorites")
    removed = await api_client.delete(f"/api/v1/users/{user_id}/favorites/440")
    removed_again = await api_client.delete(f"/api/v1/users/{user_id}/favorites/440")

    assert created.status_code == 201
    assert created.json()["email"] == "player@example.com"
    assert duplicate.status_code == 409
    assert added.status_code == 201
    assert added.json()["notes"] == "hats"
    assert listed.json()[0]["game"]["name"] == "Game 440"
    assert listed.json()[0]["game"]["is_placeholder"] is True
    assert listed.json()[0]["review_stats"] is None
    assert removed.status_code == 204
    assert removed_again.status_code == 404


@pytest.mark.asyncio
async def test_unknown_user_is_not_found(api_client):
    user = await api_client.get("/api/v1/users/nobody")
    favorites = await api_client.post("/api/v1/users/nobody/favorites", json={"app_id": "730"})

    assert user.status_code == 404
    assert favorites.status_code == 404


# ── Cache ──


@pytest.mark.asyncio
async def test_cache_overview(api_client, counter_strike):
    await api_client.get("/api/v1/games/730")

    response = await api_client.get("/api/v1/cache/overview")

    assert response.status_code == 200
    body = response.json()
    assert body["total_games"] == 1
    assert body["total_review_aggregates"] == 1
    assert body["backlog_estimate"] == 0


@pytest.mark.asyncio
async def test_preload_runs_in_background(api_client, counter_strike):
    response = await api_client.post("/api/v1/cache/preload", json={"app_ids": ["730", "440"]})

    assert response.status_code == 202
    assert response.json()["total"] == 2
    # ASGITransport waits for background tasks before returning.
    assert counter_strike.count("summary") == 2


@pytest.mark.asyncio
async def test_preload_defaults_to_configured_apps(api_client, steam):
    response = await api_client.post("/api/v1/cache/preload", json={"limit": 3})

    assert response.status_code == 202
    assert response.json()["total"] == 3


@pytest.mark.asyncio
async def test_unreachable_store_is_service_unavailable(tmp_path, steam):
    database = Database(f"sqlite:///{tmp_path / 'missing' / 'steam_cache.db'}")
    app = create_app(Settings(database_url=database.url))
    app.state.entity_store = SQLAlchemyEntityStore(database)
    app.state.steam_source = steam

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/games/730")
    await database.dispose()

    assert response.status_code == 503
    assert steam.calls == []
