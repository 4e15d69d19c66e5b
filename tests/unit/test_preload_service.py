"""Unit tests for the PreloadService."""

import pytest

from steam_cache.application.services import PreloadService
from steam_cache.domain.entities import GameBundle
from steam_cache.domain.exceptions import StoreUnavailable


class FakeOrchestrator:
    """Answers from fixed sets of fresh and failing app ids."""

    def __init__(self, fresh=(), failing=(), broken_store=False):
        self.fresh = set(fresh)
        self.failing = set(failing)
        self.broken_store = broken_store
        self.fetched: list[str] = []

    async def is_refresh_needed(self, app_id: str) -> bool:
        if self.broken_store:
            raise StoreUnavailable("connection refused")
        return app_id not in self.fresh

    async def fetch_game_bundle(self, app_id: str) -> GameBundle:
        self.fetched.append(app_id)
        if app_id in self.failing:
            return GameBundle(success=False, from_cache=False, message="Steam down")
        return GameBundle(success=True, from_cache=False)


@pytest.mark.asyncio
async def test_preload_counts_loaded_skipped_and_failed():
    orchestrator = FakeOrchestrator(fresh={"570"}, failing={"440"})
    service = PreloadService(orchestrator, delay_seconds=0)

    report = await service.preload(["730", "570", "440", "620"])

    assert report.requested == 4
    assert report.loaded == 2
    assert report.skipped == 1
    assert report.errors == 1
    assert report.failed_app_ids == ["440"]
    assert orchestrator.fetched == ["730", "440", "620"]


@pytest.mark.asyncio
async def test_preload_stops_on_store_outage():
    service = PreloadService(FakeOrchestrator(broken_store=True), delay_seconds=0)

    with pytest.raises(StoreUnavailable):
        await service.preload(["730"])


@pytest.mark.asyncio
async def test_preload_waits_between_fetches(monkeypatch):
    delays: list[float] = []

    async def fake_sleep(seconds: float) -> None:
        delays.append(seconds)

    monkeypatch.setattr("steam_cache.application.services.preload_service.asyncio.sleep", fake_sleep)
    service = PreloadService(FakeOrchestrator(), delay_seconds=3.0)

    await service.preload(["730", "570", "440"])

    assert delays == [3.0, 3.0]
