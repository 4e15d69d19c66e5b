"""Preload — warm the cache for a list of application ids.

Apps are refreshed one after another through the FetchOrchestrator, with
a pause between Steam round trips. A failing app is counted and skipped;
only store outages stop the run.
"""

import asyncio
import logging
from dataclasses import dataclass, field

from steam_cache.application.services.fetch_orchestrator import FetchOrchestrator

logger = logging.getLogger(__name__)


@dataclass
class PreloadReport:
    requested: int = 0
    loaded: int = 0
    skipped: int = 0
    errors: int = 0
    failed_app_ids: list[str] = field(default_factory=list)


class PreloadService:

    def __init__(self, orchestrator: FetchOrchestrator, delay_seconds: float = 3.0):
        self._orchestrator = orchestrator
        self._delay_seconds = delay_seconds

    async def preload(self, app_ids: list[str]) -> PreloadReport:
        report = PreloadReport(requested=len(app_ids))
        logger.info("Preloading %d apps", len(app_ids))

        for index, app_id in enumerate(app_ids, start=1):
            if not await self._orchestrator.is_refresh_needed(app_id):
                report.skipped += 1
                continue

            bundle = await self._orchestrator.fetch_game_bundle(app_id)
            if bundle.success:
                report.loaded += 1
                logger.info("[%d/%d] App %s loaded", index, len(app_ids), app_id)
            else:
                report.errors += 1
                report.failed_app_ids.append(app_id)
                logger.warning("[%d/%d] App %s failed: %s", index, len(app_ids), app_id, bundle.message)

            if self._delay_seconds > 0 and index < len(app_ids):
                await asyncio.sleep(self._delay_seconds)

        logger.info(
            "Preload finished: %d loaded, %d skipped, %d errors",
            report.loaded,
            report.skipped,
            report.errors,
        )
        return report
