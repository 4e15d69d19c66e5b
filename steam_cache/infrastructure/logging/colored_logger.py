"""Colored cache logger — ANSI-colored console logging for cache decisions.

Provides a CacheLogger with color-coded output per cache stage, making it
easy to see in the terminal whether a request was answered locally or
went to Steam, and what was written back.

Color scheme:
    🔵 Blue    — Freshness check
    🟢 Green   — Cache hit / Upsert
    🟡 Yellow  — Remote fetch (Steam)
    🟣 Magenta — Placeholder created
    🔴 Red     — Errors
    ⚪ Gray    — Timing / Stats
"""

import logging
import time
from contextlib import contextmanager
from typing import Any


# ── ANSI Color Codes ─────────────────────────────────────────────────

class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    GRAY = "\033[90m"


# ── Cache Stage Definitions ──────────────────────────────────────────

class CacheStage:
    """Predefined cache stages with colors and icons."""

    CHECK = ("CHECK", _Colors.BLUE, "🔎")
    CACHE_HIT = ("CACHE", _Colors.GREEN, "📦")
    REMOTE = ("STEAM", _Colors.YELLOW, "🌐")
    UPSERT = ("UPSERT", _Colors.GREEN, "💾")
    PLACEHOLDER = ("PLACEHOLDER", _Colors.MAGENTA, "🧩")
    ERROR = ("ERROR", _Colors.RED, "❌")


# ── CacheLogger ──────────────────────────────────────────────────────

class CacheLogger:
    """Color-coded logger for the cache services.

    Usage:
        log = CacheLogger(__name__)
        log.step(CacheStage.CACHE_HIT, "Serving stats from store", app_id="730")
        with log.timed_step(CacheStage.REMOTE, "Fetching review summary", app_id="730"):
            envelope = await steam.get_review_summary("730")
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)

    @staticmethod
    def _details(kwargs: dict[str, Any]) -> str:
        if not kwargs:
            return ""
        details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
        return f" {_Colors.GRAY}({details}){_Colors.RESET}"

    def step(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        """Log a cache step with its stage color."""
        label, color, icon = stage
        formatted = (
            f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{color}{message}{_Colors.RESET}"
        )
        self._logger.info(formatted + self._details(kwargs))

    def warning(self, stage: tuple[str, str, str], message: str, error: Exception | None = None) -> None:
        """Log a recoverable problem, e.g. a failed best-effort fetch."""
        label, color, icon = stage
        formatted = f"{color}{icon} [{label}]{_Colors.RESET} {_Colors.YELLOW}{message}{_Colors.RESET}"
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.warning(formatted)

    def step_error(self, stage: tuple[str, str, str], message: str, error: Exception | None = None) -> None:
        """Log a step error in red."""
        label, _, icon = stage
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}❌ [{label}]{_Colors.RESET} "
            f"{_Colors.RED}{message}{_Colors.RESET}"
        )
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.error(formatted)

    def stats(self, **kwargs: Any) -> None:
        """Log statistics / timing information."""
        parts = [f"{k}: {v}" for k, v in kwargs.items()]
        self._logger.info(f"   {_Colors.GRAY}📈 {' | '.join(parts)}{_Colors.RESET}")

    @contextmanager
    def timed_step(self, stage: tuple[str, str, str], message: str, **kwargs: Any):
        """Context manager that logs start/end with elapsed time."""
        self.step(stage, message, **kwargs)
        start = time.perf_counter()
        try:
            yield
        except Exception as e:
            elapsed = time.perf_counter() - start
            self.step_error(stage, f"{message} — failed after {elapsed:.2f}s", error=e)
            raise
        else:
            elapsed = time.perf_counter() - start
            self._logger.debug(
                f"{_Colors.GRAY}{stage[2]} [{stage[0]}] {message} — {elapsed:.2f}s{_Colors.RESET}"
            )
