"""Freshness decisions for cached Steam data.

Pure logic: no I/O, only timestamps in and booleans out. The clock is
injectable so callers and tests can pin "now".
"""

from collections.abc import Callable
from datetime import datetime, timezone

Clock = Callable[[], datetime]

_SECONDS_PER_HOUR = 3600.0


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat naive timestamps (e.g. read back from SQLite) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def is_stale(
    last_updated: datetime | None,
    threshold_hours: float,
    now: datetime | None = None,
) -> bool:
    """True when data was never fetched or is older than ``threshold_hours``.

    Equality with the threshold still counts as fresh.
    """
    if threshold_hours <= 0:
        raise ValueError("threshold_hours must be positive")
    if last_updated is None:
        return True
    current = as_utc(now) if now is not None else utc_now()
    elapsed_hours = (current - as_utc(last_updated)).total_seconds() / _SECONDS_PER_HOUR
    return elapsed_hours > threshold_hours


class FreshnessOracle:
    """Applies one global freshness window to aggregates and the review feed.

    Game metadata is never judged stale here: once stored it is only
    refreshed when a stats or review refresh finds it missing.
    """

    def __init__(self, threshold_hours: float, clock: Clock = utc_now):
        if threshold_hours <= 0:
            raise ValueError("threshold_hours must be positive")
        self._threshold_hours = threshold_hours
        self._clock = clock

    @property
    def threshold_hours(self) -> float:
        return self._threshold_hours

    def now(self) -> datetime:
        return self._clock()

    def is_stale(self, last_updated: datetime | None) -> bool:
        return is_stale(last_updated, self._threshold_hours, now=self._clock())

    def needs_refresh(
        self,
        *,
        game_exists: bool,
        aggregate_updated_at: datetime | None,
        feed_updated_at: datetime | None,
    ) -> bool:
        """Composite rule: game missing, or aggregate stale, or feed stale."""
        if not game_exists:
            return True
        return self.is_stale(aggregate_updated_at) or self.is_stale(feed_updated_at)
