"""Unit tests for freshness decisions."""

from datetime import datetime, timedelta, timezone

import pytest

from steam_cache.application.services.freshness_oracle import FreshnessOracle, is_stale

NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


def test_never_fetched_is_stale():
    assert is_stale(None, 24, now=NOW) is True


def test_older_than_threshold_is_stale():
    assert is_stale(NOW - timedelta(hours=25), 24, now=NOW) is True


def test_within_threshold_is_fresh():
    assert is_stale(NOW - timedelta(hours=25), 26, now=NOW) is False
    assert is_stale(NOW - timedelta(minutes=5), 24, now=NOW) is False


def test_exactly_at_threshold_is_fresh():
    assert is_stale(NOW - timedelta(hours=24), 24, now=NOW) is False


def test_naive_timestamps_are_read_as_utc():
    naive = (NOW - timedelta(hours=23)).replace(tzinfo=None)

    assert is_stale(naive, 24, now=NOW) is False


def test_non_positive_threshold_is_rejected():
    with pytest.raises(ValueError):
        is_stale(NOW, 0, now=NOW)
    with pytest.raises(ValueError):
        FreshnessOracle(-1)


def test_oracle_uses_injected_clock():
    current = {"now": NOW}
    oracle = FreshnessOracle(24, clock=lambda: current["now"])
    fetched_at = NOW - timedelta(hours=1)

    assert oracle.is_stale(fetched_at) is False
    current["now"] = NOW + timedelta(hours=24)
    assert oracle.is_stale(fetched_at) is True


@pytest.mark.parametrize(
    ("game_exists", "aggregate_age", "feed_age", "expected"),
    [
        (False, 1, 1, True),
        (True, 1, 1, False),
        (True, 30, 1, True),
        (True, 1, 30, True),
        (True, None, 1, True),
        (True, 1, None, True),
    ],
)
def test_needs_refresh_composite_rule(game_exists, aggregate_age, feed_age, expected):
    oracle = FreshnessOracle(24, clock=lambda: NOW)

    def at(age):
        return None if age is None else NOW - timedelta(hours=age)

    assert oracle.needs_refresh(
        game_exists=game_exists,
        aggregate_updated_at=at(aggregate_age),
        feed_updated_at=at(feed_age),
    ) is expected
