"""Domain entity — a single user review ingested from the Steam feed."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

UNKNOWN_LANGUAGE = "unknown"
ALL_LANGUAGES = "all"


def normalize_language(language: str | None) -> str:
    """Lower-case a language code, falling back to ``unknown`` when blank."""
    if not isinstance(language, str) or not language.strip():
        return UNKNOWN_LANGUAGE
    return language.strip().lower()


def normalize_language_filter(language: str | None) -> str | None:
    """Return the stored-language value to filter on, or None for ``all``."""
    if language is None or not language.strip():
        return None
    value = language.strip().lower()
    return None if value == ALL_LANGUAGES else value


@dataclass
class Review:
    """A review, identified by Steam's recommendation id.

    First write wins: a stored review is never updated, even when the
    upstream copy is edited later.
    """

    recommendation_id: str
    app_id: str
    author_steam_id: str | None = None
    author_playtime_forever: int = 0
    author_playtime_at_review: int = 0
    voted_up: bool = False
    votes_up: int = 0
    votes_funny: int = 0
    weighted_vote_score: float = 0.0
    comment_count: int = 0
    steam_purchase: bool = False
    received_for_free: bool = False
    written_during_early_access: bool = False
    review: str = ""
    timestamp_created: int = 0
    timestamp_updated: int = 0
    language: str = UNKNOWN_LANGUAGE
    ingested_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
