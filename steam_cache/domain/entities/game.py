"""Domain entity — a Steam application mirrored locally."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


def placeholder_name(app_id: str) -> str:
    """Display name used for games stored before their metadata is known."""
    return f"Game {app_id}"


@dataclass
class Game:
    """Core domain entity keyed by the Steam application id."""

    app_id: str
    name: str
    short_description: str | None = None
    header_image: str | None = None
    developers: list[str] = field(default_factory=list)
    publishers: list[str] = field(default_factory=list)
    price_overview: dict[str, Any] | None = None
    release_date: dict[str, Any] | None = None
    is_placeholder: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def placeholder(cls, app_id: str, now: datetime | None = None) -> "Game":
        """Minimal row that satisfies references when metadata is unavailable."""
        now = now or datetime.now(timezone.utc)
        return cls(
            app_id=app_id,
            name=placeholder_name(app_id),
            is_placeholder=True,
            created_at=now,
            updated_at=now,
        )
