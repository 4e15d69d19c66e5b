"""Domain entity — one remembered hit of an upstream app search."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


def steam_header_image(app_id: str) -> str:
    """CDN header image used when none is stored."""
    return f"https://cdn.akamai.steamstatic.com/steam/apps/{app_id}/header.jpg"


@dataclass
class SearchCacheEntry:
    """Unique per (search_term, app_id). Never refreshed or expired."""

    search_term: str
    app_id: str
    name: str
    header_image: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class GameSearchHit:
    """A game returned by name search, whatever source answered."""

    app_id: str
    name: str
    header_image: str

    @classmethod
    def build(cls, app_id: str, name: str, header_image: str | None) -> "GameSearchHit":
        return cls(app_id=app_id, name=name, header_image=header_image or steam_header_image(app_id))
