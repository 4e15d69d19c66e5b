"""Per-category log levels for the cache service.

The cache decision log (hit, Steam fetch, upsert, placeholder) is the
interesting output at INFO; SQL statements and outbound HTTP chatter are
kept at WARNING unless a setting asks for more.

Usage:
    from steam_cache.infrastructure.logging.log_config import setup_logging
    setup_logging(settings)   # once, from the FastAPI lifespan
"""

import logging
import sys

from steam_cache.config import Settings, get_settings

# Settings field → loggers it controls.
_CATEGORY_MAP: dict[str, tuple[str, ...]] = {
    "log_level_sql": ("sqlalchemy.engine", "sqlalchemy.pool", "aiosqlite"),
    "log_level_http": ("httpx", "httpcore"),
    "log_level_uvicorn": ("uvicorn", "uvicorn.access", "uvicorn.error"),
    "log_level_cache": ("steam_cache.application.services",),
    "log_level_steam": ("steam_cache.infrastructure.steam",),
}

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def _parse_level(raw: str | None) -> int:
    """Level name → logging constant; unknown names fall back to INFO."""
    numeric = getattr(logging, (raw or "").upper(), None)
    return numeric if isinstance(numeric, int) else logging.INFO


def category_levels(settings: Settings) -> dict[str, int]:
    """Logger name → numeric level, as configured by ``settings``."""
    levels: dict[str, int] = {}
    for field_name, logger_names in _CATEGORY_MAP.items():
        level = _parse_level(getattr(settings, field_name, None))
        for name in logger_names:
            levels[name] = level
    return levels


def setup_logging(settings: Settings | None = None) -> None:
    """Apply root and per-category levels. Safe to call more than once."""
    settings = settings or get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))
    # uvicorn installs its own handlers; scripts and tests may not have any.
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)

    for name, level in category_levels(settings).items():
        logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).debug(
        "Log levels: root=%s sql=%s http=%s cache=%s steam=%s",
        settings.log_level,
        settings.log_level_sql,
        settings.log_level_http,
        settings.log_level_cache,
        settings.log_level_steam,
    )
