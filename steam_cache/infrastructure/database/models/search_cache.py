"""SQLAlchemy ORM model for remembered upstream search hits."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from steam_cache.infrastructure.database.base import Base


class SearchCacheEntryModel(Base):
    """ORM model — maps to the 'game_search_cache' table."""

    __tablename__ = "game_search_cache"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    search_term: Mapped[str] = mapped_column(String(255), nullable=False)
    app_id: Mapped[str] = mapped_column(String(32), nullable=False)
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    header_image: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("search_term", "app_id", name="uq_game_search_cache_term_app"),
        Index("ix_game_search_cache_term", "search_term"),
    )
