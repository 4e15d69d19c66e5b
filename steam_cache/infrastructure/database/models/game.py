"""SQLAlchemy ORM models for games and their review aggregates."""

from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, CheckConstraint, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from steam_cache.infrastructure.database.base import Base


class GameModel(Base):
    """ORM model — maps to the 'games' table."""

    __tablename__ = "games"

    app_id: Mapped[str] = mapped_column(String(32), primary_key=True)
    name: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    short_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    header_image: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    developers: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    publishers: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    price_overview: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    release_date: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    is_placeholder: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<GameModel(app_id={self.app_id}, name='{self.name}')>"


class ReviewAggregateModel(Base):
    """ORM model — maps to the 'review_aggregates' table."""

    __tablename__ = "review_aggregates"

    app_id: Mapped[str] = mapped_column(String(32), primary_key=True)
    total_reviews: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_positive: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_negative: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    review_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    review_score_desc: Mapped[str | None] = mapped_column(String(100), nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True,
    )

    __table_args__ = (
        CheckConstraint("total_reviews >= 0", name="ck_review_aggregates_total"),
        CheckConstraint("total_positive >= 0", name="ck_review_aggregates_positive"),
        CheckConstraint("total_negative >= 0", name="ck_review_aggregates_negative"),
    )

    def __repr__(self) -> str:
        return f"<ReviewAggregateModel(app_id={self.app_id}, total={self.total_reviews})>"
