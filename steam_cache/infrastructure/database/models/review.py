"""SQLAlchemy ORM models for ingested reviews and the review feed state."""

from datetime import datetime, timezone

from sqlalchemy import BigInteger, Boolean, CheckConstraint, DateTime, Float, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from steam_cache.infrastructure.database.base import Base


class ReviewModel(Base):
    """ORM model — maps to the 'reviews' table."""

    __tablename__ = "reviews"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    recommendation_id: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    app_id: Mapped[str] = mapped_column(String(32), nullable=False)
    author_steam_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    author_playtime_forever: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    author_playtime_at_review: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    voted_up: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    votes_up: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    votes_funny: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    weighted_vote_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    comment_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    steam_purchase: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    received_for_free: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    written_during_early_access: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    review: Mapped[str] = mapped_column(Text, nullable=False, default="")
    timestamp_created: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    timestamp_updated: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    language: Mapped[str] = mapped_column(String(50), nullable=False, default="unknown")
    ingested_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        CheckConstraint("votes_up >= 0", name="ck_reviews_votes_up"),
        CheckConstraint("votes_funny >= 0", name="ck_reviews_votes_funny"),
        CheckConstraint("comment_count >= 0", name="ck_reviews_comment_count"),
        Index("ix_reviews_app_created", "app_id", "timestamp_created"),
        Index("ix_reviews_app_language", "app_id", "language"),
    )

    def __repr__(self) -> str:
        return f"<ReviewModel(recommendation_id={self.recommendation_id}, app_id={self.app_id})>"


class ReviewFeedStateModel(Base):
    """Last successful answer of the upstream review feed, per app."""

    __tablename__ = "review_feed_state"

    app_id: Mapped[str] = mapped_column(String(32), primary_key=True)
    synced_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
