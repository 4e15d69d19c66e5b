"""Concrete repository implementation for reviews backed by SQLAlchemy."""

from datetime import datetime

from sqlalchemy import case, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from steam_cache.application.interfaces import ReviewRepository
from steam_cache.application.services.freshness_oracle import as_utc
from steam_cache.domain.entities import KeywordGameMatch, LanguageCount, Review
from steam_cache.domain.exceptions import InvalidPayload
from steam_cache.infrastructure.database.models import (
    GameModel,
    ReviewAggregateModel,
    ReviewFeedStateModel,
    ReviewModel,
)

from .game_repository import to_ranked_game
from .statements import dialect_insert, escape_like


class SQLAlchemyReviewRepository(ReviewRepository):
    """Implements the ReviewRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: ReviewModel) -> Review:
        """Map ORM model → domain entity."""
        return Review(
            recommendation_id=model.recommendation_id,
            app_id=model.app_id,
            author_steam_id=model.author_steam_id,
            author_playtime_forever=model.author_playtime_forever,
            author_playtime_at_review=model.author_playtime_at_review,
            voted_up=model.voted_up,
            votes_up=model.votes_up,
            votes_funny=model.votes_funny,
            weighted_vote_score=model.weighted_vote_score,
            comment_count=model.comment_count,
            steam_purchase=model.steam_purchase,
            received_for_free=model.received_for_free,
            written_during_early_access=model.written_during_early_access,
            review=model.review,
            timestamp_created=model.timestamp_created,
            timestamp_updated=model.timestamp_updated,
            language=model.language,
            ingested_at=as_utc(model.ingested_at),
        )

    def _filtered(self, stmt, app_id: str, language: str | None):
        stmt = stmt.where(ReviewModel.app_id == app_id)
        if language is not None:
            stmt = stmt.where(ReviewModel.language == language)
        return stmt

    async def insert_if_absent(self, review: Review) -> bool:
        stmt = (
            dialect_insert(self._session, ReviewModel)
            .values(
                recommendation_id=review.recommendation_id,
                app_id=review.app_id,
                author_steam_id=review.author_steam_id,
                author_playtime_forever=review.author_playtime_forever,
                author_playtime_at_review=review.author_playtime_at_review,
                voted_up=review.voted_up,
                votes_up=review.votes_up,
                votes_funny=review.votes_funny,
                weighted_vote_score=review.weighted_vote_score,
                comment_count=review.comment_count,
                steam_purchase=review.steam_purchase,
                received_for_free=review.received_for_free,
                written_during_early_access=review.written_during_early_access,
                review=review.review,
                timestamp_created=review.timestamp_created,
                timestamp_updated=review.timestamp_updated,
                language=review.language,
                ingested_at=review.ingested_at,
            )
            .on_conflict_do_nothing(index_elements=[ReviewModel.recommendation_id])
        )
        try:
            result = await self._session.execute(stmt)
        except IntegrityError as exc:
            raise InvalidPayload(
                "Review", f"recommendation {review.recommendation_id} rejected by store: {exc.orig}"
            ) from exc
        return result.rowcount == 1

    async def get_many(self, recommendation_ids: list[str]) -> list[Review]:
        if not recommendation_ids:
            return []
        stmt = select(ReviewModel).where(ReviewModel.recommendation_id.in_(recommendation_ids))
        result = await self._session.execute(stmt)
        by_id = {row.recommendation_id: row for row in result.scalars().all()}
        return [self._to_entity(by_id[rid]) for rid in recommendation_ids if rid in by_id]

    async def list_page(
        self, app_id: str, *, limit: int, offset: int, language: str | None = None
    ) -> tuple[list[Review], int]:
        total_count = func.count().over().label("total_count")
        stmt = self._filtered(select(ReviewModel, total_count), app_id, language)
        stmt = (
            stmt.order_by(ReviewModel.timestamp_created.desc(), ReviewModel.id.desc())
            .offset(offset)
            .limit(limit)
        )
        rows = (await self._session.execute(stmt)).all()
        if not rows:
            # Past the last page the window count has no row to ride on.
            return [], await self.count(app_id, language)
        return [self._to_entity(row[0]) for row in rows], rows[0].total_count

    async def count(self, app_id: str, language: str | None = None) -> int:
        stmt = self._filtered(select(func.count(ReviewModel.id)), app_id, language)
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def get_feed_last_updated(self, app_id: str) -> datetime | None:
        synced_at = await self._session.scalar(
            select(ReviewFeedStateModel.synced_at).where(ReviewFeedStateModel.app_id == app_id)
        )
        newest_ingested = await self._session.scalar(
            select(func.max(ReviewModel.ingested_at)).where(ReviewModel.app_id == app_id)
        )
        candidates = [as_utc(value) for value in (synced_at, newest_ingested) if value is not None]
        return max(candidates) if candidates else None

    async def mark_feed_synced(self, app_id: str, synced_at: datetime) -> None:
        stmt = dialect_insert(self._session, ReviewFeedStateModel).values(
            app_id=app_id, synced_at=synced_at
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[ReviewFeedStateModel.app_id],
            set_={"synced_at": stmt.excluded.synced_at},
        )
        await self._session.execute(stmt)

    async def language_stats(self, app_id: str) -> list[LanguageCount]:
        total = func.count(ReviewModel.id).label("total")
        stmt = (
            select(ReviewModel.language, total)
            .where(ReviewModel.app_id == app_id)
            .group_by(ReviewModel.language)
            .order_by(total.desc(), ReviewModel.language)
        )
        result = await self._session.execute(stmt)
        return [LanguageCount(language=language, total=count) for language, count in result.all()]

    @staticmethod
    def _keyword_hits(keywords: list[str]):
        body = func.lower(ReviewModel.review)
        return [body.like(f"%{escape_like(keyword)}%", escape="\\") for keyword in keywords]

    async def search_games_by_keywords(
        self, keywords: list[str], *, limit: int = 20, min_matches: int = 1
    ) -> list[KeywordGameMatch]:
        hits = self._keyword_hits(keywords)
        if not hits:
            return []

        coverage = case((hits[0], 1), else_=0)
        for hit in hits[1:]:
            coverage = coverage + case((hit, 1), else_=0)

        review_matches = func.count(ReviewModel.id)
        matches = (
            select(
                ReviewModel.app_id.label("app_id"),
                review_matches.label("review_matches"),
                func.sum(coverage).label("keyword_coverage"),
                func.coalesce(func.sum(ReviewModel.votes_up), 0).label("helpful_votes"),
            )
            .where(or_(*hits))
            .group_by(ReviewModel.app_id)
            .having(review_matches >= min_matches)
            .subquery()
        )
        relevance = (
            matches.c.review_matches * 10
            + matches.c.keyword_coverage * 5
            + matches.c.helpful_votes * 0.1
        ).label("relevance_score")

        stmt = (
            select(
                GameModel,
                ReviewAggregateModel,
                matches.c.review_matches,
                matches.c.keyword_coverage,
                matches.c.helpful_votes,
                relevance,
            )
            .join(matches, matches.c.app_id == GameModel.app_id)
            .outerjoin(ReviewAggregateModel, ReviewAggregateModel.app_id == GameModel.app_id)
            .order_by(relevance.desc(), ReviewAggregateModel.total_reviews.desc().nulls_last())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [
            KeywordGameMatch(
                game=to_ranked_game(game, aggregate),
                review_matches=int(review_count),
                keyword_coverage=int(keyword_coverage),
                helpful_votes=int(helpful_votes),
                relevance_score=round(float(score), 2),
            )
            for game, aggregate, review_count, keyword_coverage, helpful_votes, score in result.all()
        ]

    async def search_by_keywords(
        self, app_id: str, keywords: list[str], *, limit: int = 10
    ) -> list[Review]:
        hits = self._keyword_hits(keywords)
        if not hits:
            return []
        relevance = ReviewModel.votes_up * 2 + ReviewModel.votes_funny
        stmt = (
            select(ReviewModel)
            .where(ReviewModel.app_id == app_id)
            .where(or_(*hits))
            .order_by(relevance.desc(), ReviewModel.timestamp_created.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]
