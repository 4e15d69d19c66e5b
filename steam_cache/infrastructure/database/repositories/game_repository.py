"""Concrete repository implementations for games and review aggregates."""

from sqlalchemy import case, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from steam_cache.application.interfaces import GameRepository, ReviewAggregateRepository
from steam_cache.application.services.freshness_oracle import as_utc
from steam_cache.domain.entities import Game, RankedGame, ReviewAggregate
from steam_cache.domain.exceptions import InvalidPayload
from steam_cache.infrastructure.database.models import GameModel, ReviewAggregateModel

from .statements import dialect_insert, escape_like


def game_to_entity(model: GameModel) -> Game:
    """Map ORM model → domain entity."""
    return Game(
        app_id=model.app_id,
        name=model.name,
        short_description=model.short_description,
        header_image=model.header_image,
        developers=list(model.developers or []),
        publishers=list(model.publishers or []),
        price_overview=model.price_overview,
        release_date=model.release_date,
        is_placeholder=model.is_placeholder,
        created_at=as_utc(model.created_at),
        updated_at=as_utc(model.updated_at),
    )


def aggregate_to_entity(model: ReviewAggregateModel) -> ReviewAggregate:
    return ReviewAggregate(
        app_id=model.app_id,
        total_reviews=model.total_reviews,
        total_positive=model.total_positive,
        total_negative=model.total_negative,
        review_score=model.review_score,
        review_score_desc=model.review_score_desc,
        updated_at=as_utc(model.updated_at),
    )


def to_ranked_game(game: GameModel, aggregate: ReviewAggregateModel | None) -> RankedGame:
    """Flatten a game and its (optional) aggregate into a listing row."""
    stats = aggregate_to_entity(aggregate) if aggregate is not None else None
    return RankedGame(
        app_id=game.app_id,
        name=game.name,
        short_description=game.short_description,
        header_image=game.header_image,
        developers=list(game.developers or []),
        publishers=list(game.publishers or []),
        total_reviews=stats.total_reviews if stats else None,
        total_positive=stats.total_positive if stats else None,
        total_negative=stats.total_negative if stats else None,
        review_score=stats.review_score if stats else None,
        review_score_desc=stats.review_score_desc if stats else None,
        positive_percentage=stats.positive_percentage if stats else None,
        stats_updated_at=stats.updated_at if stats else None,
    )


class SQLAlchemyGameRepository(GameRepository):
    """Implements the GameRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self, app_id: str) -> Game | None:
        result = await self._session.get(GameModel, app_id, populate_existing=True)
        return game_to_entity(result) if result else None

    async def upsert(self, game: Game) -> Game:
        values = {
            "app_id": game.app_id,
            "name": game.name,
            "short_description": game.short_description,
            "header_image": game.header_image,
            "developers": list(game.developers),
            "publishers": list(game.publishers),
            "price_overview": game.price_overview,
            "release_date": game.release_date,
            "is_placeholder": game.is_placeholder,
            "created_at": game.created_at,
            "updated_at": game.updated_at,
        }
        stmt = dialect_insert(self._session, GameModel).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[GameModel.app_id],
            set_={
                key: stmt.excluded[key]
                for key in values
                if key not in ("app_id", "created_at")
            },
        )
        await self._session.execute(stmt)
        return await self.get(game.app_id)

    async def insert_if_absent(self, game: Game) -> bool:
        stmt = (
            dialect_insert(self._session, GameModel)
            .values(
                app_id=game.app_id,
                name=game.name,
                short_description=game.short_description,
                header_image=game.header_image,
                developers=list(game.developers),
                publishers=list(game.publishers),
                price_overview=game.price_overview,
                release_date=game.release_date,
                is_placeholder=game.is_placeholder,
                created_at=game.created_at,
                updated_at=game.updated_at,
            )
            .on_conflict_do_nothing(index_elements=[GameModel.app_id])
        )
        result = await self._session.execute(stmt)
        return result.rowcount == 1

    async def search_by_name(self, term: str, limit: int = 10) -> list[Game]:
        needle = term.strip().lower()
        if not needle:
            return []
        pattern = escape_like(needle)
        name = func.lower(GameModel.name)
        rank = case(
            (name == needle, 0),
            (name.like(f"{pattern}%", escape="\\"), 1),
            else_=2,
        )
        stmt = (
            select(GameModel)
            .where(GameModel.is_placeholder.is_(False))
            .where(name.like(f"%{pattern}%", escape="\\"))
            .order_by(rank, GameModel.name)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [game_to_entity(row) for row in result.scalars().all()]

    async def top_rated(
        self, limit: int = 50, min_reviews: int = 100, sort: str = "rating"
    ) -> list[RankedGame]:
        if sort == "reviews":
            order_by = (ReviewAggregateModel.total_reviews.desc(),)
        elif sort == "recent":
            order_by = (ReviewAggregateModel.updated_at.desc(),)
        else:
            order_by = (
                ReviewAggregateModel.review_score.desc(),
                ReviewAggregateModel.total_positive.desc(),
            )
        stmt = (
            select(GameModel, ReviewAggregateModel)
            .join(ReviewAggregateModel, ReviewAggregateModel.app_id == GameModel.app_id)
            .where(ReviewAggregateModel.total_reviews >= min_reviews)
            .order_by(*order_by, GameModel.app_id)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [to_ranked_game(game, aggregate) for game, aggregate in result.all()]


class SQLAlchemyReviewAggregateRepository(ReviewAggregateRepository):
    """Implements the ReviewAggregateRepository port."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self, app_id: str) -> ReviewAggregate | None:
        result = await self._session.get(ReviewAggregateModel, app_id, populate_existing=True)
        return aggregate_to_entity(result) if result else None

    async def upsert(self, aggregate: ReviewAggregate) -> ReviewAggregate:
        values = {
            "app_id": aggregate.app_id,
            "total_reviews": aggregate.total_reviews,
            "total_positive": aggregate.total_positive,
            "total_negative": aggregate.total_negative,
            "review_score": aggregate.review_score,
            "review_score_desc": aggregate.review_score_desc,
            "updated_at": aggregate.updated_at,
        }
        stmt = dialect_insert(self._session, ReviewAggregateModel).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[ReviewAggregateModel.app_id],
            set_={key: stmt.excluded[key] for key in values if key != "app_id"},
        )
        try:
            await self._session.execute(stmt)
        except IntegrityError as exc:
            raise InvalidPayload("ReviewAggregate", f"rejected by store: {exc.orig}") from exc
        return await self.get(aggregate.app_id)
