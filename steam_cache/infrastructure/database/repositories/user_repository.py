"""Concrete repository implementations for users and favorites."""

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from steam_cache.application.interfaces import FavoriteRepository, UserRepository
from steam_cache.application.services.freshness_oracle import as_utc
from steam_cache.domain.entities import Favorite, User
from steam_cache.domain.exceptions import DuplicateEntityError
from steam_cache.infrastructure.database.models import (
    FavoriteModel,
    GameModel,
    ReviewAggregateModel,
    UserModel,
)

from .game_repository import aggregate_to_entity, game_to_entity
from .statements import dialect_insert


class SQLAlchemyUserRepository(UserRepository):

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: UserModel) -> User:
        return User(
            id=model.id,
            email=model.email,
            display_name=model.display_name,
            created_at=as_utc(model.created_at),
        )

    async def get_by_id(self, user_id: str) -> User | None:
        result = await self._session.get(UserModel, user_id)
        return self._to_entity(result) if result else None

    async def get_by_email(self, email: str) -> User | None:
        stmt = select(UserModel).where(UserModel.email == email)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def create(self, user: User) -> User:
        model = UserModel(
            id=user.id,
            email=user.email,
            display_name=user.display_name,
            created_at=user.created_at,
        )
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            raise DuplicateEntityError("User", "email", user.email) from exc
        return self._to_entity(model)


class SQLAlchemyFavoriteRepository(FavoriteRepository):

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(
        self,
        model: FavoriteModel,
        game: GameModel | None = None,
        aggregate: ReviewAggregateModel | None = None,
    ) -> Favorite:
        return Favorite(
            user_id=model.user_id,
            app_id=model.app_id,
            notes=model.notes,
            created_at=as_utc(model.created_at),
            game=game_to_entity(game) if game is not None else None,
            aggregate=aggregate_to_entity(aggregate) if aggregate is not None else None,
        )

    async def upsert(self, favorite: Favorite) -> Favorite:
        stmt = dialect_insert(self._session, FavoriteModel).values(
            user_id=favorite.user_id,
            app_id=favorite.app_id,
            notes=favorite.notes,
            created_at=favorite.created_at,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[FavoriteModel.user_id, FavoriteModel.app_id],
            set_={"notes": func.coalesce(stmt.excluded.notes, FavoriteModel.notes)},
        )
        await self._session.execute(stmt)
        model = await self._session.get(
            FavoriteModel, (favorite.user_id, favorite.app_id), populate_existing=True
        )
        return self._to_entity(model)

    async def list_for_user(self, user_id: str) -> list[Favorite]:
        stmt = (
            select(FavoriteModel, GameModel, ReviewAggregateModel)
            .outerjoin(GameModel, GameModel.app_id == FavoriteModel.app_id)
            .outerjoin(ReviewAggregateModel, ReviewAggregateModel.app_id == FavoriteModel.app_id)
            .where(FavoriteModel.user_id == user_id)
            .order_by(FavoriteModel.created_at.desc(), FavoriteModel.app_id)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(fav, game, agg) for fav, game, agg in result.all()]

    async def delete(self, user_id: str, app_id: str) -> bool:
        stmt = delete(FavoriteModel).where(
            FavoriteModel.user_id == user_id, FavoriteModel.app_id == app_id
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0
