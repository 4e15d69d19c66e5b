"""SQLAlchemy database session and engine configuration."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import text
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from steam_cache.domain.exceptions import StoreUnavailable
from steam_cache.infrastructure.database.base import Base


def _get_async_url(url: str) -> str:
    """Convert a sync SQLAlchemy URL to an async one."""
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


_CONNECTION_ERRORS = (OperationalError, InterfaceError, OSError)


class Database:
    """Owns the async engine and hands out transactional sessions."""

    def __init__(self, database_url: str, echo: bool = False):
        self.url = _get_async_url(database_url)
        self.engine = create_async_engine(self.url, echo=echo, future=True)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield a session that commits on success and rolls back on error.

        Connection-level failures surface as ``StoreUnavailable``.
        """
        try:
            async with self.session_factory() as session:
                try:
                    yield session
                    await session.commit()
                except Exception:
                    await session.rollback()
                    raise
        except _CONNECTION_ERRORS as exc:
            raise StoreUnavailable(str(exc)) from exc

    async def create_all(self) -> None:
        """Create missing tables. Existing tables are left untouched."""
        # Registers every model on Base.metadata.
        from steam_cache.infrastructure.database import models  # noqa: F401

        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except _CONNECTION_ERRORS as exc:
            raise StoreUnavailable(str(exc)) from exc

    async def health_check(self) -> bool:
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except _CONNECTION_ERRORS:
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()
