"""Dialect-aware statement helpers shared by the repositories."""

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession


def dialect_insert(session: AsyncSession, model):
    """INSERT construct that supports ``on_conflict_do_*`` for the bound dialect."""
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        return postgresql.insert(model)
    if dialect == "sqlite":
        return sqlite.insert(model)
    raise NotImplementedError(f"Upserts are not supported on '{dialect}'")


def escape_like(term: str) -> str:
    """Escape LIKE wildcards; use with ``escape="\\\\"``."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
