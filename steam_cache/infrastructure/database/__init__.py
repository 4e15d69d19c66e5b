from .base import Base
from .session import Database
from .entity_store import SQLAlchemyEntityStore

__all__ = [
    "Base",
    "Database",
    "SQLAlchemyEntityStore",
]
