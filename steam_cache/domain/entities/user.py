"""Domain entities for users and their favorite games."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4

from .game import Game
from .review_aggregate import ReviewAggregate


def normalize_email(email: str) -> str:
    return email.strip().lower()


@dataclass
class User:
    """A registered user, unique by normalized email."""

    email: str
    display_name: str | None = None
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class Favorite:
    """A (user, game) pair with an optional free-text note."""

    user_id: str
    app_id: str
    notes: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    game: Game | None = None
    aggregate: ReviewAggregate | None = None
