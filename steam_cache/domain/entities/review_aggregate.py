"""Domain entity — review counters reported by Steam for one application."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class ReviewAggregate:
    """Aggregate review stats. Replaced wholesale on every refresh."""

    app_id: str
    total_reviews: int = 0
    total_positive: int = 0
    total_negative: int = 0
    review_score: int = 0
    review_score_desc: str | None = None
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def positive_percentage(self) -> float | None:
        if self.total_reviews <= 0:
            return None
        return round(self.total_positive / self.total_reviews * 100, 1)
