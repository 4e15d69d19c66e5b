"""Domain value object — the process-wide cache policy."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CachePolicy:
    """Explicit configuration handed to the freshness and fetch services.

    One freshness window applies to review aggregates and the review feed.
    Game metadata is not subject to it.
    """

    threshold_hours: float = 24.0
    metadata_locale: str = "english"
    default_page_size: int = 10
    max_page_size: int = 100

    def __post_init__(self) -> None:
        if self.threshold_hours <= 0:
            raise ValueError("threshold_hours must be positive")
        if self.default_page_size < 1 or self.max_page_size < 1:
            raise ValueError("page sizes must be at least 1")

    def clamp_page_size(self, page_size: int | None) -> int:
        """Return a page size within [1, max_page_size]."""
        if page_size is None:
            return self.default_page_size
        return max(1, min(page_size, self.max_page_size))
