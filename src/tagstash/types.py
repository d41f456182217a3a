"""Core types for tagstash."""

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Generic, NamedTuple, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class CacheEntry(Generic[T]):
    """A stored value with its tags and absolute expiry."""

    value: T
    tags: list[str] = field(default_factory=list)
    expires_at: float | None = None  # Unix timestamp, None = never

    def is_expired(self, now: float) -> bool:
        """Check if ``now`` is strictly past the expiry."""
        return self.expires_at is not None and now > self.expires_at


class FetchResult(NamedTuple):
    """Outcome of a cache lookup: ``(hit, value, tags, expires_at)``."""

    hit: bool
    value: Any
    tags: list[str]
    expires_at: float | None

    @classmethod
    def miss(cls) -> "FetchResult":
        return cls(False, None, [], None)


# Duration type alias
Duration = str | int | timedelta  # "30s", "5m", "2h", "1d", "1w" or seconds
