"""Cache item value object handed out by the pool."""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Any

from tagstash.duration import parse_duration
from tagstash.keys import validate_key, validate_keys
from tagstash.types import Duration


class CacheItem:
    """A key with its (possibly missing) value, tags and expiry.

    Items come from ``TaggedCachePool.get_item``. Changing one does nothing
    until it is passed back to ``save`` or ``save_deferred``.

    Examples:
        >>> item = pool.get_item("user.42")
        >>> if not item.is_hit:
        ...     item.set(load_user(42)).set_tags(["users"]).expires_after("5m")
        ...     pool.save(item)
    """

    def __init__(
        self,
        key: str,
        *,
        hit: bool = False,
        value: Any = None,
        tags: Iterable[str] = (),
        expires_at: float | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._key = validate_key(key)
        self._hit = hit
        self._value = value if hit else None
        self._previous_tags: list[str] = list(tags) if hit else []
        self._tags: list[str] = list(self._previous_tags)
        self._expires_at = expires_at if hit else None
        self._clock = clock

    def __repr__(self) -> str:
        return f"CacheItem(key={self._key!r}, hit={self._hit}, tags={self._tags!r})"

    @property
    def key(self) -> str:
        return self._key

    @property
    def is_hit(self) -> bool:
        return self._hit

    def get(self) -> Any:
        """Return the value, or None on a miss."""
        return self._value

    def set(self, value: Any) -> CacheItem:
        self._value = value
        return self

    def expires_at_time(self, expiration: float | datetime | None) -> CacheItem:
        """Expire at an absolute time. ``None`` means never."""
        if isinstance(expiration, datetime):
            self._expires_at = expiration.timestamp()
        else:
            self._expires_at = expiration
        return self

    def expires_after(self, ttl: Duration | None) -> CacheItem:
        """Expire ``ttl`` from now. ``None`` means never."""
        if ttl is None:
            self._expires_at = None
        else:
            self._expires_at = self._clock() + parse_duration(ttl)
        return self

    def get_expiration_timestamp(self) -> float | None:
        return self._expires_at

    def get_tags(self) -> list[str]:
        return list(self._tags)

    def get_previous_tags(self) -> list[str]:
        """Tags the item had when it was loaded from storage."""
        return list(self._previous_tags)

    def set_tags(self, tags: Iterable[str]) -> CacheItem:
        """Replace the tag set."""
        self._tags = []
        return self.add_tags(tags)

    def add_tags(self, tags: Iterable[str]) -> CacheItem:
        for tag in validate_keys(tags):
            if tag not in self._tags:
                self._tags.append(tag)
        return self

    def add_tag(self, tag: str) -> CacheItem:
        return self.add_tags([tag])

    def is_expired(self) -> bool:
        return self._expires_at is not None and self._clock() > self._expires_at
