"""Tagged cache pool.

The pool is the caller-facing half of the cache: it hands out
``CacheItem`` objects, keeps deferred saves, and maintains the tag lists
that make ``invalidate_tags`` possible. Storage is delegated to a
``CacheAdapter``.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from types import TracebackType
from typing import Any

from tagstash.adapter import CacheAdapter
from tagstash.duration import parse_duration
from tagstash.item import CacheItem
from tagstash.keys import validate_key, validate_keys
from tagstash.types import Duration

logger = logging.getLogger(__name__)


class TaggedCachePool:
    """Cache pool with tag-based invalidation.

    Saving an item stores it and then appends its key to the list of every
    tag it carries. Invalidating a tag deletes every key on that tag's list
    and then the list itself.

    Examples:
        >>> pool = TaggedCachePool(FilesystemCacheAdapter(LocalFilesystem("/tmp")))
        >>> pool.set("user.42", {"name": "Ada"}, ttl="5m", tags=["users"])
        True
        >>> pool.get("user.42")
        {'name': 'Ada'}
        >>> pool.invalidate_tag("users")
        True
        >>> pool.get("user.42") is None
        True
    """

    def __init__(
        self,
        adapter: CacheAdapter,
        *,
        default_ttl: Duration | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._adapter = adapter
        self._default_ttl = (
            parse_duration(default_ttl) if default_ttl is not None else None
        )
        self._clock = clock
        self._deferred: dict[str, CacheItem] = {}

    def __enter__(self) -> TaggedCachePool:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.commit()

    @property
    def adapter(self) -> CacheAdapter:
        return self._adapter

    # -------------------------------------------------------------------------
    # Items
    # -------------------------------------------------------------------------

    def get_item(self, key: str) -> CacheItem:
        """Return the item for ``key``, a miss if absent or expired."""
        validate_key(key)
        deferred = self._deferred.get(key)
        if deferred is not None:
            if not deferred.is_expired():
                return CacheItem(
                    key,
                    hit=True,
                    value=deferred.get(),
                    tags=deferred.get_tags(),
                    expires_at=deferred.get_expiration_timestamp(),
                    clock=self._clock,
                )
            del self._deferred[key]

        hit, value, tags, expires_at = self._adapter.fetch_object_from_cache(key)
        return CacheItem(
            key,
            hit=hit,
            value=value,
            tags=tags,
            expires_at=expires_at,
            clock=self._clock,
        )

    def get_items(self, keys: Iterable[str]) -> dict[str, CacheItem]:
        return {key: self.get_item(key) for key in validate_keys(keys)}

    def has_item(self, key: str) -> bool:
        return self.get_item(key).is_hit

    def save(self, item: CacheItem) -> bool:
        """Store ``item`` and index it under its tags.

        An item whose expiry is already in the past is deleted instead.
        """
        self._remove_tag_entries(item.key, item.get_previous_tags())

        ttl = None
        expires_at = item.get_expiration_timestamp()
        if expires_at is not None:
            remaining = expires_at - self._clock()
            if remaining < 0:
                return self.delete_item(item.key)
            ttl = int(remaining)

        if not self._adapter.store_item_in_cache(item, ttl):
            return False

        indexed = True
        for tag in item.get_tags():
            tag_list = self._adapter.get_tag_key(tag)
            if not self._adapter.append_list_item(tag_list, item.key):
                logger.warning(f"Could not add {item.key} to tag {tag}")
                indexed = False
        return indexed

    def save_deferred(self, item: CacheItem) -> bool:
        """Queue ``item`` until ``commit``."""
        self._deferred[item.key] = item
        return True

    def commit(self) -> bool:
        """Save every deferred item. False if any of them failed."""
        saved = True
        deferred, self._deferred = self._deferred, {}
        for item in deferred.values():
            if not self.save(item):
                saved = False
        return saved

    def delete_item(self, key: str) -> bool:
        return self.delete_items([key])

    def delete_items(self, keys: Iterable[str]) -> bool:
        """Delete items and drop their keys from the tag lists."""
        deleted = True
        for key in validate_keys(keys):
            self._deferred.pop(key, None)
            # Read straight from storage for the tags to clean up
            result = self._adapter.fetch_object_from_cache(key)
            if result.hit:
                self._remove_tag_entries(key, result.tags)
            if not self._adapter.clear_one_object_from_cache(key):
                deleted = False
        return deleted

    def clear(self) -> bool:
        """Drop deferred items and every stored entry and list."""
        self._deferred = {}
        return self._adapter.clear_all_objects_from_cache()

    # -------------------------------------------------------------------------
    # Tags
    # -------------------------------------------------------------------------

    def invalidate_tag(self, tag: str) -> bool:
        return self.invalidate_tags([tag])

    def invalidate_tags(self, tags: Iterable[str]) -> bool:
        """Delete every item carrying any of ``tags``, then the tag lists."""
        tag_lists = [self._adapter.get_tag_key(tag) for tag in tags]
        keys: list[str] = []
        for tag_list in tag_lists:
            for key in self._adapter.get_list(tag_list):
                if key not in keys:
                    keys.append(key)

        if not self.delete_items(keys):
            return False

        for tag_list in tag_lists:
            self._adapter.remove_list(tag_list)
        return True

    # -------------------------------------------------------------------------
    # Simple key/value access
    # -------------------------------------------------------------------------

    def get(self, key: str, default: Any = None) -> Any:
        item = self.get_item(key)
        return item.get() if item.is_hit else default

    def set(
        self,
        key: str,
        value: Any,
        ttl: Duration | None = None,
        tags: Iterable[str] | None = None,
    ) -> bool:
        """Store ``value`` under ``key``. Falls back to the pool's default ttl."""
        item = self.get_item(key).set(value)
        item.expires_after(ttl if ttl is not None else self._default_ttl)
        if tags is not None:
            item.set_tags(tags)
        return self.save(item)

    def delete(self, key: str) -> bool:
        return self.delete_item(key)

    def has(self, key: str) -> bool:
        return self.has_item(key)

    def _remove_tag_entries(self, key: str, tags: Iterable[str]) -> None:
        for tag in tags:
            self._adapter.remove_list_item(self._adapter.get_tag_key(tag), key)
