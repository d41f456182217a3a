"""Filesystem-backed cache adapter.

``FilesystemCacheAdapter`` is the storage half of the pool contract: it
fetches, stores and clears encoded entries and keeps the string lists the
pool uses for tag membership.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Protocol, runtime_checkable

from tagstash.codec import EntryCodec, Serializer
from tagstash.errors import FilesystemError
from tagstash.filesystems.base import Filesystem
from tagstash.item import CacheItem
from tagstash.keys import tag_key
from tagstash.lists import ListStore
from tagstash.store import EntryStore
from tagstash.tags import TagIndex
from tagstash.types import FetchResult

logger = logging.getLogger(__name__)


def _normalize_folder(folder: str) -> str:
    """Strip trailing slashes; the backend root itself is never a cache folder."""
    folder = folder.rstrip("/")
    if not folder:
        raise ValueError("folder must not be empty")
    return folder


@runtime_checkable
class CacheAdapter(Protocol):
    """Storage operations a ``TaggedCachePool`` is built on."""

    def fetch_object_from_cache(self, key: str) -> FetchResult:
        """Fetch an entry, evicting it if expired."""
        ...

    def store_item_in_cache(self, item: CacheItem, ttl: int | None) -> bool:
        """Persist an item's value, tags and expiry."""
        ...

    def clear_all_objects_from_cache(self) -> bool:
        """Drop every entry and list."""
        ...

    def clear_one_object_from_cache(self, key: str) -> bool:
        """Drop one entry."""
        ...

    def get_list(self, name: str) -> list[str]:
        """Read a list, creating it empty if needed."""
        ...

    def remove_list(self, name: str) -> None:
        """Delete a list."""
        ...

    def append_list_item(self, name: str, key: str) -> bool:
        """Append to a list."""
        ...

    def remove_list_item(self, name: str, key: str) -> bool:
        """Remove every occurrence of ``key`` from a list."""
        ...

    def get_tag_key(self, tag: str) -> str:
        """Name of the list holding keys tagged with ``tag``."""
        ...


class FilesystemCacheAdapter:
    """Cache adapter storing everything as files in one flat folder.

    Args:
        filesystem: Storage backend
        folder: Folder holding entry and list files
        serializer: Value serializer (default: pickle)
        clock: Returns the current Unix time, used for expiry checks
    """

    def __init__(
        self,
        filesystem: Filesystem,
        folder: str = "cache",
        *,
        serializer: Serializer | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        folder = _normalize_folder(folder)
        self._filesystem = filesystem
        self._codec = EntryCodec(serializer)
        self._lists = ListStore(filesystem, folder, self._codec)
        self._tags = TagIndex(self._lists)
        self._entries = EntryStore(
            filesystem, folder, self._codec, self._tags, clock=clock
        )

        try:
            self._filesystem.create_directory(self.folder)
        except FilesystemError as e:
            logger.warning(f"Could not create cache folder {self.folder}: {e}")

    @property
    def folder(self) -> str:
        return self._entries.folder

    @property
    def tags(self) -> TagIndex:
        return self._tags

    def set_folder(self, folder: str) -> None:
        """Point the adapter at another folder.

        Not safe while other operations on this adapter are in flight.
        """
        folder = _normalize_folder(folder)
        self._entries.folder = folder
        self._lists.folder = folder

    def fetch_object_from_cache(self, key: str) -> FetchResult:
        return self._entries.fetch(key)

    def store_item_in_cache(self, item: CacheItem, ttl: int | None) -> bool:
        return self._entries.store(
            item.key,
            item.get(),
            item.get_tags(),
            item.get_expiration_timestamp(),
            ttl,
        )

    def clear_all_objects_from_cache(self) -> bool:
        return self._entries.clear()

    def clear_one_object_from_cache(self, key: str) -> bool:
        return self._entries.delete(key)

    def get_list(self, name: str) -> list[str]:
        return self._lists.read(name)

    def remove_list(self, name: str) -> None:
        self._lists.delete(name)

    def append_list_item(self, name: str, key: str) -> bool:
        return self._lists.append(name, key)

    def remove_list_item(self, name: str, key: str) -> bool:
        return self._lists.remove(name, key)

    def get_tag_key(self, tag: str) -> str:
        return tag_key(tag)
