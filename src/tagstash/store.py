"""Entry storage with lazy expiration."""

import logging
import time
from collections.abc import Callable
from typing import Any

from tagstash.codec import EntryCodec
from tagstash.errors import CacheError, FilesystemError
from tagstash.filesystems.base import Filesystem
from tagstash.keys import validate_key
from tagstash.tags import TagIndex
from tagstash.types import CacheEntry, FetchResult

logger = logging.getLogger(__name__)


class EntryStore:
    """One file per cache key under ``folder``.

    Expired entries are only removed when they are read: ``fetch`` drops the
    key from each of the entry's tag lists, then deletes the file. Explicit
    ``delete`` and ``clear`` leave tag lists alone.
    """

    def __init__(
        self,
        filesystem: Filesystem,
        folder: str,
        codec: EntryCodec,
        tags: TagIndex,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._filesystem = filesystem
        self.folder = folder
        self._codec = codec
        self._tags = tags
        self._clock = clock

    def path_for(self, key: str) -> str:
        """Storage path of an entry file."""
        return f"{self.folder}/{validate_key(key)}"

    def fetch(self, key: str) -> FetchResult:
        """Look up ``key``. Unreadable, corrupt and expired entries are misses."""
        path = self.path_for(key)
        try:
            value, tags, expires_at = self._codec.decode(self._filesystem.read(path))
        except CacheError as e:
            logger.debug(f"Cache miss for {key}: {e}")
            return FetchResult.miss()

        entry = CacheEntry(value=value, tags=tags, expires_at=expires_at)
        if entry.is_expired(self._clock()):
            logger.debug(f"Entry {key} expired at {expires_at}, evicting")
            for tag in entry.tags:
                self._tags.remove_key(tag, key)
            self.delete(key)
            return FetchResult.miss()

        return FetchResult(True, entry.value, entry.tags, entry.expires_at)

    def store(
        self,
        key: str,
        value: Any,
        tags: list[str],
        expires_at: float | None,
        ttl: int | None = None,
    ) -> bool:
        """Write an entry. Tag lists are not touched here.

        ``ttl`` is accepted for parity with the pool contract; the absolute
        ``expires_at`` is what gets stored.
        """
        _ = ttl
        path = self.path_for(key)
        try:
            self._filesystem.write(path, self._codec.encode(value, tags, expires_at))
        except CacheError as e:
            logger.warning(f"Could not store {key}: {e}")
            return False
        return True

    def delete(self, key: str) -> bool:
        """Delete an entry file. Always succeeds, even if it was absent."""
        path = self.path_for(key)
        try:
            self._filesystem.delete(path)
        except FilesystemError as e:
            logger.debug(f"Ignoring failed delete of {key}: {e}")
        return True

    def clear(self) -> bool:
        """Delete the whole folder, entries and lists alike, and recreate it."""
        try:
            self._filesystem.delete_directory(self.folder)
            self._filesystem.create_directory(self.folder)
        except FilesystemError as e:
            logger.warning(f"Could not clear cache folder {self.folder}: {e}")
            return False
        logger.debug(f"Cleared cache folder {self.folder}")
        return True
