"""Redis filesystem backend."""

from __future__ import annotations

from typing import Any

import redis

from tagstash.errors import FileNotFound, FilesystemError


def _normalize(path: str) -> str:
    return "/".join(part for part in path.split("/") if part)


class RedisFilesystem:
    """Filesystem stored in Redis.

    Each file is one string key, ``<prefix>:file:<path>``. Directories are
    members of the ``<prefix>:dirs`` set; deleting one SCANs for the files
    below it.
    """

    def __init__(
        self,
        client: Any,  # redis.Redis
        *,
        prefix: str = "tagstash",
    ) -> None:
        self._client = client
        self._prefix = prefix

    def _file_key(self, path: str) -> str:
        """Generate full Redis key for a file."""
        return f"{self._prefix}:file:{_normalize(path)}"

    @property
    def _dirs_key(self) -> str:
        return f"{self._prefix}:dirs"

    def create_directory(self, path: str) -> None:
        """Record a directory and its parents."""
        parts = _normalize(path).split("/")
        try:
            self._client.sadd(
                self._dirs_key,
                *("/".join(parts[:i]) for i in range(1, len(parts) + 1)),
            )
        except redis.RedisError as e:
            raise FilesystemError(
                f"Could not create directory {path}: {e}", path
            ) from e

    def delete_directory(self, path: str) -> None:
        """Delete every file below ``path`` and forget the directory."""
        root = _normalize(path)
        pattern = f"{self._prefix}:file:{_escape_glob(root)}/*"
        try:
            # Use SCAN to find and delete all files under the directory
            cursor = 0
            while True:
                cursor, keys = self._client.scan(cursor, match=pattern, count=100)
                if keys:
                    self._client.delete(*keys)
                if cursor == 0:
                    break
            dirs = [
                d.decode() if isinstance(d, bytes) else d
                for d in self._client.smembers(self._dirs_key)
            ]
            doomed = [d for d in dirs if d == root or d.startswith(root + "/")]
            if doomed:
                self._client.srem(self._dirs_key, *doomed)
        except redis.RedisError as e:
            raise FilesystemError(
                f"Could not delete directory {path}: {e}", path
            ) from e

    def file_exists(self, path: str) -> bool:
        """Check whether a file exists."""
        try:
            return bool(self._client.exists(self._file_key(path)))
        except redis.RedisError as e:
            raise FilesystemError(f"Could not stat {path}: {e}", path) from e

    def write(self, path: str, data: bytes) -> None:
        """Store ``data`` under ``path``."""
        try:
            self._client.set(self._file_key(path), data)
        except redis.RedisError as e:
            raise FilesystemError(f"Could not write {path}: {e}", path) from e

    def read(self, path: str) -> bytes:
        """Return the bytes stored under ``path``."""
        try:
            data = self._client.get(self._file_key(path))
        except redis.RedisError as e:
            raise FilesystemError(f"Could not read {path}: {e}", path) from e
        if data is None:
            raise FileNotFound(f"File not found: {path}", path)
        if isinstance(data, str):
            return data.encode("utf-8")
        return bytes(data)

    def delete(self, path: str) -> None:
        """Delete the file under ``path``."""
        try:
            removed = self._client.delete(self._file_key(path))
        except redis.RedisError as e:
            raise FilesystemError(f"Could not delete {path}: {e}", path) from e
        if not removed:
            raise FileNotFound(f"File not found: {path}", path)

    def disconnect(self) -> None:
        """Close the Redis connection."""
        self._client.close()


def _escape_glob(text: str) -> str:
    """Escape Redis glob metacharacters in ``text``."""
    for char in "\\*?[]":
        text = text.replace(char, "\\" + char)
    return text
