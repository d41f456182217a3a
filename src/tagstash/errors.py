"""Exception taxonomy for tagstash.

Only ``InvalidKeyError`` is allowed to escape the cache core. Filesystem and
decode failures are absorbed and turned into misses or ``False`` results.
"""


class CacheError(Exception):
    """Base exception for cache-related errors."""


class InvalidKeyError(CacheError, ValueError):
    """Raised when a key, tag name or list name is malformed."""


class FilesystemError(CacheError):
    """Raised by filesystem backends when a storage call fails."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class FileNotFound(FilesystemError):
    """Raised when the requested file does not exist."""


class EncodeError(CacheError):
    """Raised when a value cannot be serialized for storage."""


class DecodeError(CacheError):
    """Raised when stored bytes cannot be decoded."""
