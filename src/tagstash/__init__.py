"""tagstash - Tag-aware cache pool stored on a filesystem."""

from contextlib import suppress

# Adapter and pool
from tagstash.adapter import CacheAdapter, FilesystemCacheAdapter

# Serialization
from tagstash.codec import EntryCodec, JsonSerializer, PickleSerializer, Serializer
from tagstash.config import CacheConfig, create_pool

# Duration parsing
from tagstash.duration import parse_duration

# Errors
from tagstash.errors import (
    CacheError,
    DecodeError,
    EncodeError,
    FileNotFound,
    FilesystemError,
    InvalidKeyError,
)

# Filesystem backends
from tagstash.filesystems import Filesystem, LocalFilesystem, MemoryFilesystem
from tagstash.item import CacheItem
from tagstash.keys import tag_key, validate_key
from tagstash.lists import ListStore
from tagstash.pool import TaggedCachePool
from tagstash.store import EntryStore
from tagstash.tags import TagIndex

# Core types
from tagstash.types import CacheEntry, Duration, FetchResult

# Optional backend imports - only available when dependencies are installed
with suppress(ImportError):
    from tagstash.filesystems import RedisFilesystem

__version__ = "0.1.0"

__all__ = [
    "CacheAdapter",
    "CacheConfig",
    "CacheEntry",
    "CacheError",
    "CacheItem",
    "DecodeError",
    "Duration",
    "EncodeError",
    "EntryCodec",
    "EntryStore",
    "FetchResult",
    "FileNotFound",
    "Filesystem",
    "FilesystemCacheAdapter",
    "FilesystemError",
    "InvalidKeyError",
    "JsonSerializer",
    "ListStore",
    "LocalFilesystem",
    "MemoryFilesystem",
    "PickleSerializer",
    "RedisFilesystem",
    "Serializer",
    "TagIndex",
    "TaggedCachePool",
    "create_pool",
    "parse_duration",
    "tag_key",
    "validate_key",
]
