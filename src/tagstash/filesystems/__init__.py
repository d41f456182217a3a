"""Filesystem backends for tagstash."""

from contextlib import suppress

from tagstash.filesystems.base import Filesystem
from tagstash.filesystems.local import LocalFilesystem
from tagstash.filesystems.memory import MemoryFilesystem

# Optional backends - only available when dependencies are installed
with suppress(ImportError):
    from tagstash.filesystems.redis import RedisFilesystem

__all__ = [
    "Filesystem",
    "LocalFilesystem",
    "MemoryFilesystem",
    "RedisFilesystem",
]
