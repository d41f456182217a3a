"""Pool configuration and factory."""

import time
from collections.abc import Callable
from dataclasses import dataclass

from tagstash.adapter import FilesystemCacheAdapter
from tagstash.codec import SERIALIZERS, Serializer, get_serializer
from tagstash.duration import parse_duration
from tagstash.filesystems.base import Filesystem
from tagstash.pool import TaggedCachePool
from tagstash.types import Duration


@dataclass(frozen=True, slots=True)
class CacheConfig:
    """Settings for a filesystem-backed pool."""

    folder: str = "cache"
    serializer: str = "pickle"  # "pickle" or "json"
    default_ttl: Duration | None = None

    def __post_init__(self) -> None:
        if not self.folder.strip("/"):
            raise ValueError("folder must not be empty")
        if self.serializer not in SERIALIZERS:
            raise ValueError(
                f"serializer must be one of {sorted(SERIALIZERS)}, "
                f"got {self.serializer!r}"
            )
        if self.default_ttl is not None:
            parse_duration(self.default_ttl)

    def serializer_instance(self) -> Serializer:
        return get_serializer(self.serializer)


def create_pool(
    *,
    filesystem: Filesystem,
    folder: str = "cache",
    serializer: str = "pickle",
    default_ttl: Duration | None = None,
    clock: Callable[[], float] = time.time,
) -> TaggedCachePool:
    """Create a tagged cache pool stored on ``filesystem``.

    Args:
        filesystem: Storage backend
        folder: Folder holding entry and tag list files
        serializer: Value serializer name ("pickle" or "json")
        default_ttl: Expiry for ``set`` calls that pass no ttl
        clock: Returns the current Unix time

    Returns:
        TaggedCachePool over a FilesystemCacheAdapter
    """
    config = CacheConfig(folder=folder, serializer=serializer, default_ttl=default_ttl)
    adapter = FilesystemCacheAdapter(
        filesystem,
        config.folder,
        serializer=config.serializer_instance(),
        clock=clock,
    )
    return TaggedCachePool(adapter, default_ttl=config.default_ttl, clock=clock)


__all__ = ["CacheConfig", "create_pool"]
