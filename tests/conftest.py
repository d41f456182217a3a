"""Shared pytest fixtures."""

import pytest

from tagstash import (
    EntryCodec,
    FilesystemCacheAdapter,
    ListStore,
    MemoryFilesystem,
    TaggedCachePool,
    TagIndex,
)

NOW = 1_700_000_000.0


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, now: float = NOW) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Create a fake clock starting at a fixed time."""
    return FakeClock()


@pytest.fixture
def filesystem() -> MemoryFilesystem:
    """Create a fresh MemoryFilesystem for each test."""
    return MemoryFilesystem()


@pytest.fixture
def codec() -> EntryCodec:
    return EntryCodec()


@pytest.fixture
def lists(filesystem: MemoryFilesystem, codec: EntryCodec) -> ListStore:
    return ListStore(filesystem, "cache", codec)


@pytest.fixture
def tag_index(lists: ListStore) -> TagIndex:
    return TagIndex(lists)


@pytest.fixture
def adapter(filesystem: MemoryFilesystem, clock: FakeClock) -> FilesystemCacheAdapter:
    """Create a FilesystemCacheAdapter over the memory filesystem."""
    return FilesystemCacheAdapter(filesystem, "cache", clock=clock)


@pytest.fixture
def pool(adapter: FilesystemCacheAdapter, clock: FakeClock) -> TaggedCachePool:
    """Create a TaggedCachePool over the adapter."""
    return TaggedCachePool(adapter, clock=clock)
