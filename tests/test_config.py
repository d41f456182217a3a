"""Tests for configuration and the pool factory."""

import pytest

from tagstash import (
    CacheConfig,
    JsonSerializer,
    MemoryFilesystem,
    PickleSerializer,
    TaggedCachePool,
    create_pool,
)


class TestCacheConfig:
    """Tests for CacheConfig validation."""

    def test_defaults(self) -> None:
        config = CacheConfig()
        assert config.folder == "cache"
        assert config.serializer == "pickle"
        assert config.default_ttl is None
        assert isinstance(config.serializer_instance(), PickleSerializer)

    def test_json(self) -> None:
        config = CacheConfig(serializer="json")
        assert isinstance(config.serializer_instance(), JsonSerializer)

    def test_empty_folder(self) -> None:
        with pytest.raises(ValueError, match="folder"):
            CacheConfig(folder="/")

    def test_unknown_serializer(self) -> None:
        with pytest.raises(ValueError, match="serializer"):
            CacheConfig(serializer="marshal")

    def test_bad_ttl(self) -> None:
        with pytest.raises(ValueError, match="Invalid duration"):
            CacheConfig(default_ttl="soon")


class TestCreatePool:
    """Tests for create_pool."""

    def test_creates_working_pool(self, clock) -> None:
        fs = MemoryFilesystem()
        pool = create_pool(
            filesystem=fs,
            folder="app/cache",
            serializer="json",
            default_ttl="5s",
            clock=clock,
        )
        assert isinstance(pool, TaggedCachePool)
        assert pool.set("k", {"a": 1}, tags=["t"])
        assert fs.read("app/cache/k").startswith(b"[")
        clock.advance(6)
        assert pool.get("k") is None

    def test_rejects_bad_settings(self) -> None:
        with pytest.raises(ValueError):
            create_pool(filesystem=MemoryFilesystem(), serializer="xml")
