"""Integration tests for the Redis filesystem using testcontainers."""

import pytest

# Skip all tests if redis or testcontainers are not installed
pytest.importorskip("redis")
pytest.importorskip("testcontainers")

import redis
from testcontainers.redis import RedisContainer

from tagstash import FileNotFound, FilesystemCacheAdapter, TaggedCachePool
from tagstash.filesystems.redis import RedisFilesystem


@pytest.fixture(scope="module")
def redis_container():
    """Start a Redis container for the test module."""
    with RedisContainer() as container:
        yield container


@pytest.fixture
def redis_client(redis_container):
    """Create a sync Redis client."""
    client = redis.Redis(
        host=redis_container.get_container_host_ip(),
        port=redis_container.get_exposed_port(6379),
        decode_responses=False,
    )
    yield client
    client.flushdb()
    client.close()


@pytest.fixture
def redis_fs(redis_client) -> RedisFilesystem:
    """Create a RedisFilesystem with a test prefix."""
    return RedisFilesystem(redis_client, prefix="test")


class TestRedisFilesystem:
    """Integration tests for RedisFilesystem."""

    def test_write_and_read(self, redis_fs: RedisFilesystem) -> None:
        redis_fs.write("cache/key", b"\x00binary")
        assert redis_fs.read("cache/key") == b"\x00binary"
        assert redis_fs.file_exists("cache/key")

    def test_read_missing(self, redis_fs: RedisFilesystem) -> None:
        assert not redis_fs.file_exists("cache/nope")
        with pytest.raises(FileNotFound):
            redis_fs.read("cache/nope")

    def test_delete(self, redis_fs: RedisFilesystem) -> None:
        redis_fs.write("cache/key", b"x")
        redis_fs.delete("cache/key")
        assert not redis_fs.file_exists("cache/key")
        with pytest.raises(FileNotFound):
            redis_fs.delete("cache/key")

    def test_delete_directory(self, redis_fs: RedisFilesystem, redis_client) -> None:
        redis_fs.create_directory("cache")
        redis_fs.write("cache/a", b"1")
        redis_fs.write("cache/tag!t", b"2")
        redis_fs.write("cached", b"3")

        redis_fs.delete_directory("cache")

        assert not redis_fs.file_exists("cache/a")
        assert not redis_fs.file_exists("cache/tag!t")
        assert redis_fs.file_exists("cached")
        assert redis_client.smembers("test:dirs") == set()

    def test_pool(self, redis_fs: RedisFilesystem) -> None:
        pool = TaggedCachePool(FilesystemCacheAdapter(redis_fs, "cache"))
        pool.set("user.1", {"name": "Ada"}, tags=["users"])
        assert pool.get("user.1") == {"name": "Ada"}
        assert pool.invalidate_tag("users")
        assert pool.get("user.1") is None
