"""Tests for the tag index."""

from tagstash import ListStore, MemoryFilesystem, TagIndex


class TestTagIndex:
    """Tests for TagIndex."""

    def test_keys_for_unknown_tag_is_empty(self, tag_index: TagIndex) -> None:
        assert tag_index.keys_for("users") == []

    def test_add_and_list_keys(self, tag_index: TagIndex) -> None:
        assert tag_index.add_key("users", "user.1")
        assert tag_index.add_key("users", "user.2")
        assert tag_index.keys_for("users") == ["user.1", "user.2"]

    def test_tags_are_stored_under_prefixed_list(
        self, tag_index: TagIndex, lists: ListStore, filesystem: MemoryFilesystem
    ) -> None:
        tag_index.add_key("users", "user.1")
        assert filesystem.file_exists("cache/tag!users")
        assert lists.read("tag!users") == ["user.1"]

    def test_remove_key(self, tag_index: TagIndex) -> None:
        tag_index.add_key("users", "user.1")
        tag_index.add_key("users", "user.2")
        tag_index.add_key("users", "user.1")
        assert tag_index.remove_key("users", "user.1")
        assert tag_index.keys_for("users") == ["user.2"]

    def test_empty_list_is_kept(
        self, tag_index: TagIndex, filesystem: MemoryFilesystem
    ) -> None:
        tag_index.add_key("users", "user.1")
        tag_index.remove_key("users", "user.1")
        assert tag_index.keys_for("users") == []
        assert filesystem.file_exists("cache/tag!users")

    def test_drop(self, tag_index: TagIndex, filesystem: MemoryFilesystem) -> None:
        tag_index.add_key("users", "user.1")
        tag_index.drop("users")
        assert not filesystem.file_exists("cache/tag!users")

    def test_tags_are_independent(self, tag_index: TagIndex) -> None:
        tag_index.add_key("t1", "a")
        tag_index.add_key("t2", "b")
        assert tag_index.keys_for("t1") == ["a"]
        assert tag_index.keys_for("t2") == ["b"]
