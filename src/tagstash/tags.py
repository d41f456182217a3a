"""Tag index: which cache keys carry a given tag."""

from tagstash.keys import tag_key
from tagstash.lists import ListStore


class TagIndex:
    """Map tag names to the keys tagged with them, stored as lists."""

    def __init__(self, lists: ListStore) -> None:
        self._lists = lists

    def add_key(self, tag: str, key: str) -> bool:
        return self._lists.append(tag_key(tag), key)

    def remove_key(self, tag: str, key: str) -> bool:
        return self._lists.remove(tag_key(tag), key)

    def keys_for(self, tag: str) -> list[str]:
        return self._lists.read(tag_key(tag))

    def drop(self, tag: str) -> None:
        """Forget a tag entirely."""
        self._lists.delete(tag_key(tag))
