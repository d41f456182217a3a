"""Ordered string lists persisted as files.

Every mutation is read-modify-write of the whole list with no
compare-and-swap. Two writers appending to the same list concurrently can
lose one of the appends (last writer wins).
"""

import logging

from tagstash.codec import EntryCodec
from tagstash.errors import CacheError, FilesystemError
from tagstash.filesystems.base import Filesystem
from tagstash.keys import validate_key

logger = logging.getLogger(__name__)


class ListStore:
    """Persist ordered lists of strings, one file per list id."""

    def __init__(self, filesystem: Filesystem, folder: str, codec: EntryCodec) -> None:
        self._filesystem = filesystem
        self.folder = folder
        self._codec = codec

    def path_for(self, list_id: str) -> str:
        """Storage path of a list file."""
        return f"{self.folder}/{validate_key(list_id)}"

    def read(self, list_id: str) -> list[str]:
        """Return the list, creating an empty one if it does not exist yet.

        Storage and decode failures read as an empty list.
        """
        path = self.path_for(list_id)
        try:
            if not self._filesystem.file_exists(path):
                self._filesystem.write(path, self._codec.encode_list([]))
            return self._codec.decode_list(self._filesystem.read(path))
        except CacheError as e:
            logger.warning(f"Could not read list {list_id}: {e}")
            return []

    def append(self, list_id: str, value: str) -> bool:
        """Append ``value`` to the end of the list. Duplicates are kept."""
        items = self.read(list_id)
        items.append(value)
        return self._write(list_id, items)

    def remove(self, list_id: str, value: str) -> bool:
        """Remove every occurrence of ``value`` from the list."""
        items = [item for item in self.read(list_id) if item != value]
        return self._write(list_id, items)

    def delete(self, list_id: str) -> None:
        """Delete the list file. A missing file is not an error."""
        path = self.path_for(list_id)
        try:
            self._filesystem.delete(path)
        except FilesystemError as e:
            logger.debug(f"Ignoring failed delete of list {list_id}: {e}")

    def _write(self, list_id: str, items: list[str]) -> bool:
        try:
            data = self._codec.encode_list(items)
            self._filesystem.write(self.path_for(list_id), data)
        except CacheError as e:
            logger.warning(f"Could not write list {list_id}: {e}")
            return False
        return True
