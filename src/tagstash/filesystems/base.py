"""Base protocol for hierarchical file storage backends."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Filesystem(Protocol):
    """Hierarchical file storage interface.

    Paths are ``/``-separated and relative to the backend's root. Every
    method raises ``FilesystemError`` (or ``FileNotFound``) on failure.
    """

    def create_directory(self, path: str) -> None:
        """Create a directory, including parents. Existing is fine."""
        ...

    def delete_directory(self, path: str) -> None:
        """Delete a directory and everything below it."""
        ...

    def file_exists(self, path: str) -> bool:
        """Check whether a file exists at ``path``."""
        ...

    def write(self, path: str, data: bytes) -> None:
        """Write ``data`` to ``path``, replacing any existing file."""
        ...

    def read(self, path: str) -> bytes:
        """Read the whole file at ``path``."""
        ...

    def delete(self, path: str) -> None:
        """Delete the file at ``path``."""
        ...
