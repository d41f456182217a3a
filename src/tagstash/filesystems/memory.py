"""In-memory filesystem backend."""

import threading

from tagstash.errors import FileNotFound, FilesystemError


def _normalize(path: str) -> str:
    return "/".join(part for part in path.split("/") if part)


class MemoryFilesystem:
    """Dict-backed filesystem for tests and throwaway caches.

    ``fail_reads`` and ``fail_writes`` make the corresponding calls raise
    ``FilesystemError``, which is handy for exercising failure paths.
    """

    def __init__(self) -> None:
        self._files: dict[str, bytes] = {}
        self._dirs: set[str] = set()
        self._lock = threading.Lock()
        self.fail_reads = False
        self.fail_writes = False

    def create_directory(self, path: str) -> None:
        """Create a directory and its parents."""
        self._check_writable(path)
        parts = _normalize(path).split("/")
        with self._lock:
            for i in range(1, len(parts) + 1):
                self._dirs.add("/".join(parts[:i]))

    def delete_directory(self, path: str) -> None:
        """Delete a directory and everything below it."""
        self._check_writable(path)
        root = _normalize(path)
        prefix = root + "/"
        with self._lock:
            self._dirs = {
                d for d in self._dirs if d != root and not d.startswith(prefix)
            }
            self._files = {
                p: data for p, data in self._files.items() if not p.startswith(prefix)
            }

    def file_exists(self, path: str) -> bool:
        """Check whether a file exists."""
        if self.fail_reads:
            raise FilesystemError("Read failure injected", path)
        with self._lock:
            return _normalize(path) in self._files

    def write(self, path: str, data: bytes) -> None:
        """Store ``data`` under ``path``, creating parent directories."""
        self._check_writable(path)
        key = _normalize(path)
        parts = key.split("/")
        with self._lock:
            for i in range(1, len(parts)):
                self._dirs.add("/".join(parts[:i]))
            self._files[key] = bytes(data)

    def read(self, path: str) -> bytes:
        """Return the bytes stored under ``path``."""
        if self.fail_reads:
            raise FilesystemError("Read failure injected", path)
        with self._lock:
            try:
                return self._files[_normalize(path)]
            except KeyError:
                raise FileNotFound(f"File not found: {path}", path) from None

    def delete(self, path: str) -> None:
        """Delete the file under ``path``."""
        self._check_writable(path)
        with self._lock:
            if self._files.pop(_normalize(path), None) is None:
                raise FileNotFound(f"File not found: {path}", path)

    def directory_exists(self, path: str) -> bool:
        """Check whether a directory exists."""
        with self._lock:
            return _normalize(path) in self._dirs

    def _check_writable(self, path: str) -> None:
        if self.fail_writes:
            raise FilesystemError("Write failure injected", path)
