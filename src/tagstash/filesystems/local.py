"""Local disk filesystem backend."""

import os
import shutil
import tempfile
from pathlib import Path

from tagstash.errors import FileNotFound, FilesystemError


class LocalFilesystem:
    """Filesystem rooted at a local directory.

    Writes go to a temporary file next to the target and are moved into
    place with ``os.replace``, so a reader sees either the old or the new
    contents, never a partial file. Files get the mode a plain ``open``
    would give them under the umask in effect when the backend was created.

    Examples:
        >>> fs = LocalFilesystem("/tmp/app")
        >>> fs.write("cache/key", b"data")
        >>> fs.read("cache/key")
        b'data'
    """

    def __init__(self, root: str | os.PathLike[str]) -> None:
        self.root = Path(root)
        self._file_mode = 0o666 & ~_current_umask()

    def _resolve(self, path: str) -> Path:
        return self.root.joinpath(*(part for part in path.split("/") if part))

    def create_directory(self, path: str) -> None:
        """Create a directory and its parents."""
        try:
            self._resolve(path).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemError(
                f"Could not create directory {path}: {e}", path
            ) from e

    def delete_directory(self, path: str) -> None:
        """Delete a directory tree. A missing directory is not an error."""
        target = self._resolve(path)
        if not target.exists():
            return
        try:
            shutil.rmtree(target)
        except OSError as e:
            raise FilesystemError(
                f"Could not delete directory {path}: {e}", path
            ) from e

    def file_exists(self, path: str) -> bool:
        """Check whether a regular file exists."""
        try:
            return self._resolve(path).is_file()
        except OSError as e:
            raise FilesystemError(f"Could not stat {path}: {e}", path) from e

    def write(self, path: str, data: bytes) -> None:
        """Replace the file at ``path`` with ``data``."""
        target = self._resolve(path)
        tmp_name = None
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                dir=target.parent, prefix=".tmp-", delete=False
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(data)
            # Temp files are created 0600; give the entry the umask's mode
            os.chmod(tmp_name, self._file_mode)
            os.replace(tmp_name, target)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise FilesystemError(f"Could not write {path}: {e}", path) from e

    def read(self, path: str) -> bytes:
        """Read the whole file at ``path``."""
        try:
            return self._resolve(path).read_bytes()
        except FileNotFoundError:
            raise FileNotFound(f"File not found: {path}", path) from None
        except OSError as e:
            raise FilesystemError(f"Could not read {path}: {e}", path) from e

    def delete(self, path: str) -> None:
        """Delete the file at ``path``."""
        try:
            self._resolve(path).unlink()
        except FileNotFoundError:
            raise FileNotFound(f"File not found: {path}", path) from None
        except OSError as e:
            raise FilesystemError(f"Could not delete {path}: {e}", path) from e


def _current_umask() -> int:
    """Read the process umask, which is only exposed by setting it."""
    umask = os.umask(0)
    os.umask(umask)
    return umask
