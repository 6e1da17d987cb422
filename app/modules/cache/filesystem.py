"""Filesystem access for the cache replayer.

All operations the replayer needs from the filesystem go through the
CacheFileSystem protocol, so tests can substitute a fake with a fixed
listing order.
"""

import os
from pathlib import Path
from typing import List, Protocol, TextIO

from infrastructure.operations import OperationResult


class CacheFileSystem(Protocol):
    """Filesystem operations used by the cache replayer.

    Methods:
        exists: Path exists
        is_dir: Path is a directory
        is_file: Path is a regular file
        list_dir: Entries of a directory, in listing order
        can_write: Directory entries can be created/removed
        open_text: Open a file for reading as UTF-8 text
        delete: Best-effort removal returning an OperationResult
    """

    def exists(self, path: Path) -> bool: ...

    def is_dir(self, path: Path) -> bool: ...

    def is_file(self, path: Path) -> bool: ...

    def list_dir(self, path: Path) -> List[Path]:
        """List directory entries.

        Raises:
            OSError: The directory cannot be listed.
        """
        ...

    def can_write(self, path: Path) -> bool: ...

    def open_text(self, path: Path) -> TextIO:
        """Open ``path`` for reading.

        Raises:
            FileNotFoundError: The file vanished.
            OSError: The file cannot be opened.
        """
        ...

    def delete(self, path: Path) -> OperationResult:
        """Remove ``path``. Never raises."""
        ...


class LocalFileSystem:
    """CacheFileSystem backed by the local disk."""

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def is_file(self, path: Path) -> bool:
        # Symlinks to directories report False here
        return path.is_file()

    def list_dir(self, path: Path) -> List[Path]:
        return [path / name for name in os.listdir(path)]

    def can_write(self, path: Path) -> bool:
        return os.access(path, os.W_OK | os.X_OK)

    def open_text(self, path: Path) -> TextIO:
        return open(path, "r", encoding="utf-8")

    def delete(self, path: Path) -> OperationResult:
        try:
            path.unlink()
        except FileNotFoundError:
            return OperationResult.not_found(
                f"'{path.name}' was already removed", error_code="ENOENT"
            )
        except OSError as e:
            return OperationResult.transient_error(
                f"Failed to delete '{path.name}': {e}",
                error_code=type(e).__name__,
            )
        return OperationResult.success(message=f"'{path.name}' deleted")
