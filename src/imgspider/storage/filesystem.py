"""Filesystem storage backend for downloaded images."""

from pathlib import Path

from imgspider.core.errors import IoFailed
from imgspider.core.interfaces import StorageBackend


class FilesystemStorage(StorageBackend):
    """Store downloaded images on the local filesystem."""

    def ensure_directory(self, directory: Path) -> None:
        """Create the directory and any missing parents.

        Args:
            directory: Directory to create.
        """
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise IoFailed(f"Cannot create directory {directory}: {e}") from e

    def store(self, filepath: Path, data: bytes) -> None:
        """Write bytes to a file, truncating any previous content.

        Args:
            filepath: Target filepath.
            data: Raw bytes to write.
        """
        try:
            filepath.write_bytes(data)
        except (OSError, ValueError) as e:
            raise IoFailed(f"Cannot write {filepath}: {e}") from e
