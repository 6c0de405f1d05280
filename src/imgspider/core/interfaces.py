"""Abstract interfaces for imgspider."""

from abc import ABC, abstractmethod
from pathlib import Path


class Fetcher(ABC):
    """Abstract base class for retrieving remote resources."""

    @abstractmethod
    async def fetch_text(self, url: str) -> str:
        """Fetch a page and return its decoded markup.

        Args:
            url: Absolute URL to fetch.

        Returns:
            Response body as text.

        Raises:
            FetchFailed: On transport errors or non-success responses.
        """
        ...

    @abstractmethod
    async def fetch_bytes(self, url: str) -> bytes:
        """Fetch a resource and return its raw bytes.

        Args:
            url: Absolute URL to fetch.

        Returns:
            Response body as bytes.

        Raises:
            FetchFailed: On transport errors or non-success responses.
        """
        ...

    async def aclose(self) -> None:
        """Release any held resources."""
        return None


class StorageBackend(ABC):
    """Abstract base class for storage backends."""

    @abstractmethod
    def ensure_directory(self, directory: Path) -> None:
        """Create a directory and its parents if missing.

        Raises:
            IoFailed: If the directory cannot be created.
        """
        ...

    @abstractmethod
    def store(self, filepath: Path, data: bytes) -> None:
        """Write bytes to a file, replacing any existing content.

        Raises:
            IoFailed: If the file cannot be written.
        """
        ...
