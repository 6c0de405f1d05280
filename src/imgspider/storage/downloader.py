"""Image downloading and filename derivation."""

from pathlib import Path
from typing import Optional
from urllib.parse import unquote

from imgspider.core.interfaces import Fetcher, StorageBackend
from imgspider.core.models import DownloadTarget
from imgspider.storage.filesystem import FilesystemStorage

MAX_FILENAME_LENGTH = 200
FALLBACK_FILENAME = "image"


def safe_filename(url: str, max_length: int = MAX_FILENAME_LENGTH) -> str:
    """Derive a local filename from an image URL.

    Takes the last path segment, drops the query string and percent-decodes
    the rest. Long names are shortened while keeping the extension.

    Examples:
        http://x/path/name%20one.png?v=2 -> name one.png
        http://x/a%2Fb.png -> a_b.png
    """
    name = url.rsplit("/", 1)[-1]
    name = name.split("?", 1)[0]
    name = unquote(name)

    # Decoded separators must not escape the target directory
    name = name.replace("/", "_").replace("\\", "_").replace("\x00", "_")
    if name in ("", ".", ".."):
        name = FALLBACK_FILENAME

    if len(name) <= max_length:
        return name

    dot = name.rfind(".")
    if dot == -1:
        return name[:max_length]

    extension = name[dot:]
    if len(extension) >= max_length:
        return name[:max_length]

    return name[: max_length - len(extension)] + extension


class ImageDownloader:
    """Fetch images and persist them under sanitized filenames."""

    def __init__(
        self,
        fetcher: Fetcher,
        storage: Optional[StorageBackend] = None,
    ) -> None:
        """Initialize the downloader.

        Args:
            fetcher: Fetcher used to retrieve image bytes.
            storage: Storage backend (defaults to the local filesystem).
        """
        self._fetcher = fetcher
        self._storage = storage or FilesystemStorage()

    def target_for(self, url: str, directory: Path) -> DownloadTarget:
        """Return where an image URL would be written."""
        return DownloadTarget(source_url=url, destination=directory / safe_filename(url))

    async def download(self, url: str, directory: Path) -> Path:
        """Download an image into a directory.

        An existing file with the same name is overwritten.

        Args:
            url: Absolute image URL.
            directory: Target directory, created if missing.

        Returns:
            Path of the written file.

        Raises:
            FetchFailed: If the image cannot be fetched.
            IoFailed: If the directory or file cannot be written.
        """
        self._storage.ensure_directory(directory)

        data = await self._fetcher.fetch_bytes(url)

        target = self.target_for(url, directory)
        self._storage.store(target.destination, data)

        return target.destination
