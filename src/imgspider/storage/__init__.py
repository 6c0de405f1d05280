"""Storage backends and image downloading."""

from imgspider.storage.downloader import ImageDownloader, safe_filename
from imgspider.storage.filesystem import FilesystemStorage

__all__ = [
    "FilesystemStorage",
    "ImageDownloader",
    "safe_filename",
]
