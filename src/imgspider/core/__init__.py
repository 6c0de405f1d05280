"""Core models and interfaces for imgspider."""

from imgspider.core.errors import FetchFailed, IoFailed, ParseFailed, SpiderError
from imgspider.core.interfaces import Fetcher, StorageBackend
from imgspider.core.models import (
    CrawlReport,
    CrawlRequest,
    DownloadResult,
    DownloadStatus,
    DownloadTarget,
    PageDocument,
    TraversalStrategy,
)

__all__ = [
    "CrawlReport",
    "CrawlRequest",
    "DownloadResult",
    "DownloadStatus",
    "DownloadTarget",
    "PageDocument",
    "TraversalStrategy",
    "Fetcher",
    "StorageBackend",
    "FetchFailed",
    "IoFailed",
    "ParseFailed",
    "SpiderError",
]
