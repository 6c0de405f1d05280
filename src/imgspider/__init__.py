"""
imgspider - Download images from a website, following links within the site.

Usage:
    spider https://example.com
    spider -r -l 2 https://example.com -p ./images
"""

__version__ = "0.1.0"

from imgspider.core.errors import FetchFailed, IoFailed, ParseFailed, SpiderError
from imgspider.core.models import (
    CrawlReport,
    CrawlRequest,
    DownloadResult,
    DownloadStatus,
    TraversalStrategy,
)
from imgspider.engine.crawler import ImageSpider

__all__ = [
    "__version__",
    # Models
    "CrawlReport",
    "CrawlRequest",
    "DownloadResult",
    "DownloadStatus",
    "TraversalStrategy",
    # Errors
    "FetchFailed",
    "IoFailed",
    "ParseFailed",
    "SpiderError",
    # Engine
    "ImageSpider",
]
