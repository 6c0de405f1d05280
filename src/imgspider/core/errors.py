"""Exception hierarchy for imgspider."""

from typing import Optional


class SpiderError(Exception):
    """Base class for all crawl errors."""

    def __init__(self, message: str, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.url = url


class FetchFailed(SpiderError):
    """A page or image could not be retrieved."""


class ParseFailed(SpiderError):
    """A URL could not be parsed or resolved."""


class IoFailed(SpiderError):
    """A directory or file could not be written."""
