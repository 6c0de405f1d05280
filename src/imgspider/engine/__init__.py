"""Crawl engine and HTTP fetching."""

from imgspider.engine.crawler import ImageSpider
from imgspider.engine.fetcher import HttpFetcher

__all__ = [
    "HttpFetcher",
    "ImageSpider",
]
