"""Pytest configuration and fixtures."""

import io
import tempfile
from pathlib import Path

import pytest
from rich.console import Console

from imgspider.core.errors import FetchFailed
from imgspider.core.interfaces import Fetcher


class FakeFetcher(Fetcher):
    """In-memory fetcher serving canned pages and images."""

    def __init__(self, pages=None, images=None):
        self.pages = dict(pages or {})
        self.images = dict(images or {})
        self.page_requests: list[str] = []
        self.image_requests: list[str] = []
        self.closed = False

    async def fetch_text(self, url):
        self.page_requests.append(url)
        if url not in self.pages:
            raise FetchFailed(f"HTTP 404 for {url}", url=url)
        return self.pages[url]

    async def fetch_bytes(self, url):
        self.image_requests.append(url)
        if url not in self.images:
            raise FetchFailed(f"HTTP 404 for {url}", url=url)
        return self.images[url]

    async def aclose(self):
        self.closed = True


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def out():
    """Console capturing progress output."""
    return Console(file=io.StringIO(), width=200, color_system=None)


@pytest.fixture
def err():
    """Console capturing error output."""
    return Console(file=io.StringIO(), width=200, color_system=None)


@pytest.fixture
def sample_html():
    """Seed page with a mix of image references and one link."""
    return """
    <!DOCTYPE html>
    <html>
    <head><title>Gallery</title></head>
    <body>
        <img src="/a.png" alt="A">
        <img data-src="b.jpg" alt="B">
        <img src="data:image/png;base64,iVBORw0KGgo=" alt="inline">
        <a href="/page2">Next page</a>
    </body>
    </html>
    """


@pytest.fixture
def make_fetcher():
    """Factory for in-memory fetchers."""
    return FakeFetcher
