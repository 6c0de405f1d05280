"""Same-domain link extraction."""

from typing import Iterator

from bs4 import BeautifulSoup

from imgspider.core.errors import ParseFailed
from imgspider.discovery.urls import resolve, same_domain


def extract_links(html: str, base: str) -> Iterator[str]:
    """Yield absolute URLs of anchors that stay on the base URL's host.

    Links that fail to resolve are dropped without notice. No deduplication
    happens here.

    Args:
        html: Page markup.
        base: Absolute URL the page was fetched from.

    Yields:
        Absolute same-domain link URLs in document order.
    """
    soup = BeautifulSoup(html, "html.parser")

    for a in soup.find_all("a", href=True):
        href = a["href"]

        try:
            full_url = resolve(base, href)
        except ParseFailed:
            continue

        if same_domain(full_url, base):
            yield full_url
