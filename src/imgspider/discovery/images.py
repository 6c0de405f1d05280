"""Image reference extraction and validation."""

from typing import Callable, Iterator, Optional

from bs4 import BeautifulSoup

from imgspider.core.errors import ParseFailed
from imgspider.discovery.urls import resolve

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".bmp")

ErrorCallback = Callable[[str, ParseFailed], None]


def extract_images(
    html: str,
    base: str,
    on_error: Optional[ErrorCallback] = None,
) -> Iterator[str]:
    """Yield absolute URLs of every image referenced by the page.

    Reads ``src`` and falls back to ``data-src`` (lazy loading) only when
    ``src`` is absent. Empty values and ``data:`` URIs are skipped.

    Args:
        html: Page markup.
        base: Absolute URL the page was fetched from.
        on_error: Called with the raw reference and the error when a
            candidate cannot be resolved. Extraction continues either way.

    Yields:
        Absolute image URLs in document order, duplicates included.
    """
    soup = BeautifulSoup(html, "html.parser")

    for img in soup.find_all("img"):
        src = img.get("src")
        if src is None:
            src = img.get("data-src")
        if src is None:
            continue

        if not src.strip() or src.startswith("data:"):
            continue

        try:
            yield resolve(base, src)
        except ParseFailed as e:
            if on_error is not None:
                on_error(src, e)


def is_valid_image(url: str, skip_thumbnails: bool = False) -> bool:
    """Check if a URL points to a downloadable image by its extension.

    Args:
        url: Absolute image URL.
        skip_thumbnails: Also reject URLs mentioning ``thumb``.

    Returns:
        True if the query-stripped path ends with a supported extension and
        the URL does not reference an SVG.
    """
    lower_url = url.lower()

    if ".svg" in lower_url:
        return False

    if skip_thumbnails and "thumb" in lower_url:
        return False

    path = lower_url.split("?", 1)[0]
    return path.endswith(IMAGE_EXTENSIONS)
