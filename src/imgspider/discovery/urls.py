"""URL resolution and domain comparison."""

import re
from urllib.parse import SplitResult, urljoin, urlsplit, urlunsplit

from imgspider.core.errors import ParseFailed

# Whitespace and control characters never appear in a valid host
_INVALID_HOST_CHARS = re.compile(r"[\s\x00-\x1f\x7f]")


def parse_absolute(url: str) -> SplitResult:
    """Parse a URL and require it to be absolute.

    Args:
        url: URL to parse.

    Returns:
        The split URL components.

    Raises:
        ParseFailed: If the URL is malformed or lacks a scheme or host.
    """
    try:
        parts = urlsplit(url)
        # Accessing the port validates it
        parts.port
    except ValueError as e:
        raise ParseFailed(f"Malformed URL {url!r}: {e}", url=url) from e

    if not parts.scheme or not parts.hostname:
        raise ParseFailed(f"Not an absolute URL: {url!r}", url=url)

    if _INVALID_HOST_CHARS.search(parts.hostname):
        raise ParseFailed(f"Invalid host in URL {url!r}", url=url)

    return parts


def canonical_url(url: str) -> str:
    """Validate an absolute URL and give it the form links resolve to.

    An empty path becomes ``/``, so ``http://x.com`` and a link to ``/`` on
    that site compare equal.

    Raises:
        ParseFailed: If the URL is malformed or not absolute.
    """
    parts = parse_absolute(url)
    if not parts.path:
        parts = parts._replace(path="/")
    return urlunsplit(parts)


def resolve(base: str, reference: str) -> str:
    """Resolve a possibly-relative reference against an absolute base URL.

    Args:
        base: Absolute URL of the document containing the reference.
        reference: Relative or absolute reference.

    Returns:
        The absolute URL. A host with no path gets ``/``.

    Raises:
        ParseFailed: If the base is not absolute or the result is malformed.
    """
    parse_absolute(base)

    try:
        joined = urljoin(base, reference.strip())
        parts = urlsplit(joined)
        parts.port
    except ValueError as e:
        raise ParseFailed(f"Cannot resolve {reference!r} against {base}: {e}", url=reference) from e

    if not parts.scheme:
        raise ParseFailed(f"Cannot resolve {reference!r} against {base}", url=reference)

    if parts.netloc and not parts.path:
        return urlunsplit(parts._replace(path="/"))

    return joined


def same_domain(a: str, b: str) -> bool:
    """Check whether two URLs share the same host (case-insensitive)."""
    try:
        host_a = urlsplit(a).hostname
        host_b = urlsplit(b).hostname
    except ValueError:
        return False

    return host_a is not None and host_a == host_b
