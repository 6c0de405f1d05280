"""Link and image discovery for crawled pages."""

from imgspider.discovery.images import extract_images, is_valid_image
from imgspider.discovery.links import extract_links
from imgspider.discovery.urls import canonical_url, parse_absolute, resolve, same_domain

__all__ = [
    "extract_images",
    "extract_links",
    "is_valid_image",
    "canonical_url",
    "parse_absolute",
    "resolve",
    "same_domain",
]
