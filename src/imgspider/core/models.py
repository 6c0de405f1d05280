"""Data models for imgspider."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional

DEFAULT_USER_AGENT = "Mozilla/5.0 (Spider/1.0)"


class TraversalStrategy(Enum):
    """Order in which discovered pages are visited."""

    DEPTH_FIRST = "depth"
    BREADTH_FIRST = "breadth"


class DownloadStatus(Enum):
    """Outcome of a single image download."""

    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class CrawlRequest:
    """Settings for one crawl run."""

    seed_url: str
    recursive: bool = False
    max_depth: int = 5  # only used when recursive
    output_dir: Path = Path("./data/")
    strategy: TraversalStrategy = TraversalStrategy.DEPTH_FIRST
    timeout: float = 30.0
    user_agent: str = DEFAULT_USER_AGENT
    skip_thumbnails: bool = False
    fail_fast: bool = False
    concurrency: int = 1
    verbose: bool = False
    quiet: bool = False

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")
        if self.concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {self.concurrency}")


@dataclass
class PageDocument:
    """Markup of a fetched page and the URL it came from."""

    url: str
    html: str

    @property
    def size(self) -> int:
        return len(self.html.encode("utf-8"))


@dataclass(frozen=True)
class DownloadTarget:
    """Where an image URL will be written."""

    source_url: str
    destination: Path


@dataclass
class DownloadResult:
    """Result of downloading a single image."""

    url: str
    status: DownloadStatus
    filepath: Optional[Path] = None
    error: Optional[str] = None


@dataclass
class CrawlReport:
    """Summary of a finished crawl."""

    seed_url: str
    pages_visited: list[str] = field(default_factory=list)
    failed_pages: list[dict[str, Any]] = field(default_factory=list)
    images_found: int = 0
    downloads: list[DownloadResult] = field(default_factory=list)
    max_depth_reached: int = 0

    @property
    def downloaded(self) -> int:
        return sum(1 for d in self.downloads if d.status == DownloadStatus.SUCCESS)

    @property
    def failed(self) -> int:
        return sum(1 for d in self.downloads if d.status == DownloadStatus.FAILED)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "seed_url": self.seed_url,
            "pages_visited": list(self.pages_visited),
            "failed_pages": list(self.failed_pages),
            "stats": {
                "pages": len(self.pages_visited),
                "images_found": self.images_found,
                "downloaded": self.downloaded,
                "failed": self.failed,
                "max_depth_reached": self.max_depth_reached,
            },
            "downloads": [
                {
                    "url": d.url,
                    "status": d.status.value,
                    "filepath": str(d.filepath) if d.filepath else None,
                    "error": d.error,
                }
                for d in self.downloads
            ],
        }
