"""Image crawler using httpx and BeautifulSoup.

Walks a site from a seed page with an explicit work-list of ``(url, depth)``
pairs, downloading every valid image found on each visited page.
"""

import asyncio
from collections import deque
from typing import Optional

from rich.console import Console
from rich.markup import escape

from imgspider.core.errors import FetchFailed, IoFailed, ParseFailed
from imgspider.core.interfaces import Fetcher
from imgspider.core.models import (
    CrawlReport,
    CrawlRequest,
    DownloadResult,
    DownloadStatus,
    PageDocument,
    TraversalStrategy,
)
from imgspider.discovery.images import extract_images, is_valid_image
from imgspider.discovery.links import extract_links
from imgspider.discovery.urls import canonical_url
from imgspider.engine.fetcher import HttpFetcher
from imgspider.storage.downloader import ImageDownloader


class ImageSpider:
    """Crawler that downloads images from a website."""

    def __init__(
        self,
        request: CrawlRequest,
        fetcher: Optional[Fetcher] = None,
        downloader: Optional[ImageDownloader] = None,
        console: Optional[Console] = None,
        err_console: Optional[Console] = None,
    ) -> None:
        """Initialize the crawler.

        Args:
            request: Crawl settings.
            fetcher: Fetcher for pages and images. An HttpFetcher is built
                from the request (and closed after the run) when omitted.
            downloader: Image downloader (defaults to filesystem storage).
            console: Console for progress output.
            err_console: Console for error output.
        """
        self._request = request
        self._owns_fetcher = fetcher is None
        self._fetcher = fetcher or HttpFetcher(
            user_agent=request.user_agent,
            timeout=request.timeout,
        )
        self._downloader = downloader or ImageDownloader(self._fetcher)
        self._console = console or Console()
        self._err_console = err_console or Console(stderr=True)
        self._visited: set[str] = set()

    @property
    def visited(self) -> frozenset[str]:
        """URLs crawled so far in this run."""
        return frozenset(self._visited)

    async def crawl(self) -> CrawlReport:
        """Run the crawl.

        Returns:
            Report of visited pages and downloads.

        Raises:
            ParseFailed: If the seed URL is malformed.
            FetchFailed: If the seed page cannot be fetched, or any page
                when ``fail_fast`` is set.
        """
        try:
            seed = canonical_url(self._request.seed_url)
            report = CrawlReport(seed_url=seed)

            if self._request.recursive:
                await self._traverse(seed, report)
            else:
                page = await self._fetch_page(seed, 0, report)
                if page is not None:
                    await self._download_images(page, report)
        finally:
            if self._owns_fetcher:
                await self._fetcher.aclose()

        return report

    async def _traverse(self, seed: str, report: CrawlReport) -> None:
        """Visit pages reachable from the seed within the depth limit."""
        max_depth = self._request.max_depth
        depth_first = self._request.strategy == TraversalStrategy.DEPTH_FIRST
        worklist: deque[tuple[str, int]] = deque([(seed, 0)])

        while worklist:
            url, depth = worklist.pop() if depth_first else worklist.popleft()

            if depth > max_depth or url in self._visited:
                continue

            self._visited.add(url)

            page = await self._fetch_page(url, depth, report)
            if page is None:
                continue

            await self._download_images(page, report)

            if depth < max_depth:
                children = [(link, depth + 1) for link in extract_links(page.html, page.url)]

                if self._request.verbose:
                    for link, _ in children:
                        self._log(f"  [dim]link (depth={depth + 1}):[/dim] {escape(link)}")

                # A stack pops last-in first, so push siblings reversed to
                # explore them in discovery order
                worklist.extend(reversed(children) if depth_first else children)

    async def _fetch_page(
        self, url: str, depth: int, report: CrawlReport
    ) -> Optional[PageDocument]:
        """Fetch a page, returning None when a failed branch is skipped."""
        self._log(f"[bold]{escape(f'[depth {depth}]')}[/bold] Fetching: {escape(url)}")

        try:
            html = await self._fetcher.fetch_text(url)
        except FetchFailed as e:
            if depth == 0 or self._request.fail_fast:
                raise
            self._error(f"Skipping page {url}: {e}")
            report.failed_pages.append({"url": url, "depth": depth, "error": str(e)})
            return None

        page = PageDocument(url=url, html=html)
        report.pages_visited.append(url)
        report.max_depth_reached = max(report.max_depth_reached, depth)
        self._log(f"Downloaded {page.size} bytes")

        return page

    async def _download_images(self, page: PageDocument, report: CrawlReport) -> None:
        """Download every valid image referenced by a page."""
        candidates = extract_images(page.html, page.url, on_error=self._report_bad_reference)
        images = [
            url
            for url in candidates
            if is_valid_image(url, skip_thumbnails=self._request.skip_thumbnails)
        ]

        report.images_found += len(images)
        self._log(f"Found {len(images)} valid images:")

        if self._request.concurrency == 1:
            for url in images:
                report.downloads.append(await self._download_one(url))
            return

        semaphore = asyncio.Semaphore(self._request.concurrency)

        async def bounded(url: str) -> DownloadResult:
            async with semaphore:
                return await self._download_one(url)

        results = await asyncio.gather(
            *(bounded(url) for url in images), return_exceptions=True
        )

        for url, result in zip(images, results):
            if isinstance(result, Exception):
                self._error(f"Failed to download {url}: {result}")
                result = DownloadResult(
                    url=url, status=DownloadStatus.FAILED, error=str(result)
                )
            elif isinstance(result, BaseException):
                raise result
            report.downloads.append(result)

    async def _download_one(self, url: str) -> DownloadResult:
        self._log(f"  {escape(url)}")

        try:
            filepath = await self._downloader.download(url, self._request.output_dir)
        except (FetchFailed, IoFailed) as e:
            self._error(f"Failed to download {url}: {e}")
            return DownloadResult(url=url, status=DownloadStatus.FAILED, error=str(e))

        return DownloadResult(url=url, status=DownloadStatus.SUCCESS, filepath=filepath)

    def _report_bad_reference(self, reference: str, error: ParseFailed) -> None:
        self._error(f"Failed to parse URL {reference}: {error}")

    def _log(self, message: str) -> None:
        if not self._request.quiet:
            self._console.print(message)

    def _error(self, message: str) -> None:
        self._err_console.print(f"[red]{escape(message)}[/red]")
