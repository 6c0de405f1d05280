"""Command-line interface for imgspider."""

import asyncio
import json
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from imgspider import __version__
from imgspider.core.errors import SpiderError
from imgspider.core.models import CrawlReport, CrawlRequest, TraversalStrategy
from imgspider.engine.crawler import ImageSpider

DEFAULT_LEVEL = 5
DEFAULT_PATH = Path("./data/")

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold]imgspider[/bold] version {__version__}")
        raise typer.Exit()


def _normalize_seed(url: str) -> str:
    """Add a scheme to bare hostnames."""
    if not url.startswith(("http://", "https://")):
        return f"https://{url}"
    return url


def _build_request(
    url: str,
    recursive: bool,
    level: Optional[int],
    path: Path,
    strategy: TraversalStrategy,
    concurrency: int,
    timeout: float,
    skip_thumbnails: bool,
    fail_fast: bool,
    verbose: bool,
    quiet: bool,
) -> CrawlRequest:
    """Validate option combinations and build the crawl request."""
    if level is not None and not recursive:
        raise typer.BadParameter(
            "--level requires --recursive", param_hint="'-l' / '--level'"
        )

    return CrawlRequest(
        seed_url=_normalize_seed(url),
        recursive=recursive,
        max_depth=DEFAULT_LEVEL if level is None else level,
        output_dir=path,
        strategy=strategy,
        timeout=timeout,
        skip_thumbnails=skip_thumbnails,
        fail_fast=fail_fast,
        concurrency=concurrency,
        verbose=verbose,
        quiet=quiet,
    )


def _print_summary(report: CrawlReport, request: CrawlRequest) -> None:
    console.print()
    console.print(
        Panel(
            f"[bold cyan]Pages visited:[/bold cyan] {len(report.pages_visited)}\n"
            f"[bold green]Downloaded:[/bold green] {report.downloaded}\n"
            f"[bold red]Failed:[/bold red] {report.failed}\n"
            f"[bold yellow]Output:[/bold yellow] {escape(str(request.output_dir))}",
            title="[bold green]Crawl Complete![/bold green]",
            border_style="green",
        )
    )

    if report.failed_pages:
        console.print()
        console.print("[yellow]Skipped pages:[/yellow]")
        for failed in report.failed_pages[:5]:
            console.print(f"  [dim]-[/dim] {escape(failed['url'])}")
        if len(report.failed_pages) > 5:
            console.print(f"  [dim]... and {len(report.failed_pages) - 5} more[/dim]")


def _write_report(report: CrawlReport, path: Path) -> None:
    """Save the crawl report as JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(report.to_dict(), indent=2), encoding="utf-8")


def _run(request: CrawlRequest) -> CrawlReport:
    """Run the crawler to completion."""
    spider = ImageSpider(request, console=console, err_console=err_console)
    return asyncio.run(spider.crawl())


app = typer.Typer(
    name="spider",
    help="Download images from a website, optionally following its links.",
    add_completion=False,
    rich_markup_mode="rich",
)


@app.command()
def spider(
    url: Annotated[
        str,
        typer.Argument(help="The URL to scrape"),
    ],
    recursive: Annotated[
        bool,
        typer.Option(
            "-r",
            "--recursive",
            help="Recursively download images from linked pages",
        ),
    ] = False,
    level: Annotated[
        Optional[int],
        typer.Option(
            "-l",
            "--level",
            min=0,
            help=f"Maximum recursion level (requires -r) [default: {DEFAULT_LEVEL}]",
            show_default=False,
        ),
    ] = None,
    path: Annotated[
        Path,
        typer.Option(
            "-p",
            "--path",
            help="Directory where images are saved",
        ),
    ] = DEFAULT_PATH,
    strategy: Annotated[
        TraversalStrategy,
        typer.Option(
            "-s",
            "--strategy",
            help="Page traversal order",
        ),
    ] = TraversalStrategy.DEPTH_FIRST,
    concurrency: Annotated[
        int,
        typer.Option(
            "-c",
            "--concurrency",
            min=1,
            help="Parallel image downloads per page",
        ),
    ] = 1,
    timeout: Annotated[
        float,
        typer.Option(
            "-t",
            "--timeout",
            help="Request timeout in seconds",
        ),
    ] = 30.0,
    skip_thumbnails: Annotated[
        bool,
        typer.Option(
            "--skip-thumbnails",
            help="Ignore images whose URL mentions 'thumb'",
        ),
    ] = False,
    fail_fast: Annotated[
        bool,
        typer.Option(
            "--fail-fast",
            help="Abort the whole crawl when any page cannot be fetched",
        ),
    ] = False,
    report_path: Annotated[
        Optional[Path],
        typer.Option(
            "--report",
            help="Write a JSON report of visited pages and downloads",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "-v",
            "--verbose",
            help="Verbose output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "-q",
            "--quiet",
            help="Only print errors",
        ),
    ] = False,
    version: Annotated[
        Optional[bool],
        typer.Option(
            "-V",
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = None,
) -> None:
    """Download images from a website.

    \b
    Examples:
        spider https://example.com
        spider -r -l 2 https://example.com -p ./images
    """
    request = _build_request(
        url,
        recursive,
        level,
        path,
        strategy,
        concurrency,
        timeout,
        skip_thumbnails,
        fail_fast,
        verbose,
        quiet,
    )

    try:
        report = _run(request)
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Interrupted.[/yellow]")
        raise typer.Exit(1)
    except SpiderError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if report_path is not None:
        try:
            _write_report(report, report_path)
        except OSError as e:
            err_console.print(f"[red]Could not write report: {escape(str(e))}[/red]")
            raise typer.Exit(1)

    if not quiet:
        _print_summary(report, request)


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
