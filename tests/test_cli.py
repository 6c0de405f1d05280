"""Tests for the CLI module."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from imgspider import cli
from imgspider.core.errors import FetchFailed
from imgspider.core.models import CrawlReport, TraversalStrategy

runner = CliRunner()


@pytest.fixture
def captured(monkeypatch):
    """Replace the crawler run and record the request it receives."""
    requests = []

    def fake_run(request):
        requests.append(request)
        return CrawlReport(seed_url=request.seed_url, pages_visited=[request.seed_url])

    monkeypatch.setattr(cli, "_run", fake_run)
    return requests


class TestNormalizeSeed:
    """Tests for seed URL normalization."""

    def test_adds_scheme(self):
        """Test that bare hosts get https."""
        assert cli._normalize_seed("example.com/gallery") == "https://example.com/gallery"

    def test_keeps_scheme(self):
        """Test that explicit schemes are kept."""
        assert cli._normalize_seed("http://example.com") == "http://example.com"


class TestSpiderCommand:
    """Tests for the spider command."""

    def test_defaults(self, captured):
        """Test default option values."""
        result = runner.invoke(cli.app, ["https://example.com"])

        assert result.exit_code == 0
        request = captured[0]
        assert request.seed_url == "https://example.com"
        assert request.recursive is False
        assert request.max_depth == 5
        assert request.output_dir == Path("./data/")
        assert request.strategy == TraversalStrategy.DEPTH_FIRST

    def test_recursive_with_level(self, captured, tmp_path):
        """Test recursive options are passed through."""
        result = runner.invoke(
            cli.app,
            ["-r", "-l", "2", "-p", str(tmp_path), "-s", "breadth", "example.com"],
        )

        assert result.exit_code == 0
        request = captured[0]
        assert request.recursive is True
        assert request.max_depth == 2
        assert request.output_dir == tmp_path
        assert request.strategy == TraversalStrategy.BREADTH_FIRST
        assert request.seed_url == "https://example.com"

    def test_level_requires_recursive(self, captured):
        """Test that --level without --recursive is rejected."""
        result = runner.invoke(cli.app, ["-l", "3", "https://example.com"])

        assert result.exit_code == 2
        assert captured == []

    def test_negative_level_rejected(self, captured):
        """Test that a negative level is rejected."""
        result = runner.invoke(cli.app, ["-r", "-l", "-1", "https://example.com"])

        assert result.exit_code == 2
        assert captured == []

    def test_fatal_error_exit_code(self, monkeypatch):
        """Test that an unrecoverable crawl error exits with status 1."""

        def failing_run(request):
            raise FetchFailed("HTTP 500 for https://example.com", url=request.seed_url)

        monkeypatch.setattr(cli, "_run", failing_run)
        result = runner.invoke(cli.app, ["https://example.com"])

        assert result.exit_code == 1

    def test_summary_printed(self, captured):
        """Test that the summary panel is shown."""
        result = runner.invoke(cli.app, ["https://example.com"])
        assert "Crawl Complete!" in result.output

    def test_quiet_hides_summary(self, captured):
        """Test that --quiet suppresses the summary."""
        result = runner.invoke(cli.app, ["-q", "https://example.com"])
        assert "Crawl Complete!" not in result.output

    def test_json_report(self, captured, tmp_path):
        """Test that --report writes the crawl report as JSON."""
        report_file = tmp_path / "out" / "report.json"
        result = runner.invoke(cli.app, ["--report", str(report_file), "https://example.com"])

        assert result.exit_code == 0
        data = json.loads(report_file.read_text(encoding="utf-8"))
        assert data["seed_url"] == "https://example.com"
        assert data["stats"]["pages"] == 1

    def test_malformed_seed_exit_code(self, tmp_path):
        """Test that a seed with an invalid host fails before any request."""
        result = runner.invoke(cli.app, ["-p", str(tmp_path), "not a url"])

        assert result.exit_code == 1
        assert list(tmp_path.iterdir()) == []

    def test_version(self):
        """Test the version flag."""
        result = runner.invoke(cli.app, ["--version"])

        assert result.exit_code == 0
        assert cli.__version__ in result.output
