"""Tests for the httpx-backed fetcher."""

import httpx
import pytest

from imgspider.core.errors import FetchFailed
from imgspider.core.models import DEFAULT_USER_AGENT
from imgspider.engine.fetcher import HttpFetcher


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestHttpFetcher:
    """Tests for HttpFetcher."""

    async def test_fetch_text_sends_user_agent(self):
        """Test that pages are fetched with the identifying user agent."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["ua"] = request.headers["user-agent"]
            return httpx.Response(200, text="<html>ok</html>")

        async with _client(handler) as client:
            fetcher = HttpFetcher(client=client)
            assert await fetcher.fetch_text("http://x.com/") == "<html>ok</html>"

        assert seen["ua"] == DEFAULT_USER_AGENT

    async def test_fetch_bytes(self):
        """Test raw byte retrieval."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"\x00\x01\x02")

        async with _client(handler) as client:
            fetcher = HttpFetcher(client=client)
            assert await fetcher.fetch_bytes("http://x.com/a.png") == b"\x00\x01\x02"

    async def test_error_status_raises(self):
        """Test that non-success responses raise FetchFailed."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404)

        async with _client(handler) as client:
            fetcher = HttpFetcher(client=client)
            with pytest.raises(FetchFailed, match="HTTP 404") as exc_info:
                await fetcher.fetch_bytes("http://x.com/missing.png")

        assert exc_info.value.url == "http://x.com/missing.png"

    async def test_transport_error_raises(self):
        """Test that connection errors raise FetchFailed."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with _client(handler) as client:
            fetcher = HttpFetcher(client=client)
            with pytest.raises(FetchFailed):
                await fetcher.fetch_text("http://x.com/")

    async def test_external_client_left_open(self):
        """Test that a caller-provided client is not closed."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="ok")

        async with _client(handler) as client:
            fetcher = HttpFetcher(client=client)
            await fetcher.aclose()
            assert not client.is_closed

    async def test_owned_client_closed(self):
        """Test that the fetcher closes the client it created."""
        fetcher = HttpFetcher(timeout=5.0)
        await fetcher.aclose()
        assert fetcher._client.is_closed
