"""HTTP fetcher backed by httpx."""

from typing import Optional

import httpx

from imgspider.core.errors import FetchFailed
from imgspider.core.interfaces import Fetcher
from imgspider.core.models import DEFAULT_USER_AGENT


class HttpFetcher(Fetcher):
    """Fetch pages and images with a shared httpx client."""

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            user_agent: Value sent in the User-Agent header.
            timeout: Request timeout in seconds.
            client: Pre-built client (e.g. with a mock transport). Its
                lifetime is then managed by the caller.
        """
        self._user_agent = user_agent
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
        )

    async def fetch_text(self, url: str) -> str:
        response = await self._get(url)
        return response.text

    async def fetch_bytes(self, url: str) -> bytes:
        response = await self._get(url)
        return response.content

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _get(self, url: str) -> httpx.Response:
        try:
            response = await self._client.get(
                url, headers={"User-Agent": self._user_agent}
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchFailed(
                f"HTTP {e.response.status_code} for {url}", url=url
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise FetchFailed(f"Failed to fetch {url}: {e}", url=url) from e

        return response
