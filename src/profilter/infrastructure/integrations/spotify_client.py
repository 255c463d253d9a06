"""Spotify Web API client: bearer-authenticated GETs and 'next'-link pagination."""

import logging
from types import TracebackType
from typing import Any
from urllib.parse import quote

import httpx

from profilter.config.settings import Settings
from profilter.domain.dtos import Page
from profilter.domain.exceptions import RequestError
from profilter.domain.ports import ICatalogClient

logger = logging.getLogger(__name__)


class SpotifyClient(ICatalogClient):
    """Read-only HTTP client for the Spotify Web API."""

    # Hey future me, the credential is checked HERE, once, before any request goes out.
    # A client that exists always has a token - no "is the key set?" checks further down.
    # The httpx client is NOT created here (asyncio loop issues); see _get_client().
    def __init__(
        self,
        settings: Settings,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize Spotify client.

        Args:
            settings: Profilter settings (credential, base URL, timeout)
            client: Optional pre-built httpx client, mostly for tests

        Raises:
            ConfigurationError: If no API key is configured
        """
        self.settings = settings
        self._access_token = settings.require_api_key()
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.settings.request_timeout)
        return self._client

    async def close(self) -> None:
        """Close HTTP client (only if we created it)."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "SpotifyClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    def user_url(self, username: str) -> str:
        return f"{self.settings.api_base_url}users/{quote(username, safe='')}"

    def user_playlists_url(self, username: str) -> str:
        return f"{self.user_url(username)}/playlists"

    async def request(self, url: str) -> Any:
        """GET a fully-qualified URL with the bearer token and parse the JSON body.

        Args:
            url: Full URL to request

        Returns:
            Parsed JSON body

        Raises:
            RequestError: On network failure, non-2xx status or invalid JSON
        """
        client = await self._get_client()
        headers = {"Authorization": f"Bearer {self._access_token}"}

        try:
            response = await client.get(url, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise RequestError(
                f"Spotify API returned {e.response.status_code} for {url}",
                url=url,
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise RequestError(f"Request to {url} failed: {e!s}", url=url) from e

        try:
            return response.json()
        except ValueError as e:
            raise RequestError(
                f"Response from {url} is not valid JSON",
                url=url,
                status_code=response.status_code,
            ) from e

    # Listen up: the next-page URL only exists once the current page is back, so this
    # is strictly one request at a time. A page without "items" (Spotify does that on
    # some edge pages) ends the walk with whatever we have - it's not an error.
    async def paginate(self, url: str) -> list[Any]:
        """Follow 'next' links starting at ``url`` and concatenate page items.

        Args:
            url: URL of the first page

        Returns:
            All items of the collection, in page order

        Raises:
            RequestError: If any page request fails or a page is malformed
        """
        items: list[Any] = []
        next_url: str | None = url
        pages = 0

        while next_url:
            data = await self.request(next_url)
            page = Page.from_api(data)
            pages += 1
            if page.items is None:
                logger.debug(f"Page {pages} of {url} has no items, stopping")
                break
            items.extend(page.items)
            next_url = page.next

        logger.debug(f"Fetched {len(items)} items in {pages} pages from {url}")
        return items
