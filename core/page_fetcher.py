#!/usr/bin/env python3
"""
Page Fetcher Module

Fetches raw page bodies with a browser-like user agent. Redirects are followed
by hand so the hop count stays bounded.
"""

import logging
from typing import Optional
from urllib.parse import urljoin

import httpx

from core.config import Config
from core.errors import FetchError, FetchTimeoutError, RedirectLoopError

logger = logging.getLogger(__name__)


class PageFetcher:
    """Async HTTP(S) GET with manual redirect following"""

    def __init__(self, timeout: float = Config.FETCH_TIMEOUT,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initialize page fetcher

        Args:
            timeout: Socket timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.timeout = timeout
        self.transport = transport

    async def fetch(self, url: str, max_redirects: int = Config.MAX_REDIRECTS) -> str:
        """
        Fetch a URL and return its body as text

        Args:
            url: The URL to fetch
            max_redirects: How many more redirects may be followed

        Returns:
            Decoded response body. Non-2xx bodies are returned as-is.

        Raises:
            RedirectLoopError: If the redirect chain exceeds max_redirects
            FetchTimeoutError: If the request times out
            FetchError: On any other transport failure
        """
        async with httpx.AsyncClient(
            headers=Config.get_default_headers(),
            timeout=self.timeout,
            follow_redirects=False,
            transport=self.transport,
        ) as client:
            return await self._fetch(client, url, max_redirects)

    async def _fetch(self, client: httpx.AsyncClient, url: str, hops_left: int) -> str:
        try:
            response = await client.get(url)
        except httpx.TimeoutException as e:
            logger.warning(f"⏱️ [fetch] Timed out: {url}")
            raise FetchTimeoutError("Request timed out") from e
        except httpx.HTTPError as e:
            logger.warning(f"❌ [fetch] Request failed for {url}: {e}")
            raise FetchError(f"Request failed: {e}") from e

        location = response.headers.get('location')
        if response.status_code in Config.REDIRECT_STATUS_CODES and location:
            if hops_left <= 0:
                raise RedirectLoopError("Too many redirects")
            next_url = urljoin(url, location)
            logger.debug(f"↪️ [fetch] {response.status_code} {url} -> {next_url}")
            return await self._fetch(client, next_url, hops_left - 1)

        return response.text
