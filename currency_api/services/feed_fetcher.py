"""
Feed Fetcher: downloads the raw ECB historical rate feed.

One GET per call, no retries: the refresh schedule is the retry mechanism.
"""

import logging
from typing import Protocol

import httpx

from currency_api.config import settings
from currency_api.core.exceptions import RemoteError, TransportError

logger = logging.getLogger(__name__)


class FeedSource(Protocol):
    async def fetch(self) -> bytes:
        """Return the raw feed body."""
        ...


class FeedFetcher:
    """Fetch the feed over HTTP with httpx."""

    def __init__(
        self,
        url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url or settings.FEED_URL
        self.timeout = timeout if timeout is not None else settings.FEED_TIMEOUT_SECONDS
        # Injected in tests (httpx.MockTransport)
        self._transport = transport

    async def fetch(self) -> bytes:
        """
        GET the feed URL and return the body.

        Raises:
            TransportError: the request never produced a response.
            RemoteError: the response status was not 2xx.
        """
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                resp = await client.get(self.url)
        except httpx.TransportError as exc:
            raise TransportError(f"Unable to download {self.url}: {exc}") from exc

        if not resp.is_success:
            raise RemoteError(resp.status_code, resp.reason_phrase)

        logger.debug("Fetched %d bytes from %s", len(resp.content), self.url)
        return resp.content
