"""
Base scraper class with HTTP client, request headers, and pacing.
"""

import asyncio
import random
from typing import Awaitable, Callable, Optional

import httpx
import structlog

from linkedin_jobs.config.settings import settings

logger = structlog.get_logger()


SleepFunc = Callable[[float], Awaitable[None]]


class BatchFetchError(Exception):
    """A batch request failed: network error, timeout, or non-200 status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RateLimitError(BatchFetchError):
    """The source answered HTTP 429."""


class Pacer:
    """
    Randomized delay between two consecutive requests of one run.
    Waits base_delay plus a uniform jitter in [0, jitter].
    """

    def __init__(
        self,
        base_delay: float = 2.0,
        jitter: float = 1.0,
        sleep: SleepFunc = asyncio.sleep,
    ):
        self.base_delay = base_delay
        self.jitter = jitter
        self._sleep = sleep

    def next_delay(self) -> float:
        return self.base_delay + random.uniform(0, self.jitter)

    async def wait(self) -> float:
        """Sleep for one pacing interval and return how long it was."""
        delay = self.next_delay()
        logger.debug("Pacing", wait_seconds=round(delay, 2))
        await self._sleep(delay)
        return delay


class BaseScraper:
    """
    Base class for HTML search scrapers.
    Provides an HTTP client with browser-like headers and status mapping.
    """

    # Subclasses should override these
    SOURCE_SITE: str = "unknown"

    def __init__(
        self,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ):
        self.client: Optional[httpx.AsyncClient] = None
        self.timeout = timeout if timeout is not None else settings.scrape_timeout_seconds
        self._transport = transport
        self.logger = structlog.get_logger().bind(scraper=self.SOURCE_SITE)

    async def __aenter__(self):
        """Create async HTTP client on context entry."""
        self.client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            follow_redirects=True,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Close HTTP client on context exit."""
        if self.client:
            await self.client.aclose()
            self.client = None

    def _request_headers(self) -> dict[str, str]:
        """Headers for one request, with a freshly picked user agent."""
        return {
            "User-Agent": random.choice(settings.scrape_user_agents),
            "Accept": "application/json, text/javascript, */*; q=0.01",
            "Accept-Language": settings.scrape_accept_language,
            "Accept-Encoding": "gzip, deflate",
            "Referer": settings.scrape_referer,
            "X-Requested-With": "XMLHttpRequest",
            "Connection": "keep-alive",
            "Sec-Fetch-Dest": "empty",
            "Sec-Fetch-Mode": "cors",
            "Sec-Fetch-Site": "same-origin",
            "Cache-Control": "no-cache",
            "Pragma": "no-cache",
        }

    async def _fetch_html(self, url: str) -> str:
        """
        Fetch HTML content from URL.

        Args:
            url: Full URL to fetch.

        Returns:
            Response body as text.

        Raises:
            RateLimitError: On HTTP 429.
            BatchFetchError: On any other non-200 status, timeout, or
                transport error.
        """
        if not self.client:
            raise RuntimeError("Scraper must be used as async context manager")

        self.logger.debug("Fetching HTML", url=url)

        try:
            response = await self.client.get(url, headers=self._request_headers())
        except httpx.TimeoutException as e:
            raise BatchFetchError(f"Request timed out after {self.timeout}s: {e}") from e
        except httpx.HTTPError as e:
            raise BatchFetchError(f"Request failed: {e}") from e

        if response.status_code == 429:
            raise RateLimitError("Rate limit reached", status_code=429)
        if response.status_code != 200:
            raise BatchFetchError(
                f"HTTP {response.status_code}: {response.reason_phrase}",
                status_code=response.status_code,
            )

        return response.text
