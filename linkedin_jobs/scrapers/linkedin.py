"""
LinkedIn guest job search scraper.

The public endpoint serves search results as HTML fragments of 25 cards:
- Search: https://www.linkedin.com/jobs-guest/jobs/api/seeMoreJobPostings/search?keywords=...&start=0

No authentication required. Batches are fetched one at a time with a
randomized pause in between.

A run is a small state machine:

    fetching    --cache hit / empty batch / limit reached-->  done_success
    fetching    --batch failed-->                              backing_off
    backing_off --retry (same start)-->                        fetching
    fetching    --error budget exhausted-->                    done_partial

An empty batch is the normal end of results and is not an error. Running
out of retries ends the run with whatever was collected so far.
"""

import asyncio
import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
)

from linkedin_jobs.config.settings import settings
from linkedin_jobs.models.filters import BATCH_SIZE, FilterState
from linkedin_jobs.models.job import JobRecord
from linkedin_jobs.scrapers.base import (
    BaseScraper,
    BatchFetchError,
    Pacer,
    RateLimitError,
    SleepFunc,
)
from linkedin_jobs.scrapers.parser import parse_job_list
from linkedin_jobs.services.cache import JobCache, NullCache


class FetchState(str, Enum):
    """States of a fetch run."""

    FETCHING = "fetching"
    BACKING_OFF = "backing_off"
    DONE_SUCCESS = "done_success"
    DONE_PARTIAL = "done_partial"


TERMINAL_STATES = frozenset({FetchState.DONE_SUCCESS, FetchState.DONE_PARTIAL})


@dataclass
class Transition:
    """One labeled state change of a fetch run."""

    source: FetchState
    target: FetchState
    reason: str
    start: int = 0


@dataclass
class FetchRun:
    """Result of fetching all batches for one query."""

    cache_key: str
    records: list[JobRecord] = field(default_factory=list)
    state: FetchState = FetchState.FETCHING
    transitions: list[Transition] = field(default_factory=list)
    batches_fetched: int = 0
    errors: int = 0
    consecutive_errors: int = 0
    last_error: Optional[str] = None
    from_cache: bool = False
    started_at: datetime = field(default_factory=datetime.now)
    duration_seconds: float = 0.0

    def transition(self, target: FetchState, reason: str, start: int = 0) -> None:
        """Move to a new state, recording why."""
        if self.state in TERMINAL_STATES:
            raise RuntimeError(f"Run already finished in state {self.state.value}")
        self.transitions.append(Transition(self.state, target, reason, start))
        self.state = target

    @property
    def done(self) -> bool:
        return self.state in TERMINAL_STATES

    @property
    def partial(self) -> bool:
        return self.state is FetchState.DONE_PARTIAL

    def __str__(self) -> str:
        status = "✗" if self.partial else "✓"
        source = "cache" if self.from_cache else f"{self.batches_fetched} batches"
        text = f"{status} {len(self.records)} jobs ({source}, {self.errors} errors, {self.duration_seconds:.1f}s)"
        if self.partial and self.last_error:
            text += f" - last error: {self.last_error}"
        return text


class LinkedInScraper(BaseScraper):
    """Scraper for the LinkedIn guest job search."""

    SOURCE_SITE = "linkedin"

    def __init__(
        self,
        cache: Optional[JobCache] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
        sleep: SleepFunc = asyncio.sleep,
        pacer: Optional[Pacer] = None,
        max_consecutive_errors: Optional[int] = None,
        backoff_base: Optional[float] = None,
        rate_limit_backoff_multiplier: Optional[float] = None,
    ):
        super().__init__(transport=transport, timeout=timeout)
        self.cache = cache if cache is not None else NullCache()
        self._sleep = sleep
        self.pacer = pacer or Pacer(
            base_delay=settings.scrape_delay_seconds,
            jitter=settings.scrape_delay_jitter_seconds,
            sleep=sleep,
        )
        self.max_consecutive_errors = max_consecutive_errors or settings.scrape_max_consecutive_errors
        self.backoff_base = backoff_base if backoff_base is not None else settings.scrape_backoff_base_seconds
        self.rate_limit_backoff_multiplier = (
            rate_limit_backoff_multiplier
            if rate_limit_backoff_multiplier is not None
            else settings.rate_limit_backoff_multiplier
        )

    async def fetch_batch(self, filters: FilterState, start: int) -> list[JobRecord]:
        """
        Fetch and parse one batch of listings.

        Args:
            filters: Normalized search filters.
            start: Offset of the batch within the query.

        Returns:
            Job records in page order. Empty when there are no more results.

        Raises:
            BatchFetchError: If the request failed.
        """
        html = await self._fetch_html(filters.search_url(start))
        return parse_job_list(html)

    def backoff_delay(self, consecutive_errors: int, error: Optional[BaseException] = None) -> float:
        """Seconds to wait after the n-th consecutive failure."""
        delay = self.backoff_base ** consecutive_errors
        if isinstance(error, RateLimitError):
            delay *= self.rate_limit_backoff_multiplier
        return delay

    def _wait(self, retry_state: RetryCallState) -> float:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        return self.backoff_delay(retry_state.attempt_number, error)

    async def _fetch_batch_with_retry(
        self,
        filters: FilterState,
        start: int,
        run: FetchRun,
    ) -> list[JobRecord]:
        """Fetch one batch, retrying the same offset until the error budget runs out."""

        def before_sleep(retry_state: RetryCallState) -> None:
            error = retry_state.outcome.exception()
            run.errors += 1
            run.consecutive_errors = retry_state.attempt_number
            run.last_error = str(error)
            self.logger.warning(
                "Batch failed, backing off",
                start=start,
                attempt=retry_state.attempt_number,
                wait_seconds=getattr(retry_state.next_action, "sleep", 0) if retry_state.next_action else 0,
                rate_limited=isinstance(error, RateLimitError),
                error=str(error),
            )
            run.transition(FetchState.BACKING_OFF, "batch failed", start)

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_consecutive_errors),
            wait=self._wait,
            retry=retry_if_exception_type(BatchFetchError),
            before_sleep=before_sleep,
            sleep=self._sleep,
            reraise=True,
        )

        batch: list[JobRecord] = []
        async for attempt in retrying:
            with attempt:
                if run.state is FetchState.BACKING_OFF:
                    run.transition(FetchState.FETCHING, "retry", start)
                batch = await self.fetch_batch(filters, start)
        return batch

    async def fetch_all(self, filters: FilterState) -> FetchRun:
        """
        Fetch every batch for a query, up to its limit.

        Cached results are returned without touching the network. A
        non-empty result is stored in the cache before returning.

        Args:
            filters: Normalized search filters.

        Returns:
            FetchRun holding the records and how the run ended.
        """
        start_time = time.time()
        run = FetchRun(cache_key=filters.cache_key)

        entry = self.cache.get_entry(run.cache_key)
        if entry is not None and not entry.covers(filters.limit):
            self.logger.info("Cached results cut short by a smaller limit, refetching", cached=len(entry.records))
            entry = None
        if entry is not None:
            # limit is not part of the key, apply it to the cached snapshot
            cached = entry.records
            run.records = list(cached[:filters.limit] if filters.limit else cached)
            run.from_cache = True
            run.transition(FetchState.DONE_SUCCESS, "cache hit")
            self.logger.info("Returning cached results", count=len(run.records))
            run.duration_seconds = time.time() - start_time
            return run

        self.logger.info("Starting search", url=run.cache_key, limit=filters.limit)

        start = 0
        limit_reached = False
        while not run.done:
            try:
                batch = await self._fetch_batch_with_retry(filters, start, run)
            except BatchFetchError as e:
                run.errors += 1
                run.consecutive_errors = self.max_consecutive_errors
                run.last_error = str(e)
                self.logger.error(
                    "Max consecutive errors reached, stopping",
                    start=start,
                    collected=len(run.records),
                    error=str(e),
                )
                run.transition(FetchState.DONE_PARTIAL, "error budget exhausted", start)
                break

            if not batch:
                run.transition(FetchState.DONE_SUCCESS, "empty batch", start)
                break

            run.records.extend(batch)
            run.batches_fetched += 1
            run.consecutive_errors = 0
            self.logger.info("Fetched jobs", count=len(batch), total=len(run.records))

            if filters.limit and len(run.records) >= filters.limit:
                del run.records[filters.limit:]
                limit_reached = True
                run.transition(FetchState.DONE_SUCCESS, "limit reached", start)
                break

            start += BATCH_SIZE
            await self.pacer.wait()

        if run.records:
            self.cache.set(run.cache_key, run.records, complete=not limit_reached)

        run.duration_seconds = time.time() - start_time
        self.logger.info(
            "Search complete",
            state=run.state.value,
            jobs=len(run.records),
            batches=run.batches_fetched,
            errors=run.errors,
            duration_seconds=round(run.duration_seconds, 2),
        )
        return run
