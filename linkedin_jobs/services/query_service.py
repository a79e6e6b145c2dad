"""
Query service.

Public entry points for running searches against the guest job search,
plus operational helpers for the shared result cache.
"""

import asyncio
from typing import Any, Iterable, Mapping, Optional, Union

import httpx
import structlog

from linkedin_jobs.config.settings import settings
from linkedin_jobs.models.filters import FilterState
from linkedin_jobs.models.job import JobRecord
from linkedin_jobs.scrapers.base import SleepFunc
from linkedin_jobs.scrapers.linkedin import FetchRun, LinkedInScraper
from linkedin_jobs.services.cache import JobCache

logger = structlog.get_logger()


FilterInput = Optional[Union[Mapping[str, Any], FilterState]]


# Process-wide cache, shared by every query
_default_cache = JobCache(
    ttl_seconds=settings.cache_ttl_seconds,
    sweep_interval_seconds=settings.cache_sweep_interval_seconds,
)


def get_default_cache() -> JobCache:
    """Return the cache shared by queries that don't bring their own."""
    return _default_cache


async def run_query(
    filters: FilterInput = None,
    *,
    cache: Optional[JobCache] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    sleep: Optional[SleepFunc] = None,
    **options: Any,
) -> FetchRun:
    """
    Run one search and return the full run summary.

    Args:
        filters: Filter options (see linkedin_jobs.models.filters) or a
            FilterState.
        cache: Cache to use instead of the process-wide one.
        transport: httpx transport override, mainly for tests.
        sleep: Coroutine used for pacing and backoff waits.
        **options: Filter options given as keyword arguments.

    Returns:
        FetchRun with the records and how the run ended.
    """
    state = FilterState.from_raw(filters, **options)
    scraper = LinkedInScraper(
        cache=cache if cache is not None else _default_cache,
        transport=transport,
        sleep=sleep or asyncio.sleep,
    )

    async with scraper:
        return await scraper.fetch_all(state)


async def query(filters: FilterInput = None, **options: Any) -> list[JobRecord]:
    """
    Search for jobs.

    Accepts the same arguments as run_query and returns only the records.
    """
    run = await run_query(filters, **options)
    return run.records


async def run_searches(
    searches: Iterable[Mapping[str, Any]],
    **kwargs: Any,
) -> list[tuple[str, FetchRun]]:
    """
    Run saved searches one after another.

    Args:
        searches: Filter mappings, each with an optional "name".
        **kwargs: Passed to run_query (cache, transport, sleep).

    Returns:
        (name, FetchRun) pairs in input order.
    """
    results = []
    for index, search in enumerate(searches):
        options = dict(search)
        name = str(options.pop("name", None) or f"search-{index + 1}")
        logger.info("Running saved search", search=name)
        run = await run_query(options, **kwargs)
        logger.info(str(run), search=name)
        results.append((name, run))
    return results


def get_cache_size() -> int:
    """Number of entries in the shared cache."""
    return _default_cache.size


def clear_cache() -> int:
    """Evict every entry from the shared cache."""
    return _default_cache.clear()


def sweep_cache() -> int:
    """Drop expired entries from the shared cache."""
    return _default_cache.sweep()
