"""
Query the LinkedIn guest job search and get normalized job records.

    import asyncio
    import linkedin_jobs

    jobs = asyncio.run(linkedin_jobs.query(keyword="software engineer", location="India", limit=10))
"""

from linkedin_jobs.models import FilterState, JobRecord, normalize_filters
from linkedin_jobs.scrapers import BatchFetchError, FetchRun, FetchState, LinkedInScraper, RateLimitError
from linkedin_jobs.services.cache import JobCache, NullCache
from linkedin_jobs.services.query_service import (
    clear_cache,
    get_cache_size,
    get_default_cache,
    query,
    run_query,
    run_searches,
    sweep_cache,
)

__version__ = "0.1.0"

__all__ = [
    "FilterState",
    "JobRecord",
    "normalize_filters",
    "BatchFetchError",
    "FetchRun",
    "FetchState",
    "LinkedInScraper",
    "RateLimitError",
    "JobCache",
    "NullCache",
    "clear_cache",
    "get_cache_size",
    "get_default_cache",
    "query",
    "run_query",
    "run_searches",
    "sweep_cache",
]
