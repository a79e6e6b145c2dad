"""
Scraper for the LinkedIn guest job search.
"""

from linkedin_jobs.scrapers.base import BaseScraper, BatchFetchError, Pacer, RateLimitError
from linkedin_jobs.scrapers.linkedin import FetchRun, FetchState, LinkedInScraper, Transition
from linkedin_jobs.scrapers.parser import parse_job_list

__all__ = [
    "BaseScraper",
    "BatchFetchError",
    "Pacer",
    "RateLimitError",
    "FetchRun",
    "FetchState",
    "LinkedInScraper",
    "Transition",
    "parse_job_list",
]
