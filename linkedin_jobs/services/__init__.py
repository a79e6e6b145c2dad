"""
Services for the LinkedIn job query client.

The query service is imported from linkedin_jobs.services.query_service;
only the cache is re-exported here since the scrapers depend on it.
"""

from linkedin_jobs.services.cache import CacheEntry, JobCache, NullCache

__all__ = ["CacheEntry", "JobCache", "NullCache"]
