"""
Data models for the LinkedIn job query client.
"""

from linkedin_jobs.models.filters import BATCH_SIZE, FilterState, normalize_filters
from linkedin_jobs.models.job import SALARY_NOT_SPECIFIED, JobRecord

__all__ = ["BATCH_SIZE", "FilterState", "normalize_filters", "SALARY_NOT_SPECIFIED", "JobRecord"]
