"""
Search filters for the guest job search endpoint.

Caller input is free text: enum-like options are matched case-insensitively
against fixed lookup tables and fall back to "no filter" when they match
nothing. Normalization never raises.

Recognized options (snake_case, or the camelCase spelling in parentheses):

    host                                  Host serving the endpoint.
    keyword                               Search terms.
    location                              Location text.
    date_since_posted (dateSincePosted)   "past month", "past week", "24hr".
    job_type (jobType)                    "full time", "part time", "contract",
                                          "temporary", "volunteer", "internship".
    remote_filter (remoteFilter)          "on-site", "remote", "hybrid".
    salary                                40000, 60000, 80000, 100000, 120000.
    experience_level (experienceLevel)    "internship", "entry level", "associate",
                                          "senior", "director", "executive".
    sort_by (sortBy)                      "recent", "relevant".
    limit                                 Max records to return, 0 = all.
    page                                  Skips page * 25 listings.
"""

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union
from urllib.parse import urlencode

import structlog

from linkedin_jobs.config.settings import settings
from linkedin_jobs.utils.text import normalize_whitespace

logger = structlog.get_logger()


# Listings per result page served by the endpoint
BATCH_SIZE = 25

SEARCH_PATH = "/jobs-guest/jobs/api/seeMoreJobPostings/search"


# Lookup tables (keys are lower case)
DATE_SINCE_POSTED_CODES = MappingProxyType({
    "past month": "r2592000",
    "past-month": "r2592000",
    "past week": "r604800",
    "past-week": "r604800",
    "24hr": "r86400",
})

EXPERIENCE_LEVEL_CODES = MappingProxyType({
    "internship": "1",
    "entry level": "2",
    "entry-level": "2",
    "associate": "3",
    "senior": "4",
    "director": "5",
    "executive": "6",
})

JOB_TYPE_CODES = MappingProxyType({
    "full time": "F",
    "full-time": "F",
    "part time": "P",
    "part-time": "P",
    "contract": "C",
    "temporary": "T",
    "volunteer": "V",
    "internship": "I",
})

REMOTE_FILTER_CODES = MappingProxyType({
    "on-site": "1",
    "on site": "1",
    "remote": "2",
    "hybrid": "3",
})

SALARY_CODES = MappingProxyType({
    "40000": "1",
    "60000": "2",
    "80000": "3",
    "100000": "4",
    "120000": "5",
})

SORT_BY_CODES = MappingProxyType({
    "recent": "DD",
    "relevant": "R",
})

# camelCase spellings accepted for compatibility with the JavaScript client
FILTER_ALIASES = MappingProxyType({
    "dateSincePosted": "date_since_posted",
    "jobType": "job_type",
    "remoteFilter": "remote_filter",
    "experienceLevel": "experience_level",
    "sortBy": "sort_by",
})


def _lookup(table: Mapping[str, str], value: Any) -> str:
    """Resolve free text against a lookup table, '' when unmapped."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return table.get(normalize_whitespace(str(value)).lower(), "")


def _clean_text(value: Any) -> str:
    """Trim and join words with '+' for embedding in a query string."""
    if value is None:
        return ""
    return normalize_whitespace(str(value), separator="+")


def _coerce_count(value: Any) -> int:
    """Coerce to a non-negative int; anything unusable becomes 0."""
    if value is None:
        return 0
    # ints stay exact, float() would round or overflow large ones
    if isinstance(value, int) and not isinstance(value, bool):
        return max(value, 0)
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    if not math.isfinite(number) or number < 0:
        return 0
    return int(number)


@dataclass(frozen=True)
class FilterState:
    """Normalized search filters. Enum fields hold the endpoint's codes."""

    host: str = field(default_factory=lambda: settings.default_host)
    keyword: str = ""
    location: str = ""
    date_since_posted: str = ""  # f_TPR
    job_type: str = ""  # f_JT
    remote_filter: str = ""  # f_WT
    salary: str = ""  # f_SB2
    experience_level: str = ""  # f_E
    sort_by: str = ""  # sortBy
    limit: int = 0
    page: int = 0

    @classmethod
    def from_raw(
        cls,
        raw: Optional[Union[Mapping[str, Any], "FilterState"]] = None,
        **options: Any,
    ) -> "FilterState":
        """
        Build filters from caller input.

        Args:
            raw: Mapping of filter options. An existing FilterState is
                returned as is.
            **options: Additional options, overriding keys in ``raw``.

        Returns:
            Normalized FilterState.
        """
        if isinstance(raw, FilterState):
            return raw

        values: dict[str, Any] = {}
        for key, value in {**dict(raw or {}), **options}.items():
            name = FILTER_ALIASES.get(key, key)
            if name not in cls.__dataclass_fields__:
                logger.debug("Ignoring unknown filter option", option=key)
                continue
            values[name] = value

        host = values.get("host")
        return cls(
            host=str(host).strip() if host and str(host).strip() else settings.default_host,
            keyword=_clean_text(values.get("keyword")),
            location=_clean_text(values.get("location")),
            date_since_posted=_lookup(DATE_SINCE_POSTED_CODES, values.get("date_since_posted")),
            job_type=_lookup(JOB_TYPE_CODES, values.get("job_type")),
            remote_filter=_lookup(REMOTE_FILTER_CODES, values.get("remote_filter")),
            salary=_lookup(SALARY_CODES, values.get("salary")),
            experience_level=_lookup(EXPERIENCE_LEVEL_CODES, values.get("experience_level")),
            sort_by=_lookup(SORT_BY_CODES, values.get("sort_by")),
            limit=_coerce_count(values.get("limit")),
            page=_coerce_count(values.get("page")),
        )

    def search_url(self, start: int = 0) -> str:
        """
        Render the search URL for one batch.

        Parameters are only included when set, in a fixed order, so the same
        filters and start always give the same URL.

        Args:
            start: Offset of the batch within this query, a multiple of
                BATCH_SIZE. The page offset is added on top.

        Raises:
            ValueError: If start is negative.
        """
        if start < 0:
            raise ValueError(f"start must be non-negative, got {start}")

        params = [
            ("keywords", self.keyword),
            ("location", self.location),
            ("f_TPR", self.date_since_posted),
            ("f_SB2", self.salary),
            ("f_E", self.experience_level),
            ("f_WT", self.remote_filter),
            ("f_JT", self.job_type),
        ]
        query = [(name, value) for name, value in params if value]
        query.append(("start", str(start + self.page * BATCH_SIZE)))
        if self.sort_by:
            query.append(("sortBy", self.sort_by))

        return f"https://{self.host}{SEARCH_PATH}?{urlencode(query)}"

    @property
    def cache_key(self) -> str:
        """Canonical signature of the query: the URL of its first batch."""
        return self.search_url(0)


def normalize_filters(
    raw: Optional[Union[Mapping[str, Any], FilterState]] = None,
    **options: Any,
) -> FilterState:
    """Normalize caller input into a FilterState. Never raises."""
    return FilterState.from_raw(raw, **options)
