"""
Job record model.
"""

from dataclasses import dataclass, asdict


SALARY_NOT_SPECIFIED = "Not specified"


@dataclass(frozen=True)
class JobRecord:
    """Represents one job listing scraped from a search results page."""

    position: str = ""
    company: str = ""
    company_logo: str = ""
    location: str = ""
    date: str = ""  # ISO date from the <time datetime="..."> attribute
    ago_time: str = ""  # e.g. "2 days ago"
    salary: str = SALARY_NOT_SPECIFIED
    job_url: str = ""

    def to_dict(self) -> dict:
        """Convert JobRecord to a plain dictionary."""
        return asdict(self)

    @property
    def is_valid(self) -> bool:
        """A listing is only usable when it names both a position and a company."""
        return bool(self.position.strip()) and bool(self.company.strip())
