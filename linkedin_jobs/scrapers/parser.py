"""
HTML parser for job search result fragments.

The guest search endpoint answers with a list of <li> cards:

    <li>
      <div class="base-card">
        <a class="base-card__full-link" href="https://www.linkedin.com/jobs/view/..."></a>
        <img class="artdeco-entity-image" data-delayed-url="https://media.licdn.com/...">
        <h3 class="base-search-card__title">Software Engineer</h3>
        <h4 class="base-search-card__subtitle"><a>Acme</a></h4>
        <span class="job-search-card__location">Bengaluru, Karnataka, India</span>
        <span class="job-search-card__salary-info">$100K - $120K</span>
        <time class="job-search-card__listdate" datetime="2024-01-15">2 days ago</time>
      </div>
    </li>

Every field is looked up on its own, so a card missing one element still
yields the others. Cards without a title or company are dropped.
"""

from typing import Optional

import structlog
from bs4 import BeautifulSoup
from bs4.element import Tag

from linkedin_jobs.models.job import SALARY_NOT_SPECIFIED, JobRecord
from linkedin_jobs.utils.text import normalize_whitespace

logger = structlog.get_logger()


LISTING_SELECTOR = "li"

POSITION_SELECTOR = ".base-search-card__title"
COMPANY_SELECTOR = ".base-search-card__subtitle"
LOCATION_SELECTOR = ".job-search-card__location"
DATE_SELECTOR = "time"
SALARY_SELECTOR = ".job-search-card__salary-info"
JOB_URL_SELECTOR = ".base-card__full-link"
COMPANY_LOGO_SELECTOR = ".artdeco-entity-image"
AGO_TIME_SELECTOR = ".job-search-card__listdate, .job-search-card__listdate--new"


def _select(container: Tag, selector: str) -> Optional[Tag]:
    try:
        return container.select_one(selector)
    except (AttributeError, TypeError, ValueError) as e:
        logger.debug("Selector lookup failed", selector=selector, error=str(e))
        return None


def _text(container: Tag, selector: str) -> str:
    """Trimmed text of the first match, '' when missing."""
    element = _select(container, selector)
    if element is None:
        return ""
    return element.get_text().strip()


def _attr(container: Tag, selector: str, attribute: str) -> str:
    """Trimmed attribute value of the first match, '' when missing."""
    element = _select(container, selector)
    if element is None:
        return ""
    value = element.get(attribute)
    if isinstance(value, list):
        value = " ".join(value)
    return value.strip() if value else ""


def extract_job(container: Tag) -> JobRecord:
    """
    Extract a JobRecord from one listing card.

    The returned record may be invalid (no position or company); callers
    are expected to filter on JobRecord.is_valid.
    """
    salary = normalize_whitespace(_text(container, SALARY_SELECTOR))

    return JobRecord(
        position=_text(container, POSITION_SELECTOR),
        company=_text(container, COMPANY_SELECTOR),
        company_logo=_attr(container, COMPANY_LOGO_SELECTOR, "data-delayed-url"),
        location=_text(container, LOCATION_SELECTOR),
        date=_attr(container, DATE_SELECTOR, "datetime"),
        ago_time=_text(container, AGO_TIME_SELECTOR),
        salary=salary or SALARY_NOT_SPECIFIED,
        job_url=_attr(container, JOB_URL_SELECTOR, "href"),
    )


def parse_job_list(html: Optional[str]) -> list[JobRecord]:
    """
    Parse a search results fragment into job records.

    Args:
        html: Raw markup returned by the search endpoint.

    Returns:
        Valid job records in document order. Empty if the document could
        not be parsed at all.
    """
    if not html:
        return []

    try:
        soup = BeautifulSoup(html, "lxml")
        containers = soup.select(LISTING_SELECTOR)
    except Exception as e:
        logger.error("Error parsing job list", error=str(e))
        return []

    jobs = []
    for index, container in enumerate(containers):
        try:
            job = extract_job(container)
        except Exception as e:
            logger.warning("Error parsing job", index=index, error=str(e))
            continue

        if job.is_valid:
            jobs.append(job)

    return jobs
