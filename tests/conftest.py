"""
Pytest configuration and fixtures for the LinkedIn job query tests.
"""

import sys
from pathlib import Path

import pytest

# Add project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


class FakeClock:
    """Manually advanced clock for cache tests."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sleep_calls():
    """Durations passed to the fake sleep, in call order."""
    return []


@pytest.fixture
def fake_sleep(sleep_calls):
    """Coroutine standing in for asyncio.sleep that returns immediately."""
    async def _sleep(seconds: float) -> None:
        sleep_calls.append(seconds)

    return _sleep


@pytest.fixture
def pacer(fake_sleep):
    """Pacer with a fixed 0.5s delay so pacing is easy to tell from backoff."""
    from linkedin_jobs.scrapers.base import Pacer

    return Pacer(base_delay=0.5, jitter=0, sleep=fake_sleep)


@pytest.fixture(autouse=True)
def empty_default_cache():
    """Each test starts and ends with an empty process-wide cache."""
    from linkedin_jobs.services.query_service import clear_cache

    clear_cache()
    yield
    clear_cache()


# Markers for test categories
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "live: marks tests that make real HTTP calls")
    config.addinivalue_line("markers", "integration: marks integration tests")
    config.addinivalue_line("markers", "slow: marks slow tests")
