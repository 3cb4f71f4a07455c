"""
Shared test fixtures and utilities for collegesearch tests.

This module provides common fixtures, test data, and helper functions
to reduce code duplication and improve test consistency across the test suite.
"""

from types import MappingProxyType

import pytest

from collegesearch import CollegeSearch, Dictionaries, EngineConfig
from collegesearch.search.expansion import build_table
from collegesearch.utils.logging_config import LogLevel, SearchLogger

# Test data constants
SAMPLE_RECORDS = [
    {
        "name": "AIIMS Delhi",
        "location": "New Delhi",
        "state": "Delhi",
        "type": "Medical",
        "management_type": "Government",
        "district": "South Delhi",
    },
    {
        "name": "JIPMER Puducherry",
        "location": "Puducherry",
        "state": "Puducherry",
        "type": "Medical",
        "management_type": "Government",
    },
    {
        "name": "Grant Medical College",
        "location": "Bombay",
        "state": "Maharashtra",
        "type": "Medical",
        "management_type": "Government",
        "district": "Mumbai",
    },
    {
        "college_name": "Christian Medical College",
        "city": "Vellore",
        "state": "Tamil Nadu",
        "college_type": "Medical",
        "management": "Private",
    },
    {
        "name": "Manipal Institute of Technology",
        "location": "Manipal",
        "state": "Karnataka",
        "type": "Engineering",
        "management_type": "Deemed",
    },
]

SCENARIO_RECORDS = [
    {"name": "AIIMS Delhi", "state": "Delhi"},
    {"name": "JIPMER Puducherry", "state": "Puducherry"},
]


@pytest.fixture
def sample_records():
    """A small, varied record set (dict records, alias keys included)."""
    return [dict(r) for r in SAMPLE_RECORDS]


@pytest.fixture
def scenario_records():
    return [dict(r) for r in SCENARIO_RECORDS]


@pytest.fixture
def quiet_logger():
    """Logger that only reports errors, so tests stay quiet."""
    return SearchLogger(name="collegesearch.tests", level=LogLevel.ERROR)


@pytest.fixture
def synthetic_dictionaries():
    """Tiny dictionaries independent of the packaged tables."""
    return Dictionaries(
        synonyms=build_table({"mbbs": ["bachelor of medicine"], "govt": ["government"]}),
        locations=build_table({"bombay": ["mumbai"], "madras": ["chennai"]}),
    )


@pytest.fixture
def empty_dictionaries():
    return Dictionaries(synonyms=MappingProxyType({}), locations=MappingProxyType({}))


@pytest.fixture
def engine(quiet_logger):
    """Engine with default configuration and packaged dictionaries."""
    return CollegeSearch(logger=quiet_logger)


@pytest.fixture
def make_engine(quiet_logger):
    """Factory for engines with custom configuration."""

    def _make(config=None, dictionaries=None):
        return CollegeSearch(config or EngineConfig(), dictionaries=dictionaries, logger=quiet_logger)

    return _make


class TestDataHelper:
    """Helper class for creating test data and assertions."""

    @staticmethod
    def names(results):
        return [r.record.get("name") or r.record.get("college_name") for r in results]

    @staticmethod
    def assert_sorted_descending(items):
        scores = [item.score for item in items]
        assert scores == sorted(scores, reverse=True)


@pytest.fixture
def test_helper():
    """Provide test helper utilities."""
    return TestDataHelper


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "api: API-related tests")
    config.addinivalue_line("markers", "cli: CLI-related tests")
    config.addinivalue_line("markers", "matcher: Matcher-related tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take longer to run")
