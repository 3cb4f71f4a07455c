from types import SimpleNamespace

import pytest

from collegesearch.core.config import DEFAULT_SEARCH_FIELDS
from collegesearch.search.filters import apply_record_filters, validate_filters
from collegesearch.utils.error_handling import ErrorCategory, ErrorCollector

pytestmark = pytest.mark.unit

RECORD = {"name": "AIIMS Delhi", "state": "Delhi", "established": 1956, "seats": None}


@pytest.mark.parametrize(
    "filters, expected",
    [
        ({"state": "Delhi"}, True),
        ({"state": "delhi"}, False),
        ({"state": ["Goa", "Delhi"]}, True),
        ({"state": ("Goa",)}, False),
        ({"state": {"Delhi"}}, True),
        ({"established": {"min": 1956}}, True),
        ({"established": {"max": 1955}}, False),
        ({"established": {"min": 1900, "max": 2000}}, True),
        ({"state": "Delhi", "established": {"min": 1990}}, False),
        ({"state": None}, True),
        ({}, True),
    ],
)
def test_filter_forms(filters, expected):
    assert apply_record_filters(RECORD, filters) is expected


@pytest.mark.parametrize("key", ["seats", "missing"])
def test_missing_value_fails_range(key):
    assert not apply_record_filters(RECORD, {key: {"min": 0}})


def test_incomparable_value_fails_range():
    assert not apply_record_filters(RECORD, {"state": {"min": 10}})


def test_unhashable_value_fails_set_membership():
    assert not apply_record_filters({"tags": ["a"]}, {"tags": {"a", "b"}})


def test_aliases_of_configured_fields():
    record = {"college_name": "Christian Medical College", "city": "Vellore"}

    assert apply_record_filters(record, {"location": "Vellore"}, DEFAULT_SEARCH_FIELDS)
    assert apply_record_filters(record, {"name": "Christian Medical College"}, DEFAULT_SEARCH_FIELDS)
    # without field specs only the literal key is read
    assert not apply_record_filters(record, {"location": "Vellore"})


def test_attribute_records():
    record = SimpleNamespace(state="Goa", established=1998)
    assert apply_record_filters(record, {"state": "Goa", "established": {"max": 2000}})


def test_validate_filters():
    errors = ErrorCollector()
    filters = {"state": "Delhi", "established": {"min": 1950}}

    assert validate_filters(None, errors) is None
    assert validate_filters(filters, errors) is filters
    assert len(errors) == 0


@pytest.mark.parametrize(
    "filters, field_name",
    [
        ("state=Delhi", None),
        ({"established": {"min": 1950, "after": 1900}}, "established"),
    ],
)
def test_validate_filters_rejects(filters, field_name):
    errors = ErrorCollector()

    assert validate_filters(filters, errors) is None
    [error] = errors.get_errors_by_category(ErrorCategory.VALIDATION)
    assert error.field_name == field_name
