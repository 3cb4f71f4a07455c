from unittest.mock import MagicMock

import pytest

from collegesearch.search.matchers import (
    compile_user_pattern,
    extract_regex_pattern,
    has_wildcards,
    regex_match,
    search_compiled,
    wildcard_match,
    wildcard_to_regex,
)
from collegesearch.utils.error_handling import ErrorCategory, ErrorCollector, ErrorSeverity

pytestmark = pytest.mark.matcher


def test_wildcard_translation():
    assert wildcard_to_regex("a*b") == "a.*b"
    assert wildcard_to_regex("a?b") == "a.b"
    assert wildcard_to_regex("new   delhi") == r"new\s+delhi"
    # Literal dot is escaped
    assert wildcard_to_regex("st.") == r"st\."


def test_wildcard_match():
    assert wildcard_match("iit*", "IIT Bombay")
    assert wildcard_match("a??ms", "AIIMS Delhi")
    assert wildcard_match("new delhi", "New    Delhi")
    assert not wildcard_match("st.", "stx")
    assert wildcard_match("st.", "St. John's Medical College")
    # Unanchored search
    assert wildcard_match("medical*", "Grant Medical College")


def test_has_wildcards():
    assert has_wildcards("iit*")
    assert has_wildcards("a?ms")
    assert not has_wildcards("aiims")


@pytest.mark.parametrize(
    "query,expected",
    [("/^govt/", "^govt"), ("/x/", "x"), ("//", None), ("/abc", None), ("abc", None)],
)
def test_extract_regex_pattern(query, expected):
    assert extract_regex_pattern(query) == expected


def test_regex_match_case_insensitive():
    assert regex_match("^aiims", "AIIMS Delhi")
    assert regex_match(r"\bdelhi$", "AIIMS Delhi")
    assert not regex_match("^delhi", "AIIMS Delhi")


def test_invalid_regex_is_recorded_not_raised():
    collector = ErrorCollector()
    logger = MagicMock()

    assert regex_match("[", "anything", error_collector=collector, logger=logger) is False

    errors = collector.get_errors_by_category(ErrorCategory.PATTERN)
    assert len(errors) == 1
    assert errors[0].severity == ErrorSeverity.LOW
    assert errors[0].context["pattern"] == "["
    logger.log_pattern_error.assert_called_once()


def test_compile_user_pattern_returns_none_on_error():
    collector = ErrorCollector()
    assert compile_user_pattern("(unclosed", error_collector=collector) is None
    assert len(collector) == 1
    assert compile_user_pattern("closed", error_collector=collector) is not None
    assert len(collector) == 1


def test_regex_timeout_is_no_match():
    collector = ErrorCollector()
    compiled = MagicMock()
    compiled.pattern = "(a+)+$"
    compiled.search.side_effect = TimeoutError("regex timed out")

    assert search_compiled(compiled, "a" * 30 + "b", timeout=0.01, field_name="name",
                           error_collector=collector) is False
    errors = collector.get_errors_by_category(ErrorCategory.TIMEOUT)
    assert len(errors) == 1
    assert errors[0].field_name == "name"
