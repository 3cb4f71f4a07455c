"""
Tests for error classification, collection and reporting.
"""

import threading
from pathlib import Path
from unittest.mock import MagicMock

from collegesearch.utils.error_handling import (
    ConfigurationError,
    DictionaryLoadError,
    ErrorCategory,
    ErrorCollector,
    ErrorSeverity,
    PatternError,
    PatternTimeoutError,
    create_error_report,
    handle_pattern_error,
    handle_record_error,
)


class TestExceptions:
    def test_pattern_error(self):
        error = PatternError("bad", pattern="[", context={"query": "/[/"})
        assert error.category == ErrorCategory.PATTERN
        assert error.severity == ErrorSeverity.LOW
        assert error.context == {"query": "/[/", "pattern": "["}
        assert error.suggestions

    def test_timeout_error(self):
        error = PatternTimeoutError("slow", pattern="(a+)+$", field_name="name")
        assert error.category == ErrorCategory.TIMEOUT
        assert error.field_name == "name"

    def test_configuration_error(self):
        error = ConfigurationError("no fields", context={"field": "search_fields"})
        assert error.category == ErrorCategory.CONFIGURATION
        assert error.severity == ErrorSeverity.HIGH
        assert str(error) == "no fields"

    def test_dictionary_error_records_path(self):
        error = DictionaryLoadError("missing", path=Path("/tmp/syn.json"))
        assert error.category == ErrorCategory.DICTIONARY
        assert error.context["path"] == "/tmp/syn.json"
        assert DictionaryLoadError("missing").context == {}


class TestErrorCollector:
    def test_search_errors_keep_their_classification(self):
        collector = ErrorCollector()
        collector.add_error(PatternError("bad", pattern="["), field_name="name")

        [info] = collector.errors
        assert info.category == ErrorCategory.PATTERN
        assert info.exception_type == "PatternError"
        assert info.context["pattern"] == "["
        assert info.field_name == "name"

    def test_plain_exceptions_are_classified(self):
        collector = ErrorCollector()
        collector.add_error(TimeoutError("slow"))
        collector.add_error(ValueError("bad value"))
        collector.add_error(RuntimeError("boom"))
        collector.add_error(KeyError("x"), category=ErrorCategory.STRATEGY, severity=ErrorSeverity.LOW)

        categories = [e.category for e in collector.errors]
        assert categories == [
            ErrorCategory.TIMEOUT,
            ErrorCategory.VALIDATION,
            ErrorCategory.STRATEGY,
            ErrorCategory.STRATEGY,
        ]
        assert collector.errors[3].severity == ErrorSeverity.LOW

    def test_suppression(self):
        collector = ErrorCollector()
        collector.suppress_category(ErrorCategory.PATTERN)
        collector.add_error(PatternError("bad", pattern="["))
        assert len(collector) == 0

        collector.unsuppress_category(ErrorCategory.PATTERN)
        collector.add_error(PatternError("bad", pattern="["))
        assert len(collector) == 1

    def test_max_errors_still_counts(self):
        collector = ErrorCollector(max_errors=2)
        for _ in range(5):
            collector.add_error(RuntimeError("boom"))
        assert len(collector) == 2
        assert collector.get_summary()["by_category"] == {"strategy": 5}

    def test_summary_and_clear(self):
        collector = ErrorCollector()
        collector.add_error(ConfigurationError("bad"))
        summary = collector.get_summary()

        assert summary["total_errors"] == 1
        assert summary["by_severity"]["high"] == 1
        assert summary["has_critical"] is False

        collector.clear()
        assert len(collector) == 0
        assert collector.get_summary()["by_category"] == {}

    def test_concurrent_adds(self):
        collector = ErrorCollector(max_errors=1000)

        def worker():
            for _ in range(50):
                collector.add_error(RuntimeError("boom"))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(collector) == 400


def test_handle_pattern_error_records_and_logs():
    collector = ErrorCollector()
    logger = MagicMock()

    error = handle_pattern_error("[", ValueError("unterminated set"), collector, logger)

    assert isinstance(error, PatternError)
    assert len(collector) == 1
    logger.log_pattern_error.assert_called_once_with("[", "unterminated set")


def test_handle_record_error_records_and_logs():
    collector = ErrorCollector()
    logger = MagicMock()

    handle_record_error(KeyError("name"), collector, logger)
    handle_record_error(KeyError("state"))

    [info] = collector.errors
    assert (info.category, info.severity) == (ErrorCategory.STRATEGY, ErrorSeverity.LOW)
    assert info.exception_type == "KeyError"
    logger.log_record_skipped.assert_called_once_with("'name'", exception_type="KeyError")


def test_error_report():
    collector = ErrorCollector()
    assert create_error_report(collector) == "No errors occurred during the search operation."

    collector.add_error(PatternTimeoutError("Regex timed out", pattern="(a+)+$", field_name="name"))
    report = create_error_report(collector)

    assert "Total errors: 1" in report
    assert "timeout: 1" in report
    assert "(low) Regex timed out [field: name]" in report
