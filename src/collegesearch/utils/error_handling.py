"""
Error handling and diagnostics for collegesearch.

A search call never aborts because a single strategy failed. Instead, the
failure is classified, recorded in an ``ErrorCollector`` that travels with the
call's outcome, and logged at a severity that matches its impact.

Error Categories:
    - PATTERN: Malformed user-supplied regex or wildcard patterns
    - TIMEOUT: Wildcard or regex evaluation exceeding its time budget
    - CONFIGURATION: Invalid engine configuration
    - DICTIONARY: Synonym/location dictionaries that cannot be loaded
    - VALIDATION: Input values the engine cannot interpret
    - STRATEGY: Unexpected failures inside a strategy evaluator, or a record
      that could not be read

Classes:
    ErrorSeverity: Error severity levels (LOW, MEDIUM, HIGH, CRITICAL)
    ErrorCategory: Error classification categories
    ErrorInfo: Detailed error information container
    ErrorCollector: Thread-safe batch error collection
    SearchError: Base exception class for collegesearch errors

Functions:
    handle_pattern_error: Record and log a rejected pattern
    handle_record_error: Record and log a record that could not be scored
    create_error_report: Generate a human-readable error report

Example:
    >>> from collegesearch.utils.error_handling import ErrorCollector, create_error_report
    >>> collector = ErrorCollector()
    >>> collector.add_error(PatternError("bad pattern", pattern="["))
    >>> print(create_error_report(collector))
"""

from __future__ import annotations

import sys
import threading
import time
import traceback
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """Error categories for classification."""

    PATTERN = "pattern"
    TIMEOUT = "timeout"
    CONFIGURATION = "configuration"
    DICTIONARY = "dictionary"
    VALIDATION = "validation"
    STRATEGY = "strategy"
    UNKNOWN = "unknown"


@dataclass
class ErrorInfo:
    """Detailed error information."""

    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    field_name: str | None = None
    exception_type: str | None = None
    traceback_str: str | None = None
    timestamp: float = field(default_factory=time.time)
    context: dict[str, Any] = field(default_factory=dict)
    suggestions: list[str] = field(default_factory=list)


class SearchError(Exception):
    """Base exception for search-related errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        field_name: str | None = None,
        suggestions: list[str] | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message: str = message
        self.category: ErrorCategory = category
        self.severity: ErrorSeverity = severity
        self.field_name: str | None = field_name
        self.suggestions: list[str] = suggestions or []
        self.context: dict[str, Any] = context or {}
        self.timestamp: float = time.time()


class PatternError(SearchError):
    """A user-supplied pattern that could not be compiled."""

    def __init__(self, message: str, pattern: str, context: dict[str, Any] | None = None) -> None:
        merged_context: dict[str, Any] = {}
        if context:
            merged_context.update(context)
        merged_context["pattern"] = pattern

        super().__init__(
            message,
            category=ErrorCategory.PATTERN,
            severity=ErrorSeverity.LOW,
            suggestions=[
                "Check the regular expression syntax",
                "Escape special characters such as [ ] ( ) + ?",
                "Drop the surrounding slashes to run a plain text search",
            ],
            context=merged_context,
        )
        self.pattern: str = pattern


class PatternTimeoutError(SearchError):
    """Regex evaluation that exceeded its time budget."""

    def __init__(
        self,
        message: str,
        pattern: str,
        field_name: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        merged_context: dict[str, Any] = {}
        if context:
            merged_context.update(context)
        merged_context["pattern"] = pattern

        super().__init__(
            message,
            category=ErrorCategory.TIMEOUT,
            severity=ErrorSeverity.LOW,
            field_name=field_name,
            suggestions=[
                "Avoid nested quantifiers such as (a+)+",
                "Anchor the pattern or make it more specific",
            ],
            context=merged_context,
        )
        self.pattern: str = pattern


class ConfigurationError(SearchError):
    """Configuration-related errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(
            message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.HIGH,
            suggestions=[
                "Check field weights are positive",
                "Verify the strategy order lists each strategy once",
                "Use the default configuration",
            ],
            context=context,
        )


class DictionaryLoadError(SearchError):
    """Synonym or location dictionaries that could not be loaded."""

    def __init__(
        self, message: str, path: Path | None = None, context: dict[str, Any] | None = None
    ) -> None:
        merged_context: dict[str, Any] = {}
        if context:
            merged_context.update(context)
        if path is not None:
            merged_context["path"] = str(path)

        super().__init__(
            message,
            category=ErrorCategory.DICTIONARY,
            severity=ErrorSeverity.HIGH,
            suggestions=[
                "Check the dictionary file exists and is readable",
                "A dictionary must be a JSON object mapping terms to lists of aliases",
            ],
            context=merged_context,
        )
        self.path: Path | None = path


class ErrorCollector:
    """Collects and manages errors during a single search or suggest call."""

    def __init__(self, max_errors: int = 100) -> None:
        self.max_errors = max_errors
        self.errors: list[ErrorInfo] = []
        self.error_counts: dict[ErrorCategory, int] = {}
        self.suppressed_categories: set[ErrorCategory] = set()
        self._lock = threading.Lock()

    def add_error(
        self,
        exception: Exception | SearchError,
        category: ErrorCategory | None = None,
        severity: ErrorSeverity | None = None,
        field_name: str | None = None,
        context: dict[str, Any] | None = None,
        suggestions: list[str] | None = None,
    ) -> None:
        """Add an error to the collection."""
        if isinstance(exception, SearchError):
            error_category = exception.category
            error_severity = exception.severity
            error_field = exception.field_name or field_name
            error_suggestions = exception.suggestions or suggestions or []
            error_context = {**exception.context, **(context or {})}
        else:
            error_category = category or self._classify_exception(exception)
            error_severity = severity or ErrorSeverity.MEDIUM
            error_field = field_name
            error_suggestions = suggestions or []
            error_context = context or {}

        if error_category in self.suppressed_categories:
            return

        error_info = ErrorInfo(
            category=error_category,
            severity=error_severity,
            message=str(exception),
            field_name=error_field,
            exception_type=type(exception).__name__,
            traceback_str=traceback.format_exc() if sys.exc_info()[0] else None,
            context=error_context,
            suggestions=error_suggestions,
        )

        with self._lock:
            if len(self.errors) < self.max_errors:
                self.errors.append(error_info)
            self.error_counts[error_category] = self.error_counts.get(error_category, 0) + 1

    def _classify_exception(self, exception: Exception) -> ErrorCategory:
        """Classify exception into error category."""
        if isinstance(exception, TimeoutError):
            return ErrorCategory.TIMEOUT
        if isinstance(exception, (ValueError, TypeError)):
            return ErrorCategory.VALIDATION
        return ErrorCategory.STRATEGY

    def suppress_category(self, category: ErrorCategory) -> None:
        """Suppress errors of a specific category."""
        self.suppressed_categories.add(category)

    def unsuppress_category(self, category: ErrorCategory) -> None:
        """Stop suppressing errors of a specific category."""
        self.suppressed_categories.discard(category)

    def get_errors_by_category(self, category: ErrorCategory) -> list[ErrorInfo]:
        """Get all errors of a specific category."""
        return [error for error in self.errors if error.category == category]

    def get_errors_by_severity(self, severity: ErrorSeverity) -> list[ErrorInfo]:
        """Get all errors of a specific severity."""
        return [error for error in self.errors if error.severity == severity]

    def get_critical_errors(self) -> list[ErrorInfo]:
        """Get all critical errors."""
        return self.get_errors_by_severity(ErrorSeverity.CRITICAL)

    def has_critical_errors(self) -> bool:
        """Check if there are any critical errors."""
        return len(self.get_critical_errors()) > 0

    def get_summary(self) -> dict[str, Any]:
        """Get error summary statistics."""
        return {
            "total_errors": len(self.errors),
            "by_category": {category.value: count for category, count in self.error_counts.items()},
            "by_severity": {
                severity.value: len(self.get_errors_by_severity(severity))
                for severity in ErrorSeverity
            },
            "suppressed_categories": [category.value for category in self.suppressed_categories],
            "has_critical": self.has_critical_errors(),
        }

    def clear(self) -> None:
        """Clear all collected errors."""
        with self._lock:
            self.errors.clear()
            self.error_counts.clear()

    def __len__(self) -> int:
        return len(self.errors)


def handle_pattern_error(
    pattern: str,
    exception: Exception,
    error_collector: ErrorCollector | None = None,
    logger: Any | None = None,
) -> PatternError:
    """
    Record a pattern that failed to compile and log it at warning level.

    Args:
        pattern: The pattern text as supplied by the caller
        exception: The compilation error raised by the regex engine
        error_collector: Optional error collector to add the error to
        logger: Optional SearchLogger to log the error

    Returns:
        The PatternError describing the failure
    """
    error = PatternError(f"Invalid pattern '{pattern}': {exception}", pattern=pattern)

    if error_collector is not None:
        error_collector.add_error(error)

    if logger is not None:
        logger.log_pattern_error(pattern, str(exception))

    return error


def handle_record_error(
    exception: Exception,
    error_collector: ErrorCollector | None = None,
    logger: Any | None = None,
) -> None:
    """
    Record a record that could not be read or scored.

    The record is skipped; scoring carries on with the next one.
    """
    if error_collector is not None:
        error_collector.add_error(
            exception, category=ErrorCategory.STRATEGY, severity=ErrorSeverity.LOW
        )

    if logger is not None:
        logger.log_record_skipped(str(exception), exception_type=type(exception).__name__)


def create_error_report(error_collector: ErrorCollector) -> str:
    """Create a human-readable error report."""
    if not error_collector.errors:
        return "No errors occurred during the search operation."

    summary = error_collector.get_summary()

    report = ["Search Error Report", "=" * 50, ""]

    report.append(f"Total errors: {summary['total_errors']}")
    report.append(f"Critical errors: {summary['by_severity']['critical']}")
    report.append("")

    report.append("Errors by category:")
    for category, count in summary["by_category"].items():
        report.append(f"  {category}: {count}")
    report.append("")

    report.append("Details:")
    for error in error_collector.errors:
        location = f" [field: {error.field_name}]" if error.field_name else ""
        report.append(f"  - ({error.severity.value}) {error.message}{location}")
        if error.suggestions:
            report.append(f"    Suggestions: {', '.join(error.suggestions)}")
    report.append("")

    report.append("General Suggestions:")
    report.append("  - Queries wrapped in /.../ are treated as regular expressions")
    report.append("  - Use * and ? for simple wildcard matching instead of regex")
    report.append("  - Use --debug for more detailed diagnostic information")

    return "\n".join(report)
