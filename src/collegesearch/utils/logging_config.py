"""
Logging for collegesearch.

``SearchLogger`` wraps a stdlib logger with console and rotating-file
handlers and a small set of domain hooks (search start and completion,
rejected or runaway patterns, skipped records, cancellation, dictionary
loading). Keyword arguments passed to any hook travel as ``extra`` fields and
are rendered by the JSON and structured formatters.

The CLI installs a process-wide logger through ``configure_logging``; the
engine falls back to ``get_logger()`` when no logger is injected.
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
from collections.abc import Callable
from enum import Enum
from pathlib import Path
from typing import Any

import orjson

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RESERVED_RECORD_KEYS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime"}


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {k: v for k, v in record.__dict__.items() if k not in _RESERVED_RECORD_KEYS}


class LogLevel(str, Enum):
    """Levels accepted by the CLI and ``configure_logging``."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class LogFormat(str, Enum):
    """Available log formats."""

    SIMPLE = "simple"
    DETAILED = "detailed"
    JSON = "json"
    STRUCTURED = "structured"


class JsonFormatter(logging.Formatter):
    """One JSON object per line, extra fields included."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": record.created,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
        }
        entry.update(_extra_fields(record))
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return orjson.dumps(entry, default=str).decode("utf-8")


class StructuredFormatter(logging.Formatter):
    """Human-readable line followed by ``key=value`` extra fields."""

    def format(self, record: logging.LogRecord) -> str:
        line = (
            f"{self.formatTime(record, self.datefmt)} [{record.levelname}] "
            f"{record.name}: {record.getMessage()}"
        )
        extra = _extra_fields(record)
        if extra:
            line += " | " + " ".join(f"{k}={v}" for k, v in extra.items())
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


_FORMATTERS: dict[LogFormat, Callable[[], logging.Formatter]] = {
    LogFormat.SIMPLE: lambda: logging.Formatter("%(levelname)s: %(message)s"),
    LogFormat.DETAILED: lambda: logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
    ),
    LogFormat.JSON: JsonFormatter,
    LogFormat.STRUCTURED: StructuredFormatter,
}


class SearchLogger:
    """
    Logger used by the engine, the dictionary loader and the CLI.

    Building a second ``SearchLogger`` with the same name replaces the
    handlers of the first rather than adding to them.
    """

    def __init__(
        self,
        name: str = "collegesearch",
        level: LogLevel = LogLevel.INFO,
        format_type: LogFormat = LogFormat.SIMPLE,
        log_file: Path | None = None,
        max_file_size: int = 10 * 1024 * 1024,  # 10MB
        backup_count: int = 5,
        enable_console: bool = True,
        enable_file: bool = False,
    ):
        self.name = name
        self.level = level
        self.format_type = format_type
        self.log_file = log_file

        self.logger = logging.getLogger(name)
        self.logger.setLevel(level.value)
        self.logger.handlers.clear()

        handlers: list[logging.Handler] = []
        if enable_console:
            handlers.append(logging.StreamHandler(sys.stderr))
        if enable_file and log_file:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(
                logging.handlers.RotatingFileHandler(
                    log_file, maxBytes=max_file_size, backupCount=backup_count, encoding="utf-8"
                )
            )
        for handler in handlers:
            handler.setLevel(level.value)
            handler.setFormatter(_FORMATTERS[format_type]())
            self.logger.addHandler(handler)

    def debug(self, message: str, **kwargs: Any) -> None:
        self.logger.debug(message, extra=kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self.logger.info(message, extra=kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self.logger.warning(message, extra=kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self.logger.error(message, extra=kwargs)

    def log_search_start(self, query: str, records_count: int, **kwargs: Any) -> None:
        self.debug(
            f"Starting search for query: '{query}' over {records_count} records",
            operation="search_start",
            query=query,
            records_count=records_count,
            **kwargs,
        )

    def log_search_complete(
        self, query: str, results_count: int, elapsed_ms: float, **kwargs: Any
    ) -> None:
        self.info(
            f"Search completed: query='{query}', results={results_count}, time={elapsed_ms:.2f}ms",
            operation="search_complete",
            query=query,
            results_count=results_count,
            elapsed_ms=elapsed_ms,
            **kwargs,
        )

    def log_pattern_error(self, pattern: str, error: str, **kwargs: Any) -> None:
        """A user pattern that failed to compile; the regex strategy is skipped."""
        self.warning(
            f"Invalid pattern ignored: '{pattern}' - {error}",
            operation="pattern_error",
            pattern=pattern,
            error=error,
            **kwargs,
        )

    def log_pattern_timeout(self, pattern: str, timeout: float | None, **kwargs: Any) -> None:
        """A wildcard or regex search that ran past its time budget."""
        self.warning(
            f"Pattern timed out after {timeout}s: '{pattern}'",
            operation="pattern_timeout",
            pattern=pattern,
            timeout=timeout,
            **kwargs,
        )

    def log_record_skipped(self, error: str, **kwargs: Any) -> None:
        """A record that could not be read or scored."""
        self.warning(
            f"Skipping record that could not be scored: {error}",
            operation="record_skipped",
            error=error,
            **kwargs,
        )

    def log_cancelled(
        self, query: str, batches_completed: int, batches_total: int, **kwargs: Any
    ) -> None:
        self.info(
            f"Search cancelled: query='{query}', batches={batches_completed}/{batches_total}",
            operation="search_cancelled",
            query=query,
            batches_completed=batches_completed,
            batches_total=batches_total,
            **kwargs,
        )

    def log_dictionary_loaded(self, kind: str, entries: int, source: str, **kwargs: Any) -> None:
        self.debug(
            f"Loaded {kind} dictionary: entries={entries}, source={source}",
            operation="dictionary_loaded",
            kind=kind,
            entries=entries,
            source=source,
            **kwargs,
        )


_global_logger: SearchLogger | None = None


def get_logger() -> SearchLogger:
    """Get the process-wide logger, creating a default one on first use."""
    global _global_logger
    if _global_logger is None:
        _global_logger = SearchLogger()
    return _global_logger


def configure_logging(
    level: LogLevel = LogLevel.INFO,
    format_type: LogFormat = LogFormat.SIMPLE,
    log_file: Path | None = None,
    enable_console: bool = True,
    enable_file: bool = False,
    **kwargs: Any,
) -> SearchLogger:
    """Replace the process-wide logger."""
    global _global_logger
    _global_logger = SearchLogger(
        level=level,
        format_type=format_type,
        log_file=log_file,
        enable_console=enable_console,
        enable_file=enable_file,
        **kwargs,
    )
    return _global_logger


def disable_logging() -> None:
    get_logger().logger.setLevel(logging.CRITICAL + 1)


def enable_debug_logging() -> None:
    logger = get_logger()
    logger.level = LogLevel.DEBUG
    logger.logger.setLevel(logging.DEBUG)
    for handler in logger.logger.handlers:
        handler.setLevel(logging.DEBUG)
