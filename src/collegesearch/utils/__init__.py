"""
Utility functions and helper modules.

This module contains the helpers shared across the engine:
- Text normalization and field access
- Error handling and diagnostics
- Logging configuration
- Output formatting for the CLI and API callers
"""

from .error_handling import (
    ConfigurationError,
    DictionaryLoadError,
    ErrorCollector,
    PatternError,
    SearchError,
    create_error_report,
)
from .logging_config import configure_logging, disable_logging, enable_debug_logging, get_logger
from .text import normalize, raw_field_text, read_field
from .formatter import format_outcome, format_suggestions, render_results_console

__all__ = [
    # Error handling
    "ConfigurationError",
    "DictionaryLoadError",
    "ErrorCollector",
    "PatternError",
    "SearchError",
    "create_error_report",
    # Logging
    "configure_logging",
    "disable_logging",
    "enable_debug_logging",
    "get_logger",
    # Text
    "normalize",
    "raw_field_text",
    "read_field",
    # Formatting
    "format_outcome",
    "format_suggestions",
    "render_results_console",
]
