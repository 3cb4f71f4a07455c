"""
Core types and configuration.

The engine itself lives in ``collegesearch.core.api``; this package exposes
the value types and configuration it is driven by.
"""

from .config import (
    DEFAULT_LOCATION_CATEGORIES,
    DEFAULT_SEARCH_FIELDS,
    DEFAULT_SUGGESTION_FIELDS,
    EngineConfig,
    FieldSpec,
)
from .types import (
    DEFAULT_STRATEGY_ORDER,
    MatchType,
    OutputFormat,
    SearchOptions,
    SearchOutcome,
    SearchResult,
    SearchStats,
    Strategy,
    Suggestion,
)

__all__ = [
    "DEFAULT_LOCATION_CATEGORIES",
    "DEFAULT_SEARCH_FIELDS",
    "DEFAULT_SUGGESTION_FIELDS",
    "EngineConfig",
    "FieldSpec",
    "DEFAULT_STRATEGY_ORDER",
    "MatchType",
    "OutputFormat",
    "SearchOptions",
    "SearchOutcome",
    "SearchResult",
    "SearchStats",
    "Strategy",
    "Suggestion",
]
