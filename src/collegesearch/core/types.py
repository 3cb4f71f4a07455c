"""
Type definitions for collegesearch.

This module contains the enumerations and data classes shared by the engine,
the strategies, the formatter and the CLI.

Key Types:
    MatchType: Which strategy produced a score
    Strategy: Names of the strategy evaluators in the cascade
    OutputFormat: Supported output formats
    SearchOptions: Per-call switches for the optional strategies
    SearchResult: One scored record
    Suggestion: One autocomplete entry
    SearchStats: Counters for a single call
    SearchOutcome: Results, statistics and diagnostics of a single call

Example:
    Building options for a call:
        >>> from collegesearch.core.types import SearchOptions
        >>>
        >>> # Everything on, plus regex
        >>> options = SearchOptions(use_regex=True)
        >>>
        >>> # Only exact, contains and word_start
        >>> strict = SearchOptions.none()

    Working with an outcome:
        >>> outcome = engine.run("delhi", records)
        >>> for result in outcome.results:
        ...     print(result.score, result.match_type.value, result.record["name"])
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

from ..utils.error_handling import ErrorCollector


class MatchType(str, Enum):
    """The strategy that produced a result's winning score."""

    EXACT = "exact"
    CONTAINS = "contains"
    WORD_START = "word_start"
    FUZZY = "fuzzy"
    SOUNDEX = "soundex"
    METAPHONE = "metaphone"
    WILDCARD = "wildcard"
    REGEX = "regex"
    SYNONYM = "synonym"
    LOCATION_VARIANT = "location_variant"
    SEMANTIC = "semantic"
    ACRONYM = "acronym"  # suggestions only
    NONE = "none"


class Strategy(str, Enum):
    """Strategy evaluators that can appear in the cascade."""

    EXACT = "exact"
    CONTAINS = "contains"
    WORD_START = "word_start"
    FUZZY = "fuzzy"
    PHONETIC = "phonetic"
    WILDCARD = "wildcard"
    REGEX = "regex"
    SYNONYM = "synonym"
    LOCATION = "location"
    SEMANTIC = "semantic"


DEFAULT_STRATEGY_ORDER: tuple[Strategy, ...] = (
    Strategy.EXACT,
    Strategy.CONTAINS,
    Strategy.WORD_START,
    Strategy.FUZZY,
    Strategy.PHONETIC,
    Strategy.WILDCARD,
    Strategy.REGEX,
    Strategy.SYNONYM,
    Strategy.LOCATION,
    Strategy.SEMANTIC,
)


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"
    HIGHLIGHT = "highlight"


class CancelSignal(Protocol):
    """Anything with ``is_set()``, e.g. ``threading.Event``."""

    def is_set(self) -> bool: ...


@dataclass(frozen=True, slots=True)
class SearchOptions:
    """
    Switches for the optional strategies of a search call.

    Exact, contains and word_start matching are always active; every other
    strategy is gated by a flag here.

    Attributes:
        use_fuzzy: Enable edit-distance matching
        use_phonetic: Enable Soundex/Metaphone matching
        use_wildcard: Enable ``*``/``?`` patterns
        use_regex: Enable ``/pattern/`` queries
        use_synonyms: Enable synonym expansion
        use_location: Enable location alias expansion
        use_semantic: Enable word-overlap similarity
        fuzzy_threshold: Maximum edit distance accepted by the fuzzy strategy
        semantic_threshold: Minimum similarity accepted by the semantic strategy
    """

    use_fuzzy: bool = True
    use_phonetic: bool = True
    use_wildcard: bool = True
    use_regex: bool = False
    use_synonyms: bool = True
    use_location: bool = True
    use_semantic: bool = True
    fuzzy_threshold: int = 3
    semantic_threshold: float = 0.3

    @classmethod
    def none(cls) -> SearchOptions:
        """Options with every optional strategy disabled."""
        return cls(
            use_fuzzy=False,
            use_phonetic=False,
            use_wildcard=False,
            use_regex=False,
            use_synonyms=False,
            use_location=False,
            use_semantic=False,
        )


@dataclass(slots=True)
class SearchResult:
    """
    A single record that matched a query.

    Attributes:
        record: The caller's record, untouched
        score: Best field score times field weight
        match_type: Strategy that produced ``score``
        field_name: Field that produced ``score``
    """

    record: Any
    score: float
    match_type: MatchType
    field_name: str | None = None


@dataclass(slots=True)
class Suggestion:
    text: str
    type: str
    score: float
    match_type: MatchType
    record: Any = None


@dataclass(slots=True)
class SearchStats:
    """
    Counters for a single search or suggest call.

    Attributes:
        records_scanned: Records that were evaluated
        records_matched: Records (or suggestion entries) with a positive score
        fields_evaluated: Non-empty fields passed through the cascade
        batches_total: Batches the record set was split into
        batches_completed: Batches actually evaluated
        elapsed_ms: Wall time of the call in milliseconds
        cancelled: Whether the caller's cancel signal stopped the call early
    """

    records_scanned: int = 0
    records_matched: int = 0
    fields_evaluated: int = 0
    batches_total: int = 0
    batches_completed: int = 0
    elapsed_ms: float = 0.0
    cancelled: bool = False


@dataclass(slots=True)
class SearchOutcome:
    """Results, statistics and diagnostics of one ``CollegeSearch.run`` call."""

    results: list[SearchResult] = field(default_factory=list)
    stats: SearchStats = field(default_factory=SearchStats)
    errors: ErrorCollector = field(default_factory=ErrorCollector)
