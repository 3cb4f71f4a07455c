"""
collegesearch: Multi-strategy search and autocomplete over college records.

This package ranks an in-memory collection of college records against a
free-text query. Every configured field of every record is run through an
ordered cascade of matching strategies; the first strategy that matches
decides the field's score, field weights decide which field wins, and the
records are returned best first.

Key Features:
    - **Ten Matching Strategies**: exact, contains, word start, fuzzy
      (Levenshtein), phonetic (Soundex / Metaphone), wildcard, regex,
      synonym expansion, location-alias expansion and lightweight semantic
      similarity
    - **Configurable Cascade**: strategy order, field weights and location
      categories are configuration, not code
    - **Autocomplete**: deduplicated suggestions with acronym matching
    - **Data-Driven Dictionaries**: synonym and location tables are JSON
      files that can be replaced per engine
    - **Safe Patterns**: malformed or runaway regexes are reported as
      diagnostics and never abort a call
    - **Parallel Scoring**: optional thread-pool scoring with cooperative
      cancellation between batches
    - **Dual Interfaces**: both CLI and programmatic API access

Main Classes:
    CollegeSearch: Main engine class that orchestrates all operations
    EngineConfig: Fields, strategy order, limits and performance settings
    FieldSpec: One weighted record field
    SearchOptions: Per-call strategy switches
    SearchResult: A scored record
    Suggestion: An autocomplete entry
    SearchOutcome: Results plus statistics and diagnostics

Core Modules:
    core.api: Main search engine
    core.config: Configuration management and validation
    core.types: Core data types and enumerations
    search.strategies: The strategy cascade
    search.fuzzy: Edit distance and phonetic encoders
    search.matchers: Wildcard and regex matching
    search.expansion: Synonym and location dictionaries
    search.suggestions: Autocomplete
    utils.formatter: Output formatting
    cli: Command-line interface

Example Usage:
    Basic API usage:
        >>> from collegesearch import CollegeSearch
        >>> engine = CollegeSearch()
        >>> results = engine.search("aiims", records)
        >>> for result in results:
        ...     print(result.score, result.match_type.value, result.record["name"])

    Strict matching only:
        >>> from collegesearch import SearchOptions
        >>> results = engine.search("delhi", records, SearchOptions.none())

    CLI usage:
        $ collegesearch find "delhi" --records colleges.json
        $ collegesearch find "/^govt/" --regex --records colleges.json --format json
        $ collegesearch suggest "aii" --records colleges.json --max 5
"""

from .core.api import CollegeSearch
from .core.config import EngineConfig, FieldSpec
from .core.types import (
    MatchType,
    OutputFormat,
    SearchOptions,
    SearchOutcome,
    SearchResult,
    SearchStats,
    Strategy,
    Suggestion,
)
from .search.expansion import Dictionaries, load_dictionaries
from .utils.error_handling import (
    ConfigurationError,
    DictionaryLoadError,
    PatternError,
    SearchError,
)
from .utils.logging_config import configure_logging, disable_logging, enable_debug_logging, get_logger

# Package metadata
__version__ = "0.1.0"
__description__ = "Multi-strategy search and autocomplete over college records"

# Public API
__all__ = [
    # Main classes
    "CollegeSearch",
    "EngineConfig",
    "FieldSpec",
    # Data types
    "MatchType",
    "OutputFormat",
    "SearchOptions",
    "SearchOutcome",
    "SearchResult",
    "SearchStats",
    "Strategy",
    "Suggestion",
    "Dictionaries",
    "load_dictionaries",
    # Logging and configuration
    "configure_logging",
    "get_logger",
    "enable_debug_logging",
    "disable_logging",
    # Exception classes
    "SearchError",
    "PatternError",
    "ConfigurationError",
    "DictionaryLoadError",
    # Package metadata
    "__version__",
    "__description__",
]
