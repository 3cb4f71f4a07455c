"""
Configuration module for collegesearch.

This module defines ``EngineConfig``, the central configuration object of the
engine, and ``FieldSpec``, which describes one weighted record field.

Classes:
    FieldSpec: A weighted field with its category and alias keys
    EngineConfig: Field tables, strategy order, limits and performance knobs

Key Configuration Areas:
    - Fields: which record fields are searched and how much each one weighs
    - Strategies: the priority order of the strategy cascade
    - Suggestions: limits and the fuzzy threshold of the suggestion matcher
    - Dictionaries: optional paths to custom synonym and location tables
    - Performance: batch size, parallel execution and regex time budget

Example:
    Basic configuration:
        >>> from collegesearch.core.config import EngineConfig, FieldSpec
        >>>
        >>> config = EngineConfig(
        ...     search_fields=(
        ...         FieldSpec("name", 10, "college", aliases=("college_name",)),
        ...         FieldSpec("city", 8, "location"),
        ...     ),
        ...     max_suggestions=5,
        ... )
        >>> config.validate()

    Parallel scoring over large record sets:
        >>> config = EngineConfig(parallel=True, workers=4, batch_size=512)
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..utils.error_handling import ConfigurationError
from .types import DEFAULT_STRATEGY_ORDER, Strategy


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """
    A weighted record field.

    ``aliases`` are tried in order when ``name`` is missing or empty on a
    record; the first non-empty value is used.
    """

    name: str
    weight: float
    category: str
    aliases: tuple[str, ...] = ()

    @property
    def keys(self) -> tuple[str, ...]:
        return (self.name, *self.aliases)


DEFAULT_SEARCH_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("name", 10, "college", aliases=("college_name",)),
    FieldSpec("location", 8, "location", aliases=("city",)),
    FieldSpec("state", 6, "state"),
    FieldSpec("type", 4, "type", aliases=("college_type",)),
    FieldSpec("management_type", 3, "management", aliases=("management",)),
    FieldSpec("district", 5, "district"),
)

DEFAULT_SUGGESTION_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("name", 10, "college", aliases=("college_name",)),
    FieldSpec("location", 8, "city", aliases=("city",)),
    FieldSpec("state", 6, "state"),
    FieldSpec("type", 4, "type", aliases=("college_type",)),
    FieldSpec("management_type", 3, "management", aliases=("management",)),
)

DEFAULT_LOCATION_CATEGORIES: frozenset[str] = frozenset({"location", "city", "state", "district"})


@dataclass(slots=True)
class EngineConfig:
    # Fields
    search_fields: tuple[FieldSpec, ...] = DEFAULT_SEARCH_FIELDS
    suggestion_fields: tuple[FieldSpec, ...] = DEFAULT_SUGGESTION_FIELDS
    location_categories: frozenset[str] = DEFAULT_LOCATION_CATEGORIES

    # Cascade
    strategy_order: tuple[Strategy, ...] = DEFAULT_STRATEGY_ORDER

    # Suggestions
    max_suggestions: int = 8
    min_suggestion_length: int = 2
    suggestion_fuzzy_threshold: int = 3

    # Patterns
    regex_timeout: float = 0.25  # seconds per regex evaluation

    # Performance
    parallel: bool = False
    workers: int = 0  # 0 = auto(cpu_count)
    batch_size: int = 256

    # Dictionaries; None = packaged tables
    synonyms_path: Path | None = None
    locations_path: Path | None = None

    def is_location_field(self, spec: FieldSpec) -> bool:
        return spec.category in self.location_categories

    def validate(self) -> None:
        """Validate the configuration and raise ConfigurationError on issues.

        Raises:
            ConfigurationError: If the configuration is invalid.
        """
        if not self.search_fields:
            raise ConfigurationError(
                "At least one search field must be configured",
                context={"field": "search_fields"},
            )

        if not self.suggestion_fields:
            raise ConfigurationError(
                "At least one suggestion field must be configured",
                context={"field": "suggestion_fields"},
            )

        for spec in (*self.search_fields, *self.suggestion_fields):
            if not spec.name:
                raise ConfigurationError(
                    "Field names must be non-empty",
                    context={"field": "search_fields", "value": repr(spec)},
                )
            if spec.weight <= 0:
                raise ConfigurationError(
                    f"Field weight must be positive: {spec.name}",
                    context={"field": spec.name, "value": spec.weight},
                )

        seen: set[Strategy] = set()
        for entry in self.strategy_order:
            if not isinstance(entry, Strategy):
                raise ConfigurationError(
                    f"Unknown strategy in strategy_order: {entry!r}",
                    context={"field": "strategy_order", "value": repr(entry)},
                )
            if entry in seen:
                raise ConfigurationError(
                    f"Strategy listed more than once: {entry.value}",
                    context={"field": "strategy_order", "value": entry.value},
                )
            seen.add(entry)

        if self.batch_size < 1:
            raise ConfigurationError(
                "Batch size must be at least 1",
                context={"field": "batch_size", "value": self.batch_size},
            )

        if self.workers < 0:
            raise ConfigurationError(
                "Worker count must be non-negative (0 = auto-detect CPU count)",
                context={"field": "workers", "value": self.workers},
            )

        if self.max_suggestions < 0:
            raise ConfigurationError(
                "max_suggestions must be non-negative",
                context={"field": "max_suggestions", "value": self.max_suggestions},
            )

        if self.min_suggestion_length < 0:
            raise ConfigurationError(
                "min_suggestion_length must be non-negative",
                context={"field": "min_suggestion_length", "value": self.min_suggestion_length},
            )

        if self.suggestion_fuzzy_threshold < 0:
            raise ConfigurationError(
                "suggestion_fuzzy_threshold must be non-negative",
                context={
                    "field": "suggestion_fuzzy_threshold",
                    "value": self.suggestion_fuzzy_threshold,
                },
            )

        if self.regex_timeout <= 0:
            raise ConfigurationError(
                "regex_timeout must be positive",
                context={"field": "regex_timeout", "value": self.regex_timeout},
            )
