"""
Main API module for collegesearch.

This module provides the ``CollegeSearch`` class, the entry point for
programmatic access to the engine. It coordinates query preparation, the
per-field strategy cascade, weighting, ranking and suggestion generation.

Classes:
    CollegeSearch: Search engine over caller-supplied college records

Key Features:
    - Ten matching strategies tried in a configurable priority order
    - Field weights and location categories driven by configuration
    - Record filters and a cap on the number of results
    - Batched scoring with optional thread-pool parallelism
    - Cooperative cancellation between batches
    - Per-call diagnostics in the returned ``SearchOutcome``
    - Deduplicated autocomplete suggestions

Example:
    Basic search operation:
        >>> from collegesearch import CollegeSearch
        >>>
        >>> records = [
        ...     {"name": "AIIMS Delhi", "state": "Delhi"},
        ...     {"name": "JIPMER Puducherry", "state": "Puducherry"},
        ... ]
        >>> engine = CollegeSearch()
        >>> results = engine.search("delhi", records)
        >>> results[0].match_type.value, results[0].score
        ('contains', 800.0)

    Full outcome with statistics and diagnostics:
        >>> from collegesearch import SearchOptions
        >>> outcome = engine.run("/[/", records, SearchOptions(use_regex=True))
        >>> len(outcome.errors)
        1
"""

from __future__ import annotations

import os
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from ..search.expansion import (
    Dictionaries,
    DictionaryExpander,
    get_default_dictionaries,
    load_dictionaries,
)
from ..search.filters import RecordFilters, apply_record_filters, validate_filters
from ..search.scorer import score_record, sort_results
from ..search.strategies import PreparedQuery, prepare_query
from ..search.suggestions import SuggestionGenerator
from ..utils.error_handling import (
    ErrorCategory,
    ErrorCollector,
    ErrorSeverity,
    create_error_report,
    handle_record_error,
)
from ..utils.logging_config import SearchLogger, get_logger
from .config import EngineConfig
from .types import (
    CancelSignal,
    SearchOptions,
    SearchOutcome,
    SearchResult,
    SearchStats,
    Suggestion,
)

_BatchResult = tuple[list[SearchResult], int, int]


class CollegeSearch:
    """
    Search engine over in-memory college records.

    The engine holds only immutable configuration and dictionaries; all
    per-call state lives in the returned ``SearchOutcome``, so one instance
    can serve concurrent callers.

    Attributes:
        cfg (EngineConfig): Configuration controlling fields, order and limits
        dictionaries (Dictionaries): Synonym and location tables
        expander (DictionaryExpander): Expansion over ``dictionaries``
        logger (SearchLogger): Logging interface

    Example:
        With custom configuration:
            >>> from collegesearch import EngineConfig, FieldSpec
            >>> config = EngineConfig(
            ...     search_fields=(FieldSpec("title", 10, "college"),),
            ...     parallel=True,
            ...     workers=4,
            ... )
            >>> engine = CollegeSearch(config)
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        dictionaries: Dictionaries | None = None,
        logger: SearchLogger | None = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            config: Engine configuration. If None, uses default configuration.
            dictionaries: Pre-built dictionaries. If None, they are loaded from
                the configured paths or from the packaged tables.
            logger: Custom logger instance. If None, uses default logger.

        Raises:
            ConfigurationError: If the configuration is invalid
            DictionaryLoadError: If a dictionary cannot be loaded
        """
        self.cfg = config or EngineConfig()
        self.cfg.validate()
        self.logger = logger or get_logger()

        if dictionaries is not None:
            self.dictionaries = dictionaries
        elif self.cfg.synonyms_path is not None or self.cfg.locations_path is not None:
            self.dictionaries = load_dictionaries(
                self.cfg.synonyms_path, self.cfg.locations_path, logger=self.logger
            )
        else:
            self.dictionaries = get_default_dictionaries(logger=self.logger)

        self.expander = DictionaryExpander(self.dictionaries)
        self.suggestions = SuggestionGenerator(self.cfg)

    def run(
        self,
        query: str,
        records: Any,
        options: SearchOptions | None = None,
        cancel: CancelSignal | None = None,
        filters: RecordFilters | None = None,
        max_results: int | None = None,
    ) -> SearchOutcome:
        """
        Execute a search and return results, statistics and diagnostics.

        Args:
            query: Free-text query; ``/pattern/`` is a regex when enabled
            records: Iterable of mappings or attribute-bearing objects
            options: Strategy switches. If None, uses ``SearchOptions()``.
            cancel: Optional object with ``is_set()``, checked before each batch
            filters: Optional record filters (equality, membership or
                ``{"min", "max"}`` range per field), applied before ranking
            max_results: Keep at most this many results after sorting;
                ``stats.records_matched`` still counts every match

        Returns:
            SearchOutcome whose results are sorted descending by score
        """
        options = options or SearchOptions()
        outcome = SearchOutcome()
        t0 = time.perf_counter()

        record_list = list(records) if records else []
        self.logger.log_search_start(query=str(query or ""), records_count=len(record_list))

        prepared = prepare_query(
            query or "",
            options,
            self.expander,
            errors=outcome.errors,
            logger=self.logger,
            regex_timeout=self.cfg.regex_timeout,
        )
        record_filters = validate_filters(filters, outcome.errors)
        if max_results is not None and max_results < 0:
            outcome.errors.add_error(
                ValueError(f"max_results must be non-negative, got {max_results}"),
                category=ErrorCategory.VALIDATION,
                severity=ErrorSeverity.MEDIUM,
            )
            max_results = None

        if prepared.text and record_list:
            batches = [
                record_list[i : i + self.cfg.batch_size]
                for i in range(0, len(record_list), self.cfg.batch_size)
            ]
            outcome.stats.batches_total = len(batches)
            try:
                partials = self._score_batches(batches, prepared, cancel, record_filters)
            except Exception as e:
                self.logger.error(f"Error during scoring: {e}")
                outcome.errors.add_error(e)
                partials = []

            results: list[SearchResult] = []
            for partial in partials:
                if partial is None:
                    outcome.stats.cancelled = True
                    continue
                batch_results, fields, scanned = partial
                results.extend(batch_results)
                outcome.stats.fields_evaluated += fields
                outcome.stats.records_scanned += scanned
                outcome.stats.batches_completed += 1

            ranked = sort_results(results)
            outcome.stats.records_matched = len(ranked)
            outcome.results = ranked if max_results is None else ranked[:max_results]

        outcome.stats.elapsed_ms = (time.perf_counter() - t0) * 1000.0

        if outcome.stats.cancelled:
            self.logger.log_cancelled(
                query=prepared.raw,
                batches_completed=outcome.stats.batches_completed,
                batches_total=outcome.stats.batches_total,
            )

        self.logger.log_search_complete(
            query=prepared.raw,
            results_count=len(outcome.results),
            elapsed_ms=outcome.stats.elapsed_ms,
            records_scanned=outcome.stats.records_scanned,
        )
        return outcome

    def _score_batch(
        self,
        batch: list[Any],
        prepared: PreparedQuery,
        cancel: CancelSignal | None,
        filters: RecordFilters | None = None,
    ) -> _BatchResult | None:
        if cancel is not None and cancel.is_set():
            return None
        results: list[SearchResult] = []
        fields = 0
        for record in batch:
            try:
                if filters and not apply_record_filters(record, filters, self.cfg.search_fields):
                    continue
                result, evaluated = score_record(record, prepared, self.cfg)
            except Exception as e:
                handle_record_error(e, error_collector=prepared.errors, logger=self.logger)
                continue
            fields += evaluated
            if result is not None:
                results.append(result)
        return results, fields, len(batch)

    def _score_batches(
        self,
        batches: list[list[Any]],
        prepared: PreparedQuery,
        cancel: CancelSignal | None,
        filters: RecordFilters | None = None,
    ) -> list[_BatchResult | None]:
        """Score every batch; a None entry is a batch skipped after cancellation."""
        if not self.cfg.parallel or len(batches) < 2:
            partials: list[_BatchResult | None] = []
            for batch in batches:
                partial = self._score_batch(batch, prepared, cancel, filters)
                partials.append(partial)
                if partial is None:
                    # Remaining batches are skipped as well.
                    partials.extend([None] * (len(batches) - len(partials)))
                    break
            return partials

        workers = self.cfg.workers or os.cpu_count() or 4
        workers = min(workers, len(batches))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(self._score_batch, batch, prepared, cancel, filters)
                for batch in batches
            ]
            # Submission order, not completion order.
            return [future.result() for future in futures]

    def search(
        self,
        query: str,
        records: Any,
        options: SearchOptions | None = None,
        cancel: CancelSignal | None = None,
        filters: RecordFilters | None = None,
        max_results: int | None = None,
    ) -> list[SearchResult]:
        """
        Convenience method returning only the ranked results.

        Example:
            >>> engine.search("", records)
            []
            >>> [r.match_type.value for r in engine.search("aiims", records)]
            ['contains']
            >>> engine.search("aiims", records, filters={"state": "Puducherry"})
            []
        """
        return self.run(query, records, options, cancel, filters, max_results).results

    def suggest(
        self,
        query: str,
        records: Any,
        max_suggestions: int | None = None,
        cancel: CancelSignal | None = None,
    ) -> list[Suggestion]:
        """
        Autocomplete suggestions for ``query``, best first.

        Queries shorter than ``EngineConfig.min_suggestion_length`` return ``[]``.
        """
        return self.suggest_with_stats(query, records, max_suggestions, cancel)[0]

    def suggest_with_stats(
        self,
        query: str,
        records: Any,
        max_suggestions: int | None = None,
        cancel: CancelSignal | None = None,
        errors: ErrorCollector | None = None,
    ) -> tuple[list[Suggestion], SearchStats]:
        """
        Suggestions plus call statistics.

        Records that cannot be read are skipped and recorded in ``errors``
        when a collector is given.
        """
        t0 = time.perf_counter()
        record_list = list(records) if records else []
        self.logger.log_search_start(
            query=str(query or ""), records_count=len(record_list), operation_kind="suggest"
        )

        suggestions, stats = self.suggestions.generate(
            query or "", record_list, max_suggestions, cancel, errors=errors, logger=self.logger
        )
        stats.records_matched = len(suggestions)
        stats.elapsed_ms = (time.perf_counter() - t0) * 1000.0

        if stats.cancelled:
            self.logger.log_cancelled(
                query=str(query or ""),
                batches_completed=stats.batches_completed,
                batches_total=stats.batches_total,
            )
        self.logger.log_search_complete(
            query=str(query or ""),
            results_count=len(suggestions),
            elapsed_ms=stats.elapsed_ms,
            operation_kind="suggest",
        )
        return suggestions, stats

    @staticmethod
    def error_report(outcome: SearchOutcome) -> str:
        """Human-readable report of an outcome's diagnostics."""
        return create_error_report(outcome.errors)

    @staticmethod
    def error_summary(outcome: SearchOutcome) -> dict[str, Any]:
        return outcome.errors.get_summary()

