"""
Autocomplete suggestions.

Suggestions run a reduced matcher (exact, contains, word start, fuzzy and
acronym) over ``EngineConfig.suggestion_fields`` and rank the field texts
themselves rather than whole records. Scores follow the same
higher-is-better convention as search results.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from ..core.config import EngineConfig
from ..core.types import CancelSignal, MatchType, SearchStats, Suggestion
from ..utils.error_handling import ErrorCollector, handle_record_error
from ..utils.text import normalize
from .fuzzy import levenshtein_distance
from .scorer import field_texts
from .strategies import CONTAINS_SCORE, EXACT_SCORE, WORD_START_SCORE, fuzzy_score

ACRONYM_SCORE = 50.0


def acronym(text: str) -> str:
    """First letter of every word, e.g. "all india institute" -> "aii"."""
    return "".join(word[0] for word in text.split())


def match_suggestion(
    query: str, text: str, fuzzy_threshold: int = 3
) -> tuple[float, MatchType] | None:
    """
    Reduced matcher used for suggestions; both arguments are normalized.

    Example:
        >>> match_suggestion("dmc", "dayanand medical college")
        (50.0, <MatchType.ACRONYM: 'acronym'>)
    """
    if not query or not text:
        return None
    if text == query:
        return EXACT_SCORE, MatchType.EXACT
    if query in text:
        return CONTAINS_SCORE, MatchType.CONTAINS
    words = text.split()
    if any(word.startswith(query) for word in words):
        return WORD_START_SCORE, MatchType.WORD_START
    if abs(len(query) - len(text)) <= fuzzy_threshold:
        distance = levenshtein_distance(query, text)
        if distance <= fuzzy_threshold:
            return fuzzy_score(distance), MatchType.FUZZY
    if query in acronym(text):
        return ACRONYM_SCORE, MatchType.ACRONYM
    return None


def _batches(records: list[Any], size: int) -> Iterable[list[Any]]:
    for start in range(0, len(records), size):
        yield records[start : start + size]


class SuggestionGenerator:
    """Builds deduplicated, ranked suggestions from a record set."""

    def __init__(self, cfg: EngineConfig) -> None:
        self.cfg = cfg

    def generate(
        self,
        query: str,
        records: list[Any] | None,
        max_suggestions: int | None = None,
        cancel: CancelSignal | None = None,
        errors: ErrorCollector | None = None,
        logger: Any | None = None,
    ) -> tuple[list[Suggestion], SearchStats]:
        stats = SearchStats()
        text = normalize(query)
        limit = self.cfg.max_suggestions if max_suggestions is None else max_suggestions
        if len(text) < self.cfg.min_suggestion_length or not records or limit <= 0:
            return [], stats

        records = list(records)
        stats.batches_total = -(-len(records) // self.cfg.batch_size)

        candidates: list[Suggestion] = []
        for batch in _batches(records, self.cfg.batch_size):
            if cancel is not None and cancel.is_set():
                stats.cancelled = True
                break
            for record in batch:
                stats.records_scanned += 1
                try:
                    fields = field_texts(record, self.cfg.suggestion_fields, self.cfg)
                except Exception as e:
                    handle_record_error(e, error_collector=errors, logger=logger)
                    continue
                stats.fields_evaluated += len(fields)
                for ft in fields:
                    hit = match_suggestion(text, ft.normalized, self.cfg.suggestion_fuzzy_threshold)
                    if hit is None:
                        continue
                    base, match_type = hit
                    candidates.append(
                        Suggestion(
                            text=ft.raw,
                            type=ft.spec.category,
                            score=base * ft.spec.weight,
                            match_type=match_type,
                            record=record,
                        )
                    )
            stats.batches_completed += 1

        return rank_suggestions(candidates, limit), stats


def rank_suggestions(candidates: list[Suggestion], limit: int) -> list[Suggestion]:
    """Sort descending (stable), keep the first of each ``(text, type)``, truncate."""
    seen: set[tuple[str, str]] = set()
    ranked: list[Suggestion] = []
    for suggestion in sorted(candidates, key=lambda s: s.score, reverse=True):
        key = (suggestion.text, suggestion.type)
        if key in seen:
            continue
        seen.add(key)
        ranked.append(suggestion)
        if len(ranked) >= limit:
            break
    return ranked
