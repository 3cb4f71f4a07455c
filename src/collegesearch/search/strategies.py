"""
The strategy cascade.

Every field of every record is run through an ordered tuple of strategy
evaluators. The first evaluator that produces a positive score decides the
field's score and match type; the rest are skipped. The order lives in
``EngineConfig.strategy_order`` so strategies can be reordered or dropped
without touching this module.

Per-call work that does not depend on the record (normalizing the query,
compiling patterns, expanding dictionaries, phonetic codes) is done once in
``prepare_query`` and carried in a ``PreparedQuery``.

Base scores:

    ==========  =====================  ================
    strategy    base score             match type
    ==========  =====================  ================
    exact       100                    exact
    contains    80                     contains
    word_start  70                     word_start
    fuzzy       max(1, 60 - 10 * d)    fuzzy
    phonetic    50 / 45                soundex / metaphone
    wildcard    40                     wildcard
    regex       35                     regex
    synonym     30                     synonym
    location    25                     location_variant
    semantic    similarity * 20        semantic
    ==========  =====================  ================
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import regex as regex_mod

from ..core.config import FieldSpec
from ..core.types import MatchType, SearchOptions, Strategy
from ..utils.error_handling import ErrorCategory, ErrorCollector, ErrorSeverity
from ..utils.text import normalize
from .expansion import DictionaryExpander
from .fuzzy import levenshtein_distance, metaphone, soundex
from .matchers import (
    compile_user_pattern,
    compile_wildcard,
    extract_regex_pattern,
    has_wildcards,
    search_compiled,
)
from .semantic import semantic_similarity

EXACT_SCORE = 100.0
CONTAINS_SCORE = 80.0
WORD_START_SCORE = 70.0
SOUNDEX_SCORE = 50.0
METAPHONE_SCORE = 45.0
WILDCARD_SCORE = 40.0
REGEX_SCORE = 35.0
SYNONYM_SCORE = 30.0
LOCATION_SCORE = 25.0
SEMANTIC_SCALE = 20.0

FieldMatch = tuple[float, MatchType]


def fuzzy_score(distance: int) -> float:
    return float(max(1, 60 - 10 * distance))


@dataclass(slots=True)
class PreparedQuery:
    """Record-independent artefacts of one search call."""

    raw: str
    text: str
    options: SearchOptions
    regex_timeout: float | None = None
    soundex_code: str = ""
    metaphone_code: str = ""
    wildcard: regex_mod.Pattern | None = None
    user_regex: regex_mod.Pattern | None = None
    synonyms: frozenset[str] = frozenset()
    locations: frozenset[str] = frozenset()
    errors: ErrorCollector = field(default_factory=ErrorCollector)
    logger: Any | None = None


@dataclass(slots=True)
class FieldText:
    raw: str
    normalized: str
    spec: FieldSpec
    is_location: bool = False


def prepare_query(
    query: str,
    options: SearchOptions,
    expander: DictionaryExpander,
    errors: ErrorCollector | None = None,
    logger: Any | None = None,
    regex_timeout: float | None = None,
) -> PreparedQuery:
    """
    Normalize the query and build everything the evaluators need once.

    A malformed ``/.../`` pattern is recorded and logged here, once per call,
    and the regex strategy then simply never matches.
    """
    text = normalize(query)
    prepared = PreparedQuery(
        raw=query if isinstance(query, str) else text,
        text=text,
        options=options,
        regex_timeout=regex_timeout,
        errors=errors if errors is not None else ErrorCollector(),
        logger=logger,
    )
    if not text:
        return prepared

    if options.use_phonetic:
        prepared.soundex_code = soundex(text)
        prepared.metaphone_code = metaphone(text)

    if options.use_wildcard and has_wildcards(text):
        prepared.wildcard = compile_wildcard(text)

    if options.use_regex:
        body = extract_regex_pattern(prepared.raw.strip())
        if body is not None:
            prepared.user_regex = compile_user_pattern(
                body, error_collector=prepared.errors, logger=logger
            )

    if options.use_synonyms:
        prepared.synonyms = expander.expand_synonyms(text)

    if options.use_location:
        prepared.locations = expander.expand_location(text)

    return prepared


def _exact(q: PreparedQuery, f: FieldText) -> FieldMatch | None:
    if f.normalized == q.text:
        return EXACT_SCORE, MatchType.EXACT
    return None


def _contains(q: PreparedQuery, f: FieldText) -> FieldMatch | None:
    if q.text in f.normalized:
        return CONTAINS_SCORE, MatchType.CONTAINS
    return None


def _word_start(q: PreparedQuery, f: FieldText) -> FieldMatch | None:
    if any(word.startswith(q.text) for word in f.normalized.split()):
        return WORD_START_SCORE, MatchType.WORD_START
    return None


def _fuzzy(q: PreparedQuery, f: FieldText) -> FieldMatch | None:
    if not q.options.use_fuzzy:
        return None
    threshold = q.options.fuzzy_threshold
    # The distance is at least the length difference.
    if abs(len(q.text) - len(f.normalized)) > threshold:
        return None
    distance = levenshtein_distance(q.text, f.normalized)
    if distance <= threshold:
        return fuzzy_score(distance), MatchType.FUZZY
    return None


def _phonetic(q: PreparedQuery, f: FieldText) -> FieldMatch | None:
    if not q.options.use_phonetic:
        return None
    if q.soundex_code and q.soundex_code == soundex(f.normalized):
        return SOUNDEX_SCORE, MatchType.SOUNDEX
    if q.metaphone_code and q.metaphone_code == metaphone(f.normalized):
        return METAPHONE_SCORE, MatchType.METAPHONE
    return None


def _wildcard(q: PreparedQuery, f: FieldText) -> FieldMatch | None:
    if q.wildcard is None:
        return None
    matched = search_compiled(
        q.wildcard,
        f.raw,
        timeout=q.regex_timeout,
        field_name=f.spec.name,
        error_collector=q.errors,
        logger=q.logger,
    )
    if matched:
        return WILDCARD_SCORE, MatchType.WILDCARD
    return None


def _regex(q: PreparedQuery, f: FieldText) -> FieldMatch | None:
    if q.user_regex is None:
        return None
    matched = search_compiled(
        q.user_regex,
        f.raw,
        timeout=q.regex_timeout,
        field_name=f.spec.name,
        error_collector=q.errors,
        logger=q.logger,
    )
    if matched:
        return REGEX_SCORE, MatchType.REGEX
    return None


def _synonym(q: PreparedQuery, f: FieldText) -> FieldMatch | None:
    if not q.options.use_synonyms:
        return None
    if any(term in f.normalized for term in q.synonyms):
        return SYNONYM_SCORE, MatchType.SYNONYM
    return None


def _location(q: PreparedQuery, f: FieldText) -> FieldMatch | None:
    if not q.options.use_location or not f.is_location:
        return None
    if any(alias in f.normalized for alias in q.locations):
        return LOCATION_SCORE, MatchType.LOCATION_VARIANT
    return None


def _semantic(q: PreparedQuery, f: FieldText) -> FieldMatch | None:
    if not q.options.use_semantic:
        return None
    similarity = semantic_similarity(q.text, f.normalized)
    if similarity > 0 and similarity >= q.options.semantic_threshold:
        return similarity * SEMANTIC_SCALE, MatchType.SEMANTIC
    return None


EVALUATORS: dict[Strategy, Callable[[PreparedQuery, FieldText], FieldMatch | None]] = {
    Strategy.EXACT: _exact,
    Strategy.CONTAINS: _contains,
    Strategy.WORD_START: _word_start,
    Strategy.FUZZY: _fuzzy,
    Strategy.PHONETIC: _phonetic,
    Strategy.WILDCARD: _wildcard,
    Strategy.REGEX: _regex,
    Strategy.SYNONYM: _synonym,
    Strategy.LOCATION: _location,
    Strategy.SEMANTIC: _semantic,
}


def evaluate_field(
    query: PreparedQuery, field_text: FieldText, order: tuple[Strategy, ...]
) -> FieldMatch | None:
    """
    Run the cascade over one field and return the first positive match.

    An evaluator that raises is recorded in the call's error collector and
    treated as no match; the cascade carries on with the next strategy.
    """
    for strategy in order:
        try:
            hit = EVALUATORS[strategy](query, field_text)
        except Exception as e:
            query.errors.add_error(
                e,
                category=ErrorCategory.STRATEGY,
                severity=ErrorSeverity.LOW,
                field_name=field_text.spec.name,
                context={"strategy": strategy.value},
            )
            continue
        if hit is not None and hit[0] > 0:
            return hit
    return None
