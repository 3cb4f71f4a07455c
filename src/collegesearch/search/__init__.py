"""
Matching strategies and ranking.

This module contains the building blocks the engine composes:
- Edit distance and phonetic encoders
- Wildcard and regex pattern matching
- Synonym and location-alias expansion
- Lightweight semantic similarity
- Record filters
- The ordered strategy cascade, record scoring and suggestions
"""

from .expansion import Dictionaries, DictionaryExpander, load_dictionaries
from .filters import apply_record_filters
from .fuzzy import levenshtein_distance, metaphone, phonetic_match, soundex, word_similarity
from .matchers import regex_match, wildcard_match, wildcard_to_regex
from .scorer import score_record, sort_results
from .semantic import semantic_similarity
from .strategies import EVALUATORS, evaluate_field, prepare_query
from .suggestions import SuggestionGenerator, match_suggestion

__all__ = [
    # Dictionaries
    "Dictionaries",
    "DictionaryExpander",
    "load_dictionaries",
    # Filters
    "apply_record_filters",
    # Distance and phonetics
    "levenshtein_distance",
    "metaphone",
    "phonetic_match",
    "soundex",
    "word_similarity",
    # Patterns
    "regex_match",
    "wildcard_match",
    "wildcard_to_regex",
    # Scoring
    "score_record",
    "sort_results",
    "semantic_similarity",
    "EVALUATORS",
    "evaluate_field",
    "prepare_query",
    # Suggestions
    "SuggestionGenerator",
    "match_suggestion",
]
