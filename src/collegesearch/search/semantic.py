"""
Lightweight semantic similarity for collegesearch.

No models and no embeddings: similarity is a bounded, deterministic blend of
word overlap and the best pairwise edit similarity between words. It catches
near-miss phrasings ("medical institute" vs "institute of medical sciences")
that the literal strategies do not, and it is documented as approximate.

Functions:
    content_words: Distinct words longer than two characters
    semantic_similarity: Similarity score in [0, 1]
"""

from __future__ import annotations

from .fuzzy import word_similarity

OVERLAP_WEIGHT = 0.6
EDIT_WEIGHT = 0.4


def content_words(text: str) -> frozenset[str]:
    return frozenset(word for word in text.lower().split() if len(word) > 2)


def semantic_similarity(query: str, text: str) -> float:
    """
    Calculate semantic similarity between ``query`` and ``text``.

    Returns 0.0 when either side has no word longer than two characters.

    Example:
        >>> round(semantic_similarity("medical college", "government medical college"), 2)
        0.8
    """
    query_words = content_words(query)
    text_words = content_words(text)
    if not query_words or not text_words:
        return 0.0

    overlap = len(query_words & text_words) / max(len(query_words), len(text_words))

    best_total = 0.0
    for q in query_words:
        best_total += max(word_similarity(q, t) for t in text_words)
    avg_similarity = best_total / len(query_words)

    return OVERLAP_WEIGHT * overlap + EDIT_WEIGHT * avg_similarity
