from __future__ import annotations

import re

from ..core.types import MatchType

_NON_LETTERS = re.compile(r"[^A-Za-z]")

_SOUNDEX_CODES = {
    "B": "1",
    "F": "1",
    "P": "1",
    "V": "1",
    "C": "2",
    "G": "2",
    "J": "2",
    "K": "2",
    "Q": "2",
    "S": "2",
    "X": "2",
    "Z": "2",
    "D": "3",
    "T": "3",
    "L": "4",
    "M": "5",
    "N": "5",
    "R": "6",
}

# Applied in order; anchored rules only fire at the word edges.
_METAPHONE_RULES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"^kn"), "n"),
    (re.compile(r"^gn"), "n"),
    (re.compile(r"^pn"), "n"),
    (re.compile(r"^wr"), "r"),
    (re.compile(r"^x"), "s"),
    (re.compile(r"^wh"), "w"),
    (re.compile(r"mb$"), "m"),
    (re.compile(r"ck"), "k"),
    (re.compile(r"ph"), "f"),
    (re.compile(r"th"), "0"),
    (re.compile(r"sh"), "x"),
    (re.compile(r"ch"), "x"),
    (re.compile(r"dg"), "j"),
    (re.compile(r"gh"), "g"),
    (re.compile(r"gn"), "n"),
]


def levenshtein_distance(s1: str, s2: str) -> int:
    """Calculate Levenshtein distance between two strings."""
    if len(s1) < len(s2):
        return levenshtein_distance(s2, s1)

    if len(s2) == 0:
        return len(s1)

    previous_row = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1):
        current_row = [i + 1]
        for j, c2 in enumerate(s2):
            insertions = previous_row[j + 1] + 1
            deletions = current_row[j] + 1
            substitutions = previous_row[j] + (c1 != c2)
            current_row.append(min(insertions, deletions, substitutions))
        previous_row = current_row

    return previous_row[-1]


def word_similarity(s1: str, s2: str) -> float:
    """Edit similarity in [0, 1]; two empty strings are identical."""
    max_len = max(len(s1), len(s2))
    if max_len == 0:
        return 1.0
    return max(0.0, 1.0 - levenshtein_distance(s1, s2) / max_len)


def soundex(s: str) -> str:
    """
    Generate the four-character Soundex code of ``s``.

    Anything that is not an ASCII letter is dropped first, so text without
    letters yields an empty code. Vowels and H/W/Y carry no digit and do not
    break a run of equal digits.
    """
    letters = _NON_LETTERS.sub("", s or "").upper()
    if not letters:
        return ""

    first = letters[0]
    code = first
    previous = _SOUNDEX_CODES.get(first, "")

    for char in letters[1:]:
        digit = _SOUNDEX_CODES.get(char)
        if digit is None:
            continue
        if digit != previous:
            code += digit
        previous = digit

    return (code + "000")[:4]


def metaphone(s: str) -> str:
    """
    Simplified Metaphone: ordered digraph rewrites, upper-cased, at most six
    characters. Deliberately lossy.
    """
    letters = _NON_LETTERS.sub("", s or "").lower()
    if not letters:
        return ""

    for pattern, replacement in _METAPHONE_RULES:
        letters = pattern.sub(replacement, letters)

    return letters.upper()[:6]


def phonetic_match(s1: str, s2: str) -> MatchType | None:
    """Return SOUNDEX or METAPHONE when the codes agree, else ``None``."""
    code1 = soundex(s1)
    if code1 and code1 == soundex(s2):
        return MatchType.SOUNDEX
    code1 = metaphone(s1)
    if code1 and code1 == metaphone(s2):
        return MatchType.METAPHONE
    return None
