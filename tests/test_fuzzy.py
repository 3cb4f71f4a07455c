import pytest

from collegesearch.core.types import MatchType
from collegesearch.search.fuzzy import (
    levenshtein_distance,
    metaphone,
    phonetic_match,
    soundex,
    word_similarity,
)


def test_distance_algorithms():
    """Test Levenshtein distance and the derived word similarity."""
    assert levenshtein_distance("kitten", "sitting") == 3
    assert levenshtein_distance("hello", "hello") == 0
    assert levenshtein_distance("", "abc") == 3
    assert levenshtein_distance("abc", "") == 3

    assert word_similarity("", "") == 1.0
    assert word_similarity("abc", "abc") == 1.0
    assert word_similarity("abc", "xyz") == 0.0
    assert word_similarity("kitten", "sitting") == pytest.approx(1 - 3 / 7)


@pytest.mark.parametrize(
    "a,b",
    [("delhi", "dilli"), ("aiims", "aims"), ("", "medical"), ("college", "collage")],
)
def test_levenshtein_symmetry(a, b):
    assert levenshtein_distance(a, b) == levenshtein_distance(b, a)
    assert levenshtein_distance(a, a) == 0


def test_soundex():
    assert soundex("Robert") == "R163"
    assert soundex("Rupert") == "R163"
    assert soundex("hello") == "H400"
    assert soundex("Smith") == soundex("Smyth")
    # H and W do not separate equal codes
    assert soundex("Ashcraft") == "A261"
    # First letter seeds the previous code
    assert soundex("Pfister") == "P236"


def test_soundex_strips_non_letters():
    assert soundex("O'Brien") == soundex("OBrien")
    assert soundex("Dé lhi") == soundex("Dlhi")
    assert soundex("1234") == ""
    assert soundex("") == ""


def test_metaphone():
    assert metaphone("knight") == "NIGT"
    assert metaphone("phone") == "FONE"
    assert metaphone("thomas") == "0OMAS"
    assert metaphone("Wright") == "RIGT"
    assert metaphone("lamb") == "LAM"
    assert metaphone("Christopher") == "XRISTO"
    assert len(metaphone("international")) == 6
    assert metaphone("42") == ""


def test_phonetic_match():
    assert phonetic_match("Robert", "Rupert") == MatchType.SOUNDEX
    assert phonetic_match("fil", "Phil") == MatchType.METAPHONE
    assert phonetic_match("Delhi", "Mumbai") is None
    # Codes of letterless input never match each other
    assert phonetic_match("123", "456") is None
