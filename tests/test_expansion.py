import threading

import pytest

from collegesearch.search import expansion
from collegesearch.search.expansion import (
    LOCATION_SUFFIXES,
    Dictionaries,
    DictionaryExpander,
    build_table,
    get_default_dictionaries,
    load_dictionaries,
)
from collegesearch.utils.error_handling import DictionaryLoadError, ErrorSeverity


def test_packaged_synonyms():
    expander = DictionaryExpander(load_dictionaries())
    expanded = expander.expand_synonyms("MBBS")
    assert "mbbs" in expanded
    assert "bachelor of medicine" in expanded


def test_expansion_always_contains_term(synthetic_dictionaries):
    expander = DictionaryExpander(synthetic_dictionaries)
    for term in ["mbbs", "unknown term", "  Govt  "]:
        assert expander.expand_synonyms(term) >= {term.strip().lower()}
        assert term.strip().lower() in expander.expand_location(term)


def test_substring_overlap_scan(synthetic_dictionaries):
    expander = DictionaryExpander(synthetic_dictionaries)
    # key is a substring of the term
    assert "bachelor of medicine" in expander.expand_synonyms("mbbs seats")
    # term is a substring of the key
    assert "government" in expander.expand_synonyms("gov")


def test_location_suffixes(synthetic_dictionaries):
    expander = DictionaryExpander(synthetic_dictionaries)
    expanded = expander.expand_location("Bombay")
    assert "mumbai" in expanded
    for suffix in LOCATION_SUFFIXES:
        assert f"bombay {suffix}" in expanded


def test_empty_term_expands_to_itself(synthetic_dictionaries):
    expander = DictionaryExpander(synthetic_dictionaries)
    assert expander.expand_synonyms("") == frozenset({""})
    assert expander.expand_location("   ") == frozenset({""})


def test_tables_are_read_only():
    dictionaries = load_dictionaries()
    with pytest.raises(TypeError):
        dictionaries.synonyms["new"] = frozenset()  # type: ignore[index]
    assert isinstance(dictionaries.locations["delhi"], frozenset)


def test_build_table_normalizes():
    table = build_table({" AIIMS ": ["All India Institute", "  "], "": ["ignored"]})
    assert dict(table) == {"aiims": frozenset({"all india institute"})}


def test_load_custom_files(tmp_path):
    syn = tmp_path / "syn.json"
    loc = tmp_path / "loc.json"
    syn.write_text('{"iit": ["indian institute of technology"]}', encoding="utf-8")
    loc.write_text('{"madras": ["chennai"]}', encoding="utf-8")

    dictionaries = load_dictionaries(syn, loc)
    assert dict(dictionaries.synonyms) == {"iit": frozenset({"indian institute of technology"})}
    assert "chennai" in DictionaryExpander(dictionaries).expand_location("madras")


def test_custom_synonyms_fall_back_to_packaged_locations(tmp_path):
    syn = tmp_path / "syn.json"
    syn.write_text("{}", encoding="utf-8")
    dictionaries = load_dictionaries(synonyms_path=syn)
    assert dict(dictionaries.synonyms) == {}
    assert "delhi" in dictionaries.locations


@pytest.mark.parametrize(
    "content",
    ["not json", "[1, 2, 3]", '{"delhi": "new delhi"}', '{"delhi": 5}'],
)
def test_malformed_file_raises(tmp_path, content):
    bad = tmp_path / "bad.json"
    bad.write_text(content, encoding="utf-8")
    with pytest.raises(DictionaryLoadError) as exc_info:
        load_dictionaries(synonyms_path=bad)
    assert exc_info.value.severity == ErrorSeverity.HIGH


def test_missing_file_raises(tmp_path):
    with pytest.raises(DictionaryLoadError) as exc_info:
        load_dictionaries(locations_path=tmp_path / "missing.json")
    assert exc_info.value.context["path"].endswith("missing.json")


def test_default_dictionaries_loaded_once(monkeypatch):
    monkeypatch.setattr(expansion, "_default_dictionaries", None)
    calls = []
    real_load = expansion.load_dictionaries

    def counting_load(*args, **kwargs):
        calls.append(1)
        return real_load(*args, **kwargs)

    monkeypatch.setattr(expansion, "load_dictionaries", counting_load)

    seen: list[Dictionaries] = []
    threads = [threading.Thread(target=lambda: seen.append(get_default_dictionaries())) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(calls) == 1
    assert all(d is seen[0] for d in seen)
