"""
Synonym and location-alias expansion.

The dictionaries are plain JSON objects mapping a term to a list of aliases.
They ship with the package under ``collegesearch/data`` and can be replaced
through ``EngineConfig.synonyms_path`` / ``EngineConfig.locations_path``.
Keys and aliases are normalized once at load time and then held in read-only
mapping proxies, so a loaded ``Dictionaries`` value can be shared freely
between threads.

Expansion of a term is a closed two-step process:

1. direct lookup of the normalized term;
2. a scan over all keys, unioning in the aliases of every key that is a
   substring of the term or that contains the term.

Location expansion additionally appends the generic suffixes in
``LOCATION_SUFFIXES`` to the term.
"""

from __future__ import annotations

import threading
from collections.abc import Mapping
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Any

import orjson

from ..utils.error_handling import DictionaryLoadError
from ..utils.text import normalize

LOCATION_SUFFIXES: tuple[str, ...] = ("city", "town", "village", "district", "state")

_SYNONYMS_RESOURCE = "synonyms.json"
_LOCATIONS_RESOURCE = "locations.json"


@dataclass(frozen=True, slots=True)
class Dictionaries:
    synonyms: Mapping[str, frozenset[str]]
    locations: Mapping[str, frozenset[str]]


def build_table(raw: Mapping[str, Any], source: str = "<memory>") -> Mapping[str, frozenset[str]]:
    """Normalize a ``term -> aliases`` mapping into a read-only table."""
    if not isinstance(raw, Mapping):
        raise DictionaryLoadError(
            f"Dictionary {source} must be a JSON object, got {type(raw).__name__}",
            context={"source": source},
        )

    table: dict[str, set[str]] = {}
    for key, aliases in raw.items():
        term = normalize(key)
        if not term:
            continue
        if isinstance(aliases, str) or not isinstance(aliases, (list, tuple, set, frozenset)):
            raise DictionaryLoadError(
                f"Aliases for '{key}' in {source} must be a list of strings",
                context={"source": source, "term": key},
            )
        bucket = table.setdefault(term, set())
        bucket.update(alias for alias in (normalize(a) for a in aliases) if alias)

    return MappingProxyType({term: frozenset(aliases) for term, aliases in table.items()})


def _read_table(path: Path | None, resource: str, logger: Any | None = None) -> Mapping[str, frozenset[str]]:
    if path is None:
        source = f"collegesearch/data/{resource}"
        try:
            payload = (resources.files("collegesearch") / "data" / resource).read_bytes()
        except OSError as e:
            raise DictionaryLoadError(f"Packaged dictionary {resource} is missing: {e}") from e
    else:
        path = Path(path)
        source = str(path)
        try:
            payload = path.read_bytes()
        except OSError as e:
            raise DictionaryLoadError(f"Cannot read dictionary {path}: {e}", path=path) from e

    try:
        raw = orjson.loads(payload)
    except orjson.JSONDecodeError as e:
        raise DictionaryLoadError(
            f"Dictionary {source} is not valid JSON: {e}",
            path=path,
        ) from e

    table = build_table(raw, source=source)
    if logger is not None:
        logger.log_dictionary_loaded(resource.removesuffix(".json"), len(table), source)
    return table


def load_dictionaries(
    synonyms_path: Path | None = None,
    locations_path: Path | None = None,
    logger: Any | None = None,
) -> Dictionaries:
    """
    Load the synonym and location tables.

    Args:
        synonyms_path: Custom synonym table; None uses the packaged one
        locations_path: Custom location table; None uses the packaged one
        logger: Optional SearchLogger for a debug record per table

    Raises:
        DictionaryLoadError: If a file is missing, unreadable or malformed
    """
    return Dictionaries(
        synonyms=_read_table(synonyms_path, _SYNONYMS_RESOURCE, logger),
        locations=_read_table(locations_path, _LOCATIONS_RESOURCE, logger),
    )


_default_dictionaries: Dictionaries | None = None
_default_lock = threading.Lock()


def get_default_dictionaries(logger: Any | None = None) -> Dictionaries:
    """Packaged dictionaries, loaded once on first use."""
    global _default_dictionaries
    if _default_dictionaries is None:
        with _default_lock:
            if _default_dictionaries is None:
                _default_dictionaries = load_dictionaries(logger=logger)
    return _default_dictionaries


def _expand(term: str, table: Mapping[str, frozenset[str]]) -> set[str]:
    expanded = {term}
    if not term:
        return expanded

    direct = table.get(term)
    if direct:
        expanded.update(direct)

    for key, aliases in table.items():
        if key in term or term in key:
            expanded.update(aliases)

    return expanded


class DictionaryExpander:
    """Expands terms against a ``Dictionaries`` value."""

    def __init__(self, dictionaries: Dictionaries) -> None:
        self.dictionaries = dictionaries

    def expand_synonyms(self, term: str) -> frozenset[str]:
        return frozenset(_expand(normalize(term), self.dictionaries.synonyms))

    def expand_location(self, term: str) -> frozenset[str]:
        normalized = normalize(term)
        expanded = _expand(normalized, self.dictionaries.locations)
        if normalized:
            expanded.update(f"{normalized} {suffix}" for suffix in LOCATION_SUFFIXES)
        return frozenset(expanded)
