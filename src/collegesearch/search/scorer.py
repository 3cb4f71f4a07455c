from __future__ import annotations

from typing import Any

from ..core.config import EngineConfig, FieldSpec
from ..core.types import SearchResult
from ..utils.text import normalize, raw_field_text
from .strategies import FieldText, PreparedQuery, evaluate_field


def field_texts(record: Any, specs: tuple[FieldSpec, ...], cfg: EngineConfig) -> list[FieldText]:
    """Non-empty fields of ``record`` in configuration order."""
    out: list[FieldText] = []
    for spec in specs:
        raw = raw_field_text(record, spec.keys)
        if not raw:
            continue
        out.append(FieldText(raw, normalize(raw), spec, cfg.is_location_field(spec)))
    return out


def score_record(
    record: Any, query: PreparedQuery, cfg: EngineConfig
) -> tuple[SearchResult | None, int]:
    """
    Score one record against a prepared query.

    Each field's cascade score is multiplied by the field weight; the record
    keeps the maximum. A later field must score strictly higher to win, so
    ties go to the earlier-configured field.

    Returns:
        The result (None when nothing matched) and the number of fields evaluated
    """
    best: SearchResult | None = None
    fields = field_texts(record, cfg.search_fields, cfg)
    for ft in fields:
        hit = evaluate_field(query, ft, cfg.strategy_order)
        if hit is None:
            continue
        base, match_type = hit
        weighted = base * ft.spec.weight
        if best is None or weighted > best.score:
            best = SearchResult(
                record=record, score=weighted, match_type=match_type, field_name=ft.spec.name
            )
    return best, len(fields)


def sort_results(results: list[SearchResult]) -> list[SearchResult]:
    """Descending by score; equal scores keep their input order."""
    return sorted(results, key=lambda r: r.score, reverse=True)
