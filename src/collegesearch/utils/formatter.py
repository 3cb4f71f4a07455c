"""
Output formatting module for collegesearch.

This module handles rendering of search outcomes and suggestions in the
supported output formats. It is shared by the CLI and by API callers that
want a printable form of a result set.

Key Functions:
    format_outcome: Main entry point for formatting a search outcome
    format_suggestions: Format an autocomplete list
    to_json_bytes: Fast JSON serialization using orjson
    format_text: Plain text table with optional match markers
    format_stats: One-line statistics summary
    render_results_console: Rich table output for interactive terminals

Supported Output Formats:
    - TEXT: Plain text, one result per line
    - JSON: Structured JSON for programmatic processing
    - HIGHLIGHT: Rich console table with the matched text emphasised

Example:
    >>> from collegesearch.utils.formatter import format_outcome
    >>> from collegesearch.core.types import OutputFormat
    >>>
    >>> print(format_outcome(outcome, OutputFormat.TEXT))
    >>> payload = format_outcome(outcome, OutputFormat.JSON)
"""

from __future__ import annotations

import dataclasses
import sys
from collections.abc import Mapping
from typing import Any

import orjson
import regex as regex_mod
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..core.types import OutputFormat, SearchOutcome, SearchStats, Suggestion
from .error_handling import create_error_report
from .text import raw_field_text

_NAME_KEYS = ("name", "college_name")


def _record_payload(record: Any) -> Any:
    if isinstance(record, Mapping):
        return dict(record)
    if dataclasses.is_dataclass(record) and not isinstance(record, type):
        return dataclasses.asdict(record)
    if hasattr(record, "__dict__"):
        return {k: v for k, v in vars(record).items() if not k.startswith("_")}
    return str(record)


def _record_label(record: Any) -> str:
    return raw_field_text(record, _NAME_KEYS) or "<unnamed>"


def _winning_text(record: Any, field_name: str | None) -> str:
    if not field_name:
        return ""
    return raw_field_text(record, (field_name,))


def highlight_query(text: str, query: str, marker_left: str = "[[", marker_right: str = "]]") -> str:
    """Wrap case-insensitive occurrences of ``query`` in ``text`` with markers."""
    query = query.strip()
    if not query or not text:
        return text
    pattern = regex_mod.compile(regex_mod.escape(query), regex_mod.IGNORECASE)
    return pattern.sub(lambda m: f"{marker_left}{m.group(0)}{marker_right}", text)


def _stats_dict(stats: SearchStats) -> dict[str, Any]:
    return dataclasses.asdict(stats)


def to_json_bytes(outcome: SearchOutcome, include_errors: bool = False) -> bytes:
    """
    Convert a search outcome to JSON bytes using orjson.

    Records are emitted as plain objects; mappings and dataclasses are
    converted directly, other objects through their public attributes.
    """
    payload: dict[str, Any] = {
        "results": [
            {
                "score": r.score,
                "match_type": r.match_type.value,
                "field": r.field_name,
                "record": _record_payload(r.record),
            }
            for r in outcome.results
        ],
        "stats": _stats_dict(outcome.stats),
    }
    if include_errors:
        payload["errors"] = {
            "summary": outcome.errors.get_summary(),
            "items": [
                {
                    "category": e.category.value,
                    "severity": e.severity.value,
                    "message": e.message,
                    "field": e.field_name,
                }
                for e in outcome.errors.errors
            ],
        }
    return orjson.dumps(payload, option=orjson.OPT_INDENT_2, default=str)


def format_stats(stats: SearchStats) -> str:
    """One-line `# key=value` summary of a call's statistics."""
    return (
        f"# records_scanned={stats.records_scanned} records_matched={stats.records_matched} "
        f"fields={stats.fields_evaluated} batches={stats.batches_completed}/{stats.batches_total} "
        f"elapsed_ms={stats.elapsed_ms:.2f}" + (" cancelled" if stats.cancelled else "")
    )


def format_text(
    outcome: SearchOutcome, query: str = "", highlight: bool = False, include_stats: bool = True
) -> str:
    out: list[str] = []
    for rank, r in enumerate(outcome.results, start=1):
        matched = _winning_text(r.record, r.field_name)
        if highlight:
            matched = highlight_query(matched, query)
        out.append(
            f"{rank:4d}. {r.score:9.2f}  {r.match_type.value:<16} "
            f"{_record_label(r.record)}  [{r.field_name}: {matched}]"
        )
    if include_stats:
        out.append(format_stats(outcome.stats))
    return "\n".join(out)


def render_results_console(
    outcome: SearchOutcome,
    query: str = "",
    console: Console | None = None,
    include_stats: bool = True,
) -> None:
    """Render search results as a rich table."""
    if console is None:
        console = Console()
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Score", justify="right")
    table.add_column("Match")
    table.add_column("College")
    table.add_column("Field")

    for rank, r in enumerate(outcome.results, start=1):
        matched = Text(_winning_text(r.record, r.field_name))
        if query.strip():
            matched.highlight_words([query.strip()], style="bold yellow", case_sensitive=False)
        table.add_row(
            str(rank),
            f"{r.score:.2f}",
            r.match_type.value,
            _record_label(r.record),
            Text.assemble(f"{r.field_name}: ", matched),
        )

    console.print(table)
    if not include_stats:
        return
    s = outcome.stats
    console.print(
        f"[dim]records_scanned={s.records_scanned} records_matched={s.records_matched} "
        f"elapsed_ms={s.elapsed_ms:.2f}{' cancelled' if s.cancelled else ''}[/dim]"
    )


def format_outcome(
    outcome: SearchOutcome,
    fmt: OutputFormat,
    query: str = "",
    show_errors: bool = False,
    include_stats: bool = True,
) -> str:
    """
    Format a search outcome according to the specified output format.

    ``include_stats`` controls the trailing statistics line of the text and
    highlight formats; JSON always carries a ``stats`` object.
    """
    if fmt == OutputFormat.JSON:
        return to_json_bytes(outcome, include_errors=show_errors).decode("utf-8")
    if fmt == OutputFormat.HIGHLIGHT:
        # Rich rendering only when stdout is a real terminal
        if sys.stdout.isatty():
            render_results_console(outcome, query, include_stats=include_stats)
            text = ""
        else:
            text = format_text(outcome, query, highlight=True, include_stats=include_stats)
    else:
        text = format_text(outcome, query, highlight=False, include_stats=include_stats)
    if show_errors:
        report = create_error_report(outcome.errors)
        text = f"{text}\n\n{report}" if text else report
    return text


def format_suggestions(suggestions: list[Suggestion], fmt: OutputFormat) -> str:
    """Format an autocomplete list."""
    if fmt == OutputFormat.JSON:
        payload = [
            {
                "text": s.text,
                "type": s.type,
                "score": s.score,
                "match_type": s.match_type.value,
            }
            for s in suggestions
        ]
        return orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode("utf-8")
    if fmt == OutputFormat.HIGHLIGHT and sys.stdout.isatty():
        table = Table(show_header=True, header_style="bold")
        table.add_column("Suggestion")
        table.add_column("Type")
        table.add_column("Score", justify="right")
        table.add_column("Match")
        for s in suggestions:
            table.add_row(s.text, s.type, f"{s.score:.2f}", s.match_type.value)
        Console().print(table)
        return ""
    return "\n".join(
        f"{s.score:9.2f}  {s.type:<12} {s.text}  ({s.match_type.value})" for s in suggestions
    )
