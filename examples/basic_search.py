#!/usr/bin/env python3
"""
Example: Basic Search

Demonstrates:
- Ranked search over in-memory records
- Per-call strategy switches
- Record filters and result caps
- Regex queries and their diagnostics
- Output formats (TEXT, JSON)
- Autocomplete suggestions
- Cancellation from another thread
"""

from __future__ import annotations

import threading

from collegesearch import CollegeSearch, EngineConfig, SearchOptions
from collegesearch.core.types import OutputFormat
from collegesearch.utils.formatter import format_outcome, format_suggestions

RECORDS = [
    {"name": "AIIMS Delhi", "location": "New Delhi", "state": "Delhi", "type": "Medical",
     "management_type": "Government"},
    {"name": "JIPMER Puducherry", "location": "Puducherry", "state": "Puducherry",
     "type": "Medical", "management_type": "Government"},
    {"name": "Grant Medical College", "location": "Bombay", "state": "Maharashtra",
     "type": "Medical", "management_type": "Government"},
    {"name": "Madras Medical College", "location": "Chennai", "state": "Tamil Nadu",
     "type": "Medical", "management_type": "Government"},
    {"name": "Manipal Institute of Technology", "location": "Manipal", "state": "Karnataka",
     "type": "Engineering", "management_type": "Deemed"},
]


# ---------------------------------------------------------------------------
# Helper: print a section header
# ---------------------------------------------------------------------------


def section(title: str) -> None:
    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print(f"{'=' * 60}\n")


# ---------------------------------------------------------------------------
# 1. Ranked search
# ---------------------------------------------------------------------------


def demo_basic_search(engine: CollegeSearch) -> None:
    section("1. Basic Search")

    for query in ["delhi", "manipul", "bombay", "govt"]:
        results = engine.search(query, RECORDS)
        print(f"{query!r}: {len(results)} results")
        for r in results[:3]:
            print(f"  {r.score:8.2f}  {r.match_type.value:<16} {r.record['name']} ({r.field_name})")


# ---------------------------------------------------------------------------
# 2. Strategy switches
# ---------------------------------------------------------------------------


def demo_strict_options(engine: CollegeSearch) -> None:
    """Exact, contains and word start only."""
    section("2. Strict Matching")

    loose = engine.search("manipul", RECORDS)
    strict = engine.search("manipul", RECORDS, SearchOptions.none())
    print(f"Default options: {len(loose)} results, strict options: {len(strict)} results")


# ---------------------------------------------------------------------------
# 2b. Filters and caps
# ---------------------------------------------------------------------------


def demo_filters(engine: CollegeSearch) -> None:
    section("2b. Filters")

    outcome = engine.run(
        "medical",
        RECORDS,
        filters={"management_type": "Government", "state": ["Delhi", "Tamil Nadu"]},
        max_results=1,
    )
    print(f"{outcome.stats.records_matched} matches, showing {len(outcome.results)}:")
    for r in outcome.results:
        print(f"  {r.score:8.2f}  {r.record['name']}")


# ---------------------------------------------------------------------------
# 3. Regex queries and diagnostics
# ---------------------------------------------------------------------------


def demo_regex(engine: CollegeSearch) -> None:
    section("3. Regex Queries")

    options = SearchOptions(use_regex=True)
    outcome = engine.run("/^(grant|madras)\\s/", RECORDS, options)
    for r in outcome.results:
        print(f"  {r.match_type.value:<8} {r.record['name']}")

    broken = engine.run("/[/", RECORDS, options)
    print(f"\nMalformed pattern: {len(broken.results)} results, {len(broken.errors)} diagnostics")
    print(CollegeSearch.error_report(broken))


# ---------------------------------------------------------------------------
# 4. Output formats
# ---------------------------------------------------------------------------


def demo_output_formats(engine: CollegeSearch) -> None:
    section("4. Output Formats")

    outcome = engine.run("medical", RECORDS)
    print(format_outcome(outcome, OutputFormat.TEXT, query="medical"))
    print()
    print(format_outcome(outcome, OutputFormat.JSON)[:400], "...")


# ---------------------------------------------------------------------------
# 5. Suggestions
# ---------------------------------------------------------------------------


def demo_suggestions(engine: CollegeSearch) -> None:
    section("5. Suggestions")

    for query in ["aii", "mad", "jmr"]:
        print(f"{query!r}:")
        print(format_suggestions(engine.suggest(query, RECORDS, max_suggestions=4), OutputFormat.TEXT))


# ---------------------------------------------------------------------------
# 6. Parallel scoring and cancellation
# ---------------------------------------------------------------------------


def demo_cancellation() -> None:
    section("6. Parallel Scoring and Cancellation")

    engine = CollegeSearch(EngineConfig(parallel=True, workers=4, batch_size=100))
    records = RECORDS * 2000

    outcome = engine.run("medical", records)
    s = outcome.stats
    print(f"Scanned {s.records_scanned} records in {s.batches_total} batches, {s.elapsed_ms:.1f}ms")

    cancel = threading.Event()
    cancel.set()
    outcome = engine.run("medical", records, cancel=cancel)
    print(f"Cancelled: {outcome.stats.cancelled}, batches completed: {outcome.stats.batches_completed}")


def main() -> None:
    engine = CollegeSearch()

    demo_basic_search(engine)
    demo_strict_options(engine)
    demo_filters(engine)
    demo_regex(engine)
    demo_output_formats(engine)
    demo_suggestions(engine)
    demo_cancellation()


if __name__ == "__main__":
    main()
