"""
Command-line interface for collegesearch.

This module provides the CLI commands for searching and autocompleting over a
JSON file of college records. It is a thin harness around ``CollegeSearch``:
it loads records, maps flags onto ``SearchOptions`` / ``EngineConfig`` and
prints the formatted outcome.

Main Commands:
    find: Rank records against a query
    suggest: Autocomplete suggestions for a partial query

Example Usage:
    Basic search:
        $ collegesearch find "delhi" --records colleges.json

    Regex search as JSON with diagnostics:
        $ collegesearch find "/^govt/" --regex --records colleges.json \\
          --format json --show-errors

    Strict matching, parallel scoring:
        $ collegesearch find "aiims" --records colleges.json --no-fuzzy \\
          --no-phonetic --no-semantic --parallel --workers 4 --stats

    Filtered, best five only:
        $ collegesearch find "medical" --records colleges.json \\
          --filter state=Delhi --filter type=Medical --limit 5

    Suggestions:
        $ collegesearch suggest "aii" --records colleges.json --max 5

For more information, run: collegesearch find --help
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import click
import orjson

from ..core.api import CollegeSearch
from ..core.config import EngineConfig
from ..core.types import OutputFormat, SearchOptions
from ..utils.error_handling import SearchError, create_error_report
from ..utils.formatter import format_outcome, format_stats, format_suggestions
from ..utils.logging_config import LogFormat, LogLevel, configure_logging


def load_records(path: Path) -> list[Any]:
    """Read a JSON array of record objects."""
    try:
        payload = orjson.loads(path.read_bytes())
    except OSError as e:
        raise click.ClickException(f"Cannot read records file {path}: {e}") from e
    except orjson.JSONDecodeError as e:
        raise click.ClickException(f"Records file {path} is not valid JSON: {e}") from e

    if not isinstance(payload, list) or not all(isinstance(item, dict) for item in payload):
        raise click.ClickException(f"Records file {path} must contain a JSON array of objects")
    return payload


def _setup_logging(debug: bool, log_level: str, log_format: str, log_file: str | None) -> None:
    if debug:
        log_level = "DEBUG"
    try:
        configure_logging(
            level=LogLevel(log_level),
            format_type=LogFormat(log_format),
            log_file=Path(log_file) if log_file else None,
            enable_file=bool(log_file),
            enable_console=True,
        )
    except ValueError as e:
        click.echo(f"Error configuring logging: {e}", err=True)
        sys.exit(1)


def parse_filters(values: tuple[str, ...]) -> dict[str, Any]:
    """
    Turn repeated ``KEY=VALUE`` options into a filter mapping.

    Repeating a key builds a membership list.
    """
    filters: dict[str, Any] = {}
    for item in values:
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {item!r}", param_hint="--filter")
        if key not in filters:
            filters[key] = value
        elif isinstance(filters[key], list):
            filters[key].append(value)
        else:
            filters[key] = [filters[key], value]
    return filters


def _build_engine(config: EngineConfig) -> CollegeSearch:
    try:
        return CollegeSearch(config)
    except SearchError as e:
        click.echo(f"Error: {e.message}", err=True)
        for suggestion in e.suggestions:
            click.echo(f"  - {suggestion}", err=True)
        sys.exit(1)


def _logging_options(func: Any) -> Any:
    func = click.option(
        "--log-format",
        type=click.Choice(["simple", "detailed", "json", "structured"]),
        default="simple",
        help="Log format",
    )(func)
    func = click.option("--log-file", help="Write logs to this file as well")(func)
    func = click.option(
        "--log-level",
        type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
        default="WARNING",
        help="Log level",
    )(func)
    func = click.option("--debug", is_flag=True, default=False, help="Enable debug logging")(func)
    return func


@click.group()
@click.version_option(package_name="collegesearch", prog_name="collegesearch")
def cli() -> None:
    """collegesearch - Multi-strategy search over college records"""
    pass


@cli.command("find")
@click.argument("query")
@click.option(
    "--records",
    "records_path",
    required=True,
    type=click.Path(path_type=Path, dir_okay=False),
    help="JSON array of college records",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice([f.value for f in OutputFormat]),
    default=OutputFormat.TEXT.value,
    help="Output format",
)
@click.option("--no-fuzzy", is_flag=True, default=False, help="Disable edit-distance matching")
@click.option("--no-phonetic", is_flag=True, default=False, help="Disable Soundex/Metaphone")
@click.option("--no-wildcard", is_flag=True, default=False, help="Disable * and ? patterns")
@click.option("--regex", is_flag=True, default=False, help="Treat /pattern/ queries as regex")
@click.option("--no-synonyms", is_flag=True, default=False, help="Disable synonym expansion")
@click.option("--no-location", is_flag=True, default=False, help="Disable location aliases")
@click.option("--no-semantic", is_flag=True, default=False, help="Disable semantic similarity")
@click.option("--fuzzy-threshold", type=click.IntRange(min=0), default=3, help="Max edit distance")
@click.option(
    "--semantic-threshold",
    type=click.FloatRange(0.0, 1.0),
    default=0.3,
    help="Minimum semantic similarity (0.0-1.0)",
)
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Show at most N results")
@click.option(
    "--filter",
    "filter_values",
    multiple=True,
    metavar="KEY=VALUE",
    help="Keep only records whose KEY equals VALUE (repeat a key for any-of)",
)
@click.option(
    "--synonyms",
    "synonyms_path",
    type=click.Path(path_type=Path, dir_okay=False),
    help="Custom synonym dictionary (JSON)",
)
@click.option(
    "--locations",
    "locations_path",
    type=click.Path(path_type=Path, dir_okay=False),
    help="Custom location dictionary (JSON)",
)
@click.option("--parallel", is_flag=True, default=False, help="Score batches on a thread pool")
@click.option("--workers", type=click.IntRange(min=0), default=0, help="Worker threads (0 = auto)")
@click.option("--stats", is_flag=True, default=False, help="Print statistics to stderr")
@click.option("--show-errors", is_flag=True, default=False, help="Show the diagnostics report")
@_logging_options
def find_cmd(
    query: str,
    records_path: Path,
    fmt: str,
    no_fuzzy: bool,
    no_phonetic: bool,
    no_wildcard: bool,
    regex: bool,
    no_synonyms: bool,
    no_location: bool,
    no_semantic: bool,
    fuzzy_threshold: int,
    semantic_threshold: float,
    limit: int | None,
    filter_values: tuple[str, ...],
    synonyms_path: Path | None,
    locations_path: Path | None,
    parallel: bool,
    workers: int,
    stats: bool,
    show_errors: bool,
    debug: bool,
    log_level: str,
    log_file: str | None,
    log_format: str,
) -> None:
    """Rank records against QUERY."""
    _setup_logging(debug, log_level, log_format, log_file)
    filters = parse_filters(filter_values)
    records = load_records(records_path)

    engine = _build_engine(
        EngineConfig(
            parallel=parallel,
            workers=workers,
            synonyms_path=synonyms_path,
            locations_path=locations_path,
        )
    )
    options = SearchOptions(
        use_fuzzy=not no_fuzzy,
        use_phonetic=not no_phonetic,
        use_wildcard=not no_wildcard,
        use_regex=regex,
        use_synonyms=not no_synonyms,
        use_location=not no_location,
        use_semantic=not no_semantic,
        fuzzy_threshold=fuzzy_threshold,
        semantic_threshold=semantic_threshold,
    )

    outcome = engine.run(query, records, options, filters=filters or None, max_results=limit)

    output_format = OutputFormat(fmt)
    text = format_outcome(
        outcome,
        output_format,
        query=query,
        show_errors=show_errors and output_format == OutputFormat.JSON,
        include_stats=False,
    )
    if text:
        sys.stdout.write(text)
        sys.stdout.write("\n")

    if stats:
        sys.stderr.write(format_stats(outcome.stats) + "\n")

    if show_errors and output_format != OutputFormat.JSON and len(outcome.errors) > 0:
        click.echo("\n" + "=" * 50, err=True)
        click.echo("ERROR REPORT", err=True)
        click.echo("=" * 50, err=True)
        click.echo(create_error_report(outcome.errors), err=True)


@cli.command("suggest")
@click.argument("query")
@click.option(
    "--records",
    "records_path",
    required=True,
    type=click.Path(path_type=Path, dir_okay=False),
    help="JSON array of college records",
)
@click.option("--max", "max_suggestions", type=click.IntRange(min=1), default=None,
              help="Maximum number of suggestions (default 8)")
@click.option(
    "--format",
    "fmt",
    type=click.Choice([f.value for f in OutputFormat]),
    default=OutputFormat.TEXT.value,
    help="Output format",
)
@_logging_options
def suggest_cmd(
    query: str,
    records_path: Path,
    max_suggestions: int | None,
    fmt: str,
    debug: bool,
    log_level: str,
    log_file: str | None,
    log_format: str,
) -> None:
    """Autocomplete suggestions for QUERY."""
    _setup_logging(debug, log_level, log_format, log_file)
    records = load_records(records_path)
    engine = _build_engine(EngineConfig())

    suggestions = engine.suggest(query, records, max_suggestions)
    text = format_suggestions(suggestions, OutputFormat(fmt))
    if text:
        sys.stdout.write(text)
        sys.stdout.write("\n")


def main() -> None:
    cli(prog_name="collegesearch")


if __name__ == "__main__":
    main()
