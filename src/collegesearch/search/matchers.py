"""
Pattern matching module for collegesearch.

This module handles the two pattern-driven strategies: shell-style wildcards
(``*`` and ``?``) and user regular expressions written as ``/pattern/``.
Both are compiled with the ``regex`` engine through a small LRU cache and
evaluated case-insensitively without anchors.

Functions:
    has_wildcards: Whether a query contains ``*`` or ``?``
    wildcard_to_regex: Translate a wildcard pattern to regex source
    wildcard_match: One-shot wildcard test
    extract_regex_pattern: Pull the body out of a ``/.../`` query
    compile_user_pattern: Compile a user regex, recording failures
    regex_match: One-shot regex test that never raises

Failure model:
    A pattern that does not compile is not an error for the caller. It is
    recorded as a LOW-severity ``PatternError`` in the call's
    ``ErrorCollector``, logged once, and simply never matches. Evaluation of a
    compiled pattern is bounded by a timeout; a timeout is recorded the same
    way and the field gets no match.

Example:
    >>> from collegesearch.search.matchers import wildcard_match, regex_match
    >>> wildcard_match("iit*", "IIT Bombay")
    True
    >>> regex_match("^aiims", "AIIMS Delhi")
    True
    >>> regex_match("[", "anything")
    False
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

import regex as regex_mod  # better regex engine, supports timeouts

from ..utils.error_handling import (
    ErrorCollector,
    PatternTimeoutError,
    handle_pattern_error,
)

_FLAGS = regex_mod.IGNORECASE


@lru_cache(maxsize=64)
def _get_compiled_regex(pattern: str, flags: int) -> regex_mod.Pattern:
    return regex_mod.compile(pattern, flags=flags)


def has_wildcards(query: str) -> bool:
    return "*" in query or "?" in query


def wildcard_to_regex(pattern: str) -> str:
    """
    Translate ``*`` to ``.*`` and ``?`` to ``.``; a whitespace run becomes
    ``\\s+``. Everything else is matched literally.
    """
    out: list[str] = []
    in_space = False
    for ch in pattern:
        if ch.isspace():
            if not in_space:
                out.append(r"\s+")
            in_space = True
            continue
        in_space = False
        if ch == "*":
            out.append(".*")
        elif ch == "?":
            out.append(".")
        else:
            out.append(regex_mod.escape(ch))
    return "".join(out)


def compile_wildcard(pattern: str) -> regex_mod.Pattern:
    return _get_compiled_regex(wildcard_to_regex(pattern), _FLAGS)


def wildcard_match(pattern: str, text: str, timeout: float | None = None) -> bool:
    return search_compiled(compile_wildcard(pattern), text, timeout=timeout)


def extract_regex_pattern(query: str) -> str | None:
    """Return the body of a ``/body/`` query, or None when it is not one."""
    if len(query) >= 3 and query.startswith("/") and query.endswith("/"):
        return query[1:-1]
    return None


def compile_user_pattern(
    pattern: str,
    error_collector: ErrorCollector | None = None,
    logger: Any | None = None,
) -> regex_mod.Pattern | None:
    """
    Compile a user regex case-insensitively.

    Returns None when the pattern is malformed, after recording a
    ``PatternError`` and logging a warning.
    """
    try:
        return _get_compiled_regex(pattern, _FLAGS)
    except regex_mod.error as e:
        handle_pattern_error(pattern, e, error_collector=error_collector, logger=logger)
        return None


def search_compiled(
    compiled: regex_mod.Pattern,
    text: str,
    timeout: float | None = None,
    field_name: str | None = None,
    error_collector: ErrorCollector | None = None,
    logger: Any | None = None,
) -> bool:
    """Search ``text`` with a bounded running time; a timeout is no match."""
    try:
        return compiled.search(text, timeout=timeout) is not None
    except TimeoutError as e:
        error = PatternTimeoutError(
            f"Pattern '{compiled.pattern}' timed out after {timeout}s",
            pattern=compiled.pattern,
            field_name=field_name,
        )
        if error_collector is not None:
            error_collector.add_error(error)
        if logger is not None:
            logger.log_pattern_timeout(compiled.pattern, timeout, field_name=field_name, error=str(e))
        return False


def regex_match(
    pattern: str,
    text: str,
    timeout: float | None = None,
    error_collector: ErrorCollector | None = None,
    logger: Any | None = None,
) -> bool:
    """Case-insensitive regex search that returns False instead of raising."""
    compiled = compile_user_pattern(pattern, error_collector=error_collector, logger=logger)
    if compiled is None:
        return False
    return search_compiled(
        compiled, text, timeout=timeout, error_collector=error_collector, logger=logger
    )
