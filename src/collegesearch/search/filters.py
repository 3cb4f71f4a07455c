"""
Record filters applied before ranking.

A filter mapping restricts which records may appear in a result set. Each
entry is one of:

    {"state": "Delhi"}                        equality
    {"management_type": ["Government", ...]}  membership in a list, tuple or set
    {"established": {"min": 1950, "max": 2000}}  inclusive range, either bound optional

Entries whose value is ``None`` are ignored. A record must pass every entry.
Keys that name a configured field also look through that field's aliases, so
``{"location": "Vellore"}`` matches a record that only has ``city``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..core.config import FieldSpec
from ..utils.error_handling import ErrorCategory, ErrorCollector, ErrorSeverity
from ..utils.text import read_field

RecordFilters = Mapping[str, Any]


def _filter_value(record: Any, key: str, specs: tuple[FieldSpec, ...]) -> Any:
    for spec in specs:
        if spec.name == key:
            for name in spec.keys:
                value = read_field(record, name)
                if value is not None:
                    return value
            return None
    return read_field(record, key)


def _in_range(value: Any, bounds: Mapping[str, Any]) -> bool:
    # Missing or incomparable values never satisfy a range.
    if value is None:
        return False
    low = bounds.get("min")
    high = bounds.get("max")
    try:
        if low is not None and value < low:
            return False
        if high is not None and value > high:
            return False
    except TypeError:
        return False
    return True


def apply_record_filters(
    record: Any, filters: RecordFilters, specs: tuple[FieldSpec, ...] = ()
) -> bool:
    """
    Apply record filters to determine if a record may be ranked.

    Args:
        record: Mapping or attribute-bearing record
        filters: Filter entries keyed by field name
        specs: Field specs used to resolve aliases

    Returns:
        True if the record passes all filters, False otherwise
    """
    for key, expected in filters.items():
        if expected is None:
            continue
        value = _filter_value(record, key, specs)
        if isinstance(expected, Mapping):
            if not _in_range(value, expected):
                return False
        elif isinstance(expected, (list, tuple, set, frozenset)):
            try:
                if value not in expected:
                    return False
            except TypeError:
                return False
        elif value != expected:
            return False
    return True


def validate_filters(filters: Any, errors: ErrorCollector) -> RecordFilters | None:
    """
    Return usable filters, or None after recording a VALIDATION diagnostic.

    Range entries may only use the ``min`` and ``max`` keys.
    """
    if filters is None:
        return None
    if not isinstance(filters, Mapping):
        errors.add_error(
            TypeError(f"Filters must be a mapping, got {type(filters).__name__}"),
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.MEDIUM,
        )
        return None
    for key, expected in filters.items():
        if isinstance(expected, Mapping) and not set(expected) <= {"min", "max"}:
            errors.add_error(
                ValueError(f"Range filter for '{key}' accepts only 'min' and 'max'"),
                category=ErrorCategory.VALIDATION,
                severity=ErrorSeverity.MEDIUM,
                field_name=str(key),
            )
            return None
    return filters
