from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def normalize(text: Any) -> str:
    """Lower-case and trim; ``None`` becomes an empty string."""
    if text is None:
        return ""
    if not isinstance(text, str):
        text = str(text)
    return text.strip().lower()


def read_field(record: Any, name: str) -> Any:
    """Read a named field from a mapping or an attribute-bearing object."""
    if record is None:
        return None
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def raw_field_text(record: Any, names: tuple[str, ...]) -> str:
    """
    Return the first non-empty value among ``names`` as stripped text.

    Missing and null values are treated as empty so that the field simply
    contributes nothing.
    """
    for name in names:
        value = read_field(record, name)
        if value is None:
            continue
        text = value if isinstance(value, str) else str(value)
        text = text.strip()
        if text:
            return text
    return ""
