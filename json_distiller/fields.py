from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List

from .categories import is_number

LONG_TEXT_THRESHOLD = 100


@dataclass(frozen=True)
class FieldMetadata:
    key: str
    type: str
    is_long_text: bool


def detect_field_type(value: Any) -> str:
    """Editor type of a value: numbers and booleans, everything else is a string."""
    if isinstance(value, bool):
        return 'boolean'
    if is_number(value):
        return 'number'
    return 'string'


def is_long_text(value: Any) -> bool:
    return isinstance(value, str) and (len(value) > LONG_TEXT_THRESHOLD or '\n' in value)


def analyze(items: Any) -> List[FieldMetadata]:
    """Derive per-key editor metadata from the first item of a JSON array.

    Only the first item is inspected; later items may hold values whose type
    disagrees with the metadata and editors must tolerate that.
    """
    if not isinstance(items, list) or not items:
        return []

    first = items[0]
    if not isinstance(first, dict):
        return []

    return [
        FieldMetadata(key=key, type=detect_field_type(value), is_long_text=is_long_text(value))
        for key, value in first.items()
    ]


def editor_field_order(fields: List[FieldMetadata]) -> List[FieldMetadata]:
    """Numeric fields first (they render side by side), then the rest."""
    numeric = [f for f in fields if f.type == 'number']
    others = [f for f in fields if f.type != 'number']
    return numeric + others
