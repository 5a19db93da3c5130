from __future__ import annotations

import json
import math
from typing import Any, Dict, List

from .fields import FieldMetadata

JsonItem = Dict[str, Any]


def _check_index(items: List[JsonItem], index: int) -> None:
    if not 0 <= index < len(items):
        raise IndexError(f"Item index {index} out of range for {len(items)} items")


def update_field(items: List[JsonItem], index: int, key: str, value: Any) -> List[JsonItem]:
    """Return a new list where item `index` has `key` set to `value`."""
    _check_index(items, index)
    updated = list(items)
    item = dict(updated[index])
    item[key] = value
    updated[index] = item
    return updated


def delete_field(items: List[JsonItem], index: int, key: str) -> List[JsonItem]:
    _check_index(items, index)
    updated = list(items)
    updated[index] = {k: v for k, v in updated[index].items() if k != key}
    return updated


def duplicate_item(items: List[JsonItem], index: int) -> List[JsonItem]:
    """Insert a shallow copy of item `index` right after it."""
    _check_index(items, index)
    updated = list(items)
    updated.insert(index + 1, dict(updated[index]))
    return updated


def _parse_number(raw: Any) -> Any:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        if not math.isfinite(raw):
            return None
        return int(raw) if raw.is_integer() else raw
    text = str(raw).strip() if raw is not None else ''
    if '_' in text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _parse_boolean(raw: Any) -> Any:
    if isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if text == 'true':
        return True
    if text == 'false':
        return False
    return raw


def coerce_field_value(field: FieldMetadata, raw: Any) -> Any:
    """Convert raw editor input to the value stored for `field`.

    Unparseable numbers become None, which is how a NaN is serialized.
    Booleans accept 'true'/'false' text and otherwise keep the raw input.
    """
    if field.type == 'number':
        return _parse_number(raw)
    if field.type == 'boolean':
        return _parse_boolean(raw)
    return raw


def display_value(value: Any) -> str:
    """Text shown in an editor input for a stored value."""
    if isinstance(value, str):
        return value
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)
