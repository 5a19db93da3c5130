from __future__ import annotations

import copy
import json
import logging
from typing import Any, Dict, List

import gradio as gr
import pandas as pd

from .categories import UNDEFINED
from .fields import FieldMetadata, analyze
from .io_utils import dump_json, write_json_file
from .items import coerce_field_value, delete_field, duplicate_item, update_field
from .parsing import InvalidJson, parse_array_or_raise

logger = logging.getLogger(__name__)


def handle_json_input(text, items, fields):
    """Parse pasted text into editor items.

    Returns (items, fields, error message). Unrecoverable text keeps the
    previous items and fields; blank text clears the editor.
    """
    if text is None or not text.strip():
        return [], [], ""

    # Text written back from the edited items keeps the fields analyzed at paste time.
    if items and text == dump_json(items):
        return items, fields or analyze(items), ""

    try:
        parsed = parse_array_or_raise(text)
    except InvalidJson as exc:
        logger.warning("Editor input rejected: %s", exc)
        return items or [], fields or [], str(exc)

    logger.debug("Editor loaded %d items", len(parsed))
    return copy.deepcopy(parsed), analyze(parsed), ""


def handle_editor_focus(text, items):
    """Replace the text box content with the edited items, if there are any."""
    if items:
        return dump_json(items)
    return text


def _cell_value(value: Any) -> Any:
    if value is UNDEFINED:
        return None
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return value


def items_to_frame(items: List[Any], fields: List[FieldMetadata]) -> pd.DataFrame:
    """Tabular view of the items, one column per analyzed field."""
    columns = [f.key for f in fields]
    rows: List[Dict[str, Any]] = []
    for item in items or []:
        if not isinstance(item, dict):
            continue
        rows.append({key: _cell_value(item.get(key)) for key in columns})
    return pd.DataFrame(rows, columns=columns)


def refresh_items_table(items, fields):
    return items_to_frame(items or [], fields or [])


def handle_field_update(index: int, field: FieldMetadata, raw, items):
    value = coerce_field_value(field, raw)
    try:
        return update_field(items or [], index, field.key, value)
    except IndexError:
        logger.warning("Ignoring update for missing item %d", index)
        return gr.update()


def handle_field_delete(index: int, key: str, items):
    try:
        return delete_field(items or [], index, key)
    except IndexError:
        logger.warning("Ignoring delete for missing item %d", index)
        return gr.update()


def handle_item_duplicate(index: int, items):
    try:
        return duplicate_item(items or [], index)
    except IndexError:
        logger.warning("Ignoring duplicate for missing item %d", index)
        return gr.update()


def export_items_handler(items, file_name):
    if not items:
        return None, "No items to export."

    name = (file_name or "").strip() or "edited"
    try:
        path = write_json_file(items, name)
    except (OSError, ValueError) as exc:
        logger.warning("Export failed: %s", exc)
        return None, f"Error during export: {str(exc)}"

    return path, f"Export successful! Saved to {path}"
