from __future__ import annotations

import json
import math
import os
import tempfile
from typing import Any

from .categories import UNDEFINED


def read_text_content(file_obj) -> str:
    """Read text from an uploaded file, a file wrapper or a file path."""
    if file_obj is None:
        raise ValueError("No file uploaded")

    if hasattr(file_obj, 'read'):
        if hasattr(file_obj, 'seek'):
            file_obj.seek(0)
        content = file_obj.read()
        if isinstance(content, bytes):
            content = content.decode('utf-8')
        return content

    path = file_obj.name if hasattr(file_obj, 'name') else file_obj
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def file_display_name(file_obj) -> str:
    path = file_obj.name if hasattr(file_obj, 'name') else file_obj
    return os.path.basename(str(path)) if path else ''


def is_json_filename(name: str) -> bool:
    return bool(name) and str(name).lower().endswith('.json')


def _strip_undefined(value: Any) -> Any:
    # Mirrors how a missing value serializes: dropped from objects, null in arrays.
    # Overflowing number literals (1e400) parse as inf and serialize as null.
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {k: _strip_undefined(v) for k, v in value.items() if v is not UNDEFINED}
    if isinstance(value, list):
        return [None if v is UNDEFINED else _strip_undefined(v) for v in value]
    return value


def dump_json(value: Any) -> str:
    """Pretty-print with 2-space indent, keeping key insertion order."""
    if value is UNDEFINED:
        return ''
    return json.dumps(_strip_undefined(value), indent=2, ensure_ascii=False, allow_nan=False)


def write_text_file(text: str, file_name: str = '') -> str:
    """Write text to a `.json` file in the temp directory and return its path."""
    file_name = (file_name or 'output').strip() or 'output'
    if not file_name.lower().endswith('.json'):
        file_name += '.json'

    path = os.path.join(tempfile.gettempdir(), os.path.basename(file_name))
    with open(path, 'w', encoding='utf-8') as f:
        f.write(text)
    return path


def write_json_file(value: Any, file_name: str = '') -> str:
    return write_text_file(dump_json(value), file_name)
