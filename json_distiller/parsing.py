from __future__ import annotations

import json
import logging
import re
from typing import Any, List, Optional

logger = logging.getLogger(__name__)

# A comma followed (after optional whitespace) by a closing brace or bracket.
# Purely textual: commas inside string literals are rewritten too.
_TRAILING_COMMA_RE = re.compile(r',(\s*[}\]])')


class InvalidJson(ValueError):
    """No JSON array could be recovered from the input text."""


def _reject_constant(name: str):
    raise ValueError(f"Invalid JSON constant: {name}")


def loads_strict(text: str) -> Any:
    """Parse standard JSON only (NaN and Infinity are rejected)."""
    return json.loads(text, parse_constant=_reject_constant)


def repair_json_text(text: str) -> str:
    """Apply the fixed set of textual repairs to an array candidate.

    - wrap with '[' / ']' when the trimmed text lacks them
    - drop commas directly before a closing '}' or ']'
    """
    cleaned = text.strip()
    if not cleaned.startswith('['):
        cleaned = '[' + cleaned
    if not cleaned.endswith(']'):
        cleaned = cleaned + ']'
    return _TRAILING_COMMA_RE.sub(r'\1', cleaned)


def _try_parse_array(text: str) -> Optional[List[Any]]:
    try:
        parsed = loads_strict(text)
    except (ValueError, RecursionError):
        return None
    return parsed if isinstance(parsed, list) else None


def parse_array(text: str) -> Optional[List[Any]]:
    """Parse text expected to hold a JSON array, repairing it once on failure.

    Returns the parsed list, or None when neither the verbatim text nor its
    repaired form is a JSON array.

    Example:
        >>> parse_array('{"name": "John",}')
        [{'name': 'John'}]
    """
    if not isinstance(text, str):
        return None

    parsed = _try_parse_array(text)
    if parsed is not None:
        return parsed

    repaired = repair_json_text(text)
    parsed = _try_parse_array(repaired)
    if parsed is None:
        logger.debug("Could not recover a JSON array (%d chars)", len(text))
        return None

    logger.debug("Recovered JSON array after repair (%d items)", len(parsed))
    return parsed


def parse_array_or_raise(text: str) -> List[Any]:
    parsed = parse_array(text)
    if parsed is None:
        raise InvalidJson("Invalid JSON format")
    return parsed
