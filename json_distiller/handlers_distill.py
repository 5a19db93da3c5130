from __future__ import annotations

import logging
from typing import Optional

from .config import AppConfig
from .distill import DistillOptions, distill
from .io_utils import dump_json, file_display_name, is_json_filename, read_text_content, write_text_file
from .parsing import loads_strict

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = AppConfig()


def distill_to_text(data, max_per_category: int) -> str:
    return dump_json(distill(data, DistillOptions(max_per_category=max_per_category)))


def handle_distill_upload(file_obj, max_per_category, config: Optional[AppConfig] = None):
    """Load a dropped JSON file and distill it.

    Returns (loaded document, result text, file name, error message).
    Errors clear the result, matching the drop zone's behaviour.
    """
    config = config or _DEFAULT_CONFIG
    if file_obj is None:
        return None, "", "", "No file uploaded"

    name = file_display_name(file_obj)
    if not is_json_filename(name):
        logger.warning("Rejected non-JSON upload %s", name)
        return None, "", "", "Please drop a JSON file"

    try:
        data = loads_strict(read_text_content(file_obj))
    except (OSError, UnicodeDecodeError, ValueError, RecursionError) as exc:
        logger.warning("Invalid JSON file %s: %s", name, exc)
        return None, "", "", "Invalid JSON file"

    samples = config.clamp_samples(max_per_category)
    try:
        result = distill_to_text(data, samples)
    except (ValueError, TypeError, RecursionError):
        logger.exception("Failed to distill %s", name)
        return None, "", "", "Failed to process JSON"

    logger.debug("Distilled %s with %d samples per category", name, samples)
    return {"name": name, "data": data}, result, name, ""


def handle_samples_change(document, max_per_category, result_text, config: Optional[AppConfig] = None):
    """Re-distill the loaded document with a new samples-per-category value."""
    config = config or _DEFAULT_CONFIG
    if not document:
        return result_text, ""

    try:
        return distill_to_text(document["data"], config.clamp_samples(max_per_category)), ""
    except (ValueError, TypeError, RecursionError):
        logger.exception("Failed to re-distill %s", document.get("name"))
        return result_text, "Failed to process JSON"


def handle_distill_reset():
    return None, "", "", "", None


def distilled_file_name(source_name: str) -> str:
    stem = source_name[:-5] if source_name.lower().endswith(".json") else source_name
    return f"{stem or 'output'}.distilled.json"


def export_distilled_handler(result_text, source_name):
    """Save the (possibly hand-edited) distilled text for download."""
    if not result_text or not result_text.strip():
        return None, "Nothing to export."

    try:
        path = write_text_file(result_text, distilled_file_name(source_name or ""))
    except OSError as exc:
        logger.warning("Export failed: %s", exc)
        return None, f"Error during export: {str(exc)}"

    return path, f"Export successful! Saved to {path}"
