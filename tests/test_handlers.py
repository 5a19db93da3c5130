from __future__ import annotations

import io
import json
import os

from json_distiller.config import AppConfig
from json_distiller.fields import FieldMetadata
from json_distiller.handlers_distill import (
    distilled_file_name,
    export_distilled_handler,
    handle_distill_reset,
    handle_distill_upload,
    handle_samples_change,
)
from json_distiller.handlers_editor import (
    export_items_handler,
    handle_editor_focus,
    handle_field_delete,
    handle_field_update,
    handle_item_duplicate,
    handle_json_input,
    items_to_frame,
)


class NamedBytes(io.BytesIO):
    """Stands in for an uploaded file: readable and carrying a name."""

    def __init__(self, data: bytes, name: str):
        super().__init__(data)
        self.name = name


def upload(payload, name: str = "data.json") -> NamedBytes:
    text = payload if isinstance(payload, str) else json.dumps(payload)
    return NamedBytes(text.encode("utf-8"), name)


# --- editor ---

def test_json_input_parses_and_analyzes() -> None:
    items, fields, error = handle_json_input('{"name": "John", "age": 30,}', [], [])
    assert items == [{"name": "John", "age": 30}]
    assert [f.key for f in fields] == ["name", "age"]
    assert error == ""


def test_json_input_invalid_keeps_previous_state() -> None:
    prev_items = [{"a": 1}]
    prev_fields = [FieldMetadata("a", "number", False)]
    items, fields, error = handle_json_input("{bad json", prev_items, prev_fields)
    assert items == prev_items
    assert fields == prev_fields
    assert error == "Invalid JSON format"


def test_json_input_blank_clears() -> None:
    assert handle_json_input("   ", [{"a": 1}], []) == ([], [], "")
    assert handle_json_input(None, [], []) == ([], [], "")


def test_editor_focus_serializes_edits() -> None:
    assert handle_editor_focus("old", [{"a": 1}]) == '[\n  {\n    "a": 1\n  }\n]'
    assert handle_editor_focus("old", []) == "old"


def test_field_handlers() -> None:
    items = [{"name": "John", "age": 30}]
    age = FieldMetadata("age", "number", False)
    assert handle_field_update(0, age, "31", items) == [{"name": "John", "age": 31}]
    assert handle_field_delete(0, "name", items) == [{"age": 30}]
    assert handle_item_duplicate(0, items) == [items[0], items[0]]
    assert items == [{"name": "John", "age": 30}]


def test_items_to_frame() -> None:
    fields = [FieldMetadata("name", "string", False), FieldMetadata("tags", "string", False)]
    frame = items_to_frame([{"name": "a", "tags": ["x"]}, {"name": "b"}, "skipped"], fields)
    assert list(frame.columns) == ["name", "tags"]
    assert frame["name"].tolist() == ["a", "b"]
    assert frame["tags"].tolist()[0] == '["x"]'
    assert len(frame) == 2


def test_export_items() -> None:
    assert export_items_handler([], "x") == (None, "No items to export.")
    path, status = export_items_handler([{"a": 1}], "test_handlers_items")
    try:
        assert status.startswith("Export successful!")
        with open(path, encoding="utf-8") as f:
            assert json.load(f) == [{"a": 1}]
    finally:
        os.remove(path)


# --- distiller ---

def test_distill_upload() -> None:
    document, text, name, error = handle_distill_upload(upload({"tags": ["a", "b", "c"]}), 1)
    assert json.loads(text) == {"tags": ["a"]}
    assert text.startswith('{\n  "tags"')
    assert name == "data.json"
    assert error == ""
    assert document == {"name": "data.json", "data": {"tags": ["a", "b", "c"]}}


def test_distill_upload_clamps_samples() -> None:
    config = AppConfig(max_samples=2)
    _, text, _, _ = handle_distill_upload(upload([1, 2, 3, 4]), 9, config=config)
    assert json.loads(text) == [1, 2]
    _, text, _, _ = handle_distill_upload(upload([1, 2, 3, 4]), 0, config=config)
    assert json.loads(text) == [1]


def test_distill_upload_errors() -> None:
    assert handle_distill_upload(None, 1)[3] == "No file uploaded"
    assert handle_distill_upload(upload([1], name="data.txt"), 1)[3] == "Please drop a JSON file"
    assert handle_distill_upload(upload("{bad"), 1)[3] == "Invalid JSON file"
    # The distiller is strict: no bracket or comma repair.
    assert handle_distill_upload(upload("[1, 2,]"), 1)[3] == "Invalid JSON file"


def test_samples_change_redistills() -> None:
    document = {"name": "data.json", "data": [1, 2, 3, "a", "b"]}
    text, error = handle_samples_change(document, 2, "")
    assert json.loads(text) == [1, 2, "a", "b"]
    assert error == ""
    assert handle_samples_change(None, 2, "previous") == ("previous", "")


def test_reset() -> None:
    assert handle_distill_reset() == (None, "", "", "", None)


def test_export_distilled() -> None:
    assert distilled_file_name("data.json") == "data.distilled.json"
    assert distilled_file_name("") == "output.distilled.json"
    assert export_distilled_handler("  ", "data.json") == (None, "Nothing to export.")

    path, status = export_distilled_handler('[\n  1\n]', "test_handlers.json")
    try:
        assert path.endswith("test_handlers.distilled.json")
        with open(path, encoding="utf-8") as f:
            assert f.read() == '[\n  1\n]'
    finally:
        os.remove(path)


def test_overflowing_number_round_trips_as_null() -> None:
    items, _, error = handle_json_input('[{"x": 1e400}]', [], [])
    assert error == ""
    assert handle_editor_focus("", items) == '[\n  {\n    "x": null\n  }\n]'

    path, status = export_items_handler(items, "test_handlers_overflow")
    try:
        assert status.startswith("Export successful!")
    finally:
        os.remove(path)

    _, text, _, error = handle_distill_upload(upload('[1e400, 2]'), 1)
    assert error == ""
    assert json.loads(text) == [None]


def test_infinite_samples_value_is_clamped() -> None:
    _, text, _, error = handle_distill_upload(upload([1, 2, 3]), float("inf"))
    assert error == ""
    assert json.loads(text) == [1]


def test_focus_write_back_keeps_pasted_fields() -> None:
    items, fields, _ = handle_json_input('[{"a": 1, "b": "x"}, {"a": 2, "b": "y"}]', [], [])
    edited = handle_field_delete(0, "b", items)
    text = handle_editor_focus("", edited)
    items, fields, error = handle_json_input(text, edited, fields)
    assert items == [{"a": 1}, {"a": 2, "b": "y"}]
    assert [f.key for f in fields] == ["a", "b"]
    assert error == ""
