"""Core logic for JSON Distiller and Editor.

The Gradio UI lives in `app.py`. This package contains pure functions that:
- parse (and leniently repair) pasted JSON arrays
- classify values and distill arrays to a few samples per category
- analyze fields for the item editor
- apply item edits and serialize the result
"""
