from __future__ import annotations

from enum import Enum
from typing import Any


class _Undefined:
    """Marker for a value that is present in a structure but undefined.

    JSON itself has no such value; parsing never produces it. It exists so
    callers building structures in code can hold a slot distinct from None.
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'UNDEFINED'

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


UNDEFINED = _Undefined()


class ValueCategory(str, Enum):
    NULL = 'null'
    UNDEFINED = 'undefined'
    NUMBER = 'number'
    STRING = 'string'
    BOOLEAN = 'boolean'
    OBJECT = 'object'
    ARRAY = 'array'
    OTHER = 'other'


def is_number(value: Any) -> bool:
    # bool is an int subclass but never a JSON number
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def classify(value: Any) -> ValueCategory:
    """Assign a JSON value to its category. First match wins."""
    if value is None:
        return ValueCategory.NULL
    if value is UNDEFINED:
        return ValueCategory.UNDEFINED
    if isinstance(value, list):
        return ValueCategory.ARRAY
    if isinstance(value, dict):
        return ValueCategory.OBJECT
    if is_number(value):
        return ValueCategory.NUMBER
    if isinstance(value, str):
        return ValueCategory.STRING
    if isinstance(value, bool):
        return ValueCategory.BOOLEAN
    return ValueCategory.OTHER
