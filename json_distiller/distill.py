from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .categories import UNDEFINED, ValueCategory, classify


@dataclass(frozen=True)
class DistillOptions:
    """Maximum number of samples kept per value category in every array."""

    max_per_category: int = 1

    def __post_init__(self) -> None:
        if isinstance(self.max_per_category, bool) or not isinstance(self.max_per_category, int):
            raise TypeError('max_per_category must be an integer')
        if self.max_per_category < 1:
            raise ValueError('max_per_category must be at least 1')


DEFAULT_OPTIONS = DistillOptions()


def distill(data: Any, options: Optional[DistillOptions] = None) -> Any:
    """Reduce every array in `data` to a few samples per value category.

    Objects keep all their keys, arrays keep the first `max_per_category`
    items of each category in their original relative order, and kept items
    are distilled recursively. Primitives are returned unchanged.

    The input is assumed to be a finite tree; there is no cycle guard and
    nesting depth is bounded by the interpreter's recursion limit.

    Example:
        >>> distill({'users': [None, 1, 2, 'abc', {'name': 'John'}, 4]})
        {'users': [None, 1, 'abc', {'name': 'John'}]}
    """
    if options is None:
        options = DEFAULT_OPTIONS
    return _distill_value(data, options.max_per_category)


def _distill_value(value: Any, limit: int) -> Any:
    if value is None or value is UNDEFINED:
        return value
    if isinstance(value, list):
        return _distill_array(value, limit)
    if isinstance(value, dict):
        return {k: _distill_value(v, limit) for k, v in value.items()}
    return value


def _distill_array(items: List[Any], limit: int) -> List[Any]:
    counts: Dict[ValueCategory, int] = {}
    result: List[Any] = []
    for item in items:
        category = classify(item)
        count = counts.get(category, 0)
        if count < limit:
            result.append(_distill_value(item, limit))
            counts[category] = count + 1
    return result
