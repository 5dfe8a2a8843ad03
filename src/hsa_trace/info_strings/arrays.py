from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TypeVar

from .delimiters import surround_with_list

T = TypeVar("T")

# Part of the trace wire format: at most three items, then an ellipsis.
MAX_ITEMS_TO_OUTPUT = 3


def get_array_string(
    items: Sequence[T] | None,
    num_items: int,
    format_func: Callable[[T], str] | None,
) -> str:
    """Render up to three items of an array as `{a,b,c}`, or `{a,b,c,...}` when longer.

    Returns an empty string when `items` or `format_func` is missing.
    """
    if items is None or format_func is None:
        return ""

    truncated = num_items > MAX_ITEMS_TO_OUTPUT
    num_to_output = min(num_items, MAX_ITEMS_TO_OUTPUT, len(items))

    parts = [format_func(items[i]) for i in range(num_to_output)]
    if truncated:
        parts.append("...")
    return surround_with_list(",".join(parts))
