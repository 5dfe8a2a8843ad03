from __future__ import annotations

from typing import Any

LIST_START = "{"
LIST_END = "}"
STRUCT_START = "{"
STRUCT_END = "}"
PTR_DEREF_START = "["
PTR_DEREF_END = "]"


def surround_with(value: Any, begin: str, end: str) -> str:
    """Return `str(value)` placed between `begin` and `end`."""
    return f"{begin}{value}{end}"


def surround_with_deref(value: Any) -> str:
    """Mark `value` as the pointed-to value of a pointer: `[value]`."""
    return surround_with(value, PTR_DEREF_START, PTR_DEREF_END)


def surround_with_struct(value: Any) -> str:
    return surround_with(value, STRUCT_START, STRUCT_END)


def surround_with_list(value: Any) -> str:
    return surround_with(value, LIST_START, LIST_END)
