"""
Scalar and string renderers shared by every attribute family.

These produce the exact text fragments consumed by downstream trace parsers:
booleans are always `true`/`false`, `uint8_t` values are always decimal, and
strings are quoted and capped at `MAX_STRING_LENGTH` characters.
"""

from __future__ import annotations

import enum
from typing import Any

from . import delimiters
from .enums import c_name

MAX_STRING_LENGTH = 60
ELLIPSIS = "..."
NULL_STRING = "NULL"

StringSource = str | bytes | bytearray | memoryview | None


def _is_null(pointer: Any) -> bool:
    if pointer is None:
        return True
    if isinstance(pointer, int):
        return pointer == 0
    # ctypes pointers are falsy when NULL.
    return not bool(pointer)


def decode_c_string(raw: bytes | bytearray | memoryview) -> str:
    """Decode a NUL-terminated byte buffer (bytes after the first NUL are ignored)."""
    data = bytes(raw)
    nul = data.find(b"\x00")
    if nul >= 0:
        data = data[:nul]
    return data.decode("utf-8", errors="replace")


def get_bool_string(value: bool) -> str:
    return "true" if value else "false"


def get_bool_ptr_string(pointer: Any, value: bool) -> str:
    """Render a `bool*` argument together with its dereferenced value, e.g. `[true]`."""
    if _is_null(pointer):
        return NULL_STRING
    return delimiters.surround_with_deref(get_bool_string(value))


def get_uint8_string(value: int) -> str:
    """Render a `uint8_t` as decimal digits (never as a character)."""
    return str(int(value) & 0xFF)


def get_string_string(src: StringSource, truncate: bool = True, surround_with_deref: bool = True) -> str:
    """Quote a string, optionally truncating it to 60 characters and marking it dereferenced.

    Parameters
    ----------
    src:
        The string. `bytes`-like values are treated as a C string (decoded as
        UTF-8 up to the first NUL). `None` renders as `NULL`.
    truncate:
        Cap the visible text at `MAX_STRING_LENGTH` characters, appending
        `...` when the string is longer.
    surround_with_deref:
        Wrap the quoted text in `[...]` to show it is the value behind a pointer.
    """
    if src is None:
        return NULL_STRING
    text = src if isinstance(src, str) else decode_c_string(src)
    if truncate and len(text) > MAX_STRING_LENGTH:
        text = text[:MAX_STRING_LENGTH] + ELLIPSIS
    quoted = f'"{text}"'
    if surround_with_deref:
        return delimiters.surround_with_deref(quoted)
    return quoted


def get_string_ptr_string(
    src: StringSource,
    fallback: StringSource,
    truncate: bool = True,
    surround_with_deref: bool = True,
) -> str:
    """Like `get_string_string`, rendering `fallback` when the source pointer is null."""
    if src is None:
        return get_string_string(fallback, truncate=truncate, surround_with_deref=surround_with_deref)
    return get_string_string(src, truncate=truncate, surround_with_deref=surround_with_deref)


def get_pointer_string(address: int | None) -> str:
    if not address:
        return NULL_STRING
    return f"0x{address:016x}"


def get_hex_string(value: int) -> str:
    return f"0x{value:x}"


def get_enum_string(value: int, enum_type: type[enum.Enum] | None) -> str:
    """Render an enum value by its C name, falling back to the decimal value."""
    if enum_type is None:
        return str(value)
    try:
        member = enum_type(value)
    except ValueError:
        return str(value)
    return c_name(member)


def get_flags_string(value: int, enum_type: type[enum.Enum] | None) -> str:
    """Render a bit mask as `FLAG_A|FLAG_B`; unknown bits are appended in hex."""
    if enum_type is None or value == 0:
        return str(value)
    names: list[str] = []
    remaining = value
    for member in enum_type:
        bit = int(member)
        if bit and value & bit == bit:
            names.append(c_name(member))
            remaining &= ~bit
    if remaining:
        names.append(get_hex_string(remaining))
    return "|".join(names)
