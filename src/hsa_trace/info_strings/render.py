"""
Render filled `*_get_info` payload buffers as trace text.

`render()` never raises: a failed query, an unknown attribute, a missing
payload or a payload that cannot be decoded each produce a fixed marker
string, so the tracer can always emit a line for the intercepted call.

Payloads are any buffer-protocol object (`bytes`, `bytearray`, `memoryview`,
ctypes arrays/structures) holding the bytes the runtime wrote, in native byte
order.
"""

from __future__ import annotations

import ctypes
import logging
import struct
from collections.abc import Callable
from typing import Any

from .arrays import get_array_string
from .delimiters import surround_with_struct
from .enums import HsaStatus
from .model import SCALAR_FORMATS, AttributeDescriptor, Encoding, KindFamily, QueryResult, StructField
from .scalars import (
    NULL_STRING,
    get_bool_string,
    get_enum_string,
    get_flags_string,
    get_hex_string,
    get_pointer_string,
    get_string_string,
    get_uint8_string,
)
from .schema import DEFAULT_SCHEMA, Schema, lookup

logger = logging.getLogger(__name__)

QUERY_FAILED_MARKER = "<query failed>"
UNSUPPORTED_ATTRIBUTE_MARKER = "<unsupported attribute>"
INVALID_PAYLOAD_MARKER = "<invalid payload>"
NULL_MARKER = NULL_STRING

CStringReader = Callable[[int], bytes]


def read_c_string(address: int) -> bytes:
    """Read the NUL-terminated string at `address` in this process."""
    return ctypes.string_at(address)


def _unpack(encoding: Encoding, data: bytes, offset: int = 0) -> Any:
    return struct.unpack_from("=" + SCALAR_FORMATS[encoding], data, offset)[0]


def format_scalar(encoding: Encoding, value: Any, enum_type: Any = None, hex: bool = False) -> str:
    if encoding is Encoding.BOOL:
        return get_bool_string(value)
    if encoding is Encoding.UINT8:
        return get_uint8_string(value)
    if encoding in (Encoding.UINT16, Encoding.UINT32, Encoding.UINT64):
        return get_hex_string(value) if hex else str(value)
    if encoding is Encoding.ENUM:
        return get_enum_string(value, enum_type)
    if encoding is Encoding.FLAGS:
        return get_flags_string(value, enum_type)
    if encoding is Encoding.POINTER:
        return get_pointer_string(value)
    if encoding is Encoding.HANDLE:
        return surround_with_struct(f"handle={get_hex_string(value)}")
    raise ValueError(f"Not a scalar encoding: {encoding}")


def _format_struct(fields: tuple[StructField, ...], data: bytes, base: int) -> str:
    parts = [
        f"{f.name}={format_scalar(f.encoding, _unpack(f.encoding, data, base + f.offset), f.enum_type)}"
        for f in fields
    ]
    return surround_with_struct(",".join(parts))


def _render_descriptor(desc: AttributeDescriptor, data: bytes, reader: CStringReader) -> str:
    enc = desc.encoding

    if enc is Encoding.CHAR_ARRAY:
        return get_string_string(data[: desc.count], truncate=desc.truncate, surround_with_deref=desc.deref)

    if len(data) < desc.size:
        logger.debug("%s: payload has %d bytes, expected %d", desc.name, len(data), desc.size)
        return INVALID_PAYLOAD_MARKER

    if enc is Encoding.STRING_PTR:
        address = _unpack(enc, data)
        if address == 0:
            return NULL_MARKER
        return get_string_string(reader(address), truncate=desc.truncate, surround_with_deref=desc.deref)

    if enc is Encoding.ARRAY:
        element = desc.element
        if element is None:
            raise ValueError(f"{desc.name}: array descriptor without element encoding")
        values = struct.unpack_from(f"={desc.count}{SCALAR_FORMATS[element]}", data)
        return get_array_string(values, desc.count, lambda v: format_scalar(element, v, desc.enum_type, desc.hex))

    if enc is Encoding.STRUCT:
        # A payload holding several structs (e.g. one link info per hop) renders as a bounded list.
        num = len(data) // desc.size
        if num <= 1:
            return _format_struct(desc.fields, data, 0)
        return get_array_string(range(num), num, lambda i: _format_struct(desc.fields, data, i * desc.size))

    return format_scalar(enc, _unpack(enc, data), desc.enum_type, desc.hex)


def render(
    family: KindFamily,
    payload: Any,
    attribute: int,
    status: int,
    schema: Schema = DEFAULT_SCHEMA,
    reader: CStringReader = read_c_string,
) -> str:
    """Return the trace text for one attribute query.

    Parameters
    ----------
    family:
        Which `*_get_info` call produced the payload.
    payload:
        The buffer the runtime filled in, or None.
    attribute:
        The attribute id passed to the query.
    status:
        The `hsa_status_t` the query returned. Anything but success yields
        `QUERY_FAILED_MARKER` without looking at the payload.
    reader:
        Dereferences `const char*` payloads (default: read from this process).
    """
    if status != HsaStatus.SUCCESS:
        return QUERY_FAILED_MARKER

    desc = lookup(family, attribute, schema)
    if desc is None:
        logger.debug("No descriptor for %s attribute %r", family, attribute)
        return UNSUPPORTED_ATTRIBUTE_MARKER

    if payload is None:
        return NULL_MARKER

    try:
        data = memoryview(payload).tobytes()
    except TypeError:
        logger.debug("%s: payload of type %s is not a buffer", desc.name, type(payload).__name__)
        return INVALID_PAYLOAD_MARKER

    try:
        return _render_descriptor(desc, data, reader)
    except (struct.error, ValueError, TypeError, OSError, ctypes.ArgumentError) as e:
        logger.debug("%s: failed to decode payload: %s", desc.name, e)
        return INVALID_PAYLOAD_MARKER


def render_query(family: KindFamily, result: QueryResult, schema: Schema = DEFAULT_SCHEMA) -> str:
    return render(family, result.payload, result.attribute, result.status, schema)


def get_agent_attribute_string(payload: Any, attribute: int, status: int, schema: Schema = DEFAULT_SCHEMA) -> str:
    """Render a `hsa_agent_get_info` result (core and `hsa_amd_agent_info_t` ids)."""
    return render(KindFamily.AGENT, payload, attribute, status, schema)


def get_system_attribute_string(payload: Any, attribute: int, status: int, schema: Schema = DEFAULT_SCHEMA) -> str:
    return render(KindFamily.SYSTEM, payload, attribute, status, schema)


def get_region_attribute_string(payload: Any, attribute: int, status: int, schema: Schema = DEFAULT_SCHEMA) -> str:
    return render(KindFamily.REGION, payload, attribute, status, schema)


def get_isa_attribute_string(payload: Any, attribute: int, status: int, schema: Schema = DEFAULT_SCHEMA) -> str:
    return render(KindFamily.ISA, payload, attribute, status, schema)


def get_code_object_attribute_string(
    payload: Any, attribute: int, status: int, schema: Schema = DEFAULT_SCHEMA
) -> str:
    return render(KindFamily.CODE_OBJECT, payload, attribute, status, schema)


def get_code_symbol_attribute_string(
    payload: Any, attribute: int, status: int, schema: Schema = DEFAULT_SCHEMA
) -> str:
    return render(KindFamily.CODE_SYMBOL, payload, attribute, status, schema)


def get_executable_attribute_string(
    payload: Any, attribute: int, status: int, schema: Schema = DEFAULT_SCHEMA
) -> str:
    return render(KindFamily.EXECUTABLE, payload, attribute, status, schema)


def get_executable_symbol_attribute_string(
    payload: Any, attribute: int, status: int, schema: Schema = DEFAULT_SCHEMA
) -> str:
    return render(KindFamily.EXECUTABLE_SYMBOL, payload, attribute, status, schema)


def get_program_attribute_string(payload: Any, attribute: int, status: int, schema: Schema = DEFAULT_SCHEMA) -> str:
    return render(KindFamily.PROGRAM, payload, attribute, status, schema)


def get_memory_pool_attribute_string(
    payload: Any, attribute: int, status: int, schema: Schema = DEFAULT_SCHEMA
) -> str:
    return render(KindFamily.MEMORY_POOL, payload, attribute, status, schema)


def get_agent_memory_pool_attribute_string(
    payload: Any, attribute: int, status: int, schema: Schema = DEFAULT_SCHEMA
) -> str:
    return render(KindFamily.AGENT_MEMORY_POOL, payload, attribute, status, schema)


def get_cache_attribute_string(payload: Any, attribute: int, status: int, schema: Schema = DEFAULT_SCHEMA) -> str:
    return render(KindFamily.CACHE, payload, attribute, status, schema)


def get_wavefront_attribute_string(
    payload: Any, attribute: int, status: int, schema: Schema = DEFAULT_SCHEMA
) -> str:
    return render(KindFamily.WAVEFRONT, payload, attribute, status, schema)
