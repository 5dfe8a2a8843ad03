"""
Payload sizes for `*_get_info` attributes.

A tracer calls these before issuing the native query to allocate a buffer large
enough for the attribute's payload. Unknown attributes (and attributes of
families not compiled into the schema) report 0.
"""

from __future__ import annotations

from .model import KindFamily
from .schema import DEFAULT_SCHEMA, Schema, lookup


def size_of(family: KindFamily, attribute: int, schema: Schema = DEFAULT_SCHEMA) -> int:
    desc = lookup(family, attribute, schema)
    return 0 if desc is None else desc.size


def get_agent_attribute_size(attribute: int, schema: Schema = DEFAULT_SCHEMA) -> int:
    """Size for `hsa_agent_get_info`, including the `hsa_amd_agent_info_t` extension ids."""
    return size_of(KindFamily.AGENT, attribute, schema)


def get_system_attribute_size(attribute: int, schema: Schema = DEFAULT_SCHEMA) -> int:
    return size_of(KindFamily.SYSTEM, attribute, schema)


def get_region_attribute_size(attribute: int, schema: Schema = DEFAULT_SCHEMA) -> int:
    return size_of(KindFamily.REGION, attribute, schema)


def get_isa_attribute_size(attribute: int, schema: Schema = DEFAULT_SCHEMA) -> int:
    return size_of(KindFamily.ISA, attribute, schema)


def get_code_object_attribute_size(attribute: int, schema: Schema = DEFAULT_SCHEMA) -> int:
    return size_of(KindFamily.CODE_OBJECT, attribute, schema)


def get_code_symbol_attribute_size(attribute: int, schema: Schema = DEFAULT_SCHEMA) -> int:
    return size_of(KindFamily.CODE_SYMBOL, attribute, schema)


def get_executable_attribute_size(attribute: int, schema: Schema = DEFAULT_SCHEMA) -> int:
    return size_of(KindFamily.EXECUTABLE, attribute, schema)


def get_executable_symbol_attribute_size(attribute: int, schema: Schema = DEFAULT_SCHEMA) -> int:
    return size_of(KindFamily.EXECUTABLE_SYMBOL, attribute, schema)


def get_program_attribute_size(attribute: int, schema: Schema = DEFAULT_SCHEMA) -> int:
    return size_of(KindFamily.PROGRAM, attribute, schema)


def get_memory_pool_attribute_size(attribute: int, schema: Schema = DEFAULT_SCHEMA) -> int:
    return size_of(KindFamily.MEMORY_POOL, attribute, schema)


def get_agent_memory_pool_attribute_size(attribute: int, schema: Schema = DEFAULT_SCHEMA) -> int:
    """Size of one `hsa_amd_memory_pool_link_info_t` for `LINK_INFO` (multiply by the hop count)."""
    return size_of(KindFamily.AGENT_MEMORY_POOL, attribute, schema)


def get_cache_attribute_size(attribute: int, schema: Schema = DEFAULT_SCHEMA) -> int:
    return size_of(KindFamily.CACHE, attribute, schema)


def get_wavefront_attribute_size(attribute: int, schema: Schema = DEFAULT_SCHEMA) -> int:
    return size_of(KindFamily.WAVEFRONT, attribute, schema)
