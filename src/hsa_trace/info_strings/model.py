from __future__ import annotations

import enum
from typing import Any

import attrs

from .enums import HsaStatus


class KindFamily(str, enum.Enum):
    """Category of queryable HSA runtime object, one per `*_get_info` call."""

    AGENT = "agent"
    SYSTEM = "system"
    REGION = "region"
    ISA = "isa"
    CODE_OBJECT = "code_object"
    CODE_SYMBOL = "code_symbol"
    EXECUTABLE = "executable"
    EXECUTABLE_SYMBOL = "executable_symbol"
    PROGRAM = "program"
    MEMORY_POOL = "memory_pool"
    AGENT_MEMORY_POOL = "agent_memory_pool"
    # Only part of a schema built for a future runtime (see `schema.build_schema`).
    CACHE = "cache"
    WAVEFRONT = "wavefront"


FUTURE_FAMILIES: frozenset[KindFamily] = frozenset({KindFamily.CACHE, KindFamily.WAVEFRONT})


class Encoding(str, enum.Enum):
    BOOL = "bool"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    ENUM = "enum"
    FLAGS = "flags"
    POINTER = "pointer"
    HANDLE = "handle"
    CHAR_ARRAY = "char_array"
    STRING_PTR = "string_ptr"
    ARRAY = "array"
    STRUCT = "struct"


# `struct` format characters (standard sizes, native byte order) for the fixed-width encodings.
SCALAR_FORMATS: dict[Encoding, str] = {
    Encoding.BOOL: "?",
    Encoding.UINT8: "B",
    Encoding.UINT16: "H",
    Encoding.UINT32: "I",
    Encoding.UINT64: "Q",
    Encoding.ENUM: "I",
    Encoding.FLAGS: "I",
    Encoding.POINTER: "Q",
    Encoding.HANDLE: "Q",
    Encoding.STRING_PTR: "Q",
}

SCALAR_SIZES: dict[Encoding, int] = {
    Encoding.BOOL: 1,
    Encoding.UINT8: 1,
    Encoding.UINT16: 2,
    Encoding.UINT32: 4,
    Encoding.UINT64: 8,
    Encoding.ENUM: 4,
    Encoding.FLAGS: 4,
    Encoding.POINTER: 8,
    Encoding.HANDLE: 8,
    Encoding.STRING_PTR: 8,
}


@attrs.define(frozen=True, slots=True)
class StructField:
    name: str
    encoding: Encoding
    offset: int
    enum_type: type[enum.Enum] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "encoding": self.encoding.value,
            "offset": self.offset,
            "enum_type": None if self.enum_type is None else self.enum_type.__name__,
        }


@attrs.define(frozen=True, slots=True)
class AttributeDescriptor:
    """Payload layout and rendering hints of one attribute of one family."""

    name: str
    size: int = attrs.field()
    encoding: Encoding = attrs.field()
    element: Encoding | None = None
    count: int = 1
    enum_type: type[enum.Enum] | None = None
    fields: tuple[StructField, ...] = ()
    deref: bool = False
    truncate: bool = True
    hex: bool = False
    length_attribute: str | None = None

    @size.validator
    def _check_size(self, _attribute: attrs.Attribute, value: int) -> None:
        if value <= 0:
            raise ValueError(f"{self.name}: payload size must be positive, got {value}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "size": self.size,
            "encoding": self.encoding.value,
            "element": None if self.element is None else self.element.value,
            "count": self.count,
            "enum_type": None if self.enum_type is None else self.enum_type.__name__,
            "fields": [f.to_dict() for f in self.fields],
            "deref": self.deref,
            "truncate": self.truncate,
            "hex": self.hex,
            "length_attribute": self.length_attribute,
        }


@attrs.define(frozen=True, slots=True)
class QueryResult:
    """Outcome of one native `*_get_info` call, consumed once by the renderer."""

    payload: bytes | None
    attribute: int
    status: int = int(HsaStatus.SUCCESS)

    @property
    def succeeded(self) -> bool:
        return self.status == HsaStatus.SUCCESS
