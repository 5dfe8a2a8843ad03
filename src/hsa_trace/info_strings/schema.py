"""
Attribute descriptor tables for every HSA `*_get_info` family.

Each family maps an attribute id to an immutable `AttributeDescriptor` giving
the payload size and how to render it. The tables are built once per process
(`DEFAULT_SCHEMA`) and exposed through read-only mappings, so lookups are safe
from any number of tracing threads.

The `cache` and `wavefront` families belong to a future runtime version and are
only present when the schema is built with `include_future=True`.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from .enums import (
    AgentFeature,
    AgentInfo,
    AgentMemoryPoolInfo,
    AmdAgentInfo,
    AmdLinkInfoType,
    AmdMemoryPoolAccess,
    AmdMemoryPoolGlobalFlag,
    AmdRegionInfo,
    AmdSegment,
    AmdSystemInfo,
    CacheInfo,
    CodeObjectInfo,
    CodeObjectType,
    CodeSymbolInfo,
    DefaultFloatRoundingMode,
    DeviceType,
    Endianness,
    ExecutableInfo,
    ExecutableState,
    ExecutableSymbolInfo,
    IsaInfo,
    MachineModel,
    MemoryPoolInfo,
    Profile,
    ProgramInfo,
    QueueType,
    RegionGlobalFlag,
    RegionInfo,
    RegionSegment,
    SymbolKind,
    SymbolLinkage,
    SystemInfo,
    VariableAllocation,
    VariableSegment,
    WavefrontInfo,
    c_name,
)
from .model import FUTURE_FAMILIES, SCALAR_SIZES, AttributeDescriptor, Encoding, KindFamily, StructField

FamilyTable = Mapping[int, AttributeDescriptor]
Schema = Mapping[KindFamily, FamilyTable]

# Fixed `char[64]` name buffers used by agent and code object queries.
NAME_BUFFER_SIZE = 64
# Buffer reported for names whose real length comes from a `*_NAME_LENGTH` attribute.
VARIABLE_STRING_CAPACITY = 256
EXTENSIONS_SIZE = 128

DIM3_FIELDS: tuple[StructField, ...] = (
    StructField("x", Encoding.UINT32, 0),
    StructField("y", Encoding.UINT32, 4),
    StructField("z", Encoding.UINT32, 8),
)
DIM3_SIZE = 12

# hsa_amd_memory_pool_link_info_t
LINK_INFO_FIELDS: tuple[StructField, ...] = (
    StructField("min_latency", Encoding.UINT32, 0),
    StructField("max_latency", Encoding.UINT32, 4),
    StructField("min_bandwidth", Encoding.UINT32, 8),
    StructField("max_bandwidth", Encoding.UINT32, 12),
    StructField("atomic_support_32bit", Encoding.BOOL, 16),
    StructField("atomic_support_64bit", Encoding.BOOL, 17),
    StructField("coherent_support", Encoding.BOOL, 18),
    StructField("link_type", Encoding.ENUM, 20, AmdLinkInfoType),
    StructField("numa_distance", Encoding.UINT32, 24),
)
LINK_INFO_SIZE = 28

FAMILY_ATTRIBUTES: dict[KindFamily, tuple[type[enum.IntEnum], ...]] = {
    KindFamily.AGENT: (AgentInfo, AmdAgentInfo),
    KindFamily.SYSTEM: (SystemInfo, AmdSystemInfo),
    KindFamily.REGION: (RegionInfo, AmdRegionInfo),
    KindFamily.ISA: (IsaInfo,),
    KindFamily.CODE_OBJECT: (CodeObjectInfo,),
    KindFamily.CODE_SYMBOL: (CodeSymbolInfo,),
    KindFamily.EXECUTABLE: (ExecutableInfo,),
    KindFamily.EXECUTABLE_SYMBOL: (ExecutableSymbolInfo,),
    KindFamily.PROGRAM: (ProgramInfo,),
    KindFamily.MEMORY_POOL: (MemoryPoolInfo,),
    KindFamily.AGENT_MEMORY_POOL: (AgentMemoryPoolInfo,),
    KindFamily.CACHE: (CacheInfo,),
    KindFamily.WAVEFRONT: (WavefrontInfo,),
}

Entry = tuple[int, AttributeDescriptor]


def _scalar(member: enum.IntEnum, encoding: Encoding, *, hex: bool = False) -> Entry:
    return int(member), AttributeDescriptor(c_name(member), SCALAR_SIZES[encoding], encoding, hex=hex)


def _u16(member: enum.IntEnum) -> Entry:
    return _scalar(member, Encoding.UINT16)


def _u32(member: enum.IntEnum, *, hex: bool = False) -> Entry:
    return _scalar(member, Encoding.UINT32, hex=hex)


def _u64(member: enum.IntEnum, *, hex: bool = False) -> Entry:
    return _scalar(member, Encoding.UINT64, hex=hex)


def _bool(member: enum.IntEnum) -> Entry:
    return _scalar(member, Encoding.BOOL)


def _pointer(member: enum.IntEnum) -> Entry:
    return _scalar(member, Encoding.POINTER)


def _handle(member: enum.IntEnum) -> Entry:
    return _scalar(member, Encoding.HANDLE)


def _enum(member: enum.IntEnum, enum_type: type[enum.Enum]) -> Entry:
    return int(member), AttributeDescriptor(c_name(member), 4, Encoding.ENUM, enum_type=enum_type)


def _flags(member: enum.IntEnum, enum_type: type[enum.Enum]) -> Entry:
    return int(member), AttributeDescriptor(c_name(member), 4, Encoding.FLAGS, enum_type=enum_type)


def _char_array(member: enum.IntEnum, size: int, *, length_attribute: enum.IntEnum | None = None) -> Entry:
    return int(member), AttributeDescriptor(
        c_name(member),
        size,
        Encoding.CHAR_ARRAY,
        count=size,
        length_attribute=None if length_attribute is None else c_name(length_attribute),
    )


def _string_ptr(member: enum.IntEnum) -> Entry:
    return int(member), AttributeDescriptor(
        c_name(member), SCALAR_SIZES[Encoding.STRING_PTR], Encoding.STRING_PTR, deref=True
    )


def _array(member: enum.IntEnum, element: Encoding, count: int) -> Entry:
    return int(member), AttributeDescriptor(
        c_name(member), SCALAR_SIZES[element] * count, Encoding.ARRAY, element=element, count=count
    )


def _struct(member: enum.IntEnum, size: int, fields: tuple[StructField, ...]) -> Entry:
    return int(member), AttributeDescriptor(c_name(member), size, Encoding.STRUCT, fields=fields)


def _agent_entries() -> list[Entry]:
    a = AgentInfo
    amd = AmdAgentInfo
    return [
        _char_array(a.NAME, NAME_BUFFER_SIZE),
        _char_array(a.VENDOR_NAME, NAME_BUFFER_SIZE),
        _flags(a.FEATURE, AgentFeature),
        _enum(a.MACHINE_MODEL, MachineModel),
        _enum(a.PROFILE, Profile),
        _enum(a.DEFAULT_FLOAT_ROUNDING_MODE, DefaultFloatRoundingMode),
        _u32(a.WAVEFRONT_SIZE),
        _array(a.WORKGROUP_MAX_DIM, Encoding.UINT16, 3),
        _u32(a.WORKGROUP_MAX_SIZE),
        _struct(a.GRID_MAX_DIM, DIM3_SIZE, DIM3_FIELDS),
        _u32(a.GRID_MAX_SIZE),
        _u32(a.FBARRIER_MAX_SIZE),
        _u32(a.QUEUES_MAX),
        _u32(a.QUEUE_MIN_SIZE),
        _u32(a.QUEUE_MAX_SIZE),
        _enum(a.QUEUE_TYPE, QueueType),
        _u32(a.NODE),
        _enum(a.DEVICE, DeviceType),
        _array(a.CACHE_SIZE, Encoding.UINT32, 4),
        _handle(a.ISA),
        _array(a.EXTENSIONS, Encoding.UINT8, EXTENSIONS_SIZE),
        _u16(a.VERSION_MAJOR),
        _u16(a.VERSION_MINOR),
        _flags(a.BASE_PROFILE_DEFAULT_FLOAT_ROUNDING_MODES, DefaultFloatRoundingMode),
        _bool(a.FAST_F16_OPERATION),
        _u32(amd.CHIP_ID, hex=True),
        _u32(amd.CACHELINE_SIZE),
        _u32(amd.COMPUTE_UNIT_COUNT),
        _u32(amd.MAX_CLOCK_FREQUENCY),
        _u32(amd.DRIVER_NODE_ID),
        _u32(amd.MAX_ADDRESS_WATCH_POINTS),
        _u32(amd.BDFID),
        _u32(amd.MEMORY_WIDTH),
        _u32(amd.MEMORY_MAX_FREQUENCY),
        _char_array(amd.PRODUCT_NAME, NAME_BUFFER_SIZE),
        _u32(amd.MAX_WAVES_PER_CU),
        _u32(amd.NUM_SIMDS_PER_CU),
        _u32(amd.NUM_SHADER_ENGINES),
        _u32(amd.NUM_SHADER_ARRAYS_PER_SE),
    ]


def _system_entries() -> list[Entry]:
    s = SystemInfo
    return [
        _u16(s.VERSION_MAJOR),
        _u16(s.VERSION_MINOR),
        _u64(s.TIMESTAMP),
        _u64(s.TIMESTAMP_FREQUENCY),
        _u64(s.SIGNAL_MAX_WAIT),
        _enum(s.ENDIANNESS, Endianness),
        _enum(s.MACHINE_MODEL, MachineModel),
        _array(s.EXTENSIONS, Encoding.UINT8, EXTENSIONS_SIZE),
        _string_ptr(AmdSystemInfo.BUILD_VERSION),
    ]


def _region_entries() -> list[Entry]:
    r = RegionInfo
    amd = AmdRegionInfo
    return [
        _enum(r.SEGMENT, RegionSegment),
        _flags(r.GLOBAL_FLAGS, RegionGlobalFlag),
        _u64(r.SIZE),
        _u64(r.ALLOC_MAX_SIZE),
        _bool(r.RUNTIME_ALLOC_ALLOWED),
        _u64(r.RUNTIME_ALLOC_GRANULE),
        _u64(r.RUNTIME_ALLOC_ALIGNMENT),
        _u32(r.ALLOC_MAX_PRIVATE_WORKGROUP_SIZE),
        _bool(amd.HOST_ACCESSIBLE),
        _pointer(amd.BASE),
        _u32(amd.BUILDER_ID),
        _u32(amd.ENGINE_ID),
    ]


def _isa_entries() -> list[Entry]:
    i = IsaInfo
    return [
        _u32(i.NAME_LENGTH),
        _char_array(i.NAME, VARIABLE_STRING_CAPACITY, length_attribute=i.NAME_LENGTH),
        _u32(i.CALL_CONVENTION_COUNT),
        _u32(i.CALL_CONVENTION_INFO_WAVEFRONT_SIZE),
        _u32(i.CALL_CONVENTION_INFO_WAVEFRONTS_PER_COMPUTE_UNIT),
        _array(i.MACHINE_MODELS, Encoding.BOOL, 2),
        _array(i.PROFILES, Encoding.BOOL, 2),
        _array(i.DEFAULT_FLOAT_ROUNDING_MODES, Encoding.BOOL, 3),
        _array(i.BASE_PROFILE_DEFAULT_FLOAT_ROUNDING_MODES, Encoding.BOOL, 3),
        _bool(i.FAST_F16_OPERATION),
        _array(i.WORKGROUP_MAX_DIM, Encoding.UINT16, 3),
        _u32(i.WORKGROUP_MAX_SIZE),
        _struct(i.GRID_MAX_DIM, DIM3_SIZE, DIM3_FIELDS),
        _u32(i.GRID_MAX_SIZE),
        _u32(i.FBARRIER_MAX_SIZE),
    ]


def _code_object_entries() -> list[Entry]:
    c = CodeObjectInfo
    return [
        _char_array(c.VERSION, NAME_BUFFER_SIZE),
        _enum(c.TYPE, CodeObjectType),
        _handle(c.ISA),
        _enum(c.MACHINE_MODEL, MachineModel),
        _enum(c.PROFILE, Profile),
        _enum(c.DEFAULT_FLOAT_ROUNDING_MODE, DefaultFloatRoundingMode),
    ]


def _symbol_entries(s: type[CodeSymbolInfo] | type[ExecutableSymbolInfo]) -> list[Entry]:
    """Attributes shared by code symbols and executable symbols."""
    return [
        _enum(s.TYPE, SymbolKind),
        _u32(s.NAME_LENGTH),
        _char_array(s.NAME, VARIABLE_STRING_CAPACITY, length_attribute=s.NAME_LENGTH),
        _u32(s.MODULE_NAME_LENGTH),
        _char_array(s.MODULE_NAME, VARIABLE_STRING_CAPACITY, length_attribute=s.MODULE_NAME_LENGTH),
        _enum(s.LINKAGE, SymbolLinkage),
        _enum(s.VARIABLE_ALLOCATION, VariableAllocation),
        _enum(s.VARIABLE_SEGMENT, VariableSegment),
        _u32(s.VARIABLE_ALIGNMENT),
        _u32(s.VARIABLE_SIZE),
        _bool(s.VARIABLE_IS_CONST),
        _u32(s.KERNEL_KERNARG_SEGMENT_SIZE),
        _u32(s.KERNEL_KERNARG_SEGMENT_ALIGNMENT),
        _u32(s.KERNEL_GROUP_SEGMENT_SIZE),
        _u32(s.KERNEL_PRIVATE_SEGMENT_SIZE),
        _bool(s.KERNEL_DYNAMIC_CALLSTACK),
        _u32(s.INDIRECT_FUNCTION_CALL_CONVENTION),
        _bool(s.IS_DEFINITION),
        _u32(s.KERNEL_CALL_CONVENTION),
    ]


def _executable_symbol_entries() -> list[Entry]:
    e = ExecutableSymbolInfo
    return [
        *_symbol_entries(e),
        _handle(e.AGENT),
        _u64(e.VARIABLE_ADDRESS, hex=True),
        _u64(e.KERNEL_OBJECT, hex=True),
        _u64(e.INDIRECT_FUNCTION_OBJECT, hex=True),
    ]


def _executable_entries() -> list[Entry]:
    e = ExecutableInfo
    return [
        _enum(e.PROFILE, Profile),
        _enum(e.STATE, ExecutableState),
        _enum(e.DEFAULT_FLOAT_ROUNDING_MODE, DefaultFloatRoundingMode),
    ]


def _program_entries() -> list[Entry]:
    p = ProgramInfo
    return [
        _enum(p.MACHINE_MODEL, MachineModel),
        _enum(p.PROFILE, Profile),
        _enum(p.DEFAULT_FLOAT_ROUNDING_MODE, DefaultFloatRoundingMode),
    ]


def _memory_pool_entries() -> list[Entry]:
    m = MemoryPoolInfo
    return [
        _enum(m.SEGMENT, AmdSegment),
        _flags(m.GLOBAL_FLAGS, AmdMemoryPoolGlobalFlag),
        _u64(m.SIZE),
        _bool(m.RUNTIME_ALLOC_ALLOWED),
        _u64(m.RUNTIME_ALLOC_GRANULE),
        _u64(m.RUNTIME_ALLOC_ALIGNMENT),
        _bool(m.ACCESSIBLE_BY_ALL),
    ]


def _agent_memory_pool_entries() -> list[Entry]:
    m = AgentMemoryPoolInfo
    return [
        _enum(m.ACCESS, AmdMemoryPoolAccess),
        _u32(m.NUM_LINK_HOPS),
        _struct(m.LINK_INFO, LINK_INFO_SIZE, LINK_INFO_FIELDS),
    ]


def _cache_entries() -> list[Entry]:
    c = CacheInfo
    return [
        _u32(c.NAME_LENGTH),
        _char_array(c.NAME, VARIABLE_STRING_CAPACITY, length_attribute=c.NAME_LENGTH),
        _scalar(c.LEVEL, Encoding.UINT8),
        _u32(c.SIZE),
    ]


def _wavefront_entries() -> list[Entry]:
    return [_u32(WavefrontInfo.SIZE)]


_BUILDERS = {
    KindFamily.AGENT: _agent_entries,
    KindFamily.SYSTEM: _system_entries,
    KindFamily.REGION: _region_entries,
    KindFamily.ISA: _isa_entries,
    KindFamily.CODE_OBJECT: _code_object_entries,
    KindFamily.CODE_SYMBOL: lambda: _symbol_entries(CodeSymbolInfo),
    KindFamily.EXECUTABLE: _executable_entries,
    KindFamily.EXECUTABLE_SYMBOL: _executable_symbol_entries,
    KindFamily.PROGRAM: _program_entries,
    KindFamily.MEMORY_POOL: _memory_pool_entries,
    KindFamily.AGENT_MEMORY_POOL: _agent_memory_pool_entries,
    KindFamily.CACHE: _cache_entries,
    KindFamily.WAVEFRONT: _wavefront_entries,
}


def _freeze(entries: Iterable[Entry], family: KindFamily) -> FamilyTable:
    table: dict[int, AttributeDescriptor] = {}
    for attr_id, desc in entries:
        if attr_id in table:
            raise ValueError(f"Duplicate {family.value} attribute id {attr_id}: {table[attr_id].name}, {desc.name}")
        table[attr_id] = desc
    return MappingProxyType(table)


def build_schema(*, include_future: bool = False) -> Schema:
    """Build the read-only descriptor tables.

    Parameters
    ----------
    include_future:
        Also include the `cache` and `wavefront` families, which only exist in
        newer runtimes.
    """
    schema: dict[KindFamily, FamilyTable] = {}
    for family, builder in _BUILDERS.items():
        if family in FUTURE_FAMILIES and not include_future:
            continue
        schema[family] = _freeze(builder(), family)
    return MappingProxyType(schema)


DEFAULT_SCHEMA: Schema = build_schema()


def lookup(family: KindFamily, attribute: int, schema: Schema = DEFAULT_SCHEMA) -> AttributeDescriptor | None:
    table = schema.get(family)
    if table is None:
        return None
    try:
        return table.get(int(attribute))
    except (TypeError, ValueError):
        return None


def missing_descriptors(schema: Schema) -> list[tuple[KindFamily, enum.IntEnum]]:
    """Return attribute enum members of the schema's families that have no descriptor.

    An empty list means every identifier known at build time has a size and a renderer.
    """
    missing: list[tuple[KindFamily, enum.IntEnum]] = []
    for family, table in schema.items():
        for enum_cls in FAMILY_ATTRIBUTES[family]:
            for member in enum_cls:
                if int(member) not in table:
                    missing.append((family, member))
    return missing


def parse_family(name: str) -> KindFamily:
    try:
        return KindFamily(name.strip().lower())
    except ValueError:
        known = ", ".join(f.value for f in KindFamily)
        raise ValueError(f"Unknown family {name!r}. Known: {known}") from None


def parse_attribute(family: KindFamily, text: str) -> int:
    """Resolve an attribute given as an integer (`0xA000`, `7`) or a name (`NAME`, `HSA_AGENT_INFO_NAME`)."""
    s = text.strip()
    try:
        return int(s, 0)
    except ValueError:
        pass
    key = s.upper()
    for enum_cls in FAMILY_ATTRIBUTES[family]:
        for member in enum_cls:
            if key in (member.name, c_name(member)):
                return int(member)
    raise ValueError(f"Unknown {family.value} attribute {text!r}")
