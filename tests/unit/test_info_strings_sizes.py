from __future__ import annotations

import pytest

from hsa_trace.info_strings.enums import (
    AgentInfo,
    AgentMemoryPoolInfo,
    AmdAgentInfo,
    AmdSystemInfo,
    CacheInfo,
    CodeSymbolInfo,
    ExecutableSymbolInfo,
    IsaInfo,
    RegionInfo,
    SystemInfo,
    WavefrontInfo,
)
from hsa_trace.info_strings.model import AttributeDescriptor, Encoding, KindFamily
from hsa_trace.info_strings.schema import (
    DEFAULT_SCHEMA,
    build_schema,
    lookup,
    missing_descriptors,
    parse_attribute,
    parse_family,
)
from hsa_trace.info_strings.sizes import (
    get_agent_attribute_size,
    get_agent_memory_pool_attribute_size,
    get_cache_attribute_size,
    get_code_symbol_attribute_size,
    get_executable_symbol_attribute_size,
    get_isa_attribute_size,
    get_region_attribute_size,
    get_system_attribute_size,
    get_wavefront_attribute_size,
    size_of,
)


def test_agent_sizes() -> None:
    assert get_agent_attribute_size(AgentInfo.NAME) == 64
    assert get_agent_attribute_size(AgentInfo.WAVEFRONT_SIZE) == 4
    assert get_agent_attribute_size(AgentInfo.WORKGROUP_MAX_DIM) == 6
    assert get_agent_attribute_size(AgentInfo.GRID_MAX_DIM) == 12
    assert get_agent_attribute_size(AgentInfo.CACHE_SIZE) == 16
    assert get_agent_attribute_size(AgentInfo.EXTENSIONS) == 128
    assert get_agent_attribute_size(AgentInfo.ISA) == 8
    assert get_agent_attribute_size(AgentInfo.FAST_F16_OPERATION) == 1
    assert get_agent_attribute_size(AmdAgentInfo.CHIP_ID) == 4
    assert get_agent_attribute_size(AmdAgentInfo.PRODUCT_NAME) == 64


def test_other_family_sizes() -> None:
    assert get_system_attribute_size(SystemInfo.VERSION_MAJOR) == 2
    assert get_system_attribute_size(SystemInfo.TIMESTAMP) == 8
    assert get_system_attribute_size(AmdSystemInfo.BUILD_VERSION) == 8
    assert get_region_attribute_size(RegionInfo.SIZE) == 8
    assert get_isa_attribute_size(IsaInfo.NAME) == 256
    assert get_isa_attribute_size(IsaInfo.PROFILES) == 2
    assert get_isa_attribute_size(IsaInfo.GRID_MAX_SIZE) == 4
    assert get_isa_attribute_size(IsaInfo.GRID_MAX_SIZE) == get_agent_attribute_size(AgentInfo.GRID_MAX_SIZE)
    assert get_code_symbol_attribute_size(CodeSymbolInfo.NAME) == 256
    assert get_executable_symbol_attribute_size(ExecutableSymbolInfo.KERNEL_OBJECT) == 8
    assert get_agent_memory_pool_attribute_size(AgentMemoryPoolInfo.LINK_INFO) == 28


def test_unknown_attribute_size_is_zero() -> None:
    assert get_agent_attribute_size(0x7FFF) == 0
    assert get_region_attribute_size(3) == 0
    assert size_of(KindFamily.AGENT, "not-an-id") == 0  # type: ignore[arg-type]


def test_future_families_are_gated() -> None:
    assert KindFamily.CACHE not in DEFAULT_SCHEMA
    assert get_cache_attribute_size(CacheInfo.LEVEL) == 0
    assert get_wavefront_attribute_size(WavefrontInfo.SIZE) == 0

    future = build_schema(include_future=True)
    assert get_cache_attribute_size(CacheInfo.LEVEL, future) == 1
    assert get_cache_attribute_size(CacheInfo.NAME, future) == 256
    assert get_wavefront_attribute_size(WavefrontInfo.SIZE, future) == 4


def test_every_attribute_has_a_descriptor() -> None:
    assert missing_descriptors(DEFAULT_SCHEMA) == []
    assert missing_descriptors(build_schema(include_future=True)) == []


def test_variable_length_names_point_at_their_length_attribute() -> None:
    desc = lookup(KindFamily.ISA, IsaInfo.NAME)
    assert desc is not None
    assert desc.encoding is Encoding.CHAR_ARRAY
    assert desc.length_attribute == "HSA_ISA_INFO_NAME_LENGTH"


def test_schema_tables_are_read_only() -> None:
    with pytest.raises(TypeError):
        DEFAULT_SCHEMA[KindFamily.AGENT][0] = None  # type: ignore[index]


def test_descriptor_rejects_non_positive_size() -> None:
    with pytest.raises(ValueError):
        AttributeDescriptor("HSA_BOGUS", 0, Encoding.UINT32)


def test_parse_family_and_attribute() -> None:
    assert parse_family("Agent") is KindFamily.AGENT
    with pytest.raises(ValueError, match="Known:"):
        parse_family("gpu")

    assert parse_attribute(KindFamily.AGENT, "0xA000") == 0xA000
    assert parse_attribute(KindFamily.AGENT, "name") == 0
    assert parse_attribute(KindFamily.AGENT, "HSA_AMD_AGENT_INFO_CHIP_ID") == 0xA000
    with pytest.raises(ValueError):
        parse_attribute(KindFamily.AGENT, "NOPE")
