"""
HSA runtime enumerations used by the info-query string utilities.

Numeric values follow `hsa.h`, `hsa_ext_amd.h` and `hsa_ext_finalize.h`.
Member names drop the common C prefix (e.g. `HSA_AGENT_INFO_NAME` becomes
`AgentInfo.NAME`); `c_name()` restores the runtime spelling for display.
"""

from __future__ import annotations

import enum
from typing import Callable, TypeVar

_E = TypeVar("_E", bound=type)

# Enum classes reserve `_sunder_` names, so the C prefixes live here.
_C_PREFIXES: dict[type, str] = {}


def c_prefix(prefix: str) -> Callable[[_E], _E]:
    """Class decorator recording the C spelling prefix of an enum."""

    def wrap(cls: _E) -> _E:
        _C_PREFIXES[cls] = prefix
        return cls

    return wrap


def c_name(member: enum.Enum) -> str:
    """Return the runtime (C) spelling of an enum member, e.g. `HSA_AGENT_INFO_NAME`."""
    return f"{_C_PREFIXES.get(type(member), '')}{member.name}"


class _HsaEnum(enum.IntEnum):
    """IntEnum whose members know their C spelling."""

    def c_name(self) -> str:
        return c_name(self)


class _HsaFlag(enum.IntFlag):
    pass


@c_prefix("HSA_STATUS_")
class HsaStatus(_HsaEnum):
    SUCCESS = 0x0
    INFO_BREAK = 0x1
    ERROR = 0x1000
    ERROR_INVALID_ARGUMENT = 0x1001
    ERROR_INVALID_QUEUE_CREATION = 0x1002
    ERROR_INVALID_ALLOCATION = 0x1003
    ERROR_INVALID_AGENT = 0x1004
    ERROR_INVALID_REGION = 0x1005
    ERROR_INVALID_SIGNAL = 0x1006
    ERROR_INVALID_QUEUE = 0x1007
    ERROR_OUT_OF_RESOURCES = 0x1008
    ERROR_INVALID_PACKET_FORMAT = 0x1009
    ERROR_RESOURCE_FREE = 0x100A
    ERROR_NOT_INITIALIZED = 0x100B
    ERROR_REFCOUNT_OVERFLOW = 0x100C
    ERROR_INCOMPATIBLE_ARGUMENTS = 0x100D
    ERROR_INVALID_INDEX = 0x100E
    ERROR_INVALID_ISA = 0x100F
    ERROR_INVALID_CODE_OBJECT = 0x1010
    ERROR_INVALID_EXECUTABLE = 0x1011
    ERROR_FROZEN_EXECUTABLE = 0x1012
    ERROR_INVALID_SYMBOL_NAME = 0x1013
    ERROR_VARIABLE_ALREADY_DEFINED = 0x1014
    ERROR_VARIABLE_UNDEFINED = 0x1015
    ERROR_EXCEPTION = 0x1016
    ERROR_INVALID_ISA_NAME = 0x1017


# ---------------------------------------------------------------------------
# Attribute identifiers, one enum per `*_get_info` attribute type.
# ---------------------------------------------------------------------------


@c_prefix("HSA_AGENT_INFO_")
class AgentInfo(_HsaEnum):
    NAME = 0
    VENDOR_NAME = 1
    FEATURE = 2
    MACHINE_MODEL = 3
    PROFILE = 4
    DEFAULT_FLOAT_ROUNDING_MODE = 5
    WAVEFRONT_SIZE = 6
    WORKGROUP_MAX_DIM = 7
    WORKGROUP_MAX_SIZE = 8
    GRID_MAX_DIM = 9
    GRID_MAX_SIZE = 10
    FBARRIER_MAX_SIZE = 11
    QUEUES_MAX = 12
    QUEUE_MIN_SIZE = 13
    QUEUE_MAX_SIZE = 14
    QUEUE_TYPE = 15
    NODE = 16
    DEVICE = 17
    CACHE_SIZE = 18
    ISA = 19
    EXTENSIONS = 20
    VERSION_MAJOR = 21
    VERSION_MINOR = 22
    BASE_PROFILE_DEFAULT_FLOAT_ROUNDING_MODES = 23
    FAST_F16_OPERATION = 24


@c_prefix("HSA_AMD_AGENT_INFO_")
class AmdAgentInfo(_HsaEnum):
    CHIP_ID = 0xA000
    CACHELINE_SIZE = 0xA001
    COMPUTE_UNIT_COUNT = 0xA002
    MAX_CLOCK_FREQUENCY = 0xA003
    DRIVER_NODE_ID = 0xA004
    MAX_ADDRESS_WATCH_POINTS = 0xA005
    BDFID = 0xA006
    MEMORY_WIDTH = 0xA007
    MEMORY_MAX_FREQUENCY = 0xA008
    PRODUCT_NAME = 0xA009
    MAX_WAVES_PER_CU = 0xA00A
    NUM_SIMDS_PER_CU = 0xA00B
    NUM_SHADER_ENGINES = 0xA00C
    NUM_SHADER_ARRAYS_PER_SE = 0xA00D


@c_prefix("HSA_SYSTEM_INFO_")
class SystemInfo(_HsaEnum):
    VERSION_MAJOR = 0
    VERSION_MINOR = 1
    TIMESTAMP = 2
    TIMESTAMP_FREQUENCY = 3
    SIGNAL_MAX_WAIT = 4
    ENDIANNESS = 5
    MACHINE_MODEL = 6
    EXTENSIONS = 7


@c_prefix("HSA_AMD_SYSTEM_INFO_")
class AmdSystemInfo(_HsaEnum):
    BUILD_VERSION = 0x200


@c_prefix("HSA_REGION_INFO_")
class RegionInfo(_HsaEnum):
    SEGMENT = 0
    GLOBAL_FLAGS = 1
    SIZE = 2
    ALLOC_MAX_SIZE = 4
    RUNTIME_ALLOC_ALLOWED = 5
    RUNTIME_ALLOC_GRANULE = 6
    RUNTIME_ALLOC_ALIGNMENT = 7
    ALLOC_MAX_PRIVATE_WORKGROUP_SIZE = 8


@c_prefix("HSA_AMD_REGION_INFO_")
class AmdRegionInfo(_HsaEnum):
    HOST_ACCESSIBLE = 0xA000
    BASE = 0xA001
    BUILDER_ID = 0xA002
    ENGINE_ID = 0xA003


@c_prefix("HSA_ISA_INFO_")
class IsaInfo(_HsaEnum):
    NAME_LENGTH = 0
    NAME = 1
    CALL_CONVENTION_COUNT = 2
    CALL_CONVENTION_INFO_WAVEFRONT_SIZE = 3
    CALL_CONVENTION_INFO_WAVEFRONTS_PER_COMPUTE_UNIT = 4
    MACHINE_MODELS = 5
    PROFILES = 6
    DEFAULT_FLOAT_ROUNDING_MODES = 7
    BASE_PROFILE_DEFAULT_FLOAT_ROUNDING_MODES = 8
    FAST_F16_OPERATION = 9
    WORKGROUP_MAX_DIM = 12
    WORKGROUP_MAX_SIZE = 13
    GRID_MAX_DIM = 14
    GRID_MAX_SIZE = 16
    FBARRIER_MAX_SIZE = 17


@c_prefix("HSA_CODE_OBJECT_INFO_")
class CodeObjectInfo(_HsaEnum):
    VERSION = 0
    TYPE = 1
    ISA = 2
    MACHINE_MODEL = 3
    PROFILE = 4
    DEFAULT_FLOAT_ROUNDING_MODE = 5


@c_prefix("HSA_CODE_SYMBOL_INFO_")
class CodeSymbolInfo(_HsaEnum):
    TYPE = 0
    NAME_LENGTH = 1
    NAME = 2
    MODULE_NAME_LENGTH = 3
    MODULE_NAME = 4
    LINKAGE = 5
    VARIABLE_ALLOCATION = 6
    VARIABLE_SEGMENT = 7
    VARIABLE_ALIGNMENT = 8
    VARIABLE_SIZE = 9
    VARIABLE_IS_CONST = 10
    KERNEL_KERNARG_SEGMENT_SIZE = 11
    KERNEL_KERNARG_SEGMENT_ALIGNMENT = 12
    KERNEL_GROUP_SEGMENT_SIZE = 13
    KERNEL_PRIVATE_SEGMENT_SIZE = 14
    KERNEL_DYNAMIC_CALLSTACK = 15
    INDIRECT_FUNCTION_CALL_CONVENTION = 16
    IS_DEFINITION = 17
    KERNEL_CALL_CONVENTION = 18


@c_prefix("HSA_EXECUTABLE_INFO_")
class ExecutableInfo(_HsaEnum):
    PROFILE = 1
    STATE = 2
    DEFAULT_FLOAT_ROUNDING_MODE = 3


@c_prefix("HSA_EXECUTABLE_SYMBOL_INFO_")
class ExecutableSymbolInfo(_HsaEnum):
    TYPE = 0
    NAME_LENGTH = 1
    NAME = 2
    MODULE_NAME_LENGTH = 3
    MODULE_NAME = 4
    LINKAGE = 5
    VARIABLE_ALLOCATION = 6
    VARIABLE_SEGMENT = 7
    VARIABLE_ALIGNMENT = 8
    VARIABLE_SIZE = 9
    VARIABLE_IS_CONST = 10
    KERNEL_KERNARG_SEGMENT_SIZE = 11
    KERNEL_KERNARG_SEGMENT_ALIGNMENT = 12
    KERNEL_GROUP_SEGMENT_SIZE = 13
    KERNEL_PRIVATE_SEGMENT_SIZE = 14
    KERNEL_DYNAMIC_CALLSTACK = 15
    INDIRECT_FUNCTION_CALL_CONVENTION = 16
    IS_DEFINITION = 17
    KERNEL_CALL_CONVENTION = 18
    AGENT = 20
    VARIABLE_ADDRESS = 21
    KERNEL_OBJECT = 22
    INDIRECT_FUNCTION_OBJECT = 23


@c_prefix("HSA_EXT_PROGRAM_INFO_")
class ProgramInfo(_HsaEnum):
    MACHINE_MODEL = 0
    PROFILE = 1
    DEFAULT_FLOAT_ROUNDING_MODE = 2


@c_prefix("HSA_AMD_MEMORY_POOL_INFO_")
class MemoryPoolInfo(_HsaEnum):
    SEGMENT = 0
    GLOBAL_FLAGS = 1
    SIZE = 2
    RUNTIME_ALLOC_ALLOWED = 5
    RUNTIME_ALLOC_GRANULE = 6
    RUNTIME_ALLOC_ALIGNMENT = 7
    ACCESSIBLE_BY_ALL = 15


@c_prefix("HSA_AMD_AGENT_MEMORY_POOL_INFO_")
class AgentMemoryPoolInfo(_HsaEnum):
    ACCESS = 0
    NUM_LINK_HOPS = 1
    LINK_INFO = 2


@c_prefix("HSA_CACHE_INFO_")
class CacheInfo(_HsaEnum):
    NAME_LENGTH = 0
    NAME = 1
    LEVEL = 2
    SIZE = 3


@c_prefix("HSA_WAVEFRONT_INFO_")
class WavefrontInfo(_HsaEnum):
    SIZE = 0


# ---------------------------------------------------------------------------
# Value enums (payloads of ENUM / FLAGS attributes).
# ---------------------------------------------------------------------------


@c_prefix("HSA_AGENT_FEATURE_")
class AgentFeature(_HsaFlag):
    KERNEL_DISPATCH = 1
    AGENT_DISPATCH = 2


@c_prefix("HSA_MACHINE_MODEL_")
class MachineModel(_HsaEnum):
    SMALL = 0
    LARGE = 1


@c_prefix("HSA_PROFILE_")
class Profile(_HsaEnum):
    BASE = 0
    FULL = 1


@c_prefix("HSA_DEFAULT_FLOAT_ROUNDING_MODE_")
class DefaultFloatRoundingMode(_HsaEnum):
    DEFAULT = 0
    ZERO = 1
    NEAR = 2


@c_prefix("HSA_QUEUE_TYPE_")
class QueueType(_HsaEnum):
    MULTIPLE = 0
    SINGLE = 1


@c_prefix("HSA_DEVICE_TYPE_")
class DeviceType(_HsaEnum):
    CPU = 0
    GPU = 1
    DSP = 2


@c_prefix("HSA_ENDIANNESS_")
class Endianness(_HsaEnum):
    LITTLE = 0
    BIG = 1


@c_prefix("HSA_REGION_SEGMENT_")
class RegionSegment(_HsaEnum):
    GLOBAL = 0
    READONLY = 1
    PRIVATE = 2
    GROUP = 3
    KERNARG = 4


@c_prefix("HSA_REGION_GLOBAL_FLAG_")
class RegionGlobalFlag(_HsaFlag):
    KERNARG = 1
    FINE_GRAINED = 2
    COARSE_GRAINED = 4


@c_prefix("HSA_CODE_OBJECT_TYPE_")
class CodeObjectType(_HsaEnum):
    PROGRAM = 0


@c_prefix("HSA_SYMBOL_KIND_")
class SymbolKind(_HsaEnum):
    VARIABLE = 0
    KERNEL = 1
    INDIRECT_FUNCTION = 2


@c_prefix("HSA_SYMBOL_LINKAGE_")
class SymbolLinkage(_HsaEnum):
    MODULE = 0
    PROGRAM = 1


@c_prefix("HSA_VARIABLE_ALLOCATION_")
class VariableAllocation(_HsaEnum):
    AGENT = 0
    PROGRAM = 1


@c_prefix("HSA_VARIABLE_SEGMENT_")
class VariableSegment(_HsaEnum):
    GLOBAL = 0
    READONLY = 1


@c_prefix("HSA_EXECUTABLE_STATE_")
class ExecutableState(_HsaEnum):
    UNFROZEN = 0
    FROZEN = 1


@c_prefix("HSA_AMD_SEGMENT_")
class AmdSegment(_HsaEnum):
    GLOBAL = 0
    READONLY = 1
    PRIVATE = 2
    GROUP = 3


@c_prefix("HSA_AMD_MEMORY_POOL_GLOBAL_FLAG_")
class AmdMemoryPoolGlobalFlag(_HsaFlag):
    KERNARG_INIT = 1
    FINE_GRAINED = 2
    COARSE_GRAINED = 4


@c_prefix("HSA_AMD_MEMORY_POOL_ACCESS_")
class AmdMemoryPoolAccess(_HsaEnum):
    NEVER_ALLOWED = 0
    ALLOWED_BY_DEFAULT = 1
    DISALLOWED_BY_DEFAULT = 2


@c_prefix("HSA_AMD_LINK_INFO_TYPE_")
class AmdLinkInfoType(_HsaEnum):
    HYPERTRANSPORT = 0
    QPI = 1
    PCIE = 2
    INFINBAND = 3
