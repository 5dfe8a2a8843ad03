"""
Display names for traced HSA API calls.

The mapping policy belongs to the tracer: it installs an `ApiNameLookup`
once, during start-up and before any tracing thread runs. `ApiNameBinding`
enforces that contract (a second `install` raises) and readers never take
the lock.
"""

from __future__ import annotations

import enum
import logging
import threading
from collections.abc import Callable

from .model import KindFamily

logger = logging.getLogger(__name__)


class HsaApiType(enum.IntEnum):
    HSA_INIT = 0
    HSA_SHUT_DOWN = 1
    HSA_SYSTEM_GET_INFO = 2
    HSA_AGENT_GET_INFO = 3
    HSA_REGION_GET_INFO = 4
    HSA_ISA_GET_INFO = 5
    HSA_CODE_OBJECT_GET_INFO = 6
    HSA_CODE_SYMBOL_GET_INFO = 7
    HSA_EXECUTABLE_GET_INFO = 8
    HSA_EXECUTABLE_SYMBOL_GET_INFO = 9
    HSA_EXT_PROGRAM_GET_INFO = 10
    HSA_AMD_MEMORY_POOL_GET_INFO = 11
    HSA_AMD_AGENT_MEMORY_POOL_GET_INFO = 12
    HSA_CACHE_GET_INFO = 13
    HSA_WAVEFRONT_GET_INFO = 14
    HSA_ITERATE_AGENTS = 15
    HSA_AGENT_ITERATE_REGIONS = 16
    HSA_AMD_AGENT_ITERATE_MEMORY_POOLS = 17
    HSA_EXECUTABLE_ITERATE_SYMBOLS = 18


# The query call that produces payloads of each family.
FAMILY_API: dict[KindFamily, HsaApiType] = {
    KindFamily.AGENT: HsaApiType.HSA_AGENT_GET_INFO,
    KindFamily.SYSTEM: HsaApiType.HSA_SYSTEM_GET_INFO,
    KindFamily.REGION: HsaApiType.HSA_REGION_GET_INFO,
    KindFamily.ISA: HsaApiType.HSA_ISA_GET_INFO,
    KindFamily.CODE_OBJECT: HsaApiType.HSA_CODE_OBJECT_GET_INFO,
    KindFamily.CODE_SYMBOL: HsaApiType.HSA_CODE_SYMBOL_GET_INFO,
    KindFamily.EXECUTABLE: HsaApiType.HSA_EXECUTABLE_GET_INFO,
    KindFamily.EXECUTABLE_SYMBOL: HsaApiType.HSA_EXECUTABLE_SYMBOL_GET_INFO,
    KindFamily.PROGRAM: HsaApiType.HSA_EXT_PROGRAM_GET_INFO,
    KindFamily.MEMORY_POOL: HsaApiType.HSA_AMD_MEMORY_POOL_GET_INFO,
    KindFamily.AGENT_MEMORY_POOL: HsaApiType.HSA_AMD_AGENT_MEMORY_POOL_GET_INFO,
    KindFamily.CACHE: HsaApiType.HSA_CACHE_GET_INFO,
    KindFamily.WAVEFRONT: HsaApiType.HSA_WAVEFRONT_GET_INFO,
}

# Returns the display name of an API, or None when it has no registered name.
ApiNameLookup = Callable[[HsaApiType], str | None]


class ApiNameBinding:
    """Write-once holder of the tracer's `ApiNameLookup`."""

    def __init__(self) -> None:
        self._lookup: ApiNameLookup | None = None
        self._lock = threading.Lock()

    def install(self, lookup: ApiNameLookup) -> None:
        """Install the lookup. Must happen once, before tracing threads start."""
        with self._lock:
            if self._lookup is not None:
                raise RuntimeError("An API name lookup is already installed")
            self._lookup = lookup

    @property
    def installed(self) -> bool:
        return self._lookup is not None

    def lookup(self, api_type: HsaApiType) -> str | None:
        fn = self._lookup
        if fn is None:
            return None
        try:
            return fn(api_type)
        except Exception as e:
            # Resolver errors fall back to the C name.
            logger.debug("API name lookup failed for %s: %s", api_type.name, e)
            return None


DEFAULT_BINDING = ApiNameBinding()


def default_api_name(api_type: HsaApiType) -> str:
    """The C function name of an API, e.g. `hsa_agent_get_info`."""
    return api_type.name.lower()


def get_api_name_string(api_type: HsaApiType, binding: ApiNameBinding = DEFAULT_BINDING) -> str:
    name = binding.lookup(api_type)
    if name is None:
        return default_api_name(api_type)
    return name
