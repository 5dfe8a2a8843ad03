from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

import attrs

from .schema import Schema, build_schema

FUTURE_ROCR_ENV = "HSA_TRACE_FUTURE_ROCR"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


@attrs.define(frozen=True, slots=True)
class InfoStringsConfig:
    """Build-time choices for the attribute schema.

    `include_future` enables the `cache` and `wavefront` families of newer
    runtimes. The string (60 characters) and array (3 items) caps are part of
    the trace format and are not configurable.
    """

    include_future: bool = False

    @staticmethod
    def from_env(environ: Mapping[str, str] | None = None) -> "InfoStringsConfig":
        env = os.environ if environ is None else environ
        value = env.get(FUTURE_ROCR_ENV, "").strip().lower()
        return InfoStringsConfig(include_future=value in _TRUE_VALUES)

    def schema(self) -> Schema:
        return build_schema(include_future=self.include_future)

    def to_dict(self) -> dict[str, Any]:
        return {"include_future": self.include_future}
