from __future__ import annotations

from typing import Any

import attrs

from . import render as _render
from .api_names import DEFAULT_BINDING, FAMILY_API, ApiNameBinding, HsaApiType, get_api_name_string
from .config import InfoStringsConfig
from .model import KindFamily, QueryResult
from .schema import DEFAULT_SCHEMA, Schema, lookup
from .sizes import size_of


@attrs.define(frozen=True, slots=True)
class InfoStringFormatter:
    """Size/render entry point for a tracer, with its schema and API names injected.

    Instances are immutable, so one formatter can be shared by all tracing threads.
    """

    schema: Schema = DEFAULT_SCHEMA
    names: ApiNameBinding = DEFAULT_BINDING
    reader: _render.CStringReader = _render.read_c_string

    @staticmethod
    def from_config(config: InfoStringsConfig, names: ApiNameBinding = DEFAULT_BINDING) -> "InfoStringFormatter":
        return InfoStringFormatter(schema=config.schema(), names=names)

    def size_of(self, family: KindFamily, attribute: int) -> int:
        return size_of(family, attribute, self.schema)

    def render(self, family: KindFamily, payload: Any, attribute: int, status: int) -> str:
        return _render.render(family, payload, attribute, status, self.schema, self.reader)

    def render_query(self, family: KindFamily, result: QueryResult) -> str:
        return self.render(family, result.payload, result.attribute, result.status)

    def api_name(self, api_type: HsaApiType) -> str:
        return get_api_name_string(api_type, self.names)

    def attribute_name(self, family: KindFamily, attribute: int) -> str:
        desc = lookup(family, attribute, self.schema)
        return str(int(attribute)) if desc is None else desc.name

    def format_query(self, family: KindFamily, result: QueryResult) -> str:
        """One trace fragment for a query: `hsa_agent_get_info(HSA_AGENT_INFO_NAME) = "gfx906"`."""
        api = self.api_name(FAMILY_API[family])
        attr = self.attribute_name(family, result.attribute)
        return f"{api}({attr}) = {self.render_query(family, result)}"
