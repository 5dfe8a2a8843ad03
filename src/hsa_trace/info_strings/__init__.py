"""HSA info-query string utilities.

Resolves the payload size of every `*_get_info` attribute of the HSA runtime
(agents, regions, ISAs, code objects, symbols, memory pools, ...) and renders a
filled payload as the compact text used in API trace lines: lists as
`{a,b,c,...}`, structs as `{field=value,...}`, dereferenced pointers as `[...]`.
"""

from __future__ import annotations
