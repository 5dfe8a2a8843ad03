from __future__ import annotations

import json
from datetime import datetime, timezone
from importlib import resources
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator

from . import delimiters
from .arrays import MAX_ITEMS_TO_OUTPUT
from .scalars import ELLIPSIS, MAX_STRING_LENGTH
from .model import FUTURE_FAMILIES
from .schema import FAMILY_ATTRIBUTES, Schema

EXPORT_SCHEMA = "hsa_trace.info_strings/v1"
CONTRACT_NAME = "attribute_schema.schema.json"


def _load_contract(schema_path: Path | None) -> dict[str, Any]:
    if schema_path is None:
        text = resources.files(__package__).joinpath("contracts").joinpath(CONTRACT_NAME).read_text()
    else:
        text = schema_path.read_text()
    return json.loads(text)


def validate_export(doc: dict[str, Any], *, schema_path: Path | None = None) -> None:
    contract = _load_contract(schema_path)
    Draft202012Validator(contract).validate(doc)


def export_schema(schema: Schema) -> dict[str, Any]:
    """Serialize the descriptor tables for trace consumers (log parsers, viewers).

    Families are listed in declaration order; attributes are sorted by id.
    """
    families: dict[str, Any] = {}
    for family in FAMILY_ATTRIBUTES:
        table = schema.get(family)
        if table is None:
            continue
        families[family.value] = [
            {"id": attr_id, **desc.to_dict()} for attr_id, desc in sorted(table.items())
        ]

    doc = {
        "schema": EXPORT_SCHEMA,
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "include_future": any(f in schema for f in FUTURE_FAMILIES),
        "trace_format": {
            "list": [delimiters.LIST_START, delimiters.LIST_END],
            "struct": [delimiters.STRUCT_START, delimiters.STRUCT_END],
            "deref": [delimiters.PTR_DEREF_START, delimiters.PTR_DEREF_END],
            "max_string_length": MAX_STRING_LENGTH,
            "max_array_items": MAX_ITEMS_TO_OUTPUT,
            "ellipsis": ELLIPSIS,
        },
        "families": families,
    }
    validate_export(doc)
    return doc


def write_export(path: Path, doc: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(doc, indent=2, sort_keys=True) + "\n")
