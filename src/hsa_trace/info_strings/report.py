from __future__ import annotations

from pathlib import Path

from mdutils.mdutils import MdUtils  # type: ignore[import-untyped]

from .model import AttributeDescriptor, Encoding
from .schema import FAMILY_ATTRIBUTES, Schema

REPORT_NAME = "attributes"


def _encoding_label(desc: AttributeDescriptor) -> str:
    if desc.encoding is Encoding.ARRAY and desc.element is not None:
        return f"{desc.element.value}[{desc.count}]"
    if desc.encoding in (Encoding.ENUM, Encoding.FLAGS) and desc.enum_type is not None:
        return f"{desc.encoding.value} ({desc.enum_type.__name__})"
    if desc.encoding is Encoding.STRUCT:
        return "struct {" + ", ".join(f.name for f in desc.fields) + "}"
    return desc.encoding.value


def _notes(desc: AttributeDescriptor) -> str:
    notes: list[str] = []
    if desc.deref:
        notes.append("deref")
    if desc.hex:
        notes.append("hex")
    if desc.length_attribute is not None:
        notes.append(f"length from `{desc.length_attribute}`")
    return ", ".join(notes)


def write_attribute_reference(out_dir: Path, schema: Schema) -> Path:
    """Write `<out_dir>/attributes.md`: one table of id/name/encoding/size per family."""
    out_dir.mkdir(parents=True, exist_ok=True)
    md = MdUtils(file_name=str(out_dir / REPORT_NAME), title="HSA info-query attributes")
    md.new_paragraph(
        "Payload size and trace rendering of every attribute known to this build. "
        "Lists render as `{a,b,c,...}` (at most 3 items), structs as `{field=value,...}`, "
        "dereferenced pointers as `[...]`, and strings are capped at 60 characters."
    )

    for family in FAMILY_ATTRIBUTES:
        table = schema.get(family)
        if table is None:
            continue
        md.new_header(level=1, title=family.value)
        header = ["id", "name", "encoding", "size", "notes"]
        cells: list[str] = list(header)
        for attr_id, desc in sorted(table.items()):
            cells.extend([f"0x{attr_id:x}", f"`{desc.name}`", _encoding_label(desc), str(desc.size), _notes(desc)])
        md.new_table(columns=len(header), rows=len(table) + 1, text=cells, text_align="left")

    md.create_md_file()
    return out_dir / f"{REPORT_NAME}.md"
