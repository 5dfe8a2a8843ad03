from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import attrs

from .config import InfoStringsConfig
from .enums import HsaStatus
from .export import export_schema, write_export
from .formatter import InfoStringFormatter
from .model import KindFamily, QueryResult
from .render import CStringReader
from .report import write_attribute_reference
from .schema import FAMILY_ATTRIBUTES, parse_attribute, parse_family


def _abs_path(p: str) -> Path:
    return Path(p).expanduser().resolve()


def _parse_status(text: str) -> int:
    s = text.strip()
    try:
        return int(s, 0)
    except ValueError:
        pass
    key = s.upper().removeprefix("HSA_STATUS_")
    try:
        return int(HsaStatus[key])
    except KeyError:
        raise argparse.ArgumentTypeError(f"Unknown status {text!r}") from None


def _pointee_reader(pointee: str | None) -> CStringReader:
    def read(address: int) -> bytes:
        if pointee is None:
            raise ValueError(f"Cannot dereference 0x{address:x} from the command line (pass --pointee)")
        return pointee.encode("utf-8")

    return read


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hsa_trace.info_strings",
        description="Inspect HSA get_info attribute sizes and their trace rendering.",
    )
    parser.add_argument(
        "--future-rocr",
        action="store_true",
        default=None,
        help="Include the cache/wavefront families (default: from HSA_TRACE_FUTURE_ROCR).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log decode diagnostics to stderr.")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sizes = sub.add_parser("sizes", help="Print the payload size of every attribute of a family.")
    sizes.add_argument("--family", required=True, help="Family name (e.g. agent, region, isa).")

    render = sub.add_parser("render", help="Render one payload the way the tracer would.")
    render.add_argument("--family", required=True)
    render.add_argument("--attribute", required=True, help="Attribute id (e.g. 0xA000) or name (e.g. NAME).")
    render.add_argument("--payload-hex", required=True, help="Payload bytes as hex, native byte order.")
    render.add_argument("--status", type=_parse_status, default=int(HsaStatus.SUCCESS), help="hsa_status_t of the query.")
    render.add_argument("--pointee", default=None, help="String returned when a `const char*` payload is dereferenced.")

    export = sub.add_parser("export", help="Write the attribute schema as JSON.")
    export.add_argument("--out", type=_abs_path, required=True)

    report = sub.add_parser("report", help="Write a Markdown reference of all attributes.")
    report.add_argument("--out-dir", type=_abs_path, required=True)

    return parser


def _sizes_run(formatter: InfoStringFormatter, family: KindFamily) -> int:
    if family not in formatter.schema:
        print(f"[info_strings] family {family.value!r} is not enabled (use --future-rocr)", file=sys.stderr)
        return 2
    for enum_cls in FAMILY_ATTRIBUTES[family]:
        for member in enum_cls:
            attr = int(member)
            print(f"0x{attr:x}\t{formatter.attribute_name(family, attr)}\t{formatter.size_of(family, attr)}")
    return 0


def _render_run(formatter: InfoStringFormatter, family: KindFamily, attr_text: str, payload_hex: str, status: int) -> int:
    try:
        attribute = parse_attribute(family, attr_text)
        payload = bytes.fromhex(payload_hex)
    except ValueError as e:
        print(f"[info_strings] {e}", file=sys.stderr)
        return 2
    print(formatter.format_query(family, QueryResult(payload, attribute, status)))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)

    if ns.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    config = InfoStringsConfig.from_env()
    if ns.future_rocr:
        config = InfoStringsConfig(include_future=True)
    formatter = InfoStringFormatter.from_config(config)

    if ns.cmd in ("sizes", "render"):
        try:
            family = parse_family(ns.family)
        except ValueError as e:
            print(f"[info_strings] {e}", file=sys.stderr)
            return 2
        if ns.cmd == "sizes":
            return _sizes_run(formatter, family)
        formatter = attrs.evolve(formatter, reader=_pointee_reader(ns.pointee))
        return _render_run(formatter, family, ns.attribute, ns.payload_hex, ns.status)
    if ns.cmd == "export":
        doc = export_schema(formatter.schema)
        write_export(ns.out, doc)
        print(json.dumps({"out": str(ns.out), "families": sorted(doc["families"])}))
        return 0
    if ns.cmd == "report":
        path = write_attribute_reference(ns.out_dir, formatter.schema)
        print(str(path))
        return 0

    raise AssertionError(f"Unhandled cmd: {ns.cmd}")


if __name__ == "__main__":
    raise SystemExit(main())
