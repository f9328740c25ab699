"""Command-line entry point: ``python -m mpq2json``."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from mpq2json.cache import DocumentCache
from mpq2json.config import (
    MPQ2JSON_LEGACY_ENCODING,
    MPQ2JSON_LOG_LEVEL,
    MPQ2JSON_OUTPUT_DIR,
    MPQ2JSON_WE_PATH,
)
from mpq2json.conversion import ConversionOptions, convert_all
from mpq2json.documents import parse_document
from mpq2json.exceptions import ConfigurationError, Mpq2jsonError
from mpq2json.schemas.conversion import DocumentKind
from mpq2json.store import dumps_tree, read_source_text, write_json_tree
from mpq2json.typings import generate_typings
from mpq2json.utils.logging_config import configure_logging, get_logger

logger = get_logger("mpq2json")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mpq2json",
        description="Convert world-editor trigger and JASS sources into JSON trees.",
    )
    parser.add_argument("--log-level", default=MPQ2JSON_LOG_LEVEL, help="Logging level (default: %(default)s)")
    commands = parser.add_subparsers(dest="command", required=True)

    convert = commands.add_parser("convert", help="Convert a whole world-editor distribution")
    convert.add_argument("--we", default=MPQ2JSON_WE_PATH, help="World-editor root (env: MPQ2JSON_WE_PATH)")
    convert.add_argument("--out", default=str(MPQ2JSON_OUTPUT_DIR), help="Output directory (default: %(default)s)")
    convert.add_argument("--no-merge", action="store_true", help="Do not merge TriggerStrings with TriggerData")

    parse = commands.add_parser("parse", help="Convert a single document")
    parse.add_argument("kind", choices=[kind.value for kind in DocumentKind], help="Document dialect")
    parse.add_argument("src", help="Source text file")
    parse.add_argument("dest", nargs="?", help="Output JSON file (default: stdout)")
    parse.add_argument("--encoding", default=None, help="Source encoding")

    typings = commands.add_parser("typings", help="Generate .d.ts files from JASS JSON trees")
    typings.add_argument("src", nargs="+", help="JASS JSON trees")
    typings.add_argument(
        "--docs", action="append", default=[], help="Trigger-UI JSON tree or source file for doc comments"
    )
    typings.add_argument("--out", default=".", help="Output directory (default: %(default)s)")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    try:
        if args.command == "convert":
            return _convert(args)
        if args.command == "parse":
            return _parse(args)
        return _typings(args)
    except Mpq2jsonError as exc:
        logger.error("%s", exc)
        return 1


def _convert(args: argparse.Namespace) -> int:
    if not args.we:
        raise ConfigurationError("World-editor root not set; pass --we or set MPQ2JSON_WE_PATH")
    we_root = Path(args.we).expanduser()
    if not we_root.is_dir():
        raise ConfigurationError(f"World-editor root not found: {we_root}")
    options = ConversionOptions(
        we_root=we_root,
        output_dir=Path(args.out).expanduser(),
        merge_trigger_tables=not args.no_merge,
    )
    report = asyncio.run(convert_all(options))
    return 0 if report.ok else 1


def _parse(args: argparse.Namespace) -> int:
    kind = DocumentKind(args.kind)
    encoding = args.encoding or (MPQ2JSON_LEGACY_ENCODING if kind is DocumentKind.EDIT_STRINGS else "utf-8")
    tree = parse_document(kind, read_source_text(Path(args.src), encoding))
    if args.dest:
        write_json_tree(Path(args.dest), tree)
        logger.info("Wrote %d entries to %s", len(tree), args.dest)
    else:
        sys.stdout.write(dumps_tree(tree) + "\n")
    return 0


def _typings(args: argparse.Namespace) -> int:
    # Doc sources are parsed once per run.
    cache = DocumentCache()
    docs_paths = [Path(path) for path in args.docs]
    for src in args.src:
        target = generate_typings(Path(src), Path(args.out), cache, docs_paths=docs_paths)
        logger.info("Wrote %s", target)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
