"""Generate TypeScript declaration files from parsed JASS trees."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Mapping

from mpq2json.cache import DocumentCache
from mpq2json.documents import parse_trigger_ui
from mpq2json.exceptions import OutputWriteError, SourceReadError
from mpq2json.merge import merge
from mpq2json.schemas.nodes import Node, RecordNode, is_record, is_scalar, is_sequence
from mpq2json.utils.logging_config import get_logger

logger = get_logger(__name__)

FILE_HEADER = "/** @noSelfInFile */"

# Parameter names that are reserved words in TypeScript.
_RENAMED_PARAMS = {"var": "val"}


def render_declarations(library: Mapping[str, Node], docs: Mapping[str, Node] | None = None) -> str:
    """Render a JASS declaration tree as ``.d.ts`` text.

    Args:
        library: Declaration records keyed by name, each with a ``symbol``.
        docs: Optional trigger-UI tree keyed by the same identifiers. Entries
            that match a declaration add a JSDoc block above it.

    Returns:
        The declaration file contents.
    """
    index = build_doc_index(docs or {})
    out = [FILE_HEADER, ""]
    for name, record in library.items():
        if not is_record(record):
            continue
        rendered = _render_record(record)
        if rendered is None:
            logger.debug("Skipping %s: unknown symbol %r", name, record.get("symbol"))
            continue
        doc = index.get(str(record.get("name", name)))
        if doc is not None:
            out.extend(render_doc_comment(doc, record.get("takes") or []))
        out.append(rendered)
    return "\n".join(out) + "\n"


def build_doc_index(docs: Mapping[str, Node]) -> dict[str, RecordNode]:
    """Index trigger-UI entries by key and by their script name."""
    index: dict[str, RecordNode] = {}
    for key, entry in docs.items():
        if not is_record(entry):
            continue
        index.setdefault(key, entry)
        for field in ("script_name", "script"):
            script = entry.get(field)
            if is_scalar(script) and script:
                index.setdefault(script, entry)
    return index


def render_doc_comment(entry: Mapping[str, Node], takes: Iterable[Node]) -> list[str]:
    """Build a JSDoc block from a trigger-UI entry.

    Argument records are matched to parameters by position.
    """
    body: list[str] = []
    for field in ("title", "description", "comment"):
        text = entry.get(field)
        if is_scalar(text) and text:
            if body:
                body.append("")
            body.append(_escape_doc(text))

    args = _as_records(entry.get("args"))
    for param, arg in zip(takes, args):
        if not is_record(param):
            continue
        name = _param_name(str(param.get("name", "")))
        notes = [arg["comment"]] if is_scalar(arg.get("comment")) else []
        for bound in ("default", "min", "max"):
            if is_scalar(arg.get(bound)):
                notes.append(f"{bound}: {arg[bound]}")
        body.append(f"@param {name} {_escape_doc(', '.join(notes))}".rstrip())

    if not body:
        return []
    return ["/**", *(f" * {line}".rstrip() for line in body), " */"]


def generate_typings(
    json_path: Path,
    out_dir: Path,
    cache: DocumentCache,
    *,
    docs_paths: Iterable[Path] = (),
) -> Path:
    """Write ``<out_dir>/<stem>.d.ts`` for a persisted JASS tree.

    Documentation trees are merged in the given order, later ones winning.
    A ``.json`` path is a persisted tree; any other path is a trigger-UI
    source file parsed through ``cache``.

    Raises:
        SourceReadError: If ``json_path`` does not exist.
        MergeTargetError: If a JSON input is corrupt.
        OutputWriteError: If the declaration file cannot be written.
    """
    library = cache.get_json(json_path)
    if library is None:
        raise SourceReadError(f"Declaration tree not found: {json_path}")

    docs: RecordNode = {}
    for doc_path in docs_paths:
        tree = _load_docs(doc_path, cache)
        if tree is None:
            logger.warning("Documentation tree not found: %s", doc_path)
            continue
        docs = merge(docs, tree)

    target = out_dir / f"{json_path.stem}.d.ts"
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
        target.write_text(render_declarations(library, docs), encoding="utf-8")
    except OSError as exc:
        raise OutputWriteError(f"Cannot write {target}: {exc}") from exc
    return target


def _load_docs(path: Path, cache: DocumentCache) -> RecordNode | None:
    if path.suffix.lower() == ".json":
        return cache.get_json(path)
    if not path.is_file():
        return None
    return cache.get(path, parse_trigger_ui)


def _render_record(record: Mapping[str, Node]) -> str | None:
    symbol = record.get("symbol")
    name = record.get("name")
    nullable = " | undefined" if record.get("isNullable") else ""
    if symbol == "type":
        return f"declare interface {name} extends {record.get('extends')} {{ __{name}: never; }}"
    if symbol == "global":
        keyword = "const" if record.get("isConstant") else "var"
        value_type = f"{record.get('type')}{nullable}"
        if record.get("isArray"):
            value_type = f"Record<number, {value_type}>"
        return f"declare {keyword} {name}: {value_type};"
    if symbol in ("native", "function"):
        params = _render_params([p for p in record.get("takes") or [] if is_record(p)])
        return f"declare function {name}({params}): {record.get('returns')}{nullable};"
    return None


def _render_params(takes: list[RecordNode]) -> str:
    # A nullable parameter may only be optional if every one after it is too.
    optional = [False] * len(takes)
    allow = True
    for i in range(len(takes) - 1, -1, -1):
        allow = allow and bool(takes[i].get("isNullable"))
        optional[i] = allow

    rendered = []
    for param, is_optional in zip(takes, optional):
        name = _param_name(str(param.get("name")))
        param_type = param.get("type")
        if not param.get("isNullable"):
            rendered.append(f"{name}: {param_type}")
        elif is_optional:
            rendered.append(f"{name}?: {param_type}")
        else:
            rendered.append(f"{name}: {param_type} | undefined")
    return ", ".join(rendered)


def _param_name(name: str) -> str:
    return _RENAMED_PARAMS.get(name, name)


def _as_records(node: Node | None) -> list[RecordNode]:
    if is_record(node):
        return [node]
    if is_sequence(node):
        return [item for item in node if is_record(item)]
    return []


def _escape_doc(text: str) -> str:
    return text.replace("*/", "*\\/")
