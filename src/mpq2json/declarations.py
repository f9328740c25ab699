"""Extract type, global, native and function declarations from JASS source."""

from __future__ import annotations

import re

from mpq2json.lines import iter_lines
from mpq2json.schemas.declarations import (
    Declaration,
    FunctionDeclaration,
    GlobalDeclaration,
    NativeDeclaration,
    Param,
    TypeDeclaration,
)
from mpq2json.schemas.nodes import RecordNode

_TYPE_RE = re.compile(r"type\s+(?P<name>\w+)\s+extends\s+(?P<parent>\w+)")
_NATIVE_RE = re.compile(r"native\s+(?P<name>\w+)\s+takes\s+(?P<prototype>.+)")
_FUNCTION_RE = re.compile(r"function\s+(?P<name>\w+)\s+takes\s+(?P<prototype>.+)")
_GLOBAL_RE = re.compile(
    r"(?P<constant>constant)?\s*(?P<type>\w+)(?:\s+(?P<array>array))?\s+(?P<name>\w+)"
    r"(?:\s*=\s*(?P<value>.+))?"
)
_GLOBALS_START_RE = re.compile(r"^globals\b")
_GLOBALS_END_RE = re.compile(r"^endglobals\b")
_WHITESPACE_RE = re.compile(r"\s{2,}")


def clean_line(line: str) -> str:
    """Drop a trailing ``//`` comment and collapse runs of whitespace."""
    if "//" in line:
        line = line[: line.index("//")]
    return _WHITESPACE_RE.sub(" ", line.strip())


def parse_prototype(prototype: str) -> tuple[list[Param], str]:
    """Split ``<params> returns <type>`` into parameters and return type."""
    takes, _, returns = prototype.partition("returns")
    takes = clean_line(takes)
    params: list[Param] = []
    if takes and takes != "nothing":
        for chunk in takes.split(","):
            parts = chunk.split()
            if len(parts) >= 2:
                params.append(Param(type=parts[0], name=parts[1]))
    return params, clean_line(returns) or "nothing"


def parse_declaration(line: str) -> Declaration | None:
    """Classify one line outside a ``globals`` block."""
    match = _TYPE_RE.search(line)
    if match:
        return TypeDeclaration(name=match.group("name"), extends=match.group("parent"))
    match = _NATIVE_RE.search(line)
    if match:
        takes, returns = parse_prototype(match.group("prototype"))
        return NativeDeclaration(name=match.group("name"), takes=takes, returns=returns)
    match = _FUNCTION_RE.search(line)
    if match:
        takes, returns = parse_prototype(match.group("prototype"))
        return FunctionDeclaration(name=match.group("name"), takes=takes, returns=returns)
    return None


def parse_global(line: str) -> GlobalDeclaration | None:
    """Parse one line inside a ``globals`` block."""
    match = _GLOBAL_RE.match(line)
    if not match:
        return None
    value = match.group("value")
    if value is not None:
        value = value.strip()
        if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
            value = value[1:-1]
    return GlobalDeclaration(
        name=match.group("name"),
        isConstant=match.group("constant") is not None,
        type=match.group("type"),
        isArray=match.group("array") is not None,
        value=value,
    )


def parse_jass(text: str, *, source: str | None = None) -> RecordNode:
    """Parse JASS source into declaration records keyed by name.

    Every record carries a ``symbol`` tag (``type``, ``global``, ``native``
    or ``function``) and keeps its parameters in source order. Lines starting
    with ``private`` are skipped; later declarations of a name replace
    earlier ones.

    Args:
        text: JASS source text.
        source: Optional file name recorded on every declaration.

    Returns:
        Mapping from declaration name to its JSON-compatible record.
    """
    library: RecordNode = {}
    in_globals = False
    for raw_line in iter_lines(text, comment_prefixes=("//",)):
        line = clean_line(raw_line)
        if not line or line.startswith("private"):
            continue

        declaration: Declaration | None
        if in_globals:
            if _GLOBALS_END_RE.match(line):
                in_globals = False
                continue
            declaration = parse_global(line)
        else:
            if _GLOBALS_START_RE.match(line):
                in_globals = True
                continue
            declaration = parse_declaration(line)

        if declaration is None:
            continue
        if source is not None:
            declaration.source = source
        library[declaration.name] = declaration.model_dump(exclude_none=True)
    return library
