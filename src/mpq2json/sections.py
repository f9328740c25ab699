"""Track nested section headers and build the document tree."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable

from mpq2json.exceptions import ParseError
from mpq2json.keyvalue import strip_quotes
from mpq2json.schemas.nodes import RecordNode, is_record, is_sequence
from mpq2json.utils.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SectionHeader:
    """A bracketed section header.

    Attributes:
        depth: Number of enclosing brackets; ``[A]`` is 1, ``[[A]]`` is 2.
        name: Normalized section name.
    """

    depth: int
    name: str


def is_section_line(line: str) -> bool:
    return line.startswith("[") and line.endswith("]")


def parse_section_header(line: str) -> SectionHeader:
    """Parse a header line into its depth and normalized name.

    The name has one layer of double quotes and any leading dots removed,
    so ``[[.args]]`` and ``[["args"]]`` both name ``args`` at depth 2.

    Raises:
        ParseError: If the bracket runs differ in length or the name is empty.
    """
    opening = len(line) - len(line.lstrip("["))
    closing = len(line) - len(line.rstrip("]"))
    if opening == 0 or opening != closing or opening * 2 >= len(line):
        raise ParseError(f"Unbalanced section header: {line!r}")

    name = strip_quotes(line[opening:-closing].strip()).strip().lstrip(".")
    if not name:
        raise ParseError(f"Empty section name: {line!r}")
    return SectionHeader(depth=opening, name=name)


class SectionPathTracker:
    """Maintain the section path while walking a document.

    The tracker owns the root of the tree it builds. Each call to
    :meth:`enter` opens a node for a header and returns it; key/value lines
    that follow are written into that node by the caller.
    """

    def __init__(self) -> None:
        self.root: RecordNode = {}
        self.path: list[str] = []

    def enter(self, header: SectionHeader) -> RecordNode:
        """Open the node for ``header`` and return it.

        Raises:
            ParseError: If a depth is skipped or the parent path does not
                resolve to a record. The path and tree are left unchanged.
        """
        depth = header.depth
        if depth > len(self.path) + 1:
            raise ParseError(
                f"Section {header.name!r} at depth {depth} has no parent "
                f"(current depth {len(self.path)})"
            )

        parent = self._resolve(self.path[: depth - 1])
        previous = self.path[depth - 1] if depth <= len(self.path) else None
        existing = parent.get(header.name)
        node: RecordNode = {}

        if previous == header.name and existing is not None:
            if is_sequence(existing):
                existing.append(node)
            else:
                parent[header.name] = [existing, node]
        else:
            parent[header.name] = node

        del self.path[depth - 1 :]
        self.path.append(header.name)
        return node

    def _resolve(self, names: list[str]) -> RecordNode:
        node: RecordNode = self.root
        for name in names:
            child = node.get(name)
            if is_sequence(child):
                child = child[-1] if child else None
            if not is_record(child):
                raise ParseError(f"Section path {'/'.join(names)!r} does not resolve")
            node = child
        return node


def build_section_tree(
    lines: Iterable[str], on_value: Callable[[RecordNode, str], None]
) -> RecordNode:
    """Drive a :class:`SectionPathTracker` over ``lines``.

    ``on_value(node, line)`` is called for every non-header line with the
    currently open node. Lines before the first header land in the root;
    lines under a skipped header are dropped.
    """
    tracker = SectionPathTracker()
    current: RecordNode | None = tracker.root
    for line in lines:
        if is_section_line(line):
            try:
                current = tracker.enter(parse_section_header(line))
            except ParseError as exc:
                logger.debug("Skipping section header: %s", exc)
                current = None
            continue
        if current is not None:
            on_value(current, line)
    return tracker.root
