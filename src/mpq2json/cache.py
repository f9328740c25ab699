"""Read-through cache for parsed documents."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from mpq2json.schemas.nodes import RecordNode
from mpq2json.store import read_json_tree, read_source_text


class DocumentCache:
    """Parse each document once and reuse the tree until the file changes.

    A cache instance is passed explicitly to whatever needs cross-document
    lookups; entries are keyed by resolved path and invalidated when the
    file's modification time changes.
    """

    def __init__(self) -> None:
        self._entries: dict[Path, tuple[float, RecordNode]] = {}

    def get(
        self,
        path: Path,
        parser: Callable[[str], RecordNode],
        *,
        encoding: str = "utf-8",
    ) -> RecordNode:
        """Return the tree for a source document, parsing it on a miss.

        Raises:
            SourceReadError: If the file is missing or cannot be read.
        """
        key = path.resolve()
        mtime = self._mtime(key)
        cached = self._entries.get(key)
        if cached is not None and cached[0] == mtime:
            return cached[1]
        tree = parser(read_source_text(key, encoding))
        self._entries[key] = (mtime, tree)
        return tree

    def get_json(self, path: Path) -> RecordNode | None:
        """Return a persisted JSON tree, or None if the file does not exist.

        Raises:
            MergeTargetError: If the file is not a JSON object.
        """
        key = path.resolve()
        if not key.exists():
            self._entries.pop(key, None)
            return None
        mtime = self._mtime(key)
        cached = self._entries.get(key)
        if cached is not None and cached[0] == mtime:
            return cached[1]
        tree = read_json_tree(key)
        if tree is None:
            return None
        self._entries[key] = (mtime, tree)
        return tree

    @staticmethod
    def _mtime(path: Path) -> float:
        try:
            return path.stat().st_mtime
        except OSError:
            return -1.0
