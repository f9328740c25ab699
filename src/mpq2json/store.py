"""Read and write persisted JSON trees."""

from __future__ import annotations

import asyncio
import codecs
import json
from pathlib import Path

from mpq2json.exceptions import MergeTargetError, OutputWriteError, SourceReadError
from mpq2json.merge import persist_merge
from mpq2json.schemas.nodes import RecordNode, is_record

JSON_INDENT = 2


def read_source_text(path: Path, encoding: str = "utf-8") -> str:
    """Read a source document.

    Undecodable bytes are replaced rather than raised, so one bad byte in a
    legacy file does not lose the whole document. A UTF-8 byte-order mark is
    dropped.

    Raises:
        SourceReadError: If the file is missing or cannot be read.
    """
    try:
        if codecs.lookup(encoding).name == "utf-8":
            encoding = "utf-8-sig"
        return path.read_text(encoding=encoding, errors="replace")
    except (OSError, LookupError) as exc:
        raise SourceReadError(f"Cannot read {path}: {exc}") from exc


def dumps_tree(tree: RecordNode) -> str:
    return json.dumps(tree, ensure_ascii=False, indent=JSON_INDENT)


def write_json_tree(path: Path, tree: RecordNode) -> None:
    """Write ``tree`` as UTF-8, 2-space indented JSON, creating parent dirs.

    Raises:
        OutputWriteError: If the directory or file cannot be written.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dumps_tree(tree), encoding="utf-8")
    except OSError as exc:
        raise OutputWriteError(f"Cannot write {path}: {exc}") from exc


def read_json_tree(path: Path) -> RecordNode | None:
    """Load a persisted tree.

    Returns:
        The tree, or None if ``path`` does not exist.

    Raises:
        MergeTargetError: If the file exists but is not a JSON object.
    """
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise MergeTargetError(f"Cannot load merge target {path}: {exc}") from exc
    if not is_record(data):
        raise MergeTargetError(f"Merge target {path} does not hold a JSON object")
    return data


def persist_merge_file(path: Path, fresh: RecordNode) -> RecordNode:
    """Merge ``fresh`` under the tree already stored at ``path`` and write it.

    This is a read-modify-write of ``path``; concurrent callers targeting the
    same file must be serialized by the caller.

    Raises:
        MergeTargetError: If the stored tree is corrupt. Nothing is written.
        OutputWriteError: If the merged tree cannot be written.
    """
    persisted = read_json_tree(path)
    merged = persist_merge(fresh, persisted) if persisted is not None else fresh
    write_json_tree(path, merged)
    return merged


async def read_source_text_async(path: Path, encoding: str = "utf-8") -> str:
    """Read a source document in a worker thread."""
    return await asyncio.to_thread(read_source_text, path, encoding)


async def write_json_tree_async(path: Path, tree: RecordNode) -> None:
    """Write a tree in a worker thread."""
    await asyncio.to_thread(write_json_tree, path, tree)


async def persist_merge_file_async(path: Path, fresh: RecordNode) -> RecordNode:
    """Run :func:`persist_merge_file` in a worker thread."""
    return await asyncio.to_thread(persist_merge_file, path, fresh)
