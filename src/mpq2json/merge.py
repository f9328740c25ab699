"""Merge document trees parsed from separate sources."""

from __future__ import annotations

from typing import Mapping

from mpq2json.schemas.nodes import Node, RecordNode, is_record, is_sequence


def merge(primary: Mapping[str, Node], secondary: Mapping[str, Node]) -> RecordNode:
    """Union two trees; ``secondary`` wins where both define a value.

    Records present on both sides are merged key by key, recursively, so a
    label record and a data record for the same identifier end up as one
    record carrying both sets of fields. Any other collision (scalar or
    sequence) takes the ``secondary`` value whole. Neither input is mutated.

    The union is deep on purpose: a per-key shallow union would drop the
    labels of an identifier whenever its data record is merged over them.
    """
    result: RecordNode = {key: _copy(value) for key, value in primary.items()}
    for key, value in secondary.items():
        current = result.get(key)
        if is_record(current) and is_record(value):
            result[key] = merge(current, value)
        else:
            result[key] = _copy(value)
    return result


def persist_merge(fresh: Mapping[str, Node], persisted: Mapping[str, Node]) -> RecordNode:
    """Layer previously persisted output over a freshly parsed tree.

    Values already on disk win, so hand edits survive re-running a parse.
    """
    return merge(fresh, persisted)


def _copy(node: Node) -> Node:
    if is_record(node):
        return {key: _copy(value) for key, value in node.items()}
    if is_sequence(node):
        return [_copy(item) for item in node]
    return node
