"""Document tree node variant."""

from __future__ import annotations

from typing import TypeAlias, TypeGuard, Union

# A node is a scalar string, a record of named nodes, or a sequence of nodes
# produced when a section name repeats at the same depth.
Node: TypeAlias = Union[str, dict[str, "Node"], list["Node"]]
RecordNode: TypeAlias = dict[str, Node]
SequenceNode: TypeAlias = list[Node]


def is_scalar(node: object) -> TypeGuard[str]:
    return isinstance(node, str)


def is_record(node: object) -> TypeGuard[RecordNode]:
    return isinstance(node, dict)


def is_sequence(node: object) -> TypeGuard[SequenceNode]:
    return isinstance(node, list)
