"""Shared schemas for mpq2json."""

from mpq2json.schemas.conversion import (
    ConversionFailure,
    ConversionJob,
    ConversionReport,
    DocumentKind,
)
from mpq2json.schemas.declarations import (
    Declaration,
    FunctionDeclaration,
    GlobalDeclaration,
    NativeDeclaration,
    Param,
    TypeDeclaration,
)
from mpq2json.schemas.nodes import Node, RecordNode, SequenceNode, is_record, is_scalar, is_sequence
from mpq2json.schemas.records import ArgRecord, UiRecord

__all__ = [
    "ArgRecord",
    "ConversionFailure",
    "ConversionJob",
    "ConversionReport",
    "Declaration",
    "DocumentKind",
    "FunctionDeclaration",
    "GlobalDeclaration",
    "NativeDeclaration",
    "Node",
    "Param",
    "RecordNode",
    "SequenceNode",
    "TypeDeclaration",
    "UiRecord",
    "is_record",
    "is_scalar",
    "is_sequence",
]
