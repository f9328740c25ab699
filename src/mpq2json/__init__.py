"""mpq2json: convert world-editor trigger and JASS sources into JSON trees."""

from mpq2json.cache import DocumentCache
from mpq2json.conversion import ConversionOptions, convert_all, convert_document, plan_jobs
from mpq2json.declarations import parse_jass
from mpq2json.documents import (
    parse_document,
    parse_edit_strings,
    parse_trigger_data,
    parse_trigger_define,
    parse_trigger_strings,
    parse_trigger_ui,
)
from mpq2json.exceptions import (
    ConfigurationError,
    MergeTargetError,
    Mpq2jsonError,
    OutputWriteError,
    ParseError,
    SourceReadError,
)
from mpq2json.merge import merge, persist_merge
from mpq2json.schemas import ConversionReport, DocumentKind
from mpq2json.typings import generate_typings, render_declarations

__all__ = [
    "ConfigurationError",
    "ConversionOptions",
    "ConversionReport",
    "DocumentCache",
    "DocumentKind",
    "MergeTargetError",
    "Mpq2jsonError",
    "OutputWriteError",
    "ParseError",
    "SourceReadError",
    "convert_all",
    "convert_document",
    "generate_typings",
    "merge",
    "parse_document",
    "parse_edit_strings",
    "parse_jass",
    "parse_trigger_data",
    "parse_trigger_define",
    "parse_trigger_strings",
    "parse_trigger_ui",
    "persist_merge",
    "plan_jobs",
    "render_declarations",
]
