"""Custom exceptions for mpq2json."""


class Mpq2jsonError(Exception):
    """Base exception for mpq2json operations."""


class ParseError(Mpq2jsonError):
    """A single line or header could not be parsed."""


class SourceReadError(Mpq2jsonError):
    """Source document is missing or unreadable."""


class OutputWriteError(Mpq2jsonError):
    """Converted output could not be written."""


class MergeTargetError(Mpq2jsonError):
    """Previously persisted output exists but is not valid JSON."""


class ConfigurationError(Mpq2jsonError):
    """Required configuration is missing or invalid."""
