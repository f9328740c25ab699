"""Map definition-table values to named fields by section."""

from __future__ import annotations

from typing import Final

from mpq2json.lines import split_csv

# Section name -> ordered field names for its comma-separated values.
DEFINITION_SCHEMAS: Final[dict[str, tuple[str, ...]]] = {
    "TriggerCategories": ("display", "icon"),
    # version: TFT-only (1) or RoC and TFT (0); global: can be a global
    # variable; comparison: usable with comparison operators; baseType is only
    # set for custom types.
    "TriggerTypes": ("version", "global", "comparison", "display", "baseType"),
    "TriggerTypeDefaults": ("default", "display"),
    "TriggerParams": ("version", "type", "code", "display"),
}

# Sections whose values are kept verbatim.
PASSTHROUGH_SECTIONS: Final[frozenset[str]] = frozenset(
    {"AIFunctionStrings", "DefaultTriggerCategories", "DefaultTriggers"}
)


def zip_fields(fields: tuple[str, ...], value: str) -> dict[str, str]:
    """Zip comma-separated ``value`` onto ``fields``; missing fields are ``""``."""
    parts = split_csv(value)
    return {name: parts[index] if index < len(parts) else "" for index, name in enumerate(fields)}


def map_definition(section: str, value: str) -> dict[str, str] | str | None:
    """Build the record for one ``key=value`` line of ``section``.

    Returns:
        A field record for schema sections, the raw value for pass-through
        sections, or None for unknown sections and empty values.
    """
    if value == "":
        return None
    fields = DEFINITION_SCHEMAS.get(section)
    if fields is not None:
        return zip_fields(fields, value)
    if section in PASSTHROUGH_SECTIONS:
        return value
    return None
