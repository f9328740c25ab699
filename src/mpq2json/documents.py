"""Parse each trigger document kind into a JSON-compatible tree."""

from __future__ import annotations

from typing import Callable, Iterator

from mpq2json.declarations import parse_jass
from mpq2json.definitions import map_definition
from mpq2json.exceptions import ParseError
from mpq2json.keyvalue import (
    EDIT_STRINGS_RULES,
    RAW_RULES,
    TABLE_RULES,
    TRIGGER_UI_RULES,
    EscapeRules,
    split_key_value,
)
from mpq2json.lines import iter_lines
from mpq2json.schemas.conversion import DocumentKind
from mpq2json.schemas.nodes import RecordNode
from mpq2json.sections import build_section_tree, is_section_line, parse_section_header
from mpq2json.trigger_ui import TRIGGER_UI_SECTIONS, TriggerUiSection
from mpq2json.utils.logging_config import get_logger

logger = get_logger(__name__)

_HINT_SUFFIX = "Hint"


def parse_trigger_ui(text: str) -> RecordNode:
    """Parse a nested trigger-UI file (``action.txt``, ``call.txt``, ...).

    Headers may nest to any depth (``[Name]``, ``[[.args]]``, ...). A header
    repeated at the same depth turns its value into a list of blocks.
    """

    def on_value(node: RecordNode, line: str) -> None:
        pair = split_key_value(line, TRIGGER_UI_RULES)
        if pair is None:
            logger.debug("Skipping line without key/value: %r", line)
            return
        key, value = pair
        node[key] = value

    return build_section_tree(iter_lines(text), on_value)


def parse_trigger_define(text: str) -> RecordNode:
    """Parse a ``define.txt`` table into per-section definition records."""
    sections: RecordNode = {}
    for section, key, value in _iter_flat_entries(text, TABLE_RULES, sections):
        record = map_definition(section, value)
        if record is not None:
            sections[section][key] = record
    return _drop_empty(sections)


def parse_trigger_strings(text: str) -> RecordNode:
    """Parse ``TriggerStrings.txt`` into title/description/comment records.

    The first ``Key=`` line sets the title, a repeated ``Key=`` line sets the
    description and ``KeyHint=`` sets the comment of ``Key``.
    """
    sections: RecordNode = {}
    for section, key, value in _iter_flat_entries(text, TABLE_RULES, sections):
        entries = sections[section]
        if key.endswith(_HINT_SUFFIX) and key != _HINT_SUFFIX:
            target = entries.get(key[: -len(_HINT_SUFFIX)])
            if isinstance(target, dict):
                target["comment"] = value
            else:
                logger.debug("Dropping hint %s: no entry for it yet", key)
        elif key in entries:
            entries[key]["description"] = value
        else:
            entries[key] = {"title": value}
    return _drop_empty(sections)


def parse_trigger_data(text: str) -> RecordNode:
    """Parse ``TriggerData.txt``.

    Trigger sections go through :class:`TriggerUiSection`; the remaining
    sections are definition tables.
    """
    tables: RecordNode = {}
    ui_sections: dict[str, TriggerUiSection] = {}
    for section, key, value in _iter_flat_entries(
        text, TABLE_RULES, tables, raw_sections=TRIGGER_UI_SECTIONS
    ):
        if section in TRIGGER_UI_SECTIONS:
            ui = ui_sections.get(section)
            if ui is None:
                ui = ui_sections[section] = TriggerUiSection(section)
            ui.apply(key, value)
            continue
        record = map_definition(section, value)
        if record is not None:
            tables[section][key] = record

    for name, ui in ui_sections.items():
        tables[name] = ui.to_node()
    return _drop_empty(tables)


def parse_edit_strings(text: str) -> RecordNode:
    """Parse ``WorldEditStrings.txt`` into a flat key/value mapping."""
    strings: RecordNode = {}
    for line in iter_lines(text):
        if is_section_line(line):
            continue
        pair = split_key_value(line, EDIT_STRINGS_RULES)
        if pair is None:
            continue
        key, value = pair
        strings[key] = value
    return strings


DOCUMENT_PARSERS: dict[DocumentKind, Callable[[str], RecordNode]] = {
    DocumentKind.JASS: parse_jass,
    DocumentKind.TRIGGER_UI: parse_trigger_ui,
    DocumentKind.TRIGGER_DEFINE: parse_trigger_define,
    DocumentKind.TRIGGER_STRINGS: parse_trigger_strings,
    DocumentKind.TRIGGER_DATA: parse_trigger_data,
    DocumentKind.EDIT_STRINGS: parse_edit_strings,
}


def parse_document(kind: DocumentKind, text: str) -> RecordNode:
    return DOCUMENT_PARSERS[kind](text)


def _iter_flat_entries(
    text: str,
    rules: EscapeRules,
    sections: RecordNode,
    *,
    raw_sections: frozenset[str] = frozenset(),
) -> Iterator[tuple[str, str, str]]:
    """Yield ``(section, key, value)`` for single-depth section documents.

    Every valid header registers an empty record in ``sections``. Lines
    outside a section and lines under a malformed header are skipped.
    Values in ``raw_sections`` skip ``rules`` and are kept as written,
    enclosing quotes included.
    """
    section: str | None = None
    for line in iter_lines(text):
        if is_section_line(line):
            try:
                header = parse_section_header(line)
            except ParseError as exc:
                logger.debug("Skipping section header: %s", exc)
                section = None
                continue
            if header.depth != 1:
                logger.debug("Skipping nested header in flat document: %r", line)
                section = None
                continue
            section = header.name
            sections.setdefault(section, {})
            continue
        if section is None:
            continue
        pair = split_key_value(line, RAW_RULES if section in raw_sections else rules)
        if pair is None:
            continue
        yield section, pair[0], pair[1]


def _drop_empty(sections: RecordNode) -> RecordNode:
    return {name: entries for name, entries in sections.items() if entries}
