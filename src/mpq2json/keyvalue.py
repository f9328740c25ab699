"""Split ``key=value`` lines and decode dialect escapes."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

_CONTROL_CHARS_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


@dataclass(frozen=True)
class EscapeRules:
    """Ordered literal substitutions applied to a decoded value.

    Attributes:
        replacements: ``(old, new)`` pairs applied in order after the
            enclosing quotes are stripped.
        strip_control: If True, remove ASCII control characters.
        trim_value: If True, trim the value again after substitution.
        unquote: If True, strip one layer of enclosing double quotes before
            the replacements run.
    """

    replacements: tuple[tuple[str, str], ...] = field(default_factory=tuple)
    strip_control: bool = False
    trim_value: bool = False
    unquote: bool = True

    def decode(self, value: str) -> str:
        for old, new in self.replacements:
            value = value.replace(old, new)
        if self.strip_control:
            value = _CONTROL_CHARS_RE.sub("", value)
        if self.trim_value:
            value = value.strip()
        return value


# Nested trigger-UI files quote most values and escape quotes inside them.
TRIGGER_UI_RULES = EscapeRules(
    replacements=(('\\"', '"'), ("\\\\", "\\")),
)
TABLE_RULES = EscapeRules(replacements=(('"', "'"),), trim_value=True)
EDIT_STRINGS_RULES = EscapeRules(strip_control=True, trim_value=True)
PLAIN_RULES = EscapeRules()
# Comma-separated trigger fields quote individual items, so the value is left
# exactly as written.
RAW_RULES = EscapeRules(unquote=False)


def strip_quotes(value: str) -> str:
    """Remove one layer of enclosing double quotes, if present."""
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value


def split_key_value(line: str, rules: EscapeRules = PLAIN_RULES) -> tuple[str, str] | None:
    """Split ``line`` on its first ``=`` and decode the value.

    Returns:
        ``(key, value)``; the value is ``""`` when nothing follows ``=``.
        None when the line has no ``=`` or an empty key.
    """
    key, sep, value = line.partition("=")
    if not sep:
        return None
    key = key.strip()
    if not key:
        return None
    value = value.strip()
    if rules.unquote:
        value = strip_quotes(value)
    return key, rules.decode(value)
