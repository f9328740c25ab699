"""Split raw document text into logical lines."""

from __future__ import annotations

import re
from typing import Iterator

DEFAULT_COMMENT_PREFIXES: tuple[str, ...] = (";", "#", "//")

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def iter_lines(
    text: str, comment_prefixes: tuple[str, ...] = DEFAULT_COMMENT_PREFIXES
) -> Iterator[str]:
    """Yield trimmed, non-blank lines that are not comments."""
    for raw_line in _LINE_BREAK_RE.split(text):
        line = raw_line.strip()
        if not line or line.startswith(comment_prefixes):
            continue
        yield line


def split_csv(value: str, *, strip: bool = True) -> list[str]:
    """Split a comma-separated field list, keeping empty positions."""
    parts = value.split(",")
    if strip:
        return [part.strip() for part in parts]
    return parts
