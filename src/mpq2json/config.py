"""Local configuration for mpq2json."""

from __future__ import annotations

import os
from pathlib import Path


DEFAULT_OUTPUT_DIR = "dist"
DEFAULT_LEGACY_ENCODING = "gb18030"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_MPQ_FOLDERS = "bzapi,dzapi2,japi,kkapi,ydwe"

# Root of the world-editor distribution; older setups export it as ``ydwe``.
MPQ2JSON_WE_PATH = os.getenv("MPQ2JSON_WE_PATH") or os.getenv("ydwe") or None
MPQ2JSON_OUTPUT_DIR = Path(os.getenv("MPQ2JSON_OUTPUT_DIR", DEFAULT_OUTPUT_DIR)).expanduser().resolve()
# WorldEditStrings.txt ships in a legacy Chinese code page.
MPQ2JSON_LEGACY_ENCODING = os.getenv("MPQ2JSON_LEGACY_ENCODING", DEFAULT_LEGACY_ENCODING)
MPQ2JSON_LOG_LEVEL = os.getenv("MPQ2JSON_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
MPQ2JSON_MPQ_FOLDERS = tuple(
    folder.strip()
    for folder in os.getenv("MPQ2JSON_MPQ_FOLDERS", DEFAULT_MPQ_FOLDERS).split(",")
    if folder.strip()
)
