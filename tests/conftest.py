"""Test setup for mpq2json."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


TRIGGER_STRINGS = """\
[TriggerActionStrings]
DoStuff="Do Stuff"
DoStuff="Does stuff to a unit."
DoStuffHint="Use with care."
"""

TRIGGER_DATA = """\
[TriggerCategories]
TC_HERO=Hero,ReplaceableTextures\\CommandButtons\\BTNHeroPaladin

[TriggerActions]
DoStuff=0,unit,integer
_DoStuff_Defaults=_,5
_DoStuff_Category=TC_HERO
"""

ACTION_UI = """\
[DzAPI_DoStuff]
title = "Do Stuff"
description = "Does stuff"
category = TC_HERO
[[.args]]
type = unit
[[.args]]
type = integer
default = "5"
"""

COMMON_J = """\
type widget extends handle
type unit extends widget
globals
    constant integer MAX_PLAYERS = 16
endglobals
native GetUnitX takes unit whichUnit returns real
"""


@pytest.fixture
def we_root(tmp_path: Path) -> Path:
    """A minimal world-editor distribution on disk."""
    root = tmp_path / "we"
    files = {
        "jass/system/ht/common.j": COMMON_J,
        "jass/japi/extra.j": "native ExtraThing takes nothing returns nothing\n",
        "share/mpq/dzapi2/action.txt": ACTION_UI,
        "share/mpq/dzapi2/define.txt": "[TriggerCategories]\nTC_HERO=Hero,BTNHero\n",
        "share/mpq/dzapi/ui/TriggerStrings.txt": TRIGGER_STRINGS,
        "share/mpq/dzapi/ui/TriggerData.txt": TRIGGER_DATA,
    }
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root
