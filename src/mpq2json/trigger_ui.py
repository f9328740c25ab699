"""Demultiplex suffix-encoded trigger fields into UI records.

TriggerData.txt spreads one trigger function over several keys::

    DoStuff=0,integer,unit
    _DoStuff_Defaults=5,_
    _DoStuff_Limits=_,_,10,0
    _DoStuff_Category=TC_HERO

The bare key carries the argument type list; each ``_Suffix`` key adds to
the record built from it.
"""

from __future__ import annotations

from typing import Callable, Final

from mpq2json.lines import split_csv
from mpq2json.schemas.records import ArgRecord, UiRecord
from mpq2json.utils.logging_config import get_logger

logger = get_logger(__name__)

TRIGGER_UI_SECTIONS: Final[frozenset[str]] = frozenset(
    {"TriggerEvents", "TriggerConditions", "TriggerActions", "TriggerCalls"}
)
CALLS_SECTION: Final[str] = "TriggerCalls"

# Both sentinels mark "no value" in the source files.
UNSET_SENTINELS: Final[frozenset[str]] = frozenset({"", "_"})
LIMIT_SENTINEL: Final[str] = "_"


def split_ui_key(raw_key: str) -> tuple[str, str]:
    """Split a raw key into its base name and suffix.

    Keys without a leading underscore never carry a suffix. For
    ``_Base_Suffix`` the last underscore token is the suffix, whether or not
    it is one this module handles; ``_Base`` alone has no suffix.

    Returns:
        ``(base, suffix)`` where ``suffix`` includes its underscore
        (``"_Defaults"``) or is ``""``.
    """
    if not raw_key.startswith("_"):
        return raw_key, ""
    body = raw_key[1:]
    base, sep, token = body.rpartition("_")
    if sep and base and token:
        return base, f"_{token}"
    return body, ""


class TriggerUiSection:
    """Accumulate the UI records of one trigger section.

    Records are created lazily, the first time a key contributes a field,
    so keys that only carry ignored suffixes leave no trace.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.records: dict[str, UiRecord] = {}
        self._handlers: dict[str, Callable[[str, str], None]] = {
            "": self._apply_signature,
            "_Defaults": self._apply_defaults,
            "_Limits": self._apply_limits,
            "_Category": self._apply_category,
            "_ScriptName": self._apply_script_name,
        }

    def apply(self, raw_key: str, value: str) -> None:
        base, suffix = split_ui_key(raw_key)
        handler = self._handlers.get(suffix)
        if handler is None:
            return
        handler(base, value)

    def to_node(self) -> dict:
        return {key: record.to_node() for key, record in self.records.items()}

    def _record(self, key: str) -> UiRecord:
        record = self.records.get(key)
        if record is None:
            record = self.records[key] = UiRecord()
        return record

    def _apply_signature(self, key: str, value: str) -> None:
        fields = split_csv(value, strip=False)
        record = self._record(key)
        if self.name == CALLS_SECTION:
            if len(fields) > 1:
                record.use_in_event = fields[1]
            if len(fields) > 2:
                record.returns = fields[2]
            fields = fields[3:]
        else:
            # First field is the "editable" flag.
            fields = fields[1:]
        if fields:
            record.args = [ArgRecord(type=arg_type) for arg_type in fields]

    def _apply_defaults(self, key: str, value: str) -> None:
        record = self.records.get(key)
        if record is None or not record.args:
            logger.debug("Dropping %s_Defaults: no argument list yet", key)
            return
        for arg, default in zip(record.args, split_csv(value, strip=False)):
            if default not in UNSET_SENTINELS:
                arg.default = default

    def _apply_limits(self, key: str, value: str) -> None:
        record = self.records.get(key)
        if record is None or not record.args:
            logger.debug("Dropping %s_Limits: no argument list yet", key)
            return
        bounds = split_csv(value, strip=False)[2:]
        for index, (arg, bound) in enumerate(zip(record.args, bounds)):
            if bound == LIMIT_SENTINEL:
                continue
            if index % 2 == 0:
                arg.max = bound
            else:
                arg.min = bound

    def _apply_category(self, key: str, value: str) -> None:
        self._record(key).category = value

    def _apply_script_name(self, key: str, value: str) -> None:
        self._record(key).script = value
