"""Conversion job and report models."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class DocumentKind(str, Enum):
    """Enumeration of the source document dialects."""

    JASS = "jass"
    TRIGGER_UI = "trigger_ui"
    TRIGGER_DEFINE = "trigger_define"
    TRIGGER_STRINGS = "trigger_strings"
    TRIGGER_DATA = "trigger_data"
    EDIT_STRINGS = "edit_strings"


class ConversionJob(BaseModel):
    """One source document and where its JSON tree goes."""

    kind: DocumentKind
    source: Path
    destination: Path
    encoding: str = "utf-8"


class ConversionFailure(BaseModel):
    """A document or merge target that could not be processed."""

    path: Path
    error: str


class ConversionReport(BaseModel):
    """Outcome of a batch run."""

    written: list[Path] = Field(default_factory=list)
    failed: list[ConversionFailure] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed
