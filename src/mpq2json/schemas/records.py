"""Trigger-UI record models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ArgRecord(BaseModel):
    """One positional argument of a trigger function.

    Only ``type`` is known when the placeholder is allocated; the optional
    fields are filled in later by ``_Defaults`` and ``_Limits`` lines.
    """

    type: str
    default: str | None = None
    min: str | None = None
    max: str | None = None


class UiRecord(BaseModel):
    """A trigger event, condition, action or call."""

    category: str | None = None
    script: str | None = None
    use_in_event: str | None = None
    returns: str | None = None
    args: list[ArgRecord] | None = Field(default=None)

    def to_node(self) -> dict:
        """Dump to a JSON-compatible record, leaving unset fields out."""
        return self.model_dump(exclude_none=True)
