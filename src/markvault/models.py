"""Pydantic models for task items and toggle results."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class MarkvaultModel(BaseModel):
    """Base model for markvault output objects.

    - extra="ignore": tolerant of extra keys when loading saved output
    - frozen=True: results are values, not records to mutate
    """

    model_config = ConfigDict(extra="ignore", frozen=True)


class TaskItem(MarkvaultModel):
    """A ``- [ ]`` / ``- [x]`` line found in a markdown source."""

    line: int = Field(ge=0, description="Zero-based source line index.")
    checked: bool
    text: str


class ToggleResult(MarkvaultModel):
    """Outcome of a checkbox toggle request."""

    line: int
    checked: bool
    changed: bool
