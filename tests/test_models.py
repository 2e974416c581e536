"""Tests for Pydantic models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from markvault.models import TaskItem, ToggleResult


class TestTaskItemModel:
    def test_valid_item(self) -> None:
        item = TaskItem(line=3, checked=True, text="ship it")
        assert item.line == 3
        assert item.checked is True
        assert item.text == "ship it"

    def test_negative_line_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TaskItem(line=-1, checked=False, text="x")

    def test_extra_fields_ignored(self) -> None:
        item = TaskItem(line=0, checked=False, text="x", unknown_field="whatever")
        assert not hasattr(item, "unknown_field")

    def test_model_dump(self) -> None:
        item = TaskItem(line=0, checked=False, text="x")
        assert item.model_dump() == {"line": 0, "checked": False, "text": "x"}

    def test_frozen(self) -> None:
        item = TaskItem(line=0, checked=False, text="x")
        with pytest.raises(ValidationError):
            item.checked = True  # type: ignore[misc]


class TestToggleResultModel:
    def test_missing_required_field(self) -> None:
        with pytest.raises(ValidationError):
            ToggleResult(line=0, checked=True)  # type: ignore[call-arg]
