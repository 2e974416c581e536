"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

# ---------------------------------------------------------------------------
# Sample documents
# ---------------------------------------------------------------------------

WELCOME_NOTE = """\
# Welcome

This is a **markdown** note with *style*.

## Tasks
- [x] Completed task
- [ ] Incomplete task

## Code
```python
print("**not bold**")
```
"""

# Line indices of the task items in WELCOME_NOTE
WELCOME_TASK_LINES = (5, 6)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep config discovery away from the real home directory."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.delenv("MARKVAULT_CONFIG", raising=False)
    monkeypatch.delenv("MARKVAULT_UNTERMINATED_FENCE", raising=False)
    monkeypatch.delenv("MARKVAULT_STYLESHEET", raising=False)
    monkeypatch.chdir(tmp_path)
    return home


@pytest.fixture
def runner() -> CliRunner:
    """Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def note_file(tmp_path: Path) -> Path:
    """A markdown file on disk with headings, tasks and a code fence."""
    path = tmp_path / "welcome.md"
    path.write_text(WELCOME_NOTE, encoding="utf-8")
    return path
