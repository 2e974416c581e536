"""Block-level scan: markdown lines to intermediate HTML.

One forward pass over the source lines. Each line is classified by the first
matching rule (fence, fenced content, heading, blockquote, task item, bullet,
numbered item, blank, paragraph) and emits exactly one HTML fragment, plus any
list open/close tags needed around it. Inline syntax is left untouched for
:mod:`markvault.inline`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

FENCE = "```"

HEADING_RE = re.compile(r"^#{1,6}\s+")
HEADING_MARKER_RE = re.compile(r"^#+\s*")
BLOCKQUOTE_RE = re.compile(r"^>\s+")
BLOCKQUOTE_MARKER_RE = re.compile(r"^>\s*")
TASK_RE = re.compile(r"^-\s+\[(x|\s)\]\s+")
TASK_MARKER_RE = re.compile(r"^-\s+\[(x|\s)\]\s*")
BULLET_RE = re.compile(r"^-\s+")
BULLET_MARKER_RE = re.compile(r"^-\s*")
NUMBERED_RE = re.compile(r"^\d+\.\s+")
NUMBERED_MARKER_RE = re.compile(r"^\d+\.\s*")

FENCE_POLICIES = ("flush", "drop")

# list kind -> opening tag; closing tag is derived from it
_LIST_OPEN = {
    "ul": "<ul>",
    "ol": "<ol>",
    "task": '<ul class="task-list">',
}


@dataclass
class _ScanState:
    """Mutable state for a single render call."""

    list_kind: str | None = None
    in_fence: bool = False
    fence_lines: list[str] = field(default_factory=list)
    out: list[str] = field(default_factory=list)

    def emit(self, fragment: str) -> None:
        self.out.append(fragment)

    def close_list(self) -> None:
        if self.list_kind is None:
            return
        self.emit("</ol>" if self.list_kind == "ol" else "</ul>")
        self.list_kind = None

    def ensure_list(self, kind: str) -> None:
        if self.list_kind == kind:
            return
        self.close_list()
        self.emit(_LIST_OPEN[kind])
        self.list_kind = kind

    def flush_fence(self) -> None:
        content = "".join(self.fence_lines).strip()
        self.emit(f"<pre><code>{content}</code></pre>")
        self.in_fence = False
        self.fence_lines = []


def render_task_item(line_index: int, checked: bool, text: str) -> str:
    """Render one task-list item carrying its source line index."""
    checked_attr = " checked" if checked else ""
    return (
        f'<li class="task-item"><label>'
        f'<input type="checkbox"{checked_attr} data-line="{line_index}"> '
        f"<span>{text}</span>"
        f"</label></li>"
    )


def parse_task_line(line: str) -> tuple[bool, str] | None:
    """Split a task line into (checked, text), or None if it is not one."""
    m = TASK_RE.match(line)
    if m is None:
        return None
    return m.group(1) == "x", TASK_MARKER_RE.sub("", line, count=1)


def _classify(state: _ScanState, index: int, line: str) -> None:
    """Apply the first matching block rule to a line outside a fence."""
    if HEADING_RE.match(line):
        state.close_list()
        level = len(line) - len(line.lstrip("#"))
        text = HEADING_MARKER_RE.sub("", line, count=1)
        state.emit(f"<h{level}>{text}</h{level}>")
        return

    if BLOCKQUOTE_RE.match(line):
        state.close_list()
        text = BLOCKQUOTE_MARKER_RE.sub("", line, count=1)
        state.emit(f"<blockquote>{text}</blockquote>")
        return

    # Task items must be tried before plain bullets, which share the "- " prefix.
    task = parse_task_line(line)
    if task is not None:
        checked, text = task
        state.ensure_list("task")
        state.emit(render_task_item(index, checked, text))
        return

    if BULLET_RE.match(line):
        state.ensure_list("ul")
        state.emit(f"<li>{BULLET_MARKER_RE.sub('', line, count=1)}</li>")
        return

    if NUMBERED_RE.match(line):
        state.ensure_list("ol")
        state.emit(f"<li>{NUMBERED_MARKER_RE.sub('', line, count=1)}</li>")
        return

    state.close_list()
    if line.strip() == "":
        state.emit("<br>")
    else:
        state.emit(f"<p>{line}</p>")


def render_blocks(lines: Sequence[str], *, unterminated_fence: str = "flush") -> str:
    """Render block structure for *lines*, leaving inline syntax untouched.

    ``unterminated_fence`` decides what happens to a code fence still open at
    end of input: ``"flush"`` emits it as a code block, ``"drop"`` discards it.
    """
    if unterminated_fence not in FENCE_POLICIES:
        raise ValueError(f"unterminated_fence must be one of {FENCE_POLICIES}, got {unterminated_fence!r}")

    state = _ScanState()
    for index, line in enumerate(lines):
        if line.startswith(FENCE):
            if state.in_fence:
                state.flush_fence()
            else:
                state.close_list()
                state.in_fence = True
            continue

        if state.in_fence:
            state.fence_lines.append(line + "\n")
            continue

        _classify(state, index, line)

    if state.in_fence and unterminated_fence == "flush":
        state.flush_fence()
    state.close_list()

    return "".join(fragment + "\n" for fragment in state.out)


def has_unterminated_fence(lines: Sequence[str]) -> bool:
    """Return True if an odd number of fence delimiters leaves a fence open."""
    return sum(1 for line in lines if line.startswith(FENCE)) % 2 == 1
