"""Task-line patching: the write path behind rendered checkboxes.

The renderer tags every task checkbox with its zero-based source line. When
the host sees a checkbox change it calls :func:`toggle_task` (or a handler from
:func:`make_toggle_handler`) with that index and the new state, persists the
patched source, and renders again.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from markvault.blocks import TASK_RE, parse_task_line
from markvault.models import TaskItem, ToggleResult

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    TaskToggleHandler = Callable[[int, bool], ToggleResult]


def toggle_task(lines: Sequence[str], line_index: int, checked: bool) -> list[str]:
    """Return a copy of *lines* with the task at *line_index* set to *checked*.

    If the index is out of range or the line is no longer a task item, the
    copy is returned unchanged.
    """
    patched = list(lines)
    if not 0 <= line_index < len(patched):
        return patched

    line = patched[line_index]
    m = TASK_RE.match(line)
    if m is None:
        return patched

    # Only the marker bracket is rewritten; "[ ]" later in the text is content.
    mark = m.start(1)
    patched[line_index] = line[:mark] + ("x" if checked else " ") + line[mark + 1 :]
    return patched


def toggle_task_source(source: str, line_index: int, checked: bool) -> str:
    """Like :func:`toggle_task`, on a whole ``\\n``-separated source string."""
    return "\n".join(toggle_task(source.split("\n"), line_index, checked))


def find_tasks(source: str) -> list[TaskItem]:
    """Return every task item in *source* with its line index."""
    items: list[TaskItem] = []
    for index, line in enumerate(source.split("\n")):
        parsed = parse_task_line(line)
        if parsed is None:
            continue
        checked, text = parsed
        items.append(TaskItem(line=index, checked=checked, text=text))
    return items


def make_toggle_handler(load: Callable[[], str], save: Callable[[str], None]) -> TaskToggleHandler:
    """Return a checkbox-change callback bound to a document's load/save pair.

    ``save`` is only called when the patch actually changed the source.
    """

    def handler(line_index: int, checked: bool) -> ToggleResult:
        source = load()
        patched = toggle_task_source(source, line_index, checked)
        changed = patched != source
        if changed:
            save(patched)
        return ToggleResult(line=line_index, checked=checked, changed=changed)

    return handler
