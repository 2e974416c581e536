"""markvault: a small, flat markdown dialect rendered to HTML."""

from __future__ import annotations

from markvault.markup import render, render_document
from markvault.tasks import find_tasks, make_toggle_handler, toggle_task, toggle_task_source

__all__ = [
    "find_tasks",
    "make_toggle_handler",
    "render",
    "render_document",
    "toggle_task",
    "toggle_task_source",
]
