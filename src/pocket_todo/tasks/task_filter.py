# src/pocket_todo/tasks/task_filter.py

"""
Search projection over the task list.

Everything here is a pure function of (term, tasks): callers re-run it
whenever either input changes instead of patching a previous result.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from .task_models import Task


@dataclass(frozen=True, slots=True)
class Segment:
    text: str
    matched: bool


def is_blank(term: str | None) -> bool:
    return not term or not term.strip()


def task_matches(task: Task, term: str) -> bool:
    """Case-insensitive substring match on title or (non-empty) description."""
    needle = term.lower()
    if needle in task.title.lower():
        return True
    return bool(task.description) and needle in task.description.lower()


def filter_tasks(term: str | None, tasks: Iterable[Task]) -> list[Task]:
    """
    Return the tasks matching `term`, in their original order.

    A blank term matches everything.
    """
    if term is None or is_blank(term):
        return list(tasks)
    return [t for t in tasks if task_matches(t, term)]


def highlight_segments(text: str, term: str | None) -> list[Segment]:
    """
    Split `text` into plain and matched segments for rendering.

    Matching is case-insensitive and literal; the returned pieces keep the
    casing of `text` and concatenate back to it.
    """
    if not text:
        return []
    if term is None or is_blank(term):
        return [Segment(text, False)]

    out: list[Segment] = []
    pos = 0
    for m in re.finditer(re.escape(term), text, flags=re.IGNORECASE):
        if m.start() == m.end():
            continue
        if m.start() > pos:
            out.append(Segment(text[pos : m.start()], False))
        out.append(Segment(m.group(0), True))
        pos = m.end()
    if pos < len(text):
        out.append(Segment(text[pos:], False))
    return out
