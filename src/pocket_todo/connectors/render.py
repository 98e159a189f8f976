# src/pocket_todo/connectors/render.py

"""Text rendering for the console: task cards, highlights, notifications.

Colors come from the active theme palette. Output is plain text when
stdout is not a TTY or NO_COLOR is set, unless FORCE_COLOR asks otherwise.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence

from ..core.notifications import Notification, NotificationKind
from ..core.theme import Palette
from ..tasks.task_filter import highlight_segments, is_blank
from ..tasks.task_models import Task

RESET = "\033[0m"
BOLD = "\033[1m"

_ICONS = {
    NotificationKind.SUCCESS: "✔",
    NotificationKind.ERROR: "✖",
    NotificationKind.WARNING: "⚠",
    NotificationKind.INFO: "ℹ",
}


def colors_enabled() -> bool:
    if os.environ.get("NO_COLOR") is not None:
        return False
    if os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}:
        return True
    try:
        return sys.stdout.isatty()
    except Exception:
        return False


def _hex_to_rgb(hex_code: str) -> tuple[int, int, int]:
    h = hex_code.lstrip("#")
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def fg(hex_code: str) -> str:
    r, g, b = _hex_to_rgb(hex_code)
    return f"\033[38;2;{r};{g};{b}m"


def bg(hex_code: str) -> str:
    r, g, b = _hex_to_rgb(hex_code)
    return f"\033[48;2;{r};{g};{b}m"


class Renderer:
    def __init__(self, palette: Palette, *, color: bool | None = None) -> None:
        self.palette = palette
        self.color = colors_enabled() if color is None else color

    def style(self, text: str, *codes: str) -> str:
        if not self.color or not codes:
            return text
        return "".join(codes) + text + RESET

    def highlight(self, text: str, term: str | None) -> str:
        """
        Mark matches of `term` inside `text`.

        With colors: black on the warning color. Without: [brackets].
        """
        out: list[str] = []
        for seg in highlight_segments(text, term):
            if not seg.matched:
                out.append(seg.text)
            elif self.color:
                out.append(bg(self.palette.warning) + "\033[30m" + seg.text + RESET)
            else:
                out.append(f"[{seg.text}]")
        return "".join(out)

    def task_line(self, index: int, task: Task, term: str | None) -> str:
        num = self.style(f"{index:>3}.", BOLD, fg(self.palette.primary))
        title = self.style(self.highlight(task.title, term), BOLD)
        if task.description:
            desc = self.highlight(task.description, term)
        else:
            desc = self.style("No description", fg(self.palette.muted))
        return f"{num} {title}\n     {desc}"

    def task_list(self, tasks: Sequence[Task], *, term: str | None, total: int) -> str:
        header = self.style(f"Your Tasks ({total})", BOLD, fg(self.palette.primary))
        lines = [header]
        if not is_blank(term):
            lines.append(f'Search: "{term}"')

        if not tasks:
            if not is_blank(term):
                lines.append(f'No tasks found matching "{term}".')
            else:
                lines.append("No tasks found. Add a task to get started!")
            return "\n".join(lines)

        for i, task in enumerate(tasks, start=1):
            lines.append(self.task_line(i, task, term))
        return "\n".join(lines)

    def notification(self, note: Notification | None) -> str:
        if note is None:
            return ""
        colour = {
            NotificationKind.SUCCESS: self.palette.success,
            NotificationKind.ERROR: self.palette.danger,
            NotificationKind.WARNING: self.palette.warning,
            NotificationKind.INFO: self.palette.primary,
        }[note.kind]
        return self.style(f"{_ICONS[note.kind]} {note.message}", fg(colour))

    def clear_dialog(self, acknowledged: bool) -> str:
        box = "[x]" if acknowledged else "[ ]"
        title = self.style("⚠ Confirm Clear All", BOLD, fg(self.palette.danger))
        return (
            f"{title}\n"
            "Are you sure you want to permanently delete all tasks? This action cannot be undone.\n"
            f"{box} I understand this will delete all my tasks permanently\n"
            "Use /clear check to toggle, /clear confirm to clear, /clear cancel to close."
        )
