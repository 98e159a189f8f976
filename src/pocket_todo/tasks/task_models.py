# src/pocket_todo/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

TITLE_MAX_LENGTH = 100


class TaskValidationError(ValueError):
    """A task record would violate the title/id invariants."""


def utc_now_iso() -> str:
    """ISO-8601 timestamp with millisecond precision, e.g. 2024-05-01T09:30:00.123Z."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True, slots=True)
class Task:
    """
    One to-do item.

    Stored keys are camelCase (createdAt) so blobs written by earlier
    versions of the app load unchanged.

    Notes:
    - `completed` is carried through storage but nothing reads or toggles it.
    """

    id: str
    title: str
    description: str = ""
    created_at: str = ""
    completed: bool = False

    def __post_init__(self) -> None:
        if not self.id or not self.id.strip():
            raise TaskValidationError("id must not be empty")
        if not self.title or not self.title.strip():
            raise TaskValidationError("title must not be empty")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "createdAt": self.created_at,
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, raw: Any) -> Task:
        if not isinstance(raw, dict):
            raise TaskValidationError(f"task entry must be an object, got {type(raw).__name__}")
        if "id" not in raw or "title" not in raw:
            raise TaskValidationError("task entry is missing id or title")

        title = raw["title"]
        if not isinstance(title, str):
            raise TaskValidationError("title must be a string")

        description = raw.get("description") or ""
        if not isinstance(description, str):
            description = str(description)

        return cls(
            id=str(raw["id"]),
            title=title,
            description=description,
            created_at=str(raw.get("createdAt") or ""),
            completed=raw.get("completed") is True,
        )


def build_task(
    *,
    task_id: str,
    title: str,
    description: str = "",
    created_at: str | None = None,
    max_title_length: int = TITLE_MAX_LENGTH,
) -> Task:
    """
    Build a fresh task from user input.

    Title and description are trimmed; an empty or over-long title raises
    TaskValidationError.
    """
    clean_title = (title or "").strip()
    if not clean_title:
        raise TaskValidationError("Task title cannot be empty!")
    if len(clean_title) > max_title_length:
        raise TaskValidationError(f"Task title must be at most {max_title_length} characters.")

    return Task(
        id=task_id,
        title=clean_title,
        description=(description or "").strip(),
        created_at=created_at or utc_now_iso(),
        completed=False,
    )
