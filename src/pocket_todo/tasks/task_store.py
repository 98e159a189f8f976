# src/pocket_todo/tasks/task_store.py

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable, Iterable

from ..core.ports import KeyValueRepo, Notifier
from ..storage.kv_store import StorageError
from .task_filter import filter_tasks
from .task_models import TITLE_MAX_LENGTH, Task, TaskValidationError, build_task

logger = logging.getLogger(__name__)


class MalformedTaskData(ValueError):
    """The persisted blob is not a valid task list."""


def encode_tasks(tasks: Iterable[Task]) -> str:
    return json.dumps([t.to_dict() for t in tasks], ensure_ascii=False)


def decode_tasks(blob: str) -> list[Task]:
    """
    Parse a persisted blob into tasks.

    Raises MalformedTaskData for anything that is not a JSON list of valid,
    uniquely-identified task objects.
    """
    try:
        data = json.loads(blob)
    except (TypeError, ValueError) as e:
        raise MalformedTaskData(f"not JSON: {e}") from e

    if not isinstance(data, list):
        raise MalformedTaskData(f"expected a JSON list, got {type(data).__name__}")

    tasks: list[Task] = []
    seen: set[str] = set()
    for i, raw in enumerate(data):
        try:
            task = Task.from_dict(raw)
        except TaskValidationError as e:
            raise MalformedTaskData(f"entry {i}: {e}") from e
        if task.id in seen:
            raise MalformedTaskData(f"entry {i}: duplicate id {task.id}")
        seen.add(task.id)
        tasks.append(task)
    return tasks


class TaskStore:
    """
    Canonical task list + active search term, persisted as one JSON blob.

    - the canonical list is newest-first and is replaced wholesale on every change
    - `view` is recomputed from (search_term, canonical list) on each access,
      so it can never be stale
    - persistence is optimistic: memory changes first, a failed write is
      reported and the in-memory change stands
    """

    def __init__(
        self,
        kv: KeyValueRepo,
        notifier: Notifier,
        *,
        key: str = "todos",
        title_max_length: int = TITLE_MAX_LENGTH,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._kv = kv
        self._notifier = notifier
        self._key = key
        self._title_max_length = title_max_length
        self._clock = clock
        self._tasks: tuple[Task, ...] = ()
        self._search_term = ""
        self._last_id = 0

    # ---- read side ----

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._tasks

    @property
    def search_term(self) -> str:
        return self._search_term

    @property
    def view(self) -> tuple[Task, ...]:
        return tuple(filter_tasks(self._search_term, self._tasks))

    @property
    def count(self) -> int:
        return len(self._tasks)

    def get(self, task_id: str) -> Task | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def resolve(self, ref: str) -> str | None:
        """
        Map user input to a task id.

        `ref` is either a task id or the 1-based position shown in the
        current (filtered) listing.
        """
        ref = (ref or "").strip()
        if not ref:
            return None
        if self.get(ref) is not None:
            return ref
        if ref.isdigit():
            pos = int(ref)
            view = self.view
            if 1 <= pos <= len(view):
                return view[pos - 1].id
        return None

    def export_json(self) -> str:
        return json.dumps([t.to_dict() for t in self._tasks], ensure_ascii=False, indent=2)

    # ---- commands ----

    def search(self, term: str | None) -> tuple[Task, ...]:
        self._search_term = term or ""
        return self.view

    def create(self, title: str, description: str = "") -> Task | None:
        try:
            task = build_task(
                task_id=self._next_id(),
                title=title,
                description=description,
                max_title_length=self._title_max_length,
            )
        except TaskValidationError as e:
            logger.info("Rejected task: %s", e)
            self._notifier.show(str(e), "error")
            return None

        saved = self._replace((task, *self._tasks))
        logger.debug("Task created id=%s saved=%s", task.id, saved)
        if saved:
            self._notifier.show("Task added successfully!", "success")
        return task

    def delete(self, task_id: str) -> Task | None:
        victim = self.get(task_id)
        if victim is None:
            return None

        saved = self._replace(tuple(t for t in self._tasks if t.id != task_id))
        logger.debug("Task deleted id=%s saved=%s", task_id, saved)
        if saved:
            self._notifier.show(f'Task "{victim.title}" deleted', "success")
        return victim

    def clear_all(self) -> None:
        removed = len(self._tasks)
        saved = self._replace(())
        logger.info("Cleared %d tasks", removed)
        if saved:
            self._notifier.show("All tasks have been cleared!", "success")

    def load(self) -> bool:
        """
        Read the persisted list. Returns False if the stored data could not be
        used (the store then starts empty); a missing key is not a failure.
        """
        self._search_term = ""
        try:
            blob = self._kv.get(self._key)
        except StorageError:
            logger.exception("Failed to read tasks key=%s", self._key)
            self._tasks = ()
            self._notifier.show("Failed to load tasks and theme.", "error")
            return False

        if not blob:
            self._tasks = ()
            logger.info("No stored tasks (first run).")
            return True

        try:
            tasks = decode_tasks(blob)
        except MalformedTaskData as e:
            logger.warning("Ignoring malformed task data key=%s: %s", self._key, e)
            self._tasks = ()
            self._notifier.show("Failed to load tasks and theme.", "error")
            return False

        self._tasks = tuple(tasks)
        self._last_id = max((_numeric_id(t.id) for t in tasks), default=0)
        logger.info("Loaded %d tasks", len(tasks))
        return True

    def persist(self, tasks: Iterable[Task] | None = None) -> bool:
        payload = encode_tasks(self._tasks if tasks is None else tasks)
        try:
            self._kv.set(self._key, payload)
        except StorageError:
            logger.exception("Failed to save tasks key=%s", self._key)
            self._notifier.show("Failed to save tasks. Your changes may not persist.", "error")
            return False
        return True

    # ---- internals ----

    def _replace(self, tasks: tuple[Task, ...]) -> bool:
        self._tasks = tasks
        return self.persist(tasks)

    def _next_id(self) -> str:
        candidate = int(self._clock() * 1000)
        if candidate <= self._last_id:
            candidate = self._last_id + 1
        self._last_id = candidate
        return str(candidate)


def _numeric_id(task_id: str) -> int:
    try:
        return int(task_id)
    except ValueError:
        return 0
