"""Thread-safe in-memory registry of tasks."""

from __future__ import annotations

import threading

from .task import Task


class TaskManager:
    """Holds all tasks; every operation is guarded by a lock."""

    def __init__(self) -> None:
        self._tasks: list[Task] = []
        self._lock = threading.RLock()

    def add_task(self, task: Task) -> Task:
        """Append ``task`` and return it."""
        with self._lock:
            self._tasks.append(task)
        return task

    def find_task(self, title: str) -> Task | None:
        """Return the first task with ``title``, or None."""
        with self._lock:
            return next((t for t in self._tasks if t.title == title), None)

    def remove_task(self, title: str) -> bool:
        """Remove every task with ``title``; return whether any was removed."""
        with self._lock:
            kept = [t for t in self._tasks if t.title != title]
            removed = len(kept) != len(self._tasks)
            self._tasks = kept
        return removed

    def tasks(self) -> list[Task]:
        """Return a copy of the task list."""
        with self._lock:
            return list(self._tasks)

    def snapshot(self) -> list[Task]:
        """Alias of :meth:`tasks`."""
        return self.tasks()

    def clear(self) -> None:
        """Remove all tasks."""
        with self._lock:
            self._tasks.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)