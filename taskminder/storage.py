"""JSON persistence for tasks, with atomic writes and a backup fallback."""

from __future__ import annotations

import json
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from types import TracebackType

from .manager import TaskManager
from .task import Priority, Task

#: Increment if/when the JSON schema changes.
STORAGE_VERSION = 1


class StorageError(RuntimeError):
    """Raised when tasks cannot be saved or loaded."""


class Storage:
    """Saves and loads a :class:`TaskManager` as a JSON document.

    Writes go to a temporary file that is renamed over the target, and the
    previous file is kept as ``<path>.bak`` to fall back on when loading.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    @property
    def backup_path(self) -> Path:
        return Path(f"{self.path}.bak")

    @property
    def _temp_path(self) -> Path:
        return Path(f"{self.path}.tmp")

    def save(self, manager: TaskManager) -> None:
        """Write every task of ``manager`` to disk."""
        root = {
            "version": STORAGE_VERSION,
            "tasks": [
                {
                    "title": task.title,
                    "deadline": int(task.deadline.timestamp()),
                    "priority": int(task.priority),
                    "recurring": task.is_recurring,
                }
                for task in manager.tasks()
            ],
        }

        tmp = self._temp_path
        try:
            with open(tmp, "w", encoding="utf-8") as fh:
                fh.write(json.dumps(root, indent=2, ensure_ascii=False))
        except OSError as exc:
            raise StorageError(f"Cannot open {tmp}") from exc

        if self.path.exists():
            try:
                os.replace(self.path, self.backup_path)
            except OSError:
                pass  # a missing backup is not fatal
        try:
            os.replace(tmp, self.path)
        except OSError as exc:
            raise StorageError(f"Atomic rename failed: {exc}") from exc

    def load(self, manager: TaskManager) -> None:
        """Add the stored tasks to ``manager``, falling back to the backup."""
        for candidate in (self.path, self.backup_path):
            tasks = self._read(candidate)
            if tasks is not None:
                for task in tasks:
                    manager.add_task(task)
                return
        raise StorageError("Storage.load failed: corrupt or missing JSON")

    @staticmethod
    def _read(path: Path) -> list[Task] | None:
        try:
            with open(path, encoding="utf-8") as fh:
                root = json.load(fh)
        except (OSError, ValueError):
            return None
        if not isinstance(root, dict) or root.get("version") != STORAGE_VERSION:
            return None
        try:
            return [
                Task(
                    entry["title"],
                    datetime.fromtimestamp(int(entry["deadline"]), timezone.utc),
                    Priority(int(entry["priority"])),
                )
                for entry in root.get("tasks", [])
            ]
        except (KeyError, TypeError, ValueError):
            return None


class AutoSave:
    """Context manager that saves the manager's tasks when the block exits.

    The save happens on normal exit and on exceptions alike; a failing save
    is reported on stderr and never masks the original outcome.
    """

    def __init__(self, storage: Storage, manager: TaskManager) -> None:
        self.storage = storage
        self.manager = manager

    def __enter__(self) -> AutoSave:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        try:
            self.storage.save(self.manager)
        except Exception:
            print("AutoSave failed", file=sys.stderr)