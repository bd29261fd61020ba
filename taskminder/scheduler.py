"""Background reminder engine."""

from __future__ import annotations

import heapq
import itertools
import sys
import threading
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import TextIO

from .manager import TaskManager
from .task import Task

_WINDOW = timedelta(minutes=5)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Scheduler:
    """Prints reminders for tasks whose deadline is at most five minutes away.

    A worker thread runs :meth:`poll` every ``tick`` and, when stopped, a
    final :meth:`flush` pass.
    """

    def __init__(
        self,
        manager: TaskManager,
        tick: timedelta = timedelta(seconds=5),
        out: TextIO | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.manager = manager
        self.tick = tick
        self._out = out
        self._clock = clock
        self._out_lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the worker thread; does nothing if it is already running."""
        if self.is_running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Ask the worker to finish and wait for it."""
        if self._thread is None:
            return
        self._stop_event.set()
        self._thread.join()
        self._thread = None

    def poll(self, now: datetime | None = None) -> list[Task]:
        """Run one reminder pass and return the tasks reminded, in order.

        Tasks are taken earliest deadline first, higher priority first on a
        tie. Already-notified tasks are skipped, the pass ends at the first
        task more than five minutes away, overdue tasks are dropped, and a
        reminded recurring task is rescheduled and considered again.
        """
        counter = itertools.count()
        heap: list[tuple[datetime, int, int, Task]] = []

        def push(task: Task) -> None:
            heapq.heappush(
                heap, (task.deadline, -int(task.priority), next(counter), task)
            )

        for task in self.manager.snapshot():
            push(task)

        reminded: list[Task] = []
        while heap:
            task = heap[0][3]
            current = now if now is not None else self._clock()
            diff = task.deadline - current

            if task.notified:
                heapq.heappop(heap)
                continue
            if diff > _WINDOW:
                break
            heapq.heappop(heap)
            if diff >= timedelta(0):
                self._remind(task)
                task.mark_notified()
                reminded.append(task)
                if task.is_recurring:
                    before = task.deadline
                    task.reschedule()
                    if task.deadline > before:
                        push(task)
        return reminded

    def flush(self, now: datetime | None = None) -> list[Task]:
        """Remind of every unnotified task due within five minutes either way."""
        current = now if now is not None else self._clock()
        reminded = []
        for task in self.manager.snapshot():
            diff = task.deadline - current
            minutes = int(diff.total_seconds() / 60)
            if not task.notified and -5 <= minutes <= 5:
                self._remind(task)
                reminded.append(task)
        return reminded

    def _remind(self, task: Task) -> None:
        out = self._out if self._out is not None else sys.stdout
        with self._out_lock:
            out.write(f"⏰  Reminder: {task.info()}\n")
            out.flush()

    def _run(self) -> None:
        seconds = self.tick.total_seconds()
        while not self._stop_event.is_set():
            self.poll()
            self._stop_event.wait(seconds)
        self.flush()