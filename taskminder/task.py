"""Task types: one-shot, recurring, meeting and shopping tasks."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from enum import IntEnum

_DISPLAY_FORMAT = "%Y-%m-%d %H:%M"


class Priority(IntEnum):
    """Three-level task priority; a higher value is more urgent."""

    LOW = 0
    MEDIUM = 1
    HIGH = 2


class Task:
    """A task with a title, a deadline, a priority and a reminder flag."""

    def __init__(
        self,
        title: str,
        deadline: datetime,
        priority: Priority = Priority.MEDIUM,
    ) -> None:
        self.title = title
        self._deadline = deadline
        self.priority = Priority(priority)
        self.notified = False

    @property
    def deadline(self) -> datetime:
        return self._deadline

    @deadline.setter
    def deadline(self, value: datetime) -> None:
        # Moving the date re-enables the reminder.
        self._deadline = value
        self.notified = False

    @property
    def is_recurring(self) -> bool:
        return False

    def reschedule(self) -> None:
        """Move to the next occurrence; one-shot tasks have none."""

    def info(self) -> str:
        """Return a one-line description for display."""
        stamp = self._deadline.strftime(_DISPLAY_FORMAT)
        return f"{self.title} [prio {int(self.priority)}] @{stamp}"

    def mark_notified(self) -> None:
        self.notified = True

    def reset_notified(self) -> None:
        self.notified = False

    def shift_deadline(self, delta: timedelta) -> None:
        """Move the deadline by ``delta`` without touching the reminder flag."""
        self._deadline += delta

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(title={self.title!r}, "
            f"deadline={self._deadline!r}, priority={self.priority!r})"
        )


class RecurringTask(Task):
    """A task that repeats every ``interval``, first due one interval from now."""

    def __init__(
        self,
        title: str,
        interval: timedelta,
        priority: Priority = Priority.MEDIUM,
        now: datetime | None = None,
    ) -> None:
        start = now if now is not None else datetime.now(timezone.utc)
        super().__init__(title, start + interval, priority)
        self.interval = interval

    @property
    def is_recurring(self) -> bool:
        return True

    def reschedule(self) -> None:
        """Shift the deadline by one interval and re-arm the reminder."""
        self.shift_deadline(self.interval)
        self.reset_notified()

    def info(self) -> str:
        minutes = int(self.interval.total_seconds() // 60)
        return f"🔁 {super().info()} every {minutes} min"


class MeetingTask(Task):
    """A task held at a location."""

    def __init__(
        self,
        title: str,
        deadline: datetime,
        location: str,
        priority: Priority = Priority.MEDIUM,
    ) -> None:
        super().__init__(title, deadline, priority)
        self.location = location

    def info(self) -> str:
        return f"📅 {super().info()} at {self.location}"


class ShoppingTask(Task):
    """A shopping errand."""

    def info(self) -> str:
        return f"🛒 {super().info()}"