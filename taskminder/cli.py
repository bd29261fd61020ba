"""Interactive command-line front end for the task reminder."""

from __future__ import annotations

import argparse
import re
import sys
from datetime import datetime, timezone
from typing import TextIO

from .manager import TaskManager
from .scheduler import Scheduler
from .storage import AutoSave, Storage
from .task import MeetingTask, Priority, RecurringTask, Task

_DISPLAY_FORMAT = "%Y-%m-%d %H:%M"
_DEFAULT_FILE = "tasks.json"

HELP_TEXT = """Commands:
/* Core create */
  add           "Title" YYYY-MM-DD HH:MM Priority
  add-recurring "Title" <minutes> Priority
  add-meeting   "Title" YYYY-MM-DD HH:MM Priority Location

/* Modify / delete */
  del  "Title"
  edit "Title" [new-title] [YYYY-MM-DD HH:MM] [Priority]

/* House-keeping */
  list
  clear
  quit

Priorities: Low | Medium | High
Examples:
  add  "Pay rent" 2025-08-01 09:00 High
  del  "Pay rent"
  edit "Pay rent" 2025-08-02 08:00 Medium
  edit "Pay rent" 'Rent (moved)' High

New Note: The Time Zone is in UTC
    """

_SPACE = re.compile(r"\s*")
_WORD = re.compile(r"\S+")
_INTEGER = re.compile(r"[+-]?\d+")


def parse_priority(text: str) -> Priority:
    """Map ``High``/``Medium`` (either case of the first letter) to a priority.

    Anything else is taken as low priority.
    """
    if text in ("High", "high"):
        return Priority.HIGH
    if text in ("Medium", "medium"):
        return Priority.MEDIUM
    return Priority.LOW


def parse_datetime(date: str, time: str) -> datetime:
    """Parse ``YYYY-MM-DD`` and ``HH:MM`` into a UTC datetime.

    Raises ValueError on a malformed date or time.
    """
    try:
        parsed = datetime.strptime(f"{date} {time}", _DISPLAY_FORMAT)
    except ValueError:
        raise ValueError("bad date/time format") from None
    return parsed.replace(tzinfo=timezone.utc)


class _LineReader:
    """Reads whitespace-separated words and quoted strings from one line."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0
        self._failed = False

    def _skip_space(self) -> None:
        self._pos = _SPACE.match(self._text, self._pos).end()

    def word(self) -> str:
        if self._failed:
            return ""
        self._skip_space()
        match = _WORD.match(self._text, self._pos)
        if match is None:
            self._failed = True
            return ""
        self._pos = match.end()
        return match.group()

    def integer(self) -> int:
        if self._failed:
            return 0
        self._skip_space()
        match = _INTEGER.match(self._text, self._pos)
        if match is None:
            self._failed = True
            return 0
        self._pos = match.end()
        return int(match.group())

    def quoted(self) -> str:
        """Return the text between double quotes, or "" if none starts here."""
        if self._failed:
            return ""
        self._skip_space()
        if not self._text.startswith('"', self._pos):
            return ""
        end = self._text.find('"', self._pos + 1)
        if end == -1:
            value = self._text[self._pos + 1 :]
            self._pos = len(self._text)
        else:
            value = self._text[self._pos + 1 : end]
            self._pos = end + 1
        return value

    def rest(self) -> str:
        if self._failed:
            return ""
        self._skip_space()
        value = self._text[self._pos :]
        self._pos = len(self._text)
        return value


def _print_now(out: TextIO) -> None:
    now = datetime.now(timezone.utc)
    print(f"Time Now: {now.strftime(_DISPLAY_FORMAT)}", file=out)


def _edit(reader: _LineReader, task: Task, out: TextIO) -> None:
    new_title = reader.quoted()
    date = reader.word()
    time = ""
    priority_text = ""
    if date[:1].isdigit():
        time = reader.word()
        priority_text = reader.word()
    else:
        priority_text = date
        date = ""

    if new_title:
        task.title = new_title
    if date:
        try:
            task.deadline = parse_datetime(date, time)
        except ValueError:
            print("bad date/time – edit skipped", file=out)
    if priority_text:
        task.priority = parse_priority(priority_text)
    print(f"Edited: {task.info()}", file=out)


def execute_command(line: str, manager: TaskManager, out: TextIO) -> bool:
    """Run one command line against ``manager``, writing replies to ``out``.

    Returns False when the command asks to quit, True otherwise.
    """
    reader = _LineReader(line)
    command = reader.word()

    if command == "help":
        out.write(HELP_TEXT)
        return True
    if command == "quit":
        return False
    if command == "list":
        for task in manager.tasks():
            print(f"- {task.info()}", file=out)
        return True
    if command == "clear":
        manager.clear()
        print("All tasks removed.", file=out)
        return True

    title = reader.quoted()
    if not title:
        print("missing quoted title", file=out)
        return True

    if command == "del":
        if manager.remove_task(title):
            print(f'Deleted "{title}"', file=out)
        else:
            print("Task not found", file=out)
        return True

    if command == "edit":
        task = manager.find_task(title)
        if task is None:
            print("Task not found", file=out)
        else:
            _edit(reader, task, out)
        return True

    if command == "add":
        date, time, priority_text = reader.word(), reader.word(), reader.word()
        try:
            deadline = parse_datetime(date, time)
        except ValueError as exc:
            print(exc, file=out)
            return True
        manager.add_task(Task(title, deadline, parse_priority(priority_text)))
        _print_now(out)
        return True

    if command == "add-recurring":
        minutes = reader.integer()
        priority_text = reader.word()
        from datetime import timedelta

        manager.add_task(
            RecurringTask(
                title, timedelta(minutes=minutes), parse_priority(priority_text)
            )
        )
        _print_now(out)
        return True

    if command == "add-meeting":
        date, time, priority_text = reader.word(), reader.word(), reader.word()
        location = reader.rest()
        try:
            deadline = parse_datetime(date, time)
        except ValueError as exc:
            print(exc, file=out)
            return True
        manager.add_task(
            MeetingTask(title, deadline, location, parse_priority(priority_text))
        )
        _print_now(out)
        return True

    print("unknown command", file=out)
    return True


def main(argv: list[str] | None = None) -> int:
    """Run the interactive task shell on stdin/stdout."""
    parser = argparse.ArgumentParser(description="Simple TODO with reminders.")
    parser.add_argument(
        "--file", default=_DEFAULT_FILE, help="JSON file holding the tasks"
    )
    args = parser.parse_args(argv)

    manager = TaskManager()
    storage = Storage(args.file)
    try:
        with AutoSave(storage, manager):
            storage.load(manager)
            scheduler = Scheduler(manager)
            scheduler.start()
            try:
                print("Simple TODO (type help)")
                for raw in sys.stdin:
                    if not execute_command(raw.rstrip("\r\n"), manager, sys.stdout):
                        break
                storage.save(manager)
            finally:
                scheduler.stop()
    except Exception as exc:
        print(f"Fatal: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())