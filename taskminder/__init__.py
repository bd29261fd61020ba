"""Command-line to-do list with deadlines, recurring tasks, reminders and JSON storage."""

__version__ = "0.1.0"