# taskminder

A small interactive to-do list for the terminal. Tasks have a title, a
deadline and a priority. A background scheduler prints a reminder when a
task's deadline is no more than five minutes away.

Tasks are kept in a JSON file, which is `tasks.json` in the current
directory unless you choose another. Every write goes to a temporary file
(`<file>.tmp`) first, and that file is then renamed into place. The previous
copy is kept as `<file>.bak`. When the main file is missing or corrupt, the
tasks are loaded from the `.bak` copy instead.

## Installing

```
pip install .
```

## Running

```
taskminder
taskminder --file mytasks.json
```

The program expects the task file or its `.bak` copy to exist. If neither
exists, it stops with a `Fatal: Storage.load failed: corrupt or missing JSON`
message on stderr and an exit status of 1. Before it stops, it writes an
empty task file, so the next start succeeds.

After it starts, type commands, one per line:

```
add           "Title" YYYY-MM-DD HH:MM Priority
add-recurring "Title" <minutes> Priority
add-meeting   "Title" YYYY-MM-DD HH:MM Priority Location
del  "Title"
edit "Title" ["new title"] [YYYY-MM-DD HH:MM] [Priority]
list
clear
help
quit
```

- Titles must be in double quotes.
- Priorities are `High`/`high`, `Medium`/`medium` or `Low`. Any other word
  counts as low.
- All dates and times are in UTC.
- `add-recurring` makes a task that is first due `<minutes>` from now. After
  each reminder, its deadline moves on by the same interval.
- `del` removes every task with the given title.
- `edit` changes the first task with the given title.

Examples:

```
add  "Pay rent" 2025-08-01 09:00 High
add-meeting "Standup" 2025-08-01 10:00 Medium Room 4
add-recurring "Stretch" 60 Low
edit "Pay rent" 2025-08-02 08:00 Medium
edit "Pay rent" "Rent (moved)" High
del  "Pay rent"
```

Reminders look like this:

```
⏰  Reminder: Pay rent [prio 2] @2025-08-01 09:00
```

The scheduler checks every five seconds. Each task gets one reminder,
unless its deadline is changed with `edit`. Tasks that are already overdue
get no reminder. When the program stops, the scheduler makes one last pass:
it reminds you of every task that has not been reminded yet and is due
within five minutes, either before or after the present time.

The tasks are saved on `quit` and at the end of input. They are also saved
when the program stops because of an error.

## What is not kept

The task file holds only each task's title, deadline (as Unix seconds),
priority and whether it recurs. When the tasks are loaded again, they all
come back as plain one-shot tasks. A recurring task's interval and a
meeting's location are lost, and so is the record of which reminders have
already been shown.

## Using it as a library

```python
from datetime import datetime, timedelta, timezone

from taskminder.task import Task, Priority
from taskminder.manager import TaskManager
from taskminder.storage import Storage, AutoSave
from taskminder.scheduler import Scheduler

manager = TaskManager()
storage = Storage("tasks.json")

with AutoSave(storage, manager):
    deadline = datetime.now(timezone.utc) + timedelta(minutes=3)
    manager.add_task(Task("Call back", deadline, Priority.HIGH))

    scheduler = Scheduler(manager)
    scheduler.start()
    ...
    scheduler.stop()
```

- `taskminder.task`:
  - `Priority` has the values `LOW`, `MEDIUM` and `HIGH`.
  - The task types are `Task`, `RecurringTask`, `MeetingTask` and
    `ShoppingTask`. `info()` gives a one-line description of a task.
  - Setting `Task.deadline` also re-arms the task's reminder.
- `taskminder.manager.TaskManager` is thread-safe. It has `add_task`,
  `find_task`, `remove_task`, `tasks`, `snapshot` and `clear`. `tasks()` and
  `snapshot()` return a copy of the list, so changing that copy does not
  change the manager.
- `taskminder.storage`:
  - `Storage.save` and `Storage.load` raise `StorageError` when they fail.
  - `AutoSave` saves the tasks when its block exits. If the save fails, it
    prints `AutoSave failed` on stderr.
- `taskminder.scheduler.Scheduler`:
  - `poll(now)` runs one reminder pass and returns the tasks it reminded of.
  - `flush(now)` makes the final pass.

  Use these two methods to drive the scheduler yourself instead of calling
  `start()`. The constructor also takes `tick`, an `out` stream and a
  `clock` function.
- `taskminder.cli.execute_command(line, manager, out)` runs one command
  line. It returns `False` for `quit` and `True` for every other command.

## Tests

```
pip install .[test]
pytest
```