import json
from datetime import datetime, timedelta, timezone

import pytest

from taskminder.manager import TaskManager
from taskminder.storage import STORAGE_VERSION, AutoSave, Storage, StorageError
from taskminder.task import Priority, RecurringTask, Task

BASE = datetime(2025, 8, 1, 9, 0, tzinfo=timezone.utc)


def _manager(*tasks):
    mgr = TaskManager()
    for t in tasks:
        mgr.add_task(t)
    return mgr


def test_round_trip(tmp_path):
    storage = Storage(tmp_path / "tasks.json")
    storage.save(_manager(Task("Pay rent", BASE, Priority.HIGH), Task("Walk", BASE + timedelta(hours=1), Priority.LOW)))
    loaded = TaskManager()
    storage.load(loaded)
    got = [(t.title, t.deadline, t.priority) for t in loaded.tasks()]
    assert got == [
        ("Pay rent", BASE, Priority.HIGH),
        ("Walk", BASE + timedelta(hours=1), Priority.LOW),
    ]


def test_file_layout(tmp_path):
    path = tmp_path / "tasks.json"
    Storage(path).save(_manager(Task("Pay rent", BASE, Priority.HIGH)))
    root = json.loads(path.read_text(encoding="utf-8"))
    assert root["version"] == STORAGE_VERSION == 1
    assert root["tasks"] == [
        {"title": "Pay rent", "deadline": int(BASE.timestamp()), "priority": 2, "recurring": False}
    ]
    assert not (tmp_path / "tasks.json.tmp").exists()


def test_recurring_flag_saved_but_loaded_as_plain_task(tmp_path):
    path = tmp_path / "tasks.json"
    storage = Storage(path)
    storage.save(_manager(RecurringTask("Water", timedelta(minutes=30), now=BASE)))
    assert json.loads(path.read_text(encoding="utf-8"))["tasks"][0]["recurring"] is True
    loaded = TaskManager()
    storage.load(loaded)
    (task,) = loaded.tasks()
    assert task.is_recurring is False
    assert task.deadline == BASE + timedelta(minutes=30)


def test_sub_second_part_is_dropped(tmp_path):
    storage = Storage(tmp_path / "tasks.json")
    storage.save(_manager(Task("x", BASE + timedelta(microseconds=700000))))
    loaded = TaskManager()
    storage.load(loaded)
    assert loaded.tasks()[0].deadline == BASE


def test_second_save_keeps_backup(tmp_path):
    path = tmp_path / "tasks.json"
    storage = Storage(path)
    storage.save(_manager(Task("old", BASE)))
    storage.save(_manager(Task("new", BASE)))

    from_backup = TaskManager()
    Storage(tmp_path / "tasks.json.bak").load(from_backup)
    assert [t.title for t in from_backup.tasks()] == ["old"]

    from_primary = TaskManager()
    storage.load(from_primary)
    assert [t.title for t in from_primary.tasks()] == ["new"]


def test_load_falls_back_to_backup_when_corrupt(tmp_path):
    path = tmp_path / "tasks.json"
    storage = Storage(path)
    storage.save(_manager(Task("old", BASE)))
    storage.save(_manager(Task("new", BASE)))
    path.write_text("{ not json", encoding="utf-8")
    loaded = TaskManager()
    storage.load(loaded)
    assert [t.title for t in loaded.tasks()] == ["old"]


def test_load_falls_back_on_wrong_version(tmp_path):
    path = tmp_path / "tasks.json"
    storage = Storage(path)
    storage.save(_manager(Task("old", BASE)))
    storage.save(_manager(Task("new", BASE)))
    path.write_text(json.dumps({"version": 99, "tasks": []}), encoding="utf-8")
    loaded = TaskManager()
    storage.load(loaded)
    assert [t.title for t in loaded.tasks()] == ["old"]


def test_load_missing_raises(tmp_path):
    with pytest.raises(StorageError):
        Storage(tmp_path / "absent.json").load(TaskManager())


def test_load_wrong_version_without_backup_raises(tmp_path):
    path = tmp_path / "tasks.json"
    path.write_text(json.dumps({"tasks": []}), encoding="utf-8")
    with pytest.raises(StorageError):
        Storage(path).load(TaskManager())


def test_save_to_missing_directory_raises(tmp_path):
    with pytest.raises(StorageError):
        Storage(tmp_path / "nope" / "tasks.json").save(TaskManager())


def test_autosave_saves_on_exit(tmp_path):
    path = tmp_path / "tasks.json"
    mgr = TaskManager()
    with AutoSave(Storage(path), mgr):
        mgr.add_task(Task("later", BASE))
    loaded = TaskManager()
    Storage(path).load(loaded)
    assert [t.title for t in loaded.tasks()] == ["later"]


def test_autosave_saves_on_exception(tmp_path):
    path = tmp_path / "tasks.json"
    mgr = _manager(Task("kept", BASE))
    with pytest.raises(ValueError):
        with AutoSave(Storage(path), mgr):
            raise ValueError("boom")
    loaded = TaskManager()
    Storage(path).load(loaded)
    assert [t.title for t in loaded.tasks()] == ["kept"]


def test_autosave_failure_reported(tmp_path, capsys):
    with AutoSave(Storage(tmp_path / "nope" / "tasks.json"), TaskManager()):
        pass
    assert "AutoSave failed" in capsys.readouterr().err