# tests/test_task_store.py

from __future__ import annotations

import sqlite3
from datetime import date
from pathlib import Path

import pytest

from switchbuddy.core.errors import AuthenticationRequiredError, OwnershipError, RecordNotFoundError
from switchbuddy.tracker.task_models import RescheduleInfo, TaskKind
from switchbuddy.tracker.task_store import TaskStore

D1 = date(2024, 6, 10)
D2 = date(2024, 6, 11)


def test_task_add_list_update_delete(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "tasks.sqlite3")

    tid = store.add_task("u1", title="  Revise joins ", day=D1, time="07:30", kind=TaskKind.INTERVIEW)
    store.add_task("u1", title="Apply to Acme", day=D2)

    items = store.list_tasks("u1")
    assert [t.title for t in items] == ["Revise joins", "Apply to Acme"]
    first = items[0]
    assert first.id == tid
    assert first.time == "07:30"
    assert first.kind == TaskKind.INTERVIEW
    assert first.completed is False
    assert first.rescheduled is None

    store.update_task("u1", tid, completed=True, description="Inner vs outer")
    t = store.get_task(tid)
    assert t is not None
    assert t.completed is True
    assert t.description == "Inner vs outer"

    store.delete_task("u1", tid)
    assert store.get_task(tid) is None
    assert store.count_tasks() == 1


def test_reschedule_info_round_trips(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "tasks.sqlite3")
    tid = store.add_task("u1", title="Mock interview", day=D1)

    store.update_task("u1", tid, day=D2, rescheduled=RescheduleInfo(original_date=D1, reason="sick"))

    t = store.get_task(tid)
    assert t is not None
    assert t.date == D2
    assert t.rescheduled == RescheduleInfo(original_date=D1, reason="sick")
    assert t.origin_date == D1


def test_date_queries(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "tasks.sqlite3")
    store.add_task("u1", title="a", day=D1, time="18:00")
    store.add_task("u1", title="b", day=D1, time="08:00")
    store.add_task("u1", title="c", day=date(2024, 6, 20))
    store.add_task("u2", title="other", day=D1)

    assert [t.title for t in store.list_tasks_for_date("u1", D1)] == ["b", "a"]
    assert [t.title for t in store.list_tasks_between("u1", D1, D2)] == ["b", "a"]
    assert len(store.list_tasks("u2")) == 1


def test_reads_without_identity_are_empty(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "tasks.sqlite3")
    store.add_task("u1", title="a", day=D1)

    assert store.list_tasks("") == []
    assert store.list_tasks_for_date("", D1) == []
    assert store.list_tasks_between("", D1, D2) == []


def test_writes_require_identity_and_ownership(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "tasks.sqlite3")
    tid = store.add_task("u1", title="a", day=D1)

    with pytest.raises(AuthenticationRequiredError):
        store.add_task("", title="x", day=D1)
    with pytest.raises(AuthenticationRequiredError):
        store.update_task("", tid, completed=True)
    with pytest.raises(OwnershipError):
        store.update_task("u2", tid, completed=True)
    with pytest.raises(OwnershipError):
        store.delete_task("u2", tid)
    with pytest.raises(RecordNotFoundError):
        store.delete_task("u1", "missing")
    with pytest.raises(ValueError):
        store.add_task("u1", title="   ", day=D1)

    t = store.get_task(tid)
    assert t is not None and t.completed is False


def test_schema_migration_adds_missing_columns(tmp_path: Path) -> None:
    db = tmp_path / "tasks.sqlite3"
    conn = sqlite3.connect(db)
    conn.execute(
        "CREATE TABLE daily_tasks (id TEXT PRIMARY KEY, user_id TEXT NOT NULL, title TEXT NOT NULL, "
        "date TEXT NOT NULL, completed INTEGER NOT NULL DEFAULT 0)"
    )
    conn.execute("INSERT INTO daily_tasks(id, user_id, title, date) VALUES ('old', 'u1', 'legacy', '2024-06-10')")
    conn.commit()
    conn.close()

    store = TaskStore(db)

    t = store.get_task("old")
    assert t is not None
    assert t.time == "09:00"
    assert t.kind == TaskKind.SCHEDULE
    assert t.rescheduled is None
