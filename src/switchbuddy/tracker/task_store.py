# src/switchbuddy/tracker/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import uuid
from datetime import date
from pathlib import Path
from typing import Any

from ..core.errors import AuthenticationRequiredError, OwnershipError, RecordNotFoundError
from .task_models import RescheduleInfo, Task, TaskKind

logger = logging.getLogger(__name__)


class TaskStore:
    """
    SQLite store for daily tasks, scoped by owning user.

    Schema handling is migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Read failures in list operations are logged and reported as an empty list;
    write failures propagate.

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        try:
            total = self.count_tasks()
        except sqlite3.Error:
            total = -1
        logger.info("TaskStore ready db=%s total=%s", self._db_path, total)

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS daily_tasks (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    title TEXT NOT NULL,
                    date TEXT NOT NULL,
                    time TEXT NOT NULL DEFAULT '09:00',
                    kind TEXT NOT NULL DEFAULT 'schedule',
                    description TEXT,
                    completed INTEGER NOT NULL DEFAULT 0,
                    original_date TEXT,
                    reschedule_reason TEXT
                )
                """
            )

            cur.execute("PRAGMA table_info(daily_tasks)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE daily_tasks ADD COLUMN {name} {decl}")
                logger.info("TaskStore migration: added column %s", name)

            add_col("time", "TEXT NOT NULL DEFAULT '09:00'")
            add_col("kind", "TEXT NOT NULL DEFAULT 'schedule'")
            add_col("description", "TEXT")
            add_col("original_date", "TEXT")
            add_col("reschedule_reason", "TEXT")

            cur.execute("CREATE INDEX IF NOT EXISTS idx_tasks_user_date ON daily_tasks(user_id, date)")
            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        rescheduled = None
        if row["original_date"]:
            rescheduled = RescheduleInfo(
                original_date=date.fromisoformat(row["original_date"]),
                reason=str(row["reschedule_reason"] or ""),
            )
        return Task(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            title=str(row["title"]),
            date=date.fromisoformat(row["date"]),
            time=str(row["time"] or "09:00"),
            kind=TaskKind.from_db(row["kind"]),
            description=row["description"],
            completed=bool(row["completed"]),
            rescheduled=rescheduled,
        )

    def _select(self, where: str, params: tuple[Any, ...]) -> list[Task]:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(f"SELECT * FROM daily_tasks WHERE {where} ORDER BY date ASC, time ASC", params)
            return [self._row_to_task(r) for r in cur.fetchall()]
        finally:
            conn.close()

    def _require_owned(self, conn: sqlite3.Connection, user_id: str, task_id: str) -> None:
        if not user_id:
            raise AuthenticationRequiredError()
        row = conn.execute("SELECT user_id FROM daily_tasks WHERE id = ?", (task_id,)).fetchone()
        if row is None:
            raise RecordNotFoundError("task", task_id)
        if row["user_id"] != user_id:
            logger.warning("Rejected mutation of task=%s by user=%s", task_id, user_id)
            raise OwnershipError("task", task_id)

    # ---- public API ----

    def count_tasks(self) -> int:
        conn = self._get_conn()
        try:
            (n,) = conn.execute("SELECT COUNT(*) FROM daily_tasks").fetchone()
            return int(n)
        finally:
            conn.close()

    def get_task(self, task_id: str) -> Task | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT * FROM daily_tasks WHERE id = ?", (task_id,)).fetchone()
            return self._row_to_task(row) if row else None
        finally:
            conn.close()

    def list_tasks(self, user_id: str) -> list[Task]:
        """All tasks of a user, oldest day first."""
        if not user_id:
            return []
        try:
            return self._select("user_id = ?", (user_id,))
        except (sqlite3.Error, ValueError):
            logger.exception("Failed to list tasks for user=%s", user_id)
            return []

    def list_tasks_for_date(self, user_id: str, day: date) -> list[Task]:
        if not user_id:
            return []
        try:
            return self._select("user_id = ? AND date = ?", (user_id, day.isoformat()))
        except (sqlite3.Error, ValueError):
            logger.exception("Failed to list tasks for user=%s date=%s", user_id, day)
            return []

    def list_tasks_between(self, user_id: str, start: date, end: date) -> list[Task]:
        """Tasks whose current date lies in [start, end]."""
        if not user_id:
            return []
        try:
            return self._select(
                "user_id = ? AND date >= ? AND date <= ?",
                (user_id, start.isoformat(), end.isoformat()),
            )
        except (sqlite3.Error, ValueError):
            logger.exception("Failed to list tasks for user=%s range=%s..%s", user_id, start, end)
            return []

    def add_task(
        self,
        user_id: str,
        *,
        title: str,
        day: date,
        time: str = "09:00",
        kind: TaskKind = TaskKind.SCHEDULE,
        description: str | None = None,
        completed: bool = False,
    ) -> str:
        if not user_id:
            raise AuthenticationRequiredError()
        if not title or not title.strip():
            raise ValueError("title is required")

        task_id = uuid.uuid4().hex
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO daily_tasks(id, user_id, title, date, time, kind, description, completed)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    task_id,
                    user_id,
                    title.strip(),
                    day.isoformat(),
                    time,
                    kind.value,
                    description,
                    int(bool(completed)),
                ),
            )
            conn.commit()
        finally:
            conn.close()

        logger.debug("Task added id=%s user=%s date=%s", task_id, user_id, day)
        return task_id

    def update_task(
        self,
        user_id: str,
        task_id: str,
        *,
        title: str | None = None,
        day: date | None = None,
        time: str | None = None,
        description: str | None = None,
        completed: bool | None = None,
        rescheduled: RescheduleInfo | None = None,
    ) -> None:
        fields: list[str] = []
        params: list[Any] = []

        if title is not None:
            fields.append("title = ?")
            params.append(title.strip())
        if day is not None:
            fields.append("date = ?")
            params.append(day.isoformat())
        if time is not None:
            fields.append("time = ?")
            params.append(time)
        if description is not None:
            fields.append("description = ?")
            params.append(description)
        if completed is not None:
            fields.append("completed = ?")
            params.append(int(bool(completed)))
        if rescheduled is not None:
            fields.append("original_date = ?")
            params.append(rescheduled.original_date.isoformat())
            fields.append("reschedule_reason = ?")
            params.append(rescheduled.reason)

        conn = self._get_conn()
        try:
            self._require_owned(conn, user_id, task_id)
            if not fields:
                return
            params.append(task_id)
            conn.execute(f"UPDATE daily_tasks SET {', '.join(fields)} WHERE id = ?", params)
            conn.commit()
        finally:
            conn.close()

    def delete_task(self, user_id: str, task_id: str) -> None:
        conn = self._get_conn()
        try:
            self._require_owned(conn, user_id, task_id)
            conn.execute("DELETE FROM daily_tasks WHERE id = ?", (task_id,))
            conn.commit()
        finally:
            conn.close()
        logger.debug("Task deleted id=%s user=%s", task_id, user_id)
