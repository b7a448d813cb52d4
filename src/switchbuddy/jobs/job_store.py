# src/switchbuddy/jobs/job_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
import uuid
from collections.abc import Iterable
from pathlib import Path

from ..core.errors import AuthenticationRequiredError, OwnershipError, RecordNotFoundError
from .job_models import JobApplication, JobStage

logger = logging.getLogger(__name__)


class JobApplicationStore:
    """
    SQLite store behind the Kanban job tracker.

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "jobs.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("JobApplicationStore ready db=%s", self._db_path)

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS job_applications (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    company TEXT NOT NULL,
                    title TEXT NOT NULL,
                    stage TEXT NOT NULL DEFAULT 'Wishlist',
                    logo_url TEXT,
                    created_at REAL NOT NULL
                )
                """
            )
            conn.execute("CREATE INDEX IF NOT EXISTS idx_jobs_user ON job_applications(user_id)")
            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _row_to_app(row: sqlite3.Row) -> JobApplication:
        try:
            stage = JobStage(row["stage"])
        except ValueError:
            stage = JobStage.WISHLIST
        return JobApplication(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            company=str(row["company"]),
            title=str(row["title"]),
            stage=stage,
            logo_url=row["logo_url"],
        )

    def _require_owned(self, conn: sqlite3.Connection, user_id: str, app_id: str) -> None:
        if not user_id:
            raise AuthenticationRequiredError()
        row = conn.execute("SELECT user_id FROM job_applications WHERE id = ?", (app_id,)).fetchone()
        if row is None:
            raise RecordNotFoundError("job application", app_id)
        if row["user_id"] != user_id:
            raise OwnershipError("job application", app_id)

    def list_applications(self, user_id: str) -> list[JobApplication]:
        if not user_id:
            return []
        conn = self._get_conn()
        try:
            cur = conn.execute(
                "SELECT * FROM job_applications WHERE user_id = ? ORDER BY created_at ASC",
                (user_id,),
            )
            return [self._row_to_app(r) for r in cur.fetchall()]
        except sqlite3.Error:
            logger.exception("Failed to list job applications for user=%s", user_id)
            return []
        finally:
            conn.close()

    def add_application(
        self,
        user_id: str,
        *,
        company: str,
        title: str,
        stage: JobStage = JobStage.WISHLIST,
        logo_url: str | None = None,
    ) -> str:
        if not user_id:
            raise AuthenticationRequiredError()
        if not company.strip() or not title.strip():
            raise ValueError("company and title are required")

        app_id = uuid.uuid4().hex
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO job_applications(id, user_id, company, title, stage, logo_url, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (app_id, user_id, company.strip(), title.strip(), stage.value, logo_url, time.time()),
            )
            conn.commit()
        finally:
            conn.close()
        return app_id

    def move_application(self, user_id: str, app_id: str, stage: JobStage) -> None:
        conn = self._get_conn()
        try:
            self._require_owned(conn, user_id, app_id)
            conn.execute("UPDATE job_applications SET stage = ? WHERE id = ?", (stage.value, app_id))
            conn.commit()
        finally:
            conn.close()
        logger.debug("Job application %s -> %s", app_id, stage.value)

    def delete_application(self, user_id: str, app_id: str) -> None:
        conn = self._get_conn()
        try:
            self._require_owned(conn, user_id, app_id)
            conn.execute("DELETE FROM job_applications WHERE id = ?", (app_id,))
            conn.commit()
        finally:
            conn.close()


def build_board(apps: Iterable[JobApplication]) -> dict[JobStage, list[JobApplication]]:
    """Group applications into Kanban columns, every column present, in board order."""
    board: dict[JobStage, list[JobApplication]] = {stage: [] for stage in JobStage}
    for app in apps:
        board[app.stage].append(app)
    return board
