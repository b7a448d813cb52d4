# src/switchbuddy/career/interview_plan_store.py

from __future__ import annotations

import contextlib
import json
import logging
import sqlite3
import time
import uuid
from collections.abc import Sequence
from pathlib import Path

from ..core.errors import AuthenticationRequiredError, OwnershipError, RecordNotFoundError
from .career_models import SavedInterviewPlan

logger = logging.getLogger(__name__)

DIFFICULTIES = ("Easy", "Medium", "Hard")


class InterviewPlanStore:
    """
    SQLite store for saved mock-interview plans.

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "career.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("InterviewPlanStore ready db=%s", self._db_path)

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
                CREATE TABLE IF NOT EXISTS interview_plans (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    topic TEXT NOT NULL,
                    difficulty TEXT NOT NULL,
                    questions TEXT NOT NULL DEFAULT '[]',
                    duration_minutes INTEGER NOT NULL,
                    total_interviews INTEGER NOT NULL,
                    completed_interviews INTEGER NOT NULL DEFAULT 0,
                    company TEXT NOT NULL DEFAULT '',
                    role TEXT NOT NULL DEFAULT '',
                    created_at REAL NOT NULL
                )
                """
            )
            conn.execute("CREATE INDEX IF NOT EXISTS idx_plans_user ON interview_plans(user_id)")
            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _row_to_plan(row: sqlite3.Row) -> SavedInterviewPlan:
        try:
            questions = json.loads(row["questions"] or "[]")
        except ValueError:
            questions = []
        return SavedInterviewPlan(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            topic=str(row["topic"]),
            difficulty=str(row["difficulty"]),
            questions=tuple(str(q) for q in questions),
            duration_minutes=int(row["duration_minutes"]),
            total_interviews=int(row["total_interviews"]),
            completed_interviews=int(row["completed_interviews"]),
            company=str(row["company"] or ""),
            role=str(row["role"] or ""),
            created_at=float(row["created_at"]),
        )

    def _require_owned(self, conn: sqlite3.Connection, user_id: str, plan_id: str) -> sqlite3.Row:
        if not user_id:
            raise AuthenticationRequiredError()
        row = conn.execute("SELECT * FROM interview_plans WHERE id = ?", (plan_id,)).fetchone()
        if row is None:
            raise RecordNotFoundError("interview plan", plan_id)
        if row["user_id"] != user_id:
            raise OwnershipError("interview plan", plan_id)
        return row

    def get_plan(self, plan_id: str) -> SavedInterviewPlan | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT * FROM interview_plans WHERE id = ?", (plan_id,)).fetchone()
            return self._row_to_plan(row) if row else None
        finally:
            conn.close()

    def list_plans(self, user_id: str) -> list[SavedInterviewPlan]:
        if not user_id:
            return []
        conn = self._get_conn()
        try:
            cur = conn.execute(
                "SELECT * FROM interview_plans WHERE user_id = ? ORDER BY created_at ASC, rowid ASC",
                (user_id,),
            )
            return [self._row_to_plan(r) for r in cur.fetchall()]
        except sqlite3.Error:
            logger.exception("Failed to list interview plans for user=%s", user_id)
            return []
        finally:
            conn.close()

    def add_plan(
        self,
        user_id: str,
        *,
        topic: str,
        difficulty: str,
        questions: Sequence[str],
        duration_minutes: int = 30,
        total_interviews: int = 3,
        company: str = "",
        role: str = "",
    ) -> str:
        if not user_id:
            raise AuthenticationRequiredError()
        if not topic.strip():
            raise ValueError("topic is required")
        if difficulty not in DIFFICULTIES:
            raise ValueError(f"difficulty must be one of: {', '.join(DIFFICULTIES)}")
        if duration_minutes < 1 or total_interviews < 1:
            raise ValueError("duration and number of interviews must be positive")

        plan_id = uuid.uuid4().hex
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO interview_plans(
                    id, user_id, topic, difficulty, questions,
                    duration_minutes, total_interviews, completed_interviews,
                    company, role, created_at
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, 0, ?, ?, ?)
                """,
                (
                    plan_id,
                    user_id,
                    topic.strip(),
                    difficulty,
                    json.dumps(list(questions), ensure_ascii=False),
                    int(duration_minutes),
                    int(total_interviews),
                    company.strip(),
                    role.strip(),
                    time.time(),
                ),
            )
            conn.commit()
        finally:
            conn.close()
        logger.info("Interview plan %s saved user=%s topic=%r", plan_id, user_id, topic)
        return plan_id

    def record_completed(self, user_id: str, plan_id: str) -> int:
        """Count one more finished mock interview. Returns the new count."""
        conn = self._get_conn()
        try:
            row = self._require_owned(conn, user_id, plan_id)
            done, total = int(row["completed_interviews"]), int(row["total_interviews"])
            if done >= total:
                raise ValueError(f"All {total} interviews of this plan are already done.")
            conn.execute(
                "UPDATE interview_plans SET completed_interviews = ? WHERE id = ?",
                (done + 1, plan_id),
            )
            conn.commit()
        finally:
            conn.close()
        return done + 1

    def delete_plan(self, user_id: str, plan_id: str) -> None:
        conn = self._get_conn()
        try:
            self._require_owned(conn, user_id, plan_id)
            conn.execute("DELETE FROM interview_plans WHERE id = ?", (plan_id,))
            conn.commit()
        finally:
            conn.close()
