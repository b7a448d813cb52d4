# src/switchbuddy/career/market_history_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
import uuid
from pathlib import Path

from pydantic import ValidationError

from ..core.errors import AuthenticationRequiredError
from ..llm.schemas import MarketIntelligence, MarketIntelligenceInput, SalaryEstimate
from .career_models import MarketSearch

logger = logging.getLogger(__name__)


class MarketHistoryStore:
    """
    Search history for market intelligence lookups.

    AI results are stored as the JSON of their pydantic models and validated
    again on the way out; rows that no longer validate are skipped.
    """

    def __init__(self, db_path: str | Path = "career.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("MarketHistoryStore ready db=%s", self._db_path)

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
                CREATE TABLE IF NOT EXISTS market_searches (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    job_role TEXT NOT NULL,
                    company_name TEXT NOT NULL,
                    location TEXT NOT NULL,
                    intel_json TEXT NOT NULL,
                    salary_json TEXT,
                    created_at REAL NOT NULL
                )
                """
            )
            conn.execute("CREATE INDEX IF NOT EXISTS idx_market_user ON market_searches(user_id)")
            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _row_to_search(row: sqlite3.Row) -> MarketSearch | None:
        try:
            intel = MarketIntelligence.model_validate_json(row["intel_json"])
            salary = SalaryEstimate.model_validate_json(row["salary_json"]) if row["salary_json"] else None
        except ValidationError:
            logger.warning("Skipping unreadable market search id=%s", row["id"])
            return None
        return MarketSearch(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            job_role=str(row["job_role"]),
            company_name=str(row["company_name"]),
            location=str(row["location"]),
            intel=intel,
            salary=salary,
            created_at=float(row["created_at"]),
        )

    def add_search(
        self,
        user_id: str,
        *,
        query: MarketIntelligenceInput,
        intel: MarketIntelligence,
        salary: SalaryEstimate | None = None,
    ) -> str:
        if not user_id:
            raise AuthenticationRequiredError()

        search_id = uuid.uuid4().hex
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO market_searches(
                    id, user_id, job_role, company_name, location, intel_json, salary_json, created_at
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    search_id,
                    user_id,
                    query.job_role,
                    query.company_name,
                    query.location,
                    intel.model_dump_json(),
                    salary.model_dump_json() if salary is not None else None,
                    time.time(),
                ),
            )
            conn.commit()
        finally:
            conn.close()
        return search_id

    def list_searches(self, user_id: str) -> list[MarketSearch]:
        """Newest first."""
        if not user_id:
            return []
        conn = self._get_conn()
        try:
            cur = conn.execute(
                "SELECT * FROM market_searches WHERE user_id = ? ORDER BY created_at DESC, rowid DESC",
                (user_id,),
            )
            rows = cur.fetchall()
        except sqlite3.Error:
            logger.exception("Failed to list market searches for user=%s", user_id)
            return []
        finally:
            conn.close()
        return [s for s in (self._row_to_search(r) for r in rows) if s is not None]
