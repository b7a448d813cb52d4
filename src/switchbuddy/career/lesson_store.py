# src/switchbuddy/career/lesson_store.py

from __future__ import annotations

import contextlib
import json
import logging
import sqlite3
import time
import uuid
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from ..core.errors import AuthenticationRequiredError
from ..llm.schemas import ChatMessage
from .career_models import LessonSession

logger = logging.getLogger(__name__)


class LessonStore:
    """
    Chat lesson history, one session per (user, topic).

    Topics are matched case-insensitively so "/learn python" and
    "/learn Python" continue the same conversation.
    """

    def __init__(self, db_path: str | Path = "career.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("LessonStore ready db=%s", self._db_path)

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
                CREATE TABLE IF NOT EXISTS lesson_sessions (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    topic TEXT NOT NULL,
                    topic_key TEXT NOT NULL,
                    history TEXT NOT NULL DEFAULT '[]',
                    updated_at REAL NOT NULL,
                    UNIQUE(user_id, topic_key)
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _topic_key(topic: str) -> str:
        return " ".join(topic.lower().split())

    @staticmethod
    def _row_to_session(row: sqlite3.Row) -> LessonSession:
        messages: list[ChatMessage] = []
        try:
            raw = json.loads(row["history"] or "[]")
        except ValueError:
            logger.warning("Unreadable lesson history id=%s", row["id"])
            raw = []
        for item in raw:
            try:
                messages.append(ChatMessage.model_validate(item))
            except ValidationError:
                continue
        return LessonSession(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            topic=str(row["topic"]),
            history=tuple(messages),
            updated_at=float(row["updated_at"]),
        )

    def get_session(self, user_id: str, topic: str) -> LessonSession | None:
        if not user_id:
            return None
        conn = self._get_conn()
        try:
            row = conn.execute(
                "SELECT * FROM lesson_sessions WHERE user_id = ? AND topic_key = ?",
                (user_id, self._topic_key(topic)),
            ).fetchone()
            return self._row_to_session(row) if row else None
        finally:
            conn.close()

    def list_sessions(self, user_id: str) -> list[LessonSession]:
        """Most recently active first."""
        if not user_id:
            return []
        conn = self._get_conn()
        try:
            cur = conn.execute(
                "SELECT * FROM lesson_sessions WHERE user_id = ? ORDER BY updated_at DESC, rowid DESC",
                (user_id,),
            )
            return [self._row_to_session(r) for r in cur.fetchall()]
        except sqlite3.Error:
            logger.exception("Failed to list lesson sessions for user=%s", user_id)
            return []
        finally:
            conn.close()

    def save_history(self, user_id: str, topic: str, history: Sequence[ChatMessage]) -> str:
        """Create or replace the conversation for a topic. Returns the session id."""
        if not user_id:
            raise AuthenticationRequiredError()
        if not topic.strip():
            raise ValueError("topic is required")

        payload = json.dumps([m.model_dump() for m in history], ensure_ascii=False)
        key = self._topic_key(topic)
        conn = self._get_conn()
        try:
            row = conn.execute(
                "SELECT id FROM lesson_sessions WHERE user_id = ? AND topic_key = ?",
                (user_id, key),
            ).fetchone()
            session_id = str(row["id"]) if row else uuid.uuid4().hex
            if row:
                conn.execute(
                    "UPDATE lesson_sessions SET history = ?, updated_at = ? WHERE id = ?",
                    (payload, time.time(), session_id),
                )
            else:
                conn.execute(
                    """
                    INSERT INTO lesson_sessions(id, user_id, topic, topic_key, history, updated_at)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (session_id, user_id, topic.strip(), key, payload, time.time()),
                )
            conn.commit()
        finally:
            conn.close()
        return session_id
