# src/switchbuddy/rewards/reward_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
import uuid
from pathlib import Path

from ..core.errors import AuthenticationRequiredError, OwnershipError, RecordNotFoundError
from .reward_models import RewardStatus, UserReward

logger = logging.getLogger(__name__)


class RewardStore:
    """
    SQLite store of redeemed rewards.

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "rewards.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("RewardStore ready db=%s", self._db_path)

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
                CREATE TABLE IF NOT EXISTS redeemed_rewards (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    reward_id INTEGER NOT NULL,
                    name TEXT NOT NULL,
                    description TEXT NOT NULL DEFAULT '',
                    icon TEXT NOT NULL DEFAULT '',
                    cost REAL NOT NULL,
                    status TEXT NOT NULL DEFAULT 'unclaimed',
                    redeemed_at REAL NOT NULL,
                    claimed_at REAL
                )
                """
            )
            conn.execute("CREATE INDEX IF NOT EXISTS idx_rewards_user ON redeemed_rewards(user_id)")
            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _row_to_reward(row: sqlite3.Row) -> UserReward:
        return UserReward(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            reward_id=int(row["reward_id"]),
            name=str(row["name"]),
            description=str(row["description"] or ""),
            icon=str(row["icon"] or ""),
            cost=float(row["cost"]),
            status=RewardStatus.from_db(row["status"]),
            redeemed_at=float(row["redeemed_at"]),
            claimed_at=float(row["claimed_at"]) if row["claimed_at"] is not None else None,
        )

    def list_rewards(self, user_id: str) -> list[UserReward]:
        if not user_id:
            return []
        conn = self._get_conn()
        try:
            cur = conn.execute(
                "SELECT * FROM redeemed_rewards WHERE user_id = ? ORDER BY redeemed_at DESC",
                (user_id,),
            )
            return [self._row_to_reward(r) for r in cur.fetchall()]
        except sqlite3.Error:
            logger.exception("Failed to list rewards for user=%s", user_id)
            return []
        finally:
            conn.close()

    def add_reward(
        self,
        user_id: str,
        *,
        reward_id: int,
        name: str,
        description: str,
        icon: str,
        cost: float,
    ) -> str:
        if not user_id:
            raise AuthenticationRequiredError()

        rid = uuid.uuid4().hex
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO redeemed_rewards(id, user_id, reward_id, name, description, icon, cost, status, redeemed_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    rid,
                    user_id,
                    int(reward_id),
                    name,
                    description,
                    icon,
                    float(cost),
                    RewardStatus.UNCLAIMED.value,
                    time.time(),
                ),
            )
            conn.commit()
        finally:
            conn.close()
        return rid

    def get_reward(self, user_reward_id: str) -> UserReward | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT * FROM redeemed_rewards WHERE id = ?", (user_reward_id,)).fetchone()
            return self._row_to_reward(row) if row else None
        finally:
            conn.close()

    def mark_claimed(self, user_id: str, user_reward_id: str) -> None:
        if not user_id:
            raise AuthenticationRequiredError()
        conn = self._get_conn()
        try:
            row = conn.execute(
                "SELECT user_id FROM redeemed_rewards WHERE id = ?", (user_reward_id,)
            ).fetchone()
            if row is None:
                raise RecordNotFoundError("reward", user_reward_id)
            if row["user_id"] != user_id:
                raise OwnershipError("reward", user_reward_id)
            conn.execute(
                "UPDATE redeemed_rewards SET status = ?, claimed_at = ? WHERE id = ?",
                (RewardStatus.CLAIMED.value, time.time(), user_reward_id),
            )
            conn.commit()
        finally:
            conn.close()
