# src/switchbuddy/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete implementations into AppState (stores/oracle/senders).
"""

from __future__ import annotations

import logging

from ..career.interview_plan_store import InterviewPlanStore
from ..career.lesson_store import LessonStore
from ..career.market_history_store import MarketHistoryStore
from ..config import get_settings
from ..connectors.debrief_senders import build_senders
from ..core.errors import OracleError
from ..core.ports import Oracle
from ..core.state import AppState
from ..jobs.job_store import JobApplicationStore
from ..llm.client import OpenAICompatibleOracle
from ..llm.offline import OfflineOracle
from ..rewards.reward_store import RewardStore
from ..tracker.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)
    settings.rewards_db_path.parent.mkdir(parents=True, exist_ok=True)
    settings.jobs_db_path.parent.mkdir(parents=True, exist_ok=True)
    settings.career_db_path.parent.mkdir(parents=True, exist_ok=True)
    settings.debrief_state_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    oracle: Oracle
    try:
        oracle = OpenAICompatibleOracle(settings)
    except OracleError as e:
        # Local runs without an API key still get the tracker, wallet and job board.
        logger.info("AI disabled: %s", e)
        oracle = OfflineOracle()

    return AppState(
        settings=settings,
        user_id=settings.user_id,
        task_store=TaskStore(settings.tasks_db_path),
        reward_store=RewardStore(settings.rewards_db_path),
        job_store=JobApplicationStore(settings.jobs_db_path),
        plan_store=InterviewPlanStore(settings.career_db_path),
        market_store=MarketHistoryStore(settings.career_db_path),
        lesson_store=LessonStore(settings.career_db_path),
        oracle=oracle,
        senders=build_senders(settings),
    )
