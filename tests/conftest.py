# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from switchbuddy.career.interview_plan_store import InterviewPlanStore
from switchbuddy.career.lesson_store import LessonStore
from switchbuddy.career.market_history_store import MarketHistoryStore
from switchbuddy.core.state import AppState
from switchbuddy.jobs.job_store import JobApplicationStore
from switchbuddy.rewards.reward_store import RewardStore
from switchbuddy.tracker.task_store import TaskStore

from .fakes import FakeOracle


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and core modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="SwitchBuddy",
        user_id="u1",
        # Paths (tmp per test run)
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "tasks.sqlite3",
        rewards_db_path=tmp_path / "rewards.sqlite3",
        jobs_db_path=tmp_path / "jobs.sqlite3",
        career_db_path=tmp_path / "career.sqlite3",
        debrief_state_path=tmp_path / "debrief_state.json",
        # AI
        llm_api_key=None,
        llm_base_url="http://localhost:1/v1",
        llm_models=["model-a", "model-b"],
        llm_connect_timeout=1.0,
        llm_read_timeout=1.0,
        # Debrief
        telegram_bot_token=None,
        telegram_chat_id=None,
        whatsapp_webhook_url=None,
        whatsapp_recipient=None,
        debrief_enabled=False,
        debrief_hour=21,
        debrief_minute=0,
        debrief_interval_seconds=0.01,
    )


@pytest.fixture()
def oracle() -> FakeOracle:
    return FakeOracle()


@pytest.fixture()
def state(settings: SimpleNamespace, oracle: FakeOracle) -> AppState:
    """
    AppState wired with a deterministic oracle.

    NOTE: We keep real SQLite stores here because their correctness
    is part of what we want to test.
    """
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
    )
