# src/switchbuddy/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

from ..tracker.views import ViewMode
from .ports import (
    DebriefSender,
    InterviewPlanRepo,
    JobApplicationRepo,
    LessonRepo,
    MarketHistoryRepo,
    Oracle,
    RewardRepo,
    TaskRepo,
)


@dataclass
class AppState:
    """
    Explicit application context.

    Carries the acting identity and the current view mode instead of keeping
    them in module globals, so services and commands stay testable.
    """

    settings: Any
    user_id: str

    task_store: TaskRepo
    reward_store: RewardRepo
    job_store: JobApplicationRepo
    plan_store: InterviewPlanRepo
    market_store: MarketHistoryRepo
    lesson_store: LessonRepo
    oracle: Oracle

    senders: list[DebriefSender] = field(default_factory=list)
    view_mode: ViewMode = ViewMode.LIST

    # Console and debrief scheduler share the state across threads.
    lock: threading.RLock = field(default_factory=threading.RLock)
