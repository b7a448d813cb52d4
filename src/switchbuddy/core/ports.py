# src/switchbuddy/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the services.

Services depend on Protocols instead of concrete implementations, which keeps
stores / oracle / senders swappable and makes testing easier.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Any, Protocol, TypeVar

from pydantic import BaseModel

if TYPE_CHECKING:
    from ..career.career_models import LessonSession, MarketSearch, SavedInterviewPlan
    from ..jobs.job_models import JobApplication, JobStage
    from ..llm.flows import Flow
    from ..llm.schemas import ChatMessage, MarketIntelligence, MarketIntelligenceInput, SalaryEstimate
    from ..rewards.reward_models import UserReward
    from ..tracker.task_models import RescheduleInfo, Task, TaskKind

OutT = TypeVar("OutT", bound=BaseModel)


class Oracle(Protocol):
    """
    Structured-output AI client.

    Returns None when no valid result could be produced; callers must not
    fabricate data in that case.
    """

    def invoke(self, flow: "Flow[Any, OutT]", data: BaseModel) -> OutT | None: ...


@dataclass(slots=True, frozen=True)
class SendResult:
    success: bool
    message: str


class DebriefSender(Protocol):
    """Outbound channel for the daily debrief. Never raises; failures come back as SendResult."""

    name: str

    def send(self, message: str) -> SendResult: ...


class TaskRepo(Protocol):
    def get_task(self, task_id: str) -> "Task | None": ...
    def list_tasks(self, user_id: str) -> list["Task"]: ...
    def list_tasks_for_date(self, user_id: str, day: date) -> list["Task"]: ...
    def list_tasks_between(self, user_id: str, start: date, end: date) -> list["Task"]: ...

    def add_task(
        self,
        user_id: str,
        *,
        title: str,
        day: date,
        time: str = "09:00",
        kind: "TaskKind" = ...,
        description: str | None = None,
        completed: bool = False,
    ) -> str: ...

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
        rescheduled: "RescheduleInfo | None" = None,
    ) -> None: ...

    def delete_task(self, user_id: str, task_id: str) -> None: ...


class RewardRepo(Protocol):
    def list_rewards(self, user_id: str) -> list["UserReward"]: ...

    def add_reward(
        self,
        user_id: str,
        *,
        reward_id: int,
        name: str,
        description: str,
        icon: str,
        cost: float,
    ) -> str: ...

    def mark_claimed(self, user_id: str, user_reward_id: str) -> None: ...


class JobApplicationRepo(Protocol):
    def list_applications(self, user_id: str) -> list["JobApplication"]: ...

    def add_application(
        self,
        user_id: str,
        *,
        company: str,
        title: str,
        stage: "JobStage" = ...,
        logo_url: str | None = None,
    ) -> str: ...

    def move_application(self, user_id: str, app_id: str, stage: "JobStage") -> None: ...
    def delete_application(self, user_id: str, app_id: str) -> None: ...


class InterviewPlanRepo(Protocol):
    def get_plan(self, plan_id: str) -> "SavedInterviewPlan | None": ...
    def list_plans(self, user_id: str) -> list["SavedInterviewPlan"]: ...

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
    ) -> str: ...

    def record_completed(self, user_id: str, plan_id: str) -> int: ...
    def delete_plan(self, user_id: str, plan_id: str) -> None: ...


class MarketHistoryRepo(Protocol):
    def add_search(
        self,
        user_id: str,
        *,
        query: "MarketIntelligenceInput",
        intel: "MarketIntelligence",
        salary: "SalaryEstimate | None" = None,
    ) -> str: ...

    def list_searches(self, user_id: str) -> list["MarketSearch"]: ...


class LessonRepo(Protocol):
    def get_session(self, user_id: str, topic: str) -> "LessonSession | None": ...
    def list_sessions(self, user_id: str) -> list["LessonSession"]: ...
    def save_history(self, user_id: str, topic: str, history: Sequence["ChatMessage"]) -> str: ...
