# src/switchbuddy/tracker/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import StrEnum


class TaskKind(StrEnum):
    SCHEDULE = "schedule"
    INTERVIEW = "interview"

    @classmethod
    def from_db(cls, raw: str | None) -> TaskKind:
        if not raw:
            return cls.SCHEDULE
        try:
            return cls(raw)
        except ValueError:
            return cls.SCHEDULE


@dataclass(slots=True, frozen=True)
class RescheduleInfo:
    """
    Where a task came from.

    original_date is the first day the task was ever scheduled for; it does not
    move when the task is rescheduled again.
    """

    original_date: date
    reason: str


@dataclass(slots=True, frozen=True)
class Task:
    id: str
    user_id: str
    title: str
    date: date
    time: str = "09:00"
    kind: TaskKind = TaskKind.SCHEDULE
    description: str | None = None
    completed: bool = False
    rescheduled: RescheduleInfo | None = None

    @property
    def origin_date(self) -> date:
        return self.rescheduled.original_date if self.rescheduled else self.date
