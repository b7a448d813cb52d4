# src/switchbuddy/tracker/rescheduling.py

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, timedelta
from enum import StrEnum

from ..core.errors import RecordNotFoundError
from ..core.ports import TaskRepo
from .task_models import RescheduleInfo, Task

logger = logging.getLogger(__name__)


class RescheduleTarget(StrEnum):
    TODAY = "today"
    TOMORROW = "tomorrow"


def missed_tasks_for_gate(tasks: Iterable[Task], today: date) -> list[Task]:
    """
    Tasks the user has to deal with before planning the day:
    incomplete, never rescheduled and dated before today. Oldest first.
    """
    missed = [t for t in tasks if not t.completed and t.rescheduled is None and t.date < today]
    return sorted(missed, key=lambda t: (t.date, t.time))


def reschedule_task(
    store: TaskRepo,
    user_id: str,
    task_id: str,
    *,
    target: RescheduleTarget,
    reason: str,
    today: date,
) -> Task:
    """
    Move an open task to today or tomorrow.

    The target must differ from both the current day and the origin day, so a
    task is never debited on the day it is still planned for. Its origin stays
    the first day it was ever scheduled for; the reason is replaced by the
    latest one.
    """
    reason = (reason or "").strip()
    if not reason:
        raise ValueError("A reason is required to reschedule a task.")

    task = store.get_task(task_id)
    if task is None:
        raise RecordNotFoundError("task", task_id)

    if task.completed:
        raise ValueError(f"Task '{task.title}' is already completed.")

    new_day = today if target == RescheduleTarget.TODAY else today + timedelta(days=1)
    if new_day in (task.date, task.origin_date):
        raise ValueError(f"Task '{task.title}' is already planned for {new_day.isoformat()}.")

    info = RescheduleInfo(original_date=task.origin_date, reason=reason)

    store.update_task(user_id, task_id, day=new_day, completed=False, rescheduled=info)
    logger.info("Task %s rescheduled %s -> %s (origin %s)", task_id, task.date, new_day, info.original_date)

    moved = store.get_task(task_id)
    if moved is None:
        raise RecordNotFoundError("task", task_id)
    return moved


def missed_and_rescheduled_history(tasks: Iterable[Task], today: date, days: int = 7) -> list[Task]:
    """
    Rescheduled tasks plus incomplete past tasks from the last `days` days,
    ordered by the day they were originally planned for.
    """
    since = today - timedelta(days=days)
    relevant = [
        t
        for t in tasks
        if since <= t.origin_date
        and (t.rescheduled is not None or (not t.completed and t.date < today))
    ]
    return sorted(relevant, key=lambda t: (t.origin_date, t.time))
