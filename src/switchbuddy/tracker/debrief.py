# src/switchbuddy/tracker/debrief.py

"""
Daily debrief: summarize today's tasks with the AI and push the summary to
every configured channel (Telegram, WhatsApp).

Counts and the streak are computed locally and override whatever the model
returned for them.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import date, timedelta

from ..core.ports import SendResult
from ..core.state import AppState
from ..llm.flows import DAILY_SUMMARY, run_flow
from ..llm.schemas import DailySummary, DailySummaryInput, SummaryTask
from .task_models import Task

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DebriefResult:
    day: date
    skipped: bool = False
    summary: DailySummary | None = None
    deliveries: dict[str, SendResult] = field(default_factory=dict)

    @property
    def delivered(self) -> bool:
        return any(r.success for r in self.deliveries.values())


def compute_streak(all_tasks: Iterable[Task], today: date) -> int:
    """
    Consecutive days with at least one completed task, counting back from today.

    If nothing is completed today yet, the run may still end yesterday.
    """
    done_days = {t.date for t in all_tasks if t.completed and t.date <= today}
    day = today if today in done_days else today - timedelta(days=1)
    streak = 0
    while day in done_days:
        streak += 1
        day -= timedelta(days=1)
    return streak


def format_telegram_message(summary: DailySummary) -> str:
    text = "📝 Daily Debrief\n"
    text += f"✅ Today’s Summary: {summary.completed_tasks}/{summary.total_tasks} tasks completed\n"
    text += f"🔥 Streak: {summary.streak} days\n"

    if summary.missed_tasks:
        text += "📌 Missed Tasks:\n"
        for t in summary.missed_tasks:
            text += f"- {t.title} → {t.rescheduled_time}\n"

    if summary.next_day_priorities:
        text += "🎯 Top 3 Priorities for Tomorrow:\n"
        for i, p in enumerate(summary.next_day_priorities, start=1):
            text += f"{i}. {p}\n"

    return text


def format_whatsapp_message(summary: DailySummary) -> str:
    text = "*📝 Daily Debrief*\n\n"
    text += f"*✅ Today’s Summary:*\n{summary.completed_tasks}/{summary.total_tasks} tasks completed\n\n"
    text += f"*🔥 Streak:*\n{summary.streak} days\n\n"

    if summary.missed_tasks:
        text += "*📌 Missed Tasks:*\n"
        for t in summary.missed_tasks:
            text += f"- {t.title} → {t.rescheduled_time}\n"
        text += "\n"

    if summary.next_day_priorities:
        text += "*🎯 Top 3 Priorities for Tomorrow:*\n"
        for i, p in enumerate(summary.next_day_priorities, start=1):
            text += f"{i}. {p}\n"

    return text


_FORMATTERS: dict[str, Callable[[DailySummary], str]] = {
    "telegram": format_telegram_message,
    "whatsapp": format_whatsapp_message,
}


def summarize_day(state: AppState, today: date) -> DailySummary | None:
    """Today's summary, or None when there is nothing scheduled today."""
    with state.lock:
        tasks = state.task_store.list_tasks_for_date(state.user_id, today)
        all_tasks = state.task_store.list_tasks(state.user_id)

    if not tasks:
        return None

    data = DailySummaryInput(tasks=[SummaryTask(title=t.title, time=t.time, completed=t.completed) for t in tasks])
    summary = run_flow(state.oracle, DAILY_SUMMARY, data)

    return summary.model_copy(
        update={
            "completed_tasks": sum(1 for t in tasks if t.completed),
            "total_tasks": len(tasks),
            "streak": compute_streak(all_tasks, today),
        }
    )


def run_daily_debrief(state: AppState, today: date) -> DebriefResult:
    """
    Summarize today and send the debrief through every configured sender.

    Raises OracleError when the AI produced no summary.
    """
    summary = summarize_day(state, today)
    if summary is None:
        logger.info("Debrief skipped for %s: no tasks scheduled", today)
        return DebriefResult(day=today, skipped=True)

    result = DebriefResult(day=today, summary=summary)
    for sender in state.senders:
        fmt = _FORMATTERS.get(sender.name, format_telegram_message)
        outcome = sender.send(fmt(summary))
        result.deliveries[sender.name] = outcome
        if not outcome.success:
            logger.warning("Debrief via %s failed: %s", sender.name, outcome.message)

    logger.info(
        "Debrief for %s: %d/%d done, streak=%d, channels=%d",
        today,
        summary.completed_tasks,
        summary.total_tasks,
        summary.streak,
        len(result.deliveries),
    )
    return result
