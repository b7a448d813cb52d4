# tests/test_debrief.py

from __future__ import annotations

import asyncio
import json
from datetime import date, datetime, time, timedelta

import pytest

from switchbuddy.core.errors import OracleError
from switchbuddy.llm.schemas import DailySummary
from switchbuddy.tracker.debrief import (
    compute_streak,
    format_telegram_message,
    format_whatsapp_message,
    run_daily_debrief,
)
from switchbuddy.tracker.debrief_scheduler import debrief_tick, is_debrief_due, run_debrief_scheduler
from switchbuddy.tracker.task_models import Task

from .fakes import FakeSender, summary_payload

TODAY = date(2024, 6, 12)


def _done(day: date, task_id: str = "x") -> Task:
    return Task(id=f"{task_id}-{day}", user_id="u1", title="t", date=day, completed=True)


def test_streak_counts_back_from_today() -> None:
    tasks = [_done(TODAY), _done(TODAY - timedelta(days=1)), _done(TODAY - timedelta(days=2))]
    assert compute_streak(tasks, TODAY) == 3


def test_streak_may_end_yesterday_and_breaks_on_gaps() -> None:
    tasks = [_done(TODAY - timedelta(days=1)), _done(TODAY - timedelta(days=2)), _done(TODAY - timedelta(days=4))]
    assert compute_streak(tasks, TODAY) == 2
    assert compute_streak([], TODAY) == 0
    assert compute_streak([_done(TODAY + timedelta(days=1))], TODAY) == 0


def test_telegram_format() -> None:
    summary = DailySummary.model_validate(summary_payload(completed_tasks=3, total_tasks=4, streak=5))

    text = format_telegram_message(summary)

    assert text == (
        "📝 Daily Debrief\n"
        "✅ Today’s Summary: 3/4 tasks completed\n"
        "🔥 Streak: 5 days\n"
        "📌 Missed Tasks:\n"
        "- Write cover letter → Tomorrow 8AM\n"
        "🎯 Top 3 Priorities for Tomorrow:\n"
        "1. Apply to 3 jobs\n"
        "2. Revise SQL joins\n"
        "3. Mock interview\n"
    )


def test_whatsapp_format_uses_bold_headings_and_skips_empty_sections() -> None:
    summary = DailySummary.model_validate(
        summary_payload(completed_tasks=2, total_tasks=2, streak=1, missed_tasks=[], next_day_priorities=[])
    )

    text = format_whatsapp_message(summary)

    assert text.startswith("*📝 Daily Debrief*\n\n")
    assert "*✅ Today’s Summary:*\n2/2 tasks completed\n\n" in text
    assert "Missed Tasks" not in text
    assert "Priorities" not in text


def test_debrief_is_skipped_without_tasks(state, oracle) -> None:
    sender = FakeSender()
    state.senders = [sender]

    result = run_daily_debrief(state, TODAY)

    assert result.skipped
    assert oracle.calls == []
    assert sender.sent == []


def test_debrief_overrides_counts_and_sends_per_channel_format(state, oracle) -> None:
    store = state.task_store
    store.add_task("u1", title="Apply", day=TODAY, completed=True)
    store.add_task("u1", title="Cover letter", day=TODAY)
    store.add_task("u1", title="Yesterday", day=TODAY - timedelta(days=1), completed=True)
    oracle.responses["daily_summary"] = summary_payload()
    telegram, whatsapp = FakeSender("telegram"), FakeSender("whatsapp", success=False)
    state.senders = [telegram, whatsapp]

    result = run_daily_debrief(state, TODAY)

    assert result.summary is not None
    assert (result.summary.completed_tasks, result.summary.total_tasks, result.summary.streak) == (1, 2, 2)
    assert telegram.sent[0].startswith("📝 Daily Debrief\n")
    assert whatsapp.sent[0].startswith("*📝 Daily Debrief*")
    assert result.deliveries["telegram"].success
    assert not result.deliveries["whatsapp"].success
    assert result.delivered

    [(name, data)] = oracle.calls
    assert name == "daily_summary"
    assert sorted(t.title for t in data.tasks) == ["Apply", "Cover letter"]


def test_debrief_without_ai_result_raises(state) -> None:
    state.task_store.add_task("u1", title="Apply", day=TODAY)
    with pytest.raises(OracleError):
        run_daily_debrief(state, TODAY)


def test_is_debrief_due() -> None:
    at = time(21, 0)
    assert not is_debrief_due(datetime(2024, 6, 12, 20, 59), at, None)
    assert is_debrief_due(datetime(2024, 6, 12, 21, 0), at, None)
    assert is_debrief_due(datetime(2024, 6, 12, 23, 0), at, TODAY - timedelta(days=1))
    assert not is_debrief_due(datetime(2024, 6, 12, 23, 0), at, TODAY)


def test_tick_runs_once_per_day_and_persists(state, oracle, tmp_path) -> None:
    path = tmp_path / "state" / "debrief.json"
    state.task_store.add_task("u1", title="Apply", day=TODAY)
    oracle.responses["daily_summary"] = summary_payload()
    sender = FakeSender()
    state.senders = [sender]

    assert not debrief_tick(state, datetime(2024, 6, 12, 20, 0), run_at=time(21, 0), state_path=path)
    assert debrief_tick(state, datetime(2024, 6, 12, 21, 5), run_at=time(21, 0), state_path=path)
    assert not debrief_tick(state, datetime(2024, 6, 12, 22, 0), run_at=time(21, 0), state_path=path)

    assert len(sender.sent) == 1
    assert json.loads(path.read_text(encoding="utf-8")) == {"last_run_date": "2024-06-12"}


def test_failed_debrief_still_marks_the_day(state, tmp_path) -> None:
    path = tmp_path / "debrief.json"
    state.task_store.add_task("u1", title="Apply", day=TODAY)

    assert debrief_tick(state, datetime(2024, 6, 12, 21, 5), run_at=time(21, 0), state_path=path)
    assert not debrief_tick(state, datetime(2024, 6, 12, 21, 6), run_at=time(21, 0), state_path=path)


def test_corrupt_state_file_is_ignored(state, tmp_path) -> None:
    path = tmp_path / "debrief.json"
    path.write_text("{not json", encoding="utf-8")

    assert debrief_tick(state, datetime(2024, 6, 12, 21, 5), run_at=time(21, 0), state_path=path)


@pytest.mark.asyncio
async def test_scheduler_sends_debrief_once(state, oracle, tmp_path) -> None:
    state.task_store.add_task("u1", title="Apply", day=TODAY, completed=True)
    oracle.responses["daily_summary"] = summary_payload()
    sender = FakeSender()
    state.senders = [sender]

    runner = asyncio.create_task(
        run_debrief_scheduler(
            state,
            hour=21,
            minute=0,
            interval_seconds=0.01,
            state_path=tmp_path / "debrief.json",
            clock=lambda: datetime(2024, 6, 12, 21, 30),
        )
    )

    for _ in range(500):
        if sender.sent:
            break
        await asyncio.sleep(0.01)
    # a few more ticks at the same clock must not send again
    await asyncio.sleep(0.1)
    runner.cancel()
    with pytest.raises(asyncio.CancelledError):
        await runner

    assert len(sender.sent) == 1
