# src/switchbuddy/tracker/ledger.py

"""
Daily activity ledger.

Turns task state for one calendar day into a credit/debit balance sheet:

- every task completed on the day is one credit
- every task missed on a past (or current) day is one debit
- every task rescheduled away from the day is one debit, wherever it lives now
- a day with >= 80% of its tasks completed earns a bonus
- a past/current day with >= 50% of its tasks missed pays a penalty

Everything here is a pure function of its inputs: no I/O, no clock reads,
inputs are never mutated.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime

from .task_models import Task

STARTING_BALANCE = 0.0

COMPLETION_RATIO = 0.8
COMPLETION_BONUS = 5.0
MISS_RATIO = 0.5
MISS_PENALTY = 5.0


@dataclass(slots=True, frozen=True)
class DayActivity:
    day: date | None
    credits: float = 0.0
    debits: float = 0.0
    net_change: float = 0.0
    completed_tasks: tuple[Task, ...] = field(default_factory=tuple)
    missed_tasks: tuple[Task, ...] = field(default_factory=tuple)
    bonus: float = 0.0
    penalty: float = 0.0


def _as_day(reference_now: date | datetime) -> date:
    if isinstance(reference_now, datetime):
        return reference_now.date()
    return reference_now


def _dedupe_by_id(tasks: Iterable[Task]) -> list[Task]:
    seen: set[str] = set()
    out: list[Task] = []
    for t in tasks:
        if t.id in seen:
            continue
        seen.add(t.id)
        out.append(t)
    return out


def compute_day_activity(
    tasks_for_day: Sequence[Task],
    all_tasks: Iterable[Task],
    reference_now: date | datetime,
    *,
    day: date | None = None,
) -> DayActivity:
    """
    Compute the ledger entry for one day.

    tasks_for_day: tasks whose current date is the day (may be empty).
    all_tasks: the owner's full task collection, used to find tasks that were
        rescheduled away from the day.
    reference_now: the instant that decides whether the day is past/today.
    day: the day itself; defaults to the date of tasks_for_day[0]. With no
        tasks and no explicit day the result is a zero entry.
    """
    if day is None:
        if not tasks_for_day:
            return DayActivity(day=None)
        day = tasks_for_day[0].date

    rescheduled_away = [
        t for t in all_tasks if t.rescheduled is not None and t.rescheduled.original_date == day
    ]
    completed = [t for t in tasks_for_day if t.completed]

    is_past_or_today = day <= _as_day(reference_now)
    missed_here = [t for t in tasks_for_day if not t.completed] if is_past_or_today else []

    # A task can be both on the day and originate from it (moved away, then back).
    missed = _dedupe_by_id([*missed_here, *rescheduled_away])

    total = len(completed) + len(missed)
    credits = float(len(completed))
    debits = float(len(missed))

    bonus = COMPLETION_BONUS if total > 0 and credits / total >= COMPLETION_RATIO else 0.0
    penalty = (
        MISS_PENALTY if is_past_or_today and total > 0 and debits / total >= MISS_RATIO else 0.0
    )

    credits += bonus
    debits += penalty

    return DayActivity(
        day=day,
        credits=credits,
        debits=debits,
        net_change=credits - debits,
        completed_tasks=tuple(completed),
        missed_tasks=tuple(missed),
        bonus=bonus,
        penalty=penalty,
    )


def group_tasks_by_date(tasks: Iterable[Task]) -> dict[date, list[Task]]:
    """Bucket tasks by their current date, chronologically."""
    grouped: dict[date, list[Task]] = {}
    for t in tasks:
        grouped.setdefault(t.date, []).append(t)
    return dict(sorted(grouped.items()))


def ledger_days(tasks: Iterable[Task]) -> list[date]:
    """Every day that holds a task now or is the origin of a rescheduled one."""
    days: set[date] = set()
    for t in tasks:
        days.add(t.date)
        if t.rescheduled is not None:
            days.add(t.rescheduled.original_date)
    return sorted(days)


def activity_for_days(
    days: Iterable[date],
    all_tasks: Sequence[Task],
    reference_now: date | datetime,
) -> list[DayActivity]:
    grouped = group_tasks_by_date(all_tasks)
    return [
        compute_day_activity(grouped.get(d, []), all_tasks, reference_now, day=d)
        for d in sorted(days)
    ]


def cumulative_balance(
    activities: Iterable[DayActivity], starting_balance: float = STARTING_BALANCE
) -> float:
    return starting_balance + sum(a.net_change for a in activities)


def running_balances(
    activities: Iterable[DayActivity], starting_balance: float = STARTING_BALANCE
) -> Iterator[tuple[DayActivity, float]]:
    """Yield (activity, balance after that day) in chronological order."""
    ordered = sorted(activities, key=lambda a: a.day or date.min)
    balance = starting_balance
    for a in ordered:
        balance += a.net_change
        yield a, balance


def total_net_change(all_tasks: Sequence[Task], reference_now: date | datetime) -> float:
    """All-time ledger sum over every day the owner has activity on."""
    return cumulative_balance(activity_for_days(ledger_days(all_tasks), all_tasks, reference_now))
