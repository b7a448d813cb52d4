# src/switchbuddy/tracker/views.py

"""Day / week / month views over the ledger, plus small presentation helpers."""

from __future__ import annotations

import calendar
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import StrEnum

from ..rewards.reward_models import UserReward
from .ledger import STARTING_BALANCE, DayActivity, activity_for_days, cumulative_balance, ledger_days
from .task_models import Task


class ViewMode(StrEnum):
    LIST = "list"
    GRID = "grid"


class Period(StrEnum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


@dataclass(slots=True, frozen=True)
class TimelineEntry:
    """One day of the history: task ledger, rewards bought that day, balance after the day."""

    activity: DayActivity
    balance: float
    redeemed_rewards: tuple[UserReward, ...] = ()
    reward_debits: float = 0.0

    @property
    def debits(self) -> float:
        return self.activity.debits + self.reward_debits

    @property
    def net_change(self) -> float:
        return self.activity.net_change - self.reward_debits


@dataclass(slots=True, frozen=True)
class Timeline:
    period: Period
    start: date
    end: date
    opening_balance: float
    entries: tuple[TimelineEntry, ...]

    @property
    def net_change(self) -> float:
        return sum(e.net_change for e in self.entries)


def period_bounds(period: Period, reference: date) -> tuple[date, date]:
    """Inclusive date range of the period containing reference (weeks start on Monday)."""
    if period == Period.DAY:
        return reference, reference
    if period == Period.WEEK:
        start = reference - timedelta(days=reference.weekday())
        return start, start + timedelta(days=6)
    last = calendar.monthrange(reference.year, reference.month)[1]
    return reference.replace(day=1), reference.replace(day=last)


def iter_days(start: date, end: date) -> Iterable[date]:
    d = start
    while d <= end:
        yield d
        d += timedelta(days=1)


def group_rewards_by_date(rewards: Iterable[UserReward]) -> dict[date, list[UserReward]]:
    """Bucket redeemed rewards by the local day they were bought on."""
    grouped: dict[date, list[UserReward]] = {}
    for r in rewards:
        grouped.setdefault(datetime.fromtimestamp(r.redeemed_at).date(), []).append(r)
    return grouped


def build_timeline(
    period: Period,
    all_tasks: Sequence[Task],
    reference_now: date | datetime,
    *,
    rewards: Iterable[UserReward] = (),
    starting_balance: float = STARTING_BALANCE,
) -> Timeline:
    """
    Ledger history for the period containing reference_now.

    Balances carry over from everything before the period (task days and
    reward purchases), so the balance after the last active day matches the
    wallet. Reward costs are debited on the day they were redeemed.
    """
    today = reference_now.date() if isinstance(reference_now, datetime) else reference_now
    start, end = period_bounds(period, today)
    spent = group_rewards_by_date(rewards)

    earlier = [d for d in ledger_days(all_tasks) if d < start]
    balance = cumulative_balance(activity_for_days(earlier, all_tasks, reference_now), starting_balance)
    balance -= sum(r.cost for d, items in spent.items() if d < start for r in items)
    opening = balance

    entries: list[TimelineEntry] = []
    for a in activity_for_days(iter_days(start, end), all_tasks, reference_now):
        redeemed = tuple(spent.get(a.day, [])) if a.day is not None else ()
        entry_debits = float(sum(r.cost for r in redeemed))
        balance += a.net_change - entry_debits
        entries.append(
            TimelineEntry(activity=a, balance=balance, redeemed_rewards=redeemed, reward_debits=entry_debits)
        )
    return Timeline(period=period, start=start, end=end, opening_balance=opening, entries=tuple(entries))


def activity_label(day: date, today: date) -> str:
    if day == today:
        return "Today"
    if day == today - timedelta(days=1):
        return "Yesterday"
    return f"{day.strftime('%A, %b')} {day.day}"


def group_tasks_by_time_of_day(tasks: Iterable[Task]) -> dict[str, list[Task]]:
    """Split tasks into morning (<12h), afternoon (<18h) and evening buckets."""
    groups: dict[str, list[Task]] = {"morning": [], "afternoon": [], "evening": []}
    for t in tasks:
        try:
            hour = int(t.time.split(":")[0])
        except ValueError:
            hour = 0
        if hour < 12:
            groups["morning"].append(t)
        elif hour < 18:
            groups["afternoon"].append(t)
        else:
            groups["evening"].append(t)
    return groups
