# tests/test_commands.py

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from switchbuddy.cli import commands
from switchbuddy.cli.commands import CommandRegistry, registry
from switchbuddy.connectors.console_connector import handle_console_line
from switchbuddy.jobs.job_models import JobStage
from switchbuddy.tracker.views import ViewMode

from .fakes import FakeSender, summary_payload


def test_command_registry_routes_2_and_3_params(state) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}
    notes: list[str] = []

    def h2(state, args):
        called["h2"] += 1
        return "h2"

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b", aliases=["bee"])

    assert reg.handle(state, "/a x") == "h2"
    assert reg.handle(state, "/BEE y", emit=notes.append) == "h3"
    assert called == {"h2": 1, "h3": 1}
    assert notes == ["note"]


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_help_lists_registered_commands(state) -> None:
    text = registry.handle(state, "/help") or ""
    for name in ("/today", "/ledger", "/reschedule", "/wallet", "/jobs", "/debrief", "/learn", "/market", "/plans"):
        assert name in text


def test_add_done_and_today(state) -> None:
    reply = registry.handle(state, "/add today 07:00 Revise SQL joins") or ""
    assert reply.startswith("Added #")
    [task] = state.task_store.list_tasks("u1")
    assert task.date == date.today()
    assert task.time == "07:00"

    registry.handle(state, f"/done {task.id[:8]}")
    listing = registry.handle(state, "/today") or ""
    assert "1/1 done" in listing
    assert "Morning:" in listing
    assert "[x] 07:00 Revise SQL joins" in listing


def test_grid_view_changes_layout(state) -> None:
    state.task_store.add_task("u1", title="Apply", day=date.today(), time="19:00")

    assert "grid" in (registry.handle(state, "/view grid") or "")
    assert state.view_mode == ViewMode.GRID
    listing = registry.handle(state, "/today") or ""
    assert "Evening:" not in listing
    assert "[ ] 19:00 Apply" in listing


def test_missed_and_reschedule(state) -> None:
    yesterday = date.today() - timedelta(days=1)
    tid = state.task_store.add_task("u1", title="Mock interview", day=yesterday)

    assert "1 missed task(s)" in (registry.handle(state, "/missed") or "")

    reply = registry.handle(state, f"/reschedule {tid[:8]} tomorrow had a fever") or ""
    assert "originally" in reply
    t = state.task_store.get_task(tid)
    assert t is not None
    assert t.date == date.today() + timedelta(days=1)
    assert t.rescheduled is not None and t.rescheduled.reason == "had a fever"

    assert "No missed tasks" in (registry.handle(state, "/missed") or "")
    assert "[rescheduled] Mock interview" in (registry.handle(state, "/history") or "")


def test_ledger_shows_debit_for_rescheduled_task(state) -> None:
    yesterday = date.today() - timedelta(days=1)
    tid = state.task_store.add_task("u1", title="Mock interview", day=yesterday)
    registry.handle(state, f"/reschedule {tid[:8]} today busy")

    text = registry.handle(state, "/ledger day") or ""
    assert text.startswith("Ledger day")

    week = registry.handle(state, "/ledger week") or ""
    if yesterday.weekday() < date.today().weekday():
        assert "- Mock interview (rescheduled)" in week

    assert "Usage" in (registry.handle(state, "/ledger year") or "")


def test_ledger_header_only_sums_days_it_shows(state, monkeypatch: pytest.MonkeyPatch) -> None:
    wed = datetime(2024, 6, 12, 20, 0)
    monkeypatch.setattr(commands, "_now", lambda: wed)
    tid = state.task_store.add_task("u1", title="Planned for Thursday", day=date(2024, 6, 13))
    registry.handle(state, f"/reschedule {tid[:8]} today free tonight")
    registry.handle(state, f"/done {tid[:8]}")

    week = registry.handle(state, "/ledger week") or ""

    # Thursday carries a debit for the task moved away from it, but it is not shown yet.
    assert week.splitlines()[0] == "Ledger week 2024-06-10..2024-06-16: net +6, opening 0, closing 6"
    assert "2024-06-13" not in week.split("\n", 1)[1]


def test_ledger_lists_reward_spending_and_matches_wallet(state) -> None:
    for i in range(20):
        state.task_store.add_task("u1", title=f"t{i}", day=date.today() - timedelta(days=1), completed=True)
    registry.handle(state, "/redeem 1")

    text = registry.handle(state, "/ledger day") or ""

    assert "(reward, 25)" in text
    assert text.splitlines()[0].endswith("net -25, opening 25, closing 0")
    assert registry.handle(state, "/wallet") == "Focus Coins: 0"


def test_wallet_redeem_and_claim(state) -> None:
    past = date.today() - timedelta(days=3)
    for i in range(20):
        state.task_store.add_task("u1", title=f"t{i}", day=past, completed=True)

    assert registry.handle(state, "/wallet") == "Focus Coins: 25"
    reply = registry.handle(state, "/redeem 1") or ""
    assert reply.startswith("Redeemed!")
    assert registry.handle(state, "/wallet") == "Focus Coins: 0"

    [mine] = state.reward_store.list_rewards("u1")
    assert "Enjoy" in (registry.handle(state, f"/claim {mine.id[:8]}") or "")
    assert "[claimed]" in (registry.handle(state, "/rewards mine") or "")


def test_job_board_commands(state) -> None:
    assert "Added" in (registry.handle(state, "/job add Acme Corp | Backend Engineer") or "")
    [app] = state.job_store.list_applications("u1")
    assert app.company == "Acme Corp"
    assert app.title == "Backend Engineer"

    registry.handle(state, f"/job move {app.id[:8]} offer")
    assert state.job_store.list_applications("u1")[0].stage == JobStage.OFFER
    assert "Acme Corp - Backend Engineer" in (registry.handle(state, "/jobs") or "")

    registry.handle(state, f"/job delete {app.id[:8]}")
    assert state.job_store.list_applications("u1") == []


def test_debrief_command(state, oracle) -> None:
    assert "nothing to debrief" in (registry.handle(state, "/debrief") or "")

    state.task_store.add_task("u1", title="Apply", day=date.today(), completed=True)
    oracle.responses["daily_summary"] = summary_payload()
    sender = FakeSender()
    state.senders = [sender]

    text = registry.handle(state, "/debrief") or ""

    assert "1/1 tasks completed" in text
    assert "[telegram] sent" in text
    assert len(sender.sent) == 1


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("/done deadbeef", "task not found: deadbeef"),
        ("/add someday 07:00 x", "Bad date"),
        ("/add today 25:99 x", "Bad time"),
        ("/redeem 1", "Insufficient funds"),
        ("/job move abc wishlist", "job application not found"),
        ("/plan", "[AI]"),
        ("hello", "Commands start with '/'"),
    ],
)
def test_console_turns_errors_into_messages(state, line: str, expected: str) -> None:
    reply = handle_console_line(state, line)
    assert reply is not None
    assert expected in reply


def test_console_reports_missing_identity(state) -> None:
    state.user_id = ""
    assert handle_console_line(state, "/add today 07:00 x") == "Authentication required."
    assert handle_console_line(state, "") is None
