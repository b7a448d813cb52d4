# src/switchbuddy/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Iterable
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import cast

from ..career import services as career_services
from ..core.errors import RecordNotFoundError
from ..core.state import AppState
from ..jobs.job_models import JobStage
from ..jobs.job_store import build_board
from ..llm import flows, schemas
from ..rewards.catalog import REWARD_CATEGORIES
from ..rewards.reward_models import RewardStatus
from ..rewards.wallet import claim_reward, focus_coin_balance, redeem_reward
from ..tracker.debrief import format_telegram_message, run_daily_debrief
from ..tracker.rescheduling import (
    RescheduleTarget,
    missed_and_rescheduled_history,
    missed_tasks_for_gate,
    reschedule_task,
)
from ..tracker.task_models import Task
from ..tracker.views import (
    Period,
    TimelineEntry,
    ViewMode,
    activity_label,
    build_timeline,
    group_tasks_by_time_of_day,
)

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

SHORT_ID = 8


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /today, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str, emit: CommandEmitter | None = None) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- helpers ----


def _now() -> datetime:
    return datetime.now()


def _today() -> date:
    return _now().date()


def _short(record_id: str) -> str:
    return record_id[:SHORT_ID]


def _resolve_id(ids: Iterable[str], prefix: str, kind: str) -> str:
    """Full record id from a unique prefix (the console shows 8-char ids)."""
    prefix = prefix.strip().lower()
    matches = [i for i in ids if i.startswith(prefix)] if prefix else []
    if not matches:
        raise RecordNotFoundError(kind, prefix)
    if len(matches) > 1:
        raise ValueError(f"Ambiguous {kind} id {prefix!r}: {len(matches)} matches.")
    return matches[0]


def _resolve_task(state: AppState, prefix: str) -> Task:
    tasks = {t.id: t for t in state.task_store.list_tasks(state.user_id)}
    return tasks[_resolve_id(tasks, prefix, "task")]


def _parse_day(raw: str, today: date) -> date:
    key = raw.strip().lower()
    if key == "today":
        return today
    if key == "tomorrow":
        return today + timedelta(days=1)
    if key == "yesterday":
        return today - timedelta(days=1)
    try:
        return date.fromisoformat(raw)
    except ValueError:
        raise ValueError(f"Bad date {raw!r}. Use YYYY-MM-DD, today, tomorrow or yesterday.") from None


def _parse_time(raw: str) -> str:
    try:
        return datetime.strptime(raw.strip(), "%H:%M").strftime("%H:%M")
    except ValueError:
        raise ValueError(f"Bad time {raw!r}. Use HH:MM (24h).") from None


def _coins(value: float) -> str:
    return f"{value:g}"


def _task_line(t: Task) -> str:
    mark = "x" if t.completed else " "
    kind = " [interview]" if t.kind.value == "interview" else ""
    moved = ""
    if t.rescheduled is not None:
        moved = f" (moved from {t.rescheduled.original_date}: {t.rescheduled.reason})"
    return f"[{mark}] {t.time} {t.title}{kind}{moved}  #{_short(t.id)}"


def _render_entry(e: TimelineEntry, today: date, mode: ViewMode) -> list[str]:
    a = e.activity
    day = a.day or today
    label = activity_label(day, today)
    sign = "+" if e.net_change >= 0 else ""
    if mode == ViewMode.GRID:
        return [
            f"{day.isoformat()}  {label:<22} +{_coins(a.credits):<4} -{_coins(e.debits):<4} "
            f"bonus {_coins(a.bonus):<3} penalty {_coins(a.penalty):<3} rewards {_coins(e.reward_debits):<4} "
            f"net {sign}{_coins(e.net_change):<5} bal {_coins(e.balance)}"
        ]
    lines = [f"{label} ({day.isoformat()}): net {sign}{_coins(e.net_change)}, balance {_coins(e.balance)}"]
    for t in a.completed_tasks:
        lines.append(f"    + {t.title}")
    for t in a.missed_tasks:
        suffix = " (rescheduled)" if t.rescheduled is not None and t.date != day else ""
        lines.append(f"    - {t.title}{suffix}")
    if a.bonus:
        lines.append(f"    + completion bonus {_coins(a.bonus)}")
    if a.penalty:
        lines.append(f"    - missed-tasks penalty {_coins(a.penalty)}")
    for r in e.redeemed_rewards:
        lines.append(f"    - {r.icon} {r.name} (reward, {_coins(r.cost)})")
    return lines


# ---- general ----


def cmd_help(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    models = ", ".join(list(getattr(state.settings, "llm_models", []) or []))
    senders = ", ".join(s.name for s in state.senders) or "none"
    debrief = "ON" if getattr(state.settings, "debrief_enabled", False) else "OFF"
    return (
        "Status:\n"
        f"  User: {state.user_id or '(signed out)'}\n"
        f"  View: {state.view_mode.value}\n"
        f"  AI: {type(state.oracle).__name__}\n"
        f"  Models (priority -> fallback): {models}\n"
        f"  Debrief scheduler: {debrief}, channels: {senders}"
    )


def cmd_view(state: AppState, args: list[str]) -> str:
    """
    /view          -> show current view mode
    /view list     -> detailed view
    /view grid     -> compact one-line-per-row view
    """
    if not args:
        return f"View mode is {state.view_mode.value}. Use /view list or /view grid."
    try:
        state.view_mode = ViewMode(args[0].lower())
    except ValueError:
        return "Usage: /view list | /view grid."
    return f"View mode set to {state.view_mode.value}."


# ---- daily tracker ----


def cmd_today(state: AppState, args: list[str]) -> str:
    """/today [day] -> tasks for a day grouped by morning/afternoon/evening."""
    today = _today()
    day = _parse_day(args[0], today) if args else today
    tasks = state.task_store.list_tasks_for_date(state.user_id, day)
    if not tasks:
        return f"No tasks for {activity_label(day, today)} ({day.isoformat()})."

    done = sum(1 for t in tasks if t.completed)
    lines = [f"{activity_label(day, today)} ({day.isoformat()}): {done}/{len(tasks)} done"]
    if state.view_mode == ViewMode.GRID:
        lines.extend(_task_line(t) for t in sorted(tasks, key=lambda t: t.time))
        return "\n".join(lines)

    for bucket, items in group_tasks_by_time_of_day(sorted(tasks, key=lambda t: t.time)).items():
        if not items:
            continue
        lines.append(f"  {bucket.capitalize()}:")
        lines.extend(f"    {_task_line(t)}" for t in items)
    return "\n".join(lines)


def cmd_add(state: AppState, args: list[str]) -> str:
    """/add <day> <HH:MM> <title...>"""
    if len(args) < 3:
        return "Usage: /add <YYYY-MM-DD|today|tomorrow> <HH:MM> <title>"
    day = _parse_day(args[0], _today())
    at = _parse_time(args[1])
    title = " ".join(args[2:])
    task_id = state.task_store.add_task(state.user_id, title=title, day=day, time=at)
    return f"Added #{_short(task_id)}: {title} on {day.isoformat()} at {at}."


def _set_completed(state: AppState, args: list[str], completed: bool) -> str:
    if not args:
        return f"Usage: /{'done' if completed else 'undo'} <task id>"
    task = _resolve_task(state, args[0])
    state.task_store.update_task(state.user_id, task.id, completed=completed)
    return f"{'Completed' if completed else 'Reopened'}: {task.title}"


def cmd_done(state: AppState, args: list[str]) -> str:
    return _set_completed(state, args, True)


def cmd_undo(state: AppState, args: list[str]) -> str:
    return _set_completed(state, args, False)


def cmd_delete(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /delete <task id>"
    task = _resolve_task(state, args[0])
    state.task_store.delete_task(state.user_id, task.id)
    return f"Deleted: {task.title}"


def cmd_describe(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/describe <task id> -> let the AI write a one-sentence description."""
    if not args:
        return "Usage: /describe <task id>"
    task = _resolve_task(state, args[0])
    if emit:
        emit("[AI] Writing a description...")
    result = flows.run_flow(state.oracle, flows.TASK_DESCRIPTION, schemas.TaskDescriptionInput(title=task.title))
    state.task_store.update_task(state.user_id, task.id, description=result.description)
    return f"{task.title}: {result.description}"


def cmd_missed(state: AppState, args: list[str]) -> str:
    missed = missed_tasks_for_gate(state.task_store.list_tasks(state.user_id), _today())
    if not missed:
        return "No missed tasks. Nothing to reschedule."
    lines = [f"{len(missed)} missed task(s). Reschedule with /reschedule <id> today|tomorrow <reason>:"]
    lines.extend(f"  {t.date.isoformat()} {_task_line(t)}" for t in missed)
    return "\n".join(lines)


def cmd_reschedule(state: AppState, args: list[str]) -> str:
    """/reschedule <task id> today|tomorrow <reason...>"""
    if len(args) < 3:
        return "Usage: /reschedule <task id> today|tomorrow <reason>"
    try:
        target = RescheduleTarget(args[1].lower())
    except ValueError:
        return "Target must be 'today' or 'tomorrow'."
    task = _resolve_task(state, args[0])
    moved = reschedule_task(
        state.task_store,
        state.user_id,
        task.id,
        target=target,
        reason=" ".join(args[2:]),
        today=_today(),
    )
    return f"Moved '{moved.title}' to {moved.date.isoformat()} (originally {moved.origin_date.isoformat()})."


def cmd_history(state: AppState, args: list[str]) -> str:
    """/history -> missed and rescheduled tasks from the last 7 days."""
    items = missed_and_rescheduled_history(state.task_store.list_tasks(state.user_id), _today())
    if not items:
        return "No missed or rescheduled tasks in the last 7 days."
    lines = ["Missed & rescheduled (last 7 days):"]
    for t in items:
        status = "rescheduled" if t.rescheduled is not None else "missed"
        lines.append(f"  {t.origin_date.isoformat()} [{status}] {t.title}  #{_short(t.id)}")
    return "\n".join(lines)


def cmd_ledger(state: AppState, args: list[str]) -> str:
    """/ledger [day|week|month] -> credits, debits and running balance per day."""
    try:
        period = Period(args[0].lower()) if args else Period.WEEK
    except ValueError:
        return "Usage: /ledger [day|week|month]"

    now = _now()
    today = now.date()
    all_tasks = state.task_store.list_tasks(state.user_id)
    rewards = state.reward_store.list_rewards(state.user_id)
    timeline = build_timeline(period, all_tasks, now, rewards=rewards)

    # Days after today are not shown, so they are not summed either.
    shown = [e for e in timeline.entries if e.activity.day is None or e.activity.day <= today]
    net = sum(e.net_change for e in shown)
    closing = shown[-1].balance if shown else timeline.opening_balance

    sign = "+" if net >= 0 else ""
    lines = [
        f"Ledger {period.value} {timeline.start.isoformat()}..{timeline.end.isoformat()}: "
        f"net {sign}{_coins(net)}, opening {_coins(timeline.opening_balance)}, closing {_coins(closing)}"
    ]
    for e in shown:
        lines.extend(_render_entry(e, today, state.view_mode))
    return "\n".join(lines)


# ---- wallet & rewards ----


def cmd_wallet(state: AppState, args: list[str]) -> str:
    balance = focus_coin_balance(state, _now())
    return f"Focus Coins: {_coins(balance)}"


def cmd_rewards(state: AppState, args: list[str]) -> str:
    """
    /rewards        -> reward catalog
    /rewards mine   -> redeemed rewards
    """
    if args and args[0].lower() == "mine":
        mine = state.reward_store.list_rewards(state.user_id)
        if not mine:
            return "No redeemed rewards yet."
        lines = ["Your rewards:"]
        for r in mine:
            status = "claimed" if r.status == RewardStatus.CLAIMED else "unclaimed"
            lines.append(f"  {r.icon} {r.name} ({_coins(r.cost)} coins) [{status}]  #{_short(r.id)}")
        return "\n".join(lines)

    lines = ["Reward catalog (/redeem <number>):"]
    for category in REWARD_CATEGORIES:
        lines.append(f"  {category.title}")
        for r in category.rewards:
            lines.append(f"    {r.id:>2}. {r.icon} {r.name} - {r.description}")
    return "\n".join(lines)


def cmd_redeem(state: AppState, args: list[str]) -> str:
    if not args or not args[0].isdigit():
        return "Usage: /redeem <reward number> (see /rewards)"
    rid = redeem_reward(state, int(args[0]), _now())
    return f"Redeemed! Reward #{_short(rid)} is waiting. Claim it with /claim {_short(rid)}."


def cmd_claim(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /claim <reward id> (see /rewards mine)"
    mine = {r.id: r for r in state.reward_store.list_rewards(state.user_id)}
    full_id = _resolve_id(mine, args[0], "reward")
    claim_reward(state, full_id)
    return f"Enjoy: {mine[full_id].name}"


# ---- job tracker ----


def cmd_jobs(state: AppState, args: list[str]) -> str:
    board = build_board(state.job_store.list_applications(state.user_id))
    if state.view_mode == ViewMode.GRID:
        return "\n".join(f"{stage.value:<10} {len(apps)}" for stage, apps in board.items())
    lines = ["Job board:"]
    for stage, apps in board.items():
        lines.append(f"  {stage.value} ({len(apps)})")
        lines.extend(f"    {a.company} - {a.title}  #{_short(a.id)}" for a in apps)
    return "\n".join(lines)


def cmd_job(state: AppState, args: list[str]) -> str:
    """
    /job add <company> | <title>
    /job move <id> <stage>
    /job delete <id>
    """
    usage = "Usage: /job add <company> | <title> ; /job move <id> <stage> ; /job delete <id>"
    if not args:
        return usage
    sub = args[0].lower()

    if sub == "add":
        company, sep, title = " ".join(args[1:]).partition("|")
        if not sep:
            return usage
        app_id = state.job_store.add_application(state.user_id, company=company, title=title)
        return f"Added #{_short(app_id)}: {company.strip()} - {title.strip()} ({JobStage.WISHLIST.value})"

    if sub in ("move", "delete") and len(args) >= 2:
        apps = {a.id: a for a in state.job_store.list_applications(state.user_id)}
        app_id = _resolve_id(apps, args[1], "job application")
        if sub == "delete":
            state.job_store.delete_application(state.user_id, app_id)
            return f"Deleted: {apps[app_id].company} - {apps[app_id].title}"
        if len(args) < 3:
            return usage
        stage = JobStage.parse(args[2])
        state.job_store.move_application(state.user_id, app_id, stage)
        return f"Moved {apps[app_id].company} to {stage.value}."

    return usage


# ---- AI ----


def cmd_debrief(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/debrief -> run today's debrief now and send it to the configured channels."""
    if emit:
        emit("[AI] Summarizing your day...")
    result = run_daily_debrief(state, _today())
    if result.skipped or result.summary is None:
        return "No tasks today, nothing to debrief."
    lines = [format_telegram_message(result.summary).rstrip(), "", result.summary.motivational_summary]
    for name, outcome in result.deliveries.items():
        lines.append(f"[{name}] {outcome.message}")
    return "\n".join(lines)


def cmd_plan(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/plan [day] -> AI-optimized schedule (not saved)."""
    day = _parse_day(args[0], _today()) if args else _today()
    if emit:
        emit("[AI] Planning your day...")
    plan = flows.run_flow(state.oracle, flows.DAILY_PLAN, schemas.DailyPlanInput(date=day.isoformat()))
    lines = [f"Plan for {day.isoformat()}:"]
    lines.extend(f"  {item.time}  {item.task}  ({item.motivation})" for item in plan.optimized_schedule)
    return "\n".join(lines)


def cmd_topic(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/topic <days> <topic...> -> schedule interview prep tasks starting today."""
    if len(args) < 2 or not args[0].isdigit() or int(args[0]) < 1:
        return "Usage: /topic <days> <topic>"
    if emit:
        emit("[AI] Building your prep schedule...")
    ids = flows.schedule_interview_topic(state, " ".join(args[1:]), int(args[0]), _today())
    return f"Scheduled {len(ids)} interview prep task(s)."


def _read_text(raw: str) -> str:
    path = Path(raw).expanduser()
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise ValueError(f"Cannot read {path}: {e.strerror or e}") from None


def cmd_prep(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/prep <resume file> <job description file> -> interview plan for the job, saved to /plans."""
    if len(args) != 2:
        return "Usage: /prep <resume file> <job description file>"
    if emit:
        emit("[AI] Reading the job and preparing questions...")
    details, plan = flows.prepare_interview(state.oracle, _read_text(args[0]), _read_text(args[1]))
    plan_id = career_services.save_prepared_plan(state, details, plan)
    lines = [
        f"{details.role} @ {details.company}",
        f"Stack: {', '.join(details.tech_stack) or '-'}",
        f"Topic: {plan.topic} ({plan.difficulty})",
    ]
    lines.extend(f"  {i}. {q}" for i, q in enumerate(plan.questions, start=1))
    lines.append(f"Saved as plan #{_short(plan_id)}. Track mock interviews with /plans done {_short(plan_id)}.")
    return "\n".join(lines)


def cmd_tailor(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/tailor <resume file> <job description file>"""
    if len(args) != 2:
        return "Usage: /tailor <resume file> <job description file>"
    if emit:
        emit("[AI] Tailoring your resume...")
    data = schemas.ResumeJobInput(resume=_read_text(args[0]), job_description=_read_text(args[1]))
    result = flows.run_flow(state.oracle, flows.TAILOR_RESUME, data)
    return (
        f"Fit score: {result.fit_score:g}%\n"
        f"  Skills: {result.breakdown.skills_match}\n"
        f"  Experience: {result.breakdown.experience_match}\n"
        f"  Education: {result.breakdown.education_match}\n"
        f"Missing skills: {', '.join(result.missing_skills) or '-'}\n\n"
        f"{result.tailored_resume}"
    )


def cmd_salary(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/salary <role> | <years> | <location> | <skill, skill, ...>"""
    parts = [p.strip() for p in " ".join(args).split("|")]
    if len(parts) < 3:
        return "Usage: /salary <role> | <years> | <location> | <skills, comma separated>"
    try:
        years = float(parts[1])
    except ValueError:
        return "Years of experience must be a number."
    skills = [s.strip() for s in parts[3].split(",") if s.strip()] if len(parts) > 3 else []
    data = schemas.SalaryEstimateInput(job_role=parts[0], years_of_experience=years, location=parts[2], skills=skills)
    if emit:
        emit("[AI] Estimating...")
    result = flows.run_flow(state.oracle, flows.SALARY_ESTIMATE, data)
    return f"{result.salary_range}\n{result.commentary}"


# ---- career ----


def _split_pipes(args: list[str]) -> list[str]:
    return [p.strip() for p in " ".join(args).split("|")]


def cmd_learn(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /learn                               -> your lesson chats, most recent first
    /learn <topic> | <message> [| style] -> continue the chat on a topic
    """
    if not args:
        sessions = state.lesson_store.list_sessions(state.user_id)
        if not sessions:
            return "No lessons yet. Start one with /learn <topic> | <question>."
        lines = ["Your lessons:"]
        lines.extend(f"  {s.topic}: {s.snippet}" for s in sessions)
        return "\n".join(lines)

    parts = _split_pipes(args)
    if len(parts) < 2 or not parts[0] or not parts[1]:
        return "Usage: /learn <topic> | <message> [| answer style]"
    if emit:
        emit("[AI] Thinking...")
    intent = parts[2] if len(parts) > 2 else None
    return career_services.continue_lesson(state, parts[0], parts[1], intent)


def cmd_market(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /market <role> | <company> | <location> -> market intelligence (saved)
    /market history                         -> previous searches
    """
    if args and args[0].lower() == "history":
        searches = state.market_store.list_searches(state.user_id)
        if not searches:
            return "No market searches yet."
        lines = ["Market searches (newest first):"]
        for s in searches:
            when = datetime.fromtimestamp(s.created_at).date().isoformat()
            lines.append(f"  {when} {s.job_role} @ {s.company_name}, {s.location}  #{_short(s.id)}")
        return "\n".join(lines)

    parts = _split_pipes(args)
    if len(parts) != 3 or not all(parts):
        return "Usage: /market <role> | <company> | <location> ; /market history"
    if emit:
        emit("[AI] Researching the market...")
    search = career_services.research_market(state, parts[0], parts[1], parts[2])
    intel = search.intel

    lines = [f"{search.job_role} @ {search.company_name} ({search.location})"]
    if search.salary is not None:
        lines.append(f"Salary: {search.salary.salary_range}")
    lines.append("Growth path:")
    lines.extend(f"  {step.role}: {step.salary_range}" for step in intel.growth_path)
    lines.append(f"Skills in demand: {', '.join(intel.skills_in_demand) or '-'}")
    lines.append(f"Top companies hiring: {', '.join(intel.top_companies_hiring) or '-'}")
    lines.append(f"Locations: {intel.location_comparison.commentary}")
    lines.append(f"Average tenure: {intel.alumni_insights.avg_tenure}")
    lines.append(
        f"Interviews: {intel.interview_prep.difficulty_rating}"
        f" ({', '.join(intel.interview_prep.common_question_categories) or '-'})"
    )
    lines.append(f"Best time to apply: {intel.application_strategy.best_time_to_apply}")
    lines.extend(f"  {r.method}: {r.probability}" for r in intel.application_strategy.success_rates)
    return "\n".join(lines)


def cmd_company(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/company <name> -> culture, interview process, pros and cons."""
    if not args:
        return "Usage: /company <name>"
    if emit:
        emit("[AI] Looking into the company...")
    name = " ".join(args)
    result = flows.run_flow(state.oracle, flows.COMPANY_INSIGHTS, schemas.CompanyInsightsInput(company_name=name))
    lines = [name, f"Culture: {result.culture}", f"Interview process: {result.interview_process}"]
    lines.extend(f"  + {p}" for p in result.pros)
    lines.extend(f"  - {c}" for c in result.cons)
    return "\n".join(lines)


def cmd_plans(state: AppState, args: list[str]) -> str:
    """
    /plans             -> saved interview plans
    /plans done <id>   -> count one finished mock interview
    /plans delete <id>
    """
    plans = {p.id: p for p in state.plan_store.list_plans(state.user_id)}
    if not args:
        if not plans:
            return "No interview plans yet. Create one with /prep."
        lines = ["Interview plans:"]
        for p in plans.values():
            where = f" for {p.role} @ {p.company}" if p.company else ""
            lines.append(
                f"  {p.topic}{where} ({p.difficulty}, {p.number_of_questions} questions, "
                f"{p.duration_minutes} min) {p.completed_interviews}/{p.total_interviews} done  #{_short(p.id)}"
            )
        return "\n".join(lines)

    sub = args[0].lower()
    if sub not in ("done", "delete") or len(args) < 2:
        return "Usage: /plans ; /plans done <id> ; /plans delete <id>"
    plan_id = _resolve_id(plans, args[1], "interview plan")
    if sub == "delete":
        state.plan_store.delete_plan(state.user_id, plan_id)
        return f"Deleted plan: {plans[plan_id].topic}"
    plan = career_services.record_mock_interview(state, plan_id)
    if plan.is_finished:
        return f"{plan.topic}: all {plan.total_interviews} mock interviews done."
    return f"{plan.topic}: {plan.completed_interviews}/{plan.total_interviews} mock interviews done."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show current settings (user/view/AI/debrief).")
registry.register("view", cmd_view, help_text="Switch view mode: /view list | /view grid.")
registry.register("today", cmd_today, help_text="Tasks for a day: /today [YYYY-MM-DD|tomorrow|yesterday].")
registry.register("add", cmd_add, help_text="Add a task: /add <day> <HH:MM> <title>.")
registry.register("done", cmd_done, help_text="Mark a task completed: /done <id>.")
registry.register("undo", cmd_undo, help_text="Mark a task not completed: /undo <id>.")
registry.register("delete", cmd_delete, help_text="Delete a task: /delete <id>.", aliases=["rm"])
registry.register("describe", cmd_describe, help_text="AI one-line description for a task: /describe <id>.")
registry.register("missed", cmd_missed, help_text="List missed tasks that still need rescheduling.")
registry.register(
    "reschedule", cmd_reschedule, help_text="Move a task: /reschedule <id> today|tomorrow <reason>."
)
registry.register("history", cmd_history, help_text="Missed & rescheduled tasks from the last 7 days.")
registry.register("ledger", cmd_ledger, help_text="Focus ledger: /ledger [day|week|month].")
registry.register("wallet", cmd_wallet, help_text="Show your Focus Coin balance.", aliases=["balance"])
registry.register("rewards", cmd_rewards, help_text="Reward catalog, or /rewards mine.")
registry.register("redeem", cmd_redeem, help_text="Buy a reward: /redeem <number>.")
registry.register("claim", cmd_claim, help_text="Claim a redeemed reward: /claim <id>.")
registry.register("jobs", cmd_jobs, help_text="Show the job application board.")
registry.register("job", cmd_job, help_text="Manage applications: /job add | move | delete.")
registry.register("debrief", cmd_debrief, help_text="Run and send today's debrief now.")
registry.register("plan", cmd_plan, help_text="AI-optimized schedule for a day: /plan [day].")
registry.register("topic", cmd_topic, help_text="Schedule interview prep: /topic <days> <topic>.")
registry.register("prep", cmd_prep, help_text="Interview plan: /prep <resume file> <job file>.")
registry.register("tailor", cmd_tailor, help_text="Tailor a resume: /tailor <resume file> <job file>.")
registry.register("salary", cmd_salary, help_text="Salary estimate: /salary <role> | <years> | <location> | <skills>.")
registry.register(
    "learn", cmd_learn, help_text="Lesson chat: /learn <topic> | <message> [| style], or /learn to list."
)
registry.register(
    "market", cmd_market, help_text="Market intelligence: /market <role> | <company> | <location>, or /market history."
)
registry.register("company", cmd_company, help_text="Company insights: /company <name>.")
registry.register(
    "plans", cmd_plans, help_text="Saved interview plans: /plans, /plans done <id>, /plans delete <id>."
)
