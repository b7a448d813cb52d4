# src/switchbuddy/tracker/debrief_scheduler.py

from __future__ import annotations

"""
Debrief scheduler.

A small polling loop that runs the daily debrief once per local day, at or
after the configured time. The last run date is kept in a JSON state file so a
restart on the same evening does not send a second debrief.
"""

import asyncio
import contextlib
import json
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime, time
from pathlib import Path
from typing import Any

from ..core.state import AppState
from .debrief import run_daily_debrief

logger = logging.getLogger(__name__)


def load_run_state(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        logger.warning("Unreadable debrief state file %s; starting fresh", path)
        return {}
    return data if isinstance(data, dict) else {}


def save_run_state(path: Path, state: dict[str, Any]) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(state, indent=2), encoding="utf-8")
    except OSError:
        logger.exception("Failed to save debrief state to %s", path)


def is_debrief_due(now: datetime, run_at: time, last_run: date | None) -> bool:
    return now.time() >= run_at and last_run != now.date()


def _last_run(state_path: Path) -> date | None:
    raw = load_run_state(state_path).get("last_run_date")
    if not raw:
        return None
    try:
        return date.fromisoformat(str(raw))
    except ValueError:
        return None


def debrief_tick(state: AppState, now: datetime, *, run_at: time, state_path: Path) -> bool:
    """
    One scheduler step. Returns True when a debrief was attempted.

    The day is marked as done even when the attempt failed, so a broken
    channel or AI outage does not turn into a retry every minute.
    """
    if not is_debrief_due(now, run_at, _last_run(state_path)):
        return False

    today = now.date()
    try:
        run_daily_debrief(state, today)
    except Exception:
        logger.exception("Daily debrief failed for %s", today)

    save_run_state(state_path, {"last_run_date": today.isoformat()})
    return True


async def run_debrief_scheduler(
        state: AppState,
        *,
        hour: int = 21,
        minute: int = 0,
        interval_seconds: float = 60.0,
        state_path: Path | str = ".local/switchbuddy/debrief_state.json",
        clock: Callable[[], datetime] = datetime.now,
) -> None:
    """
    Simple polling scheduler.

    Every interval_seconds: read the clock, and if the debrief time has passed
    and today has not been handled yet, run the debrief in a worker thread.

    To stop the scheduler, cancel the coroutine/task.
    """
    sleep_s = max(0.01, float(interval_seconds))
    run_at = time(hour=hour, minute=minute)
    path = Path(state_path)

    logger.info("Debrief scheduler started (at %s, every %.1fs)", run_at.strftime("%H:%M"), sleep_s)
    while True:
        await asyncio.to_thread(debrief_tick, state, clock(), run_at=run_at, state_path=path)
        await asyncio.sleep(sleep_s)


@dataclass
class DebriefBackgroundRunner:
    thread: threading.Thread
    loop: asyncio.AbstractEventLoop
    stop_event: asyncio.Event

    def stop(self) -> None:
        try:
            self.loop.call_soon_threadsafe(self.stop_event.set)
        except RuntimeError:
            logger.debug("Failed to signal debrief scheduler stop.", exc_info=True)

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout=timeout)


async def _run_until_stopped(state: AppState, stop_event: asyncio.Event) -> None:
    settings = state.settings
    task = asyncio.create_task(
        run_debrief_scheduler(
            state,
            hour=int(getattr(settings, "debrief_hour", 21)),
            minute=int(getattr(settings, "debrief_minute", 0)),
            interval_seconds=float(getattr(settings, "debrief_interval_seconds", 60.0)),
            state_path=getattr(settings, "debrief_state_path", ".local/switchbuddy/debrief_state.json"),
        )
    )
    try:
        await stop_event.wait()
    finally:
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.info("Debrief scheduler stopped.")


def start_debrief_in_background(state: AppState) -> DebriefBackgroundRunner | None:
    """
    Start the debrief scheduler in a background thread with its own event loop,
    so the blocking console REPL can run in the main thread.
    """
    if not getattr(state.settings, "debrief_enabled", False):
        logger.info("Debrief scheduler disabled, not starting.")
        return None

    ready = threading.Event()
    holder: dict[str, object] = {}

    def runner() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        stop_event = asyncio.Event()

        holder["loop"] = loop
        holder["stop_event"] = stop_event
        ready.set()

        try:
            loop.run_until_complete(_run_until_stopped(state, stop_event))
        finally:
            loop.close()

    t = threading.Thread(target=runner, name="debrief-scheduler", daemon=True)
    t.start()

    ready.wait(timeout=5.0)
    loop = holder.get("loop")
    stop_event = holder.get("stop_event")

    if not isinstance(loop, asyncio.AbstractEventLoop) or not isinstance(stop_event, asyncio.Event):
        logger.error("Debrief thread did not initialize properly.")
        return None

    logger.info("Debrief background thread started.")
    return DebriefBackgroundRunner(thread=t, loop=loop, stop_event=stop_event)
