# src/switchbuddy/logging_setup.py

"""
Logging for the SwitchBuddy console.

Two sinks:
- stderr, trimmed so log lines don't bury the coach's replies,
- a rotating switchbuddy.log in the data dir with everything at DEBUG.

Handlers installed here are tagged, so calling setup_logging() again swaps
them instead of stacking duplicates, and handlers owned by someone else
(pytest's caplog, an embedding app) are left alone.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FILE_NAME = "switchbuddy.log"
LOG_FILE_MAX_BYTES = 1_000_000
LOG_FILE_BACKUPS = 3

# Minimum level shown on the console, by logger-name prefix. Longest prefix wins.
CONSOLE_LEVELS: dict[str, int] = {
    "switchbuddy": logging.DEBUG,
    # the scheduler thread prints between prompts; only problems are worth it
    "switchbuddy.tracker.debrief_scheduler": logging.WARNING,
    "switchbuddy.connectors.debrief_senders": logging.WARNING,
    # store "ready" lines at startup
    "switchbuddy.career": logging.WARNING,
    "switchbuddy.rewards.reward_store": logging.WARNING,
    "switchbuddy.tracker.task_store": logging.WARNING,
    "switchbuddy.jobs.job_store": logging.WARNING,
}
OTHER_LOGGERS_CONSOLE_LEVEL = logging.ERROR

# Per-request chatter from the HTTP stack, dropped before it reaches any handler.
QUIET_LIBRARIES = ("httpx", "httpcore", "openai", "urllib3")

_OWNED = "_switchbuddy_handler"


def console_threshold(logger_name: str) -> int:
    best, level = "", OTHER_LOGGERS_CONSOLE_LEVEL
    for prefix, prefix_level in CONSOLE_LEVELS.items():
        if (logger_name == prefix or logger_name.startswith(prefix + ".")) and len(prefix) > len(best):
            best, level = prefix, prefix_level
    return level


class ConsoleLevelFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= console_threshold(record.name)


def _tag(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _OWNED, True)
    return handler


def setup_logging(
    *,
    log_dir: str | Path = ".local/switchbuddy",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """Install the console and file handlers on the root logger. Returns the log file path."""
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in [h for h in root.handlers if getattr(h, _OWNED, False)]:
        root.removeHandler(h)
        h.close()

    console = _tag(logging.StreamHandler(sys.stderr))
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    console.addFilter(ConsoleLevelFilter())
    root.addHandler(console)

    file_handler = _tag(
        RotatingFileHandler(
            str(log_file), maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS, encoding="utf-8"
        )
    )
    file_handler.setLevel(file_level)
    file_handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s.%(msecs)03d %(levelname)s [%(threadName)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(file_handler)

    for name in QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.captureWarnings(True)
    return log_file
