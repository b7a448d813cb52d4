# tests/test_logging_setup.py

from __future__ import annotations

import logging
from collections.abc import Iterator
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from switchbuddy import logging_setup
from switchbuddy.logging_setup import ConsoleLevelFilter, console_threshold, setup_logging


@pytest.fixture()
def clean_root() -> Iterator[logging.Logger]:
    root = logging.getLogger()
    level = root.level
    before = list(root.handlers)
    yield root
    for h in list(root.handlers):
        if h not in before:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
    logging.captureWarnings(False)


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("switchbuddy.cli.commands", logging.DEBUG),
        ("switchbuddy.tracker.debrief", logging.DEBUG),
        ("switchbuddy.tracker.debrief_scheduler", logging.WARNING),
        ("switchbuddy.career.lesson_store", logging.WARNING),
        ("switchbuddyish", logging.ERROR),
        ("httpx", logging.ERROR),
        ("py.warnings", logging.ERROR),
    ],
)
def test_console_threshold_uses_longest_prefix(name: str, expected: int) -> None:
    assert console_threshold(name) == expected


def test_console_filter_hides_scheduler_info_but_not_its_warnings() -> None:
    f = ConsoleLevelFilter()
    assert f.filter(_record("switchbuddy.cli.commands", logging.INFO))
    assert not f.filter(_record("switchbuddy.tracker.debrief_scheduler", logging.INFO))
    assert f.filter(_record("switchbuddy.tracker.debrief_scheduler", logging.WARNING))
    assert not f.filter(_record("urllib3.connectionpool", logging.WARNING))


def test_setup_writes_a_rotating_log_file(tmp_path: Path, clean_root: logging.Logger) -> None:
    log_file = setup_logging(log_dir=tmp_path / "logs")

    assert log_file == tmp_path / "logs" / "switchbuddy.log"
    file_handlers = [h for h in clean_root.handlers if isinstance(h, RotatingFileHandler)]
    assert len(file_handlers) == 1
    assert file_handlers[0].backupCount == logging_setup.LOG_FILE_BACKUPS

    logging.getLogger("switchbuddy.tracker.debrief_scheduler").debug("tick")
    file_handlers[0].flush()
    assert "switchbuddy.tracker.debrief_scheduler: tick" in log_file.read_text(encoding="utf-8")
    assert logging.getLogger("httpx").level == logging.WARNING


def test_setup_twice_replaces_only_its_own_handlers(tmp_path: Path, clean_root: logging.Logger) -> None:
    foreign = logging.NullHandler()
    clean_root.addHandler(foreign)

    setup_logging(log_dir=tmp_path)
    count = len(clean_root.handlers)
    setup_logging(log_dir=tmp_path)

    assert len(clean_root.handlers) == count
    assert foreign in clean_root.handlers
