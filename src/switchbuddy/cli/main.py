# src/switchbuddy/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then starts:
- the debrief scheduler in a background thread (optional),
- the console REPL in the main thread (optional).
"""

from __future__ import annotations

import contextlib
import logging
import signal
import threading

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging
from ..tracker.debrief_scheduler import start_debrief_in_background

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_file = setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s... (log file: %s)", settings.app_name, log_file)

    # IMPORTANT: reuse same settings object
    state = create_initial_state(settings=settings)

    debrief_runner = start_debrief_in_background(state)

    # Use an Event so main can wait without a busy while-loop.
    stop_main = threading.Event()

    def _handle_signal(signum, _frame) -> None:
        logger.info("Signal %s received, shutting down...", signum)
        stop_main.set()

    # SIGTERM is not available everywhere.
    with contextlib.suppress(ValueError, AttributeError, OSError):
        signal.signal(signal.SIGINT, _handle_signal)
        signal.signal(signal.SIGTERM, _handle_signal)

    try:
        if settings.console_enabled:
            run_console_loop(state)
            stop_main.set()
        else:
            logger.info("Console disabled. Running the debrief scheduler only. Press Ctrl+C to stop.")
            stop_main.wait()

    finally:
        if debrief_runner is not None:
            debrief_runner.stop()
            debrief_runner.join(timeout=10.0)

        # Stores use short-lived sqlite connections per call; no explicit close required.
        logger.info("Bye.")


if __name__ == "__main__":
    main()
