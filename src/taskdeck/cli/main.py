# src/taskdeck/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds the TaskStore, then runs the console REPL.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_store
from ..config import get_settings
from ..connectors.console_connector import ConsoleNotifier, run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    file_level = getattr(logging, level_name, logging.INFO)
    log_file = setup_logging(log_dir=settings.data_dir, file_level=file_level)

    logger.info("Starting %s (log file %s)...", settings.app_name, log_file)

    store = create_store(settings=settings, sink=ConsoleNotifier())

    try:
        if settings.console_enabled:
            run_console_loop(store, app_name=settings.app_name)
        else:
            logger.info("Console disabled; processed repeating tasks and exiting.")
    finally:
        logger.info("Bye.")


if __name__ == "__main__":
    main()
