# src/taskdeck/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.events import DomainEvent, EventKind
from ..tasks.store import TaskStore

logger = logging.getLogger(__name__)

_KIND_PREFIX = {
    EventKind.SUCCESS: "[ok]",
    EventKind.INFO: "[i]",
    EventKind.WARNING: "[!]",
    EventKind.ERROR: "[error]",
}


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%H:%M:%S")


def format_event(event: DomainEvent) -> str:
    prefix = _KIND_PREFIX.get(event.kind, "[i]")
    if event.description:
        return f"{prefix} {event.title}: {event.description}"
    return f"{prefix} {event.title}"


class ConsoleNotifier:
    """EventSink that prints notifications as they arrive."""

    def notify(self, event: DomainEvent) -> None:
        print(f"[{_ts_local()}] {format_event(event)}", flush=True)


def run_console_loop(store: TaskStore, *, app_name: str = "taskdeck") -> None:
    logger.info("Console connector started.")
    print(f"[{_ts_local()}] [{app_name}] Use /help for commands, /tasks to list, /exit to quit.\n")

    while True:
        try:
            user_input = input(f"{app_name}> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        # Bare text is shorthand for /add.
        line = user_input if user_input.startswith("/") else f"/add {user_input}"

        try:
            reply = command_registry.handle(store, line)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply:
            print(reply)

    logger.info("Console connector finished.")
