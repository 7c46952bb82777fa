# src/task_tracker/cli/console.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..core.state import AppState
from .commands import ConsoleSession
from .commands import registry as command_registry

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def run_console_loop(
    state: AppState,
    *,
    read_line: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> None:
    """
    Interactive REPL over the slash commands.

    Every command runs under state.lock. Plain text (no leading "/") is not a
    command and only gets a hint back.
    """
    logger.info("Console started.")
    app_name = str(getattr(state.settings, "app_name", "task-tracker"))
    session = ConsoleSession()

    def emit(text: str) -> None:
        write(f"[{_ts_local()}] {text}")

    emit(f"[{app_name}] Use /help for commands. Use /exit to quit.")

    while True:
        try:
            line = read_line(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            write("")
            break

        if not line:
            continue

        if line.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            with state.lock:
                reply = command_registry.handle(state, line, session=session)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is None:
            reply = "Not a command. Use /help to list available commands."
        emit(reply)

    logger.info("Console finished.")
