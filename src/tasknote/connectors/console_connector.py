# src/tasknote/connectors/console_connector.py

from __future__ import annotations

import logging

from ..cli.bootstrap import save_tasks
from ..cli.commands import CommandRegistry
from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)

BANNER = "Simple To-Do App (type 'help' for commands)"
PROMPT = "> "
EXIT_COMMANDS = ("exit", "quit")


def run_console_loop(state: AppState, registry: CommandRegistry | None = None) -> None:
    """
    Read commands from stdin until exit/quit or end of input.
    The task file is flushed once more before returning.
    """
    registry = registry or command_registry
    logger.info("Console loop started (tasks=%d).", len(state.task_store))
    print(BANNER)

    while True:
        try:
            user_input = input(PROMPT).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in EXIT_COMMANDS:
            logger.info("Console exit command received.")
            msg = save_tasks(state)
            if msg:
                print(msg)
            print("Goodbye!")
            return

        try:
            reply = registry.handle(state, user_input)
        except Exception as e:
            logger.exception("Command handler crashed.")
            reply = f"Error: {e}"

        if reply is not None:
            print(reply)

    msg = save_tasks(state)
    if msg:
        print(msg)
    logger.info("Console loop finished.")
