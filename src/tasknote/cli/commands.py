# src/tasknote/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.state import AppState
from ..tasks.task_codec import parse_int, parse_tags
from ..tasks.task_models import Task
from ..tasks.task_store import TaskStoreError
from .tokenizer import QUOTE, tokenize

CommandHandler = Callable[[AppState, list[str], str], str]

logger = logging.getLogger(__name__)

PRIORITY_FLAG = "--priority"
TAGS_FLAG = "--tags"
_VALUE_FLAGS = (PRIORITY_FLAG, TAGS_FLAG)


class CommandRegistry:
    """Command-word registry used by the console loop (add, list, done, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, tuple[str, str]] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        usage: str | None = None,
    ) -> None:
        key = name.lower()
        self._handlers[key] = handler
        self.document(key, usage or key, help_text)

    def document(self, name: str, usage: str, help_text: str) -> None:
        """Add a help entry for a command handled outside the registry (exit/quit)."""
        self._help[name.lower()] = (usage, help_text)

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle one raw input line like 'add "Buy milk" --priority 2'.
        Returns the reply text, or None for a blank line.
        """
        tokens = tokenize(line)
        if not tokens:
            return None

        name = tokens[0].lower()
        args = tokens[1:]

        handler = self._handlers.get(name)
        if not handler:
            logger.debug("Unknown command %r", name)
            return "Unknown command. Type 'help' for available commands."

        return handler(state, args, line)

    def build_help(self) -> str:
        width = max((len(usage) for usage, _ in self._help.values()), default=0)
        lines = ["Commands:"]
        for usage, help_text in self._help.values():
            lines.append(f"  {usage.ljust(width)}  {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- argument helpers ----


def _is_flag(token: str, flag: str) -> bool:
    return token.lower() == flag


def quoted_description(line: str) -> str | None:
    """
    Text between the first two double quotes of the raw line, or None.

    This looks at the raw text, not at tokens: flags written inside the quotes
    still count as flags (see scan_flags).
    """
    first = line.find(QUOTE)
    if first < 0:
        return None
    second = line.find(QUOTE, first + 1)
    if second < 0:
        return None
    return line[first + 1 : second]


def strip_flags(args: list[str]) -> list[str]:
    """Drop '--priority <v>' / '--tags <v>' pairs; a trailing bare flag is kept."""
    out: list[str] = []
    i = 0
    while i < len(args):
        token = args[i]
        if any(_is_flag(token, f) for f in _VALUE_FLAGS) and i + 1 < len(args):
            i += 2
            continue
        out.append(token)
        i += 1
    return out


def scan_flags(args: list[str]) -> tuple[int, list[str]]:
    """
    Collect priority and tags from flag pairs.

    Unparseable priorities are ignored (the previous value, 0 by default, stays).
    Repeated --tags accumulate.
    """
    priority = 0
    tags: list[str] = []
    for i, token in enumerate(args[:-1]):
        value = args[i + 1]
        if _is_flag(token, PRIORITY_FLAG):
            parsed, ok = parse_int(value)
            if ok:
                priority = parsed
            else:
                logger.debug("Ignoring non-numeric priority %r", value)
        elif _is_flag(token, TAGS_FLAG):
            tags.extend(parse_tags(value))
    return priority, tags


def _resolve_index(state: AppState, args: list[str], command: str) -> tuple[int, str | None]:
    """Validate '<command> <index>'. Returns (index, None) or (0, error message)."""
    if not args:
        return 0, f"Usage: {command} <index>"
    index, ok = parse_int(args[0])
    if not ok:
        return 0, "Invalid index."
    if not state.task_store.is_valid_index(index):
        return 0, "Index out of range."
    return index, None


def _format_task(position: int, task: Task) -> str:
    status = "[x]" if task.done else "[ ]"
    pr = f" (P:{task.priority})" if task.priority != 0 else ""
    tg = f" Tags:{','.join(task.tags)}" if task.tags else ""
    return f"{position}. {status} {task.description}{pr} - {task.created_display}{tg}"


# ---- command handlers ----


def cmd_add(state: AppState, args: list[str], line: str) -> str:
    """
    add "Buy milk" --priority 2 --tags home,errand
    add Buy milk --priority 1
    """
    description = quoted_description(line)
    if description is None:
        description = " ".join(strip_flags(args))

    priority, tags = scan_flags(args)
    task = Task(description=description, priority=priority, tags=tags)

    lines: list[str] = []
    try:
        state.task_store.append(task)
    except TaskStoreError as e:
        lines.append(str(e))
    lines.append(f"Added: {description}")
    return "\n".join(lines)


def cmd_list(state: AppState, args: list[str], line: str) -> str:
    store = state.task_store
    if len(store) == 0:
        return "(no tasks)"
    return "\n".join(_format_task(i, t) for i, t in enumerate(store, start=1))


def cmd_done(state: AppState, args: list[str], line: str) -> str:
    index, error = _resolve_index(state, args, "done")
    if error:
        return error

    task = state.task_store.get(index)
    lines: list[str] = []
    try:
        changed = state.task_store.mark_done(index)
    except TaskStoreError as e:
        lines.append(str(e))
        changed = True

    if not changed:
        return f"Task is already marked as done: {task.description}"
    lines.append(f"Marked done: {task.description}")
    return "\n".join(lines)


def cmd_delete(state: AppState, args: list[str], line: str) -> str:
    index, error = _resolve_index(state, args, "delete")
    if error:
        return error

    task = state.task_store.get(index)
    lines: list[str] = []
    try:
        state.task_store.remove_at(index)
    except TaskStoreError as e:
        lines.append(str(e))
    lines.append(f"Deleted: {task.description}")
    return "\n".join(lines)


def cmd_help(state: AppState, args: list[str], line: str) -> str:
    return registry.build_help()


registry.register(
    "add",
    cmd_add,
    help_text="Add a task",
    usage='add "Buy milk" [--priority N] [--tags tag1,tag2]',
)
registry.register("list", cmd_list, help_text="List tasks")
registry.register("done", cmd_done, help_text="Mark task #index as done", usage="done <index>")
registry.register("delete", cmd_delete, help_text="Delete task #index", usage="delete <index>")
registry.register("help", cmd_help, help_text="Show this help")
registry.document("exit", "exit | quit", "Save and exit")
