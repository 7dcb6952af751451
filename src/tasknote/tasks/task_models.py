# src/tasknote/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

DISPLAY_FORMAT = "%Y-%m-%d %H:%M:%S"


def utc_now_iso() -> str:
    """Current instant as an ISO-8601 UTC string with a 'Z' suffix."""
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


def format_created(created_at: str) -> str:
    """
    Render a stored creation instant in local time, second precision.
    Unparseable or unrepresentable values are returned verbatim.
    Naive and date-only stamps are read as local time.
    """
    try:
        return datetime.fromisoformat(created_at).astimezone().strftime(DISPLAY_FORMAT)
    except (ValueError, OverflowError):
        return created_at


@dataclass(slots=True)
class Task:
    """
    A single to-do item.

    Notes:
    - created_at is kept as the stored string and never rewritten.
    - priority is a display hint only; it never reorders the list.
    """

    description: str = ""
    done: bool = False
    created_at: str = field(default_factory=utc_now_iso)
    priority: int = 0
    tags: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.description is None:
            self.description = ""

    @property
    def created_display(self) -> str:
        return format_created(self.created_at)
