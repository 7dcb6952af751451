# src/tasknote/tasks/task_codec.py

"""
Line codec for the task file.

One task per line, five TAB-separated fields:

    done<TAB>created_at<TAB>priority<TAB>tag1,tag2<TAB>description

The description escapes TAB as '\\t' and LF as '\\n' so each record stays on a
single line. A description that already contains those two-character sequences
is not distinguishable from an escaped one after decoding.

CR is not escaped. The store drops line-final CRs only when every record in the
file ends with one (a CRLF file), so a file whose only description ends in CR
loses that CR on reload.
"""

from __future__ import annotations

import re

from .task_models import Task, utc_now_iso

FIELD_SEP = "\t"
TAG_SEP = ","
FIELD_COUNT = 5

_INT_RE = re.compile(r"[+-]?[0-9]+")


def parse_int(text: str | None) -> tuple[int, bool]:
    """Parse a signed decimal integer. Returns (value, ok); (0, False) on failure."""
    if text is None or not _INT_RE.fullmatch(text):
        return 0, False
    return int(text), True


def parse_tags(text: str | None) -> list[str]:
    """Split a comma-separated tag list, trimming entries and dropping empty ones."""
    if not text:
        return []
    return [t.strip() for t in text.split(TAG_SEP) if t.strip()]


def escape_description(text: str) -> str:
    return text.replace("\t", "\\t").replace("\n", "\\n")


def unescape_description(text: str) -> str:
    return text.replace("\\n", "\n").replace("\\t", "\t")


def encode_task(task: Task) -> str:
    return FIELD_SEP.join(
        (
            "1" if task.done else "0",
            task.created_at,
            str(task.priority),
            TAG_SEP.join(task.tags),
            escape_description(task.description),
        )
    )


def decode_task(line: str, *, now: str | None = None) -> Task:
    """
    Decode one stored line. Never raises.

    Lines with fewer than five fields are kept as a bare description (first field)
    with fresh defaults; `now` overrides the creation stamp used for them.
    """
    parts = line.split(FIELD_SEP, FIELD_COUNT - 1)
    if len(parts) < FIELD_COUNT:
        return Task(
            description=parts[0],
            done=False,
            created_at=now or utc_now_iso(),
            priority=0,
            tags=[],
        )

    done_raw, created_at, priority_raw, tags_raw, desc_raw = parts
    priority, _ = parse_int(priority_raw)
    return Task(
        description=unescape_description(desc_raw),
        done=done_raw == "1",
        created_at=created_at,
        priority=priority,
        tags=parse_tags(tags_raw),
    )
