# src/tasknote/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from .task_codec import decode_task, encode_task
from .task_models import Task

logger = logging.getLogger(__name__)


class TaskStoreError(Exception):
    """Storage I/O failure. str(err) is a one-line message suitable for the user."""


class TaskStore:
    """
    Flat-file task store.

    The whole list lives in memory; the file is read in full by load() and
    rewritten in full by save(). Every mutation saves immediately.

    Indexes are 1-based positions in the current list.

    Single-process only: nothing guards against another writer.
    """

    def __init__(self, path: str | Path = "tasks.txt") -> None:
        self._path = Path(path)
        self._tasks: list[Task] = []

    @property
    def path(self) -> Path:
        return self._path

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    # ---- persistence ----

    def load(self) -> None:
        """
        Replace the in-memory list with the file contents.
        Missing file -> empty list. On failure the current list is kept.
        """
        try:
            # newline="" keeps stray CRs inside records; only LF separates lines.
            with open(self._path, encoding="utf-8", newline="") as fh:
                raw = fh.read()
        except FileNotFoundError:
            self._tasks = []
            logger.debug("No task file at %s, starting empty.", self._path)
            return
        except (OSError, UnicodeDecodeError) as e:
            logger.info("Failed to read task file %s", self._path, exc_info=True)
            raise TaskStoreError(f"Failed to load tasks: {e}") from e

        lines = raw.split("\n")
        # CRs are stripped only from files written with CRLF endings throughout.
        crlf = any(lines[:-1]) and all(line.endswith("\r") for line in lines[:-1] if line)

        loaded: list[Task] = []
        for line in lines:
            if crlf:
                line = line.removesuffix("\r")
            if not line.strip():
                continue
            loaded.append(decode_task(line))

        self._tasks = loaded
        logger.info("Loaded %d tasks from %s", len(loaded), self._path)

    def save(self) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._path, "w", encoding="utf-8", newline="") as fh:
                for task in self._tasks:
                    fh.write(encode_task(task))
                    fh.write("\n")
        except OSError as e:
            logger.info("Failed to write task file %s", self._path, exc_info=True)
            raise TaskStoreError(f"Failed to save tasks: {e}") from e
        logger.debug("Saved %d tasks to %s", len(self._tasks), self._path)

    # ---- queries ----

    def is_valid_index(self, index: int) -> bool:
        return 1 <= index <= len(self._tasks)

    def get(self, index: int) -> Task:
        self._check_index(index)
        return self._tasks[index - 1]

    # ---- mutations (each one saves) ----

    def append(self, task: Task) -> None:
        self._tasks.append(task)
        logger.debug("Task added position=%d priority=%d", len(self._tasks), task.priority)
        self.save()

    def mark_done(self, index: int) -> bool:
        """Mark the task done. Returns False (and writes nothing) if it already was."""
        self._check_index(index)
        task = self._tasks[index - 1]
        if task.done:
            return False
        task.done = True
        logger.debug("Task marked done position=%d", index)
        self.save()
        return True

    def remove_at(self, index: int) -> Task:
        """Remove and return the task; later positions shift down by one."""
        self._check_index(index)
        task = self._tasks.pop(index - 1)
        logger.debug("Task removed position=%d remaining=%d", index, len(self._tasks))
        self.save()
        return task

    def _check_index(self, index: int) -> None:
        if not self.is_valid_index(index):
            raise IndexError(f"task index {index} out of range 1..{len(self._tasks)}")
