# src/tasknote/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    # Settings object (config.Settings or a test stand-in); only read, never mutated.
    settings: object

    task_store: TaskStore
