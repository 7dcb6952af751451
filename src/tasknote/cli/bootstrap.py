# src/tasknote/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- wires the concrete TaskStore into AppState,
- performs the initial load of the task file.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_store import TaskStore, TaskStoreError

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    return AppState(
        settings=settings,
        task_store=TaskStore(settings.tasks_path),
    )


def load_tasks(state: AppState) -> str | None:
    """
    Load the task file into the store.
    Returns a one-line message for the user on failure, None on success.
    The session keeps running either way.
    """
    try:
        state.task_store.load()
    except TaskStoreError as e:
        logger.info("Starting without persisted tasks: %s", e)
        return str(e)
    return None


def save_tasks(state: AppState) -> str | None:
    """Final flush on shutdown. Returns a one-line message on failure."""
    try:
        state.task_store.save()
    except TaskStoreError as e:
        return str(e)
    return None
