# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TASKNOTE_APP_NAME": "App name used in log lines (default: tasknote).",
    "TASKNOTE_LOG_LEVEL": "Console (stderr) logging level (default: WARNING).",
    "TASKNOTE_LOG_DIR": "If set, also write full DEBUG logs to <dir>/tasknote.log (default: unset).",
    # Storage
    "TASKNOTE_TASKS_PATH": "Task file, relative to the working directory (default: tasks.txt).",
}
