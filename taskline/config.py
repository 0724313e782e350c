from __future__ import annotations

import os
from pathlib import Path

ENV_VAR = "TASKLINE_FILE"


LOG_LEVEL_ENV_VAR = "TASKLINE_LOG_LEVEL"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def default_store_path() -> Path:
    """
    The task list file, one task per line. TASKLINE_FILE wins, then the
    per-user ~/.taskline/tasks.txt. The CLI --file option overrides both.
    The file itself is created on the first save, not here.
    """
    env = os.getenv(ENV_VAR)
    if env:
        return Path(env).expanduser().resolve()

    return (Path.home() / ".taskline" / "tasks.txt").resolve()


def default_log_level() -> str:
    """TASKLINE_LOG_LEVEL (e.g. DEBUG); WARNING when unset or not a level name."""
    level = os.getenv(LOG_LEVEL_ENV_VAR, "WARNING").strip().upper()
    return level if level in LOG_LEVELS else "WARNING"
