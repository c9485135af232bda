from __future__ import annotations

import logging
import os
import tempfile
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOG_DIR_ENV_VAR = "COMBAT_LOGGER_LOG_DIR"
LOG_FILENAME = "combat_logger.log"
LOG_MAX_BYTES = 512 * 1024
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def resolve_logs_dir(log_dir_name: str = "CombatLogger") -> Path:
    """
    Resolve the directory to store plugin logs.

    Strategy:
    - Use COMBAT_LOGGER_LOG_DIR if set.
    - Fall back to XDG state/cache locations, then `cwd/logs/<log_dir_name>`.
    - Final fallback: tempdir/<log_dir_name>.
    """
    candidates = []

    env_override = os.environ.get(LOG_DIR_ENV_VAR)
    if env_override:
        candidates.append(Path(env_override).expanduser())

    state_home = Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state"))
    cache_home = Path(os.environ.get("XDG_CACHE_HOME", Path.home() / ".cache"))
    candidates.append(state_home / "logs")
    candidates.append(cache_home / "logs")
    candidates.append(Path.cwd() / "logs")

    for base in candidates:
        try:
            target = base / log_dir_name
            target.mkdir(parents=True, exist_ok=True)
            return target
        except OSError:
            continue

    temp_fallback = Path(tempfile.gettempdir()) / log_dir_name
    temp_fallback.mkdir(parents=True, exist_ok=True)
    return temp_fallback


def open_plugin_log(
    retention: int,
    level: int,
    *,
    log_dir: Optional[Path] = None,
) -> RotatingFileHandler:
    """Open the plugin's rotating log file.

    ``retention`` counts the live file plus its backups, so one means no
    rotation history is kept.
    """
    target = log_dir if log_dir is not None else resolve_logs_dir()
    target.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        target / LOG_FILENAME,
        maxBytes=LOG_MAX_BYTES,
        backupCount=max(1, int(retention)) - 1,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.setLevel(level)
    return handler
