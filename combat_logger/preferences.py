"""Preferences management for the Combat Logger plugin."""
from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict

PREFERENCES_FILE = "combat_logger_settings.json"
LOG_RETENTION_MIN = 1
LOG_RETENTION_MAX = 20
LOG_RETENTION_DEFAULT = 5


class SecondaryMetric(Enum):
    NONE = "none"
    DPS = "dps"
    TICKS = "ticks"


def _coerce_metric(value: Any) -> SecondaryMetric:
    token = str(value or "").strip().lower()
    for metric in SecondaryMetric:
        if metric.value == token or metric.name.lower() == token:
            return metric
    return SecondaryMetric.DPS


@dataclass
class Preferences:
    """Simple JSON-backed preferences store."""

    plugin_dir: Path
    enable_overlay: bool = True
    show_overlay_avatar: bool = True
    secondary_metric: SecondaryMetric = SecondaryMetric.DPS
    log_to_file: bool = False
    log_retention: int = LOG_RETENTION_DEFAULT

    def __post_init__(self) -> None:
        self.plugin_dir = Path(self.plugin_dir)
        self._path = self.plugin_dir / PREFERENCES_FILE
        self._load()

    # Persistence ---------------------------------------------------------

    def _load(self) -> None:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return
        except (OSError, ValueError):
            # JSONDecodeError and UnicodeDecodeError are both ValueErrors.
            return
        if not isinstance(data, dict):
            return
        self.enable_overlay = bool(data.get("enable_overlay", True))
        self.show_overlay_avatar = bool(data.get("show_overlay_avatar", True))
        self.secondary_metric = _coerce_metric(data.get("secondary_metric"))
        self.log_to_file = bool(data.get("log_to_file", False))
        try:
            retention = int(data.get("log_retention", LOG_RETENTION_DEFAULT))
        except (TypeError, ValueError):
            retention = LOG_RETENTION_DEFAULT
        self.log_retention = max(LOG_RETENTION_MIN, min(retention, LOG_RETENTION_MAX))

    def save(self) -> None:
        payload: Dict[str, Any] = {
            "enable_overlay": bool(self.enable_overlay),
            "show_overlay_avatar": bool(self.show_overlay_avatar),
            "secondary_metric": self.secondary_metric.value,
            "log_to_file": bool(self.log_to_file),
            "log_retention": int(self.log_retention),
        }
        self._path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
