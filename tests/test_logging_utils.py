from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

from combat_logger import logging_utils


def test_resolve_logs_dir_prefers_env_override(monkeypatch, tmp_path):
    monkeypatch.setenv(logging_utils.LOG_DIR_ENV_VAR, str(tmp_path / "custom"))
    target = logging_utils.resolve_logs_dir()
    assert target == tmp_path / "custom" / "CombatLogger"
    assert target.is_dir()


def test_resolve_logs_dir_uses_xdg_state(monkeypatch, tmp_path):
    monkeypatch.delenv(logging_utils.LOG_DIR_ENV_VAR, raising=False)
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state"))
    target = logging_utils.resolve_logs_dir("Overlay")
    assert target == tmp_path / "state" / "logs" / "Overlay"


def test_plugin_log_respects_retention_and_level(tmp_path):
    handler = logging_utils.open_plugin_log(3, logging.DEBUG, log_dir=tmp_path / "logs")
    try:
        assert isinstance(handler, RotatingFileHandler)
        assert handler.backupCount == 2
        assert handler.maxBytes == logging_utils.LOG_MAX_BYTES
        assert handler.level == logging.DEBUG
        assert handler.baseFilename == str(tmp_path / "logs" / logging_utils.LOG_FILENAME)
    finally:
        handler.close()


def test_plugin_log_without_history_and_default_dir(monkeypatch, tmp_path):
    monkeypatch.setenv(logging_utils.LOG_DIR_ENV_VAR, str(tmp_path))
    handler = logging_utils.open_plugin_log(0, logging.INFO)
    try:
        assert handler.backupCount == 0
        assert (tmp_path / "CombatLogger" / logging_utils.LOG_FILENAME).exists()
    finally:
        handler.close()
