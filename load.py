"""Primary entry point for the Combat Logger overlay plugin."""
from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, Callable, Optional, Tuple

from combat_logger.logging_utils import open_plugin_log
from combat_logger.preferences import Preferences
from combat_logger.services import HostServices
from damage_overlay.damage_overlay import Bounds, DamageOverlay
from damage_overlay.paint_commands import OverlayFrame, QtOverlayPainterAdapter, paint_frame
from damage_overlay.text_layout import TextMeasurer

PLUGIN_NAME = "CombatLogger"
PLUGIN_VERSION = "1.0.0"
LOGGER_NAME = "CombatLogger"
LOG_TAG = "CombatLogger"

HOST_DEFAULT_LOG_LEVEL = logging.INFO

_host_logger: Optional[logging.Logger] = None


def _resolve_host_log_level() -> int:
    candidates: list[int] = []
    if _host_logger is not None:
        candidates.append(_host_logger.getEffectiveLevel())
    candidates.append(logging.getLogger().getEffectiveLevel())
    candidates.append(HOST_DEFAULT_LOG_LEVEL)
    for level in candidates:
        if isinstance(level, int) and level != logging.NOTSET:
            return level
    return HOST_DEFAULT_LOG_LEVEL


def _ensure_plugin_logger_level() -> int:
    level = _resolve_host_log_level()
    logging.getLogger(LOGGER_NAME).setLevel(level)
    return level


class _HostLogHandler(logging.Handler):
    """Logging bridge that forwards plugin records to the host's logger."""

    def emit(self, record: logging.LogRecord) -> None:
        if record.levelno < _resolve_host_log_level():
            return
        message = self.format(record)
        target = _host_logger if _host_logger is not None else logging.getLogger()
        if target.isEnabledFor(record.levelno):
            target.log(record.levelno, message)


def _configure_logger() -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    _ensure_plugin_logger_level()
    if not any(getattr(handler, "_host_handler", False) for handler in logger.handlers):
        handler = _HostLogHandler()
        handler._host_handler = True  # type: ignore[attr-defined]
        formatter = logging.Formatter(f"[%(asctime)s] [{LOG_TAG}] %(message)s", "%H:%M:%S")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.propagate = False
    return logger


LOGGER = _configure_logger()


def _log(message: str) -> None:
    LOGGER.info(message)


def _default_text_measurer() -> TextMeasurer:
    from damage_overlay.fonts import QtTextMeasurer, build_overlay_font, resolve_font_family

    return QtTextMeasurer(build_overlay_font(resolve_font_family()))


class _PluginRuntime:
    """Encapsulates plugin state so host globals stay tidy."""

    def __init__(
        self,
        plugin_dir: str,
        preferences: Preferences,
        services: HostServices,
        *,
        text_measurer_factory: Callable[[], TextMeasurer] = _default_text_measurer,
        overlay_kwargs: Optional[dict] = None,
    ) -> None:
        self.plugin_dir = Path(plugin_dir)
        self._preferences = preferences
        self._services = services
        self._text_measurer_factory = text_measurer_factory
        self._overlay_kwargs = dict(overlay_kwargs or {})
        self._lock = threading.Lock()
        self._running = False
        self._overlay_visible = True
        self._file_handler: Optional[logging.Handler] = None
        self.overlay: Optional[DamageOverlay] = None

    # Lifecycle ------------------------------------------------------------

    def start(self) -> str:
        with self._lock:
            if self._running:
                return PLUGIN_NAME
            _ensure_plugin_logger_level()
            self._apply_file_logging()
            measurer = self._text_measurer_factory()
            self.overlay = DamageOverlay(
                config=self._preferences,
                fight_provider=self._services.fight_provider,
                party_provider=self._services.party_provider,
                tooltip_sink=self._services.tooltip_sink,
                mouse_position_fn=self._services.mouse_position_fn,
                visibility_fn=lambda: self._overlay_visible,
                text_measurer=measurer,
                **self._overlay_kwargs,
            )
            self._running = True
        _log("Plugin started")
        return PLUGIN_NAME

    def stop(self) -> None:
        with self._lock:
            if not self._running:
                return
            self._running = False
            overlay = self.overlay
            self.overlay = None
        _log("Plugin stopping")
        if overlay is not None:
            overlay.clear_avatar_cache()
        self._remove_file_handler()

    # Overlay --------------------------------------------------------------

    @property
    def overlay_visible(self) -> bool:
        return self._overlay_visible

    def set_overlay_visible(self, visible: bool) -> None:
        flag = bool(visible)
        if flag == self._overlay_visible:
            return
        self._overlay_visible = flag
        LOGGER.debug("Overlay visibility set to %s", "visible" if flag else "hidden")

    def toggle_overlay(self) -> bool:
        self.set_overlay_visible(not self._overlay_visible)
        return self._overlay_visible

    def render_overlay(self, bounds: Bounds) -> Optional[OverlayFrame]:
        overlay = self.overlay
        if not self._running or overlay is None:
            return None
        return overlay.render(bounds)

    def on_fight_selected(self) -> None:
        self._refresh_overlay("fight selection changed")

    def on_party_changed(self) -> None:
        self._refresh_overlay("party membership changed")

    def on_preferences_updated(self) -> None:
        LOGGER.debug(
            "Preferences updated: enable_overlay=%s show_overlay_avatar=%s secondary_metric=%s log_to_file=%s",
            self._preferences.enable_overlay,
            self._preferences.show_overlay_avatar,
            self._preferences.secondary_metric.name,
            self._preferences.log_to_file,
        )
        self._apply_file_logging()
        self._refresh_overlay("preferences updated")

    # Helpers --------------------------------------------------------------

    def _refresh_overlay(self, reason: str) -> None:
        overlay = self.overlay
        if overlay is None:
            return
        LOGGER.debug("Refreshing overlay caches: %s", reason)
        overlay.update_overlay()

    def _apply_file_logging(self) -> None:
        if not self._preferences.log_to_file:
            self._remove_file_handler()
            return
        if self._file_handler is not None:
            return
        level = logging.DEBUG if _resolve_host_log_level() <= logging.DEBUG else logging.INFO
        try:
            handler = open_plugin_log(self._preferences.log_retention, level)
        except OSError as exc:
            LOGGER.warning("Failed to open plugin log file: %s", exc)
            return
        logging.getLogger(LOGGER_NAME).addHandler(handler)
        self._file_handler = handler

    def _remove_file_handler(self) -> None:
        handler = self._file_handler
        if handler is None:
            return
        self._file_handler = None
        logging.getLogger(LOGGER_NAME).removeHandler(handler)
        handler.close()


_plugin: Optional[_PluginRuntime] = None
_preferences: Optional[Preferences] = None


def plugin_start3(plugin_dir: str, services: HostServices, host_logger: Optional[logging.Logger] = None) -> str:
    global _plugin, _preferences, _host_logger
    if host_logger is not None:
        _host_logger = host_logger
    _log(f"Initialising Combat Logger plugin from {plugin_dir}")
    if _plugin is not None:
        return PLUGIN_NAME
    _preferences = Preferences(Path(plugin_dir))
    _plugin = _PluginRuntime(plugin_dir, _preferences, services)
    return _plugin.start()


def plugin_stop() -> None:
    global _plugin, _preferences
    if _plugin:
        try:
            _plugin.stop()
        finally:
            _plugin = None
    _preferences = None


def render_overlay(bounds: Bounds) -> Optional[OverlayFrame]:
    """Per-frame hook; returns the frame to draw or None to skip."""
    if _plugin is None:
        return None
    try:
        return _plugin.render_overlay(bounds)
    except Exception as exc:
        LOGGER.exception("Overlay render failed: %s", exc)
        return None


def paint_overlay(painter: Any, bounds: Bounds) -> Optional[Tuple[int, int]]:
    """Render and paint onto a QPainter; returns the panel size used."""
    frame = render_overlay(bounds)
    if frame is None:
        return None
    try:
        measurer = _plugin.overlay.text_measurer if _plugin and _plugin.overlay else None
        adapter = QtOverlayPainterAdapter(painter, getattr(measurer, "font", None))
        paint_frame(adapter, frame)
    except Exception as exc:
        LOGGER.exception("Overlay paint failed: %s", exc)
        return None
    return frame.size


def fight_selected() -> None:
    if _plugin is None:
        return
    try:
        _plugin.on_fight_selected()
    except Exception as exc:
        LOGGER.exception("Fight selection handling failed: %s", exc)


def party_changed() -> None:
    if _plugin is None:
        return
    try:
        _plugin.on_party_changed()
    except Exception as exc:
        LOGGER.exception("Party change handling failed: %s", exc)


def toggle_overlay() -> Optional[bool]:
    if _plugin is None:
        return None
    return _plugin.toggle_overlay()


def plugin_prefs_save() -> None:
    LOGGER.debug("plugin_prefs_save invoked")
    if _preferences is None:
        LOGGER.debug("Preferences not initialised; nothing to save")
        return
    try:
        _preferences.save()
        if _plugin:
            _plugin.on_preferences_updated()
    except Exception as exc:
        LOGGER.exception("Failed to save preferences: %s", exc)


# Metadata expected by some plugin loaders
name = PLUGIN_NAME
version = PLUGIN_VERSION
