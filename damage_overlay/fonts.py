"""Font resolution and Qt-backed text measurement for the damage overlay."""
from __future__ import annotations

import logging
from collections import OrderedDict
from pathlib import Path
from typing import Optional

from PyQt6.QtGui import QFont, QFontDatabase, QFontMetrics

from damage_overlay.text_layout import TextMeasurer  # type: ignore

_LOGGER_NAME = "CombatLogger.Overlay"
_OVERLAY_LOGGER = logging.getLogger(_LOGGER_NAME)

FONTS_DIR = Path(__file__).resolve().parent / "fonts"
DEFAULT_POINT_SIZE = 9.0
INSTALLED_CANDIDATES = (
    "RuneScape Small",
    "Runescape Small",
    "RuneScape",
)


def resolve_font_family(fonts_dir: Path = FONTS_DIR) -> Optional[str]:
    """Register bundled fonts and return the first usable family, or None for the Qt default."""

    candidate_files = sorted(fonts_dir.glob("*.ttf")) if fonts_dir.exists() else []
    for font_path in candidate_files:
        try:
            font_id = QFontDatabase.addApplicationFont(str(font_path))
        except Exception as exc:
            _OVERLAY_LOGGER.warning("Failed to load font from %s: %s", font_path, exc)
            continue
        if font_id == -1:
            _OVERLAY_LOGGER.warning("Font file at %s could not be registered; falling back", font_path)
            continue
        families = QFontDatabase.applicationFontFamilies(font_id)
        if families:
            _OVERLAY_LOGGER.debug("Using font family '%s' from %s", families[0], font_path)
            return families[0]
        _OVERLAY_LOGGER.warning("Font %s registered but no families reported; falling back", font_path)

    try:
        available = set(QFontDatabase.families())
    except Exception as exc:
        _OVERLAY_LOGGER.warning("Could not enumerate installed fonts: %s", exc)
        available = set()
    for candidate in INSTALLED_CANDIDATES:
        if candidate in available:
            _OVERLAY_LOGGER.debug("Using installed font family '%s'", candidate)
            return candidate

    _OVERLAY_LOGGER.debug("No overlay font found; using Qt default family")
    return None


def build_overlay_font(family: Optional[str] = None, point_size: float = DEFAULT_POINT_SIZE) -> QFont:
    font = QFont(family) if family else QFont()
    font.setPointSizeF(point_size)
    font.setWeight(QFont.Weight.Normal)
    return font


class QtTextMeasurer(TextMeasurer):
    """Measures overlay text with QFontMetrics, caching widths per string.

    At most ``cache_max`` widths are kept; the least recently used go first.
    """

    _WIDTH_CACHE_MAX = 512

    def __init__(self, font: QFont, *, cache_max: Optional[int] = None) -> None:
        self._font = font
        self._metrics = QFontMetrics(font)
        self._cache_max = max(1, int(cache_max if cache_max is not None else self._WIDTH_CACHE_MAX))
        self._width_cache: OrderedDict[str, int] = OrderedDict()

    @property
    def font(self) -> QFont:
        return self._font

    def width(self, text: str) -> int:
        cached = self._width_cache.get(text)
        if cached is not None:
            self._width_cache.move_to_end(text)
            return cached
        cached = self._metrics.horizontalAdvance(text)
        self._width_cache[text] = cached
        while len(self._width_cache) > self._cache_max:
            self._width_cache.popitem(last=False)
        return cached

    def height(self) -> int:
        return self._metrics.height()

    def ascent(self) -> int:
        return self._metrics.ascent()
