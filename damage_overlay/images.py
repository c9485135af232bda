"""Bundled image loading for the damage overlay."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QImage

_LOGGER_NAME = "CombatLogger.Overlay"
_OVERLAY_LOGGER = logging.getLogger(_LOGGER_NAME)

RESOURCES_DIR = Path(__file__).resolve().parent / "resources"
IMAGE_DEFAULT_AVATAR_PATH = RESOURCES_DIR / "default_avatar.png"
IMAGE_SETTINGS_PATH = RESOURCES_DIR / "settings.png"


def load_image(path: Path) -> Optional[QImage]:
    """Load an image from disk; failures are logged and yield None."""

    if not path.exists():
        _OVERLAY_LOGGER.error("Image not found at path: %s", path)
        return None
    image = QImage(str(path))
    if image.isNull():
        _OVERLAY_LOGGER.error("Error loading image at path: %s", path)
        return None
    return image


def scale_image(image: QImage, width: int, height: int) -> QImage:
    return image.scaled(
        width,
        height,
        Qt.AspectRatioMode.IgnoreAspectRatio,
        Qt.TransformationMode.SmoothTransformation,
    )
