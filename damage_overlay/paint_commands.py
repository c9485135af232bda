"""Paint command types and Qt painter adapter for the damage overlay."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QColor, QFont, QPainter


class OverlayPainterAdapter:
    def fill_rect(self, x: int, y: int, width: int, height: int, color: QColor) -> None: ...
    def draw_image(self, x: int, y: int, image: Any) -> None: ...
    def draw_text(self, x: int, baseline: int, text: str, color: QColor) -> None: ...


@dataclass(frozen=True)
class _OverlayPaintCommand:
    def paint(self, adapter: OverlayPainterAdapter) -> None:
        raise NotImplementedError


@dataclass(frozen=True)
class RectPaintCommand(_OverlayPaintCommand):
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0
    color: QColor = field(default_factory=lambda: QColor(0, 0, 0, 0))

    def paint(self, adapter: OverlayPainterAdapter) -> None:
        if self.width <= 0 or self.height <= 0:
            return
        adapter.fill_rect(self.x, self.y, self.width, self.height, self.color)


@dataclass(frozen=True)
class ImagePaintCommand(_OverlayPaintCommand):
    x: int = 0
    y: int = 0
    image: Any = None

    def paint(self, adapter: OverlayPainterAdapter) -> None:
        if self.image is None:
            return
        adapter.draw_image(self.x, self.y, self.image)


@dataclass(frozen=True)
class TextPaintCommand(_OverlayPaintCommand):
    x: int = 0
    baseline: int = 0
    text: str = ""
    color: QColor = field(default_factory=lambda: QColor("white"))

    def paint(self, adapter: OverlayPainterAdapter) -> None:
        adapter.draw_text(self.x, self.baseline, self.text, self.color)


@dataclass
class OverlayFrame:
    """One rendered frame: the panel size actually used plus its draw commands."""

    size: Tuple[int, int]
    commands: List[_OverlayPaintCommand] = field(default_factory=list)

    def texts(self) -> List[str]:
        return [command.text for command in self.commands if isinstance(command, TextPaintCommand)]


def paint_frame(adapter: OverlayPainterAdapter, frame: Optional[OverlayFrame]) -> None:
    if frame is None:
        return
    for command in frame.commands:
        command.paint(adapter)


class QtOverlayPainterAdapter(OverlayPainterAdapter):
    def __init__(self, painter: QPainter, font: Optional[QFont] = None) -> None:
        self._painter = painter
        if font is not None:
            self._painter.setFont(font)

    def fill_rect(self, x: int, y: int, width: int, height: int, color: QColor) -> None:
        self._painter.setPen(Qt.PenStyle.NoPen)
        self._painter.fillRect(x, y, width, height, color)

    def draw_image(self, x: int, y: int, image: Any) -> None:
        self._painter.drawImage(x, y, image)

    def draw_text(self, x: int, baseline: int, text: str, color: QColor) -> None:
        self._painter.setPen(color)
        self._painter.drawText(x, baseline, text)
