"""Panel sizing for the damage overlay."""
from __future__ import annotations

from enum import Enum
from typing import Tuple

LINE_HEIGHT = 20
MIN_WIDTH = 150
MIN_HEIGHT = LINE_HEIGHT * 2  # header + 1 row
AUTOMATIC_MAX_HEIGHT = LINE_HEIGHT * 6  # header + 5 rows


class SizingMode(Enum):
    AUTO_SIZE = "auto"
    MANUAL_SIZE = "manual"


def next_sizing_mode(mode: SizingMode, observed_height: int) -> SizingMode:
    """Advance the sizing latch; MANUAL_SIZE is terminal."""

    if mode is SizingMode.AUTO_SIZE and observed_height > AUTOMATIC_MAX_HEIGHT:
        return SizingMode.MANUAL_SIZE
    return mode


def visible_row_count(panel_height: int, player_count: int) -> int:
    rows = (int(panel_height) - LINE_HEIGHT) // LINE_HEIGHT
    return max(0, min(rows, player_count))


class PanelSizer:
    """Tracks the auto/manual sizing latch for one overlay instance."""

    def __init__(self) -> None:
        self._mode = SizingMode.AUTO_SIZE

    @property
    def mode(self) -> SizingMode:
        return self._mode

    def observe(self, height: int) -> bool:
        """Feed the host-reported panel height; returns True when the latch flips."""

        previous = self._mode
        self._mode = next_sizing_mode(self._mode, height)
        return previous is not self._mode

    def target_size(self, width: int, height: int, row_count: int) -> Tuple[int, int]:
        target_width = max(int(width), MIN_WIDTH)
        if self._mode is SizingMode.AUTO_SIZE:
            desired_height = LINE_HEIGHT + row_count * LINE_HEIGHT
            return target_width, min(AUTOMATIC_MAX_HEIGHT, max(desired_height, MIN_HEIGHT))
        return target_width, max(int(height), MIN_HEIGHT)
