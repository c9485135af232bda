"""Text measurement contract and row text formatting for the damage overlay."""
from __future__ import annotations

from combat_logger.preferences import SecondaryMetric  # type: ignore
from combat_logger.services import PlayerStats  # type: ignore

ELLIPSIS = "..."


class TextMeasurer:
    def width(self, text: str) -> int: ...
    def height(self) -> int: ...
    def ascent(self) -> int: ...


def truncate_text(text: str, measurer: TextMeasurer, max_width: int) -> str:
    """Truncate ``text`` with an ellipsis so it fits within ``max_width`` pixels.

    When even the ellipsis does not leave room for a single character the
    ellipsis is returned on its own.
    """
    if measurer.width(text) <= max_width:
        return text

    available_width = max_width - measurer.width(ELLIPSIS)
    if available_width <= 0:
        return ELLIPSIS

    length = len(text)
    while length > 0 and measurer.width(text[:length]) > available_width:
        length -= 1
    return text[:length] + ELLIPSIS


def format_secondary_text(stats: PlayerStats, metric: SecondaryMetric) -> str:
    if metric is SecondaryMetric.DPS:
        return "(%.2f, %.1f%%)" % (stats.dps, stats.percent_damage)
    if metric is SecondaryMetric.TICKS:
        return "(%d, %.1f%%)" % (stats.ticks, stats.percent_damage)
    return ""


def format_damage_text(stats: PlayerStats, metric: SecondaryMetric) -> str:
    secondary = format_secondary_text(stats, metric)
    if not secondary:
        return str(stats.damage)
    return f"{stats.damage} {secondary}"


def bar_length(damage: int, max_damage: int, available_width: int) -> int:
    """Proportional bar width; the denominator is floored at 1."""

    width = max(0, int(available_width))
    denominator = max(1, int(max_damage))
    length = int(round(max(0, damage) / denominator * width))
    return min(width, length)


def centered_baseline(top: int, row_height: int, measurer: TextMeasurer) -> int:
    return top + (row_height - measurer.height()) // 2 + measurer.ascent()
