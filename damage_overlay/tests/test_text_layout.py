from __future__ import annotations

import pytest

from combat_logger.preferences import SecondaryMetric
from combat_logger.services import PlayerStats
from damage_overlay.text_layout import (
    ELLIPSIS,
    TextMeasurer,
    bar_length,
    centered_baseline,
    format_damage_text,
    format_secondary_text,
    truncate_text,
)


class FixedWidthMeasurer(TextMeasurer):
    def __init__(self, char_width: int = 6) -> None:
        self.char_width = char_width

    def width(self, text: str) -> int:
        return len(text) * self.char_width

    def height(self) -> int:
        return 12

    def ascent(self) -> int:
        return 10


def test_truncate_returns_text_that_fits():
    measurer = FixedWidthMeasurer()
    assert truncate_text("Zezima", measurer, 36) == "Zezima"


def test_truncate_appends_ellipsis_to_longest_fitting_prefix():
    measurer = FixedWidthMeasurer()
    # 60px leaves 42px (7 chars) once the ellipsis is reserved.
    assert truncate_text("Damage: Vorkath (1:23)", measurer, 60) == "Damage:" + ELLIPSIS


def test_truncate_returns_bare_ellipsis_when_nothing_fits():
    measurer = FixedWidthMeasurer()
    assert truncate_text("Zezima", measurer, 18) == ELLIPSIS
    assert truncate_text("Zezima", measurer, 5) == ELLIPSIS


@pytest.mark.parametrize("max_width", [0, 10, 18, 19, 25, 40, 61, 120])
def test_truncate_is_idempotent_and_bounded(max_width):
    measurer = FixedWidthMeasurer()
    text = "Player With A Very Long Name"
    once = truncate_text(text, measurer, max_width)
    assert truncate_text(once, measurer, max_width) == once
    if once != ELLIPSIS:
        assert measurer.width(once) <= max_width


def test_secondary_text_formats():
    stats = PlayerStats(name="Alice", damage=100, percent_damage=66.666, dps=12.3456, ticks=10)
    assert format_secondary_text(stats, SecondaryMetric.DPS) == "(12.35, 66.7%)"
    assert format_secondary_text(stats, SecondaryMetric.TICKS) == "(10, 66.7%)"
    assert format_secondary_text(stats, SecondaryMetric.NONE) == ""


def test_damage_text_includes_secondary_metric():
    stats = PlayerStats(name="Bob", damage=50, percent_damage=33.3, dps=1.0, ticks=8)
    assert format_damage_text(stats, SecondaryMetric.TICKS) == "50 (8, 33.3%)"
    assert format_damage_text(stats, SecondaryMetric.NONE) == "50"


def test_bar_length_is_proportional_and_guards_zero_max():
    assert bar_length(100, 100, 150) == 150
    assert bar_length(50, 100, 150) == 75
    assert bar_length(0, 100, 150) == 0
    assert bar_length(0, 0, 150) == 0
    assert bar_length(1, 3, 100) == 33


def test_bar_length_is_monotonic_in_damage():
    max_damage = 997
    lengths = [bar_length(damage, max_damage, 173) for damage in range(0, max_damage + 1)]
    assert lengths == sorted(lengths)
    assert lengths[-1] == 173


def test_centered_baseline():
    measurer = FixedWidthMeasurer()
    assert centered_baseline(0, 20, measurer) == 14
    assert centered_baseline(40, 20, measurer) == 54
