from __future__ import annotations

import pytest

from combat_logger.services import Fight, PlayerStats, format_fight_time


@pytest.mark.parametrize(
    "ticks, expected",
    [
        (0, "0:00"),
        (1, "0:00"),
        (2, "0:01"),
        (100, "1:00"),
        (1000, "10:00"),
        (6000, "1:00:00"),
        (6101, "1:01:00"),
        (-5, "0:00"),
    ],
)
def test_format_fight_time(ticks, expected):
    assert format_fight_time(ticks) == expected


def test_stats_and_fight_are_immutable():
    stats = PlayerStats("Alice", damage=10)
    fight = Fight("Vorkath", fight_length_ticks=50)
    with pytest.raises(Exception):
        stats.damage = 11  # type: ignore[misc]
    with pytest.raises(Exception):
        fight.fight_name = "Zulrah"  # type: ignore[misc]
