"""Contracts for the host-owned collaborators the overlay consumes.

The host injects concrete implementations; nothing here talks to the game
client directly. Fight and party data stay owned by the host and are treated
as read-only snapshots.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional, Protocol, Sequence, Tuple

if TYPE_CHECKING:
    from PyQt6.QtGui import QColor, QImage

GAME_TICK_MILLIS = 600


@dataclass(frozen=True)
class PlayerStats:
    name: str
    damage: int = 0
    percent_damage: float = 0.0
    dps: float = 0.0
    ticks: int = 0


@dataclass(frozen=True)
class Fight:
    fight_name: str
    fight_length_ticks: int = 0


def format_fight_time(ticks: int) -> str:
    """Render a tick count as ``m:ss`` (or ``h:mm:ss`` past the hour)."""

    total_seconds = max(0, int(ticks)) * GAME_TICK_MILLIS // 1000
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


class FightProvider(Protocol):
    def get_selected_fight(self) -> Optional[Fight]: ...
    def get_player_damage_for_fight(self, fight: Fight) -> Sequence[PlayerStats]: ...
    def get_player_color(self, name: str) -> "QColor": ...


class PartyMember(Protocol):
    avatar: Optional["QImage"]


class PartyProvider(Protocol):
    def get_member_by_display_name(self, name: str) -> Optional[PartyMember]: ...


class TooltipSink(Protocol):
    def add(self, text: str) -> None: ...


@dataclass
class HostServices:
    """Bundle of collaborators handed to the plugin at start-up."""

    fight_provider: FightProvider
    party_provider: PartyProvider
    tooltip_sink: TooltipSink
    mouse_position_fn: Callable[[], Tuple[int, int]]
