"""Ranked damage overlay: per-frame layout of the selected fight's player damage."""
from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Protocol, Sequence, Tuple

from PyQt6.QtGui import QColor

from combat_logger.preferences import SecondaryMetric  # type: ignore
from combat_logger.services import (  # type: ignore
    FightProvider,
    PartyProvider,
    PlayerStats,
    TooltipSink,
    format_fight_time,
)
from damage_overlay.avatar_cache import AvatarCache  # type: ignore
from damage_overlay.images import (  # type: ignore
    IMAGE_DEFAULT_AVATAR_PATH,
    IMAGE_SETTINGS_PATH,
    load_image,
    scale_image,
)
from damage_overlay.paint_commands import (  # type: ignore
    ImagePaintCommand,
    OverlayFrame,
    RectPaintCommand,
    TextPaintCommand,
)
from damage_overlay.sizing import (  # type: ignore
    AUTOMATIC_MAX_HEIGHT,
    LINE_HEIGHT,
    PanelSizer,
    SizingMode,
    visible_row_count,
)
from damage_overlay.text_layout import (  # type: ignore
    TextMeasurer,
    bar_length,
    centered_baseline,
    format_damage_text,
    truncate_text,
)

_LOGGER_NAME = "CombatLogger.Overlay"
_OVERLAY_LOGGER = logging.getLogger(_LOGGER_NAME)

Bounds = Tuple[int, int, int, int]

BACKGROUND_COLOR = QColor(50, 50, 50, 120)
HEADER_COLOR = QColor(30, 30, 30, 209)
ROW_BACKGROUND_COLOR = QColor(70, 70, 70, 120)
TEXT_COLOR = QColor(255, 255, 255)
PLAYER_BAR_ALPHA = 165
SETTINGS_TOOLTIP = "Right click for combat logger overlay settings"


class OverlayConfig(Protocol):
    enable_overlay: bool
    show_overlay_avatar: bool
    secondary_metric: SecondaryMetric


class DamageOverlay:
    """Builds the paint commands for one frame of the damage overlay.

    Collaborators are injected so the layout can run without a game client:
    ``visibility_fn`` reports the plugin-level show/hide toggle and
    ``mouse_position_fn`` returns the pointer in screen coordinates (or None).
    """

    def __init__(
        self,
        *,
        config: OverlayConfig,
        fight_provider: FightProvider,
        party_provider: PartyProvider,
        tooltip_sink: TooltipSink,
        mouse_position_fn: Callable[[], Optional[Tuple[int, int]]],
        visibility_fn: Callable[[], bool],
        text_measurer: TextMeasurer,
        image_loader: Callable[[Any], Any] = load_image,
        image_scaler: Callable[[Any, int, int], Any] = scale_image,
    ) -> None:
        self._config = config
        self._fight_provider = fight_provider
        self._party_provider = party_provider
        self._tooltip_sink = tooltip_sink
        self._mouse_position = mouse_position_fn
        self._is_visible = visibility_fn
        self._measurer = text_measurer
        self._scale_image = image_scaler
        self._sizer = PanelSizer()
        self._avatar_cache = AvatarCache()
        self._default_avatar = image_loader(IMAGE_DEFAULT_AVATAR_PATH)
        self._settings_icon = image_loader(IMAGE_SETTINGS_PATH)

    @property
    def sizing_mode(self) -> SizingMode:
        return self._sizer.mode

    @property
    def text_measurer(self) -> TextMeasurer:
        return self._measurer

    @property
    def avatar_cache(self) -> AvatarCache:
        return self._avatar_cache

    def render(self, bounds: Bounds) -> Optional[OverlayFrame]:
        """Lay out one frame inside ``bounds`` (screen x, y, width, height).

        Returns None when there is nothing to draw; otherwise the frame's
        commands and the panel size the host should adopt.
        """
        if not self._config.enable_overlay or not self._is_visible():
            return None

        fight = self._fight_provider.get_selected_fight()
        if fight is None:
            return None
        player_stats = list(self._fight_provider.get_player_damage_for_fight(fight))
        if not player_stats:
            return None

        overlay_x, overlay_y, current_width, current_height = bounds
        if self._sizer.observe(current_height):
            _OVERLAY_LOGGER.debug(
                "Overlay height %spx exceeds %spx; automatic sizing disabled",
                current_height,
                AUTOMATIC_MAX_HEIGHT,
            )
        width, height = self._sizer.target_size(current_width, current_height, len(player_stats))
        measurer = self._measurer

        commands: List[Any] = [
            RectPaintCommand(0, 0, width, height, BACKGROUND_COLOR),
            RectPaintCommand(0, 0, width, LINE_HEIGHT, HEADER_COLOR),
        ]

        header_reserved = 6
        icon = self._settings_icon
        if icon is not None:
            icon_x = width - icon.width() - 2
            icon_y = (LINE_HEIGHT - icon.height()) // 2
            commands.append(ImagePaintCommand(icon_x, icon_y, icon))
            self._queue_settings_tooltip(overlay_x + icon_x, overlay_y + icon_y, icon.width(), icon.height())
            header_reserved = icon.width() + 6

        fight_label = f"{fight.fight_name} ({format_fight_time(fight.fight_length_ticks)})"
        header_text = truncate_text(f"Damage: {fight_label}", measurer, width - header_reserved)
        commands.append(TextPaintCommand(3, centered_baseline(0, LINE_HEIGHT, measurer), header_text, TEXT_COLOR))

        commands.extend(self._row_commands(player_stats, width, height))
        return OverlayFrame((width, height), commands)

    def _row_commands(self, player_stats: Sequence[PlayerStats], width: int, height: int) -> List[Any]:
        show_avatars = bool(self._config.show_overlay_avatar)
        metric = self._config.secondary_metric
        measurer = self._measurer
        avatar_size = LINE_HEIGHT if show_avatars else 0
        bar_x = avatar_size
        text_x = bar_x + 5
        available_bar_width = width - avatar_size
        # Scale against the whole fight, not just the rows that fit.
        max_damage = max(max(stats.damage for stats in player_stats), 1)
        rows = visible_row_count(height, len(player_stats))

        commands: List[Any] = []
        y_position = LINE_HEIGHT
        for stats in player_stats[:rows]:
            if show_avatars:
                avatar = self._avatar_for(stats.name)
                if avatar is not None:
                    commands.append(ImagePaintCommand(0, y_position, avatar))

            player_color = self._fight_provider.get_player_color(stats.name)
            bar_color = QColor(player_color.red(), player_color.green(), player_color.blue(), PLAYER_BAR_ALPHA)
            commands.append(RectPaintCommand(bar_x, y_position, available_bar_width, LINE_HEIGHT, ROW_BACKGROUND_COLOR))
            commands.append(
                RectPaintCommand(
                    bar_x,
                    y_position,
                    bar_length(stats.damage, max_damage, available_bar_width),
                    LINE_HEIGHT,
                    bar_color,
                )
            )

            baseline = centered_baseline(y_position, LINE_HEIGHT, measurer)
            damage_text = format_damage_text(stats, metric)
            damage_x = width - measurer.width(damage_text) - 2
            commands.append(TextPaintCommand(damage_x, baseline, damage_text, TEXT_COLOR))

            available_name_width = damage_x - text_x - 5
            if available_name_width > 0:
                name_text = truncate_text(stats.name, measurer, available_name_width)
                commands.append(TextPaintCommand(text_x, baseline, name_text, TEXT_COLOR))

            y_position += LINE_HEIGHT
        return commands

    def _avatar_for(self, name: str) -> Any:
        def create() -> Any:
            member = self._party_provider.get_member_by_display_name(name)
            source = getattr(member, "avatar", None) if member is not None else None
            if source is None:
                source = self._default_avatar
            if source is None:
                return None
            return self._scale_image(source, LINE_HEIGHT, LINE_HEIGHT)

        return self._avatar_cache.get_or_create(name, create)

    def _queue_settings_tooltip(self, x: int, y: int, width: int, height: int) -> None:
        position = self._mouse_position()
        if position is None:
            return
        mouse_x, mouse_y = position
        if x <= mouse_x < x + width and y <= mouse_y < y + height:
            self._tooltip_sink.add(SETTINGS_TOOLTIP)

    def clear_avatar_cache(self) -> None:
        self._avatar_cache.clear()
        _OVERLAY_LOGGER.debug("Avatar cache cleared")

    def update_overlay(self) -> None:
        """The host repaints every frame; this only drops cached player/avatar data."""

        self.clear_avatar_cache()
