"""Hitsplat type code lookup."""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

HITSPLAT_NAMES: Mapping[int, str] = MappingProxyType(
    {
        2: "POISON",
        4: "DISEASE",
        5: "VENOM",
        6: "HEAL",
        12: "BLOCK_ME",
        13: "BLOCK_OTHER",
        16: "DAMAGE_ME",
        17: "DAMAGE_OTHER",
        18: "DAMAGE_ME_CYAN",
        19: "DAMAGE_OTHER_CYAN",
        20: "DAMAGE_ME_ORANGE",
        21: "DAMAGE_OTHER_ORANGE",
        22: "DAMAGE_ME_YELLOW",
        23: "DAMAGE_OTHER_YELLOW",
        24: "DAMAGE_ME_WHITE",
        25: "DAMAGE_OTHER_WHITE",
        43: "DAMAGE_MAX_ME",
        44: "DAMAGE_MAX_ME_CYAN",
        45: "DAMAGE_MAX_ME_ORANGE",
        46: "DAMAGE_MAX_ME_YELLOW",
        47: "DAMAGE_MAX_ME_WHITE",
    }
)


def hitsplat_name(code: int) -> str:
    """Return the label for a hitsplat type, or ``Unknown_<code>`` when unregistered."""

    return HITSPLAT_NAMES.get(code, f"Unknown_{code}")
