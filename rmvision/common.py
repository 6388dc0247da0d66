"""Shared enumerations for team colours and vision modes."""

from __future__ import annotations

from enum import IntEnum

UNKNOWN = "UNKNOWN"


class EnemyColor(IntEnum):
    """Colour of the opposing team's armour."""

    RED = 0
    BLUE = 1
    WHITE = 2


class VisionMode(IntEnum):
    """Operating mode of the vision pipeline."""

    AUTO_AIM_RED = 0
    AUTO_AIM_BLUE = 1
    SMALL_RUNE_RED = 2
    SMALL_RUNE_BLUE = 3
    BIG_RUNE_RED = 4
    BIG_RUNE_BLUE = 5


def enemy_color_to_string(color: EnemyColor | int) -> str:
    """Return the name of a colour, or ``"UNKNOWN"`` for an unknown value."""
    try:
        return EnemyColor(color).name
    except ValueError:
        return UNKNOWN


def vision_mode_to_string(mode: VisionMode | int) -> str:
    """Return the name of a vision mode, or ``"UNKNOWN"`` for an unknown value."""
    try:
        return VisionMode(mode).name
    except ValueError:
        return UNKNOWN