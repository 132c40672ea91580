"""
Named AI difficulty presets for Pong Rally.
"""

from __future__ import annotations

DIFFICULTY_PRESETS: dict[str, float] = {
    "easy": 0.2,
    "normal": 0.5,
    "hard": 0.8,
    "insane": 1.0,
}

DEFAULT_PRESET = "normal"


def difficulty_for_preset(name: str) -> float:
    """
    Base AI difficulty for a preset name.

    :param name: Preset name, case-insensitive.
    :type name: str

    :return: Base difficulty in [0, 1].
    :rtype: float

    :raises ValueError: If the preset does not exist.
    """
    key = str(name).strip().lower()
    if key not in DIFFICULTY_PRESETS:
        raise ValueError(
            f"Unknown difficulty preset {name!r}; "
            f"expected one of {', '.join(DIFFICULTY_PRESETS)}"
        )
    return DIFFICULTY_PRESETS[key]


def next_preset(name: str) -> str:
    """Preset that follows ``name``, wrapping around."""
    levels = list(DIFFICULTY_PRESETS)
    key = str(name).strip().lower()
    idx = levels.index(key) if key in levels else -1
    return levels[(idx + 1) % len(levels)]
