"""
Match settings supplied by the host application.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any

from mini_arcade_core.utils import logger

from pong_rally.constants import (
    BALL_SPEED,
    MAX_BASE_BALL_SPEED,
    MIN_BASE_BALL_SPEED,
    WIN_SCORE,
)
from pong_rally.difficulty import DEFAULT_PRESET, difficulty_for_preset


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _as_float(value: Any, default: float, name: str) -> float:
    if isinstance(value, bool):
        logger.warning(f"Ignoring non-numeric {name}: {value!r}")
        return default
    try:
        result = float(value)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring non-numeric {name}: {value!r}")
        return default
    if not math.isfinite(result):
        logger.warning(f"Ignoring non-finite {name}: {value!r}")
        return default
    return result


def _as_bool(value: Any, default: bool, name: str) -> bool:
    if isinstance(value, bool):
        return value
    logger.warning(f"Ignoring non-boolean {name}: {value!r}")
    return default


@dataclass
class MatchSettings:
    """
    Configuration read by the match scene.

    Values are clamped on construction. The scene reads ``ai_difficulty``
    every tick and ``base_ball_speed`` at every serve.

    :ivar base_ball_speed (float): Serve speed in units per second, 1 to 50.
    :ivar ai_difficulty (float): Base AI skill, 0 (easy) to 1 (hard).
    :ivar mouse_control (bool): Drive the player paddle from the mouse.
    :ivar win_score (int): Points needed to win a game.
    """

    base_ball_speed: float = BALL_SPEED
    ai_difficulty: float = difficulty_for_preset(DEFAULT_PRESET)
    mouse_control: bool = False
    win_score: int = WIN_SCORE

    def __post_init__(self):
        speed = _clamp(
            float(self.base_ball_speed),
            MIN_BASE_BALL_SPEED,
            MAX_BASE_BALL_SPEED,
        )
        if speed != self.base_ball_speed:
            logger.debug(
                f"Clamped base ball speed {self.base_ball_speed} -> {speed}"
            )
        self.base_ball_speed = speed

        difficulty = _clamp(float(self.ai_difficulty), 0.0, 1.0)
        if difficulty != self.ai_difficulty:
            logger.debug(
                f"Clamped AI difficulty {self.ai_difficulty} -> {difficulty}"
            )
        self.ai_difficulty = difficulty

        self.mouse_control = bool(self.mouse_control)
        self.win_score = max(1, int(self.win_score))

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "MatchSettings":
        """
        Build settings from a plain mapping, typically a parsed config file.

        A ``difficulty`` preset name is used when ``ai_difficulty`` is
        absent. Bad values fall back to defaults.

        :param data: The input data to parse.
        :type data: dict or None

        :return: Settings populated from the data.
        :rtype: MatchSettings
        """
        if not isinstance(data, dict):
            return cls()
        defaults = cls()

        if "ai_difficulty" in data:
            ai_difficulty = _as_float(
                data["ai_difficulty"], defaults.ai_difficulty, "ai_difficulty"
            )
        elif "difficulty" in data:
            try:
                ai_difficulty = difficulty_for_preset(data["difficulty"])
            except ValueError as exc:
                logger.warning(str(exc))
                ai_difficulty = defaults.ai_difficulty
        else:
            ai_difficulty = defaults.ai_difficulty

        return cls(
            base_ball_speed=_as_float(
                data.get("base_ball_speed", defaults.base_ball_speed),
                defaults.base_ball_speed,
                "base_ball_speed",
            ),
            ai_difficulty=ai_difficulty,
            mouse_control=_as_bool(
                data.get("mouse_control", defaults.mouse_control),
                defaults.mouse_control,
                "mouse_control",
            ),
            win_score=int(
                _as_float(
                    data.get("win_score", defaults.win_score),
                    defaults.win_score,
                    "win_score",
                )
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        """Plain mapping of the settings."""
        return asdict(self)
