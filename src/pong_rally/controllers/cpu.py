"""
CPU paddle controller for Pong Rally.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass

from mini_arcade_core.utils import logger

from pong_rally.constants import AI_RESAMPLE_INTERVAL, AI_SPEED
from pong_rally.entities import Paddle


@dataclass
class CpuConfig:
    """
    Tuning for the CPU paddle.

    - max_speed: base lateral step per tick
    - error_span: width of the aim error window at full error
    - reaction_base: dead zone before the CPU bothers to move
    - reaction_jitter: largest random extra dead zone
    - speed_jitter: random step multiplier range
    - max_speed_scale: ceiling on the difficulty speed multiplier
    - resample_interval: seconds between new aim errors
    """

    max_speed: float = AI_SPEED
    error_span: float = 4.0
    reaction_base: float = 0.25
    reaction_jitter: float = 0.3
    speed_jitter: tuple[float, float] = (0.6, 0.9)
    max_speed_scale: float = 1.5
    resample_interval: float = AI_RESAMPLE_INTERVAL


@dataclass(frozen=True)
class CpuSkill:
    """
    Scale factors derived from base and rally difficulty.

    :ivar error_reduction (float): Multiplier on the aim error (floor 0.2).
    :ivar speed_increase (float): Multiplier on paddle speed, before the
        ``max_speed_scale`` ceiling.
    :ivar reaction_improvement (float): Multiplier on the dead zone and
        reaction delay (floor 0.15).
    """

    error_reduction: float
    speed_increase: float
    reaction_improvement: float

    @classmethod
    def from_difficulty(
        cls, base_difficulty: float, rally_difficulty: int
    ) -> "CpuSkill":
        """
        Combine the configured base difficulty with the rally counter.

        :param base_difficulty: Configured difficulty in [0, 1].
        :type base_difficulty: float

        :param rally_difficulty: Player hits in the current rally.
        :type rally_difficulty: int

        :return: The resulting skill factors.
        :rtype: CpuSkill
        """
        d = max(0.0, min(1.0, base_difficulty))
        r = max(0, rally_difficulty)

        base_error = 1 - d * 0.7
        base_speed = 0.5 + d * 0.5
        base_reaction = 1 - d * 0.8

        rally_error = max(0.3, 1 - r * 0.1)
        rally_speed = min(1.5, 1 + r * 0.08)
        rally_reaction = max(0.2, 1 - r * 0.12)

        return cls(
            error_reduction=max(0.2, base_error * rally_error),
            speed_increase=base_speed * rally_speed,
            reaction_improvement=max(0.15, base_reaction * rally_reaction),
        )


class CpuPaddleController:
    """
    CPU that chases the ball's lateral position:
    - Aims at the ball plus an error offset resampled every second.
    - Ignores small differences inside a reaction dead zone.
    - Steps toward the target at a jittered, difficulty-scaled speed.
    """

    def __init__(
        self,
        paddle: Paddle,
        *,
        config: CpuConfig | None = None,
        rng: random.Random | None = None,
    ):
        """
        :param paddle: The paddle to control.
        :type paddle: Paddle

        :param config: The CPU configuration settings.
        :type config: CpuConfig, optional

        :param rng: Random source for aim error and speed jitter.
        :type rng: random.Random, optional
        """
        self.paddle = paddle
        self.config = config or CpuConfig()
        self.rng = rng or random.Random()

        self.error_offset = 0.0
        self.reaction_delay = 0.0
        self.last_error_update = 0.0

    def _resample(self, skill: CpuSkill, now: float):
        cfg = self.config
        self.error_offset = (
            (self.rng.random() - 0.5) * cfg.error_span * skill.error_reduction
        )
        self.reaction_delay = (
            self.rng.random()
            * cfg.reaction_jitter
            * skill.reaction_improvement
        )
        self.last_error_update = now
        logger.debug(
            f"CPU aim error {self.error_offset:+.3f}, "
            f"reaction delay {self.reaction_delay:.3f}"
        )

    def reaction_threshold(self, skill: CpuSkill) -> float:
        """Lateral distance the CPU tolerates before moving."""
        return (
            self.config.reaction_base + self.reaction_delay
        ) * skill.reaction_improvement

    def compute_move(
        self,
        ball_x: float,
        now: float,
        *,
        base_difficulty: float,
        rally_difficulty: int,
    ) -> float:
        """
        Decide this tick's lateral step, 0.0 to hold position.

        :param ball_x: Lateral position of the ball.
        :type ball_x: float

        :param now: Simulation clock.
        :type now: float

        :param base_difficulty: Configured difficulty in [0, 1].
        :type base_difficulty: float

        :param rally_difficulty: Player hits in the current rally.
        :type rally_difficulty: int

        :return: Signed lateral step.
        :rtype: float
        """
        cfg = self.config
        skill = CpuSkill.from_difficulty(base_difficulty, rally_difficulty)

        if now - self.last_error_update > cfg.resample_interval:
            self._resample(skill, now)

        diff = ball_x + self.error_offset - self.paddle.x
        if abs(diff) <= self.reaction_threshold(skill):
            return 0.0

        low, high = cfg.speed_jitter
        jitter = low + self.rng.random() * (high - low)
        speed_scale = min(cfg.max_speed_scale, skill.speed_increase)
        return math.copysign(cfg.max_speed * jitter * speed_scale, diff)

    def update(
        self,
        ball_x: float,
        now: float,
        *,
        base_difficulty: float,
        rally_difficulty: int,
    ):
        """Move the paddle one tick toward the ball."""
        self.paddle.position.x += self.compute_move(
            ball_x,
            now,
            base_difficulty=base_difficulty,
            rally_difficulty=rally_difficulty,
        )
        self.paddle.clamp_to_court()
