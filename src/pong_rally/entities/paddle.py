"""
Paddle entity for Pong Rally.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from mini_arcade_core.spaces.math.vec2 import Vec2

from pong_rally.constants import (
    BALL_SIZE,
    PADDLE_DEPTH,
    PADDLE_LIMIT,
    PADDLE_WIDTH,
)


class Side(str, Enum):
    """Which end of the court a paddle defends."""

    PLAYER = "player"
    AI = "ai"


@dataclass
class Paddle:
    """
    Paddle entity for the match scene.

    The paddle slides along x on a fixed depth line (``position.y``).

    :ivar side (Side): Which end this paddle defends.
    :ivar position (Vec2): Lateral position and depth line.
    :ivar width (float): Lateral extent of the paddle.
    :ivar depth (float): Extent along the depth axis.
    """

    side: Side
    position: Vec2
    width: float = PADDLE_WIDTH
    depth: float = PADDLE_DEPTH

    @property
    def x(self) -> float:
        """Lateral position of the paddle centre."""
        return self.position.x

    def clamp_to_court(self):
        """Keep the paddle fully inside the side walls."""
        self.position.x = max(
            -PADDLE_LIMIT, min(PADDLE_LIMIT, self.position.x)
        )

    def reaches(self, point: Vec2, ball_size: float = BALL_SIZE) -> bool:
        """
        Whether a ball centred at ``point`` overlaps this paddle.

        :param point: Ball position on the court plane.
        :type point: Vec2

        :param ball_size: Size of the ball.
        :type ball_size: float

        :return: True if the ball touches the paddle.
        :rtype: bool
        """
        in_depth = abs(point.y - self.position.y) <= self.depth / 2 + ball_size
        in_width = abs(point.x - self.position.x) < self.width / 2 + ball_size
        return in_depth and in_width

    def hit_offset(self, point: Vec2) -> float:
        """
        Normalized contact offset from the paddle centre.

        Roughly -1 at the left edge and +1 at the right edge; slightly
        larger past the edges.
        """
        return (point.x - self.position.x) / (self.width / 2)
