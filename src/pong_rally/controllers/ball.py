"""
Ball motion and side-wall handling for Pong Rally.
"""

from __future__ import annotations

import math
from enum import Enum, auto

from mini_arcade_core.spaces.math.vec2 import Vec2

from pong_rally.constants import (
    COURT_DEPTH,
    COURT_WIDTH,
    PARALLEL_RATIO,
    SCORE_MARGIN,
    STUCK_TIMEOUT,
    UNSTICK_RATIO,
    WALL_COOLDOWN,
)
from pong_rally.entities import Ball


class BallEvent(Enum):
    """Outcome of a single ball step."""

    NONE = auto()
    WALL = auto()
    PLAYER_SCORED = auto()
    AI_SCORED = auto()
    STUCK = auto()


class BallController:
    """
    Integrates the ball and resolves side walls, scoring lines and the
    stuck-ball timeout.

    Paddle contact is not handled here; the match scene tests it against
    the current paddle positions after this step.
    """

    def __init__(
        self,
        *,
        court_width: float = COURT_WIDTH,
        court_depth: float = COURT_DEPTH,
    ):
        """
        :param court_width: Distance between the side walls.
        :type court_width: float

        :param court_depth: Distance between the two end lines.
        :type court_depth: float
        """
        self.court_width = court_width
        self.court_depth = court_depth

    def wall_limit(self, ball: Ball) -> float:
        """Largest |x| the ball centre may reach before touching a wall."""
        return self.court_width / 2 - ball.size / 2

    def update(self, ball: Ball, dt: float, now: float) -> BallEvent:
        """
        Advance the ball by ``dt`` seconds.

        :param ball: Ball to move.
        :type ball: Ball

        :param dt: Clamped tick duration in seconds.
        :type dt: float

        :param now: Simulation clock after this tick.
        :type now: float

        :return: What happened to the ball this tick.
        :rtype: BallEvent
        """
        x, y = ball.velocity.advance(ball.position.x, ball.position.y, dt)
        ball.position = Vec2(x, y)

        if ball.wall_cooldown and now - ball.last_wall_hit > WALL_COOLDOWN:
            ball.wall_cooldown = False

        event = BallEvent.NONE
        if abs(ball.position.x) >= self.wall_limit(ball):
            if ball.out_of_bounds_since is None:
                # the ball crossed somewhere during this tick
                ball.out_of_bounds_since = now - dt
            elif now - ball.out_of_bounds_since >= STUCK_TIMEOUT:
                ball.out_of_bounds_since = None
                return BallEvent.STUCK

            if not ball.wall_cooldown:
                self._bounce(ball, now)
                event = BallEvent.WALL
        else:
            ball.out_of_bounds_since = None

        scoring_line = self.court_depth / 2 + SCORE_MARGIN
        if ball.position.y >= scoring_line:
            return BallEvent.PLAYER_SCORED
        if ball.position.y <= -scoring_line:
            return BallEvent.AI_SCORED

        return event

    def _bounce(self, ball: Ball, now: float):
        velocity = ball.velocity
        velocity.vx = -velocity.vx
        ball.last_wall_hit = now
        ball.wall_cooldown = True

        speed = math.hypot(velocity.vx, velocity.vy)
        if speed == 0.0:
            return

        # Nearly parallel to the wall: steer back toward the middle
        if abs(velocity.vx) / speed < PARALLEL_RATIO:
            push = -1.0 if ball.position.x > 0 else 1.0
            velocity.vx = push * speed * UNSTICK_RATIO
            velocity.vy = math.copysign(
                math.sqrt(speed**2 - velocity.vx**2), velocity.vy
            )
            ball.position.x += push * ball.size
