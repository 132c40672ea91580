"""
Ball entity for the match scene.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from mini_arcade_core.spaces.d2.physics2d import Velocity2D
from mini_arcade_core.spaces.math.vec2 import Vec2

from pong_rally.constants import BALL_HEIGHT, BALL_SIZE, BALL_SPEED


@dataclass
class Ball:
    """
    Ball entity for the match scene.

    ``position.y`` and ``velocity.vy`` run along the court depth axis.

    :ivar position (Vec2): Position of the ball on the court plane.
    :ivar velocity (Velocity2D): Velocity in units per second.
    :ivar speed (float): Current rally speed, tracked apart from velocity.
    :ivar size (float): Ball size used for wall and paddle reach.
    :ivar height (float): Visual height above the floor.
    :ivar out_of_bounds_since (float | None): Clock time the ball was first
        seen outside the side walls, None while inside.
    :ivar wall_cooldown (bool): Whether a wall bounce happened too recently
        to bounce again.
    :ivar last_wall_hit (float): Clock time of the last wall bounce.
    """

    position: Vec2 = field(default_factory=lambda: Vec2(0.0, 0.0))
    velocity: Velocity2D = field(default_factory=Velocity2D)
    speed: float = BALL_SPEED
    size: float = BALL_SIZE
    height: float = BALL_HEIGHT
    out_of_bounds_since: float | None = None
    wall_cooldown: bool = False
    last_wall_hit: float = 0.0
