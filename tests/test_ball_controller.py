import math

import pytest
from mini_arcade_core.spaces.d2.physics2d import Velocity2D
from mini_arcade_core.spaces.math.vec2 import Vec2

from pong_rally.constants import COURT_DEPTH, COURT_WIDTH, SCORE_MARGIN
from pong_rally.controllers.ball import BallController, BallEvent
from pong_rally.entities import Ball


def make_ball(x=0.0, y=0.0, vx=0.0, vy=0.0):
    return Ball(position=Vec2(x, y), velocity=Velocity2D(vx, vy))


def run(controller, ball, dt, ticks):
    now = 0.0
    events = []
    for _ in range(ticks):
        now += dt
        events.append(controller.update(ball, dt, now))
    return events


def test_integrates_position_from_velocity():
    ball = make_ball(1.0, 1.0, 2.0, -3.0)

    event = BallController().update(ball, 0.05, 0.05)

    assert event is BallEvent.NONE
    assert ball.position.x == 1.0 + 2.0 * 0.05
    assert ball.position.y == 1.0 + -3.0 * 0.05


def test_scoring_line_is_inclusive_for_player():
    line = COURT_DEPTH / 2 + SCORE_MARGIN

    assert (
        BallController().update(make_ball(y=line), 0.0, 0.0)
        is BallEvent.PLAYER_SCORED
    )
    assert (
        BallController().update(make_ball(y=line - 1), 0.0, 0.0)
        is BallEvent.NONE
    )


def test_scoring_line_is_inclusive_for_ai():
    line = COURT_DEPTH / 2 + SCORE_MARGIN

    assert (
        BallController().update(make_ball(y=-line), 0.0, 0.0)
        is BallEvent.AI_SCORED
    )
    assert (
        BallController().update(make_ball(y=-line + 1), 0.0, 0.0)
        is BallEvent.NONE
    )


def test_wall_bounce_inverts_lateral_velocity():
    ball = make_ball(x=5.95, vx=3.0, vy=1.0)

    event = BallController().update(ball, 0.0, 0.0)

    assert event is BallEvent.WALL
    assert ball.velocity.vx == -3.0
    assert ball.velocity.vy == 1.0
    assert ball.wall_cooldown


def test_wall_cooldown_blocks_double_bounce():
    controller = BallController()
    ball = make_ball(x=5.95, vx=3.0, vy=1.0)
    controller.update(ball, 0.0, 0.0)

    # still touching the wall 50 ms later
    ball.position.x = 5.95
    event = controller.update(ball, 0.0, 0.05)

    assert event is BallEvent.NONE
    assert ball.velocity.vx == -3.0


def test_near_parallel_wall_hit_is_steered_to_centre():
    ball = make_ball(x=5.95, vx=0.05, vy=3.0)
    speed = math.hypot(0.05, 3.0)

    event = BallController().update(ball, 0.0, 0.0)

    assert event is BallEvent.WALL
    assert ball.velocity.vx == pytest.approx(-0.4 * speed)
    assert ball.velocity.vy > 0
    assert math.hypot(ball.velocity.vx, ball.velocity.vy) == pytest.approx(
        speed
    )
    assert ball.position.x == pytest.approx(5.95 - ball.size)


def test_near_parallel_on_left_wall_pushes_right():
    ball = make_ball(x=-5.95, vx=-0.05, vy=-3.0)

    BallController().update(ball, 0.0, 0.0)

    assert ball.velocity.vx > 0
    assert ball.velocity.vy < 0
    assert ball.position.x == pytest.approx(-5.95 + ball.size)


def test_stuck_ball_is_reported_after_half_a_second():
    ball = make_ball(x=COURT_WIDTH / 2)

    events = run(BallController(), ball, 0.0625, 8)

    assert events.count(BallEvent.STUCK) == 1
    assert events[-1] is BallEvent.STUCK
    assert ball.out_of_bounds_since is None


def test_stuck_ball_not_reported_before_timeout():
    ball = make_ball(x=COURT_WIDTH / 2)

    events = run(BallController(), ball, 0.07, 7)

    assert BallEvent.STUCK not in events
    assert ball.out_of_bounds_since is not None


def test_returning_inside_clears_out_of_bounds_timer():
    controller = BallController()
    ball = make_ball(x=COURT_WIDTH / 2)
    controller.update(ball, 0.05, 0.05)
    assert ball.out_of_bounds_since is not None

    ball.position.x = 0.0
    controller.update(ball, 0.05, 0.1)

    assert ball.out_of_bounds_since is None
