"""
Player paddle control for Pong Rally.

Turns mouse or keyboard input into a control value in [-1, 1] and eases the
player paddle toward the matching lateral position.
"""

from __future__ import annotations

from pong_rally.constants import (
    KEY_REPEAT_INTERVAL,
    KEY_STEP,
    PADDLE_LIMIT,
    PLAYER_EASING,
)
from pong_rally.entities import Paddle


def clamp_control(value: float) -> float:
    """Clamp a control value to [-1, 1]."""
    return max(-1.0, min(1.0, value))


def mouse_control(mouse_x: float, viewport_width: float) -> float:
    """
    Map a mouse x coordinate to a control value.

    :param mouse_x: Horizontal mouse position in pixels.
    :type mouse_x: float

    :param viewport_width: Width of the window in pixels.
    :type viewport_width: float

    :return: -1 at the left edge, +1 at the right edge.
    :rtype: float
    """
    if viewport_width <= 0:
        return 0.0
    return clamp_control(mouse_x / viewport_width * 2 - 1)


class KeyboardControl:
    """
    Accumulates held left/right keys into a control value.

    Each full repeat interval a held key nudges the value by ``step``; time
    left over is carried into the next call.
    """

    def __init__(
        self,
        *,
        step: float = KEY_STEP,
        interval: float = KEY_REPEAT_INTERVAL,
    ):
        self.step = step
        self.interval = interval
        self.value = 0.0
        self._carry = 0.0

    def update(self, dt: float, *, left: bool, right: bool) -> float:
        """
        Advance the accumulator.

        :param dt: Seconds since the last call.
        :type dt: float

        :param left: Whether a move-left key is held.
        :type left: bool

        :param right: Whether a move-right key is held.
        :type right: bool

        :return: The current control value.
        :rtype: float
        """
        self._carry += max(0.0, dt)
        repeats = int(self._carry // self.interval)
        self._carry -= repeats * self.interval

        direction = (1.0 if right else 0.0) - (1.0 if left else 0.0)
        if repeats and direction:
            nudge = direction * self.step * repeats
            self.value = clamp_control(self.value + nudge)
        return self.value

    def reset(self, value: float = 0.0):
        """Set the control value, dropping any carried time."""
        self.value = clamp_control(value)
        self._carry = 0.0


class PlayerPaddleController:
    """Eases the player paddle toward the position the control asks for."""

    def __init__(self, paddle: Paddle, *, easing: float = PLAYER_EASING):
        """
        :param paddle: The paddle to control.
        :type paddle: Paddle

        :param easing: Fraction of the remaining distance covered per tick.
        :type easing: float
        """
        self.paddle = paddle
        self.easing = easing

    @staticmethod
    def target_for(control: float) -> float:
        """Lateral position a control value points at."""
        return clamp_control(control) * PADDLE_LIMIT

    def update(self, control: float):
        """
        Move the paddle one tick toward the control target.

        :param control: Control value in [-1, 1].
        :type control: float
        """
        target = self.target_for(control)
        self.paddle.position.x += (target - self.paddle.x) * self.easing
        self.paddle.clamp_to_court()
