"""
Match scene Model
"""

from __future__ import annotations

from dataclasses import dataclass, field

from mini_arcade_core.scenes.sim_scene import (  # pyright: ignore[reportMissingImports]
    BaseIntent,
    BaseTickContext,
    BaseWorld,
)

from pong_rally.constants import WINDOW_SIZE
from pong_rally.controllers.ball import BallEvent
from pong_rally.entities import Ball, Paddle, Side


@dataclass
class ScoreState:
    """
    Score state for the match scene.

    :ivar player (int): Points won by the human player.
    :ivar ai (int): Points won by the AI.
    """

    player: int = 0
    ai: int = 0

    def award(self, side: Side):
        """Give one point to ``side``."""
        if side is Side.PLAYER:
            self.player += 1
        else:
            self.ai += 1

    def to_tuple(self) -> tuple[int, int]:
        """Score as ``(player, ai)``."""
        return (self.player, self.ai)


@dataclass
class MatchWorld(BaseWorld):
    """
    Match world state.

    Paddles and ball are held as named fields; the engine ``entities`` list
    stays empty.

    :ivar player_paddle (Paddle): Human paddle on the near end line.
    :ivar ai_paddle (Paddle): CPU paddle on the far end line.
    :ivar ball (Ball): Ball entity, replaced at every serve.
    :ivar score (ScoreState): Current score state.
    :ivar viewport (tuple[float, float]): Window size for mouse mapping.
    :ivar started (bool): Whether the match is running.
    :ivar paused (bool): Whether the match is frozen.
    :ivar clock (float): Simulation clock, frozen while not running.
    :ivar rally_difficulty (int): Player hits since the last serve.
    :ivar last_hit_by (Side | None): Paddle that touched the ball last on
        this approach.
    :ivar control (float): Player control value in [-1, 1].
    """

    player_paddle: Paddle
    ai_paddle: Paddle
    ball: Ball
    score: ScoreState = field(default_factory=ScoreState)
    viewport: tuple[float, float] = WINDOW_SIZE
    started: bool = False
    paused: bool = False
    clock: float = 0.0
    rally_difficulty: int = 0
    last_hit_by: Side | None = None
    control: float = 0.0

    @property
    def running(self) -> bool:
        """Whether physics should advance this tick."""
        return self.started and not self.paused

    def paddle_for(self, side: Side) -> Paddle:
        """Paddle defending ``side``."""
        return self.player_paddle if side is Side.PLAYER else self.ai_paddle


@dataclass(frozen=True)
class MatchIntent(BaseIntent):
    """
    Player intent for the match scene.

    :ivar control (float): Paddle control, -1.0 (left) to +1.0 (right).
    :ivar pause (bool): Whether to toggle pause.
    """

    control: float = 0.0
    pause: bool = False


@dataclass
class MatchTickContext(BaseTickContext[MatchWorld, MatchIntent]):
    """
    Context for a match scene tick.

    :ivar input_frame (InputFrame): Current input frame.
    :ivar dt (float): Delta time since last tick, clamped by the clock
        system.

    :ivar world (MatchWorld): Current match world state.
    :ivar commands (CommandQueue): Command queue.

    :ivar intent (Optional[MatchIntent]): Player intent for this tick.
    :ivar ball_event (BallEvent): What the ball did this tick.
    """

    ball_event: BallEvent = BallEvent.NONE


@dataclass(frozen=True)
class MatchSnapshot:
    """
    Read-only view of the match after a tick.

    :ivar ball_position (tuple[float, float]): Ball ``(x, z)``.
    :ivar ball_height (float): Ball height above the floor.
    :ivar player_paddle_x (float): Player paddle lateral position.
    :ivar ai_paddle_x (float): AI paddle lateral position.
    :ivar score (tuple[int, int]): ``(player, ai)``.
    :ivar rally_difficulty (int): Player hits in the current rally.
    :ivar ball_speed (float): Current rally speed.
    :ivar started (bool): Whether the match is running.
    :ivar paused (bool): Whether the match is frozen.
    """

    ball_position: tuple[float, float]
    ball_height: float
    player_paddle_x: float
    ai_paddle_x: float
    score: tuple[int, int]
    rally_difficulty: int
    ball_speed: float
    started: bool
    paused: bool

    @classmethod
    def from_world(cls, world: MatchWorld) -> "MatchSnapshot":
        """Capture the current state of ``world``."""
        return cls(
            ball_position=world.ball.position.to_tuple(),
            ball_height=world.ball.height,
            player_paddle_x=world.player_paddle.x,
            ai_paddle_x=world.ai_paddle.x,
            score=world.score.to_tuple(),
            rally_difficulty=world.rally_difficulty,
            ball_speed=world.ball.speed,
            started=world.started,
            paused=world.paused,
        )
