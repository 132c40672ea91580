"""
Match scene: wires paddles, ball and rules into one ordered tick.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Callable

from mini_arcade_core.backend.keys import Key
from mini_arcade_core.bus import event_bus
from mini_arcade_core.engine.commands import CommandQueue
from mini_arcade_core.runtime.input_frame import InputFrame
from mini_arcade_core.scenes.systems import SystemPipeline
from mini_arcade_core.spaces.d2.physics2d import Velocity2D
from mini_arcade_core.spaces.math.vec2 import Vec2
from mini_arcade_core.utils import logger

from pong_rally.constants import (
    AI_PADDLE_Z,
    AI_REBOUND_SPREAD,
    COURT_DEPTH,
    MAX_BALL_SPEED,
    MAX_FRAME_DT,
    PLAYER_PADDLE_Z,
    PLAYER_REBOUND_SPREAD,
    SPEED_RAMP,
)
from pong_rally.controllers.ball import BallController, BallEvent
from pong_rally.controllers.cpu import CpuConfig, CpuPaddleController
from pong_rally.controllers.player import (
    KeyboardControl,
    PlayerPaddleController,
    clamp_control,
    mouse_control,
)
from pong_rally.entities import Ball, Paddle, Side
from pong_rally.scenes.match.models import (
    MatchIntent,
    MatchSnapshot,
    MatchTickContext,
    MatchWorld,
)
from pong_rally.settings import MatchSettings

LEFT_KEYS = (Key.LEFT, Key.A)
RIGHT_KEYS = (Key.RIGHT, Key.D)
PAUSE_KEYS = (Key.ESCAPE, Key.P)

# Mid-court band where the last-hit guard is released
MID_COURT = COURT_DEPTH / 4


EVENT_HANDLER = Callable[..., None]


@dataclass
class MatchEvents:
    """
    Publishes match events, tagged with the emitting scene.

    Handlers registered with :meth:`on` belong to this scene only and are
    dropped with it. Every event is also published on the engine's global
    ``event_bus`` for hosts that listen there.
    """

    source: object
    handlers: dict[str, list[EVENT_HANDLER]] = field(default_factory=dict)

    def on(self, event_type: str, handler: EVENT_HANDLER):
        """Call ``handler`` for every ``event_type`` this scene emits."""
        self.handlers.setdefault(event_type, []).append(handler)

    def emit(self, event_type: str, **kwargs):
        """Emit ``event_type`` with ``scene=source`` added."""
        for handler in list(self.handlers.get(event_type, ())):
            handler(scene=self.source, **kwargs)
        event_bus.emit(event_type, scene=self.source, **kwargs)


def serve_straight(world: MatchWorld, speed: float, toward: Side):
    """
    Place a fresh ball on the centre spot moving straight down the centre
    line toward ``toward``.
    """
    vz = -speed if toward is Side.PLAYER else speed
    world.ball = Ball(velocity=Velocity2D(0.0, vz), speed=speed)
    world.rally_difficulty = 0
    world.last_hit_by = None


def serve_at_paddle(world: MatchWorld, speed: float, toward: Side):
    """
    Place a fresh ball on the centre spot aimed at the current position of
    the paddle defending ``toward``.

    :param world: Match world to update.
    :type world: MatchWorld

    :param speed: Serve speed in units per second.
    :type speed: float

    :param toward: Side that receives the serve.
    :type toward: Side
    """
    target = world.paddle_for(toward).position
    distance = math.hypot(target.x, target.y)
    world.ball = Ball(
        velocity=Velocity2D(
            target.x / distance * speed, target.y / distance * speed
        ),
        speed=speed,
    )
    world.rally_difficulty = 0
    world.last_hit_by = None


@dataclass
class MatchInputSystem:
    """
    Process input and update intent.

    A collaborator-supplied ``move_x`` axis wins over the mouse, which wins
    over held keys; held keys always nudge the resulting value.
    """

    settings: MatchSettings
    keyboard: KeyboardControl = field(default_factory=KeyboardControl)
    name: str = "match_input"
    order: int = 10

    def _base_control(self, ctx: MatchTickContext) -> float:
        frame = ctx.input_frame
        if "move_x" in frame.axes:
            return clamp_control(frame.axes["move_x"])
        if self.settings.mouse_control and frame.mouse_delta != (0, 0):
            return mouse_control(frame.mouse_pos[0], ctx.world.viewport[0])
        return ctx.world.control

    def step(self, ctx: MatchTickContext):
        """Process input and update intent."""
        frame = ctx.input_frame
        down = frame.keys_down

        self.keyboard.value = self._base_control(ctx)
        control = self.keyboard.update(
            ctx.dt,
            left=any(k in down for k in LEFT_KEYS),
            right=any(k in down for k in RIGHT_KEYS),
        )
        ctx.world.control = control

        ctx.intent = MatchIntent(
            control=control,
            pause=any(k in frame.keys_pressed for k in PAUSE_KEYS),
        )


@dataclass
class MatchPauseSystem:
    """Toggle pause when the pause intent is triggered."""

    name: str = "match_pause"
    order: int = 12  # right after input

    def step(self, ctx: MatchTickContext):
        """Toggle pause if requested."""
        if not ctx.intent or not ctx.intent.pause:
            return
        if not ctx.world.started:
            return

        ctx.world.paused = not ctx.world.paused
        logger.info("Match paused" if ctx.world.paused else "Match resumed")


@dataclass
class MatchClockSystem:
    """Advance the simulation clock while the match is running."""

    name: str = "match_clock"
    order: int = 14  # after pause, before anything that reads the clock

    def step(self, ctx: MatchTickContext):
        """Advance the clock by the clamped dt."""
        if not ctx.world.running:
            return
        ctx.world.clock += ctx.dt


@dataclass
class PlayerPaddleSystem:
    """Ease the player paddle toward the control target."""

    controller: PlayerPaddleController
    name: str = "match_player_paddle"
    order: int = 20

    def step(self, ctx: MatchTickContext):
        """Move the player paddle."""
        if not ctx.world.running or ctx.intent is None:
            return
        self.controller.update(ctx.intent.control)


@dataclass
class CpuPaddleSystem:
    """Let the CPU chase the ball."""

    controller: CpuPaddleController
    settings: MatchSettings
    name: str = "match_cpu_paddle"
    order: int = 21

    def step(self, ctx: MatchTickContext):
        """Move the CPU paddle."""
        world = ctx.world
        if not world.running:
            return
        self.controller.update(
            world.ball.position.x,
            world.clock,
            base_difficulty=self.settings.ai_difficulty,
            rally_difficulty=world.rally_difficulty,
        )


@dataclass
class BallMovementSystem:
    """
    Move the ball and resolve side walls and end lines.
    """

    controller: BallController
    events: MatchEvents
    name: str = "match_ball_move"
    order: int = 30

    def step(self, ctx: MatchTickContext):
        """Move the ball based on its velocity."""
        world = ctx.world
        if not world.running:
            return

        ctx.ball_event = self.controller.update(
            world.ball, ctx.dt, world.clock
        )
        if ctx.ball_event is BallEvent.WALL:
            self.events.emit("wall_hit")


@dataclass
class PaddleCollisionSystem:
    """
    Handle ball contact with both paddles at their current positions.
    """

    events: MatchEvents
    name: str = "match_paddle_collision"
    order: int = 40

    def _rebound(self, world: MatchWorld, side: Side):
        ball = world.ball
        paddle = world.paddle_for(side)

        ball.speed = min(ball.speed * SPEED_RAMP, MAX_BALL_SPEED)
        offset = paddle.hit_offset(ball.position)

        if side is Side.PLAYER:
            ball.velocity = Velocity2D(
                ball.speed * offset * PLAYER_REBOUND_SPREAD, ball.speed
            )
            world.rally_difficulty += 1
        else:
            ball.velocity = Velocity2D(
                ball.speed * offset * AI_REBOUND_SPREAD, -ball.speed
            )
        world.last_hit_by = side

        logger.debug(
            f"{side.value} hit at offset {offset:+.2f}, speed "
            f"{ball.speed:.2f}, rally difficulty {world.rally_difficulty}"
        )
        self.events.emit(
            "paddle_hit",
            side=side,
            speed=ball.speed,
            rally_difficulty=world.rally_difficulty,
        )

    def step(self, ctx: MatchTickContext):
        """Rebound the ball off any paddle it touches."""
        world = ctx.world
        if not world.running or ctx.ball_event not in (
            BallEvent.NONE,
            BallEvent.WALL,
        ):
            return

        ball = world.ball
        for side in (Side.PLAYER, Side.AI):
            if world.last_hit_by is side:
                continue
            if world.paddle_for(side).reaches(ball.position, ball.size):
                self._rebound(world, side)

        if abs(ball.position.y) < MID_COURT:
            world.last_hit_by = None


@dataclass
class MatchRulesSystem:
    """
    Apply match rules: scoring, stuck balls and serves.
    """

    settings: MatchSettings
    events: MatchEvents
    name: str = "match_rules"
    order: int = 50

    def _point(self, world: MatchWorld, scorer: Side):
        world.score.award(scorer)
        loser = Side.AI if scorer is Side.PLAYER else Side.PLAYER
        serve_at_paddle(world, self.settings.base_ball_speed, loser)

        player, ai = world.score.to_tuple()
        logger.info(f"Point to {scorer.value}: {player}-{ai}")
        self.events.emit(
            "score", scorer=scorer, player_score=player, ai_score=ai
        )

    def _stuck(self, world: MatchWorld):
        serve_to = Side.PLAYER if world.ball.position.y < 0 else Side.AI
        logger.info(
            f"Ball stuck at x={world.ball.position.x:.2f}, "
            f"serving to {serve_to.value}"
        )
        serve_at_paddle(world, self.settings.base_ball_speed, serve_to)
        self.events.emit("out_of_bounds", serve_to=serve_to)

    def step(self, ctx: MatchTickContext):
        """Apply match rules."""
        if ctx.ball_event is BallEvent.PLAYER_SCORED:
            self._point(ctx.world, Side.PLAYER)
        elif ctx.ball_event is BallEvent.AI_SCORED:
            self._point(ctx.world, Side.AI)
        elif ctx.ball_event is BallEvent.STUCK:
            self._stuck(ctx.world)


class MatchScene:
    """
    Owns the match world and runs its systems once per tick.

    Systems run in a fixed order: input, pause, clock, player paddle, CPU
    paddle, ball movement, paddle collision, rules.
    """

    def __init__(
        self,
        settings: MatchSettings | None = None,
        *,
        rng: random.Random | None = None,
        cpu_config: CpuConfig | None = None,
    ):
        """
        :param settings: Match settings, read live every tick.
        :type settings: MatchSettings, optional

        :param rng: Random source for serves and the CPU.
        :type rng: random.Random, optional

        :param cpu_config: CPU tuning.
        :type cpu_config: CpuConfig, optional
        """
        self.settings = settings or MatchSettings()
        self.rng = rng or random.Random()
        self.cpu_config = cpu_config
        self.events = MatchEvents(source=self)
        self._frame_index = 0
        self._setup()

    def _setup(self):
        speed = self.settings.base_ball_speed
        self.world = MatchWorld(
            entities=[],
            player_paddle=Paddle(Side.PLAYER, Vec2(0.0, PLAYER_PADDLE_Z)),
            ai_paddle=Paddle(Side.AI, Vec2(0.0, AI_PADDLE_Z)),
            ball=Ball(speed=speed),
        )
        serve_straight(self.world, speed, self._random_side())

        self.player_controller = PlayerPaddleController(
            self.world.player_paddle
        )
        self.cpu_controller = CpuPaddleController(
            self.world.ai_paddle, config=self.cpu_config, rng=self.rng
        )
        self.systems = SystemPipeline[MatchTickContext]()
        self.systems.extend(
            [
                MatchInputSystem(self.settings),
                MatchPauseSystem(),
                MatchClockSystem(),
                PlayerPaddleSystem(self.player_controller),
                CpuPaddleSystem(self.cpu_controller, self.settings),
                BallMovementSystem(BallController(), self.events),
                PaddleCollisionSystem(self.events),
                MatchRulesSystem(self.settings, self.events),
            ]
        )

    def _random_side(self) -> Side:
        return Side.PLAYER if self.rng.random() < 0.5 else Side.AI

    def start(self):
        """Start the match with a straight serve to a random side."""
        if self.world.started:
            return
        self.world.started = True
        self.world.paused = False
        side = self._random_side()
        serve_straight(self.world, self.settings.base_ball_speed, side)
        logger.info(f"Match started, serving to {side.value}")

    def stop(self):
        """Stop the match; the world stays frozen as it is."""
        self.world.started = False
        self.world.paused = False

    def pause(self):
        """Freeze the match."""
        if self.world.started and not self.world.paused:
            self.world.paused = True
            logger.info("Match paused")

    def resume(self):
        """Continue a paused match from where it froze."""
        if self.world.paused:
            self.world.paused = False
            logger.info("Match resumed")

    def reset(self):
        """Rebuild the match from scratch: scores 0, not started."""
        self._setup()
        logger.info("Match reset")

    def serve(self, toward: Side):
        """Serve a fresh ball at the paddle defending ``toward``."""
        serve_at_paddle(self.world, self.settings.base_ball_speed, toward)

    def snapshot(self) -> MatchSnapshot:
        """Current state of the match."""
        return MatchSnapshot.from_world(self.world)

    def tick(
        self, dt: float, input_frame: InputFrame | None = None
    ) -> MatchSnapshot:
        """
        Run one simulation tick.

        :param dt: Seconds since the previous tick; clamped to
            ``MAX_FRAME_DT``.
        :type dt: float

        :param input_frame: Input for this tick.
        :type input_frame: InputFrame, optional

        :return: State of the match after the tick.
        :rtype: MatchSnapshot
        """
        dt = max(0.0, min(dt, MAX_FRAME_DT))
        self._frame_index += 1
        frame = input_frame or InputFrame(
            frame_index=self._frame_index, dt=dt
        )

        ctx = MatchTickContext(
            input_frame=frame,
            dt=dt,
            world=self.world,
            commands=CommandQueue(),
        )
        self.systems.step(ctx)
        return self.snapshot()

