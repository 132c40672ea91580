"""
Match session: game-over detection and win/loss tallies around a match
scene.
"""

from __future__ import annotations

import random
from dataclasses import asdict, dataclass
from typing import Any

from mini_arcade_core.runtime.input_frame import InputFrame
from mini_arcade_core.utils import logger

from pong_rally.entities import Side
from pong_rally.scenes.match.models import MatchSnapshot
from pong_rally.scenes.match.scene import MatchScene
from pong_rally.settings import MatchSettings


def _counter(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return int(value) if value >= 0 else 0


@dataclass
class MatchStats:
    """
    Games won and lost by the player.

    :ivar wins (int): Games won by the player.
    :ivar losses (int): Games won by the AI.
    """

    wins: int = 0
    losses: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "MatchStats":
        """
        Build stats from a mapping, replacing invalid counters with 0.

        :param data: The input data to parse.
        :type data: dict or None

        :return: Parsed stats.
        :rtype: MatchStats
        """
        if not isinstance(data, dict):
            return cls()
        return cls(
            wins=_counter(data.get("wins")),
            losses=_counter(data.get("losses")),
        )

    def to_dict(self) -> dict[str, int]:
        """Plain mapping of the stats."""
        return asdict(self)

    def record(self, winner: Side):
        """Count a finished game."""
        if winner is Side.PLAYER:
            self.wins += 1
        else:
            self.losses += 1

    def reset(self):
        """Clear both counters."""
        self.wins = 0
        self.losses = 0


class MatchSession:
    """
    Runs games to ``settings.win_score`` on top of a :class:`MatchScene`.

    The session listens to its own scene's ``score`` events. The first
    side to reach the win score ends the game once; the scene is stopped
    and ``game_over`` is emitted through it.
    """

    def __init__(
        self,
        settings: MatchSettings | None = None,
        *,
        stats: MatchStats | None = None,
        rng: random.Random | None = None,
    ):
        """
        :param settings: Match settings shared with the scene.
        :type settings: MatchSettings, optional

        :param stats: Running win/loss tallies.
        :type stats: MatchStats, optional

        :param rng: Random source for the scene.
        :type rng: random.Random, optional
        """
        self.settings = settings or MatchSettings()
        self.stats = stats or MatchStats()
        self.scene = MatchScene(self.settings, rng=rng)
        self.winner: Side | None = None

        self.scene.events.on("score", self._on_score)

    @property
    def game_over(self) -> bool:
        """Whether the current game has a winner."""
        return self.winner is not None

    def start(self):
        """Start the current game."""
        if self.game_over:
            return
        self.scene.start()

    def new_game(self):
        """Throw away the current game and set up a fresh one."""
        self.winner = None
        self.scene.reset()
        logger.info("New game ready")

    def tick(
        self, dt: float, input_frame: InputFrame | None = None
    ) -> MatchSnapshot:
        """
        Advance the current game by one tick.

        After game over the scene is no longer ticked and the final state is
        returned as is.
        """
        if self.game_over:
            return self.scene.snapshot()
        return self.scene.tick(dt, input_frame)

    # Justification: scene handlers receive every keyword the scene emits
    # pylint: disable=unused-argument
    def _on_score(
        self,
        *,
        scene: object,
        scorer: Side,
        player_score: int,
        ai_score: int,
        **kwargs,
    ):
        if self.game_over:
            return

        win = self.settings.win_score
        if player_score >= win:
            self._finish(Side.PLAYER, player_score, ai_score)
        elif ai_score >= win:
            self._finish(Side.AI, player_score, ai_score)

    # pylint: enable=unused-argument

    def _finish(self, winner: Side, player_score: int, ai_score: int):
        self.winner = winner
        self.stats.record(winner)
        self.scene.stop()
        logger.info(
            f"Game over, {winner.value} wins {player_score}-{ai_score} "
            f"(record {self.stats.wins}-{self.stats.losses})"
        )
        self.scene.events.emit(
            "game_over",
            winner=winner,
            player_score=player_score,
            ai_score=ai_score,
        )
