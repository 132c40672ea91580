import gc
import weakref

import pytest
from mini_arcade_core.spaces.math.vec2 import Vec2

from pong_rally.constants import COURT_DEPTH
from pong_rally.entities import Side
from pong_rally.session import MatchSession, MatchStats
from pong_rally.settings import MatchSettings

SCORE_Y = COURT_DEPTH / 2 + 1


@pytest.fixture
def session(rng):
    match = MatchSession(MatchSettings(win_score=3), rng=rng)
    match.start()
    return match


def score_point(session, scorer):
    y = SCORE_Y if scorer is Side.PLAYER else -SCORE_Y
    session.scene.world.ball.position = Vec2(0.0, y)
    return session.tick(0.0)


def test_points_below_win_score_keep_playing(session):
    score_point(session, Side.PLAYER)
    snap = score_point(session, Side.AI)

    assert snap.score == (1, 1)
    assert not session.game_over
    assert session.scene.world.started


def test_reaching_win_score_ends_game_once(session, recorded):
    for _ in range(3):
        score_point(session, Side.AI)

    assert session.game_over
    assert session.winner is Side.AI
    assert session.stats == MatchStats(wins=0, losses=1)
    assert not session.scene.world.started

    over = [kw for name, kw in recorded if name == "game_over"]
    assert over == [
        {
            "scene": session.scene,
            "winner": Side.AI,
            "player_score": 0,
            "ai_score": 3,
        }
    ]


def test_ticks_after_game_over_return_final_state(session):
    for _ in range(3):
        score_point(session, Side.PLAYER)
    final = session.tick(0.1)

    assert session.tick(0.1) == final
    assert final.score == (3, 0)
    assert session.stats.wins == 1


def test_start_is_ignored_after_game_over(session):
    for _ in range(3):
        score_point(session, Side.PLAYER)

    session.start()

    assert not session.scene.world.started


def test_new_game_keeps_stats(session):
    for _ in range(3):
        score_point(session, Side.PLAYER)

    session.new_game()
    session.start()
    snap = score_point(session, Side.AI)

    assert not session.game_over
    assert snap.score == (0, 1)
    assert session.stats.wins == 1


def test_other_scenes_do_not_end_the_game(session, rng):
    other = MatchSession(MatchSettings(win_score=1), rng=rng)
    other.start()

    score_point(other, Side.PLAYER)

    assert other.game_over
    assert not session.game_over


def test_stats_record_and_reset():
    stats = MatchStats()
    stats.record(Side.PLAYER)
    stats.record(Side.AI)
    stats.record(Side.AI)

    assert stats.to_dict() == {"wins": 1, "losses": 2}

    stats.reset()
    assert stats == MatchStats()


@pytest.mark.parametrize(
    "data, expected",
    [
        ({"wins": 4, "losses": 2}, MatchStats(4, 2)),
        ({"wins": -1, "losses": "x"}, MatchStats(0, 0)),
        ({"wins": True}, MatchStats(0, 0)),
        (None, MatchStats(0, 0)),
    ],
)
def test_stats_from_dict(data, expected):
    assert MatchStats.from_dict(data) == expected


def test_discarded_sessions_are_released(rng):
    refs = [weakref.ref(MatchSession(rng=rng)) for _ in range(20)]
    gc.collect()

    assert all(ref() is None for ref in refs)


def test_game_over_still_reaches_global_listeners_after_many_sessions(
    rng, recorded
):
    for _ in range(10):
        MatchSession(rng=rng).start()
    match = MatchSession(MatchSettings(win_score=1), rng=rng)
    match.start()

    score_point(match, Side.PLAYER)

    over = [kw for name, kw in recorded if name == "game_over"]
    assert len(over) == 1
    assert over[0]["scene"] is match.scene
