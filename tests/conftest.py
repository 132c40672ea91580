import random

import pytest
from mini_arcade_core.bus import event_bus

from pong_rally.scenes.match.scene import MatchScene
from pong_rally.settings import MatchSettings


@pytest.fixture(autouse=True)
def clear_event_bus():
    # the bus is a process-wide singleton
    event_bus.clear()
    yield
    event_bus.clear()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def settings():
    return MatchSettings(base_ball_speed=6.0, ai_difficulty=0.5)


@pytest.fixture
def scene(settings, rng):
    match = MatchScene(settings, rng=rng)
    match.start()
    return match


@pytest.fixture
def recorded():
    """Collect bus events as (event_type, kwargs) tuples."""
    events = []

    def listen(event_type):
        event_bus.on(
            event_type, lambda **kwargs: events.append((event_type, kwargs))
        )

    for name in (
        "score",
        "out_of_bounds",
        "paddle_hit",
        "wall_hit",
        "game_over",
    ):
        listen(name)
    return events
