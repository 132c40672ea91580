"""
Entities package for Pong Rally.
This package contains the ball and paddle state used by the match.
"""

from __future__ import annotations

from .ball import Ball
from .paddle import Paddle, Side

__all__ = [
    "Ball",
    "Paddle",
    "Side",
]
