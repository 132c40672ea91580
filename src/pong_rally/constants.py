"""
Court geometry and tuning constants for Pong Rally.

The court lies on the x (lateral) / y (depth) plane. The player defends the
negative depth end, the AI the positive one.
"""

from __future__ import annotations

# Court and entity dimensions (court units)
COURT_WIDTH = 12.0
COURT_DEPTH = 12.0
PADDLE_WIDTH = 2.5  # lateral extent
PADDLE_HEIGHT = 0.3  # visual thickness only
PADDLE_DEPTH = 0.5
BALL_SIZE = 0.2
BALL_HEIGHT = 0.3  # fixed visual height above the floor

# Paddles move on fixed depth lines one unit in from each end
PLAYER_PADDLE_Z = -COURT_DEPTH / 2 + 1
AI_PADDLE_Z = COURT_DEPTH / 2 - 1
PADDLE_LIMIT = COURT_WIDTH / 2 - PADDLE_WIDTH / 2

# Ball speed in units per second
BALL_SPEED = 6.0
MAX_BALL_SPEED = 28.0
MIN_BASE_BALL_SPEED = 1.0
MAX_BASE_BALL_SPEED = 50.0
SPEED_RAMP = 1.08

# Rebound fan-out per side
PLAYER_REBOUND_SPREAD = 0.7
AI_REBOUND_SPREAD = 0.5

# Timing (seconds of simulated time)
MAX_FRAME_DT = 0.1
WALL_COOLDOWN = 0.1
STUCK_TIMEOUT = 0.5

# Wall unstick policy
PARALLEL_RATIO = 0.3
UNSTICK_RATIO = 0.4

# Distance past an end line before a point is awarded
SCORE_MARGIN = 1.0

# Paddle control
PLAYER_EASING = 0.1
KEY_STEP = 0.05
KEY_REPEAT_INTERVAL = 0.016
AI_SPEED = 0.07  # units per tick
AI_RESAMPLE_INTERVAL = 1.0

WIN_SCORE = 11

WINDOW_SIZE = (1280, 720)
