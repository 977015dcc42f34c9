"""
constants.py: Centralized configuration for both games, storage and the shell.
"""

# -------- Time Config --------
TICK_RATE = 60                  # Reaction game ticks per second
TICK_TIME = 1.0 / TICK_RATE     # Fixed time step
RENDER_FPS = 60

# -------- Play Area Config --------
SCREEN_WIDTH = 480
SCREEN_HEIGHT = 800
FLAPPY_AREA_HEIGHT = 400        # Play area used by the desktop shell

# -------- Obstacle Config --------
GAP_MARGIN = 80                 # Minimum distance of a gap from the top/bottom edge
SPAWN_TRIGGER_RATIO = 0.6       # Last obstacle must be left of this share of the width
OFFSCREEN_SPAWN_OFFSET = 0.5    # New obstacles start half their width past the right edge

# -------- Physics Config (pixels / tick) --------
GRAVITY = 0.35
JUMP_STRENGTH = -7.0            # Absolute velocity set by a jump
OBSTACLE_WIDTH = 60.0
SPAWN_INTERVAL = 1.8            # seconds
PLAYER_SIZE = 30.0
PLAYER_START_X_RATIO = 0.25

# -------- Gomoku Config --------
BOARD_SIZE = 15
WIN_CONDITION = 5

# -------- Storage Config --------
DB_FILE = "pocket_arcade.db"
CACHE_VALIDITY = 3600.0         # seconds
