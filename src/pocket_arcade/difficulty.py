"""
difficulty.py: Maps a difficulty level to reaction game tuning.
"""

from enum import Enum

from .constants import (
    GRAVITY, JUMP_STRENGTH, OBSTACLE_WIDTH, SPAWN_INTERVAL,
    PLAYER_SIZE, PLAYER_START_X_RATIO
)
from .data_models import FlappyConfig


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, text: str) -> "Difficulty":
        """Resolve a difficulty from its name, case-insensitively."""
        try:
            return cls(text.strip().lower())
        except ValueError:
            choices = ", ".join(d.value for d in cls)
            raise ValueError(f"Unknown difficulty {text!r} (expected one of: {choices})") from None


# (gap height, obstacle speed) per level
_TUNING = {
    Difficulty.EASY: (180.0, 2.0),
    Difficulty.MEDIUM: (150.0, 3.0),
    Difficulty.HARD: (120.0, 4.0),
}


def config_for(difficulty: Difficulty) -> FlappyConfig:
    gap_height, speed = _TUNING[difficulty]
    return FlappyConfig(
        gravity=GRAVITY,
        jump_strength=JUMP_STRENGTH,
        obstacle_width=OBSTACLE_WIDTH,
        gap_height=gap_height,
        obstacle_speed=speed,
        spawn_interval=SPAWN_INTERVAL,
        player_size=PLAYER_SIZE,
        player_start_x_ratio=PLAYER_START_X_RATIO,
    )
