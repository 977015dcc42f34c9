"""
data_models.py: Data structures for the game state of both games.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Tuple

from .constants import BOARD_SIZE, WIN_CONDITION
from .physics_core import Rect


# ---------- Reaction Game ----------

@dataclass(frozen=True)
class FlappyConfig:
    """Tuning set captured once per game."""
    gravity: float
    jump_strength: float
    obstacle_width: float
    gap_height: float
    obstacle_speed: float
    spawn_interval: float       # seconds between spawns
    player_size: float
    player_start_x_ratio: float


class FlappyPhase(Enum):
    READY = auto()
    PLAYING = auto()
    PAUSED = auto()
    GAME_OVER = auto()


@dataclass(frozen=True)
class GameOverResult:
    final_score: int
    is_new_best: bool


@dataclass
class PlayerBody:
    """The player square, positioned by its centre."""
    x: float
    y: float
    size: float
    velocity: float = 0.0

    @property
    def rect(self) -> Rect:
        return Rect(self.x - self.size / 2, self.y - self.size / 2, self.size, self.size)

    def apply_gravity(self, gravity: float):
        self.velocity += gravity
        self.y += self.velocity

    def jump(self, strength: float):
        self.velocity = strength

    def reset_to(self, x: float, y: float):
        self.x = x
        self.y = y
        self.velocity = 0.0


@dataclass
class Obstacle:
    """A pipe pair: blocking above gap_y and below gap_y + gap_height."""
    id: int
    x: float                    # horizontal centre
    gap_y: float
    gap_height: float
    width: float
    scored: bool = False

    @property
    def gap_bottom(self) -> float:
        return self.gap_y + self.gap_height

    @property
    def left(self) -> float:
        return self.x - self.width / 2

    @property
    def right(self) -> float:
        return self.x + self.width / 2

    def bottom_height(self, area_height: float) -> float:
        return area_height - self.gap_bottom


@dataclass(frozen=True)
class ObstacleView:
    id: int
    x: float
    gap_y: float
    gap_height: float
    width: float
    scored: bool


@dataclass(frozen=True)
class FlappySnapshot:
    """Immutable copy of the reaction game state for observers."""
    phase: FlappyPhase
    score: int
    player_x: float
    player_y: float
    velocity: float
    obstacles: Tuple[ObstacleView, ...]
    result: Optional[GameOverResult]


# ---------- Strategy Game ----------

class Stone(Enum):
    BLACK = "black"
    WHITE = "white"

    @property
    def opponent(self) -> "Stone":
        return Stone.WHITE if self is Stone.BLACK else Stone.BLACK


class Winner(Enum):
    BLACK = "black"
    WHITE = "white"
    DRAW = "draw"

    @classmethod
    def from_stone(cls, stone: Stone) -> "Winner":
        return cls.BLACK if stone is Stone.BLACK else cls.WHITE


@dataclass(frozen=True)
class BoardPosition:
    row: int
    col: int

    @classmethod
    def from_index(cls, index: int, board_size: int) -> "BoardPosition":
        return cls(index // board_size, index % board_size)

    def to_index(self, board_size: int) -> int:
        return self.row * board_size + self.col

    def is_valid(self, board_size: int) -> bool:
        return 0 <= self.row < board_size and 0 <= self.col < board_size


@dataclass(frozen=True)
class Move:
    position: BoardPosition
    player: Stone
    move_number: int


@dataclass(frozen=True)
class BoardConfig:
    size: int = BOARD_SIZE
    win_condition: int = WIN_CONDITION

    @property
    def total_cells(self) -> int:
        return self.size * self.size


class Direction(Enum):
    """Line directions scanned by the win check, as (d_row, d_col)."""
    HORIZONTAL = (0, 1)
    VERTICAL = (1, 0)
    DIAGONAL_DOWN = (1, 1)
    DIAGONAL_UP = (1, -1)


@dataclass(frozen=True)
class GomokuOutcome:
    @property
    def is_terminal(self) -> bool:
        return False


@dataclass(frozen=True)
class InProgress(GomokuOutcome):
    current_player: Stone


@dataclass(frozen=True)
class Won(GomokuOutcome):
    winner: Stone

    @property
    def is_terminal(self) -> bool:
        return True


@dataclass(frozen=True)
class Draw(GomokuOutcome):
    @property
    def is_terminal(self) -> bool:
        return True


@dataclass(frozen=True)
class GomokuSnapshot:
    board: Tuple[Tuple[Optional[Stone], ...], ...]
    outcome: GomokuOutcome
    move_count: int
    last_move: Optional[BoardPosition]
    winning_positions: Tuple[BoardPosition, ...]


# ---------- Stats ----------

@dataclass(frozen=True)
class FlappyStats:
    best_score: int = 0
    games_played: int = 0
    total_score: int = 0

    @property
    def average_score(self) -> float:
        if self.games_played == 0:
            return 0.0
        return self.total_score / self.games_played


@dataclass(frozen=True)
class GomokuStats:
    black_wins: int = 0
    white_wins: int = 0
    draws: int = 0
    total_games: int = 0

    @property
    def black_win_rate(self) -> float:
        if self.total_games == 0:
            return 0.0
        return self.black_wins / self.total_games * 100

    @property
    def white_win_rate(self) -> float:
        if self.total_games == 0:
            return 0.0
        return self.white_wins / self.total_games * 100
