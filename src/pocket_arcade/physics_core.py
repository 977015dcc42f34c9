"""
physics_core.py: Shared deterministic geometry and collision logic.

All checks are axis-aligned with exact float comparisons. Edges that merely
touch count as overlapping horizontally.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .data_models import Obstacle


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle; y grows downward."""
    x: float
    y: float
    width: float
    height: float

    @property
    def min_x(self) -> float:
        return self.x

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def min_y(self) -> float:
        return self.y

    @property
    def max_y(self) -> float:
        return self.y + self.height


def horizontally_overlaps(a: Rect, b: Rect) -> bool:
    return not (a.max_x < b.min_x or a.min_x > b.max_x)


def vertically_overlaps(a: Rect, b: Rect) -> bool:
    return not (a.max_y < b.min_y or a.min_y > b.max_y)


def rects_overlap(a: Rect, b: Rect) -> bool:
    return horizontally_overlaps(a, b) and vertically_overlaps(a, b)


def escapes_gap(rect: Rect, gap_top: float, gap_bottom: float) -> bool:
    """True when any part of rect lies above gap_top or below gap_bottom."""
    return rect.min_y < gap_top or rect.max_y > gap_bottom


def out_of_vertical_bounds(rect: Rect, height: float) -> bool:
    return rect.min_y < 0 or rect.max_y > height


def hits_obstacle(player: Rect, obstacle: "Obstacle") -> bool:
    """
    Checks the player against an obstacle's top and bottom blocks.
    Only the obstacle's horizontal band matters for alignment; the blocks
    extend to the play area edges, so leaving the gap vertically is a hit.
    """
    band = Rect(obstacle.left, player.min_y, obstacle.width, player.height)
    if not horizontally_overlaps(player, band):
        return False
    return escapes_gap(player, obstacle.gap_y, obstacle.gap_bottom)


# ---------- Board Geometry ----------

def cell_size(width: float, height: float, grid_size: int, padding: float = 0) -> float:
    """Largest square cell size that fits a grid_size x grid_size board."""
    min_dimension = min(width - padding * 2, height - padding * 2)
    return max(min_dimension / grid_size, 1)


def board_size(cell: float, grid_size: int) -> float:
    return cell * grid_size
