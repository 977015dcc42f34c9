"""
gomoku_engine.py: Five-in-a-row rules, move history and win detection.
"""

import logging
from typing import List, Optional

from .data_models import (
    BoardConfig, BoardPosition, Direction, Draw, GomokuOutcome, GomokuSnapshot,
    GomokuStats, InProgress, Move, Stone, Winner, Won
)
from .events import (
    BoardResetEvent, MoveUndoneEvent, Observable, OutcomeChangedEvent, StonePlacedEvent
)
from .haptics import HapticEvent, HapticSink, NullHaptics
from .stats import StatsRecorder

logger = logging.getLogger(__name__)

FIRST_PLAYER = Stone.BLACK


class GomokuEngine(Observable):
    """
    Two players alternate on a square board; the first contiguous run of
    win_condition stones through the last placed stone ends the game.

    Invalid moves (occupied cell, off-board, game over) are ignored and
    report False.
    """

    def __init__(
        self,
        stats: StatsRecorder,
        haptics: Optional[HapticSink] = None,
        config: BoardConfig = BoardConfig(),
    ):
        super().__init__()
        self.config = config
        self.stats = stats
        self.haptics = haptics if haptics is not None else NullHaptics()

        self.board: List[List[Optional[Stone]]] = self._empty_board()
        self.outcome: GomokuOutcome = InProgress(FIRST_PLAYER)
        self.move_history: List[Move] = []
        self.last_move: Optional[BoardPosition] = None
        self.winning_positions: List[BoardPosition] = []

    def _empty_board(self) -> List[List[Optional[Stone]]]:
        return [[None for _ in range(self.config.size)] for _ in range(self.config.size)]

    # ---------- Commands ----------

    def place_stone(self, row: int, col: int) -> bool:
        if not isinstance(self.outcome, InProgress):
            return False
        position = BoardPosition(row, col)
        if not position.is_valid(self.config.size):
            return False
        if self.board[row][col] is not None:
            return False

        player = self.outcome.current_player
        self.board[row][col] = player
        self.last_move = position
        move = Move(position=position, player=player, move_number=len(self.move_history) + 1)
        self.move_history.append(move)
        self.haptics.play(HapticEvent.TAP)
        self._publish(StonePlacedEvent(move))

        winning = self.winning_line(position, player)
        if winning is not None:
            self.winning_positions = winning
            self._finish(Won(player), Winner.from_stone(player), HapticEvent.SUCCESS)
        elif self.is_board_full():
            self._finish(Draw(), Winner.DRAW, HapticEvent.WARNING)
        else:
            self.outcome = InProgress(player.opponent)
            self._publish(OutcomeChangedEvent(self.outcome))
        return True

    def undo(self) -> bool:
        """Takes back the last move and gives the turn back to whoever made it."""
        if not self.move_history or self.is_game_over:
            return False

        move = self.move_history.pop()
        self.board[move.position.row][move.position.col] = None
        self.last_move = self.move_history[-1].position if self.move_history else None
        self.outcome = InProgress(move.player)
        self.winning_positions = []
        self.haptics.play(HapticEvent.TAP)
        self._publish(MoveUndoneEvent(move))
        return True

    def reset(self):
        self.board = self._empty_board()
        self.outcome = InProgress(FIRST_PLAYER)
        self.move_history = []
        self.last_move = None
        self.winning_positions = []
        self.haptics.play(HapticEvent.TAP)
        self._publish(BoardResetEvent())

    def _finish(self, outcome: GomokuOutcome, winner: Winner, haptic: HapticEvent):
        self.outcome = outcome
        self.haptics.play(haptic)
        self.stats.record_gomoku_game(winner)
        logger.info(f"Gomoku finished after {len(self.move_history)} moves: {winner.value}")
        self._publish(OutcomeChangedEvent(outcome))

    # ---------- Rules ----------

    def winning_line(self, position: BoardPosition, player: Stone) -> Optional[List[BoardPosition]]:
        """Returns the first run through position long enough to win, if any."""
        for direction in Direction:
            line = self._line_through(position, direction, player)
            if len(line) >= self.config.win_condition:
                return line
        return None

    def _line_through(self, position: BoardPosition, direction: Direction, player: Stone) -> List[BoardPosition]:
        d_row, d_col = direction.value
        line = [position]
        for sign in (1, -1):
            r = position.row + d_row * sign
            c = position.col + d_col * sign
            while self._in_bounds(r, c) and self.board[r][c] is player:
                line.append(BoardPosition(r, c))
                r += d_row * sign
                c += d_col * sign
        return line

    def _in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.config.size and 0 <= col < self.config.size

    def is_board_full(self) -> bool:
        return all(cell is not None for row in self.board for cell in row)

    # ---------- Read Side ----------

    def cell(self, row: int, col: int) -> Optional[Stone]:
        return self.board[row][col]

    @property
    def current_player(self) -> Optional[Stone]:
        if isinstance(self.outcome, InProgress):
            return self.outcome.current_player
        return None

    @property
    def is_game_over(self) -> bool:
        return self.outcome.is_terminal

    @property
    def can_undo(self) -> bool:
        return bool(self.move_history) and not self.is_game_over

    @property
    def status_text(self) -> str:
        if isinstance(self.outcome, InProgress):
            return f"To move: {self.outcome.current_player.value}"
        if isinstance(self.outcome, Won):
            return f"{self.outcome.winner.value.capitalize()} wins!"
        return "Draw!"

    @property
    def stats_summary(self) -> GomokuStats:
        return self.stats.gomoku_stats()

    def snapshot(self) -> GomokuSnapshot:
        return GomokuSnapshot(
            board=tuple(tuple(row) for row in self.board),
            outcome=self.outcome,
            move_count=len(self.move_history),
            last_move=self.last_move,
            winning_positions=tuple(self.winning_positions),
        )
