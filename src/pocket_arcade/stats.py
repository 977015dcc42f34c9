"""
stats.py: Translates finished games into persisted counter updates.

The recorder reads and writes through a CounterStore, which can be the
in-memory store below or stats_db.SqliteCounterStore.
"""

import logging
from dataclasses import replace
from typing import Dict, Optional, Protocol

from .data_models import FlappyStats, GomokuStats, Winner

logger = logging.getLogger(__name__)

# Counter keys
FLAPPY_BEST_SCORE = "flappy_best_score"
FLAPPY_GAMES_PLAYED = "flappy_games_played"
FLAPPY_TOTAL_SCORE = "flappy_total_score"
GOMOKU_BLACK_WINS = "gomoku_black_wins"
GOMOKU_WHITE_WINS = "gomoku_white_wins"
GOMOKU_DRAWS = "gomoku_draws"
GOMOKU_GAMES_PLAYED = "gomoku_games_played"


class CounterStore(Protocol):
    """Typed key-value storage for counters and settings."""

    def get_int(self, key: str, default: int = 0) -> int: ...

    def set_int(self, key: str, value: int) -> None: ...

    def get_str(self, key: str) -> Optional[str]: ...

    def set_str(self, key: str, value: str) -> None: ...


class MemoryCounterStore:
    """Non-persistent CounterStore, used by tests and throwaway sessions."""

    def __init__(self):
        self.ints: Dict[str, int] = {}
        self.strs: Dict[str, str] = {}

    def get_int(self, key: str, default: int = 0) -> int:
        return self.ints.get(key, default)

    def set_int(self, key: str, value: int) -> None:
        self.ints[key] = value

    def get_str(self, key: str) -> Optional[str]:
        return self.strs.get(key)

    def set_str(self, key: str, value: str) -> None:
        self.strs[key] = value


# ---------- Pure Updates ----------

def apply_flappy_result(stats: FlappyStats, score: int) -> FlappyStats:
    return FlappyStats(
        best_score=max(stats.best_score, score),
        games_played=stats.games_played + 1,
        total_score=stats.total_score + score,
    )


def apply_gomoku_result(stats: GomokuStats, winner: Winner) -> GomokuStats:
    stats = replace(stats, total_games=stats.total_games + 1)
    if winner is Winner.BLACK:
        return replace(stats, black_wins=stats.black_wins + 1)
    if winner is Winner.WHITE:
        return replace(stats, white_wins=stats.white_wins + 1)
    return replace(stats, draws=stats.draws + 1)


# ---------- Recorder ----------

class StatsRecorder:
    """Reads summaries from, and writes finished games to, a CounterStore."""

    def __init__(self, store: CounterStore):
        self.store = store

    # Reaction game

    @property
    def flappy_best_score(self) -> int:
        return self.store.get_int(FLAPPY_BEST_SCORE)

    @property
    def flappy_games_played(self) -> int:
        return self.store.get_int(FLAPPY_GAMES_PLAYED)

    @property
    def flappy_total_score(self) -> int:
        return self.store.get_int(FLAPPY_TOTAL_SCORE)

    def flappy_stats(self) -> FlappyStats:
        return FlappyStats(
            best_score=self.flappy_best_score,
            games_played=self.flappy_games_played,
            total_score=self.flappy_total_score,
        )

    def record_flappy_game(self, score: int) -> bool:
        """Counts a finished reaction game; returns True for a new best."""
        before = self.flappy_stats()
        after = apply_flappy_result(before, score)
        self.store.set_int(FLAPPY_GAMES_PLAYED, after.games_played)
        self.store.set_int(FLAPPY_TOTAL_SCORE, after.total_score)
        if after.best_score != before.best_score:
            self.store.set_int(FLAPPY_BEST_SCORE, after.best_score)
        logger.info(f"Recorded reaction game: score={score} best={after.best_score}")
        return score > before.best_score

    def reset_flappy_stats(self):
        for key in (FLAPPY_BEST_SCORE, FLAPPY_GAMES_PLAYED, FLAPPY_TOTAL_SCORE):
            self.store.set_int(key, 0)

    # Strategy game

    @property
    def gomoku_black_wins(self) -> int:
        return self.store.get_int(GOMOKU_BLACK_WINS)

    @property
    def gomoku_white_wins(self) -> int:
        return self.store.get_int(GOMOKU_WHITE_WINS)

    @property
    def gomoku_draws(self) -> int:
        return self.store.get_int(GOMOKU_DRAWS)

    @property
    def gomoku_games_played(self) -> int:
        return self.store.get_int(GOMOKU_GAMES_PLAYED)

    def gomoku_stats(self) -> GomokuStats:
        return GomokuStats(
            black_wins=self.gomoku_black_wins,
            white_wins=self.gomoku_white_wins,
            draws=self.gomoku_draws,
            total_games=self.gomoku_games_played,
        )

    def record_gomoku_game(self, winner: Winner):
        after = apply_gomoku_result(self.gomoku_stats(), winner)
        self.store.set_int(GOMOKU_GAMES_PLAYED, after.total_games)
        self.store.set_int(GOMOKU_BLACK_WINS, after.black_wins)
        self.store.set_int(GOMOKU_WHITE_WINS, after.white_wins)
        self.store.set_int(GOMOKU_DRAWS, after.draws)
        logger.info(f"Recorded gomoku game: winner={winner.value}")

    def reset_gomoku_stats(self):
        for key in (GOMOKU_BLACK_WINS, GOMOKU_WHITE_WINS, GOMOKU_DRAWS, GOMOKU_GAMES_PLAYED):
            self.store.set_int(key, 0)

    def reset_all_stats(self):
        self.reset_flappy_stats()
        self.reset_gomoku_stats()
