"""
Stats recorder and counter store tests.
"""
import pytest

from pocket_arcade.data_models import FlappyStats, GomokuStats, Winner
from pocket_arcade.stats import (
    FLAPPY_BEST_SCORE, StatsRecorder, apply_flappy_result, apply_gomoku_result
)
from pocket_arcade.stats_db import SqliteCounterStore


class TestPureUpdates:
    def test_flappy_result_updates_counters(self):
        stats = apply_flappy_result(FlappyStats(best_score=5, games_played=2, total_score=7), 3)
        assert stats == FlappyStats(best_score=5, games_played=3, total_score=10)

    def test_flappy_result_raises_best(self):
        assert apply_flappy_result(FlappyStats(best_score=5), 9).best_score == 9

    @pytest.mark.parametrize("winner,expected", [
        (Winner.BLACK, GomokuStats(black_wins=1, total_games=1)),
        (Winner.WHITE, GomokuStats(white_wins=1, total_games=1)),
        (Winner.DRAW, GomokuStats(draws=1, total_games=1)),
    ])
    def test_gomoku_result(self, winner, expected):
        assert apply_gomoku_result(GomokuStats(), winner) == expected


class TestRecorder:
    def test_first_game_with_points_is_new_best(self, store):
        recorder = StatsRecorder(store)
        assert recorder.record_flappy_game(4)
        assert recorder.flappy_best_score == 4

    def test_zero_score_first_game_is_not_new_best(self, store):
        recorder = StatsRecorder(store)
        assert not recorder.record_flappy_game(0)
        assert recorder.flappy_games_played == 1

    def test_lower_score_keeps_best(self, store):
        recorder = StatsRecorder(store)
        recorder.record_flappy_game(8)
        assert not recorder.record_flappy_game(3)
        assert recorder.flappy_stats() == FlappyStats(best_score=8, games_played=2, total_score=11)

    def test_average_score(self, store):
        recorder = StatsRecorder(store)
        assert recorder.flappy_stats().average_score == 0
        recorder.record_flappy_game(3)
        recorder.record_flappy_game(6)
        assert recorder.flappy_stats().average_score == pytest.approx(4.5)

    def test_gomoku_counters_and_rates(self, store):
        recorder = StatsRecorder(store)
        for winner in (Winner.BLACK, Winner.BLACK, Winner.WHITE, Winner.DRAW):
            recorder.record_gomoku_game(winner)
        stats = recorder.gomoku_stats()
        assert stats == GomokuStats(black_wins=2, white_wins=1, draws=1, total_games=4)
        assert stats.black_win_rate == pytest.approx(50)
        assert stats.white_win_rate == pytest.approx(25)

    def test_win_rates_without_games(self):
        assert GomokuStats().black_win_rate == 0
        assert GomokuStats().white_win_rate == 0

    def test_reset_flappy_leaves_gomoku(self, store):
        recorder = StatsRecorder(store)
        recorder.record_flappy_game(5)
        recorder.record_gomoku_game(Winner.WHITE)
        recorder.reset_flappy_stats()
        assert recorder.flappy_stats() == FlappyStats()
        assert recorder.gomoku_white_wins == 1

    def test_reset_all(self, store):
        recorder = StatsRecorder(store)
        recorder.record_flappy_game(5)
        recorder.record_gomoku_game(Winner.DRAW)
        recorder.reset_all_stats()
        assert recorder.flappy_stats() == FlappyStats()
        assert recorder.gomoku_stats() == GomokuStats()


class TestSqliteStore:
    def test_missing_keys_use_defaults(self, tmp_path):
        store = SqliteCounterStore(str(tmp_path / "stats.db"))
        try:
            assert store.get_int("nothing") == 0
            assert store.get_int("nothing", 7) == 7
            assert store.get_str("nothing") is None
        finally:
            store.close()

    def test_set_overwrites(self, tmp_path):
        store = SqliteCounterStore(str(tmp_path / "stats.db"))
        try:
            store.set_int(FLAPPY_BEST_SCORE, 3)
            store.set_int(FLAPPY_BEST_SCORE, 9)
            store.set_str("flappy_difficulty", "easy")
            store.set_str("flappy_difficulty", "hard")
            assert store.get_int(FLAPPY_BEST_SCORE) == 9
            assert store.get_str("flappy_difficulty") == "hard"
        finally:
            store.close()

    def test_counters_survive_reopen(self, tmp_path):
        path = str(tmp_path / "stats.db")
        store = SqliteCounterStore(path)
        recorder = StatsRecorder(store)
        recorder.record_flappy_game(12)
        recorder.record_gomoku_game(Winner.BLACK)
        store.close()

        reopened = SqliteCounterStore(path)
        try:
            recorder = StatsRecorder(reopened)
            assert recorder.flappy_best_score == 12
            assert recorder.flappy_games_played == 1
            assert recorder.gomoku_black_wins == 1
        finally:
            reopened.close()
