"""
Shared fixtures: in-memory stats, recording haptics and a manual clock.
"""
import random

import pytest

from pocket_arcade.flappy_engine import FlappyEngine
from pocket_arcade.gomoku_engine import GomokuEngine
from pocket_arcade.stats import MemoryCounterStore, StatsRecorder


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class RecordingHaptics:
    def __init__(self):
        self.events = []

    def play(self, event):
        self.events.append(event)


class CountingRecorder(StatsRecorder):
    """StatsRecorder that also counts how often each game was recorded."""

    def __init__(self, store):
        super().__init__(store)
        self.flappy_calls = []
        self.gomoku_calls = []

    def record_flappy_game(self, score):
        self.flappy_calls.append(score)
        return super().record_flappy_game(score)

    def record_gomoku_game(self, winner):
        self.gomoku_calls.append(winner)
        super().record_gomoku_game(winner)


@pytest.fixture
def store():
    return MemoryCounterStore()


@pytest.fixture
def recorder(store):
    return CountingRecorder(store)


@pytest.fixture
def haptics():
    return RecordingHaptics()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def flappy(recorder, haptics, clock):
    """Reaction game on a 300x400 area: player starts at (75, 200)."""
    engine = FlappyEngine(recorder, haptics, rng=random.Random(7), clock=clock)
    engine.setup_play_area(300, 400)
    return engine


@pytest.fixture
def gomoku(recorder, haptics):
    return GomokuEngine(recorder, haptics)
