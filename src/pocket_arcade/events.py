"""
events.py: Notification contract between the engines and whoever observes them.

Engines publish plain event objects; observers read the engine's snapshot
when they need the full state.
"""

from dataclasses import dataclass
from typing import Any, Callable, List

from .data_models import (
    FlappyPhase, GameOverResult, GomokuOutcome, Move
)


@dataclass(frozen=True)
class GameEvent:
    """Base class for everything an engine publishes."""


@dataclass(frozen=True)
class PhaseChangedEvent(GameEvent):
    old_phase: FlappyPhase
    new_phase: FlappyPhase


@dataclass(frozen=True)
class ScoreEvent(GameEvent):
    score: int
    obstacle_id: int


@dataclass(frozen=True)
class GameOverEvent(GameEvent):
    result: GameOverResult


@dataclass(frozen=True)
class StonePlacedEvent(GameEvent):
    move: Move


@dataclass(frozen=True)
class MoveUndoneEvent(GameEvent):
    move: Move


@dataclass(frozen=True)
class OutcomeChangedEvent(GameEvent):
    outcome: GomokuOutcome


@dataclass(frozen=True)
class BoardResetEvent(GameEvent):
    pass


@dataclass(frozen=True)
class SettingChangedEvent(GameEvent):
    key: str
    value: Any


Subscriber = Callable[[GameEvent], None]


class Observable:
    """Minimal publish/subscribe mixin."""

    def __init__(self):
        self._subscribers: List[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register callback; returns a function that unregisters it."""
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _publish(self, event: GameEvent):
        for callback in list(self._subscribers):
            callback(event)
