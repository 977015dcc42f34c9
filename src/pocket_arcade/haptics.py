"""
haptics.py: Fire-and-forget feedback notifications for game events.
"""

import logging
from enum import Enum
from typing import Callable, Optional, Protocol

logger = logging.getLogger(__name__)


class HapticEvent(Enum):
    TAP = "tap"                         # UI interactions, placing stones
    JUMP = "jump"
    SCORE = "score"
    COLLISION = "collision"             # reaction game over
    SUCCESS = "success"                 # gomoku win
    WARNING = "warning"                 # gomoku draw, stats reset
    NEW_HIGH_SCORE = "new_high_score"
    SELECTION = "selection"             # settings changes


class HapticSink(Protocol):
    def play(self, event: HapticEvent) -> None: ...


class NullHaptics:
    """Sink that drops every notification."""

    def play(self, event: HapticEvent) -> None:
        pass


class HapticsService:
    """
    Forwards events to a device backend when haptics are enabled.

    `enabled` is queried on every event so a settings toggle takes effect
    immediately. Without a backend, events are only logged.
    """

    def __init__(
        self,
        enabled: Callable[[], bool] = lambda: True,
        backend: Optional[Callable[[HapticEvent], None]] = None,
    ):
        self._enabled = enabled
        self._backend = backend

    def play(self, event: HapticEvent) -> None:
        if not self._enabled():
            return
        logger.debug(f"Haptic: {event.value}")
        if self._backend is not None:
            self._backend(event)
