"""
preferences.py: User settings the games observe (difficulty, haptics toggle).
"""

import logging

from .difficulty import Difficulty
from .events import Observable, SettingChangedEvent
from .stats import CounterStore

logger = logging.getLogger(__name__)

DIFFICULTY_KEY = "flappy_difficulty"
HAPTICS_KEY = "haptics_enabled"


class Preferences(Observable):
    """
    Persisted settings with change notification.

    Subscribers receive a SettingChangedEvent whenever a value actually
    changes; setting the current value again is silent.
    """

    def __init__(self, store: CounterStore):
        super().__init__()
        self.store = store
        self._difficulty = self._load_difficulty()
        raw_haptics = store.get_str(HAPTICS_KEY)
        self._haptics_enabled = raw_haptics != "0" if raw_haptics is not None else True

    def _load_difficulty(self) -> Difficulty:
        raw = self.store.get_str(DIFFICULTY_KEY)
        if raw is None:
            return Difficulty.MEDIUM
        try:
            return Difficulty.parse(raw)
        except ValueError:
            logger.warning(f"Ignoring stored difficulty {raw!r}, using medium")
            return Difficulty.MEDIUM

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @difficulty.setter
    def difficulty(self, value: Difficulty):
        if value is self._difficulty:
            return
        self._difficulty = value
        self.store.set_str(DIFFICULTY_KEY, value.value)
        self._publish(SettingChangedEvent(DIFFICULTY_KEY, value))

    @property
    def haptics_enabled(self) -> bool:
        return self._haptics_enabled

    @haptics_enabled.setter
    def haptics_enabled(self, value: bool):
        if value == self._haptics_enabled:
            return
        self._haptics_enabled = value
        self.store.set_str(HAPTICS_KEY, "1" if value else "0")
        self._publish(SettingChangedEvent(HAPTICS_KEY, value))
