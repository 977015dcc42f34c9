"""
tick_driver.py: Ways to call an engine's tick() at a fixed rate.

FixedStepAccumulator suits a render loop that already owns the thread
(the pygame shell). TickDriver runs its own thread for hosts without one.
"""

import logging
import threading
import time
from typing import Any, Callable, Optional

from .constants import TICK_TIME

logger = logging.getLogger(__name__)


class FixedStepAccumulator:
    """Turns variable frame times into a whole number of fixed steps."""

    def __init__(self, step: float = TICK_TIME, max_steps: int = 5):
        self.step = step
        self.max_steps = max_steps
        self.pending = 0.0

    def advance(self, elapsed: float) -> int:
        """Adds elapsed seconds; returns how many steps are now due."""
        self.pending += elapsed
        steps = 0
        while self.pending >= self.step and steps < self.max_steps:
            self.pending -= self.step
            steps += 1
        if steps == self.max_steps:
            # Drop the backlog after a long stall instead of fast-forwarding.
            self.pending = 0.0
        return steps

    def clear(self):
        self.pending = 0.0


class TickDriver:
    """
    Calls `tick` every `interval` seconds on a daemon thread.

    Every tick runs under one lock; route input through run_exclusive()
    so it never interleaves with a tick.
    """

    def __init__(self, tick: Callable[[], None], interval: float = TICK_TIME):
        self._tick = tick
        self.interval = interval
        self.tick_count = 0

        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self):
        if self.is_running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run_loop, name="tick-driver", daemon=True)
        self._thread.start()
        logger.info(f"Tick driver started ({1 / self.interval:.0f} Hz)")

    def stop(self):
        if self._thread is None:
            return
        self._stop_event.set()
        # Called from inside a tick: the loop exits once the tick returns.
        if threading.current_thread() is not self._thread:
            self._thread.join()
        self._thread = None
        logger.info(f"Tick driver stopped after {self.tick_count} ticks")

    def run_exclusive(self, fn: Callable[..., Any], *args) -> Any:
        """Runs fn while no tick is in progress."""
        with self._lock:
            return fn(*args)

    def _run_loop(self):
        while not self._stop_event.is_set():
            start_time = time.monotonic()

            with self._lock:
                if self._stop_event.is_set():
                    break
                self._tick()
                self.tick_count += 1

            # Time remaining until next tick
            sleep_time = self.interval - (time.monotonic() - start_time)
            if self._stop_event.wait(max(0.0, sleep_time)):
                break
