"""
Tick driver tests: fixed-step accumulation and the threaded driver.
"""
import threading
import time

from pocket_arcade.data_models import FlappyPhase
from pocket_arcade.events import GameOverEvent
from pocket_arcade.tick_driver import FixedStepAccumulator, TickDriver


class TestFixedStepAccumulator:
    def test_partial_steps_carry_over(self):
        acc = FixedStepAccumulator(step=0.25)
        assert acc.advance(0.125) == 0
        assert acc.advance(0.125) == 1
        assert acc.pending == 0

    def test_multiple_steps(self):
        acc = FixedStepAccumulator(step=0.25)
        assert acc.advance(0.75) == 3

    def test_long_stall_is_capped_and_dropped(self):
        acc = FixedStepAccumulator(step=0.25, max_steps=5)
        assert acc.advance(5.0) == 5
        assert acc.pending == 0
        assert acc.advance(0.125) == 0

    def test_clear(self):
        acc = FixedStepAccumulator(step=0.25)
        acc.advance(0.2)
        acc.clear()
        assert acc.advance(0.2) == 0


def wait_for(predicate, timeout=2.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return False


class TestTickDriver:
    def test_ticks_until_stopped(self):
        ticks = []
        driver = TickDriver(lambda: ticks.append(1), interval=0.001)
        driver.start()
        try:
            assert driver.is_running
            assert wait_for(lambda: len(ticks) >= 3)
        finally:
            driver.stop()

        assert not driver.is_running
        count = len(ticks)
        time.sleep(0.02)
        assert len(ticks) == count
        assert driver.tick_count == count

    def test_start_twice_keeps_one_thread(self):
        driver = TickDriver(lambda: None, interval=0.001)
        driver.start()
        thread = driver._thread
        driver.start()
        try:
            assert driver._thread is thread
        finally:
            driver.stop()

    def test_stop_without_start(self):
        TickDriver(lambda: None).stop()

    def test_run_exclusive_returns_result(self):
        driver = TickDriver(lambda: None)
        assert driver.run_exclusive(lambda a, b: a + b, 2, 3) == 5

    def test_drives_an_engine(self, flappy):
        driver = TickDriver(flappy.tick, interval=0.001)
        driver.run_exclusive(flappy.handle_input)
        driver.start()
        try:
            assert wait_for(lambda: flappy.phase is FlappyPhase.GAME_OVER)
        finally:
            driver.stop()
        assert flappy.result is not None

    def test_tick_after_reset_is_ignored(self, flappy):
        flappy.handle_input()
        flappy.tick()
        flappy.reset()
        before = flappy.snapshot()
        flappy.tick()
        assert flappy.snapshot() == before

    def test_stop_from_inside_a_tick(self):
        errors = []
        threads = []
        stopped = threading.Event()
        driver = None

        def tick():
            threads.append(threading.current_thread())
            try:
                driver.stop()
            except RuntimeError as e:
                errors.append(e)
            stopped.set()

        driver = TickDriver(tick, interval=0.001)
        driver.start()
        assert stopped.wait(timeout=2.0)
        threads[0].join(timeout=2.0)

        assert errors == []
        assert not threads[0].is_alive()
        assert not driver.is_running
        assert driver.tick_count == 1

    def test_stop_on_game_over(self, flappy):
        threads = []
        stopped = threading.Event()
        driver = TickDriver(flappy.tick, interval=0.001)

        def on_event(event):
            if isinstance(event, GameOverEvent):
                threads.append(threading.current_thread())
                driver.stop()
                stopped.set()

        flappy.subscribe(on_event)
        driver.run_exclusive(flappy.handle_input)
        driver.start()
        assert stopped.wait(timeout=5.0)
        threads[0].join(timeout=2.0)

        assert not threads[0].is_alive()
        assert not driver.is_running
        assert flappy.phase is FlappyPhase.GAME_OVER
