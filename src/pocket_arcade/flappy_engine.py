"""
flappy_engine.py: The reaction game simulation.

The engine never owns a timer. A host calls tick() at TICK_RATE (see
tick_driver) and forwards taps to handle_input(); everything else is
state the host reads back through snapshot() or events.
"""

import itertools
import logging
import random
import time
from typing import Callable, List, Optional, Tuple

from .constants import GAP_MARGIN, SPAWN_TRIGGER_RATIO, OFFSCREEN_SPAWN_OFFSET
from .data_models import (
    FlappyConfig, FlappyPhase, FlappySnapshot, FlappyStats, GameOverResult,
    Obstacle, ObstacleView, PlayerBody
)
from .difficulty import Difficulty, config_for
from .events import GameOverEvent, Observable, PhaseChangedEvent, ScoreEvent, SettingChangedEvent
from .haptics import HapticEvent, HapticSink, NullHaptics
from .physics_core import hits_obstacle, out_of_vertical_bounds
from .preferences import DIFFICULTY_KEY, Preferences
from .stats import StatsRecorder

logger = logging.getLogger(__name__)


class FlappyEngine(Observable):
    """
    Authoritative state of one reaction game screen.

    Usage:
        engine = FlappyEngine(recorder)
        engine.setup_play_area(480, 400)
        engine.handle_input()           # start
        while engine.phase is FlappyPhase.PLAYING:
            engine.tick()
    """

    def __init__(
        self,
        stats: StatsRecorder,
        haptics: Optional[HapticSink] = None,
        difficulty: Difficulty = Difficulty.MEDIUM,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
        preferences: Optional[Preferences] = None,
    ):
        super().__init__()
        self.stats = stats
        self.haptics = haptics if haptics is not None else NullHaptics()
        self.rng = rng if rng is not None else random.Random()
        self.clock = clock

        self._unsubscribe_preferences: Optional[Callable[[], None]] = None
        if preferences is not None:
            difficulty = preferences.difficulty
            self._unsubscribe_preferences = preferences.subscribe(self._on_setting_changed)

        self._next_config = config_for(difficulty)
        self.config: FlappyConfig = self._next_config

        self.width = 0.0
        self.height = 0.0
        self.player = PlayerBody(x=0.0, y=0.0, size=self.config.player_size)
        self.obstacles: List[Obstacle] = []
        self.phase = FlappyPhase.READY
        self.score = 0
        self.result: Optional[GameOverResult] = None

        self._ids = itertools.count(1)
        self._last_spawn_time: Optional[float] = None

    # ---------- Configuration ----------

    def configure(self, difficulty: Difficulty):
        """Selects the tuning for the next game; a running game keeps its own."""
        self._next_config = config_for(difficulty)
        logger.info(f"Next reaction game difficulty: {difficulty.value}")

    def _on_setting_changed(self, event):
        if isinstance(event, SettingChangedEvent) and event.key == DIFFICULTY_KEY:
            self.configure(event.value)

    def close(self):
        """Stops following the preferences passed at construction."""
        if self._unsubscribe_preferences is not None:
            self._unsubscribe_preferences()
            self._unsubscribe_preferences = None

    def setup_play_area(self, width: float, height: float):
        self.width = width
        self.height = height
        self.reset()

    # ---------- Commands ----------

    def handle_input(self):
        if self.phase is FlappyPhase.READY:
            self._start()
        elif self.phase is FlappyPhase.PLAYING:
            self.player.jump(self.config.jump_strength)
            self.haptics.play(HapticEvent.JUMP)
        elif self.phase is FlappyPhase.GAME_OVER:
            self.reset()
            self._start()
        elif self.phase is FlappyPhase.PAUSED:
            self.resume()

    def pause(self):
        if self.phase is FlappyPhase.PLAYING:
            self._set_phase(FlappyPhase.PAUSED)

    def resume(self):
        if self.phase is FlappyPhase.PAUSED:
            self._set_phase(FlappyPhase.PLAYING)

    def reset(self):
        """Back to READY with an empty field; the config for the next game applies."""
        self.config = self._next_config
        self.player = PlayerBody(
            x=self.width * self.config.player_start_x_ratio,
            y=self.height / 2,
            size=self.config.player_size,
        )
        self.obstacles = []
        self.score = 0
        self.result = None
        self._last_spawn_time = None
        self._set_phase(FlappyPhase.READY)

    def _start(self):
        self.config = self._next_config
        self._set_phase(FlappyPhase.PLAYING)

    def _set_phase(self, phase: FlappyPhase):
        old_phase = self.phase
        self.phase = phase
        if old_phase is not phase:
            logger.info(f"Reaction game {old_phase.name} -> {phase.name}")
            self._publish(PhaseChangedEvent(old_phase, phase))

    # ---------- Simulation ----------

    def tick(self):
        """
        One fixed step. Order matters: physics, obstacle motion, despawn,
        scoring, collision, then spawning.
        """
        if self.phase is not FlappyPhase.PLAYING:
            return

        # 1. Player physics
        self.player.apply_gravity(self.config.gravity)

        # 2. Move and drop obstacles
        for obstacle in self.obstacles:
            obstacle.x -= self.config.obstacle_speed
        self.obstacles = [o for o in self.obstacles if not o.x < -o.width]

        # 3. Scoring
        self._check_scoring()

        # 4. Collisions
        if self._collided():
            self._end_game()
            return

        # 5. Spawning
        now = self.clock()
        if self._should_spawn(now):
            self._spawn_obstacle()
            self._last_spawn_time = now

    def _check_scoring(self):
        # Scored as soon as the centre passes the player's x, independent of
        # the wider overlap window the collision check uses.
        for obstacle in self.obstacles:
            if not obstacle.scored and obstacle.x < self.player.x:
                obstacle.scored = True
                self.score += 1
                self.haptics.play(HapticEvent.SCORE)
                self._publish(ScoreEvent(self.score, obstacle.id))

    def _collided(self) -> bool:
        rect = self.player.rect
        if out_of_vertical_bounds(rect, self.height):
            return True
        return any(hits_obstacle(rect, obstacle) for obstacle in self.obstacles)

    def _should_spawn(self, now: float) -> bool:
        if self._last_spawn_time is not None:
            if now - self._last_spawn_time <= self.config.spawn_interval:
                return False
        if not self.obstacles:
            return True
        return self.obstacles[-1].x < self.width * SPAWN_TRIGGER_RATIO

    def gap_range(self) -> Tuple[float, float]:
        """Inclusive bounds for a new obstacle's gap_y."""
        low = float(GAP_MARGIN)
        high = self.height - self.config.gap_height - GAP_MARGIN
        return low, max(low, high)

    def _spawn_obstacle(self):
        low, high = self.gap_range()
        obstacle = Obstacle(
            id=next(self._ids),
            x=self.width + self.config.obstacle_width * OFFSCREEN_SPAWN_OFFSET,
            gap_y=self.rng.uniform(low, high),
            gap_height=self.config.gap_height,
            width=self.config.obstacle_width,
        )
        self.obstacles.append(obstacle)
        logger.debug(f"Spawned obstacle {obstacle.id} gap_y={obstacle.gap_y:.1f}")

    def _end_game(self):
        is_new_best = self.score > self.stats.flappy_best_score
        self.stats.record_flappy_game(self.score)
        self.haptics.play(HapticEvent.NEW_HIGH_SCORE if is_new_best else HapticEvent.COLLISION)
        self.result = GameOverResult(final_score=self.score, is_new_best=is_new_best)
        self._set_phase(FlappyPhase.GAME_OVER)
        logger.info(f"Reaction game over: score={self.score} new_best={is_new_best}")
        self._publish(GameOverEvent(self.result))

    # ---------- Read Side ----------

    def snapshot(self) -> FlappySnapshot:
        return FlappySnapshot(
            phase=self.phase,
            score=self.score,
            player_x=self.player.x,
            player_y=self.player.y,
            velocity=self.player.velocity,
            obstacles=tuple(
                ObstacleView(o.id, o.x, o.gap_y, o.gap_height, o.width, o.scored)
                for o in self.obstacles
            ),
            result=self.result,
        )

    @property
    def is_playing(self) -> bool:
        return self.phase is FlappyPhase.PLAYING

    @property
    def stats_summary(self) -> FlappyStats:
        return self.stats.flappy_stats()

    @property
    def status_message(self) -> str:
        if self.phase is FlappyPhase.READY:
            return "Tap to start"
        if self.phase is FlappyPhase.PLAYING:
            return f"Score: {self.score}"
        if self.phase is FlappyPhase.PAUSED:
            return "Paused"
        if self.result.is_new_best:
            return f"New best! Score: {self.result.final_score}"
        return f"Game over! Score: {self.result.final_score}"
