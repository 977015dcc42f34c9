#!/usr/bin/env python3
"""
arcade_client.py

Desktop shell with pygame rendering for both games.
The reaction game runs on a fixed timestep while rendering at RENDER_FPS.
"""

import argparse
import logging
import math
from enum import Enum, auto
from typing import Optional, Tuple

import pygame

from .constants import (
    DB_FILE, FLAPPY_AREA_HEIGHT, RENDER_FPS, SCREEN_HEIGHT, SCREEN_WIDTH, TICK_TIME
)
from .data_models import BoardPosition, FlappyPhase, InProgress, Stone, Won
from .difficulty import Difficulty
from .flappy_engine import FlappyEngine
from .gomoku_engine import GomokuEngine
from .haptics import HapticEvent, HapticsService
from .physics_core import board_size, cell_size
from .preferences import Preferences
from .stats import StatsRecorder
from .stats_db import SqliteCounterStore
from .tick_driver import FixedStepAccumulator

logger = logging.getLogger(__name__)

HUD_HEIGHT = 100                # Space above each game's play area
BOARD_PADDING = 16

SKY = (0, 191, 255)
OBSTACLE_COLOR = (0, 150, 0)
PLAYER_COLOR = (255, 215, 0)
WHITE = (255, 255, 255)
DIM = (200, 200, 200)
BACKGROUND = (228, 214, 192)
BOARD_COLOR = (210, 180, 140)
LINE_COLOR = (55, 35, 15)
BLACK_COLOR = (15, 15, 15)
WHITE_COLOR = (245, 245, 245)
HIGHLIGHT = (220, 40, 40)


class GameMode(Enum):
    FLAPPY = auto()
    GOMOKU = auto()


class Command(Enum):
    QUIT = auto()
    SWITCH = auto()
    TAP = auto()
    PAUSE = auto()
    RESET = auto()
    PLACE = auto()
    UNDO = auto()


DIFFICULTY_KEYS = {
    pygame.K_1: Difficulty.EASY,
    pygame.K_2: Difficulty.MEDIUM,
    pygame.K_3: Difficulty.HARD,
}


# ----------------- Input Mapping -----------------

def command_for_event(event: pygame.event.Event, mode: GameMode) -> Optional[Command]:
    """Maps a pygame event to a shell command for the active game."""
    if event.type == pygame.QUIT:
        return Command.QUIT

    if event.type == pygame.KEYDOWN:
        if event.key == pygame.K_ESCAPE:
            return Command.QUIT
        if event.key == pygame.K_TAB:
            return Command.SWITCH
        if event.key == pygame.K_r:
            return Command.RESET
        if mode is GameMode.FLAPPY:
            if event.key == pygame.K_SPACE:
                return Command.TAP
            if event.key == pygame.K_p:
                return Command.PAUSE
        elif event.key == pygame.K_u:
            return Command.UNDO

    if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
        return Command.TAP if mode is GameMode.FLAPPY else Command.PLACE

    return None


def cell_from_mouse(pos: Tuple[int, int], origin: Tuple[float, float], cell: float) -> Tuple[int, int]:
    """Returns (row, col) of the board cell under pos; may be off-board."""
    mx, my = pos
    ox, oy = origin
    return math.floor((my - oy) / cell), math.floor((mx - ox) / cell)


def session_haptics(preferences: Preferences, mute: bool = False, backend=None) -> HapticsService:
    """Haptics for this run; mute silences them without touching the saved setting."""
    return HapticsService(enabled=lambda: not mute and preferences.haptics_enabled, backend=backend)


# ----------------- Game Client -----------------

class ArcadeClient:
    def __init__(self, stats: StatsRecorder, preferences: Preferences, mute: bool = False):
        pygame.init()
        self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption("Pocket Arcade")

        self.stats = stats
        self.preferences = preferences
        self.haptics = session_haptics(preferences, mute)

        # --- Game Logic ---
        self.flappy = FlappyEngine(stats, self.haptics, preferences=preferences)
        self.flappy.setup_play_area(SCREEN_WIDTH, FLAPPY_AREA_HEIGHT)
        self.gomoku = GomokuEngine(stats, self.haptics)
        self.mode = GameMode.FLAPPY

        # --- Board Layout ---
        size = self.gomoku.config.size
        self.cell = cell_size(SCREEN_WIDTH, SCREEN_HEIGHT - HUD_HEIGHT * 2, size, BOARD_PADDING)
        board_px = board_size(self.cell, size)
        self.board_origin = ((SCREEN_WIDTH - board_px) / 2, HUD_HEIGHT + BOARD_PADDING)

        # Time Management
        self.clock = pygame.time.Clock()
        self.accumulator = FixedStepAccumulator(TICK_TIME)

        self.large_font = pygame.font.Font(None, 40)
        self.font = pygame.font.Font(None, 24)

    def run(self):
        """The main client execution loop."""
        running = True
        while running:
            frame_time = self.clock.tick(RENDER_FPS) / 1000.0

            for event in pygame.event.get():
                if event.type == pygame.KEYDOWN and event.key in DIFFICULTY_KEYS:
                    self.preferences.difficulty = DIFFICULTY_KEYS[event.key]
                    self.haptics.play(HapticEvent.SELECTION)
                    continue
                command = command_for_event(event, self.mode)
                if command is Command.QUIT:
                    running = False
                elif command is not None:
                    self._dispatch(command, event)

            # --- Simulation Loop (Fixed Timestep) ---
            steps = self.accumulator.advance(frame_time)
            if self.mode is GameMode.FLAPPY:
                for _ in range(steps):
                    self.flappy.tick()

            if self.mode is GameMode.FLAPPY:
                self._draw_flappy()
            else:
                self._draw_gomoku()
            pygame.display.flip()

        self.flappy.close()
        pygame.quit()

    def _dispatch(self, command: Command, event: pygame.event.Event):
        if command is Command.SWITCH:
            self.flappy.pause()
            self.accumulator.clear()
            self.mode = GameMode.GOMOKU if self.mode is GameMode.FLAPPY else GameMode.FLAPPY
            logger.info(f"Switched to {self.mode.name}")
        elif command is Command.TAP:
            self.flappy.handle_input()
        elif command is Command.PAUSE:
            if self.flappy.phase is FlappyPhase.PAUSED:
                self.flappy.resume()
            else:
                self.flappy.pause()
        elif command is Command.RESET:
            if self.mode is GameMode.FLAPPY:
                self.flappy.reset()
            else:
                self.gomoku.reset()
        elif command is Command.PLACE:
            row, col = cell_from_mouse(event.pos, self.board_origin, self.cell)
            self.gomoku.place_stone(row, col)
        elif command is Command.UNDO:
            self.gomoku.undo()

    # ----------------- Rendering -----------------

    def _draw_hud(self, title: str, status: str, hint: str):
        screen = self.screen
        title_surf = self.large_font.render(title, True, WHITE)
        screen.blit(title_surf, (SCREEN_WIDTH // 2 - title_surf.get_width() // 2, 16))
        status_surf = self.font.render(status, True, WHITE)
        screen.blit(status_surf, (SCREEN_WIDTH // 2 - status_surf.get_width() // 2, 60))
        hint_surf = self.font.render(hint, True, DIM)
        screen.blit(hint_surf, (10, SCREEN_HEIGHT - 30))

    def _draw_flappy(self):
        screen = self.screen
        screen.fill((30, 30, 40))
        top = HUD_HEIGHT
        area_height = self.flappy.height
        pygame.draw.rect(screen, SKY, (0, top, self.flappy.width, area_height))

        for obstacle in self.flappy.obstacles:
            pygame.draw.rect(screen, OBSTACLE_COLOR, (obstacle.left, top, obstacle.width, obstacle.gap_y))
            pygame.draw.rect(screen, OBSTACLE_COLOR, (
                obstacle.left, top + obstacle.gap_bottom,
                obstacle.width, obstacle.bottom_height(area_height)))

        rect = self.flappy.player.rect
        pygame.draw.rect(screen, PLAYER_COLOR, (rect.x, top + rect.y, rect.width, rect.height))

        best = self.stats.flappy_best_score
        self._draw_hud(
            "Flappy Square",
            f"{self.flappy.status_message}   Best: {best}   [{self.preferences.difficulty.value}]",
            "Space/Click = Jump | P = Pause | R = Reset | 1-3 = Difficulty | Tab = Gomoku")

    def _draw_gomoku(self):
        screen = self.screen
        screen.fill(BACKGROUND)
        size = self.gomoku.config.size
        ox, oy = self.board_origin
        board_px = board_size(self.cell, size)
        pygame.draw.rect(screen, BOARD_COLOR, (ox, oy, board_px, board_px), border_radius=6)

        for i in range(size + 1):
            pygame.draw.line(screen, LINE_COLOR, (ox + i * self.cell, oy), (ox + i * self.cell, oy + board_px), 1)
            pygame.draw.line(screen, LINE_COLOR, (ox, oy + i * self.cell), (ox + board_px, oy + i * self.cell), 1)

        winning = set(self.gomoku.winning_positions)
        radius = max(int(self.cell / 2) - 3, 2)
        for row in range(size):
            for col in range(size):
                stone = self.gomoku.cell(row, col)
                if stone is None:
                    continue
                center = (int(ox + (col + 0.5) * self.cell), int(oy + (row + 0.5) * self.cell))
                color = BLACK_COLOR if stone is Stone.BLACK else WHITE_COLOR
                pygame.draw.circle(screen, color, center, radius)
                if BoardPosition(row, col) in winning:
                    pygame.draw.circle(screen, HIGHLIGHT, center, radius, 2)

        summary = self.stats.gomoku_stats()
        outcome = self.gomoku.outcome
        status_color = HIGHLIGHT if isinstance(outcome, Won) else LINE_COLOR
        status_surf = self.large_font.render(self.gomoku.status_text, True, status_color)
        screen.blit(status_surf, (SCREEN_WIDTH // 2 - status_surf.get_width() // 2, 20))
        record = self.font.render(
            f"Black {summary.black_wins}  White {summary.white_wins}  Draws {summary.draws}",
            True, LINE_COLOR)
        screen.blit(record, (SCREEN_WIDTH // 2 - record.get_width() // 2, 64))
        if isinstance(outcome, InProgress) and self.gomoku.can_undo:
            hint = "Click = Place | U = Undo | R = Reset | Tab = Flappy"
        else:
            hint = "Click = Place | R = Reset | Tab = Flappy"
        screen.blit(self.font.render(hint, True, LINE_COLOR), (10, SCREEN_HEIGHT - 30))


def main(argv=None):
    parser = argparse.ArgumentParser(description="Flappy Square and Gomoku")
    parser.add_argument("--db", default=DB_FILE, help="SQLite file for stats and settings")
    parser.add_argument("--difficulty", type=Difficulty.parse, default=None,
                        help="easy, medium or hard (persisted)")
    parser.add_argument("--mute", action="store_true", help="Disable haptic feedback for this run only")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")

    store = SqliteCounterStore(args.db)
    try:
        preferences = Preferences(store)
        if args.difficulty is not None:
            preferences.difficulty = args.difficulty
        ArcadeClient(StatsRecorder(store), preferences, mute=args.mute).run()
    finally:
        store.close()


if __name__ == "__main__":
    main()
