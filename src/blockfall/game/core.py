from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional

import numpy as np

from .grid import GameGrid
from .pieces import Piece, RandomSource, spawn_random
from .rules import ScoringRules


logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE_RIGHT = 2
    ROTATE_LEFT = 3
    SOFT_DROP = 4
    HARD_DROP = 5
    NONE = 6
    PAUSE = 7


class GameStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    LINE_CLEAR_PENDING = "line_clear_pending"
    GAME_OVER = "game_over"


@dataclass
class GameConfig:
    width: int = 10
    height: int = 22
    tick_interval_ms: int = 300
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.width < 4 or self.height < 4:
            raise ValueError(f"board must be at least 4x4, got {self.width}x{self.height}")
        if self.tick_interval_ms <= 0:
            raise ValueError(f"tick interval must be positive, got {self.tick_interval_ms}")


@dataclass(frozen=True, eq=False)
class GameState:
    """Read-only copy of everything a renderer needs for one frame."""

    grid: np.ndarray
    active_piece: Piece
    active_x: int
    active_y: int
    score: int
    paused: bool
    line_clear_pending: bool
    game_over: bool
    status: GameStatus


class EngineListener:
    """Hooks the presentation layer implements; every call is synchronous."""

    def on_repaint(self) -> None:
        pass

    def on_status(self, text: str) -> None:
        pass

    def on_timer_started(self, interval_ms: int) -> None:
        pass

    def on_timer_stopped(self) -> None:
        pass


class BoardEngine:
    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        rng: Optional[RandomSource] = None,
        listener: Optional[EngineListener] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng: RandomSource = rng if rng is not None else random.Random(self.config.random_seed)
        self.listener = listener or EngineListener()
        self.board = GameGrid(self.config.width, self.config.height)
        self.active_piece = Piece()
        self.active_x = 0
        self.active_y = 0
        self.score = 0
        self.paused = False
        self.line_clear_pending = False
        self.game_over = False
        self.started = False
        self.timer_running = False

    # ---------- Lifecycle ----------
    def start(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng = random.Random(seed)
        self.board.reset()
        self.active_piece = Piece()
        self.score = 0
        self.paused = False
        self.line_clear_pending = False
        self.game_over = False
        self.started = True
        logger.info("game started on a %dx%d board", self.board.width, self.board.height)
        self._spawn_piece()
        if not self.game_over:
            self.timer_running = True
            self.listener.on_timer_started(self.config.tick_interval_ms)
            self.listener.on_status(self.status_text)

    def toggle_pause(self) -> None:
        if self.game_over:
            return
        self.paused = not self.paused
        self.listener.on_status(self.status_text)
        self.listener.on_repaint()

    def tick(self) -> None:
        if not self.started or self.paused or self.game_over:
            return
        if self.line_clear_pending:
            self.line_clear_pending = False
            self._spawn_piece()
        else:
            self.soft_drop_one_row()
        self.listener.on_repaint()

    # ---------- Movement ----------
    def try_move(self, piece: Piece, new_x: int, new_y: int) -> bool:
        if not self.board.can_place(piece.cells_at(new_x, new_y)):
            return False
        self.active_piece = piece
        self.active_x = new_x
        self.active_y = new_y
        self.listener.on_repaint()
        return True

    def move_left(self) -> bool:
        return self.try_move(self.active_piece, self.active_x - 1, self.active_y)

    def move_right(self) -> bool:
        return self.try_move(self.active_piece, self.active_x + 1, self.active_y)

    def rotate_left(self) -> bool:
        return self.try_move(self.active_piece.rotate_left(), self.active_x, self.active_y)

    def rotate_right(self) -> bool:
        return self.try_move(self.active_piece.rotate_right(), self.active_x, self.active_y)

    def soft_drop_one_row(self) -> None:
        if self.active_piece.is_empty or self.game_over:
            return
        if not self.try_move(self.active_piece, self.active_x, self.active_y - 1):
            self._lock_piece()

    def hard_drop(self) -> None:
        if self.active_piece.is_empty or self.game_over:
            return
        new_y = self.active_y
        while self.try_move(self.active_piece, self.active_x, new_y - 1):
            new_y -= 1
        self._lock_piece()

    def handle_action(self, action: Action) -> bool:
        """Dispatch one key press. Returns False when the key was ignored."""
        action = Action(action)
        # No active piece covers pre-start, a pending line clear and game over.
        if self.active_piece.is_empty or self.game_over:
            return False
        if action == Action.PAUSE:
            self.toggle_pause()
        elif action == Action.LEFT:
            return self.move_left()
        elif action == Action.RIGHT:
            return self.move_right()
        elif action == Action.ROTATE_RIGHT:
            return self.rotate_right()
        elif action == Action.ROTATE_LEFT:
            return self.rotate_left()
        elif action == Action.HARD_DROP:
            self.hard_drop()
        elif action == Action.SOFT_DROP:
            self.soft_drop_one_row()
        elif action == Action.NONE:
            return False
        return True

    # ---------- Lock / clear / spawn ----------
    def _lock_piece(self) -> None:
        self.board.lock(self.active_piece.cells_at(self.active_x, self.active_y), self.active_piece.variant)
        logger.debug("locked %s at (%d, %d)", self.active_piece.variant.name, self.active_x, self.active_y)
        self._remove_full_lines()
        if not self.line_clear_pending:
            self._spawn_piece()
        self.listener.on_repaint()

    def _remove_full_lines(self) -> None:
        full_rows = self.board.clear_full_lines()
        if full_rows == 0:
            return
        self.score += self.rules.score_for_lines(full_rows)
        self.line_clear_pending = True
        self.active_piece = Piece()
        logger.debug("cleared %d row(s), score now %d", full_rows, self.score)
        self.listener.on_status(self.status_text)

    def _spawn_piece(self) -> None:
        piece = spawn_random(self.rng)
        new_x = self.board.width // 2 + 1
        new_y = self.board.height - 1 + piece.min_y()
        if self.try_move(piece, new_x, new_y):
            return
        self.active_piece = Piece()
        self.game_over = True
        self.timer_running = False
        logger.info("game over with score %d", self.score)
        self.listener.on_timer_stopped()
        self.listener.on_status(self.status_text)
        self.listener.on_repaint()

    # ---------- Read side ----------
    @property
    def status(self) -> GameStatus:
        if self.game_over:
            return GameStatus.GAME_OVER
        if not self.started:
            return GameStatus.IDLE
        if self.paused:
            return GameStatus.PAUSED
        if self.line_clear_pending:
            return GameStatus.LINE_CLEAR_PENDING
        return GameStatus.RUNNING

    @property
    def status_text(self) -> str:
        if self.game_over:
            return f"Game over. Score: {self.score}"
        if self.paused:
            return "paused"
        return str(self.score)

    @property
    def state(self) -> GameState:
        return GameState(
            grid=self.board.clone_state(),
            active_piece=self.active_piece,
            active_x=self.active_x,
            active_y=self.active_y,
            score=self.score,
            paused=self.paused,
            line_clear_pending=self.line_clear_pending,
            game_over=self.game_over,
            status=self.status,
        )

    def get_state(self) -> np.ndarray:
        # Overlay the falling piece on a copy of the grid, negative codes mark it
        state = self.board.clone_state()
        if not self.active_piece.is_empty:
            for x, y in self.active_piece.cells_at(self.active_x, self.active_y):
                if self.board.is_inside(x, y):
                    state[y, x] = -int(self.active_piece.variant)
        return state
