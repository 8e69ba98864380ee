"""Game module for Blockfall.

Exports the falling-block engine and supporting classes:
- Piece / Variant: tetromino cell offsets and rotation
- GameGrid: locked-cell board and line clearing
- ScoringRules: points per cleared row
- BoardEngine: tick/move/drop/lock cycle and game state
"""

from .grid import GameGrid
from .pieces import PLAYABLE_VARIANTS, Piece, RandomSource, Variant, spawn_random
from .rules import ScoringRules
from .core import Action, BoardEngine, EngineListener, GameConfig, GameState, GameStatus

__all__ = [
    "GameGrid",
    "Piece",
    "Variant",
    "PLAYABLE_VARIANTS",
    "RandomSource",
    "spawn_random",
    "ScoringRules",
    "Action",
    "BoardEngine",
    "EngineListener",
    "GameConfig",
    "GameState",
    "GameStatus",
]
