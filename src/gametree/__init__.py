"""gametree package.

Generic minimax and alpha-beta search, game adapters for tic-tac-toe and Nim,
and a tic-tac-toe move-selection layer with tactical shortcuts and adaptive depth.

Convenience imports are exposed for common workflows.
"""

from .config import EngineConfig
from .engine import find_best_move, find_best_move_with_metrics, score_position
from .metrics import MoveChoice, SearchMetrics, SearchStats
from .nim import NIM, NimMove, NimState
from .tictactoe_game import TICTACTOE, Position

__all__ = [
    "find_best_move",
    "find_best_move_with_metrics",
    "score_position",
    "EngineConfig",
    "MoveChoice",
    "SearchMetrics",
    "SearchStats",
    "Position",
    "TICTACTOE",
    "NimMove",
    "NimState",
    "NIM",
]
