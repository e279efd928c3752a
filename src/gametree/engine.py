"""
Move selection: tactical shortcuts first, then a depth-adaptive search.
Teaching notes:
- Stage 1 answers immediately when the mover can win or must block; no tree is
  searched and the metrics record depth 0.
- Stage 2 picks a depth from the number of empty cells (fewer empty cells, deeper
  search) and runs the best-move search over ordered candidates.
- The search stops at real game ends, so a depth bound larger than the plies left
  simply means an exhaustive search.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, List, Optional, Union

from . import move_search, score_search
from .config import EngineConfig
from .game import Game
from .game_basics import empty_cells
from .metrics import MoveChoice, SearchMetrics, SearchStats
from .move_ordering import order_moves, tactical_move
from .tictactoe_game import TICTACTOE, Move, Position, parse_player, score_board

_SEARCHES = {
    "alphabeta": move_search.alphabeta,
    "minimax": move_search.minimax,
}


def _search_fn(algorithm: str) -> Callable:
    try:
        return _SEARCHES[algorithm]
    except KeyError:
        raise ValueError(f"Unknown algorithm: {algorithm!r}") from None


def search_game(
    game: Game,
    state,
    depth: int,
    algorithm: str = "alphabeta",
    get_moves: Optional[Callable[[object], List[object]]] = None,
    stats: Optional[SearchStats] = None,
):
    """Best move for any game adapter, or None on a terminal state."""
    search = _search_fn(algorithm)
    return search(depth, game.heuristic, get_moves or game.get_moves, game.apply_move, state, stats)


def choose_depth(empty: int, config: Optional[EngineConfig] = None) -> int:
    cfg = config or EngineConfig()
    if empty >= 9:
        return cfg.opening_depth
    if empty >= 7:
        return cfg.midgame_depth
    return cfg.max_depth


def _with_mover(position: Position, player: Optional[Union[int, str]]) -> Position:
    if player is None:
        return position
    return replace(position, to_move=parse_player(player))


def find_best_move_with_metrics(
    position: Position,
    player: Optional[Union[int, str]] = None,
    config: Optional[EngineConfig] = None,
    stats: Optional[SearchStats] = None,
) -> MoveChoice[Move]:
    cfg = config or EngineConfig()
    position = _with_mover(position, player)
    if not TICTACTOE.get_moves(position):
        logging.debug("board=%s terminal, no move", position)
        return MoveChoice(None, SearchMetrics(immediate_move=False, search_depth=0))

    if cfg.use_shortcuts:
        move = tactical_move(position)
        if move is not None:
            logging.debug("board=%s to_move=%d immediate move=%s", position, position.to_move, move)
            return MoveChoice(move, SearchMetrics(immediate_move=True, search_depth=0))

    depth = choose_depth(len(empty_cells(position.cells)), cfg)
    get_moves = order_moves if cfg.use_ordering else TICTACTOE.get_moves
    move = search_game(TICTACTOE, position, depth, cfg.algorithm, get_moves=get_moves, stats=stats)
    logging.debug("board=%s to_move=%d depth=%d move=%s", position, position.to_move, depth, move)
    return MoveChoice(move, SearchMetrics(immediate_move=False, search_depth=depth))


def find_best_move(
    position: Position,
    player: Optional[Union[int, str]] = None,
    config: Optional[EngineConfig] = None,
) -> Optional[Move]:
    return find_best_move_with_metrics(position, player, config).move


def find_best_move_fixed_depth(
    position: Position,
    player: Optional[Union[int, str]] = None,
    depth: int = 9,
    algorithm: str = "alphabeta",
    use_ordering: bool = False,
    stats: Optional[SearchStats] = None,
) -> Optional[Move]:
    """Plain search at a fixed depth: no shortcuts, generator order unless asked."""
    position = _with_mover(position, player)
    get_moves = order_moves if use_ordering else TICTACTOE.get_moves
    return search_game(TICTACTOE, position, depth, algorithm, get_moves=get_moves, stats=stats)


def score_position(
    position: Position,
    player: Optional[Union[int, str]] = None,
    depth: int = 9,
    algorithm: str = "alphabeta",
    stats: Optional[SearchStats] = None,
) -> float:
    """Root value of a position for the side to move (score-only search)."""
    position = _with_mover(position, player)
    root_player = position.to_move

    def heuristic(p: Position) -> float:
        return score_board(p.cells, root_player)

    if algorithm == "minimax":
        return score_search.minimax(depth, True, heuristic, TICTACTOE.children, position, stats)
    if algorithm == "alphabeta":
        return score_search.alphabeta(float("-inf"), float("inf"), depth, True, heuristic,
                                      TICTACTOE.children, position, stats)
    raise ValueError(f"Unknown algorithm: {algorithm!r}")
