"""
Move ordering for tic-tac-toe.

Candidate moves are sorted into priority buckets, the first matching bucket
deciding a move's rank:

1. completes a line for the mover
2. blocks a line the opponent would complete next
3. the center
4. a corner
5. an edge that creates two simultaneous threats (a fork)
6. any other edge

Sorting is stable, so moves in the same bucket keep generator order. Good
moves first means more alpha-beta cutoffs and stronger tie-breaks at shallow
depth.
"""
from __future__ import annotations

from typing import Dict, List, Optional

from .game_basics import CENTER, CORNERS, index_of
from .tactics import fork_moves, immediate_blocking_moves, immediate_winning_moves
from .tictactoe_game import TICTACTOE, Move, Position

WIN = 0
BLOCK = 1
CENTER_CELL = 2
CORNER = 3
FORK = 4
OTHER = 5

PRIORITY_NAMES = {
    WIN: "win",
    BLOCK: "block",
    CENTER_CELL: "center",
    CORNER: "corner",
    FORK: "fork",
    OTHER: "edge",
}


def move_priorities(position: Position) -> Dict[Move, int]:
    board, player = position.cells, position.to_move
    wins = set(immediate_winning_moves(board, player))
    blocks = set(immediate_blocking_moves(board, player))
    forks = set(fork_moves(board, player))
    priorities: Dict[Move, int] = {}
    for move in TICTACTOE.get_moves(position):
        i = index_of(move)
        if i in wins:
            priorities[move] = WIN
        elif i in blocks:
            priorities[move] = BLOCK
        elif i == CENTER:
            priorities[move] = CENTER_CELL
        elif i in CORNERS:
            priorities[move] = CORNER
        elif i in forks:
            priorities[move] = FORK
        else:
            priorities[move] = OTHER
    return priorities


def order_moves(position: Position) -> List[Move]:
    priorities = move_priorities(position)
    return sorted(priorities, key=priorities.__getitem__)


def tactical_move(position: Position) -> Optional[Move]:
    """The first winning move, else the first blocking move, else None."""
    priorities = move_priorities(position)
    for move in sorted(priorities, key=priorities.__getitem__):
        return move if priorities[move] in (WIN, BLOCK) else None
    return None
