"""
Tactics and simple motifs: immediate wins/blocks, forks, safety checks.
Teaching notes:
- Local motifs catch near-term threats before any deep search.
- All helpers take a flat 9-cell board and return cell indices in board order.
"""
from typing import List, Sequence

from .game_basics import EMPTY, get_winner, opponent


def _with(board: Sequence[int], i: int, player: int) -> List[int]:
    b = list(board)
    b[i] = player
    return b


def immediate_winning_moves(board: Sequence[int], player: int) -> List[int]:
    if get_winner(board) != 0:
        return []
    wins: List[int] = []
    for i, v in enumerate(board):
        if v != EMPTY:
            continue
        if get_winner(_with(board, i, player)) == player:
            wins.append(i)
    return wins


def immediate_blocking_moves(board: Sequence[int], player: int) -> List[int]:
    """Cells the opponent would complete a line on with their next move."""
    return immediate_winning_moves(board, opponent(player))


def fork_moves(board: Sequence[int], player: int) -> List[int]:
    if get_winner(board) != 0:
        return []
    forks: List[int] = []
    for i, v in enumerate(board):
        if v != EMPTY:
            continue
        if len(immediate_winning_moves(_with(board, i, player), player)) >= 2:
            forks.append(i)
    return forks


def gives_opponent_immediate_win(board: Sequence[int], player: int, move: int) -> bool:
    if board[move] != EMPTY:
        return False
    return len(immediate_winning_moves(_with(board, move, player), opponent(player))) > 0
