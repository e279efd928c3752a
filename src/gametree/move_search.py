"""
Best-move search: minimax and alpha-beta returning the move to play.
Teaching notes:
- ``heuristic(state, move)`` scores a move for the player making it.
- Each root move becomes a node (state, move, sign) and is scored by the
  score-only search, so leaf and backup rules are shared with it. ``sign``
  is +1 for moves by the root player and -1 for the opponent's replies.
- ``depth`` counts the replies searched below each root move; at depth 0
  every legal move is scored by the heuristic alone.
- The first move with the strictly best score wins, so generator order breaks
  ties. Alpha-beta returns the same move as minimax.
"""
from __future__ import annotations

from typing import Callable, Generic, List, NamedTuple, Optional, Tuple, TypeVar

from . import score_search
from .metrics import SearchStats

S = TypeVar("S")
M = TypeVar("M")

MoveHeuristic = Callable[[S, M], float]
MoveGenerator = Callable[[S], List[M]]
MoveApplier = Callable[[S, M], S]


class _Node(NamedTuple):
    state: object
    move: object
    sign: int


class _Tree(Generic[S, M]):
    """Adapts a move-based game to the state-based score search."""

    def __init__(self, heuristic: MoveHeuristic, get_moves: MoveGenerator,
                 apply_move: MoveApplier) -> None:
        self._heuristic = heuristic
        self._get_moves = get_moves
        self._apply_move = apply_move

    def leaf(self, node: _Node) -> float:
        return node.sign * self._heuristic(node.state, node.move)

    def children(self, node: _Node) -> List[_Node]:
        child = self._apply_move(node.state, node.move)
        return [_Node(child, m, -node.sign) for m in self._get_moves(child)]


def minimax(
    depth: int,
    heuristic: MoveHeuristic,
    get_moves: MoveGenerator,
    apply_move: MoveApplier,
    state: S,
    stats: Optional[SearchStats] = None,
) -> Optional[M]:
    tree = _Tree(heuristic, get_moves, apply_move)
    best_move: Optional[M] = None
    best_score = float("-inf")
    for move in get_moves(state):
        score = score_search.minimax(
            depth, False, tree.leaf, tree.children, _Node(state, move, 1), stats
        )
        if best_move is None or score > best_score:
            best_move, best_score = move, score
    return best_move


def alphabeta(
    depth: int,
    heuristic: MoveHeuristic,
    get_moves: MoveGenerator,
    apply_move: MoveApplier,
    state: S,
    stats: Optional[SearchStats] = None,
) -> Optional[M]:
    tree = _Tree(heuristic, get_moves, apply_move)
    best_move: Optional[M] = None
    best_score = float("-inf")
    for move in get_moves(state):
        # a reply that fails low returns at most best_score, never a strict improvement
        score = score_search.alphabeta(
            best_score, float("inf"), depth, False, tree.leaf, tree.children,
            _Node(state, move, 1), stats,
        )
        if best_move is None or score > best_score:
            best_move, best_score = move, score
    return best_move


def evaluate_moves(
    depth: int,
    heuristic: MoveHeuristic,
    get_moves: MoveGenerator,
    apply_move: MoveApplier,
    state: S,
) -> List[Tuple[M, float]]:
    """Exact minimax score of every root move, in generator order."""
    tree = _Tree(heuristic, get_moves, apply_move)
    return [
        (move, score_search.alphabeta(float("-inf"), float("inf"), depth, False,
                                      tree.leaf, tree.children, _Node(state, move, 1)))
        for move in get_moves(state)
    ]
