"""
Score-only game-tree search: plain minimax and alpha-beta.
Teaching notes:
- The tree is given by ``get_children(state) -> [state]``; ``heuristic(state)``
  evaluates a position statically from the maximizer's point of view.
- Leaves are nodes at depth 0 or without children. Nothing else is evaluated.
- Children are visited in the order given, so ties resolve to the first child.
- Alpha-beta returns the same value as minimax; it only visits fewer nodes.
"""
from __future__ import annotations

from typing import Callable, List, Optional, TypeVar

from .metrics import SearchStats

S = TypeVar("S")

Heuristic = Callable[[S], float]
Children = Callable[[S], List[S]]


def minimax(
    depth: int,
    maximizing: bool,
    heuristic: Heuristic,
    get_children: Children,
    state: S,
    stats: Optional[SearchStats] = None,
) -> float:
    if stats is not None:
        stats.nodes += 1
    children = get_children(state) if depth > 0 else []
    if not children:
        if stats is not None:
            stats.leaf_evals += 1
        return heuristic(state)
    scores = (
        minimax(depth - 1, not maximizing, heuristic, get_children, child, stats)
        for child in children
    )
    return max(scores) if maximizing else min(scores)


def alphabeta(
    alpha: float,
    beta: float,
    depth: int,
    maximizing: bool,
    heuristic: Heuristic,
    get_children: Children,
    state: S,
    stats: Optional[SearchStats] = None,
) -> float:
    if stats is not None:
        stats.nodes += 1
    children = get_children(state) if depth > 0 else []
    if not children:
        if stats is not None:
            stats.leaf_evals += 1
        return heuristic(state)
    if maximizing:
        best = float("-inf")
        for i, child in enumerate(children):
            score = alphabeta(alpha, beta, depth - 1, False, heuristic, get_children, child, stats)
            best = max(best, score)
            alpha = max(alpha, score)
            if alpha >= beta:
                if stats is not None and i < len(children) - 1:
                    stats.cutoffs += 1
                break
        return best
    best = float("inf")
    for i, child in enumerate(children):
        score = alphabeta(alpha, beta, depth - 1, True, heuristic, get_children, child, stats)
        best = min(best, score)
        beta = min(beta, score)
        if alpha >= beta:
            if stats is not None and i < len(children) - 1:
                stats.cutoffs += 1
            break
    return best
