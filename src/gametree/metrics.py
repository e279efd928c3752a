"""
Search observations.
- SearchMetrics: one immutable record per top-level decision (how it was made).
- SearchStats: optional mutable counters threaded through the search core to
  measure how much of the tree was explored.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Generic, Optional, TypeVar

M = TypeVar("M")


@dataclass(frozen=True)
class SearchMetrics:
    """How a decision was made. search_depth is the requested depth bound, not the plies left."""

    immediate_move: bool
    search_depth: int


@dataclass(frozen=True)
class MoveChoice(Generic[M]):
    move: Optional[M]
    metrics: SearchMetrics

    @property
    def immediate_move(self) -> bool:
        return self.metrics.immediate_move

    @property
    def search_depth(self) -> int:
        return self.metrics.search_depth


@dataclass
class SearchStats:
    nodes: int = 0
    leaf_evals: int = 0
    cutoffs: int = 0

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
