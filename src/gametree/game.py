"""
Game adapter contract shared by every concrete game.
Teaching notes:
- The search functions only ever see four callables: move generation, move
  application, a heuristic and (for callers) a winner check.
- States and moves are immutable values; apply_move returns a new state.
- A terminal state has no legal moves.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Protocol, TypeVar

S = TypeVar("S")
M = TypeVar("M")


class Status(str, Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    DRAW = "draw"


@dataclass(frozen=True)
class Outcome:
    status: Status
    winner: Optional[int] = None

    @property
    def is_terminal(self) -> bool:
        return self.status is not Status.IN_PROGRESS


IN_PROGRESS = Outcome(Status.IN_PROGRESS)
DRAW = Outcome(Status.DRAW)


def won(player: int) -> Outcome:
    return Outcome(Status.WON, player)


class Game(Protocol[S, M]):
    """Capability set a game must provide to be searched."""

    def get_moves(self, state: S) -> List[M]:
        ...

    def apply_move(self, state: S, move: M) -> S:
        ...

    def heuristic(self, state: S, move: M) -> int:
        """Score ``move`` from the point of view of the player making it."""
        ...

    def check_winner(self, state: S) -> Outcome:
        ...
