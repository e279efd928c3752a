"""
Nim adapter (normal play: whoever takes the last object wins).
Teaching notes:
- A move names a heap and the size that heap is reduced to, not the number of
  objects removed. Moves are listed heap by heap, smallest new size first.
- The heuristic only recognises the end of the game: 1 for a move that empties
  the board, 0 otherwise. Everything else is left to the search.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, NamedTuple, Tuple

from .errors import InvalidPositionError
from .game import IN_PROGRESS, Outcome, won
from .game_basics import X, opponent


class NimMove(NamedTuple):
    heap: int
    new_size: int


@dataclass(frozen=True)
class NimState:
    heaps: Tuple[int, ...]
    to_move: int = X

    @property
    def is_empty(self) -> bool:
        return all(h == 0 for h in self.heaps)


def parse_heaps(raw: str) -> Tuple[int, ...]:
    try:
        heaps = tuple(int(x) for x in raw.split(",") if x.strip())
    except ValueError:
        raise InvalidPositionError(f"Heaps must be comma-separated integers: {raw!r}") from None
    if not heaps:
        raise InvalidPositionError("At least one heap is required.")
    if any(h < 0 for h in heaps):
        raise InvalidPositionError(f"Heap sizes must be non-negative: {raw!r}")
    return heaps


def nim_sum(heaps: Tuple[int, ...]) -> int:
    total = 0
    for h in heaps:
        total ^= h
    return total


class Nim:
    """Game adapter for multi-heap Nim."""

    def get_moves(self, state: NimState) -> List[NimMove]:
        return [
            NimMove(i, size)
            for i, heap in enumerate(state.heaps)
            for size in range(heap)
        ]

    def apply_move(self, state: NimState, move: NimMove) -> NimState:
        heaps = list(state.heaps)
        heaps[move.heap] = move.new_size
        return NimState(tuple(heaps), opponent(state.to_move))

    def heuristic(self, state: NimState, move: NimMove) -> int:
        return 1 if self.apply_move(state, move).is_empty else 0

    def check_winner(self, state: NimState) -> Outcome:
        if state.is_empty:
            # the player who just moved took the last object
            return won(opponent(state.to_move))
        return IN_PROGRESS


NIM = Nim()
