"""
Tic-tac-toe adapter: positions, move generation, winner detection and heuristics.
Teaching notes:
- A Position carries the 9 cells and the side to move, so boards that are not
  reachable from the empty board (e.g. puzzles) can still be searched.
- Moves are (row, col) tuples, generated left-to-right, top-to-bottom.
- Heuristic scores live on one scale: wins are WIN_SCORE plus the number of
  empty cells left (a faster win is worth more), draws are 0, and unfinished
  positions get a line-threat estimate far below WIN_SCORE.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from .errors import InvalidPositionError
from .game import DRAW, IN_PROGRESS, Outcome, won
from .game_basics import (
    EMPTY,
    O,
    WIN_PATTERNS,
    X,
    current_player,
    deserialize_board,
    empty_cells,
    get_winner,
    index_of,
    move_of,
    opponent,
    serialize_board,
)

Move = Tuple[int, int]

WIN_SCORE = 1000

_SYMBOLS = {
    "x": X, "1": X,
    "o": O, "2": O,
    "": EMPTY, "_": EMPTY, ".": EMPTY, " ": EMPTY, "0": EMPTY, "-": EMPTY,
}


def parse_player(value: Union[int, str]) -> int:
    if isinstance(value, int) and value in (X, O):
        return value
    if isinstance(value, str):
        p = _SYMBOLS.get(value.strip().lower())
        if p in (X, O):
            return p
    raise InvalidPositionError(f"Unknown player: {value!r}")


def _parse_cell(value: Union[int, str, None]) -> int:
    if value is None:
        return EMPTY
    if isinstance(value, int):
        if value in (EMPTY, X, O):
            return value
    elif isinstance(value, str) and value.lower() in _SYMBOLS:
        return _SYMBOLS[value.lower()]
    raise InvalidPositionError(f"Unknown cell value: {value!r}")


@dataclass(frozen=True)
class Position:
    cells: Tuple[int, ...]
    to_move: int = X

    @classmethod
    def empty(cls) -> "Position":
        return cls(tuple([EMPTY] * 9), X)

    @classmethod
    def from_string(cls, raw: str, to_move: Optional[Union[int, str]] = None) -> "Position":
        raw = raw.strip()
        if len(raw) != 9 or any(c not in "012" for c in raw):
            raise InvalidPositionError("Invalid board string. Must be 9 chars of 0/1/2.")
        cells = tuple(deserialize_board(raw))
        mover = current_player(cells) if to_move is None else parse_player(to_move)
        return cls(cells, mover)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Union[int, str, None]]],
                  to_move: Union[int, str] = X) -> "Position":
        if len(rows) != 3 or any(len(r) != 3 for r in rows):
            raise InvalidPositionError("Board must be 3 rows of 3 cells.")
        cells = tuple(_parse_cell(v) for row in rows for v in row)
        return cls(cells, parse_player(to_move))

    def to_rows(self) -> List[List[int]]:
        return [list(self.cells[r * 3:r * 3 + 3]) for r in range(3)]

    def __str__(self) -> str:
        return serialize_board(self.cells)


def line_threats(board: Sequence[int], player: int) -> int:
    """Open-line estimate: lines held only by ``player`` minus lines held only by the opponent."""
    opp = opponent(player)
    score = 0
    for pattern in WIN_PATTERNS:
        mine = sum(1 for i in pattern if board[i] == player)
        theirs = sum(1 for i in pattern if board[i] == opp)
        if mine and not theirs:
            score += mine * mine
        elif theirs and not mine:
            score -= theirs * theirs
    return score


def score_board(board: Sequence[int], player: int) -> int:
    """Static evaluation of a board for ``player``, on the WIN_SCORE scale."""
    w = get_winner(board)
    remaining = len(empty_cells(board))
    if w == player:
        return WIN_SCORE + remaining
    if w != 0:
        return -(WIN_SCORE + remaining)
    if remaining == 0:
        return 0
    return line_threats(board, player)


class TicTacToe:
    """Game adapter for 3x3 tic-tac-toe positions."""

    def get_moves(self, state: Position) -> List[Move]:
        if get_winner(state.cells) != 0:
            return []
        return [move_of(i) for i in empty_cells(state.cells)]

    def apply_move(self, state: Position, move: Move) -> Position:
        lst = list(state.cells)
        lst[index_of(move)] = state.to_move
        return Position(tuple(lst), opponent(state.to_move))

    def heuristic(self, state: Position, move: Move) -> int:
        child = self.apply_move(state, move)
        return score_board(child.cells, state.to_move)

    def check_winner(self, state: Position) -> Outcome:
        w = get_winner(state.cells)
        if w != 0:
            return won(w)
        if EMPTY not in state.cells:
            return DRAW
        return IN_PROGRESS

    def children(self, state: Position) -> List[Position]:
        return [self.apply_move(state, m) for m in self.get_moves(state)]


TICTACTOE = TicTacToe()
