"""
Board basics: cell encoding, serialization, rules, winner/draw checks, validity.
Teaching notes:
- A board is 9 cells in row-major order: 0=empty, 1=X, 2=O. X always starts.
- A "ply" is a half-move (one player's turn).
- Valid states have counts either equal (X to move) or X has one more (O to move).
"""
from typing import List, Sequence, Tuple

EMPTY = 0
X = 1
O = 2

WIN_PATTERNS = [
    [0, 1, 2], [3, 4, 5], [6, 7, 8],
    [0, 3, 6], [1, 4, 7], [2, 5, 8],
    [0, 4, 8], [2, 4, 6]
]

CENTER = 4
CORNERS = (0, 2, 6, 8)


def opponent(player: int) -> int:
    return O if player == X else X


def serialize_board(board: Sequence[int]) -> str:
    return ''.join(str(cell) for cell in board)


def deserialize_board(board_str: str) -> List[int]:
    return [int(cell) for cell in board_str]


def index_of(move: Tuple[int, int]) -> int:
    row, col = move
    return row * 3 + col


def move_of(index: int) -> Tuple[int, int]:
    return divmod(index, 3)


def empty_cells(board: Sequence[int]) -> List[int]:
    return [i for i, v in enumerate(board) if v == EMPTY]


def get_winner(board: Sequence[int]) -> int:
    for pattern in WIN_PATTERNS:
        a, b, c = pattern
        v = board[a]
        if v != EMPTY and v == board[b] and v == board[c]:
            return v
    return 0


def is_draw(board: Sequence[int]) -> bool:
    return EMPTY not in board and get_winner(board) == 0


def get_piece_counts(board: Sequence[int]) -> Tuple[int, int]:
    return list(board).count(X), list(board).count(O)


def is_valid_state(board: Sequence[int]) -> bool:
    x_count, o_count = get_piece_counts(board)
    if not (x_count == o_count or x_count == o_count + 1):
        return False
    w = get_winner(board)
    if w == X and x_count != o_count + 1:
        return False
    if w == O and x_count != o_count:
        return False
    # no double winners
    def count_wins(p: int) -> int:
        return sum(1 for pat in WIN_PATTERNS if all(board[i] == p for i in pat))
    if count_wins(X) > 0 and count_wins(O) > 0:
        return False
    return True


def current_player(board: Sequence[int]) -> int:
    x, o = get_piece_counts(board)
    return X if x == o else O
