import pytest

from gametree import move_search
from gametree.metrics import SearchStats
from gametree.move_ordering import order_moves
from gametree.nim import NIM, NimState
from gametree.tictactoe_game import TICTACTOE, Position

SEARCHES = [move_search.minimax, move_search.alphabeta]


def _search(search, depth, position, get_moves=TICTACTOE.get_moves, stats=None):
    return search(depth, TICTACTOE.heuristic, get_moves, TICTACTOE.apply_move, position, stats)


@pytest.mark.parametrize("search", SEARCHES)
@pytest.mark.parametrize("board", ["111220000", "112221121", "112211221"])
def test_terminal_positions_yield_none(search, board):
    p = Position.from_string(board)
    assert TICTACTOE.get_moves(p) == []
    assert _search(search, 9, p) is None
    assert _search(search, 0, p) is None


@pytest.mark.parametrize("search", SEARCHES)
def test_terminal_nim_yields_none(search):
    assert search(3, NIM.heuristic, NIM.get_moves, NIM.apply_move, NimState((0, 0))) is None


@pytest.mark.parametrize("search", SEARCHES)
@pytest.mark.parametrize("depth", [0, 1, 9])
def test_takes_immediate_win(search, depth):
    p = Position.from_rows([["X", "X", ""], ["", "", ""], ["", "", ""]], "X")
    assert _search(search, depth, p) == (0, 2)


@pytest.mark.parametrize("search", SEARCHES)
def test_blocks_immediate_loss(search):
    p = Position.from_rows([["O", "O", ""], ["", "", ""], ["", "", ""]], "X")
    assert _search(search, 9, p) == (0, 2)


@pytest.mark.parametrize("search", SEARCHES)
def test_prefers_win_over_block(search):
    p = Position.from_string("110220000")
    assert _search(search, 9, p) == (0, 2)


def test_empty_board_full_depth_plays_first_drawing_move():
    move = _search(move_search.alphabeta, 9, Position.empty())
    assert move == (0, 0)


def test_empty_board_with_ordering_plays_center():
    move = _search(move_search.alphabeta, 9, Position.empty(), get_moves=order_moves)
    assert move == (1, 1)


@pytest.mark.parametrize(
    "board",
    ["100020000", "120010000", "121020010", "102000000", "100000002", "000010000", "120120000"],
)
@pytest.mark.parametrize("depth", [0, 1, 2, 4, 9])
def test_alphabeta_move_equals_minimax_move(board, depth):
    p = Position.from_string(board)
    full, pruned = SearchStats(), SearchStats()
    a = _search(move_search.minimax, depth, p, stats=full)
    b = _search(move_search.alphabeta, depth, p, stats=pruned)
    assert a == b
    assert pruned.nodes <= full.nodes


@pytest.mark.parametrize("board", ["100020000", "121020010"])
def test_alphabeta_equals_minimax_with_ordering(board):
    p = Position.from_string(board)
    a = _search(move_search.minimax, 9, p, get_moves=order_moves)
    b = _search(move_search.alphabeta, 9, p, get_moves=order_moves)
    assert a == b


def test_first_of_equal_moves_wins_tie():
    # O replying to a center X: the four corners share the best static score
    p = Position.from_string("000010000")
    scores = dict(move_search.evaluate_moves(0, TICTACTOE.heuristic, TICTACTOE.get_moves,
                                             TICTACTOE.apply_move, p))
    best = max(scores.values())
    first_best = next(m for m in TICTACTOE.get_moves(p) if scores[m] == best)
    assert _search(move_search.minimax, 0, p) == first_best
    reversed_moves = lambda s: list(reversed(TICTACTOE.get_moves(s)))  # noqa: E731
    tied = [m for m in TICTACTOE.get_moves(p) if scores[m] == best]
    assert tied == [(0, 0), (0, 2), (2, 0), (2, 2)]
    assert _search(move_search.minimax, 0, p, get_moves=reversed_moves) == tied[-1]


def test_evaluate_moves_scores_every_root_move():
    p = Position.from_string("110220000")
    scored = move_search.evaluate_moves(9, TICTACTOE.heuristic, TICTACTOE.get_moves,
                                        TICTACTOE.apply_move, p)
    assert [m for m, _ in scored] == TICTACTOE.get_moves(p)
    assert max(scored, key=lambda ms: ms[1])[0] == (0, 2)


def test_search_does_not_mutate_state():
    p = Position.from_string("100020000")
    before = (p.cells, p.to_move)
    _search(move_search.alphabeta, 9, p)
    assert (p.cells, p.to_move) == before


def test_repeated_search_is_deterministic():
    p = Position.from_string("102000000")
    assert _search(move_search.alphabeta, 4, p) == _search(move_search.alphabeta, 4, p)
