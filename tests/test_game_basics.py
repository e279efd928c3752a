import pytest

from gametree.errors import EngineError, InvalidPositionError
from gametree.game import DRAW, IN_PROGRESS, Status, won
from gametree.game_basics import (
    WIN_PATTERNS,
    current_player,
    get_winner,
    index_of,
    is_draw,
    is_valid_state,
    move_of,
)
from gametree.tictactoe_game import TICTACTOE, Position, parse_player, score_board, WIN_SCORE


@pytest.mark.parametrize("pattern", WIN_PATTERNS)
@pytest.mark.parametrize("player", [1, 2])
def test_every_line_is_a_win(pattern, player):
    cells = [0] * 9
    for i in pattern:
        cells[i] = player
    outcome = TICTACTOE.check_winner(Position(tuple(cells), 1))
    assert outcome == won(player)
    assert outcome.is_terminal


def test_full_board_without_line_is_draw():
    draw = Position((1, 1, 2, 2, 2, 1, 1, 2, 1), 2)
    assert is_draw(list(draw.cells))
    assert TICTACTOE.check_winner(draw) == DRAW
    assert TICTACTOE.get_moves(draw) == []


def test_open_board_is_in_progress():
    p = Position.from_string("100020000")
    assert TICTACTOE.check_winner(p) == IN_PROGRESS
    assert not TICTACTOE.check_winner(p).is_terminal


def test_win_overrides_draw_on_full_board():
    full_with_line = Position.from_string("111221122")
    outcome = TICTACTOE.check_winner(full_with_line)
    assert outcome.status is Status.WON
    assert outcome.winner == 1


def test_won_board_has_no_moves():
    p = Position.from_string("111220000")
    assert get_winner(p.cells) == 1
    assert TICTACTOE.get_moves(p) == []


def test_moves_are_row_major_and_apply_is_pure():
    p = Position.from_string("100020000")
    assert p.to_move == 1
    assert TICTACTOE.get_moves(p) == [(0, 1), (0, 2), (1, 0), (1, 2), (2, 0), (2, 1), (2, 2)]
    child = TICTACTOE.apply_move(p, (2, 2))
    assert p.cells == (1, 0, 0, 0, 2, 0, 0, 0, 0)
    assert child.cells == (1, 0, 0, 0, 2, 0, 0, 0, 1)
    assert child.to_move == 2


def test_index_and_move_conversions():
    for i in range(9):
        assert index_of(move_of(i)) == i
    assert move_of(5) == (1, 2)


def test_from_rows_accepts_symbols():
    p = Position.from_rows([["X", "X", ""], [None, "_", "."], [0, "o", 2]], "O")
    assert p.cells == (1, 1, 0, 0, 0, 0, 0, 2, 2)
    assert p.to_move == 2
    assert p.to_rows() == [[1, 1, 0], [0, 0, 0], [0, 2, 2]]
    assert str(p) == "110000022"


@pytest.mark.parametrize("bad", ["abc", "012345678", "0123456789", "12345678x", ""])
def test_from_string_rejects_malformed(bad):
    with pytest.raises(InvalidPositionError):
        Position.from_string(bad)


def test_from_rows_rejects_bad_shape_and_symbols():
    with pytest.raises(InvalidPositionError):
        Position.from_rows([["X", "X"], ["", "", ""], ["", "", ""]])
    with pytest.raises(InvalidPositionError):
        Position.from_rows([["Z", "", ""], ["", "", ""], ["", "", ""]])
    with pytest.raises(InvalidPositionError):
        parse_player("Q")


def test_invalid_position_error_envelope():
    err = InvalidPositionError("bad board")
    assert isinstance(err, ValueError)
    assert isinstance(err, EngineError)
    assert err.to_dict() == {"message": "bad board", "errorType": "InvalidPosition", "recoverable": True}


def test_validity_and_side_to_move():
    assert is_valid_state([0] * 9)
    assert current_player([0] * 9) == 1
    assert current_player([1, 0, 0, 0, 0, 0, 0, 0, 0]) == 2
    assert not is_valid_state([2, 2, 0, 0, 0, 0, 0, 0, 0])
    assert not is_valid_state([1, 1, 1, 2, 2, 2, 1, 1, 1])


def test_score_board_scale():
    x_won = [1, 1, 1, 2, 2, 0, 0, 0, 0]
    assert score_board(x_won, 1) == WIN_SCORE + 4
    assert score_board(x_won, 2) == -(WIN_SCORE + 4)
    assert score_board([1, 1, 2, 2, 2, 1, 1, 2, 1], 1) == 0
    assert abs(score_board([1, 0, 0, 0, 2, 0, 0, 0, 0], 1)) < WIN_SCORE
