import pytest

from gametree import move_search
from gametree.errors import InvalidPositionError
from gametree.game import IN_PROGRESS, won
from gametree.nim import NIM, NimMove, NimState, nim_sum, parse_heaps


def test_single_heap_moves_are_target_sizes_in_ascending_order():
    assert NIM.get_moves(NimState((5,))) == [
        NimMove(0, 0), NimMove(0, 1), NimMove(0, 2), NimMove(0, 3), NimMove(0, 4),
    ]


def test_two_single_heaps():
    assert NIM.get_moves(NimState((1, 1))) == [NimMove(0, 0), NimMove(1, 0)]


def test_empty_board_has_no_moves():
    assert NIM.get_moves(NimState((0, 0, 0))) == []


def test_apply_move_returns_new_state():
    s = NimState((3, 4))
    t = NIM.apply_move(s, NimMove(1, 2))
    assert s.heaps == (3, 4)
    assert t.heaps == (3, 2)
    assert t.to_move == 2


def test_heuristic_rewards_taking_the_last_object():
    assert NIM.heuristic(NimState((3,)), NimMove(0, 0)) == 1
    assert NIM.heuristic(NimState((3,)), NimMove(0, 1)) == 0
    assert NIM.heuristic(NimState((1, 2)), NimMove(0, 0)) == 0


def test_check_winner_credits_the_player_who_moved_last():
    assert NIM.check_winner(NimState((1, 2))) == IN_PROGRESS
    finished = NIM.apply_move(NimState((2,), to_move=1), NimMove(0, 0))
    assert NIM.check_winner(finished) == won(1)


@pytest.mark.parametrize("search", [move_search.minimax, move_search.alphabeta])
def test_search_finds_the_zero_nim_sum_reply(search):
    s = NimState((1, 2))
    move = search(3, NIM.heuristic, NIM.get_moves, NIM.apply_move, s)
    assert move == NimMove(1, 1)
    assert nim_sum(NIM.apply_move(s, move).heaps) == 0


@pytest.mark.parametrize("search", [move_search.minimax, move_search.alphabeta])
def test_depth_zero_takes_the_whole_last_heap(search):
    assert search(0, NIM.heuristic, NIM.get_moves, NIM.apply_move, NimState((4,))) == NimMove(0, 0)


@pytest.mark.parametrize("heaps", [(1, 2, 3), (2, 2), (1, 3), (3,), (1, 1, 2)])
def test_minimax_and_alphabeta_agree(heaps):
    s = NimState(heaps)
    depth = sum(heaps)
    a = move_search.minimax(depth, NIM.heuristic, NIM.get_moves, NIM.apply_move, s)
    b = move_search.alphabeta(depth, NIM.heuristic, NIM.get_moves, NIM.apply_move, s)
    assert a == b


def test_parse_heaps():
    assert parse_heaps("3, 4,5") == (3, 4, 5)
    for bad in ["", "a,b", "1,-2"]:
        with pytest.raises(InvalidPositionError):
            parse_heaps(bad)
