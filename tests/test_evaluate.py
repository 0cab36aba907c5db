import pytest

from engine.constants import EMPTY, WIN_SCORE
from engine.evaluate import board_size, check_tie, check_winner, evaluate_board
from engine.patterns import generate_patterns

from conftest import parse_board


@pytest.mark.parametrize("size", [3, 4, 5])
def test_every_pattern_is_detected(size: int):
    for pat in generate_patterns(size):
        board = [EMPTY] * (size * size)
        for idx in pat:
            board[idx] = "x"
        result = check_winner(board, "x")
        assert result.is_win
        assert result.pattern == pat
        assert not check_winner(board, "o").is_win


def test_no_line_no_win():
    board = parse_board("""
        x o x
        x o o
        o x x
    """)
    assert not check_winner(board, "x").is_win
    assert not check_winner(board, "o").is_win
    assert check_winner(board, "x").pattern is None


def test_first_matching_pattern_is_reported():
    # Row 0 and column 0 both complete; rows come first.
    board = parse_board("""
        x x x
        x o o
        x o o
    """)
    assert check_winner(board, "x").pattern == (0, 1, 2)


def test_tie_is_independent_of_win():
    full_won = parse_board("xxxooxoxo")
    assert check_winner(full_won, "x").is_win
    assert check_tie(full_won)

    assert not check_tie(parse_board("xo......."))
    assert not check_tie([EMPTY] * 16)


def test_board_size():
    assert board_size([EMPTY] * 9) == 3
    assert board_size([EMPTY] * 25) == 5
    with pytest.raises(ValueError):
        board_size([EMPTY] * 10)
    with pytest.raises(ValueError):
        board_size([])


def test_check_winner_rejects_non_square_board():
    with pytest.raises(ValueError):
        check_winner([EMPTY] * 8, "x")


def test_evaluate_board_scores():
    o_win = parse_board("ooo xx. x..")
    x_win = parse_board("xxx oo. o..")
    open_board = parse_board("xo. ... ...")
    assert evaluate_board(o_win, 2, "o", "x") == WIN_SCORE - 2
    assert evaluate_board(x_win, 3, "o", "x") == 3 - WIN_SCORE
    assert evaluate_board(open_board, 0, "o", "x") == 0
