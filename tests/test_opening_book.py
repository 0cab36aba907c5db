import random

import pytest

from engine.constants import CORNER_SQUARES, OPENING_SQUARES
from engine.opening_book import get_opening_move

from conftest import parse_board


def test_empty_board_opens_center_or_corner():
    seen = set()
    for seed in range(200):
        move = get_opening_move(parse_board("........."), random.Random(seed))
        assert move in OPENING_SQUARES
        seen.add(move)
    assert seen == set(OPENING_SQUARES)


def test_center_opening_answered_in_a_corner():
    seen = {get_opening_move(parse_board("....x...."), random.Random(s)) for s in range(200)}
    assert seen == set(CORNER_SQUARES)


@pytest.mark.parametrize("opening", [0, 1, 2, 3, 5, 6, 7, 8])
def test_corner_or_edge_opening_answered_in_center(opening: int, rng):
    board = parse_board(".........")
    board[opening] = "x"
    assert get_opening_move(board, rng) == 4


def test_book_abstains_after_two_plies(rng):
    assert get_opening_move(parse_board("x...o...."), rng) is None


def test_book_only_covers_3x3(rng):
    assert get_opening_move([""] * 16, rng) is None
    assert get_opening_move([""] * 25, rng) is None
