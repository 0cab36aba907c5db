import random

from hypothesis import given, settings, strategies as st

from engine.constants import EMPTY
from engine.evaluate import check_tie, check_winner
from engine.patterns import generate_patterns
from engine.search import get_best_move


slots = st.sampled_from([EMPTY, "x", "o"])


@st.composite
def boards(draw, sizes=(3, 4, 5)):
    size = draw(st.sampled_from(sizes))
    return draw(st.lists(slots, min_size=size * size, max_size=size * size))


@given(boards())
def test_tie_iff_no_empty_slot(board):
    assert check_tie(board) == (EMPTY not in board)


@given(boards(), st.sampled_from(["x", "o"]))
def test_reported_pattern_is_first_complete_line(board, mark):
    result = check_winner(board, mark)
    complete = [p for p in generate_patterns(int(len(board) ** 0.5)) if all(board[i] == mark for i in p)]
    if complete:
        assert result.is_win and result.pattern == complete[0]
    else:
        assert not result.is_win and result.pattern is None


@settings(max_examples=40, deadline=None)
@given(boards(), st.integers(min_value=0, max_value=2**16))
def test_best_move_is_empty_slot_or_none(board, seed):
    before = list(board)
    move = get_best_move(board, random.Random(seed))
    assert board == before
    if EMPTY in board:
        assert move is not None and board[move] == EMPTY
    else:
        assert move is None
