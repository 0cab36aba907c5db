"""
Opening book for the 3x3 board.

The first two plies of 3x3 tic-tac-toe are fully understood, so there is no
point searching them: the book picks a strong square directly and adds some
variety so the computer does not open the same way every game. From the
third ply on the book abstains and the minimax search takes over.
"""

import random

from engine.constants import (
    CENTER_SQUARE,
    CORNER_SQUARES,
    EMPTY,
    EXACT_SEARCH_SIZE,
    OPENING_SQUARES,
)
from engine.evaluate import Board, board_size


def get_opening_move(board: Board, rng: random.Random) -> int | None:
    """
    Return a book move for the position, or None if the book has no entry.

    Book entries:
        - Empty board (computer moves first): center or any corner, chosen
          uniformly.
        - One mark on the board (the opponent moved first): if the center is
          taken, a uniformly chosen corner; after a corner or edge opening,
          always the center.
        - Anything else: no entry.

    Boards other than 3x3 never have a book entry.

    Args:
        board: Current position. Not modified.
        rng:   Random source for the uniform choices.

    Returns:
        Board index, or None.
    """
    if board_size(board) != EXACT_SEARCH_SIZE:
        return None

    move_count = sum(1 for slot in board if slot != EMPTY)

    if move_count == 0:
        return rng.choice(OPENING_SQUARES)

    if move_count == 1:
        if board[CENTER_SQUARE] != EMPTY:
            return rng.choice(CORNER_SQUARES)
        return CENTER_SQUARE

    return None
