"""
Outcome evaluation: wins, ties, and the minimax terminal score.

The search needs to know, at every node, whether the game is already decided.
This module answers that for any square board by matching the board against
the lines produced by engine.patterns. It never mutates the board it is given.

The win check and the tie check are deliberately independent: a board can be
both full and won. Callers (the session, the search, the web API) always ask
for a win first and only fall back to the tie check when nobody has won.
"""

import math
from dataclasses import dataclass
from typing import Sequence

from engine.constants import DRAW_SCORE, EMPTY, WIN_SCORE
from engine.patterns import Pattern, generate_patterns

Board = Sequence[str]


@dataclass(frozen=True)
class WinResult:
    """
    Result of a win check for one mark.

    Attributes:
        is_win:  True if the mark occupies every slot of some winning line.
        pattern: The first such line in generator order, or None.
    """

    is_win: bool
    pattern: Pattern | None = None


def board_size(board: Board) -> int:
    """
    Side length of a square board.

    Raises ValueError if the board length is zero or not a perfect square.
    A malformed board is a caller bug, so we stop here rather than searching
    a nonsense position.
    """
    size = math.isqrt(len(board))
    if size == 0 or size * size != len(board):
        raise ValueError(f"Board length {len(board)} is not a perfect square")
    return size


def check_winner(board: Board, mark: str) -> WinResult:
    """
    Check whether `mark` has completed a line on `board`.

    Args:
        board: Row-major sequence of slots. Not modified.
        mark:  The player mark to look for.

    Returns:
        WinResult with the first completed line, or a negative result.
    """
    for pattern in generate_patterns(board_size(board)):
        if all(board[idx] == mark for idx in pattern):
            return WinResult(is_win=True, pattern=pattern)
    return WinResult(is_win=False)


def check_tie(board: Board) -> bool:
    """True when no slot is empty, whether or not someone has won."""
    return all(slot != EMPTY for slot in board)


def evaluate_board(board: Board, depth: int, mark: str, opponent: str) -> int:
    """
    Minimax terminal score from the perspective of `mark`.

    A win for `mark` scores WIN_SCORE - depth (faster wins are better); a win
    for `opponent` scores depth - WIN_SCORE (slower losses are better). Every
    other position, finished or not, scores DRAW_SCORE. The win for `mark` is
    checked first.

    Args:
        board:    Position to score. Not modified.
        depth:    Plies searched below the root move.
        mark:     The maximizing side (the computer).
        opponent: The minimizing side.

    Returns:
        Integer score.
    """
    if check_winner(board, mark).is_win:
        return WIN_SCORE - depth
    if check_winner(board, opponent).is_win:
        return depth - WIN_SCORE
    return DRAW_SCORE
