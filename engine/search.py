"""
Move selection: opening book, minimax with alpha-beta pruning, and one-ply
heuristics for larger boards.

get_best_move() is the single entry point used by the game session, the web
API and the benchmark tool. It dispatches purely on the board size:

1. 3x3 boards are solved exactly. The opening book answers the first two
   plies; after that every empty slot is scored with minimax and one of the
   equally best moves is picked at random.

2. Larger boards have far too many positions for a full search in pure
   Python, so they use a fixed priority list: win now, block the opponent's
   immediate win, take the center, otherwise play anywhere. There is no
   lookahead beyond one ply.

Boards are never modified. Each simulated move builds a new tuple, so the
recursion threads immutable snapshots rather than pushing and popping moves
on a shared board.

Randomness comes from an explicit random.Random passed by the caller, so tests
and the benchmark can seed it and get reproducible games.
"""

import logging
import math
import random
from dataclasses import dataclass

from engine.constants import COMPUTER_MARK, DRAW_SCORE, EMPTY, EXACT_SEARCH_SIZE, HUMAN_MARK
from engine.evaluate import Board, board_size, check_winner, evaluate_board
from engine.opening_book import get_opening_move

_log = logging.getLogger(__name__)


@dataclass
class SearchState:
    """
    Bookkeeping for a single get_best_move() call.

    Attributes:
        node_count: Number of positions visited by minimax. Zero when the
                    move came from the opening book or the heuristics.
        best_move:  Move returned to the caller.
        best_score: Minimax score of best_move (3x3 search only).
        source:     Which strategy produced the move: "book", "minimax",
                    "win", "block", "center", "random", or "none".
    """

    node_count: int = 0
    best_move: int | None = None
    best_score: int = DRAW_SCORE
    source: str = "none"


def available_moves(board: Board) -> list[int]:
    """Indices of all empty slots, in board order."""
    return [i for i, slot in enumerate(board) if slot == EMPTY]


def make_move(board: Board, index: int, mark: str) -> tuple[str, ...]:
    """Return a copy of `board` with `mark` placed at `index`."""
    new_board = list(board)
    new_board[index] = mark
    return tuple(new_board)


def minimax(
    board: Board,
    depth: int,
    is_maximizing: bool,
    alpha: float = -math.inf,
    beta: float = math.inf,
    mark: str = COMPUTER_MARK,
    opponent: str = HUMAN_MARK,
    state: SearchState | None = None,
) -> int:
    """
    Minimax with alpha-beta pruning over immutable board snapshots.

    A node whose position is already won by either side returns its terminal
    score straight away; nothing below a decided position is searched. A full
    board with no winner returns DRAW_SCORE.

    Args:
        board:         Position to search. Not modified.
        depth:         Plies played since the root move. Feeds the terminal
                       score so faster wins and slower losses rank higher.
        is_maximizing: True when `mark` (the computer) is to move.
        alpha:         Best score the maximizer can already guarantee.
        beta:          Best score the minimizer can already guarantee.
        mark:          The computer's mark (maximizing side).
        opponent:      The opponent's mark (minimizing side).
        state:         Optional SearchState whose node_count is incremented.

    Returns:
        Score from the computer's perspective.
    """
    if state is not None:
        state.node_count += 1

    score = evaluate_board(board, depth, mark, opponent)
    if score != DRAW_SCORE:
        return score

    moves = available_moves(board)
    if not moves:
        return DRAW_SCORE

    if is_maximizing:
        best_score = -math.inf
        for spot in moves:
            child = make_move(board, spot, mark)
            current = minimax(child, depth + 1, False, alpha, beta, mark, opponent, state)
            best_score = max(best_score, current)
            alpha = max(alpha, current)
            if beta <= alpha:
                break
        return best_score

    best_score = math.inf
    for spot in moves:
        child = make_move(board, spot, opponent)
        current = minimax(child, depth + 1, True, alpha, beta, mark, opponent, state)
        best_score = min(best_score, current)
        beta = min(beta, current)
        if beta <= alpha:
            break
    return best_score


def find_immediate_move(board: Board, mark: str) -> int | None:
    """
    First empty slot (in board order) that completes a line for `mark`.

    Used both to take a win (with the computer's mark) and to find the
    square that must be blocked (with the opponent's mark).
    """
    for spot in available_moves(board):
        if check_winner(make_move(board, spot, mark), mark).is_win:
            return spot
    return None


def _search_exact(
    board: Board,
    rng: random.Random,
    mark: str,
    opponent: str,
    state: SearchState,
) -> int | None:
    book_move = get_opening_move(board, rng)
    if book_move is not None:
        state.source = "book"
        return book_move

    # Shuffle before scoring so that ties are broken uniformly.
    slots = available_moves(board)
    rng.shuffle(slots)

    best_score = -math.inf
    best_moves: list[int] = []
    for spot in slots:
        child = make_move(board, spot, mark)
        # Fresh window per root move: each score is exact, so ties are real.
        score = minimax(child, 0, False, mark=mark, opponent=opponent, state=state)
        if score > best_score:
            best_score = score
            best_moves = [spot]
        elif score == best_score:
            best_moves.append(spot)

    if not best_moves:
        return None

    state.source = "minimax"
    state.best_score = int(best_score)
    return rng.choice(best_moves)


def _search_heuristic(
    board: Board,
    rng: random.Random,
    mark: str,
    opponent: str,
    state: SearchState,
) -> int | None:
    win_move = find_immediate_move(board, mark)
    if win_move is not None:
        state.source = "win"
        return win_move

    block_move = find_immediate_move(board, opponent)
    if block_move is not None:
        state.source = "block"
        return block_move

    center = len(board) // 2
    if board[center] == EMPTY:
        state.source = "center"
        return center

    moves = available_moves(board)
    if not moves:
        return None
    state.source = "random"
    return rng.choice(moves)


def get_best_move(
    board: Board,
    rng: random.Random | None = None,
    mark: str = COMPUTER_MARK,
    opponent: str = HUMAN_MARK,
    state: SearchState | None = None,
) -> int | None:
    """
    Choose the computer's next move.

    This is the stable interface used by the session, the web API and the
    benchmark. The caller is expected to have checked that the game is not
    already won; on a full board there is nothing to play and None is
    returned rather than raising.

    Args:
        board:    Current position. Not modified. Its length must be a
                  perfect square (ValueError otherwise).
        rng:      Random source for the opening book and tie-breaks. A fresh
                  unseeded random.Random is used when omitted.
        mark:     The computer's mark.
        opponent: The opponent's mark.
        state:    Optional SearchState to receive node count, score, and the
                  strategy that produced the move.

    Returns:
        Index of an empty slot, or None if the board is full.
    """
    size = board_size(board)
    if rng is None:
        rng = random.Random()
    if state is None:
        state = SearchState()

    if not available_moves(board):
        state.source = "none"
        state.best_move = None
        return None

    if size == EXACT_SEARCH_SIZE:
        move = _search_exact(board, rng, mark, opponent, state)
    else:
        move = _search_heuristic(board, rng, mark, opponent, state)

    state.best_move = move
    _log.debug(
        "size=%d move=%s source=%s score=%d nodes=%d",
        size,
        move,
        state.source,
        state.best_score,
        state.node_count,
    )
    return move
