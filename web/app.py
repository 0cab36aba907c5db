"""
FastAPI web application for the tic-tac-toe engine.

Exposes a small JSON API that the browser page calls on the computer's turn,
and serves that page from web/static.

Architecture notes:
- Sync endpoints (not async): FastAPI runs sync handlers in a thread pool,
  which suits the CPU-bound minimax search.
- Static files mounted LAST: route registration is first-match, so API routes
  must be registered before the StaticFiles catch-all.
- Stateless per request: the browser owns the game session (turns, scores,
  thinking delay) and sends the full board each time.
"""

import logging
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, field_validator, model_validator

from engine.constants import COMPUTER_MARK, EMPTY, HUMAN_MARK, MARKS, SUPPORTED_SIZES
from engine.evaluate import board_size, check_tie, check_winner
from engine.patterns import generate_patterns
from engine.search import SearchState, get_best_move

# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

logging.basicConfig(level=logging.INFO)
_log = logging.getLogger(__name__)

_STATIC_DIR = Path(__file__).parent / "static"

app = FastAPI(title="Tic-Tac-Toe AI", version="1.0.0")


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


class BoardRequest(BaseModel):
    """
    A board sent by the client.

    Fields:
        board: Row-major list of slots: "" for empty, "x" or "o" for a mark.
               The length must be 9, 16 or 25.
        mark:  The mark the request is about. For /api/move this is the
               side the engine plays; for /api/outcome the side checked
               for a win.
    """

    board: list[str]
    mark: str = COMPUTER_MARK

    @field_validator("board")
    @classmethod
    def check_board(cls, v: list[str]) -> list[str]:
        """Reject boards that are not square, not a playable size, or hold unknown marks."""
        size = board_size(v)
        if size not in SUPPORTED_SIZES:
            raise ValueError(f"board size {size} not supported; use one of {SUPPORTED_SIZES}")
        bad = {slot for slot in v if slot != EMPTY and slot not in MARKS}
        if bad:
            raise ValueError(f"unknown marks on board: {sorted(bad)}")
        return v

    @field_validator("mark")
    @classmethod
    def check_mark(cls, v: str) -> str:
        if v not in MARKS:
            raise ValueError(f"mark must be one of {MARKS}")
        return v

    @property
    def opponent(self) -> str:
        return HUMAN_MARK if self.mark == COMPUTER_MARK else COMPUTER_MARK


class OutcomeResponse(BaseModel):
    """
    Win/tie status of a board for one mark.

    Fields:
        is_win:  True if the mark has completed a line.
        pattern: Indices of that line, for highlighting; null otherwise.
        tie:     True if the board is full (check is_win first).
    """

    is_win: bool
    pattern: list[int] | None = None
    tie: bool


class MoveResponse(OutcomeResponse):
    """
    Engine reply: the chosen move plus the outcome after playing it.

    Fields:
        move:  Index the engine played.
        board: Board after the move.
    """

    move: int
    board: list[str]


class PatternsResponse(BaseModel):
    size: int
    patterns: list[list[int]]

    @model_validator(mode="after")
    def check_count(self) -> "PatternsResponse":
        if len(self.patterns) != 2 * self.size + 2:
            raise ValueError("pattern count does not match board size")
        return self


def _outcome(board: list[str], mark: str) -> OutcomeResponse:
    result = check_winner(board, mark)
    return OutcomeResponse(
        is_win=result.is_win,
        pattern=list(result.pattern) if result.pattern is not None else None,
        tie=check_tie(board),
    )


# ---------------------------------------------------------------------------
# API routes (registered BEFORE StaticFiles mount)
# ---------------------------------------------------------------------------


@app.post("/api/move", response_model=MoveResponse)
def api_move(request: BoardRequest) -> MoveResponse:
    """
    Compute and apply the engine's move for the given board.

    Raises:
        HTTPException 400: The board is already won or full.
        HTTPException 500: The engine failed or returned no move.
    """
    board = request.board

    for mark in MARKS:
        if check_winner(board, mark).is_win:
            raise HTTPException(status_code=400, detail=f"Game is already over: {mark} has won")
    if check_tie(board):
        raise HTTPException(status_code=400, detail="Game is already over: board is full")

    state = SearchState()
    try:
        move = get_best_move(board, mark=request.mark, opponent=request.opponent, state=state)
    except Exception as exc:
        _log.exception("Engine search failed for board=%s", board)
        raise HTTPException(status_code=500, detail=f"Engine error: {exc}") from exc

    if move is None:
        raise HTTPException(status_code=500, detail="Engine returned no move")

    _log.info(
        "Move=%d source=%s score=%d nodes=%d size=%d",
        move,
        state.source,
        state.best_score,
        state.node_count,
        board_size(board),
    )

    new_board = list(board)
    new_board[move] = request.mark
    outcome = _outcome(new_board, request.mark)
    return MoveResponse(move=move, board=new_board, **outcome.model_dump())


@app.post("/api/outcome", response_model=OutcomeResponse)
def api_outcome(request: BoardRequest) -> OutcomeResponse:
    """Report whether `mark` has won and whether the board is full."""
    return _outcome(request.board, request.mark)


@app.get("/api/patterns/{size}", response_model=PatternsResponse)
def api_patterns(size: int) -> PatternsResponse:
    """List the winning lines for a supported board size."""
    if size not in SUPPORTED_SIZES:
        raise HTTPException(status_code=404, detail=f"Unsupported board size {size}")
    return PatternsResponse(size=size, patterns=[list(p) for p in generate_patterns(size)])


@app.get("/", include_in_schema=False)
def serve_root() -> FileResponse:
    """Serve the game page."""
    return FileResponse(_STATIC_DIR / "index.html")


# ---------------------------------------------------------------------------
# Static file mount — MUST be last (catch-all for /static/* assets)
# ---------------------------------------------------------------------------

app.mount("/static", StaticFiles(directory=_STATIC_DIR), name="static")
