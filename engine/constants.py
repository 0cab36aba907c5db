"""
Engine constants: marks, board sizes, search scores, and timing.

All literal values shared between the engine, the game session, the console
and the web front end live here, so that no other module needs to introduce
its own magic numbers or mark strings.
"""

# ---------------------------------------------------------------------------
# Marks
# ---------------------------------------------------------------------------
# A board slot holds EMPTY or one of the two player marks. The empty sentinel
# is the empty string so a board serialises naturally to JSON.

EMPTY: str = ""
HUMAN_MARK: str = "x"
COMPUTER_MARK: str = "o"

MARKS: tuple[str, ...] = (HUMAN_MARK, COMPUTER_MARK)

HUMAN_NAME: str = "Human"
COMPUTER_NAME: str = "AI"

# ---------------------------------------------------------------------------
# Board sizes
# ---------------------------------------------------------------------------
# The engine itself works for any square board. The session and the web API
# only offer the three levels below.

SUPPORTED_SIZES: tuple[int, ...] = (3, 4, 5)
DEFAULT_SIZE: int = 3

# Size solved exactly by minimax + opening book. Larger boards use heuristics.
EXACT_SEARCH_SIZE: int = 3

# ---------------------------------------------------------------------------
# Opening book (3x3 only)
# ---------------------------------------------------------------------------

CENTER_SQUARE: int = 4
CORNER_SQUARES: tuple[int, ...] = (0, 2, 6, 8)

# First move when the computer opens: center or any corner, uniformly.
OPENING_SQUARES: tuple[int, ...] = (CENTER_SQUARE,) + CORNER_SQUARES

# ---------------------------------------------------------------------------
# Search scores
# ---------------------------------------------------------------------------
# A win is scored WIN_SCORE - depth so faster wins rank higher; a loss is
# depth - WIN_SCORE so slower losses rank higher. Depth never exceeds 9 on a
# 3x3 board, so the two ranges never touch 0.

WIN_SCORE: int = 100
DRAW_SCORE: int = 0

# ---------------------------------------------------------------------------
# Timing
# ---------------------------------------------------------------------------
# Cosmetic "thinking time" before the computer's move is applied.

AI_DELAY_SECONDS: float = 0.4
