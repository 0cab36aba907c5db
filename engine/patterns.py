"""
Winning-line generation for square boards.

A pattern is the tuple of board indices making up one line: every row, every
column, and the two full diagonals. Boards are stored row-major, so index i
sits at row i // size and column i % size.
"""

Pattern = tuple[int, ...]


def generate_patterns(size: int) -> list[Pattern]:
    """
    Return every winning line for a size x size board.

    Ordering is fixed: the `size` rows top to bottom, then the `size` columns
    left to right, then the main diagonal, then the anti-diagonal. The outcome
    evaluator reports the first matching line, so this order decides which
    line is highlighted when a move completes two at once.

    Args:
        size: Side length of the board. Must be positive.

    Returns:
        List of 2 * size + 2 patterns, each a tuple of `size` indices.

    Example:
        >>> generate_patterns(3)[-2:]
        [(0, 4, 8), (2, 4, 6)]
    """
    if size < 1:
        raise ValueError(f"Board size must be positive, got {size}")

    rows = [tuple(r * size + c for c in range(size)) for r in range(size)]
    cols = [tuple(r * size + c for r in range(size)) for c in range(size)]
    main_diag = tuple(i * (size + 1) for i in range(size))
    anti_diag = tuple((i + 1) * (size - 1) for i in range(size))

    return rows + cols + [main_diag, anti_diag]
