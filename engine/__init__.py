"""
Tic-tac-toe engine package.

This package implements win/tie detection and move selection for square
boards of any size, plus the game session that drives them.

Modules:
    constants     — Marks, supported sizes, scores, and timing
    patterns      — Winning-line generation
    evaluate      — Win and tie checks, minimax terminal score
    opening_book  — Book moves for the first two plies on 3x3
    search        — Minimax with alpha-beta (3x3) and one-ply heuristics
    session       — Mutable game state, turns, scores, delayed computer move
"""
