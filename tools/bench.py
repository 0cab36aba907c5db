#!/usr/bin/env python3
"""
Benchmark: measure nodes visited and time per move for a fixed set of boards.

Run before and after any change to the search or the evaluator to quantify
its effect. A lower node count for the same move indicates more effective
pruning; the 4x4 and 5x5 positions exercise the heuristic path, which should
always report zero nodes.

Usage: python3 tools/bench.py [--seed N]
"""
import argparse
import os
import random
import sys
import time

REPO = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO not in sys.path:
    sys.path.insert(0, REPO)

from engine.search import SearchState, get_best_move  # noqa: E402

# Boards are written row by row: "." empty, "x" human, "o" computer.
# These are fixed forever — same positions used for every comparison.
POSITIONS = [
    ("Empty 3x3",      "........."),
    ("Corner reply",   "x...o...."),
    ("Edge opening",   ".x..o...x"),
    ("Take win",       "oo.xx...."),
    ("Must block",     "xx..o...."),
    ("Fork threat",    "x...o...x"),
    ("Late game",      "xoxxo.o.."),
    ("4x4 win",        "ooo.xxx........."),
    ("4x4 block",      "xxx.o...o......."),
    ("4x4 center",     "x..............."),
    ("5x5 open",       "x........................"),
]


def parse_board(text: str) -> list[str]:
    return ["" if ch == "." else ch for ch in text]


def run_position(label: str, text: str, seed: int) -> dict:
    """Search a single board and return metrics.

    Args:
        label: Human-readable position name for display.
        text:  Board in the compact "." / "x" / "o" notation.
        seed:  Seed for the engine's random source.

    Returns:
        Dict with keys: label, move, source, score, nodes, time_ms.
    """
    state = SearchState()
    start = time.perf_counter()
    move = get_best_move(parse_board(text), random.Random(seed), state=state)
    elapsed_ms = (time.perf_counter() - start) * 1000
    return {
        "label": label,
        "move": "-" if move is None else str(move),
        "source": state.source,
        "score": state.best_score,
        "nodes": state.node_count,
        "time_ms": elapsed_ms,
    }


def main() -> None:
    """Run all benchmark positions and print a summary table."""
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--seed", type=int, default=0)
    args = parser.parse_args()

    print(f"Tic-tac-toe engine benchmark — {sys.executable}")
    print()
    print(
        f"{'Position':<14} {'Move':>4} {'Source':<8} {'Score':>6} "
        f"{'Nodes':>8} {'Time(ms)':>9}"
    )
    print("-" * 54)

    results = []
    for label, text in POSITIONS:
        r = run_position(label, text, args.seed)
        results.append(r)
        print(
            f"{r['label']:<14} {r['move']:>4} {r['source']:<8} {r['score']:>6} "
            f"{r['nodes']:>8,} {r['time_ms']:>9.2f}"
        )

    searched = [r for r in results if r["nodes"] > 0]
    if searched:
        avg_nodes = sum(r["nodes"] for r in searched) // len(searched)
        avg_time = sum(r["time_ms"] for r in searched) / len(searched)
        print("-" * 54)
        print(f"{'MINIMAX AVG':<14} {'':>4} {'':<8} {'':>6} {avg_nodes:>8,} {avg_time:>9.2f}")
    print()


if __name__ == "__main__":
    main()
