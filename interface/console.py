"""
Console front end: play the computer from a terminal.

Reads one command per line from stdin and writes the board, results and
scores to stdout. Diagnostics go through logging to stderr, so stdout only
ever carries game output and can be piped or scripted.

Commands:
    move <index>   Place your mark (a bare integer works too)
    board          Show the board
    new [size]     Start a new round, optionally on a 3, 4 or 5 board
    reset          Clear the scores and start a new round
    score          Show the scores
    help           List the commands
    quit           Exit

Threading model:
    The session plays the computer's reply on a timer thread after a short
    delay. The loop waits for that reply before printing the board and
    reading the next line, so output never interleaves with the prompt.
"""

import argparse
import logging
import random
import sys
from typing import TextIO

from engine.constants import AI_DELAY_SECONDS, DEFAULT_SIZE, EMPTY, SUPPORTED_SIZES
from engine.session import GameSession, IllegalMoveError

_log = logging.getLogger(__name__)

HELP_TEXT = """\
move <index>   place your mark (or just type the index)
board          show the board
new [size]     new round, optionally on a 3, 4 or 5 board
reset          clear the scores and start a new round
score          show the scores
help           show this text
quit           exit"""


def render_board(board: list[str], size: int) -> str:
    """
    Draw the board as a grid, with the slot index shown on empty squares.

    Example (3x3, human in the center):
        0 1 2
        3 x 5
        6 7 8
    """
    width = len(str(len(board) - 1))
    lines = []
    for row in range(size):
        cells = []
        for col in range(size):
            idx = row * size + col
            slot = board[idx]
            cells.append((slot if slot != EMPTY else str(idx)).rjust(width))
        lines.append(" ".join(cells))
    return "\n".join(lines)


class ConsoleHandler:
    """
    Dispatches console commands to a GameSession.

    Attributes:
        session: The game being played.
        out:     Stream for game output (stdout by default).
        running: Cleared by the quit command.
    """

    def __init__(self, session: GameSession, out: TextIO | None = None) -> None:
        self.session = session
        self.out = out if out is not None else sys.stdout
        self.running = True

    def _send(self, text: str) -> None:
        print(text, file=self.out, flush=True)

    # -----------------------------------------------------------------------
    # Command handlers
    # -----------------------------------------------------------------------

    def handle_move(self, tokens: list[str]) -> None:
        if not tokens:
            self._send("usage: move <index>")
            return
        try:
            index = int(tokens[0])
        except ValueError:
            self._send(f"not a slot number: {tokens[0]!r}")
            return

        try:
            self.session.play(index)
        except IllegalMoveError as exc:
            self._send(str(exc))
            return

        self.session.wait_until_idle()
        self.show_position()

    def handle_new(self, tokens: list[str]) -> None:
        size = None
        if tokens:
            try:
                size = int(tokens[0])
            except ValueError:
                self._send(f"not a board size: {tokens[0]!r}")
                return
        try:
            self.session.new_round(size)
        except ValueError as exc:
            self._send(str(exc))
            return
        self.session.wait_until_idle()
        self.show_position()

    def handle_reset(self) -> None:
        self.session.reset()
        self.session.wait_until_idle()
        self.show_scores()
        self.show_position()

    def show_scores(self) -> None:
        self._send("  ".join(f"{p.name} ({p.mark}): {p.score}" for p in self.session.players))

    def show_position(self) -> None:
        """Print the board followed by the result, or whose turn it is."""
        session = self.session
        self._send(render_board(session.board, session.size))
        if session.result is not None:
            self._send(session.result.message)
            if session.result.pattern is not None:
                self._send("winning line: " + " ".join(map(str, session.result.pattern)))
            self.show_scores()
            self._send("type 'new' to play again")
        else:
            self._send(session.turn_label)

    def dispatch(self, line: str) -> None:
        tokens = line.split()
        if not tokens:
            return
        command, args = tokens[0].lower(), tokens[1:]

        if command.isdigit():
            self.handle_move([command])
        elif command == "move":
            self.handle_move(args)
        elif command == "board":
            self.show_position()
        elif command == "new":
            self.handle_new(args)
        elif command == "reset":
            self.handle_reset()
        elif command == "score":
            self.show_scores()
        elif command == "help":
            self._send(HELP_TEXT)
        elif command == "quit":
            self.running = False
        else:
            self._send(f"unknown command {command!r}; type 'help'")


def run_console_loop(handler: ConsoleHandler, stream: TextIO | None = None) -> None:
    """
    Read commands from `stream` until "quit" or end of input.

    Each command runs inside its own try/except so a bug in one handler is
    logged and the game carries on.
    """
    if stream is None:
        stream = sys.stdin
    handler.session.wait_until_idle()
    handler.show_position()

    for raw_line in stream:
        try:
            handler.dispatch(raw_line.strip())
        except Exception:
            _log.exception("console: unhandled error for %r", raw_line.strip())
        if not handler.running:
            break


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play tic-tac-toe against the computer")
    parser.add_argument(
        "--size",
        type=int,
        choices=SUPPORTED_SIZES,
        default=DEFAULT_SIZE,
        help="Board side length",
    )
    parser.add_argument(
        "--computer-first",
        action="store_true",
        help="Let the computer open every round",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=AI_DELAY_SECONDS,
        help="Seconds the computer 'thinks' before moving",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible games")
    parser.add_argument("--verbose", action="store_true", help="Log engine details to stderr")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )

    session = GameSession(
        size=args.size,
        computer_first=args.computer_first,
        rng=random.Random(args.seed),
        delay=max(0.0, args.delay),
    )
    handler = ConsoleHandler(session)
    try:
        run_console_loop(handler)
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
