"""
Game session: the only mutable state in the game.

A GameSession owns the board, the two players and their scores, whose turn
it is, and the result of the current round. The engine functions it calls
(check_winner, check_tie, get_best_move) are pure; every mutation happens
here, under a lock.

Threading model:
    Human moves arrive on the caller's thread (the console loop). After a
    human move the computer's reply is not played immediately: it is
    scheduled `delay` seconds later on a timer thread, which is purely
    cosmetic "thinking time". While that move is pending it is not the
    human's turn, so play() rejects further human input.

    Every new round bumps a generation counter. A scheduled move remembers
    the generation it was created for and is dropped if the counter has
    moved on, so restarting or resetting during the delay can never drop a
    stale computer move onto the fresh board.
"""

import logging
import random
import threading
from dataclasses import dataclass
from typing import Callable, Protocol

from engine.constants import (
    AI_DELAY_SECONDS,
    COMPUTER_MARK,
    COMPUTER_NAME,
    DEFAULT_SIZE,
    EMPTY,
    HUMAN_MARK,
    HUMAN_NAME,
    SUPPORTED_SIZES,
)
from engine.evaluate import check_tie, check_winner
from engine.patterns import Pattern
from engine.search import SearchState, get_best_move

_log = logging.getLogger(__name__)


class IllegalMoveError(ValueError):
    """Raised when a move is attempted that the rules do not allow."""


class Cancellable(Protocol):
    def cancel(self) -> None: ...


Scheduler = Callable[[float, Callable[[], None]], Cancellable]


def timer_scheduler(delay: float, callback: Callable[[], None]) -> threading.Timer:
    """Run `callback` after `delay` seconds on a daemon timer thread."""
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()
    return timer


@dataclass
class Player:
    name: str
    mark: str
    score: int = 0

    def __str__(self) -> str:
        return f"{self.name} : {self.mark}"


@dataclass(frozen=True)
class RoundResult:
    """
    Outcome of a finished round.

    Attributes:
        winner:  The winning player, or None for a tie.
        pattern: The completed line when there is a winner.
        message: Text shown to the user ("AI Wins!", "It's a Tie!").
    """

    winner: Player | None
    pattern: Pattern | None
    message: str


class GameSession:
    """
    One human against the computer, over any number of rounds.

    Attributes:
        size:           Board side length for the current round.
        board:          Row-major list of slots for the current round.
        players:        (human, computer).
        current:        The player whose turn it is.
        result:         RoundResult once the round is over, else None.
        generation:     Incremented on every new round.
        computer_first: Whether the computer opens each round.
        delay:          Seconds between the human's move and the reply.
    """

    def __init__(
        self,
        size: int = DEFAULT_SIZE,
        computer_first: bool = False,
        rng: random.Random | None = None,
        delay: float = AI_DELAY_SECONDS,
        scheduler: Scheduler | None = None,
        on_update: Callable[["GameSession"], None] | None = None,
    ) -> None:
        self.players: tuple[Player, Player] = (
            Player(HUMAN_NAME, HUMAN_MARK),
            Player(COMPUTER_NAME, COMPUTER_MARK),
        )
        self.computer_first = computer_first
        self.rng = rng if rng is not None else random.Random()
        self.delay = delay
        self.scheduler: Scheduler = scheduler or timer_scheduler
        self.on_update = on_update

        self.size = size
        self.board: list[str] = []
        self.current: Player = self.human
        self.result: RoundResult | None = None
        self.generation = 0
        self.last_search: SearchState | None = None

        self._lock = threading.RLock()
        self._pending: Cancellable | None = None
        self._idle = threading.Event()
        self._idle.set()

        self.new_round(size)

    # -----------------------------------------------------------------------
    # Read-only views
    # -----------------------------------------------------------------------

    @property
    def human(self) -> Player:
        return self.players[0]

    @property
    def computer(self) -> Player:
        return self.players[1]

    @property
    def opponent(self) -> Player:
        """The player who is not on move."""
        return self.computer if self.current is self.human else self.human

    @property
    def is_over(self) -> bool:
        return self.result is not None

    @property
    def turn_label(self) -> str:
        return f"{self.current.name}'s Turn"

    # -----------------------------------------------------------------------
    # Round lifecycle
    # -----------------------------------------------------------------------

    def new_round(self, size: int | None = None) -> None:
        """
        Start a fresh round, optionally on a different board size.

        Scores carry over. Any computer move still pending from the previous
        round is cancelled, and the generation bump makes sure it is ignored
        even if its timer has already fired.

        Raises:
            ValueError: `size` is not one of SUPPORTED_SIZES.
        """
        if size is not None and size not in SUPPORTED_SIZES:
            raise ValueError(f"Unsupported board size {size}; choose one of {SUPPORTED_SIZES}")

        with self._lock:
            self._cancel_pending()
            if size is not None:
                self.size = size
            self.generation += 1
            self.board = [EMPTY] * (self.size * self.size)
            self.result = None
            self.last_search = None
            self.current = self.computer if self.computer_first else self.human
            _log.debug("round %d started on %dx%d", self.generation, self.size, self.size)

            if self.current is self.computer:
                self._schedule_computer_move()

        self._notify()

    def reset(self) -> None:
        """Clear both scores and start a new round."""
        with self._lock:
            for player in self.players:
                player.score = 0
        self.new_round()

    # -----------------------------------------------------------------------
    # Moves
    # -----------------------------------------------------------------------

    def play(self, index: int) -> RoundResult | None:
        """
        Apply a human move.

        Args:
            index: Board index chosen by the human.

        Returns:
            The RoundResult if this move ended the round, else None.

        Raises:
            IllegalMoveError: The round is over, it is not the human's turn,
                              the index is off the board, or the slot is taken.
        """
        with self._lock:
            if self.result is not None:
                raise IllegalMoveError("The round is over; start a new one")
            if self.current is not self.human:
                raise IllegalMoveError(f"It is not {self.human.name}'s turn")
            if not 0 <= index < len(self.board):
                raise IllegalMoveError(f"Slot {index} is off the board (0-{len(self.board) - 1})")
            if self.board[index] != EMPTY:
                raise IllegalMoveError(f"Slot {index} is already taken")

            result = self._apply(index, self.human)

        self._notify()
        return result

    def wait_until_idle(self, timeout: float | None = None) -> bool:
        """Block until no computer move is pending. False on timeout."""
        return self._idle.wait(timeout)

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    def _apply(self, index: int, player: Player) -> RoundResult | None:
        self.board[index] = player.mark
        _log.debug("%s played %d", player.name, index)

        win = check_winner(self.board, player.mark)
        if win.is_win:
            player.score += 1
            self.result = RoundResult(player, win.pattern, f"{player.name} Wins!")
        elif check_tie(self.board):
            self.result = RoundResult(None, None, "It's a Tie!")

        if self.result is not None:
            _log.info("round %d: %s", self.generation, self.result.message)
            return self.result

        self.current = self.opponent
        if self.current is self.computer:
            self._schedule_computer_move()
        return None

    def _schedule_computer_move(self) -> None:
        generation = self.generation
        self._idle.clear()
        self._pending = self.scheduler(self.delay, lambda: self._computer_move(generation))

    def _computer_move(self, generation: int) -> None:
        with self._lock:
            if generation != self.generation:
                _log.debug("dropping stale computer move for round %d", generation)
                return
            self._pending = None

            if self.result is not None or self.current is not self.computer:
                self._idle.set()
                return

            state = SearchState()
            try:
                move = get_best_move(
                    self.board,
                    self.rng,
                    mark=self.computer.mark,
                    opponent=self.human.mark,
                    state=state,
                )
            except Exception:
                # The round stays on the computer's turn; new_round() recovers.
                _log.exception("engine failed in round %d", generation)
                self._idle.set()
                raise

            self.last_search = state
            if move is None:
                _log.warning("engine returned no move for round %d", generation)
                self._idle.set()
                return
            self._apply(move, self.computer)

        self._notify()

        # Idle only after listeners have seen the move, and only if nothing
        # new was scheduled in the meantime.
        with self._lock:
            if self._pending is None:
                self._idle.set()

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        self._idle.set()

    def _notify(self) -> None:
        if self.on_update is not None:
            self.on_update(self)
