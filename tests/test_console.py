import io
import random

import pytest

from engine.session import GameSession
from interface.console import ConsoleHandler, main, render_board, run_console_loop

from conftest import parse_board


def make_handler(**kwargs) -> tuple[ConsoleHandler, io.StringIO]:
    kwargs.setdefault("rng", random.Random(5))
    kwargs.setdefault("delay", 0.0)
    out = io.StringIO()
    return ConsoleHandler(GameSession(**kwargs), out=out), out


def test_render_board():
    assert render_board(parse_board("x.. .o. ..."), 3) == "x 1 2\n3 o 5\n6 7 8"
    rendered = render_board([""] * 16, 4).splitlines()
    assert rendered[0] == " 0  1  2  3"
    assert rendered[3] == "12 13 14 15"


def test_play_a_move():
    handler, out = make_handler()
    run_console_loop(handler, io.StringIO("move 0\nquit\n"))
    text = out.getvalue()
    assert "Human's Turn" in text
    # Corner opening is answered in the center.
    assert "x 1 2\n3 o 5\n6 7 8" in text
    assert not handler.running


def test_bare_index_and_occupied_slot():
    handler, out = make_handler()
    run_console_loop(handler, io.StringIO("0\n0\n"))
    assert "Slot 0 is already taken" in out.getvalue()


def test_bad_input_is_reported():
    handler, out = make_handler()
    run_console_loop(handler, io.StringIO("move\nmove a\nnew 7\nfrobnicate\nnew b\n"))
    text = out.getvalue()
    assert "usage: move <index>" in text
    assert "not a slot number" in text
    assert "Unsupported board size 7" in text
    assert "unknown command 'frobnicate'" in text
    assert "not a board size" in text


def test_new_reset_score_help():
    handler, out = make_handler()
    handler.dispatch("new 4")
    assert handler.session.size == 4
    handler.dispatch("score")
    handler.dispatch("reset")
    handler.dispatch("help")
    text = out.getvalue()
    assert "Human (x): 0  AI (o): 0" in text
    assert "quit" in text


def test_finished_round_is_announced():
    handler, out = make_handler()
    handler.session.board = parse_board("xx. oo. ...")
    handler.dispatch("2")
    text = out.getvalue()
    assert "Human Wins!" in text
    assert "winning line: 0 1 2" in text
    assert "Human (x): 1" in text


def test_main_runs_until_end_of_input(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("board\nquit\n"))
    assert main(["--size", "4", "--delay", "0", "--seed", "1", "--computer-first"]) == 0
    captured = capsys.readouterr()
    # 4x4 computer opening goes to the center square (index 8).
    assert "Human's Turn" in captured.out
    assert " o  9 10 11" in captured.out


def test_main_rejects_unsupported_size():
    with pytest.raises(SystemExit):
        main(["--size", "6"])
