import io
import os
import signal

import pytest

from crash.environment import Environment, ShellState
from crash.shell import main, read_input, run_input_loop, run_line


@pytest.fixture
def state(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    return ShellState(env=Environment(os.environ))


def test_run_line_redirects_output(state, tmp_path):
    assert run_line("echo hello > out.txt", state) == 0
    assert (tmp_path / "out.txt").read_text() == "hello\n"


def test_run_line_expands_variables(state, tmp_path):
    state.env.set("GREETING", "hi", create=True)
    assert run_line("echo $GREETING > out.txt", state) == 0
    assert (tmp_path / "out.txt").read_text() == "hi\n"


def test_run_line_expands_last_status(state, tmp_path):
    state.exit_status = 5
    assert run_line("echo $? > out.txt", state) == 0
    assert (tmp_path / "out.txt").read_text() == "5\n"


def test_syntax_error_at_start(state, capsys):
    assert run_line("| ls", state) == 258
    assert "syntax error near unexpected token `|'" in capsys.readouterr().err
    assert state.exit_flag is True


def test_syntax_error_at_end(state):
    assert run_line("ls |", state) == 2


def test_empty_expansion_runs_nothing(state):
    state.exit_status = 4
    assert run_line("$NOT_SET_ANYWHERE_AT_ALL", state) == 4


def test_exit_line(state):
    assert run_line("exit 5", state) == 5
    assert state.exit_flag is True


def test_read_input_from_stream(state):
    stream = io.StringIO("first line\nsecond\n")
    assert read_input(state, stream) == "first line"
    assert read_input(state, stream) == "second"
    assert read_input(state, stream) is None


def test_loop_stops_at_exit(state, tmp_path):
    stream = io.StringIO("echo a > a.txt\nexit 7\necho b > b.txt\n")
    run_input_loop(state, stream)
    assert state.exit_status == 7
    assert (tmp_path / "a.txt").read_text() == "a\n"
    assert not (tmp_path / "b.txt").exists()


def test_loop_skips_blank_lines(state, tmp_path):
    run_input_loop(state, io.StringIO("   \n\t\necho x > x.txt\n"))
    assert state.exit_status == 0
    assert (tmp_path / "x.txt").read_text() == "x\n"


def test_main_returns_exit_status(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("sys.stdin", io.StringIO("exit 3\n"))
    monkeypatch.setattr(signal, "signal", lambda *args: None)
    assert main([]) == 3
    assert "Welcome to" in capsys.readouterr().out