import io
import os

import pytest

from crash.environment import Environment, ShellState
from crash.executor import close_fds, execute, execute_node, logical_and
from crash.lexer import lex
from crash.parser import Node, parse
from crash.processes import ProcessList
from crash.reorder import switch_redir_args
from crash.tokens import Token, TokenType


def _tree(line):
    return parse(switch_redir_args(lex(line)))


def _run(line, state):
    processes = ProcessList()
    execute(_tree(line), state, processes)
    processes.resolve(state)
    return state.exit_status


@pytest.fixture
def state(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    return ShellState(env=Environment(os.environ))


def test_builtin_writes_to_redirected_file(state, tmp_path):
    assert _run("echo hello > out.txt", state) == 0
    assert (tmp_path / "out.txt").read_text() == "hello\n"


def test_and_stops_after_failure(state, tmp_path):
    assert _run("false && echo hi > out.txt", state) == 1
    assert not (tmp_path / "out.txt").exists()


def test_and_runs_right_after_success(state, tmp_path):
    assert _run("true && echo ok > out.txt", state) == 0
    assert (tmp_path / "out.txt").read_text() == "ok\n"


def test_or_skips_right_after_success(state, tmp_path):
    assert _run("true || echo no > out.txt", state) == 0
    assert not (tmp_path / "out.txt").exists()


def test_or_runs_right_after_failure(state, tmp_path):
    assert _run("false || echo yes > out.txt", state) == 0
    assert (tmp_path / "out.txt").read_text() == "yes\n"


def test_pipe_feeds_right_command(state, tmp_path):
    assert _run("echo hello | cat > out.txt", state) == 0
    assert (tmp_path / "out.txt").read_text() == "hello\n"


def test_unknown_command(state, capsys):
    assert _run("no_such_command_anywhere", state) == 127
    assert "no_such_command_anywhere: command not found" in capsys.readouterr().err


def test_directory_as_command(state, capsys):
    assert _run("/", state) == 126
    assert "is a directory" in capsys.readouterr().err


def test_missing_input_file(state, capsys):
    assert _run("cat < missing.txt", state) == 1
    assert "missing.txt" in capsys.readouterr().err


def test_exit_builtin_sets_flag(state):
    assert _run("exit 3", state) == 3
    assert state.exit_flag is True


def test_nothing_runs_once_exit_flag_is_set(state, tmp_path):
    state.exit_flag = True
    state.exit_status = 4
    assert execute(_tree("echo hi > out.txt"), state, ProcessList()) == 4
    assert not (tmp_path / "out.txt").exists()


def test_execute_empty_tree_returns_status(state):
    state.exit_status = 6
    assert execute(None, state, ProcessList()) == 6


def test_execute_node_does_not_wait(state):
    processes = ProcessList()
    node = Node([Token(TokenType.WORD, "false")])
    assert execute_node(node, state, processes) == 0
    assert len(processes) == 1
    processes.resolve(state)
    assert state.exit_status == 1


def test_logical_and_returns_left_failure(state):
    assert logical_and(_tree("false && true"), state, ProcessList()) == 1


def test_close_fds_closes_both_ends():
    read_end, write_end = os.pipe()
    node = Node([Token(TokenType.WORD, "x")], in_fd=read_end, out_fd=write_end)
    close_fds(node)
    with pytest.raises(OSError):
        os.fstat(read_end)
    with pytest.raises(OSError):
        os.fstat(write_end)