import os

from crash.commands import build_command, find_command_path
from crash.environment import Environment
from crash.tokens import Token, TokenType


def make_tool(directory, name, mode=0o755):
    path = directory / name
    path.write_text("#!/bin/sh\n")
    os.chmod(path, mode)
    return path


def test_found_in_path(tmp_path):
    make_tool(tmp_path, "crash-test-tool")
    env = Environment({"PATH": str(tmp_path)})
    assert find_command_path(env, "crash-test-tool") == f"{tmp_path}/crash-test-tool"


def test_first_directory_wins(tmp_path):
    first = tmp_path / "one"
    second = tmp_path / "two"
    first.mkdir()
    second.mkdir()
    make_tool(first, "crash-test-tool")
    make_tool(second, "crash-test-tool")
    env = Environment({"PATH": f"{first}:{second}"})
    assert find_command_path(env, "crash-test-tool") == f"{first}/crash-test-tool"


def test_non_executable_skipped(tmp_path):
    first = tmp_path / "one"
    second = tmp_path / "two"
    first.mkdir()
    second.mkdir()
    make_tool(first, "crash-test-tool", mode=0o644)
    make_tool(second, "crash-test-tool")
    env = Environment({"PATH": f"{first}:{second}"})
    assert find_command_path(env, "crash-test-tool") == f"{second}/crash-test-tool"


def test_relative_and_absolute_used_as_given():
    env = Environment({})
    assert find_command_path(env, "./nothing-here") == "./nothing-here"
    assert find_command_path(env, "/no/such/prog") == "/no/such/prog"


def test_missing_path_variable():
    assert find_command_path(Environment({}), "crash-test-missing") is None


def test_not_found(tmp_path):
    env = Environment({"PATH": str(tmp_path)})
    assert find_command_path(env, "crash-test-missing") is None


def test_build_command(tmp_path):
    make_tool(tmp_path, "crash-test-tool")
    env = Environment({"PATH": str(tmp_path)})
    tokens = [Token(TokenType.WORD, "crash-test-tool"), Token(TokenType.WORD, "-x")]
    path, args = build_command(env, tokens)
    assert path == f"{tmp_path}/crash-test-tool"
    assert args == ["crash-test-tool", "-x"]


def test_build_command_not_found(tmp_path):
    env = Environment({"PATH": str(tmp_path)})
    assert build_command(env, [Token(TokenType.WORD, "crash-test-missing")]) is None