import pytest

from crash.wildcard import expand_wildcard, get_pattern, list_matching_files, match


@pytest.mark.parametrize(
    "pattern, name, expected",
    [
        ("*.c", "main.c", True),
        ("*.c", "main.h", False),
        ("a*b*c", "aXbYc", True),
        ("abc", "abc", True),
        ("abc", "abd", False),
        ("\\*", "*", True),
        ("\\*", "a", False),
        ("*", "", True),
        ("a", "", False),
        ("*", "anything", True),
    ],
)
def test_match(pattern, name, expected):
    assert match(pattern, name) is expected


def test_get_pattern_plain_word():
    assert get_pattern("echo *.c", 5) == "*.c"


def test_get_pattern_escapes_quoted_star():
    assert get_pattern('ls "a*"b', 5) == "a\\*b"


def test_get_pattern_stops_at_operator():
    assert get_pattern("ls *.c|wc", 3) == "*.c"


@pytest.fixture
def sample_dir(tmp_path):
    for name in ("a.c", "b.c", "x.h", ".hidden.c"):
        (tmp_path / name).write_text("")
    return tmp_path


def test_list_matching_files_quotes_each_name(sample_dir):
    result = list_matching_files("*.c", sample_dir)
    assert result.split(" ") == ["'a.c'", "'b.c'"]


def test_list_matching_files_hidden_needs_dot(sample_dir):
    result = list_matching_files(".h*", sample_dir)
    assert result == "'.hidden.c'"


def test_list_matching_files_none_when_no_match(sample_dir):
    assert list_matching_files("*.py", sample_dir) is None


def test_list_matching_files_missing_directory(tmp_path, capsys):
    assert list_matching_files("*", tmp_path / "missing") is None
    assert "opendir() error" in capsys.readouterr().err


def test_expand_wildcard_replaces_word(sample_dir, monkeypatch):
    monkeypatch.chdir(sample_dir)
    buffer, last = expand_wildcard("echo *.c", 5, "echo ")
    assert buffer == "echo 'a.c' 'b.c'"
    assert last == len("echo *.c") - 1


def test_expand_wildcard_keeps_star_without_match(sample_dir, monkeypatch):
    monkeypatch.chdir(sample_dir)
    assert expand_wildcard("echo *.py", 5, "echo ") == ("echo *", 5)