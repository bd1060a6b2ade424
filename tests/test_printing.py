from crash.parser import Node
from crash.printing import describe_token, format_tokens, format_tree
from crash.tokens import Token, TokenType


def test_describe_pipe():
    assert describe_token(Token(TokenType.PIPE, "|")) == '  Type: Pipe, \tValue: "|"\n'


def test_describe_word():
    line = describe_token(Token(TokenType.WORD, "ls"))
    assert line == '  Type: Command or Argument, \tValue: "ls"\n'


def test_describe_none():
    assert describe_token(None) == "Token is NULL\n"


def test_format_tokens_lists_each():
    tokens = [Token(TokenType.BUILTIN, "echo"), Token(TokenType.WORD, "hi")]
    text = format_tokens(tokens)
    assert text.startswith("Tokens:\n")
    assert text == "Tokens:\n" + describe_token(tokens[0]) + describe_token(tokens[1])


def test_format_tree_leaf():
    token = Token(TokenType.WORD, "ls")
    text = format_tree(Node([token]))
    assert text.startswith("BIN TREE VIS\n")
    assert text.endswith(describe_token(token))


def test_format_tree_children_colored_and_indented():
    a = Token(TokenType.WORD, "a")
    b = Token(TokenType.WORD, "b")
    pipe = Token(TokenType.PIPE, "|")
    root = Node([pipe], left=Node([a]), right=Node([b]))
    text = format_tree(root)
    assert "\x1b[31m\t" + describe_token(a) + "\x1b[0m" in text
    assert "\x1b[34m\t" + describe_token(b) + "\x1b[0m" in text
    assert text.count("BIN TREE VIS") == 1