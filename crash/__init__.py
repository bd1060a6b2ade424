"""A small interactive Unix shell: expander, lexer, validator, parser and executor."""

__version__ = "0.1.0"

__all__ = ["__version__"]