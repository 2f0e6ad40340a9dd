"""
Lox expression core: lexer, precedence-climbing parser and tree-walking
evaluator for Lox expressions.
"""

from __future__ import annotations

from importlib.metadata import version as _metadata_version

from .config import LoxConfig, load_config
from .errors import ConfigError, ErrorContext, LexError, LoxError, LoxRuntimeError, ParseError
from .expressions import Binary, Expr, Grouping, Literal, Unary
from .interpreter import EvalResult, Interpreter
from .lexer import Lexer, tokenize
from .parser import Parser, parse
from .session import RunResult, Session
from .tokens import Token, TokenType
from .values import Value, stringify


def _get_version() -> str:
    """Get version from installed metadata."""
    try:
        return _metadata_version("lox")
    except Exception:
        return "0.0.0"


__version__ = _get_version()


def evaluate(source: str) -> Value:
    """
    Parse and evaluate source text in one call.

    Raises:
        ParseError: If the source does not parse
        LoxRuntimeError: If evaluation fails
    """
    parser = Parser(tokenize(source))
    expr = parser.parse()
    if expr is None:
        raise parser.errors[0]
    result = Interpreter().interpret(expr)
    if result.error is not None:
        raise result.error
    return result.value


__all__ = [
    "__version__",
    "evaluate",
    "tokenize",
    "parse",
    "stringify",
    "Lexer",
    "Parser",
    "Interpreter",
    "EvalResult",
    "Session",
    "RunResult",
    "LoxConfig",
    "load_config",
    "Token",
    "TokenType",
    "Expr",
    "Binary",
    "Unary",
    "Literal",
    "Grouping",
    "Value",
    "LoxError",
    "LexError",
    "ParseError",
    "LoxRuntimeError",
    "ConfigError",
    "ErrorContext",
]
