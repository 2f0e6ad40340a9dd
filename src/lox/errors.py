"""
Error types for the Lox lexer, parser, and interpreter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .tokens import Token


class LoxError(Exception):
    """Base exception for all Lox errors."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}: {self.message}"
        return self.message

    @property
    def line(self) -> int | None:
        return self.context.line if self.context else None


class LexError(LoxError):
    """
    Raised (or collected) when the scanner meets text it cannot tokenize.

    Examples:
    - Unexpected character
    - Unterminated string literal
    """

    pass


class ParseError(LoxError):
    """
    Raised when a token sequence does not match the expression grammar.

    Examples:
    - Missing operand
    - Missing closing parenthesis
    - Trailing tokens after a complete expression
    """

    def __init__(self, message: str, context: ErrorContext | None = None, token: Token | None = None):
        self.token = token
        super().__init__(message, context)


class LoxRuntimeError(LoxError):
    """
    Raised when evaluation meets operands an operator cannot accept.

    Examples:
    - Negating a string
    - Adding a number to a string
    - Comparing non-numbers with < or >
    """

    def __init__(self, message: str, context: ErrorContext | None = None, token: Token | None = None):
        self.token = token
        super().__init__(message, context)


class ConfigError(LoxError):
    """Raised when a lox.toml file exists but cannot be read."""

    pass


@dataclass
class ErrorContext:
    """
    Source location of an error.

    Attributes:
        line: Line number (1-indexed)
        column: Column number (1-indexed), 0 when unknown
        where: Short description of the offending spot, e.g. "Error at ')'"
    """

    line: int
    column: int = 0
    where: str = "Error"

    def format(self) -> str:
        """
        Format error context as a human-readable prefix.

        Returns:
            Formatted string like: "[line 3] Error at ')'"
        """
        return f"[line {self.line}] {self.where}"


def make_lex_error(message: str, line: int, column: int = 0) -> LexError:
    """Helper to create a LexError located at a line/column."""
    return LexError(message, ErrorContext(line=line, column=column))


def make_parse_error(message: str, token: Token) -> ParseError:
    """
    Helper to create a ParseError located at a token.

    Args:
        message: Error description
        token: Offending token

    Returns:
        ParseError with context attached
    """
    context = ErrorContext(line=token.line, column=token.column, where=f"Error at {token.describe()}")
    return ParseError(message, context, token=token)


def make_runtime_error(message: str, token: Token) -> LoxRuntimeError:
    """Helper to create a LoxRuntimeError located at an operator token."""
    context = ErrorContext(
        line=token.line, column=token.column, where=f"Runtime error at {token.describe()}"
    )
    return LoxRuntimeError(message, context, token=token)
