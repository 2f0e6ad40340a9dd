"""
Token model for the Lox expression language.

Every token records its type, the source lexeme it was scanned from, its
position, and, for String and Number tokens, the literal payload.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class TokenType(Enum):
    """Token types produced by the lexer."""

    # Single-character tokens
    LEFT_PAREN = "LeftParen"
    RIGHT_PAREN = "RightParen"
    LEFT_BRACE = "LeftBrace"
    RIGHT_BRACE = "RightBrace"
    COMMA = "Comma"
    DOT = "Dot"
    MINUS = "Minus"
    PLUS = "Plus"
    SEMICOLON = "Semicolon"
    SLASH = "Slash"
    STAR = "Star"

    # One or two character tokens
    BANG = "Bang"
    BANG_EQUAL = "BangEqual"
    EQUAL = "Equal"
    EQUAL_EQUAL = "EqualEqual"
    GREATER = "Greater"
    GREATER_EQUAL = "GreaterEqual"
    LESS = "Less"
    LESS_EQUAL = "LessEqual"

    # Literals
    IDENTIFIER = "Identifier"
    STRING = "String"
    NUMBER = "Number"

    # Keywords
    AND = "And"
    CLASS = "Class"
    ELSE = "Else"
    FALSE = "False"
    FUN = "Fun"
    FOR = "For"
    IF = "If"
    NIL = "Nil"
    OR = "Or"
    PRINT = "Print"
    RETURN = "Return"
    SUPER = "Super"
    THIS = "This"
    TRUE = "True"
    VAR = "Var"
    WHILE = "While"

    # Special
    EOF = "Eof"
    ERROR = "Error"


KEYWORDS: dict[str, TokenType] = {
    "and": TokenType.AND,
    "class": TokenType.CLASS,
    "else": TokenType.ELSE,
    "false": TokenType.FALSE,
    "fun": TokenType.FUN,
    "for": TokenType.FOR,
    "if": TokenType.IF,
    "nil": TokenType.NIL,
    "or": TokenType.OR,
    "print": TokenType.PRINT,
    "return": TokenType.RETURN,
    "super": TokenType.SUPER,
    "this": TokenType.THIS,
    "true": TokenType.TRUE,
    "var": TokenType.VAR,
    "while": TokenType.WHILE,
}

# Keywords that open a statement; used as recovery points by the parser.
STATEMENT_KEYWORDS: frozenset[TokenType] = frozenset(
    {
        TokenType.CLASS,
        TokenType.FUN,
        TokenType.VAR,
        TokenType.FOR,
        TokenType.IF,
        TokenType.WHILE,
        TokenType.PRINT,
        TokenType.RETURN,
    }
)


class Token(BaseModel):
    """
    A single token in the source.

    Attributes:
        type: Type of token
        lexeme: Source text the token was scanned from
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        literal: str for String tokens, float for Number tokens, else None
    """

    type: TokenType
    lexeme: str = ""
    line: int = Field(ge=1)
    column: int = Field(default=1, ge=1)
    literal: str | float | None = None

    model_config = ConfigDict(frozen=True)

    def describe(self) -> str:
        """Printable form of the token for diagnostics."""
        if self.type == TokenType.EOF:
            return "end"
        return f"'{self.lexeme}'"

    def __repr__(self) -> str:
        return f"Token({self.type.value}, {self.lexeme!r}, {self.line}:{self.column})"

    def __str__(self) -> str:
        return self.lexeme
