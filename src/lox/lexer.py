"""
Lexer for the Lox expression language.

Converts raw source text into a stream of tokens in a single left-to-right
pass. Lexical errors do not stop scanning: each one is logged, recorded on
``Lexer.errors`` and replaced by an ERROR token.
"""

from __future__ import annotations

import logging

from .errors import LexError, make_lex_error
from .tokens import KEYWORDS, Token, TokenType

logger = logging.getLogger(__name__)

SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    ";": TokenType.SEMICOLON,
    "*": TokenType.STAR,
}

# Characters that form a two-character operator when followed by "=".
# Maps to (type without "=", type with "=").
EQUAL_SUFFIX_TOKENS: dict[str, tuple[TokenType, TokenType]] = {
    "!": (TokenType.BANG, TokenType.BANG_EQUAL),
    "=": (TokenType.EQUAL, TokenType.EQUAL_EQUAL),
    "<": (TokenType.LESS, TokenType.LESS_EQUAL),
    ">": (TokenType.GREATER, TokenType.GREATER_EQUAL),
}


def _is_digit(char: str | None) -> bool:
    return char is not None and "0" <= char <= "9"


def _is_alpha(char: str | None) -> bool:
    return char is not None and ("a" <= char <= "z" or "A" <= char <= "Z" or char == "_")


def _is_alnum(char: str | None) -> bool:
    return _is_alpha(char) or _is_digit(char)


class Lexer:
    """
    Single-use scanner over one source buffer.

    Tracks the cursor as ``pos``/``line``/``column`` and collects lexical
    errors instead of raising them.
    """

    def __init__(self, text: str):
        """
        Initialize lexer.

        Args:
            text: Source text to tokenize
        """
        self.text = text
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: list[Token] = []
        self.errors: list[LexError] = []

        # Start of the token being scanned
        self._start = 0
        self._start_line = 1
        self._start_column = 1

    def current_char(self) -> str | None:
        """Get current character or None if at end."""
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def peek_char(self, offset: int = 1) -> str | None:
        """Peek ahead at character."""
        pos = self.pos + offset
        if pos >= len(self.text):
            return None
        return self.text[pos]

    def advance(self) -> str | None:
        """Consume the current character, updating line/column."""
        char = self.current_char()
        if char is not None:
            if char == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1
        return char

    def is_at_end(self) -> bool:
        return self.pos >= len(self.text)

    def tokenize(self) -> list[Token]:
        """
        Tokenize the entire source text.

        Returns:
            List of tokens, always terminated by exactly one EOF token
        """
        while not self.is_at_end():
            self._start = self.pos
            self._start_line = self.line
            self._start_column = self.column
            self.scan_token()

        self.tokens.append(Token(type=TokenType.EOF, lexeme="", line=self.line, column=self.column))
        logger.debug("Scanned %d tokens (%d errors)", len(self.tokens), len(self.errors))
        return self.tokens

    def scan_token(self) -> None:
        """Scan one lexeme starting at the current position."""
        char = self.advance()

        if char in SINGLE_CHAR_TOKENS:
            self.add_token(SINGLE_CHAR_TOKENS[char])
        elif char in EQUAL_SUFFIX_TOKENS:
            plain, with_equal = EQUAL_SUFFIX_TOKENS[char]
            if self.current_char() == "=":
                self.advance()
                self.add_token(with_equal)
            else:
                self.add_token(plain)
        elif char == "/":
            if self.current_char() == "/":
                self.skip_comment()
            else:
                self.add_token(TokenType.SLASH)
        elif char in (" ", "\r", "\t", "\n"):
            pass
        elif char == '"':
            self.read_string()
        elif _is_digit(char):
            self.read_number()
        elif _is_alpha(char):
            self.read_identifier()
        else:
            self.error(f"Unexpected character '{char}'.")

    def skip_comment(self) -> None:
        """Skip a line comment (from // to end of line)."""
        while self.current_char() is not None and self.current_char() != "\n":
            self.advance()

    def read_string(self) -> None:
        """Read a double-quoted string; it may span lines."""
        while self.current_char() is not None and self.current_char() != '"':
            self.advance()

        if self.is_at_end():
            self.error("Unterminated string.")
            return

        self.advance()  # closing quote
        value = self.text[self._start + 1 : self.pos - 1]
        self.add_token(TokenType.STRING, value)

    def read_number(self) -> None:
        """Read digits with an optional fractional part."""
        while _is_digit(self.current_char()):
            self.advance()

        # A trailing "." without digits is left for the DOT token
        if self.current_char() == "." and _is_digit(self.peek_char()):
            self.advance()
            while _is_digit(self.current_char()):
                self.advance()

        self.add_token(TokenType.NUMBER, float(self.text[self._start : self.pos]))

    def read_identifier(self) -> None:
        """Read an identifier or keyword."""
        while _is_alnum(self.current_char()):
            self.advance()

        text = self.text[self._start : self.pos]
        self.add_token(KEYWORDS.get(text, TokenType.IDENTIFIER))

    def add_token(self, token_type: TokenType, literal: str | float | None = None) -> None:
        self.tokens.append(
            Token(
                type=token_type,
                lexeme=self.text[self._start : self.pos],
                line=self._start_line,
                column=self._start_column,
                literal=literal,
            )
        )

    def error(self, message: str) -> None:
        """Record a lexical error and emit an ERROR token in its place."""
        error = make_lex_error(message, self._start_line, self._start_column)
        logger.error(str(error))
        self.errors.append(error)
        self.add_token(TokenType.ERROR)


def tokenize(text: str) -> list[Token]:
    """
    Convenience function to tokenize source text.

    Args:
        text: Source text

    Returns:
        List of tokens ending in EOF
    """
    return Lexer(text).tokenize()
