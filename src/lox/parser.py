"""
Recursive descent parser for the Lox expression language.

Grammar (precedence low to high):
    expression → comma
    comma      → equality ( "," equality )*
    equality   → comparison ( ( "!=" | "==" ) comparison )*
    comparison → term ( ( ">" | ">=" | "<" | "<=" ) term )*
    term       → factor ( ( "-" | "+" ) factor )*
    factor     → unary ( ( "/" | "*" ) unary )*
    unary      → ( "!" | "-" ) unary | primary
    primary    → NUMBER | STRING | "true" | "false" | "nil" | "(" expression ")"
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from .errors import ParseError, make_parse_error
from .expressions import Binary, Expr, Grouping, Literal, Unary
from .lexer import tokenize
from .tokens import STATEMENT_KEYWORDS, Token, TokenType

logger = logging.getLogger(__name__)

TOO_DEEP_MESSAGE = "Expression too deeply nested."


class Parser:
    """
    Expression parser over a token list ending in EOF.

    The token list is never mutated; the cursor is a single index.
    Errors are raised internally and converted to ``None`` by ``parse()``.
    """

    def __init__(self, tokens: list[Token]):
        if not tokens:
            raise ValueError("Parser needs at least an EOF token")
        self.tokens = tokens
        self.pos = 0
        self.errors: list[ParseError] = []

    # -- Token primitives --

    def peek(self) -> Token:
        """Get current token without consuming it."""
        if self.pos >= len(self.tokens):
            return self.tokens[-1]
        return self.tokens[self.pos]

    def previous(self) -> Token:
        """Get the most recently consumed token."""
        return self.tokens[self.pos - 1]

    def is_at_end(self) -> bool:
        return self.peek().type == TokenType.EOF

    def advance(self) -> Token:
        """Consume the current token and return it."""
        if not self.is_at_end():
            self.pos += 1
        return self.previous()

    def check(self, token_type: TokenType) -> bool:
        if self.is_at_end():
            return False
        return self.peek().type == token_type

    def match(self, *token_types: TokenType) -> bool:
        """Consume the current token if it has any of the given types."""
        for token_type in token_types:
            if self.check(token_type):
                self.advance()
                return True
        return False

    def consume(self, token_type: TokenType, message: str) -> Token:
        """
        Consume a token of the expected type.

        Raises:
            ParseError: If the current token has another type
        """
        if self.check(token_type):
            return self.advance()
        raise make_parse_error(message, self.peek())

    def synchronize(self) -> None:
        """
        Discard tokens up to the next statement boundary.

        Stops just after a ";" or just before a statement keyword.
        Expression parsing never calls this.
        """
        self.advance()
        while not self.is_at_end():
            if self.previous().type == TokenType.SEMICOLON:
                return
            if self.peek().type in STATEMENT_KEYWORDS:
                return
            self.advance()

    # -- Entry point --

    def parse(self) -> Expr | None:
        """
        Parse a single expression covering the whole token list.

        Nesting deeper than the interpreter stack allows is reported as a
        parse error at the token where parsing stopped.

        Returns:
            The expression tree, or None if a parse error occurred
        """
        try:
            expr = self.expression()
            if not self.is_at_end():
                raise make_parse_error("Expect end of expression.", self.peek())
        except RecursionError:
            error = make_parse_error(TOO_DEEP_MESSAGE, self.peek())
            logger.error(str(error))
            self.errors.append(error)
            return None
        except ParseError as e:
            logger.error(str(e))
            self.errors.append(e)
            return None

        logger.debug("Parsed expression from %d tokens", len(self.tokens))
        return expr

    # -- Grammar rules --

    def expression(self) -> Expr:
        return self.comma()

    def comma(self) -> Expr:
        return self._binary(self.equality, TokenType.COMMA)

    def equality(self) -> Expr:
        return self._binary(self.comparison, TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)

    def comparison(self) -> Expr:
        return self._binary(
            self.term,
            TokenType.GREATER,
            TokenType.GREATER_EQUAL,
            TokenType.LESS,
            TokenType.LESS_EQUAL,
        )

    def term(self) -> Expr:
        return self._binary(self.factor, TokenType.MINUS, TokenType.PLUS)

    def factor(self) -> Expr:
        return self._binary(self.unary, TokenType.SLASH, TokenType.STAR)

    def _binary(self, operand: Callable[[], Expr], *operators: TokenType) -> Expr:
        """Left-associative fold shared by every binary precedence level."""
        left = operand()
        while self.match(*operators):
            operator = self.previous()
            right = operand()
            left = Binary(left=left, operator=operator, right=right)
        return left

    def unary(self) -> Expr:
        if self.match(TokenType.BANG, TokenType.MINUS):
            operator = self.previous()
            right = self.unary()
            return Unary(operator=operator, right=right)
        return self.primary()

    def primary(self) -> Expr:
        if self.match(TokenType.FALSE):
            return Literal(value=False)
        if self.match(TokenType.TRUE):
            return Literal(value=True)
        if self.match(TokenType.NIL):
            return Literal(value=None)

        if self.match(TokenType.NUMBER, TokenType.STRING):
            return Literal(value=self.previous().literal)

        if self.match(TokenType.LEFT_PAREN):
            expr = self.expression()
            self.consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expression=expr)

        raise make_parse_error("Expect expression.", self.peek())


def parse(source: str) -> Expr | None:
    """
    Tokenize and parse source text.

    Args:
        source: Expression source text

    Returns:
        Expression tree, or None if the source does not parse
    """
    return Parser(tokenize(source)).parse()
