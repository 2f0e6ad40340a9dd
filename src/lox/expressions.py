"""
Expression tree for the Lox expression language.

Four node types form a closed union: Binary, Unary, Literal and Grouping.
Nodes are immutable and own their children; operator nodes keep the
operator token so that runtime errors can point at a line.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .tokens import Token
from .values import stringify

# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class Literal(BaseModel):
    """A literal value: number, string, boolean or nil."""

    value: str | float | bool | None = Field(description="The literal value")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        if isinstance(self.value, str):
            return f'"{self.value}"'
        return stringify(self.value)


class Grouping(BaseModel):
    """Parenthesized expression."""

    expression: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"(group {self.expression})"


class Unary(BaseModel):
    """Prefix operation: ! or - applied to an operand."""

    operator: Token
    right: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({self.operator.lexeme}{self.right})"


class Binary(BaseModel):
    """Infix operation: left op right. Also used for the comma operator."""

    left: Expr
    operator: Token
    right: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({self.left} {self.operator.lexeme} {self.right})"


# ---------------------------------------------------------------------------
# Union type (must come after all node classes)
# ---------------------------------------------------------------------------

Expr = Binary | Unary | Literal | Grouping

# Rebuild models that reference the forward-declared Expr union
Grouping.model_rebuild()
Unary.model_rebuild()
Binary.model_rebuild()
