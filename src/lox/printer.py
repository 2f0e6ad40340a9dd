"""
Debug tree printer.

Renders an expression tree one node per line, children indented by two
spaces under their parent. Formatting only; nothing is evaluated. The walk
uses an explicit stack, so trees of any depth can be printed.
"""

from __future__ import annotations

from .expressions import Binary, Expr, Grouping, Literal, Unary
from .values import stringify

INDENT = "  "


def print_tree(expr: Expr) -> str:
    """Render an expression tree as an indented outline."""
    lines: list[str] = []
    stack: list[tuple[Expr, int]] = [(expr, 0)]

    while stack:
        node, depth = stack.pop()
        lines.append(INDENT * depth + _label(node))
        # Children pushed in reverse so the left one is printed first
        for child in reversed(_children(node)):
            stack.append((child, depth + 1))

    return "\n".join(lines)


def _label(expr: Expr) -> str:
    if isinstance(expr, Literal):
        if isinstance(expr.value, str):
            return f'Literal "{expr.value}"'
        return f"Literal {stringify(expr.value)}"
    if isinstance(expr, Grouping):
        return "Grouping"
    if isinstance(expr, Unary):
        return f"Unary {expr.operator.lexeme}"
    if isinstance(expr, Binary):
        return f"Binary {expr.operator.lexeme}"
    raise TypeError(f"Unknown expression type: {type(expr).__name__}")


def _children(expr: Expr) -> list[Expr]:
    if isinstance(expr, Grouping):
        return [expr.expression]
    if isinstance(expr, Unary):
        return [expr.right]
    if isinstance(expr, Binary):
        return [expr.left, expr.right]
    return []
