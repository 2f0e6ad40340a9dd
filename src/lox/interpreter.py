"""
Tree-walking evaluator for the Lox expression language.

``Interpreter.evaluate`` raises ``LoxRuntimeError`` on operand type
mismatches; ``Interpreter.interpret`` is the boundary that logs the error
and returns it inside an ``EvalResult`` instead.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from .errors import LoxRuntimeError, make_runtime_error
from .expressions import Binary, Expr, Grouping, Literal, Unary
from .tokens import Token, TokenType
from .values import Value, is_equal, is_number, is_truthy, type_name

logger = logging.getLogger(__name__)

TOO_DEEP_MESSAGE = "Expression too deeply nested."


@dataclass
class EvalResult:
    """Outcome of evaluating one expression tree."""

    value: Value = None
    error: LoxRuntimeError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def divide(left: float, right: float) -> float:
    """IEEE-754 division: x / 0 is a signed infinity and 0 / 0 is NaN."""
    if right == 0.0:
        if left == 0.0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


class Interpreter:
    """Evaluates expression trees. Holds no state between calls."""

    def interpret(self, expr: Expr) -> EvalResult:
        """
        Evaluate an expression, converting runtime errors into a result.

        A tree nested deeper than the interpreter stack allows is reported
        as a runtime error at its outermost operator.

        Args:
            expr: Parsed expression tree

        Returns:
            EvalResult with either a value or the runtime error
        """
        try:
            value = self.evaluate(expr)
        except RecursionError:
            error = _too_deep(expr)
            logger.error(str(error))
            return EvalResult(value=None, error=error)
        except LoxRuntimeError as e:
            logger.error(str(e))
            return EvalResult(value=None, error=e)
        return EvalResult(value=value)

    def evaluate(self, expr: Expr) -> Value:
        """
        Dispatch evaluation to the appropriate handler.

        Raises:
            LoxRuntimeError: If an operator receives operands it cannot accept
        """
        if isinstance(expr, Literal):
            return expr.value

        if isinstance(expr, Grouping):
            return self.evaluate(expr.expression)

        if isinstance(expr, Unary):
            return self._evaluate_unary(expr)

        if isinstance(expr, Binary):
            return self._evaluate_binary(expr)

        raise LoxRuntimeError(f"Unknown expression type: {type(expr).__name__}")

    def _evaluate_unary(self, expr: Unary) -> Value:
        right = self.evaluate(expr.right)
        op = expr.operator

        if op.type == TokenType.MINUS:
            if not is_number(right):
                raise make_runtime_error(
                    f"Operand of '-' must be a number, got {type_name(right)}.", op
                )
            return -right  # type: ignore[operator]

        if op.type == TokenType.BANG:
            return not is_truthy(right)

        raise make_runtime_error(f"Unknown unary operator '{op.lexeme}'.", op)

    def _evaluate_binary(self, expr: Binary) -> Value:
        # Left operand is always evaluated before the right one
        left = self.evaluate(expr.left)
        right = self.evaluate(expr.right)
        op = expr.operator

        if op.type == TokenType.COMMA:
            return right

        # Equality never fails
        if op.type == TokenType.EQUAL_EQUAL:
            return is_equal(left, right)
        if op.type == TokenType.BANG_EQUAL:
            return not is_equal(left, right)

        if op.type == TokenType.PLUS:
            return _add(left, right, op)

        # Arithmetic
        if op.type == TokenType.MINUS:
            a, b = _check_numbers(left, right, op)
            return a - b
        if op.type == TokenType.STAR:
            a, b = _check_numbers(left, right, op)
            return a * b
        if op.type == TokenType.SLASH:
            a, b = _check_numbers(left, right, op)
            return divide(a, b)

        # Comparison
        if op.type == TokenType.GREATER:
            a, b = _check_numbers(left, right, op)
            return a > b
        if op.type == TokenType.GREATER_EQUAL:
            a, b = _check_numbers(left, right, op)
            return a >= b
        if op.type == TokenType.LESS:
            a, b = _check_numbers(left, right, op)
            return a < b
        if op.type == TokenType.LESS_EQUAL:
            a, b = _check_numbers(left, right, op)
            return a <= b

        raise make_runtime_error(f"Unknown binary operator '{op.lexeme}'.", op)


def _add(left: Value, right: Value, op: Token) -> Value:
    """Handle + for numbers and strings."""
    if is_number(left) and is_number(right):
        return left + right  # type: ignore[operator]
    if isinstance(left, str) and isinstance(right, str):
        return left + right
    raise make_runtime_error(
        "Operands of '+' must be two numbers or two strings, "
        f"got {type_name(left)} and {type_name(right)}.",
        op,
    )


def _check_numbers(left: Value, right: Value, op: Token) -> tuple[float, float]:
    if not (is_number(left) and is_number(right)):
        raise make_runtime_error(
            f"Operands of '{op.lexeme}' must be numbers, "
            f"got {type_name(left)} and {type_name(right)}.",
            op,
        )
    return left, right  # type: ignore[return-value]


def _too_deep(expr: Expr) -> LoxRuntimeError:
    """Runtime error for a tree too deep to evaluate, at its outermost operator."""
    while isinstance(expr, Grouping):
        expr = expr.expression
    if isinstance(expr, (Binary, Unary)):
        return make_runtime_error(TOO_DEEP_MESSAGE, expr.operator)
    return LoxRuntimeError(TOO_DEEP_MESSAGE)
