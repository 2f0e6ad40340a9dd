"""Tests for the Lox tree-walking evaluator."""

from __future__ import annotations

import logging
import math

import pytest

import lox
from lox.errors import LoxRuntimeError
from lox.expressions import Binary, Literal
from lox.interpreter import EvalResult, Interpreter, divide
from lox.parser import parse
from lox.tokens import Token, TokenType
from lox.values import Value


def run(source: str) -> Value:
    expr = parse(source)
    assert expr is not None, f"failed to parse {source!r}"
    return Interpreter().evaluate(expr)


# ============================================================================
# Arithmetic
# ============================================================================


class TestArithmetic:
    """Number operators."""

    def test_precedence(self) -> None:
        assert run("1 + 2 * 3") == 7.0
        assert run("(1 + 2) * 3") == 9.0

    def test_left_associative(self) -> None:
        assert run("10 - 4 - 3") == 3.0
        assert run("8 / 2 / 2") == 2.0

    def test_negation(self) -> None:
        assert run("-3") == -3.0
        assert run("--3") == 3.0

    def test_decimal(self) -> None:
        assert run("0.5 + 0.25") == 0.75

    def test_division_by_zero(self) -> None:
        assert run("1 / 0") == math.inf
        assert run("-1 / 0") == -math.inf

    def test_division_by_negative_zero(self) -> None:
        assert run("1 / -0") == -math.inf

    def test_zero_over_zero(self) -> None:
        assert math.isnan(run("0 / 0"))  # type: ignore[arg-type]

    def test_overflow_is_infinity(self) -> None:
        star = Token(type=TokenType.STAR, lexeme="*", line=1)
        expr = Binary(left=Literal(value=1e308), operator=star, right=Literal(value=10.0))
        assert Interpreter().evaluate(expr) == math.inf


class TestDivide:
    """IEEE division helper."""

    def test_regular(self) -> None:
        assert divide(7.0, 2.0) == 3.5

    def test_signed_infinity(self) -> None:
        assert divide(2.0, 0.0) == math.inf
        assert divide(-2.0, 0.0) == -math.inf
        assert divide(2.0, -0.0) == -math.inf

    def test_nan(self) -> None:
        assert math.isnan(divide(0.0, 0.0))
        assert math.isnan(divide(math.nan, 0.0))


# ============================================================================
# Strings, comparison, equality, truthiness
# ============================================================================


class TestStrings:
    def test_concatenation(self) -> None:
        assert run('"a" + "b"') == "ab"

    def test_empty_concatenation(self) -> None:
        assert run('"" + ""') == ""


class TestComparison:
    """Comparison operators require numbers."""

    def test_operators(self) -> None:
        assert run("1 < 2") is True
        assert run("2 <= 2") is True
        assert run("3 > 4") is False
        assert run("4 >= 5") is False


class TestEquality:
    """== and != work across all value types."""

    def test_numbers(self) -> None:
        assert run("2 == 2.0") is True
        assert run("1 != 2") is True

    def test_cross_type(self) -> None:
        assert run('2 == "2"') is False
        assert run("true == 1") is False
        assert run("nil == false") is False

    def test_nil(self) -> None:
        assert run("nil == nil") is True
        assert run("nil != nil") is False

    def test_strings(self) -> None:
        assert run('"a" == "a"') is True
        assert run('"a" != "b"') is True

    def test_nan_not_equal_to_itself(self) -> None:
        assert run("(0 / 0) == (0 / 0)") is False


class TestTruthiness:
    """! uses Lox truthiness."""

    def test_nil_and_false(self) -> None:
        assert run("!nil") is True
        assert run("!false") is True

    def test_zero_and_empty_string_are_truthy(self) -> None:
        assert run("!0") is False
        assert run('!""') is False

    def test_true(self) -> None:
        assert run("!true") is False


class TestComma:
    """The comma operator yields its right operand."""

    def test_yields_right(self) -> None:
        assert run("1, 2") == 2.0
        assert run("1, 2, 3") == 3.0

    def test_left_still_evaluated(self) -> None:
        with pytest.raises(LoxRuntimeError):
            run("(-nil), 2")


# ============================================================================
# Runtime errors
# ============================================================================


class TestRuntimeErrors:
    """Type mismatches raise LoxRuntimeError from evaluate()."""

    def test_add_mixed(self) -> None:
        with pytest.raises(LoxRuntimeError, match="two numbers or two strings"):
            run('1 + "b"')

    def test_negate_string(self) -> None:
        with pytest.raises(LoxRuntimeError, match="must be a number"):
            run('-"a"')

    def test_negate_boolean(self) -> None:
        with pytest.raises(LoxRuntimeError):
            run("-true")

    def test_compare_strings(self) -> None:
        with pytest.raises(LoxRuntimeError, match="must be numbers"):
            run('"a" < "b"')

    def test_multiply_boolean(self) -> None:
        with pytest.raises(LoxRuntimeError, match="Operands of '\\*' must be numbers"):
            run("true * 2")

    def test_error_points_at_operator(self) -> None:
        with pytest.raises(LoxRuntimeError) as exc_info:
            run('1 +\n "b"')
        error = exc_info.value
        assert error.token is not None
        assert error.token.type == TokenType.PLUS
        assert str(error) == (
            "[line 1] Runtime error at '+': "
            "Operands of '+' must be two numbers or two strings, got number and string."
        )

    def test_left_evaluated_before_right(self) -> None:
        with pytest.raises(LoxRuntimeError) as exc_info:
            run('(-"a") + (1 < "b")')
        assert exc_info.value.message == "Operand of '-' must be a number, got string."

    def test_unknown_node(self) -> None:
        with pytest.raises(LoxRuntimeError, match="Unknown expression type"):
            Interpreter().evaluate("not a node")  # type: ignore[arg-type]


class TestInterpret:
    """interpret() converts runtime errors into results."""

    def test_success(self) -> None:
        expr = parse("1 + 1")
        assert expr is not None
        result = Interpreter().interpret(expr)
        assert result == EvalResult(value=2.0, error=None)
        assert result.ok

    def test_nil_value(self) -> None:
        expr = parse("nil")
        assert expr is not None
        result = Interpreter().interpret(expr)
        assert result.ok
        assert result.value is None

    def test_failure(self, caplog: pytest.LogCaptureFixture) -> None:
        expr = parse('"a" - 1')
        assert expr is not None
        with caplog.at_level(logging.ERROR, logger="lox.interpreter"):
            result = Interpreter().interpret(expr)
        assert not result.ok
        assert result.value is None
        assert isinstance(result.error, LoxRuntimeError)
        assert "Operands of '-' must be numbers, got string and number." in caplog.text

    def test_same_tree_twice(self) -> None:
        expr = parse('("a" + "b"), 4 * 2')
        assert expr is not None
        interpreter = Interpreter()
        assert interpreter.evaluate(expr) == interpreter.evaluate(expr) == 8.0


class TestDeepTrees:
    """Trees deeper than the interpreter stack fail as runtime errors."""

    def test_long_chain(self, caplog: pytest.LogCaptureFixture) -> None:
        expr = parse(" + ".join(["1"] * 5000))
        assert expr is not None
        with caplog.at_level(logging.ERROR, logger="lox.interpreter"):
            result = Interpreter().interpret(expr)
        assert not result.ok
        assert result.value is None
        assert isinstance(result.error, LoxRuntimeError)
        assert result.error.token is not None
        assert result.error.token.type == TokenType.PLUS
        assert str(result.error) == "[line 1] Runtime error at '+': Expression too deeply nested."
        assert "Expression too deeply nested." in caplog.text

    def test_short_chain_still_evaluates(self) -> None:
        assert run(" + ".join(["1"] * 50)) == 50.0

    def test_evaluate_helper_raises(self) -> None:
        with pytest.raises(LoxRuntimeError, match="too deeply nested"):
            lox.evaluate(" + ".join(["1"] * 5000))

    def test_type_names_in_messages(self) -> None:
        with pytest.raises(LoxRuntimeError, match="got nil and boolean"):
            run("nil * true")
        with pytest.raises(LoxRuntimeError, match="got string and number"):
            run('"a" + 1')
        with pytest.raises(LoxRuntimeError, match="got boolean"):
            run("-false")
