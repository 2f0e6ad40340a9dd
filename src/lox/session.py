"""
One source buffer through lexer, parser and interpreter.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .config import LoxConfig
from .expressions import Expr
from .interpreter import Interpreter
from .lexer import Lexer
from .parser import Parser
from .printer import print_tree
from .values import Value, stringify

logger = logging.getLogger(__name__)

# Process exit codes (sysexits.h)
EXIT_OK = 0
EXIT_NO_CONTENT = 1
EXIT_DATA_ERROR = 65
EXIT_NO_INPUT = 66
EXIT_SOFTWARE = 70


@dataclass
class RunResult:
    """
    Outcome of running one source buffer.

    Attributes:
        value: Evaluated value (None on failure, or when the value is nil)
        output: Display form of the value, None on failure
        diagnostics: Printable error lines from every stage
        exit_code: Process exit code for this run
        tree: Parsed expression tree, None if parsing failed
    """

    value: Value = None
    output: str | None = None
    diagnostics: list[str] = field(default_factory=list)
    exit_code: int = EXIT_OK
    tree: Expr | None = None

    @property
    def ok(self) -> bool:
        return self.exit_code == EXIT_OK


class Session:
    """Runs source text with a fixed configuration."""

    def __init__(self, config: LoxConfig | None = None):
        self.config = config or LoxConfig()

    def run(self, source: str) -> RunResult:
        """
        Tokenize, parse and evaluate one buffer.

        Each call uses fresh Lexer, Parser and Interpreter instances.
        """
        if not source.strip():
            logger.info("No content to interpret.")
            return RunResult(exit_code=EXIT_NO_CONTENT)

        lexer = Lexer(source)
        tokens = lexer.tokenize()
        diagnostics = [str(e) for e in lexer.errors]

        parser = Parser(tokens)
        tree = parser.parse()
        diagnostics.extend(str(e) for e in parser.errors)
        if tree is None:
            return RunResult(diagnostics=diagnostics, exit_code=EXIT_DATA_ERROR)

        if self.config.show_ast:
            logger.debug("Expression tree:\n%s", print_tree(tree))

        result = Interpreter().interpret(tree)
        if result.error is not None:
            diagnostics.append(str(result.error))
            return RunResult(diagnostics=diagnostics, exit_code=EXIT_SOFTWARE, tree=tree)

        return RunResult(
            value=result.value,
            output=stringify(result.value),
            diagnostics=diagnostics,
            exit_code=EXIT_OK,
            tree=tree,
        )
