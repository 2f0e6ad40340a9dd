"""
Command-line driver for the Lox expression language.

Commands:
- run: evaluate the expression in a file
- eval: evaluate an expression given on the command line
- repl: evaluate expressions line by line from an interactive prompt
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError

from . import __version__
from .config import LoxConfig, load_config
from .errors import ConfigError
from .printer import print_tree
from .session import EXIT_NO_INPUT, EXIT_OK, RunResult, Session

EXIT_CONFIG = 78

LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"
QUIT_COMMAND = ":q"

logger = logging.getLogger(__name__)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"lox {__version__}")
        raise typer.Exit()


app = typer.Typer(
    help="Lox expression interpreter: run a file, a single expression, or a prompt.",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Lox CLI main callback for global options."""
    pass


# =============================================================================
# Helpers
# =============================================================================


def configure_logging(level: str) -> None:
    """Install the stderr handler once and apply the configured level."""
    logging.basicConfig(format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger().setLevel(level)


def build_config(
    config_path: Path | None,
    show_ast: bool,
    log_level: str | None,
) -> LoxConfig:
    """
    Resolve configuration: lox.toml, then LOX_LOG_LEVEL, then CLI options.

    Exits with code 78 if the configuration is invalid.
    """
    try:
        config = load_config(config_path)
        overrides: dict[str, Any] = {}
        if show_ast:
            overrides["show_ast"] = True
        if log_level:
            overrides["log_level"] = log_level
        if overrides:
            config = LoxConfig.model_validate({**config.model_dump(), **overrides})
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=EXIT_CONFIG) from e
    except ValidationError as e:
        typer.echo(f"Error: invalid option: {e}", err=True)
        raise typer.Exit(code=EXIT_CONFIG) from e

    configure_logging(config.log_level)
    return config


def report(result: RunResult, config: LoxConfig) -> None:
    """Print the tree (if requested) and value of a run on stdout."""
    if config.show_ast and result.tree is not None:
        typer.echo(print_tree(result.tree))
    if result.output is not None:
        typer.echo(result.output)


# =============================================================================
# Commands
# =============================================================================


@app.command(name="run")
def run_command(
    path: Path = typer.Argument(..., help="File containing a Lox expression"),
    show_ast: bool = typer.Option(False, "--show-ast", help="Print the expression tree"),
    log_level: str | None = typer.Option(
        None, "--log-level", "-l", help="DEBUG, INFO, WARNING, ERROR or CRITICAL"
    ),
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Path to lox.toml"),
) -> None:
    """Evaluate the expression in a file."""
    config = build_config(config_path, show_ast, log_level)

    if not path.is_file():
        typer.echo(f"Error: file not found: {path}", err=True)
        raise typer.Exit(code=EXIT_NO_INPUT)

    source = path.read_text(encoding="utf-8")
    logger.debug("Read %d characters from %s", len(source), path)

    result = Session(config).run(source)
    report(result, config)
    raise typer.Exit(code=result.exit_code)


@app.command(name="eval")
def eval_command(
    expression: str = typer.Argument(..., help="Lox expression to evaluate"),
    show_ast: bool = typer.Option(False, "--show-ast", help="Print the expression tree"),
    log_level: str | None = typer.Option(
        None, "--log-level", "-l", help="DEBUG, INFO, WARNING, ERROR or CRITICAL"
    ),
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Path to lox.toml"),
) -> None:
    """Evaluate an expression given on the command line."""
    config = build_config(config_path, show_ast, log_level)

    result = Session(config).run(expression)
    report(result, config)
    raise typer.Exit(code=result.exit_code)


@app.command(name="repl")
def repl_command(
    show_ast: bool = typer.Option(False, "--show-ast", help="Print the expression tree"),
    log_level: str | None = typer.Option(
        None, "--log-level", "-l", help="DEBUG, INFO, WARNING, ERROR or CRITICAL"
    ),
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Path to lox.toml"),
) -> None:
    """
    Evaluate expressions line by line.

    Each line is independent. Errors are reported and the prompt continues.
    Enter :q or send EOF to quit.
    """
    config = build_config(config_path, show_ast, log_level)
    session = Session(config)
    exit_code = EXIT_OK

    while True:
        try:
            line = input(config.prompt)
        except EOFError:
            break

        if line.strip() == QUIT_COMMAND:
            break
        if not line.strip():
            continue

        result = session.run(line)
        report(result, config)
        exit_code = result.exit_code

    raise typer.Exit(code=exit_code)


def main() -> None:
    """Main entry point for the CLI."""
    app(standalone_mode=True)


if __name__ == "__main__":
    main()
