"""
Configuration for the lox driver.

Configuration is loaded from the [lox] section of lox.toml. The
LOX_LOG_LEVEL environment variable overrides the file, and command-line
options override both.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError, field_validator

from .errors import ConfigError

DEFAULT_CONFIG_FILE = "lox.toml"
LOG_LEVEL_ENV_VAR = "LOX_LOG_LEVEL"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LoxConfig(BaseModel):
    """Driver settings."""

    log_level: str = "WARNING"
    show_ast: bool = False
    prompt: str = "> "

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize the logging level name."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level '{v}'. Must be one of: {', '.join(LOG_LEVELS)}")
        return level


def load_config(
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> LoxConfig:
    """
    Load configuration from lox.toml and the environment.

    Args:
        path: Path to the TOML file (default: ./lox.toml)
        environ: Environment mapping (default: os.environ)

    Returns:
        LoxConfig with values from file, environment or defaults

    Raises:
        ConfigError: If the file is not valid TOML or holds invalid values
    """
    toml_path = path if path is not None else Path(DEFAULT_CONFIG_FILE)
    env = os.environ if environ is None else environ

    data: dict[str, Any] = {}
    if toml_path.exists():
        try:
            with open(toml_path, "rb") as f:
                document = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {toml_path}: {e}") from e
        section = document.get("lox", {})
        if not isinstance(section, dict):
            raise ConfigError(f"[lox] in {toml_path} must be a table")
        data.update(section)

    env_level = env.get(LOG_LEVEL_ENV_VAR)
    if env_level:
        data["log_level"] = env_level

    try:
        return LoxConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
