"""Checker configuration.

Settings come from a ``.xmldoccheck.toml`` file next to the checked
project (or an explicit file), either at the top level or under a
``[tool.xmldoccheck]`` table. The log level can be overridden with the
``XMLDOCCHECK_LOG_LEVEL`` environment variable.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError

log = logging.getLogger(__name__)

CONFIG_FILENAME = ".xmldoccheck.toml"
LOG_LEVEL_ENV = "XMLDOCCHECK_LOG_LEVEL"


class CheckerConfig(BaseModel):
    """Options for a documentation check run."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    exclude: list[str] = Field(default_factory=lambda: ["bin", "obj"])
    check_params: bool = True
    check_returns: bool = True
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level: {value}")
        return level


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as fh:
            data = tomllib.load(fh)
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    if "tool" not in data:
        return data

    tool = data["tool"]
    if not isinstance(tool, dict):
        raise ConfigError(f"Invalid configuration in {path}: 'tool' must be a table")
    section = tool.get("xmldoccheck", {})
    if not isinstance(section, dict):
        raise ConfigError(
            f"Invalid configuration in {path}: 'tool.xmldoccheck' must be a table"
        )
    return section


def load_config(root: Path, path: Path | None = None) -> CheckerConfig:
    """Load configuration for the project at ``root``.

    Args:
        root: The solution, project, directory or file being checked.
        path: Explicit configuration file. Must exist if given.

    Returns:
        CheckerConfig, with defaults for anything not set.

    Raises:
        ConfigError: If the file is unreadable or contains invalid settings.
    """
    data: dict[str, Any] = {}

    if path is not None:
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")
        data = _read_toml(path)
    else:
        base = root if root.is_dir() else root.parent
        candidate = base / CONFIG_FILENAME
        if candidate.is_file():
            log.info("Using config %s", candidate)
            data = _read_toml(candidate)

    level = os.environ.get(LOG_LEVEL_ENV)
    if level:
        data = {**data, "log_level": level}

    try:
        return CheckerConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
