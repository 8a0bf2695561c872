"""
renum Configuration
===================
Settings come from the environment and can be overridden by CLI flags.

    RENUM_DEFAULT_UNDERLYING   Underlying type when none is given (int32)
    RENUM_LOG_LEVEL            Log level for the CLI (WARNING)
"""
from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import Mapping

from .errors import ConfigError
from .integral import resolve_underlying

DEFAULT_UNDERLYING = "int32"
DEFAULT_LOG_LEVEL = "WARNING"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    default_underlying: str = DEFAULT_UNDERLYING
    log_level: str = DEFAULT_LOG_LEVEL


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Read settings from ``environ`` (``os.environ`` by default).

    Raises:
        ConfigError: on an unknown underlying type or log level.
    """
    env = os.environ if environ is None else environ

    underlying = env.get("RENUM_DEFAULT_UNDERLYING", "").strip() or DEFAULT_UNDERLYING
    resolve_underlying(underlying)

    level = env.get("RENUM_LOG_LEVEL", "").strip().upper() or DEFAULT_LOG_LEVEL
    if level not in LOG_LEVELS:
        raise ConfigError(
            f"Invalid RENUM_LOG_LEVEL {level!r}; expected one of {', '.join(LOG_LEVELS)}"
        )

    return Settings(default_underlying=underlying, log_level=level)


def configure_logging(level: str = DEFAULT_LOG_LEVEL):
    """Route log records to stderr. Only the CLI calls this."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
        force=True,
    )
