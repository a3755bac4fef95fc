# settings.py
"""
Runtime configuration for the calculator front end.

Values come from (lowest to highest priority) the model defaults, a ``.env``
file, ``UNCALC_*`` environment variables and finally command-line flags.
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, field_validator

DEFAULT_HISTORY_FILE = os.path.expanduser("~/.uncalc_history")

_ENV_PREFIX = "UNCALC_"
_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
_TRUTHY = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Validated front-end settings."""
    history_file: str = DEFAULT_HISTORY_FILE
    history_lines: int = Field(50, ge=1, le=10000, description="Lines shown by :history")
    log_level: str = "WARNING"
    prompt: str = "> "
    show_postfix: bool = False

    @field_validator('history_file')
    @classmethod
    def history_file_must_not_be_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError('History file cannot be empty')
        return os.path.expanduser(v.strip())

    @field_validator('log_level')
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level {v!r}; expected one of {sorted(_LOG_LEVELS)}")
        return level


def load_settings(environ: Optional[Mapping[str, str]] = None, **overrides) -> Settings:
    """Build Settings from the environment.

    ``environ`` defaults to ``os.environ`` after loading a ``.env`` file
    found from the current directory.
    Keyword overrides that are ``None`` are ignored, so argparse results can
    be passed straight through.
    """
    if environ is None:
        load_dotenv(find_dotenv(usecwd=True))
        environ = os.environ

    values = {}
    for name in ('history_file', 'history_lines', 'log_level', 'prompt'):
        raw = environ.get(_ENV_PREFIX + name.upper())
        if raw is not None:
            values[name] = raw
    show_postfix = environ.get(_ENV_PREFIX + "SHOW_POSTFIX")
    if show_postfix is not None:
        values['show_postfix'] = show_postfix.strip().lower() in _TRUTHY

    values.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**values)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
