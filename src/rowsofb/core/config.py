"""
Runtime configuration for RowsOfB.

Settings are read from environment variables prefixed with ``ROWSOFB_``:

    ROWSOFB_LOG_LEVEL          log level for the CLI (default: WARNING)
    ROWSOFB_DEFAULT_ROWS       rows of a fresh matrix variable (default: 3)
    ROWSOFB_DEFAULT_COLS       columns of a fresh matrix variable (default: 3)
    ROWSOFB_MAX_INPUT_LENGTH   longest accepted expression line (default: 1000)

Unset or invalid values fall back to the defaults.

Usage:
    from rowsofb.core.config import load_settings

    settings = load_settings()
    env = Environment(default_shape=settings.default_shape)
"""

from __future__ import annotations

import logging
import os

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

ENV_PREFIX = "ROWSOFB_"

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class Settings(BaseModel):
    """Resolved configuration for one process."""

    log_level: str = Field(default="WARNING", description="Logging level name")
    default_rows: int = Field(default=3, ge=0, description="Rows of a fresh matrix slot")
    default_cols: int = Field(default=3, ge=0, description="Columns of a fresh matrix slot")
    max_input_length: int = Field(default=1000, gt=0, description="Longest accepted input line")

    model_config = ConfigDict(frozen=True)

    @property
    def default_shape(self) -> tuple[int, int]:
        return self.default_rows, self.default_cols


def _env_int(name: str, default: int, minimum: int) -> int:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s%s=%r: not an integer", ENV_PREFIX, name, raw)
        return default
    if value < minimum:
        logger.warning("Ignoring %s%s=%r: must be at least %d", ENV_PREFIX, name, raw, minimum)
        return default
    return value


def _env_log_level(default: str) -> str:
    raw = os.getenv(ENV_PREFIX + "LOG_LEVEL")
    if raw is None:
        return default
    level = raw.strip().upper()
    if level not in _LOG_LEVELS:
        logger.warning("Ignoring %sLOG_LEVEL=%r: unknown level", ENV_PREFIX, raw)
        return default
    return level


def load_settings() -> Settings:
    """Build Settings from the current process environment."""
    return Settings(
        log_level=_env_log_level("WARNING"),
        default_rows=_env_int("DEFAULT_ROWS", 3, 0),
        default_cols=_env_int("DEFAULT_COLS", 3, 0),
        max_input_length=_env_int("MAX_INPUT_LENGTH", 1000, 1),
    )
