"""Environment-driven settings for reactive-typeahead.

Values are read from the process environment, optionally seeded from a
``.env`` file:

    TYPEAHEAD_DEBOUNCE_MS   default debounce for suggestion queries (300)
    TYPEAHEAD_LOG_LEVEL     loguru level (INFO)
    TYPEAHEAD_LOG_FILE      log file path, relative to the project root
    TYPEAHEAD_CONSOLE_LOG   also log to stderr (false)
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from reactive_typeahead.logger import get_logger
from reactive_typeahead.typeahead import SuggestionsConfig
from reactive_typeahead.utils import parse_bool

logger = get_logger("config")

_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


class TypeaheadSettings(BaseModel):
    """Process-wide defaults for typeahead widgets."""

    model_config = ConfigDict(frozen=True)

    debounce_ms: int = Field(300, ge=0, description="Debounce before querying suggestions, in milliseconds")
    log_level: str = Field("INFO", description="Logging level")
    log_file: Optional[str] = Field(None, description="Log file path; None uses the default location")
    console_log: bool = Field(False, description="Mirror log records to stderr")

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"unknown log level '{value}'")
        return level

    @property
    def debounce_duration(self) -> float:
        """Debounce in seconds, as used by :class:`SuggestionsConfig`."""
        return self.debounce_ms / 1000

    def suggestions_config(self, **overrides) -> SuggestionsConfig:
        """Build a SuggestionsConfig carrying this debounce unless overridden."""
        overrides.setdefault("debounce_duration", self.debounce_duration)
        return SuggestionsConfig(**overrides)


def load_settings(env_file: Optional[str | Path] = None) -> TypeaheadSettings:
    """
    Load settings from the environment.

    Args:
        env_file: Optional ``.env`` file to load first. Variables already set
            in the environment win.

    Returns:
        TypeaheadSettings: Parsed settings

    Raises:
        ValidationError: If a variable holds an invalid value
    """
    if env_file is not None:
        load_dotenv(env_file)
    else:
        load_dotenv()

    values: dict = {
        "log_file": os.getenv("TYPEAHEAD_LOG_FILE") or None,
        "console_log": parse_bool(os.getenv("TYPEAHEAD_CONSOLE_LOG"), default=False),
    }
    if os.getenv("TYPEAHEAD_DEBOUNCE_MS"):
        values["debounce_ms"] = os.getenv("TYPEAHEAD_DEBOUNCE_MS")
    if os.getenv("TYPEAHEAD_LOG_LEVEL"):
        values["log_level"] = os.getenv("TYPEAHEAD_LOG_LEVEL")

    settings = TypeaheadSettings(**values)
    logger.debug(f"Loaded settings: {settings!r}")
    return settings
