"""Logging for reactive-typeahead, built on loguru.

Records are tagged with the component that emitted them (``forms.control``,
``widgets.typeahead``, ...) through ``extra[name]``.
"""

import os
import sys
from typing import Any, Optional

from loguru import logger

from reactive_typeahead.utils import get_project_root

_PACKAGE = "reactive_typeahead"
DEFAULT_LOG_FILENAME = "reactive_typeahead.log"

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[name]}:{function}:{line} - {message}"

# Last file sink target; reused when setup_logger() is called without a path
_log_file_path: Optional[str] = None

# Silent until setup_logger() is called
logger.disable(_PACKAGE)


def resolve_log_file(log_file: Optional[str] = None) -> str:
    """
    Absolute path of the file sink.

    Relative paths are taken from the project root. Without ``log_file`` the
    previously configured path is reused, else ``reactive_typeahead.log``.
    """
    global _log_file_path

    if log_file is not None:
        _log_file_path = log_file if os.path.isabs(log_file) else os.path.join(get_project_root(), log_file)
    elif _log_file_path is None:
        _log_file_path = os.path.join(get_project_root(), DEFAULT_LOG_FILENAME)
    return _log_file_path


def setup_logger(
    log_file: Optional[str] = None,
    log_level: str = "INFO",
    rotation: str = "10 MB",
    retention: str = "7 days",
    compression: str = "zip",
    console_output: bool = False,
) -> str:
    """
    Route package logs to a rotating file and, optionally, stderr.

    Args:
        log_file: File sink path (see :func:`resolve_log_file`)
        log_level: Minimum level for both sinks
        rotation: When to rotate the file sink
        retention: How long rotated files are kept
        compression: Format for rotated files
        console_output: Also log to stderr. Leave off while a Textual app
            owns the terminal.

    Returns:
        The absolute path of the file sink
    """
    path = resolve_log_file(log_file)

    logger.remove()
    logger.configure(extra={"name": _PACKAGE})

    if console_output:
        logger.add(sys.stderr, level=log_level, format=CONSOLE_FORMAT, colorize=True)

    logger.add(
        path,
        level=log_level,
        format=FILE_FORMAT,
        rotation=rotation,
        retention=retention,
        compression=compression,
        encoding="utf-8",
    )
    logger.enable(_PACKAGE)
    return path


def setup_logger_from(settings: Any, *, log_level: Optional[str] = None) -> str:
    """Configure logging from an object carrying ``log_file``, ``log_level`` and ``console_log``."""
    return setup_logger(
        log_file=settings.log_file,
        log_level=log_level or settings.log_level,
        console_output=settings.console_log,
    )


def get_logger(name: Optional[str] = None):
    """
    Logger tagged with a component name.

    Args:
        name: Component name shown in every record; defaults to the package
    """
    return logger.bind(name=name or _PACKAGE)
