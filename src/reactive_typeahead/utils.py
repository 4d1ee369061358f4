"""
Utility functions shared across reactive-typeahead.
"""

import os
from typing import Any


def get_project_root() -> str:
    """
    Get the project root directory (parent of src/reactive_typeahead).

    Returns:
        Absolute path to the project root directory
    """
    return os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def display_string(value: Any) -> str:
    """
    Convert an arbitrary control value to display text.

    None becomes an empty string; everything else goes through ``str()``.
    """
    return "" if value is None else str(value)


def parse_bool(raw: str | None, default: bool = False) -> bool:
    """Interpret an environment-style flag ("true", "1", "yes", "on")."""
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}
