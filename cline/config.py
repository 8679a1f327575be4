"""Persistent JSON settings for the demo front door.

Holds the prompt string and default log level. The engine itself never reads
configuration; all access is defensive and missing or malformed config falls
back to defaults.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

from .session import DEFAULT_PROMPT

APP_NAME = "cline"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_LOG_LEVEL = "WARNING"


def load_config() -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def load_prompt() -> str:
    """Return the configured prompt, or ``">> "`` for missing/non-string values."""
    value = load_config().get("prompt")
    return value if isinstance(value, str) else DEFAULT_PROMPT


def load_log_level() -> str:
    """Return a configured log level name recognized by ``logging``."""
    value = load_config().get("log_level")
    if not isinstance(value, str):
        return DEFAULT_LOG_LEVEL
    name = value.upper()
    if not isinstance(logging.getLevelName(name), int):
        return DEFAULT_LOG_LEVEL
    return name
