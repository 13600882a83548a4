"""
Settings Module for the Klotski client

Reads user preferences from config.json in the working directory. The
file is optional and hand-edited; each key is checked on its own so one
bad value does not discard the rest.
"""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)

# Settings file location (project root)
SETTINGS_FILE = Path("config.json")

# Default settings
DEFAULT_SETTINGS: Dict[str, Any] = {
    "server_url": "http://localhost:8080",
    "request_timeout_sec": None,
    "solve_step_delay_ms": 650,
    "hint_delay_ms": 500,
    "flash_ms": 250,
    "debug_enabled": False,
}


def _is_delay(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _is_timeout(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


# Acceptance check per key
_VALIDATORS: Dict[str, Callable[[Any], bool]] = {
    "server_url": lambda value: isinstance(value, str) and bool(value.strip()),
    "request_timeout_sec": _is_timeout,
    "solve_step_delay_ms": _is_delay,
    "hint_delay_ms": _is_delay,
    "flash_ms": _is_delay,
    "debug_enabled": lambda value: isinstance(value, bool),
}


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load settings from config.json.

    Unknown keys are ignored and invalid values fall back to their
    default, each with a warning.

    Args:
        path: Settings file to read (default SETTINGS_FILE)

    Returns:
        Settings dictionary with every key of DEFAULT_SETTINGS
    """
    settings_file = path if path is not None else SETTINGS_FILE
    result = DEFAULT_SETTINGS.copy()

    if not settings_file.exists():
        logger.debug("Settings file not found, using defaults")
        return result

    try:
        with open(settings_file, 'r', encoding='utf-8') as f:
            loaded = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        logger.warning(f"Failed to load settings: {e}, using defaults")
        return result

    if not isinstance(loaded, dict):
        logger.warning(f"Settings file {settings_file} is not a JSON object, using defaults")
        return result

    for key, value in loaded.items():
        validator = _VALIDATORS.get(key)
        if validator is None:
            logger.warning(f"Ignoring unknown setting '{key}'")
        elif not validator(value):
            logger.warning(f"Invalid value for '{key}': {value!r}, using {result[key]!r}")
        else:
            result[key] = value

    logger.debug(f"Settings loaded: {result}")
    return result
