"""
Settings Module for PathGame

User preferences (default grid size and solver strategy, debug renders,
save directory) persisted as JSON in config.json in the working directory.
"""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)

SETTINGS_FILE = Path("config.json")

DEFAULT_SETTINGS: Dict[str, Any] = {
    "debug_enabled": False,
    "strategy_name": "ordered",
    "grid_size": 5,
    "data_dir": "saves",
}

# Per-key check applied to loaded values; failures fall back to the default
_VALIDATORS: Dict[str, Callable[[Any], bool]] = {
    "debug_enabled": lambda v: isinstance(v, bool),
    "strategy_name": lambda v: isinstance(v, str) and bool(v),
    "grid_size": lambda v: v in (5, 7) and not isinstance(v, bool),
    "data_dir": lambda v: isinstance(v, str) and bool(v),
}


def _merge_with_defaults(loaded: Dict[str, Any]) -> Dict[str, Any]:
    result = DEFAULT_SETTINGS.copy()
    for key, value in loaded.items():
        validator = _VALIDATORS.get(key)
        if validator is not None and not validator(value):
            logger.warning(f"Ignoring invalid setting {key}={value!r}, using {result[key]!r}")
            continue
        result[key] = value
    return result


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load settings from config.json.

    Known keys with invalid values are replaced by their defaults;
    unknown keys are kept as-is.

    Args:
        path: Settings file (default SETTINGS_FILE)

    Returns:
        Settings dictionary. Returns defaults if file missing or invalid.
    """
    settings_file = Path(path) if path else SETTINGS_FILE
    if not settings_file.exists():
        logger.debug("Settings file not found, using defaults")
        return DEFAULT_SETTINGS.copy()

    try:
        with open(settings_file, 'r', encoding='utf-8') as f:
            loaded = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Failed to load settings: {e}, using defaults")
        return DEFAULT_SETTINGS.copy()

    if not isinstance(loaded, dict):
        logger.warning(f"Settings file {settings_file} is not an object, using defaults")
        return DEFAULT_SETTINGS.copy()

    settings = _merge_with_defaults(loaded)
    logger.debug(f"Settings loaded: {settings}")
    return settings


def save_settings(settings: Dict[str, Any], path: Optional[Path] = None) -> bool:
    """
    Save settings to config.json.

    Args:
        settings: Settings dictionary to save
        path: Settings file (default SETTINGS_FILE)

    Returns:
        True if the file was written
    """
    settings_file = Path(path) if path else SETTINGS_FILE
    try:
        with open(settings_file, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
    except OSError as e:
        logger.error(f"Failed to save settings: {e}")
        return False
    logger.debug(f"Settings saved: {settings}")
    return True
