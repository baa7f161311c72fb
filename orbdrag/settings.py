"""
Settings Module for the Orb Drag Planner

Provides persistent storage for solver parameters using JSON.
Settings are stored in config.json in the working directory.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from orbdrag.solver import SolverConfig

logger = logging.getLogger(__name__)

# Settings file location (working directory)
SETTINGS_FILE = Path("config.json")

# Default settings: every solver parameter plus app-level keys
DEFAULT_SETTINGS: Dict[str, Any] = {
    **SolverConfig().to_dict(),
    "target": None,  # None = theoretical maximum of the board
    "debug_enabled": False,
}


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load settings from config.json.

    Args:
        path: Override for the settings file

    Returns:
        Settings dictionary. Returns defaults if file missing or invalid.
    """
    settings_file = path or SETTINGS_FILE
    if not settings_file.exists():
        logger.debug("Settings file not found, using defaults")
        return DEFAULT_SETTINGS.copy()

    try:
        with open(settings_file, 'r', encoding='utf-8') as f:
            settings = json.load(f)

        if not isinstance(settings, dict):
            raise ValueError("settings root must be an object")

        # Merge with defaults to handle missing keys
        result = DEFAULT_SETTINGS.copy()
        result.update(settings)
        logger.debug(f"Settings loaded: {result}")
        return result

    except (json.JSONDecodeError, ValueError, IOError) as e:
        logger.warning(f"Failed to load settings: {e}, using defaults")
        return DEFAULT_SETTINGS.copy()


def save_settings(settings: Dict[str, Any], path: Optional[Path] = None) -> None:
    """
    Save settings to config.json.

    Args:
        settings: Settings dictionary to save
        path: Override for the settings file
    """
    settings_file = path or SETTINGS_FILE
    try:
        with open(settings_file, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
        logger.debug(f"Settings saved: {settings}")
    except IOError as e:
        logger.error(f"Failed to save settings: {e}")


def config_from_settings(settings: Dict[str, Any]) -> SolverConfig:
    """
    Build a SolverConfig from a settings dict.

    Unknown keys (target, debug_enabled, ...) are ignored. Invalid values
    fall back to the defaults.
    """
    try:
        return SolverConfig.from_dict(settings)
    except (TypeError, ValueError) as e:
        logger.warning(f"Invalid solver settings: {e}, using defaults")
        return SolverConfig()
