from __future__ import annotations

"""
Configuration Domain Management.

Handles persistent storage of the last CLI session and application settings
as JSON inside the user data directory, with default fallback on missing or
corrupted files.
"""

import json
import logging
import os
from typing import Any, Dict

from tree2json.domain.constants import (
    CURRENT_CONFIG_VERSION,
    DEFAULT_FETCH_TIMEOUT,
    DEFAULT_JSON_INDENT,
    DEFAULT_SOURCE,
    ON_DUPLICATE_OVERWRITE,
)
from tree2json.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE = os.path.join(get_user_data_dir(), "config.json")


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration (Session State).
    This dictionary drives the behavior of the Pipeline.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Source acquisition
        "source": DEFAULT_SOURCE,
        "encoding": "",
        "fetch_timeout": DEFAULT_FETCH_TIMEOUT,

        # Parsing
        "normalize_ascii": True,
        "on_duplicate": ON_DUPLICATE_OVERWRITE,
        "legacy_root_reentry": False,

        # Output
        "output_path": "",
        "json_indent": DEFAULT_JSON_INDENT,
        "ensure_ascii": False,

        # Diagnostics
        "save_error_log": False,
    }


def get_default_app_state() -> Dict[str, Any]:
    """
    Generate the complete default application state structure.

    Returns:
        Dict[str, Any]: The full JSON structure for config.json.
    """
    return {
        "version": CURRENT_CONFIG_VERSION,
        "app_settings": {
            "locale": "en",
            "log_level": "WARNING",
        },
        "last_session": get_default_config(),
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_app_state() -> Dict[str, Any]:
    """
    Load application state from disk.

    Returns:
        Dict[str, Any]: The loaded state merged over defaults, or the
        defaults alone on failure.
    """
    state = get_default_app_state()

    if not os.path.exists(CONFIG_FILE):
        logger.debug("Config file not found. Returning defaults.")
        return state

    try:
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Failed to load config: {e}. Using defaults.")
        return state

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return state

    # Merge with defaults so keys added in newer versions exist
    for section in ("app_settings", "last_session"):
        if isinstance(data.get(section), dict):
            state[section].update(data[section])

    state["version"] = CURRENT_CONFIG_VERSION
    return state


def save_app_state(state: Dict[str, Any]) -> None:
    """
    Persist application state to disk.

    Args:
        state: The state dictionary to save.
    """
    try:
        os.makedirs(os.path.dirname(CONFIG_FILE), exist_ok=True)
        state["version"] = CURRENT_CONFIG_VERSION
        with open(CONFIG_FILE, "w", encoding="utf-8") as f:
            json.dump(state, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {CONFIG_FILE}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")


# -----------------------------------------------------------------------------
# Facade API
# -----------------------------------------------------------------------------
def load_config() -> Dict[str, Any]:
    """
    Retrieve the active configuration (Last Session) directly.
    """
    state = load_app_state()
    defaults = get_default_config()
    defaults.update(state.get("last_session", {}))
    return defaults


def save_config(config: Dict[str, Any]) -> None:
    """
    Save the provided config as the 'last_session'.
    """
    state = load_app_state()
    state["last_session"] = config
    save_app_state(state)
