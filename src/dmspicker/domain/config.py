from __future__ import annotations

"""
Configuration Domain Management.

Handles persistent storage of picker preferences in a JSON file inside
the user data directory. The selection itself is never stored: every
session starts from the connector's current snapshot.
"""

import json
import logging
import os
from typing import Any, Dict

from dmspicker.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE_NAME = "config.json"
CURRENT_CONFIG_VERSION = "1.0.0"

# Session keys that must never be persisted
_TRANSIENT_KEYS = ("selected_ids", "seed", "toggles", "query")


def get_config_path() -> str:
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)

# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default picker configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Connector
        "system_type": "docuware",
        "listing_timeout": 10,

        # Aggregation
        "aggregate_attribute": "document_count",

        # Presentation
        "show_document_counts": True,
        "render_tree": False,
        "locale": "en",

        # Diagnostics
        "log_level": "WARNING",
        "log_to_file": False,
    }


def get_default_app_state() -> Dict[str, Any]:
    """Full structure stored in config.json."""
    return {
        "version": CURRENT_CONFIG_VERSION,
        "settings": get_default_config(),
        "data_sources": {},
    }

# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_app_state() -> Dict[str, Any]:
    """
    Load application state from disk, merged over the defaults.

    Returns:
        Dict[str, Any]: The loaded state or the defaults on failure.
    """
    state = get_default_app_state()
    path = get_config_path()

    if not os.path.exists(path):
        logger.debug("Config file not found. Returning defaults.")
        return state

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return state

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return state

    if isinstance(data.get("settings"), dict):
        state["settings"].update(_strip_transient(data["settings"]))
    if isinstance(data.get("data_sources"), dict):
        state["data_sources"].update(data["data_sources"])

    state["version"] = CURRENT_CONFIG_VERSION
    return state


def save_app_state(state: Dict[str, Any]) -> None:
    """
    Persist application state to disk.

    Args:
        state: The state dictionary to save.
    """
    path = get_config_path()
    payload = dict(state)
    payload["version"] = CURRENT_CONFIG_VERSION
    if isinstance(payload.get("settings"), dict):
        payload["settings"] = _strip_transient(payload["settings"])

    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {path}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")

# -----------------------------------------------------------------------------
# Facade API
# -----------------------------------------------------------------------------
def load_config() -> Dict[str, Any]:
    """Retrieve the active settings merged over the defaults."""
    defaults = get_default_config()
    defaults.update(load_app_state().get("settings", {}))
    return defaults


def save_config(config: Dict[str, Any]) -> None:
    state = load_app_state()
    state["settings"] = config
    save_app_state(state)


def _strip_transient(settings: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in settings.items() if k not in _TRANSIENT_KEYS}
