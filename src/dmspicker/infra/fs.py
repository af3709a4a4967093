from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform resolution of the application data directory,
path normalization and JSON document loading for forest listings and
configuration files.
"""

import json
import logging
import os
from typing import Any, Optional, Tuple

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "DMSPicker"
UNIX_APP_DIR_NAME = ".dmspicker"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/DMSPicker
    - Linux/Mac: ~/.dmspicker

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        home = os.path.expanduser("~")
        path = os.path.join(home, UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        logger.debug(f"Could not create data directory '{path}': {e}")

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Expands environment variables and '~'. Reverts to the fallback if the
    input is empty.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def is_url(source: Optional[str]) -> bool:
    """Return True for http(s) sources handled by the network layer."""
    s = (source or "").strip().lower()
    return s.startswith("http://") or s.startswith("https://")

# -----------------------------------------------------------------------------
# JSON DOCUMENT API
# -----------------------------------------------------------------------------

def read_json_file(path: str) -> Tuple[Optional[Any], Optional[str]]:
    """
    Load a JSON document from disk.

    Args:
        path: File path (environment variables and '~' are expanded).

    Returns:
        Tuple[Optional[Any], Optional[str]]: (Parsed document, Error message if applicable).
    """
    full = normalize_path(path, fallback=path or ".")
    if not os.path.isfile(full):
        return None, f"File not found: {full}"

    try:
        with open(full, "r", encoding="utf-8") as f:
            return json.load(f), None
    except (OSError, ValueError) as e:
        logger.error(f"Failed to read JSON document '{full}': {e}")
        return None, str(e)


def write_json_file(path: str, data: Any) -> Tuple[bool, Optional[str]]:
    """
    Persist a JSON document, creating parent directories as needed.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        parent = os.path.dirname(os.path.abspath(path))
        os.makedirs(parent, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=4)
        return True, None
    except (OSError, TypeError, ValueError) as e:
        logger.error(f"Failed to write JSON document '{path}': {e}")
        return False, str(e)
