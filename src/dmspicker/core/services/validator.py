from __future__ import annotations

"""
Configuration Validation Service.

Normalizes configuration dictionaries coming from disk or the CLI.
Untrusted values are coerced where a safe reading exists and replaced by
defaults otherwise, with one warning per correction. Strict mode raises
instead.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from dmspicker.core.selection.aggregator import numeric_attributes
from dmspicker.domain.config import get_default_config
from dmspicker.domain.samples import SYSTEM_TYPES
from dmspicker.infra.logging.config import LOG_LEVELS

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a picker configuration.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raise on the first invalid value instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and
                                          the list of warnings.

    Raises:
        TypeError: In strict mode, on type mismatches.
        ValueError: In strict mode, on out-of-range values.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    for field in ("show_document_counts", "render_tree", "log_to_file"):
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    merged["listing_timeout"] = _as_positive_int(
        merged.get("listing_timeout"), defaults["listing_timeout"], "listing_timeout", warnings, strict
    )

    merged["system_type"] = _as_choice(
        merged.get("system_type"), defaults["system_type"], SYSTEM_TYPES, "system_type", warnings, strict,
        transform=str.lower,
    )
    merged["aggregate_attribute"] = _as_choice(
        merged.get("aggregate_attribute"), defaults["aggregate_attribute"],
        tuple(sorted(numeric_attributes())), "aggregate_attribute", warnings, strict
    )
    merged["log_level"] = _as_choice(
        merged.get("log_level"), defaults["log_level"], tuple(LOG_LEVELS), "log_level", warnings, strict,
        transform=str.upper,
    )
    merged["locale"] = _as_str(merged.get("locale"), defaults["locale"], "locale", warnings, strict).lower()

    unknown = sorted(set(merged) - set(defaults))
    for key in unknown:
        warnings.append(f"Unknown config key '{key}' ignored.")
        del merged[key]

    return merged, warnings

# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "ja", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "nein", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_positive_int(value: Any, fallback: int, field: str, warnings: List[str], strict: bool) -> int:
    if value is None:
        return fallback
    if isinstance(value, bool):
        msg = f"Invalid field '{field}': expected int, received bool."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    if isinstance(value, int):
        number = value
    elif isinstance(value, str) and not strict and value.strip().isdigit():
        number = int(value.strip())
        warnings.append(f"Field '{field}' converted from '{value}' to {number}.")
    else:
        msg = f"Invalid field '{field}': expected int, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    if number <= 0:
        msg = f"Invalid field '{field}': must be positive, received {number}."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback
    return number


def _as_choice(
        value: Any,
        fallback: str,
        choices: Tuple[str, ...],
        field: str,
        warnings: List[str],
        strict: bool,
        transform: Optional[Callable[[str], str]] = None,
) -> str:
    raw = _as_str(value, fallback, field, warnings, strict)
    v = transform(raw) if transform else raw
    if v in choices:
        return v

    msg = f"Invalid field '{field}': '{raw}' is not one of {list(choices)}."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback
