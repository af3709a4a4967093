from __future__ import annotations

"""
Unit tests for the configuration validator.

Verifies coercion with warnings in lenient mode and exceptions in
strict mode.
"""

import pytest

from dmspicker.core.services.validator import validate_config
from dmspicker.domain.config import get_default_config
from dmspicker.infra.logging.config import LOG_LEVELS


def test_defaults_pass_cleanly() -> None:
    clean, warnings = validate_config(get_default_config())
    assert clean == get_default_config()
    assert warnings == []


def test_non_dict_falls_back_to_defaults() -> None:
    clean, warnings = validate_config(["not", "a", "dict"])
    assert clean == get_default_config()
    assert len(warnings) == 1


def test_non_dict_strict_raises() -> None:
    with pytest.raises(TypeError):
        validate_config("oops", strict=True)


def test_bool_coercion_from_strings() -> None:
    """TC-01: Common textual booleans are converted with a warning."""
    clean, warnings = validate_config({"render_tree": "yes", "show_document_counts": "off"})
    assert clean["render_tree"] is True
    assert clean["show_document_counts"] is False
    assert len(warnings) == 2


def test_choice_normalization() -> None:
    clean, warnings = validate_config({"system_type": " MFiles ", "log_level": "debug", "locale": "DE"})
    assert clean["system_type"] == "mfiles"
    assert clean["log_level"] == "DEBUG"
    assert clean["locale"] == "de"
    assert warnings == []


def test_invalid_choice_falls_back() -> None:
    clean, warnings = validate_config({"system_type": "sharepoint", "aggregate_attribute": "name"})
    assert clean["system_type"] == "docuware"
    assert clean["aggregate_attribute"] == "document_count"
    assert len(warnings) == 2


def test_invalid_choice_strict_raises() -> None:
    with pytest.raises(ValueError):
        validate_config({"system_type": "sharepoint"}, strict=True)


@pytest.mark.parametrize("raw, expected", [(30, 30), ("15", 15), (0, 10), (-5, 10), (True, 10), ("soon", 10)])
def test_listing_timeout(raw, expected) -> None:
    clean, _ = validate_config({"listing_timeout": raw})
    assert clean["listing_timeout"] == expected


def test_unknown_keys_are_dropped() -> None:
    clean, warnings = validate_config({"selected_ids": ["c1"], "color": "blue"})
    assert "selected_ids" not in clean
    assert "color" not in clean
    assert len(warnings) == 2


@pytest.mark.parametrize("level", sorted(LOG_LEVELS))
def test_log_levels_accepted(level) -> None:
    clean, warnings = validate_config({"log_level": level.lower()})
    assert clean["log_level"] == level
    assert warnings == []


def test_log_level_alias_rejected() -> None:
    clean, warnings = validate_config({"log_level": "WARN"})
    assert clean["log_level"] == "WARNING"
    assert len(warnings) == 1
