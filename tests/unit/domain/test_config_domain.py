from __future__ import annotations

"""
Unit tests for the configuration domain (persistence and defaults).
"""

import json
import os

from dmspicker.domain.config import (
    CURRENT_CONFIG_VERSION,
    get_config_path,
    get_default_app_state,
    get_default_config,
    load_app_state,
    load_config,
    save_config,
)


def test_default_config_keys() -> None:
    cfg = get_default_config()
    for key in (
        "system_type", "aggregate_attribute", "show_document_counts",
        "render_tree", "locale", "log_level", "listing_timeout",
    ):
        assert key in cfg
    assert cfg["aggregate_attribute"] == "document_count"


def test_missing_file_returns_defaults(isolated_home: str) -> None:
    assert load_app_state() == get_default_app_state()


def test_save_and_load_round_trip(isolated_home: str) -> None:
    """TC-01: Persisted settings survive a reload, merged over defaults."""
    cfg = get_default_config()
    cfg["system_type"] = "mfiles"
    cfg["render_tree"] = True
    save_config(cfg)

    assert get_config_path().startswith(isolated_home)
    loaded = load_config()
    assert loaded["system_type"] == "mfiles"
    assert loaded["render_tree"] is True
    assert loaded["locale"] == "en"


def test_selection_is_never_persisted(isolated_home: str) -> None:
    """TC-02: Session state stays out of config.json."""
    cfg = get_default_config()
    cfg["selected_ids"] = ["c1", "f2"]
    save_config(cfg)

    with open(get_config_path(), "r", encoding="utf-8") as f:
        stored = json.load(f)
    assert "selected_ids" not in stored["settings"]
    assert stored["version"] == CURRENT_CONFIG_VERSION


def test_corrupted_file_falls_back(isolated_home: str) -> None:
    path = get_config_path()
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write("{not json")

    assert load_config() == get_default_config()


def test_non_object_file_falls_back(isolated_home: str) -> None:
    path = get_config_path()
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(["settings"], f)

    assert load_app_state() == get_default_app_state()
