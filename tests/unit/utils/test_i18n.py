from __future__ import annotations

"""
Unit tests for Internationalization (i18n) consistency.

Ensures that all locale files (en.json, de.json) share the exact
same key structure and dot-notation resolution works as expected.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Set

import pytest

from dmspicker.utils.i18n import I18n

LOCALES_DIR = os.path.abspath(
    os.path.join(os.path.dirname(__file__), "..", "..", "..", "src", "dmspicker", "interface", "locales")
)


def _get_flat_keys(d: Dict[str, Any], prefix: str = "") -> Set[str]:
    """Helper to flatten nested dictionary keys into dot-notation sets."""
    keys = set()
    for k, v in d.items():
        new_key = f"{prefix}.{k}" if prefix else k
        if isinstance(v, dict):
            keys.update(_get_flat_keys(v, new_key))
        else:
            keys.add(new_key)
    return keys


def _load_keys(locale: str) -> Set[str]:
    with open(os.path.join(LOCALES_DIR, f"{locale}.json"), "r", encoding="utf-8") as f:
        return _get_flat_keys(json.load(f))


def test_locales_key_parity() -> None:
    """TC-01: Verify that EN and DE locales have identical keys."""
    en_keys = _load_keys("en")
    de_keys = _load_keys("de")

    assert not en_keys - de_keys, f"Keys present in EN but missing in DE: {en_keys - de_keys}"
    assert not de_keys - en_keys, f"Keys present in DE but missing in EN: {de_keys - en_keys}"


@pytest.mark.parametrize("locale", ["en", "de"])
def test_picker_keys_presence(locale: str) -> None:
    """TC-02: Keys used by the session and renderer exist in every locale."""
    required_keys = [
        "picker.empty.no_match",
        "picker.empty.no_folders",
        "picker.kinds.cabinet",
        "picker.kinds.vault",
        "picker.docs",
        "summary.selected",
        "summary.documents",
        "summary.none",
    ]
    flat_keys = _load_keys(locale)
    for key in required_keys:
        assert key in flat_keys, f"Key '{key}' is missing in {locale}.json"


def test_default_locales_discovered() -> None:
    service = I18n("en")
    assert {"en", "de"} <= set(service.available_locales())
    assert service.t("picker.empty.no_folders") == "No folders available"


def test_i18n_resolution_logic(tmp_path: Path) -> None:
    """TC-03: Verify dot-notation resolution and interpolation."""
    dummy_content = {
        "test": {
            "hello": "Hello {name}!",
            "simple": "Simple Text"
        }
    }
    (tmp_path / "xx.json").write_text(json.dumps(dummy_content), encoding="utf-8")

    service = I18n("xx", locales_path=str(tmp_path))

    assert service.locale == "xx"
    assert service.t("test.simple") == "Simple Text"
    assert service.t("test.hello", name="Picker") == "Hello Picker!"
    assert service.t("test.missing") == "test.missing"
    assert service.t("test.missing", default="{n} docs", n=3) == "3 docs"
    # Missing placeholders fall back to the raw template
    assert service.t("test.hello") == "Hello {name}!"


def test_missing_locale_falls_back_to_keys(tmp_path: Path) -> None:
    service = I18n("zz", locales_path=str(tmp_path))
    assert service.is_loaded is False
    assert service.t("summary.none") == "summary.none"
