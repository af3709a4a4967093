from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared forest listings and selection fixtures used across unit tests.
"""

import os
import sys
from typing import Any, Dict, List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from dmspicker.core.forest.builder import build_forest  # noqa: E402
from dmspicker.core.forest.model import Forest  # noqa: E402
from dmspicker.core.selection.store import SelectionStore  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def cabinet_records() -> List[Dict[str, Any]]:
    """
    Return a small cabinet listing.

    Structure:
    c1 (100)
      f1 (40)
      f2 (60)
        f3 (20)
    """
    return [
        {
            "id": "c1",
            "name": "Cabinet One",
            "type": "cabinet",
            "path": "/Cabinet One",
            "documentCount": 100,
            "children": [
                {"id": "f1", "name": "Inbox", "path": "/Cabinet One/Inbox", "documentCount": 40},
                {
                    "id": "f2",
                    "name": "Archive",
                    "path": "/Cabinet One/Archive",
                    "documentCount": 60,
                    "children": [
                        {"id": "f3", "name": "2023", "path": "/Cabinet One/Archive/2023", "documentCount": 20},
                    ],
                },
            ],
        }
    ]


@pytest.fixture
def forest(cabinet_records: List[Dict[str, Any]]) -> Forest:
    return build_forest(cabinet_records)


@pytest.fixture
def store(forest: Forest) -> SelectionStore:
    return SelectionStore(forest)


@pytest.fixture
def deep_forest() -> Forest:
    """
    Four-level chain with a side branch.

    root
      A
        B
          C
      D
    """
    return build_forest([
        {
            "id": "root",
            "name": "Root",
            "type": "cabinet",
            "children": [
                {
                    "id": "A",
                    "name": "Alpha",
                    "children": [
                        {"id": "B", "name": "Beta", "children": [{"id": "C", "name": "Gamma"}]},
                    ],
                },
                {"id": "D", "name": "Delta"},
            ],
        }
    ])


@pytest.fixture
def isolated_home(tmp_path, monkeypatch) -> str:
    """Point the user data directory at a temporary home."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.setenv("LOCALAPPDATA", str(home / "AppData"))
    return str(home)
