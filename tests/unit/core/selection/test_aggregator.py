from __future__ import annotations

"""
Unit tests for the Aggregator.

Totals come from the full forest: every selected node counts once,
independently of its ancestors and of any active search.
"""

import pytest

from dmspicker.core.forest.builder import build_forest
from dmspicker.core.forest.model import Forest
from dmspicker.core.search.filter import filter_forest
from dmspicker.core.selection.aggregator import (
    DEFAULT_ATTRIBUTE,
    numeric_attributes,
    selected_count,
    summarize,
    total_selected_count,
)
from dmspicker.core.selection.store import SelectionStore


def test_empty_selection_totals_zero(forest: Forest) -> None:
    assert total_selected_count(forest, set()) == 0


def test_parent_and_child_counted_independently(forest: Forest) -> None:
    """TC-01: Counts are not rolled up or de-duplicated."""
    assert total_selected_count(forest, {"f2", "f3"}) == 80
    assert total_selected_count(forest, {"c1", "f1"}) == 140


def test_missing_counts_contribute_zero() -> None:
    forest = build_forest([
        {"id": "a", "name": "A", "documentCount": 5, "children": [{"id": "b", "name": "B"}]},
    ])
    assert total_selected_count(forest, {"a", "b"}) == 5


def test_stale_ids_are_ignored(forest: Forest) -> None:
    assert total_selected_count(forest, {"f1", "gone"}) == 40


def test_hidden_selection_still_counts() -> None:
    """TC-02: A selected node outside the search results stays in the total."""
    forest = build_forest([
        {"id": "root", "name": "Root", "children": [
            {"id": "A", "name": "Alpha", "documentCount": 5},
            {"id": "C", "name": "Other", "documentCount": 12},
        ]},
    ])
    visible = filter_forest(forest, "alpha")

    assert visible.find_by_id("C") is None
    assert total_selected_count(forest, {"C"}) == 12


def test_total_under_filter_includes_hidden_and_visible() -> None:
    """TC-03: Visible A (5) and hidden C (7) both count while a query is active."""
    forest = build_forest([
        {"id": "root", "name": "Root", "children": [
            {"id": "A", "name": "Alpha", "documentCount": 5},
            {"id": "C", "name": "Other", "documentCount": 7},
        ]},
    ])
    visible = filter_forest(forest, "alpha")

    assert visible.find_by_id("A") is not None
    assert visible.find_by_id("C") is None
    assert total_selected_count(forest, {"A", "C"}) == 12


def test_unknown_attribute_rejected(forest: Forest) -> None:
    with pytest.raises(ValueError):
        total_selected_count(forest, {"f1"}, attribute="name")


def test_numeric_attributes_contains_default() -> None:
    assert DEFAULT_ATTRIBUTE in numeric_attributes()
    assert "path" not in numeric_attributes()


def test_summarize_store(forest: Forest) -> None:
    store = SelectionStore(forest)
    store.toggle("f2")
    store.toggle("f1")

    summary = summarize(forest, store)

    assert summary.selected_count == 2
    assert summary.total_documents == 100
    assert summary.selected_ids == ["f2", "f1"]
    assert summary.attribute == "document_count"
    assert selected_count(store) == 2
