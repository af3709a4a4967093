from __future__ import annotations

"""
Unit tests for domain models and bundled samples.
"""

import dataclasses

import pytest

from dmspicker.core.selection.aggregator import total_selected_count
from dmspicker.domain.forest_models import KIND_FOLDER, LocationNode
from dmspicker.domain.samples import SYSTEM_LABELS, SYSTEM_TYPES, sample_forest, sample_records
from dmspicker.domain.selection_models import SelectionSummary, create_summary


def test_location_node_defaults_and_immutability() -> None:
    node = LocationNode(id="n", name="N")
    assert node.kind == KIND_FOLDER
    assert node.is_leaf
    assert node.is_root
    assert node.document_count is None

    with pytest.raises(dataclasses.FrozenInstanceError):
        node.name = "other"  # type: ignore[misc]


def test_create_summary() -> None:
    summary = create_summary(["a", "b"], 12)
    assert summary == SelectionSummary(selected_count=2, total_documents=12, selected_ids=["a", "b"])
    assert summary.has_selection
    assert not create_summary().has_selection


@pytest.mark.parametrize("system_type", SYSTEM_TYPES)
def test_sample_forests_are_well_formed(system_type: str) -> None:
    forest = sample_forest(system_type)
    assert len(forest.root_ids) == 2
    for node in forest.walk():
        for ancestor_id in forest.ancestor_ids(node):
            assert ancestor_id in forest


def test_docuware_sample_shape() -> None:
    forest = sample_forest("docuware")
    cab1 = forest.find_by_id("cab1")

    assert cab1.kind == "cabinet"
    assert cab1.name == "Invoices"
    assert forest.descendant_ids("cab1") == ["cab1-f1", "cab1-f1-1", "cab1-f1-2", "cab1-f2"]
    assert total_selected_count(forest, {"cab1", "cab2"}) == 1700


def test_sample_records_are_copies() -> None:
    first = sample_records("DocuWare ")
    first[0]["name"] = "Changed"
    assert sample_records("docuware")[0]["name"] == "Invoices"


def test_unknown_sample_rejected() -> None:
    with pytest.raises(ValueError):
        sample_records("sharepoint")


def test_system_labels_cover_every_system() -> None:
    assert set(SYSTEM_LABELS) == set(SYSTEM_TYPES)
    assert SYSTEM_LABELS["docuware"] == "Cabinets and Folders"
    assert SYSTEM_LABELS["mfiles"] == "Vaults and Folders"
