from __future__ import annotations

"""
Unit tests for the Forest builder.

Verifies the translation of nested connector records into the arena and
its tolerance to malformed listings (duplicates, bad counts, missing ids).
"""

import json

import pytest

from dmspicker.core.forest.builder import build_forest, forest_to_records
from dmspicker.domain.forest_models import KIND_CABINET, KIND_FOLDER


def test_build_sets_structural_parents(cabinet_records) -> None:
    """TC-01: parent_id follows nesting and roots have no parent."""
    forest = build_forest(cabinet_records)

    assert forest.root_ids == ("c1",)
    assert forest.find_by_id("c1").parent_id is None
    assert forest.find_by_id("f2").parent_id == "c1"
    assert forest.find_by_id("f3").parent_id == "f2"
    assert forest.find_by_id("c1").children == ("f1", "f2")


def test_build_reads_kind_and_counts(cabinet_records) -> None:
    forest = build_forest(cabinet_records)
    cabinet = forest.find_by_id("c1")

    assert cabinet.kind == KIND_CABINET
    assert cabinet.document_count == 100
    assert forest.find_by_id("f1").kind == KIND_FOLDER


def test_build_none_gives_empty_forest() -> None:
    forest = build_forest(None)
    assert len(forest) == 0
    assert forest.root_ids == ()


def test_build_rejects_mapping_listing() -> None:
    """TC-02: A bare object is not a listing."""
    with pytest.raises(TypeError):
        build_forest({"id": "c1"})


def test_build_rejects_non_mapping_record() -> None:
    with pytest.raises(TypeError):
        build_forest(["c1"])


def test_build_rejects_missing_id() -> None:
    with pytest.raises(ValueError):
        build_forest([{"name": "No id"}])


def test_duplicate_ids_first_wins() -> None:
    """TC-03: A repeated id is dropped together with its subtree."""
    forest = build_forest([
        {"id": "a", "name": "First", "children": [{"id": "dup", "name": "Kept"}]},
        {"id": "dup", "name": "Dropped", "children": [{"id": "orphan", "name": "Orphan"}]},
    ])

    assert forest.root_ids == ("a",)
    assert forest.find_by_id("dup").name == "Kept"
    assert forest.find_by_id("orphan") is None


def test_declared_parent_mismatch_uses_nesting() -> None:
    forest = build_forest([
        {"id": "a", "name": "A", "children": [{"id": "b", "name": "B", "parentId": "zzz"}]},
    ])
    assert forest.find_by_id("b").parent_id == "a"


@pytest.mark.parametrize(
    "raw, expected",
    [
        (12, 12),
        ("7", 7),
        (3.0, 3),
        (2.5, None),
        (-4, None),
        (True, None),
        ("many", None),
        (None, None),
    ],
)
def test_document_count_coercion(raw, expected) -> None:
    forest = build_forest([{"id": "n", "name": "N", "documentCount": raw}])
    assert forest.find_by_id("n").document_count == expected


def test_infinite_document_count_ignored() -> None:
    """TC-05: JSON 'Infinity' parses to a float that int() cannot hold."""
    forest = build_forest(json.loads('[{"id": "a", "name": "A", "documentCount": Infinity}]'))
    assert forest.find_by_id("a").document_count is None


def test_snake_case_keys_accepted() -> None:
    forest = build_forest([{"id": "n", "name": "N", "kind": "vault", "document_count": 9}])
    node = forest.find_by_id("n")
    assert node.kind == "vault"
    assert node.document_count == 9


def test_missing_name_and_path_are_derived() -> None:
    forest = build_forest([{"id": "root", "name": "Root", "children": [{"id": "leaf"}]}])
    assert forest.find_by_id("root").path == "/Root"
    leaf = forest.find_by_id("leaf")
    assert leaf.name == "leaf"
    assert leaf.path == "/Root/leaf"


def test_non_list_children_become_leaf() -> None:
    forest = build_forest([{"id": "n", "name": "N", "children": "oops"}])
    assert forest.find_by_id("n").is_leaf


def test_forest_to_records_round_trip(cabinet_records) -> None:
    """TC-04: Serialization feeds back into an equal forest."""
    forest = build_forest(cabinet_records)
    records = forest_to_records(forest)

    assert records[0]["id"] == "c1"
    assert records[0]["documentCount"] == 100
    assert "parentId" not in records[0]
    assert records[0]["children"][1]["children"][0]["parentId"] == "f2"
    assert build_forest(records) == forest
