from __future__ import annotations

"""
Forest Builder.

Converts the nested location listing returned by a DMS connector (a JSON
array of node records with embedded children) into the id-indexed Forest
arena. Unknown fields are ignored, structural parent ids take precedence
over declared ones and repeated ids are dropped, so a slightly inconsistent
listing still yields a well-formed tree.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Set, Tuple

from dmspicker.core.forest.model import Forest
from dmspicker.domain.forest_models import KIND_FOLDER, LocationNode

logger = logging.getLogger(__name__)

# Accepted spellings for each field (connector payloads use camelCase)
_KIND_KEYS = ("type", "kind")
_COUNT_KEYS = ("documentCount", "document_count")
_PARENT_KEYS = ("parentId", "parent_id")

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_forest(records: Sequence[Mapping[str, Any]]) -> Forest:
    """
    Build an immutable Forest from nested node records.

    Args:
        records: Ordered root records. Each record may carry a 'children'
                 list of records with the same shape.

    Returns:
        Forest: The arena holding every accepted node.

    Raises:
        TypeError: If the listing or one of its records is not a mapping.
        ValueError: If a record has no usable id.
    """
    if records is None:
        return Forest.empty()
    if isinstance(records, Mapping) or isinstance(records, (str, bytes)):
        raise TypeError(
            f"Invalid forest listing: expected a sequence of records, received {type(records).__name__}."
        )

    nodes: Dict[str, LocationNode] = {}
    seen: Set[str] = set()
    root_ids = _build_level(records, parent=None, nodes=nodes, seen=seen)

    logger.debug(f"Forest built: {len(root_ids)} root(s), {len(nodes)} node(s).")
    return Forest(tuple(root_ids), nodes)


def forest_to_records(forest: Forest) -> List[Dict[str, Any]]:
    """
    Serialize a Forest back into nested camelCase records.

    Optional fields are omitted when undefined, mirroring the connector
    listing format accepted by build_forest.
    """
    return [_node_to_record(forest, node, set()) for node in forest.roots()]

# -----------------------------------------------------------------------------
# INTERNAL HELPERS (CONSTRUCTION)
# -----------------------------------------------------------------------------

def _build_level(
        records: Sequence[Mapping[str, Any]],
        parent: Optional[Tuple[str, str]],
        nodes: Dict[str, LocationNode],
        seen: Set[str],
) -> List[str]:
    """
    Register one sibling level and recurse into its children.

    Args:
        records: Sibling records at this level.
        parent: (id, path) of the structural parent, None for roots.
        nodes: Accumulator for the arena.
        seen: Ids already registered anywhere in the forest.

    Returns:
        List[str]: Ids accepted at this level, in input order.
    """
    accepted: List[str] = []

    for record in records:
        if not isinstance(record, Mapping):
            raise TypeError(f"Invalid node record: expected a mapping, received {type(record).__name__}.")

        node_id = _read_id(record)
        if node_id in seen:
            logger.warning(f"Duplicate node id '{node_id}' ignored together with its subtree.")
            continue
        seen.add(node_id)

        parent_id = parent[0] if parent else None
        declared_parent = _first_present(record, _PARENT_KEYS)
        if declared_parent is not None and str(declared_parent) != parent_id:
            logger.warning(
                f"Node '{node_id}' declares parent '{declared_parent}' but is nested under "
                f"'{parent_id}'. Using the structural parent."
            )

        name = _read_str(record.get("name")) or node_id
        path = _read_str(record.get("path"))
        if not path:
            path = f"{parent[1] if parent else ''}/{name}"

        raw_children = record.get("children") or []
        if not isinstance(raw_children, (list, tuple)):
            logger.warning(f"Node '{node_id}' has a non-list 'children' field. Treated as a leaf.")
            raw_children = []

        child_ids = _build_level(raw_children, parent=(node_id, path), nodes=nodes, seen=seen)

        nodes[node_id] = LocationNode(
            id=node_id,
            name=name,
            kind=_read_str(_first_present(record, _KIND_KEYS)) or KIND_FOLDER,
            path=path,
            document_count=_read_count(node_id, _first_present(record, _COUNT_KEYS)),
            children=tuple(child_ids),
            parent_id=parent_id,
        )
        accepted.append(node_id)

    return accepted


def _read_id(record: Mapping[str, Any]) -> str:
    raw = record.get("id")
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise ValueError(f"Invalid node record: missing 'id' (name={record.get('name')!r}).")
    return str(raw)


def _read_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _read_count(node_id: str, value: Any) -> Optional[int]:
    """Coerce a document count, discarding negative or non-numeric values."""
    if value is None:
        return None
    if isinstance(value, bool):
        logger.warning(f"Node '{node_id}': boolean documentCount ignored.")
        return None

    try:
        count = int(value)
    except (TypeError, ValueError, OverflowError):
        logger.warning(f"Node '{node_id}': non-numeric documentCount {value!r} ignored.")
        return None

    if isinstance(value, float) and value != count:
        logger.warning(f"Node '{node_id}': fractional documentCount {value!r} ignored.")
        return None
    if count < 0:
        logger.warning(f"Node '{node_id}': negative documentCount {count} ignored.")
        return None
    return count


def _first_present(record: Mapping[str, Any], keys: Tuple[str, ...]) -> Any:
    for key in keys:
        if record.get(key) is not None:
            return record[key]
    return None

# -----------------------------------------------------------------------------
# INTERNAL HELPERS (SERIALIZATION)
# -----------------------------------------------------------------------------

def _node_to_record(forest: Forest, node: LocationNode, visited: Set[str]) -> Dict[str, Any]:
    visited.add(node.id)
    record: Dict[str, Any] = {
        "id": node.id,
        "name": node.name,
        "type": node.kind,
        "path": node.path,
    }
    if node.document_count is not None:
        record["documentCount"] = node.document_count
    if node.parent_id is not None:
        record["parentId"] = node.parent_id

    children = [c for c in forest.children_of(node) if c.id not in visited]
    if children:
        record["children"] = [_node_to_record(forest, c, visited) for c in children]
    return record
