from __future__ import annotations

"""
Ancestor-Preserving Search Filter.

Reduces a Forest to the nodes whose name or path contains a query
(case-insensitive), plus the parent chain of each match. Children of a
match are not revealed unless they match on their own or lead to another
match.
"""

import logging
from dataclasses import replace
from typing import Dict, List, Optional, Set, Tuple

from dmspicker.core.forest.model import Forest
from dmspicker.domain.forest_models import LocationNode

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def matches_query(node: LocationNode, query: str) -> bool:
    """Return True if the lower-cased query is a substring of the node's name or path."""
    q = query.lower()
    return q in node.name.lower() or q in node.path.lower()


def collect_matches(forest: Forest, query: str) -> Set[str]:
    """
    Gather the ids of every matching node and of all their ancestors.

    Args:
        forest: Full, unfiltered forest.
        query: Raw query string (matched without trimming).

    Returns:
        Set[str]: Ids that must stay visible.
    """
    keep: Set[str] = set()
    for node in forest.walk():
        if matches_query(node, query):
            keep.add(node.id)
            keep.update(forest.ancestor_ids(node))
    return keep


def filter_forest(forest: Forest, query: Optional[str]) -> Forest:
    """
    Produce the visible forest for a search query.

    An empty or whitespace-only query returns the forest unchanged.
    Otherwise nodes are kept top-down when their id is in the match set;
    kept siblings retain their original order.

    Args:
        forest: Full forest snapshot.
        query: Text typed by the user.

    Returns:
        Forest: A reduced forest (or the input itself for blank queries).
    """
    if not query or not query.strip():
        return forest

    keep = collect_matches(forest, query)

    nodes: Dict[str, LocationNode] = {}
    visited: Set[str] = set()
    root_ids = _prune_level(forest, forest.root_ids, keep, nodes, visited)

    logger.debug(f"Search '{query}': {len(nodes)} of {len(forest)} node(s) visible.")
    return Forest(tuple(root_ids), nodes)

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _prune_level(
        forest: Forest,
        ids: Tuple[str, ...],
        keep: Set[str],
        nodes: Dict[str, LocationNode],
        visited: Set[str],
) -> List[str]:
    """Keep the ids of one sibling level that survive the filter, recursing into each."""
    kept: List[str] = []
    for node_id in ids:
        if node_id not in keep or node_id in visited:
            continue
        node = forest.find_by_id(node_id)
        if node is None:
            continue
        visited.add(node_id)

        child_ids = _prune_level(forest, node.children, keep, nodes, visited)
        nodes[node_id] = replace(node, children=tuple(child_ids))
        kept.append(node_id)
    return kept
