from __future__ import annotations

"""
Indeterminate State Calculator.

Pure functions deciding whether a node's subtree is partially selected.
The check covers every descendant, not only the direct children, and
ignores the node's own selection state.
"""

from dataclasses import dataclass
from typing import List

from dmspicker.core.forest.model import Forest, NodeRef
from dmspicker.core.selection.store import Selection, as_id_set


@dataclass(frozen=True)
class NodeState:
    """
    Checkbox state of one node as composed by a caller.

    Attributes:
        node_id: The node the state belongs to.
        selected: Whether the node id is in the selection.
        indeterminate: Whether the subtree is partially selected.
    """
    node_id: str
    selected: bool
    indeterminate: bool


def is_indeterminate(forest: Forest, selection: Selection, ref: NodeRef) -> bool:
    """
    Report whether some, but not all, descendants of a node are selected.

    Leaves and unknown nodes are never indeterminate.
    """
    node = forest.resolve(ref)
    if node is None or not node.children:
        return False

    descendants = forest.descendant_ids(node)
    if not descendants:
        return False

    selected_ids = as_id_set(selection)
    selected_count = sum(1 for node_id in descendants if node_id in selected_ids)
    return 0 < selected_count < len(descendants)


def node_state(forest: Forest, selection: Selection, ref: NodeRef) -> NodeState:
    node_id = ref if isinstance(ref, str) else ref.id
    selected_ids = as_id_set(selection)
    return NodeState(
        node_id=node_id,
        selected=node_id in selected_ids and node_id in forest,
        indeterminate=is_indeterminate(forest, selected_ids, node_id),
    )


def indeterminate_ids(forest: Forest, selection: Selection) -> List[str]:
    """Every indeterminate node of the forest, in depth-first order."""
    selected_ids = as_id_set(selection)
    return [node.id for node in forest.walk() if is_indeterminate(forest, selected_ids, node)]
