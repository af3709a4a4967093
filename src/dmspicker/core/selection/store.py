from __future__ import annotations

"""
Selection Store.

Holds the mutable set of selected location ids for one picker session.
The toggle rule is deliberately asymmetric: deselecting a node clears its
whole subtree, selecting a node marks only that node.
"""

import logging
from typing import AbstractSet, Dict, FrozenSet, Iterable, Iterator, List, Optional, Union

from dmspicker.core.forest.model import Forest, NodeRef
from dmspicker.domain.forest_models import LocationNode

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

class SelectionStore:
    """
    Mutable selection bound to a single Forest snapshot.

    Insertion order is preserved so the confirmed selection can be handed
    back in the order the user picked it. Not thread-safe: the host must
    serialize calls within a session.

    Args:
        forest: The snapshot the selected ids belong to.
        seed: Optional ids selected from the start. Ids missing from the
              forest are dropped.
    """

    def __init__(self, forest: Forest, seed: Optional[Iterable[str]] = None):
        self._forest = forest
        # dict as an insertion-ordered set
        self._selected: Dict[str, None] = {}
        if seed:
            self._seed(seed)

    @property
    def forest(self) -> Forest:
        return self._forest

    # --- Queries ---

    def is_selected(self, ref: NodeRef) -> bool:
        return _ref_id(ref) in self._selected

    def selected_ids(self) -> FrozenSet[str]:
        """Read-only snapshot of the current selection."""
        return frozenset(self._selected)

    def ordered_ids(self) -> List[str]:
        """Selected ids in the order they were selected."""
        return list(self._selected)

    # --- Mutations ---

    def toggle(self, ref: NodeRef) -> bool:
        """
        Flip the selection state of a node.

        If the node is selected, the node and every descendant are removed
        from the selection, whether or not the descendants were picked
        individually. If it is not selected, only the node is added; its
        children stay untouched. Ids that are not part of the forest leave
        the selection unchanged.

        Args:
            ref: Node record or node id.

        Returns:
            bool: The node's selection state after the call.
        """
        node = self._forest.resolve(ref)
        if node is None:
            logger.debug(f"Toggle ignored for unknown node id '{_ref_id(ref)}'.")
            return False

        if node.id in self._selected:
            cleared = [node.id] + self._forest.descendant_ids(node)
            for node_id in cleared:
                self._selected.pop(node_id, None)
            logger.debug(f"Deselected '{node.id}' and its subtree ({len(cleared)} id(s) cleared).")
            return False

        self._selected[node.id] = None
        logger.debug(f"Selected '{node.id}'.")
        return True

    def clear(self) -> None:
        self._selected.clear()

    # --- Container protocol ---

    def __contains__(self, ref: object) -> bool:
        if isinstance(ref, (str, LocationNode)):
            return self.is_selected(ref)
        return False

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._selected))

    def __len__(self) -> int:
        return len(self._selected)

    def __repr__(self) -> str:
        return f"SelectionStore(selected={list(self._selected)!r})"

    # --- Internals ---

    def _seed(self, seed: Iterable[str]) -> None:
        dropped: List[str] = []
        for node_id in seed:
            if node_id in self._forest:
                self._selected[node_id] = None
            else:
                dropped.append(str(node_id))
        if dropped:
            logger.warning(f"Dropped {len(dropped)} seeded id(s) not present in the forest: {dropped}")


def _ref_id(ref: NodeRef) -> str:
    return ref.id if isinstance(ref, LocationNode) else ref


# Either a live store or a plain snapshot of ids
Selection = Union[SelectionStore, AbstractSet[str]]


def as_id_set(selection: Selection) -> AbstractSet[str]:
    """Normalize a store or an id set into a read-only id set."""
    if isinstance(selection, SelectionStore):
        return selection.selected_ids()
    return selection
