from __future__ import annotations

"""
Location Forest Model.

Read-only, id-indexed arena over a snapshot of connector locations.
Exposes the structural queries used by selection, search and aggregation.
Every traversal keeps a visited set, so malformed input (cycles, repeated
child ids) terminates instead of looping.
"""

import logging
from types import MappingProxyType
from typing import Iterator, List, Mapping, Optional, Set, Tuple, Union

from dmspicker.domain.forest_models import LocationNode

logger = logging.getLogger(__name__)

NodeRef = Union[str, LocationNode]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

class Forest:
    """
    Immutable forest of location nodes.

    Args:
        root_ids: Ordered ids of the top-level nodes.
        nodes: Flat mapping of every node id to its record.
    """

    __slots__ = ("_root_ids", "_nodes")

    def __init__(self, root_ids: Tuple[str, ...], nodes: Mapping[str, LocationNode]):
        self._root_ids: Tuple[str, ...] = tuple(root_ids)
        self._nodes: Mapping[str, LocationNode] = MappingProxyType(dict(nodes))

    @classmethod
    def empty(cls) -> "Forest":
        return cls((), {})

    # --- Raw access ---

    @property
    def root_ids(self) -> Tuple[str, ...]:
        return self._root_ids

    @property
    def nodes(self) -> Mapping[str, LocationNode]:
        return self._nodes

    def roots(self) -> List[LocationNode]:
        return [self._nodes[rid] for rid in self._root_ids if rid in self._nodes]

    # --- Lookups ---

    def find_by_id(self, node_id: Optional[str]) -> Optional[LocationNode]:
        """
        Resolve a node by id.

        Unknown ids (e.g. stale references from a previous snapshot) are an
        expected outcome and yield None rather than an exception.
        """
        if node_id is None:
            return None
        return self._nodes.get(node_id)

    def resolve(self, ref: NodeRef) -> Optional[LocationNode]:
        """Accept either a node or an id and return the record owned by this forest."""
        node_id = ref.id if isinstance(ref, LocationNode) else ref
        return self.find_by_id(node_id)

    def children_of(self, ref: NodeRef) -> List[LocationNode]:
        node = self.resolve(ref)
        if node is None:
            return []
        return [self._nodes[cid] for cid in node.children if cid in self._nodes]

    # --- Traversals ---

    def descendant_ids(self, ref: NodeRef) -> List[str]:
        """
        Collect every id strictly below a node.

        Depth-first preorder: each child is listed before its own subtree,
        siblings keep their original order. The node itself is excluded.

        Args:
            ref: Node record or node id.

        Returns:
            List[str]: Descendant ids, empty for leaves and unknown nodes.
        """
        node = self.resolve(ref)
        if node is None:
            return []

        out: List[str] = []
        visited: Set[str] = {node.id}
        stack: List[str] = list(reversed(node.children))

        while stack:
            current_id = stack.pop()
            if current_id in visited:
                continue
            visited.add(current_id)
            out.append(current_id)

            current = self._nodes.get(current_id)
            if current is not None:
                stack.extend(reversed(current.children))

        return out

    def ancestor_ids(self, ref: NodeRef) -> List[str]:
        """
        Walk parent references upward, nearest ancestor first.

        The walk ends at a root, at a parent id that does not resolve, or
        when an id repeats.
        """
        node = self.resolve(ref)
        if node is None:
            return []

        out: List[str] = []
        seen: Set[str] = {node.id}
        parent_id = node.parent_id

        while parent_id is not None and parent_id not in seen:
            seen.add(parent_id)
            out.append(parent_id)
            parent = self._nodes.get(parent_id)
            if parent is None:
                logger.debug(f"Ancestor walk stopped at dangling parent id '{parent_id}'.")
                break
            parent_id = parent.parent_id

        return out

    def walk(self) -> Iterator[LocationNode]:
        """Yield every reachable node in depth-first preorder, each id once."""
        visited: Set[str] = set()
        stack: List[str] = list(reversed(self._root_ids))

        while stack:
            current_id = stack.pop()
            if current_id in visited:
                continue
            visited.add(current_id)

            node = self._nodes.get(current_id)
            if node is None:
                continue
            yield node
            stack.extend(reversed(node.children))

    # --- Container protocol ---

    def __iter__(self) -> Iterator[LocationNode]:
        return self.walk()

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, ref: object) -> bool:
        if isinstance(ref, LocationNode):
            return ref.id in self._nodes
        return ref in self._nodes

    def __bool__(self) -> bool:
        return bool(self._root_ids)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Forest):
            return NotImplemented
        return self._root_ids == other._root_ids and dict(self._nodes) == dict(other._nodes)

    def __hash__(self) -> int:
        return hash((self._root_ids, frozenset(self._nodes.items())))

    def __repr__(self) -> str:
        return f"Forest(roots={list(self._root_ids)!r}, size={len(self._nodes)})"
