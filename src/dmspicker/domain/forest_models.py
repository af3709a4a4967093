from __future__ import annotations

"""
Location Forest Data Models.

Provides the node record used to represent the cabinet/vault/folder
hierarchy exposed by a document-management connector. Nodes reference
their children and parent by id only; ownership lives in the forest arena.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

# -----------------------------------------------------------------------------
# NODE KINDS
# -----------------------------------------------------------------------------

KIND_CABINET = "cabinet"
KIND_VAULT = "vault"
KIND_FOLDER = "folder"

NODE_KINDS: Tuple[str, ...] = (KIND_CABINET, KIND_VAULT, KIND_FOLDER)

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class LocationNode:
    """
    Represents one selectable location (cabinet, vault or folder).

    Attributes:
        id: Identifier unique across the whole forest.
        name: Display label, matched by search.
        kind: Informational location type (cabinet/vault/folder).
        path: Slash-delimited position of the node, matched by search.
        document_count: Node-local document total, if the connector reports one.
        children: Ordered ids of the direct children.
        parent_id: Id of the direct parent, None for roots.
    """
    id: str
    name: str
    kind: str = KIND_FOLDER
    path: str = ""
    document_count: Optional[int] = None
    children: Tuple[str, ...] = ()
    parent_id: Optional[str] = None

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

