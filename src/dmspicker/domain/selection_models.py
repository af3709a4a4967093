from __future__ import annotations

"""
Selection Domain Data Models.

Defines the summary object handed to interface layers (CLI, confirm
actions) after every change of the selection.
"""

from dataclasses import dataclass, field
from typing import List, Optional

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SelectionSummary:
    """
    Aggregated view of the current selection.

    Attributes:
        selected_count: Number of selected location ids.
        total_documents: Sum of the aggregated attribute over selected nodes.
        selected_ids: Selected ids in selection order.
        attribute: Name of the aggregated node attribute.
    """
    selected_count: int
    total_documents: int
    selected_ids: List[str] = field(default_factory=list)
    attribute: str = "document_count"

    @property
    def has_selection(self) -> bool:
        return self.selected_count > 0

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_summary(
        selected_ids: Optional[List[str]] = None,
        total_documents: int = 0,
        attribute: str = "document_count",
) -> SelectionSummary:
    """
    Create a selection summary instance.

    Args:
        selected_ids: Ordered selected ids.
        total_documents: Aggregated total over the selection.
        attribute: Aggregated attribute name.

    Returns:
        SelectionSummary: An immutable summary object.
    """
    ids = list(selected_ids or [])
    return SelectionSummary(
        selected_count=len(ids),
        total_documents=int(total_documents),
        selected_ids=ids,
        attribute=attribute,
    )
