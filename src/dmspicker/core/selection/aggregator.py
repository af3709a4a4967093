from __future__ import annotations

"""
Selection Aggregator.

Sums numeric node attributes over the selected locations. Aggregation
always runs over the full, unfiltered forest: a search filter hiding a
selected node does not change the totals.
"""

import logging
from dataclasses import fields
from typing import FrozenSet

from dmspicker.core.forest.model import Forest
from dmspicker.core.selection.store import Selection, SelectionStore, as_id_set
from dmspicker.domain.forest_models import LocationNode
from dmspicker.domain.selection_models import SelectionSummary, create_summary

logger = logging.getLogger(__name__)

DEFAULT_ATTRIBUTE = "document_count"

# Attributes that cannot be summed even though they exist on the node record
_NON_NUMERIC_FIELDS: FrozenSet[str] = frozenset({"id", "name", "kind", "path", "children", "parent_id"})

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def numeric_attributes() -> FrozenSet[str]:
    """Names of the LocationNode fields that can be aggregated."""
    return frozenset(f.name for f in fields(LocationNode)) - _NON_NUMERIC_FIELDS


def total_selected_count(
        forest: Forest,
        selection: Selection,
        attribute: str = DEFAULT_ATTRIBUTE,
) -> int:
    """
    Sum an attribute over every selected node of the forest.

    Visits every node depth-first regardless of the selection state of its
    ancestors. Nodes without a value for the attribute contribute zero.

    Args:
        forest: Full forest snapshot.
        selection: Store or plain id set.
        attribute: Numeric LocationNode field to aggregate.

    Returns:
        int: The aggregated total.

    Raises:
        ValueError: If the attribute is not an aggregatable node field.
    """
    if attribute not in numeric_attributes():
        raise ValueError(f"Unknown aggregate attribute '{attribute}'.")

    selected_ids = as_id_set(selection)
    total = 0
    for node in forest.walk():
        if node.id not in selected_ids:
            continue
        value = getattr(node, attribute, None)
        if value:
            total += value
    return total


def selected_count(selection: Selection) -> int:
    """Number of selected location ids (not documents)."""
    return len(as_id_set(selection))


def summarize(
        forest: Forest,
        selection: SelectionStore,
        attribute: str = DEFAULT_ATTRIBUTE,
) -> SelectionSummary:
    """Build the SelectionSummary for a store."""
    total = total_selected_count(forest, selection, attribute)
    logger.debug(f"Selection summary: {len(selection)} location(s), {attribute} total {total}.")
    return create_summary(selection.ordered_ids(), total, attribute)
