from __future__ import annotations

"""
Picker Session Service.

Bundles one forest snapshot, one selection store and the current search
query for a single configuration session. Every derived view (visible
forest, partial state, totals) is recomputed from these three inputs on
demand; nothing is cached between calls.
"""

import logging
from typing import Iterable, List, Optional

from dmspicker.core.forest.model import Forest, NodeRef
from dmspicker.core.search.filter import filter_forest
from dmspicker.core.selection.aggregator import DEFAULT_ATTRIBUTE, numeric_attributes, summarize
from dmspicker.core.selection.indeterminate import NodeState, indeterminate_ids, is_indeterminate, node_state
from dmspicker.core.selection.store import SelectionStore
from dmspicker.domain.selection_models import SelectionSummary
from dmspicker.utils.i18n import i18n

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# SESSION
# -----------------------------------------------------------------------------

class PickerSession:
    """
    State of one location picker interaction.

    Args:
        forest: Snapshot supplied by the connector configuration.
        seed: Ids selected when the session opens.
        attribute: Node attribute aggregated by summary().

    Raises:
        ValueError: If the attribute cannot be aggregated.
    """

    def __init__(
            self,
            forest: Forest,
            seed: Optional[Iterable[str]] = None,
            attribute: str = DEFAULT_ATTRIBUTE,
    ):
        if attribute not in numeric_attributes():
            raise ValueError(f"Unknown aggregate attribute '{attribute}'.")
        self._forest = forest
        self._store = SelectionStore(forest, seed)
        self._attribute = attribute
        self._query = ""

    @property
    def forest(self) -> Forest:
        return self._forest

    @property
    def store(self) -> SelectionStore:
        return self._store

    @property
    def query(self) -> str:
        return self._query

    # --- Selection ---

    def toggle(self, ref: NodeRef) -> bool:
        return self._store.toggle(ref)

    def clear(self) -> None:
        self._store.clear()

    def is_selected(self, ref: NodeRef) -> bool:
        return self._store.is_selected(ref)

    def is_indeterminate(self, ref: NodeRef) -> bool:
        return is_indeterminate(self._forest, self._store, ref)

    def node_state(self, ref: NodeRef) -> NodeState:
        return node_state(self._forest, self._store, ref)

    def indeterminate_ids(self) -> List[str]:
        return indeterminate_ids(self._forest, self._store)

    # --- Search ---

    def set_query(self, query: Optional[str]) -> None:
        self._query = query or ""

    def visible_forest(self) -> Forest:
        """The forest filtered by the current query."""
        return filter_forest(self._forest, self._query)

    def empty_message(self) -> str:
        """Placeholder text for an empty tree, or '' when something is visible."""
        if self.visible_forest():
            return ""
        if self._query.strip():
            return i18n.t("picker.empty.no_match", default="No folders match your search")
        return i18n.t("picker.empty.no_folders", default="No folders available")

    # --- Totals and hand-off ---

    def summary(self) -> SelectionSummary:
        return summarize(self._forest, self._store, self._attribute)

    def confirm(self) -> List[str]:
        """
        Hand the selection back to the caller.

        Returns:
            List[str]: Selected ids in selection order.

        Raises:
            ValueError: If nothing is selected.
        """
        ids = self._store.ordered_ids()
        if not ids:
            raise ValueError("Cannot confirm an empty selection.")
        logger.info(f"Selection confirmed: {len(ids)} location(s).")
        return ids

# -----------------------------------------------------------------------------
# TEXT RENDERING
# -----------------------------------------------------------------------------

def describe_summary(summary: SelectionSummary) -> str:
    """
    Render the one-line selection summary.

    Returns:
        str: e.g. '2 location(s) selected • Approximately 1,250 documents',
             or '' when nothing is selected.
    """
    if not summary.has_selection:
        return ""

    text = i18n.t("summary.selected", default="{count} location(s) selected", count=summary.selected_count)
    if summary.total_documents > 0:
        text += i18n.t(
            "summary.documents",
            default=" • Approximately {total} documents",
            total=f"{summary.total_documents:,}",
        )
    return text
