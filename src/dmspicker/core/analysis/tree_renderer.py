from __future__ import annotations

"""
Location Tree Renderer.

Converts a Forest (usually the search-filtered view) into ASCII lines with
tri-state checkbox marks. Selection marks are computed against the full
forest so that hidden descendants still count toward partial state.
"""

from typing import List, Optional, Set

from dmspicker.core.forest.model import Forest
from dmspicker.core.selection.indeterminate import is_indeterminate
from dmspicker.core.selection.store import Selection, as_id_set
from dmspicker.domain.forest_models import KIND_FOLDER, LocationNode
from dmspicker.utils.i18n import i18n

MARK_SELECTED = "[x]"
MARK_PARTIAL = "[-]"
MARK_EMPTY = "[ ]"

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_forest(
        forest: Forest,
        lines: List[str],
        selection: Optional[Selection] = None,
        prefix: str = "",
        show_counts: bool = True,
        full_forest: Optional[Forest] = None,
) -> None:
    """
    Append the visual lines of a forest to an accumulator.

    Uses the standard connectors (├──, └──) and keeps the forest's own
    sibling order.

    Args:
        forest: Forest (or filtered view) to draw.
        lines: Accumulator list for output strings.
        selection: Store or id set used for the checkbox marks.
        prefix: Indentation prefix for the first level.
        show_counts: Append 'N docs' when a node reports a document count.
        full_forest: Unfiltered forest for indeterminate marks. Defaults
                     to the drawn forest.
    """
    selected_ids = as_id_set(selection) if selection is not None else frozenset()
    reference = full_forest if full_forest is not None else forest
    _render_level(
        forest, forest.roots(), lines, prefix, selected_ids, reference, show_counts, set()
    )


def format_entry(
        node: LocationNode,
        selected: bool = False,
        indeterminate: bool = False,
        show_counts: bool = True,
) -> str:
    """Format one node as '[x] Name (Cabinet)  120 docs'."""
    # Partial state is drawn over the checked state, like a native tri-state checkbox
    if indeterminate:
        mark = MARK_PARTIAL
    elif selected:
        mark = MARK_SELECTED
    else:
        mark = MARK_EMPTY

    text = f"{mark} {node.name}"
    if node.kind != KIND_FOLDER:
        label = i18n.t(f"picker.kinds.{node.kind}", default=node.kind.capitalize())
        text += f" ({label})"
    if show_counts and node.document_count is not None:
        text += "  " + i18n.t("picker.docs", default="{count} docs", count=f"{node.document_count:,}")
    return text

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _render_level(
        forest: Forest,
        level: List[LocationNode],
        lines: List[str],
        prefix: str,
        selected_ids,
        reference: Forest,
        show_counts: bool,
        visited: Set[str],
) -> None:
    level = [n for n in level if n.id not in visited]
    total = len(level)

    for i, node in enumerate(level):
        visited.add(node.id)
        is_last = (i == total - 1)
        connector = "└── " if is_last else "├── "

        entry = format_entry(
            node,
            selected=node.id in selected_ids,
            indeterminate=is_indeterminate(reference, selected_ids, node.id),
            show_counts=show_counts,
        )
        lines.append(f"{prefix}{connector}{entry}")

        children = forest.children_of(node)
        if children:
            new_prefix = prefix + ("    " if is_last else "│   ")
            _render_level(
                forest, children, lines, new_prefix, selected_ids, reference, show_counts, visited
            )
