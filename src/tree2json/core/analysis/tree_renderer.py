from __future__ import annotations

"""
Tree Renderer.

Converts a parsed Tree back into canonical Unicode tree art. Feeding the
rendered lines to the parser reproduces the same nested structure.
"""

from typing import List, Optional

from tree2json.domain.constants import (
    BLANK_PREFIX,
    BRANCH_CONNECTOR,
    LAST_CONNECTOR,
    PIPE_PREFIX,
)
from tree2json.domain.tree_models import Tree

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_tree(tree: Tree, sort_entries: bool = False) -> List[str]:
    """
    Render a tree into a list of decorated lines.

    Root entries are written bare at column zero; their descendants use the
    standard connectors (├──, └──) and prefixes (│, blank).

    Args:
        tree: The parsed tree to render.
        sort_entries: Emit siblings alphabetically instead of in discovery order.

    Returns:
        List[str]: One string per entry, without trailing newlines.
    """
    lines: List[str] = []
    for root_name in _ordered(tree, sort_entries):
        lines.append(root_name)
        render_tree_structure(tree[root_name], lines, sort_entries=sort_entries)
    return lines


def render_tree_structure(
        tree_structure: Tree,
        lines: List[str],
        prefix: str = "",
        sort_entries: bool = False,
) -> None:
    """
    Recursively append the children of a node to the line accumulator.

    Args:
        tree_structure: Child mapping of the node being rendered.
        lines: Accumulator list for output strings.
        prefix: Indentation prefix for the current recursion level.
        sort_entries: Emit siblings alphabetically.
    """
    entries = _ordered(tree_structure, sort_entries)
    total = len(entries)

    for i, entry in enumerate(entries):
        is_last = (i == total - 1)
        connector = LAST_CONNECTOR if is_last else BRANCH_CONNECTOR
        lines.append(f"{prefix}{connector}{entry}")

        children = tree_structure[entry]
        if children:
            new_prefix = prefix + (BLANK_PREFIX if is_last else PIPE_PREFIX)
            render_tree_structure(children, lines, prefix=new_prefix, sort_entries=sort_entries)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _ordered(tree: Tree, sort_entries: Optional[bool]) -> List[str]:
    return sorted(tree.keys()) if sort_entries else list(tree.keys())
