from __future__ import annotations

"""
Tree Text Parser.

Rebuilds the parent/child hierarchy of a decorated directory listing in a
single linear pass. Nesting is recovered purely from the indentation level
of each line, tracked with a stack of currently open ancestor names.
"""

import logging
import re
from typing import Iterator, List, Optional

from tree2json.domain.constants import (
    CONNECTOR_GLYPHS,
    INDENT_WIDTH,
    NBSP,
    ON_DUPLICATE_ERROR,
    ON_DUPLICATE_OVERWRITE,
    ON_DUPLICATE_SUFFIX,
)
from tree2json.domain.errors import DuplicateEntryError
from tree2json.domain.tree_models import ParseOptions, Tree, TreeLine

logger = logging.getLogger(__name__)

# One connector glyph, or one fixed-width blank column (spaces / no-break spaces)
_INDENT_UNIT_RX = re.compile(f"[{CONNECTOR_GLYPHS}]|[ {NBSP}]{{{INDENT_WIDTH}}}")
_DECORATION_RX = re.compile(r"^[│├└─\s]*")

# -----------------------------------------------------------------------------
# LINE ANALYSIS
# -----------------------------------------------------------------------------

def get_indent(line: str) -> int:
    """
    Calculate the nesting level of a line from a tree output.

    Every level of the canonical format contributes exactly one connector
    or blank column of width 4, so counting those units recovers the depth.

    Args:
        line: A single line of decorated tree text.

    Returns:
        int: The directory level of the entry on this line.
    """
    return len(_INDENT_UNIT_RX.findall(line))


def get_name(line: str) -> str:
    """
    Strip all tree decoration from a line to get the bare entry name.

    Args:
        line: A single line of decorated tree text.

    Returns:
        str: The file/directory name, or an empty string for structural lines.
    """
    return _DECORATION_RX.sub("", line, count=1).strip()


def parse_lines(text: str) -> Iterator[TreeLine]:
    """
    Yield every meaningful line of the input with its derived indent and name.

    Leading/trailing blank content is trimmed first. Lines that reduce to
    nothing after decoration stripping are skipped.
    """
    stripped = text.strip()
    if not stripped:
        return

    for raw in stripped.split("\n"):
        name = get_name(raw)
        if not name:
            continue
        yield TreeLine(raw=raw, indent=get_indent(raw), name=name)

# -----------------------------------------------------------------------------
# TREE MUTATION
# -----------------------------------------------------------------------------

def store(
        tree: Tree,
        parents: List[str],
        name: str,
        on_duplicate: str = ON_DUPLICATE_OVERWRITE,
) -> str:
    """
    Store a new child in the tree under the given stack of parents.

    Walks from the root through each ancestor, creating missing intermediate
    nodes, then binds the name to an empty child mapping.

    Args:
        tree: The tree being built.
        parents: Ancestor names, outermost first.
        name: The new file/directory entry.
        on_duplicate: Collision policy when the name already exists there.

    Returns:
        str: The key actually used, which differs from name only for 'suffix'.

    Raises:
        DuplicateEntryError: On a collision under the 'error' policy.
    """
    node = tree
    for parent in parents:
        node = node.setdefault(parent, {})

    key = name
    if key in node:
        if on_duplicate == ON_DUPLICATE_ERROR:
            raise DuplicateEntryError(name, parents)
        if on_duplicate == ON_DUPLICATE_SUFFIX:
            key = _next_free_key(node, name)
        else:
            logger.debug(f"Overwriting duplicate entry '{name}' under {parents or ['<root>']}")

    node[key] = {}
    return key


def _next_free_key(node: Tree, name: str) -> str:
    """Find the first 'name (n)' key not yet taken, starting from n = 2."""
    counter = 2
    while f"{name} ({counter})" in node:
        counter += 1
    return f"{name} ({counter})"

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def parse(text: str, options: Optional[ParseOptions] = None) -> Tree:
    """
    Parse the string output of a tree listing into a nested mapping.

    The input must already use canonical Unicode decoration. All state
    (the parent stack and the last indent) is local to this call.

    Args:
        text: The output of the tree command to parse.
        options: Collision and root re-entry behaviour.

    Returns:
        Tree: The parsed hierarchy; empty for blank input.

    Raises:
        DuplicateEntryError: When options.on_duplicate is 'error' and a
            sibling name repeats.
    """
    opts = options or ParseOptions()

    tree: Tree = {}
    parents: List[str] = []
    # -1 lets the first line take the descend branch and become a root entry
    last_indent = -1
    line_count = 0

    for line in parse_lines(text):
        line_count += 1
        this_indent = line.indent

        # Inside the last entry
        if this_indent > last_indent:
            key = store(tree, parents, line.name, opts.on_duplicate)
            parents.append(key)
            last_indent = this_indent
            continue

        # Above the last entry
        if this_indent < last_indent:
            if this_indent == 0 and opts.legacy_root_reentry:
                logger.debug(f"Dropping root re-entry '{line.name}' (legacy mode)")
                continue

            _pop(parents)
            indent_change = last_indent - this_indent
            del parents[max(0, len(parents) - indent_change):]

            key = store(tree, parents, line.name, opts.on_duplicate)
            parents.append(key)
            last_indent = this_indent
            continue

        # Same level as the last entry
        _pop(parents)
        key = store(tree, parents, line.name, opts.on_duplicate)
        parents.append(key)

    logger.debug(f"Parsed {line_count} lines into {count_nodes(tree)} nodes.")
    return tree


def count_nodes(tree: Tree) -> int:
    """Count every entry in the tree, at all depths."""
    return sum(1 + count_nodes(children) for children in tree.values())


def tree_depth(tree: Tree) -> int:
    """Return the number of levels in the tree (0 for an empty tree)."""
    if not tree:
        return 0
    return 1 + max(tree_depth(children) for children in tree.values())

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _pop(parents: List[str]) -> None:
    """Close the most recent entry, tolerating an already empty stack."""
    if parents:
        parents.pop()
