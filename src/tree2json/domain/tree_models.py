from __future__ import annotations

"""
Parsed Tree Data Models.

Provides the recursive type definition for the name-keyed hierarchy built
by the parser, along with the per-line record and parsing options.
"""

from dataclasses import dataclass
from typing import Dict

from tree2json.domain.constants import DUPLICATE_POLICIES, ON_DUPLICATE_OVERWRITE

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

# Each key is an entry name; each value holds that entry's children.
Tree = Dict[str, "Tree"]


@dataclass(frozen=True)
class TreeLine:
    """
    A single non-blank line of decorated tree text.

    Attributes:
        raw: Original line content, decoration included.
        indent: Nesting level derived from connector/blank units.
        name: Entry name with all decoration stripped.
    """
    raw: str
    indent: int
    name: str


@dataclass(frozen=True)
class ParseOptions:
    """
    Behavioural switches for ambiguous input.

    Attributes:
        on_duplicate: Sibling name collision policy ('overwrite', 'error', 'suffix').
        legacy_root_reentry: Drop lines that ascend back to indent 0 instead
            of storing them as new root entries.
    """
    on_duplicate: str = ON_DUPLICATE_OVERWRITE
    legacy_root_reentry: bool = False

    def __post_init__(self) -> None:
        if self.on_duplicate not in DUPLICATE_POLICIES:
            raise ValueError(
                f"Unknown duplicate policy '{self.on_duplicate}'. "
                f"Expected one of: {', '.join(DUPLICATE_POLICIES)}."
            )
