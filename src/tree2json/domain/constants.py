from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Centralizes the decoration glyph tables, the legacy ASCII translation map,
encoding candidates and system versioning shared by parser, collaborators
and interfaces.
"""

from typing import List, Tuple

APP_VERSION = "1.0.0"
CURRENT_CONFIG_VERSION = "1.0.0"

# -----------------------------------------------------------------------------
# TREE DECORATION
# -----------------------------------------------------------------------------

CONNECTOR_GLYPHS = "│├└"
NBSP = " "
INDENT_WIDTH = 4

BRANCH_CONNECTOR = "├── "
LAST_CONNECTOR = "└── "
PIPE_PREFIX = "│   "
BLANK_PREFIX = "    "

# Windows `tree /A` output -> canonical Unicode art (order matters)
ASCII_DECORATION_MAP: List[Tuple[str, str]] = [
    ("+---", "├──"),
    ("\\---", "└──"),
    ("|   ", "│   "),
]

# -----------------------------------------------------------------------------
# DUPLICATE SIBLING POLICIES
# -----------------------------------------------------------------------------

ON_DUPLICATE_OVERWRITE = "overwrite"
ON_DUPLICATE_ERROR = "error"
ON_DUPLICATE_SUFFIX = "suffix"

DUPLICATE_POLICIES: Tuple[str, ...] = (
    ON_DUPLICATE_OVERWRITE,
    ON_DUPLICATE_ERROR,
    ON_DUPLICATE_SUFFIX,
)

# -----------------------------------------------------------------------------
# SOURCE ACQUISITION
# -----------------------------------------------------------------------------

# Tried in order when no explicit encoding is configured
ENCODING_CANDIDATES: List[str] = ["utf-8", "cp950", "big5"]
FALLBACK_ENCODING = "utf-8"

DEFAULT_SOURCE = "tree.txt"
DEFAULT_FETCH_TIMEOUT = 30
URL_SCHEMES: Tuple[str, ...] = ("http://", "https://")

# -----------------------------------------------------------------------------
# SERIALIZATION
# -----------------------------------------------------------------------------

DEFAULT_JSON_INDENT = 2
JSON_MEDIA_TYPE = "application/json; charset=utf-8"
