from __future__ import annotations

"""
Decoration Normalizer.

Rewrites the ASCII tree art produced by Windows `tree /A` into the canonical
Unicode connectors understood by the parser.
"""

import logging

from tree2json.domain.constants import ASCII_DECORATION_MAP

logger = logging.getLogger(__name__)


def normalize_line_endings(text: str) -> str:
    """Convert CRLF and bare CR line breaks to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def normalize_decorations(text: str) -> str:
    """
    Translate ASCII connectors to their Unicode equivalents.

    '+---' becomes '├──', '\\---' becomes '└──' and '|   ' becomes '│   '.
    Canonical input passes through unchanged.

    Args:
        text: Decoded tree listing in either decoration style.

    Returns:
        str: Text using Unicode decoration and LF line endings only.
    """
    out = normalize_line_endings(text)
    for ascii_seq, unicode_seq in ASCII_DECORATION_MAP:
        hits = out.count(ascii_seq)
        if hits:
            logger.debug(f"Normalizing {hits} occurrence(s) of '{ascii_seq}'")
            out = out.replace(ascii_seq, unicode_seq)
    return out
