from __future__ import annotations

"""
JSON Serialization of parsed trees and error payloads.
"""

import json
from typing import Any, Dict

from tree2json.domain.constants import DEFAULT_JSON_INDENT
from tree2json.domain.tree_models import Tree


def to_json(tree: Tree, indent: int = DEFAULT_JSON_INDENT, ensure_ascii: bool = False) -> str:
    """
    Render a tree as pretty-printed JSON with Unicode left unescaped.

    An empty tree is emitted as '{}' regardless of indentation.
    """
    return json.dumps(tree, ensure_ascii=ensure_ascii, indent=indent if indent > 0 else None)


def error_payload(message: str) -> Dict[str, Any]:
    """Build the JSON error object returned to clients."""
    return {"error": message}
