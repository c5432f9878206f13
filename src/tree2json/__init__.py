from __future__ import annotations

"""
tree2json: convert `tree` command listings into nested JSON.

Facade over the parser core for library use.
"""

from tree2json.core.parsing.tree_parser import parse
from tree2json.domain.constants import APP_VERSION
from tree2json.domain.tree_models import ParseOptions, Tree

__version__ = APP_VERSION

__all__ = ["ParseOptions", "Tree", "parse", "__version__"]
