from __future__ import annotations

"""
Pipeline Domain Data Models.

Defines the result structure and factory functions used to communicate
execution outcomes between the pipeline engine and interface layers
(CLI/HTTP).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from tree2json.domain.tree_models import Tree

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class PipelineResult:
    """
    Unified result object of a complete conversion run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        source: Path or URL the listing was read from.
        encoding: Codec used to decode the source ('' when not reached).
        tree: Parsed hierarchy; always empty on failure.
        json_text: Serialized tree; always empty on failure.
        output_path: Absolute path of the written JSON file, if any.
        summary: Technical execution summary and statistics.
    """
    ok: bool
    error: str

    source: str
    encoding: str = ""

    tree: Tree = field(default_factory=dict)
    json_text: str = ""
    output_path: str = ""

    summary: Dict[str, Any] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        source: str,
        encoding: str = "",
        summary_extra: Optional[Dict[str, Any]] = None,
) -> PipelineResult:
    """
    Create a failed pipeline result instance. No tree is ever attached.

    Args:
        error: Detailed error description.
        source: The source that was being processed.
        encoding: Codec resolved before the failure, if any.
        summary_extra: Additional metadata for the summary payload.
    """
    return PipelineResult(
        ok=False,
        error=error,
        source=source,
        encoding=encoding,
        summary=summary_extra or {},
    )


def create_success_result(
        source: str,
        encoding: str,
        tree: Tree,
        json_text: str,
        output_path: str = "",
        summary_extra: Optional[Dict[str, Any]] = None,
) -> PipelineResult:
    """
    Create a successful pipeline result instance.

    Args:
        source: Path or URL that was converted.
        encoding: Codec used for decoding.
        tree: Parsed hierarchy.
        json_text: Serialized representation of the tree.
        output_path: Written file location ('' when not persisted).
        summary_extra: Final execution metrics.
    """
    return PipelineResult(
        ok=True,
        error="",
        source=source,
        encoding=encoding,
        tree=tree,
        json_text=json_text,
        output_path=output_path,
        summary=summary_extra or {},
    )
