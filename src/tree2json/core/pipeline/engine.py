from __future__ import annotations

"""
Core conversion pipeline.

Coordinates the whole workflow around the parser:
1. Validates configuration.
2. Acquires raw bytes from a local file or an HTTP(S) URL.
3. Decodes them (explicit codec or best-effort detection).
4. Normalizes ASCII tree art to canonical Unicode decoration.
5. Parses the text into a nested tree.
6. Serializes the tree to JSON and optionally persists it.

Any failure yields an error result carrying no tree at all.
"""

import logging
from typing import Any, Dict, Optional

from tree2json.core.parsing.tree_parser import count_nodes, parse, parse_lines, tree_depth
from tree2json.core.pipeline.validator import validate_config
from tree2json.core.processing.decoder import DecodedText, decode_bytes
from tree2json.core.processing.normalizer import normalize_decorations, normalize_line_endings
from tree2json.core.processing.serializer import to_json
from tree2json.domain.errors import DuplicateEntryError, OutputExistsError, SourceError
from tree2json.domain.pipeline_models import (
    PipelineResult,
    create_error_result,
    create_success_result,
)
from tree2json.domain.tree_models import ParseOptions
from tree2json.infra.fs import read_source_bytes, write_output_text
from tree2json.infra.network import fetch_source_bytes, is_remote_source

logger = logging.getLogger(__name__)

INLINE_SOURCE = "<inline>"


def run_pipeline(
        config: Optional[Dict[str, Any]],
        *,
        overwrite: bool = False,
        dry_run: bool = False,
        text: Optional[str] = None,
) -> PipelineResult:
    """
    Execute the full tree-text to JSON conversion.

    Args:
        config: The configuration dictionary (raw or partial).
        overwrite: If True, replace an existing output file.
        dry_run: If True, never write the output file.
        text: Already decoded listing; bypasses acquisition and decoding.

    Returns:
        PipelineResult: Object containing status, tree, JSON and summary.
    """
    logger.info("Pipeline execution started.")

    # -------------------------------------------------------------------------
    # 1) Config Normalization
    # -------------------------------------------------------------------------
    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    source = INLINE_SOURCE if text is not None else cfg["source"]
    if not source:
        msg = "No source configured: provide a file path or URL."
        logger.error(msg)
        return create_error_result(msg, source)

    # -------------------------------------------------------------------------
    # 2) Acquisition & Decoding
    # -------------------------------------------------------------------------
    if text is not None:
        decoded = DecodedText(text, "", False)
    else:
        try:
            decoded = _acquire(source, cfg)
        except SourceError as e:
            logger.error(f"Source acquisition failed: {e}")
            return create_error_result(str(e), source)

    # -------------------------------------------------------------------------
    # 3) Normalization & Parsing
    # -------------------------------------------------------------------------
    if cfg["normalize_ascii"]:
        canonical = normalize_decorations(decoded.text)
    else:
        canonical = normalize_line_endings(decoded.text)

    options = ParseOptions(
        on_duplicate=cfg["on_duplicate"],
        legacy_root_reentry=cfg["legacy_root_reentry"],
    )
    try:
        tree = parse(canonical, options)
    except DuplicateEntryError as e:
        logger.error(f"Parsing aborted: {e}")
        return create_error_result(str(e), source, decoded.encoding)

    json_text = to_json(tree, indent=cfg["json_indent"], ensure_ascii=cfg["ensure_ascii"])

    summary: Dict[str, Any] = {
        "lines": sum(1 for _ in parse_lines(canonical)),
        "nodes": count_nodes(tree),
        "depth": tree_depth(tree),
        "roots": len(tree),
        "encoding_detected": decoded.detected,
        "dry_run": dry_run,
    }

    # -------------------------------------------------------------------------
    # 4) Persistence
    # -------------------------------------------------------------------------
    output_path = ""
    if cfg["output_path"] and not dry_run:
        try:
            output_path = write_output_text(cfg["output_path"], json_text, overwrite=overwrite)
        except OutputExistsError as e:
            logger.warning(f"{e} Use overwrite to replace it.")
            return create_error_result(str(e), source, decoded.encoding, summary_extra=summary)
        except OSError as e:
            msg = f"Failed to write output file {cfg['output_path']}: {e}"
            logger.critical(msg)
            return create_error_result(msg, source, decoded.encoding, summary_extra=summary)
    elif cfg["output_path"]:
        summary["will_generate"] = cfg["output_path"]

    logger.info(
        f"Pipeline finished: {summary['nodes']} nodes, depth {summary['depth']}."
    )
    return create_success_result(
        source=source,
        encoding=decoded.encoding,
        tree=tree,
        json_text=json_text,
        output_path=output_path,
        summary_extra=summary,
    )


def _acquire(source: str, cfg: Dict[str, Any]) -> DecodedText:
    """Load raw bytes from the configured location and decode them."""
    if is_remote_source(source):
        data = fetch_source_bytes(source, timeout=cfg["fetch_timeout"])
    else:
        data = read_source_bytes(source)
    return decode_bytes(data, cfg["encoding"] or None)
