from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: loading and merging of configuration sources
(defaults, persistent storage and CLI overrides), logging initialization,
pipeline execution and result rendering. JSON goes to stdout; diagnostics
go to stderr so the output can be piped.
"""

import json
import sys
from typing import Any, Dict, List, Optional

from tree2json.core.analysis.tree_renderer import render_tree
from tree2json.core.pipeline.engine import run_pipeline
from tree2json.core.pipeline.validator import validate_config
from tree2json.domain.config import get_default_app_state, load_app_state, save_config
from tree2json.domain.pipeline_models import PipelineResult
from tree2json.infra.logging import (
    LoggingConfig,
    configure_logging,
    get_default_log_path,
    get_logger,
)
from tree2json.interface.cli import args as cli_args
from tree2json.utils.i18n import i18n

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 conversion failure,
             2 usage error, 130 interrupted).
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Resolve base configuration (Default vs Persistent state)
    state = get_default_app_state() if args.use_defaults else load_app_state()
    settings: Dict[str, Any] = state.get("app_settings", {})

    overrides = cli_args.args_to_overrides(args)
    raw_conf = _merge_config(state.get("last_session", {}), overrides)
    clean_conf, warnings = validate_config(raw_conf, strict=False)

    # 3. Logging bootstrap (console on stderr, optional persistent file)
    log_file = args.log_file
    if not log_file and clean_conf["save_error_log"]:
        log_file = get_default_log_path()
    log_level = "DEBUG" if args.debug else settings.get("log_level", "WARNING")
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=log_file))

    locale = settings.get("locale")
    if locale and locale != i18n.locale:
        i18n.load_locale(locale)

    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    # Configuration management commands
    if args.save_config:
        save_config(clean_conf)
        print(i18n.t("cli.status.config_saved"), file=sys.stderr)

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return 0

    if not clean_conf["source"]:
        print(f"ERROR: {i18n.t('cli.errors.no_source')}", file=sys.stderr)
        return 2

    # 4. Pipeline execution phase
    logger.debug(f"Converting source: {clean_conf['source']}")
    try:
        result = run_pipeline(
            clean_conf,
            overwrite=bool(args.overwrite),
            dry_run=bool(args.dry_run),
        )
    except KeyboardInterrupt:
        msg = i18n.t("cli.status.interrupted")
        logger.warning(msg)
        print(msg, file=sys.stderr)
        return 130
    except Exception as e:
        msg = i18n.t("cli.errors.pipeline_fail", error=str(e))
        logger.critical(msg, exc_info=True)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 1

    if not result.ok:
        print(f"ERROR: {i18n.t('cli.errors.pipeline_fail', error=result.error)}", file=sys.stderr)
        return 1

    # 5. Output rendering phase
    if args.summary:
        _print_human_summary(result)
    elif args.render:
        print("\n".join(render_tree(result.tree)))
    else:
        print(result.json_text)

    return 0

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge override values over the base configuration.

    None values are ignored so that unset CLI options keep the saved value.
    """
    out = dict(base)
    for k, v in overrides.items():
        if v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: PipelineResult) -> None:
    """
    Print a short report of a successful conversion.

    Args:
        result: The pipeline result to render.
    """
    summary = result.summary

    print(i18n.t("cli.status.success"))
    print(i18n.t("cli.status.source", source=result.source, encoding=result.encoding or "text"))
    print(i18n.t(
        "cli.status.stats",
        nodes=summary.get("nodes", 0),
        roots=summary.get("roots", 0),
        depth=summary.get("depth", 0),
        lines=summary.get("lines", 0),
    ))

    if summary.get("dry_run"):
        print(i18n.t("cli.status.dry_run"))
        if summary.get("will_generate"):
            print(i18n.t("cli.status.will_generate", path=summary["will_generate"]))
    elif result.output_path:
        print(i18n.t("cli.status.output_file", path=result.output_path))

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
