from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates the raw argparse
namespace into domain-compatible configuration overrides.
"""

import argparse
from typing import Any, Dict

from tree2json.domain.constants import APP_VERSION, DUPLICATE_POLICIES
from tree2json.utils.i18n import i18n

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the tree2json CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="tree2json",
        description=i18n.t("app.description"),
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")

    # --- Source & Destination ---
    p.add_argument(
        "source",
        nargs="?",
        default=None,
        help=i18n.t("cli.args.source"),
    )
    p.add_argument(
        "-o", "--output",
        dest="output_path",
        default=None,
        help=i18n.t("cli.args.output"),
    )
    p.add_argument(
        "-e", "--encoding",
        default=None,
        help=i18n.t("cli.args.encoding"),
    )
    p.add_argument(
        "--timeout",
        dest="fetch_timeout",
        type=int,
        default=None,
        help=i18n.t("cli.args.timeout"),
    )

    # --- Parsing Behaviour ---
    p.add_argument(
        "--no-normalize",
        action="store_true",
        help=i18n.t("cli.args.no_normalize"),
    )
    p.add_argument(
        "--on-duplicate",
        choices=DUPLICATE_POLICIES,
        default=None,
        help=i18n.t("cli.args.on_duplicate"),
    )
    p.add_argument(
        "--legacy-root-reentry",
        action="store_true",
        help=i18n.t("cli.args.legacy_root_reentry"),
    )

    # --- Output Format ---
    p.add_argument(
        "--indent",
        dest="json_indent",
        type=int,
        default=None,
        help=i18n.t("cli.args.indent"),
    )
    p.add_argument("--ascii", action="store_true", help=i18n.t("cli.args.ascii"))
    p.add_argument("--render", action="store_true", help=i18n.t("cli.args.render"))
    p.add_argument("--summary", action="store_true", help=i18n.t("cli.args.summary"))

    # --- Runtime Constraints and Safety ---
    p.add_argument("--overwrite", action="store_true", help=i18n.t("cli.args.overwrite"))
    p.add_argument("--dry-run", action="store_true", help=i18n.t("cli.args.dry_run"))

    # --- Configuration and Diagnostic Tools ---
    p.add_argument("--use-defaults", action="store_true", help=i18n.t("cli.args.defaults"))
    p.add_argument("--dump-config", action="store_true", help=i18n.t("cli.args.dump"))
    p.add_argument("--save-config", action="store_true", help=i18n.t("cli.args.save"))
    p.add_argument("--log-file", default=None, help=i18n.t("cli.args.log_file"))
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a domain configuration dictionary.

    Only options the user actually set are included, so unset flags never
    shadow values coming from the saved configuration.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    for key in ("source", "output_path", "encoding", "fetch_timeout", "on_duplicate", "json_indent"):
        value = getattr(args, key)
        if value is not None:
            overrides[key] = value

    if args.no_normalize:
        overrides["normalize_ascii"] = False
    if args.legacy_root_reentry:
        overrides["legacy_root_reentry"] = True
    if args.ascii:
        overrides["ensure_ascii"] = True

    return overrides
