from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. Mapping of CLI flags to configuration keys.
2. Unset options never appear in the overrides.
3. Choice validation of the duplicate policy.
"""

import pytest

from tree2json.interface.cli.args import args_to_overrides, build_parser


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    parser = build_parser()
    return parser.parse_args(arg_list)


def test_no_arguments_produce_no_overrides():
    assert args_to_overrides(parse_args([])) == {}


def test_value_options_mapping():
    args = parse_args([
        "listing.txt",
        "-o", "out.json",
        "--encoding", "cp950",
        "--timeout", "5",
        "--indent", "4",
        "--on-duplicate", "suffix",
    ])
    overrides = args_to_overrides(args)

    assert overrides == {
        "source": "listing.txt",
        "output_path": "out.json",
        "encoding": "cp950",
        "fetch_timeout": 5,
        "json_indent": 4,
        "on_duplicate": "suffix",
    }


def test_boolean_flags_mapping():
    args = parse_args(["--no-normalize", "--legacy-root-reentry", "--ascii"])
    overrides = args_to_overrides(args)

    assert overrides["normalize_ascii"] is False
    assert overrides["legacy_root_reentry"] is True
    assert overrides["ensure_ascii"] is True


def test_runtime_flags_are_not_config():
    args = parse_args(["--dry-run", "--overwrite", "--summary", "--debug"])

    assert args.dry_run and args.overwrite and args.summary and args.debug
    assert args_to_overrides(args) == {}


def test_invalid_duplicate_policy_exits():
    with pytest.raises(SystemExit):
        parse_args(["--on-duplicate", "merge"])
