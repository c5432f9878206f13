from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Invokes the entry point script via subprocess and validates exit codes,
stdout/stderr content and file side effects. HOME is redirected so the
persisted configuration never leaks between runs.
"""

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import List

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "tree2json" / "main.py"


def run_cli(args: List[str], home: Path) -> subprocess.CompletedProcess[str]:
    """
    Execute the CLI in a separate process with an isolated home directory.

    Args:
        args: Command line arguments (excluding 'python' and script path).
        home: Directory used as HOME/LOCALAPPDATA for persisted state.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")
    env["HOME"] = str(home)
    env["USERPROFILE"] = str(home)
    env["LOCALAPPDATA"] = str(home)
    env["PYTHONIOENCODING"] = "utf-8"

    cmd = [sys.executable, str(ENTRY_POINT)] + args
    return subprocess.run(cmd, env=env, capture_output=True, text=True, encoding="utf-8")


@pytest.fixture
def home(tmp_path: Path) -> Path:
    h = tmp_path / "home"
    h.mkdir()
    return h


@pytest.fixture
def listing_file(tmp_path: Path, ascii_listing: str) -> Path:
    f = tmp_path / "tree.txt"
    f.write_bytes(ascii_listing.encode("utf-8"))
    return f


def test_cli_prints_json(home: Path, listing_file: Path, expected_tree) -> None:
    """TC-01: Default run prints the parsed tree as JSON on stdout."""
    result = run_cli([str(listing_file)], home)

    assert result.returncode == 0, result.stderr
    assert json.loads(result.stdout) == expected_tree


def test_cli_writes_output_file(tmp_path: Path, home: Path, listing_file: Path, expected_tree) -> None:
    """TC-02: -o persists the JSON; a second run without --overwrite fails."""
    out = tmp_path / "out" / "tree.json"

    first = run_cli([str(listing_file), "-o", str(out)], home)
    assert first.returncode == 0, first.stderr
    assert json.loads(out.read_text(encoding="utf-8")) == expected_tree

    second = run_cli([str(listing_file), "-o", str(out)], home)
    assert second.returncode == 1
    assert "already exists" in second.stderr

    third = run_cli([str(listing_file), "-o", str(out), "--overwrite"], home)
    assert third.returncode == 0


def test_cli_missing_source(tmp_path: Path, home: Path) -> None:
    """TC-03: A missing file is a conversion failure with no JSON output."""
    result = run_cli([str(tmp_path / "absent.txt")], home)

    assert result.returncode == 1
    assert "not found" in result.stderr
    assert result.stdout == ""


def test_cli_render_round_trip(home: Path, listing_file: Path) -> None:
    """TC-04: --render prints canonical Unicode art."""
    result = run_cli([str(listing_file), "--render"], home)

    assert result.returncode == 0, result.stderr
    lines = result.stdout.splitlines()
    assert lines[0] == "project"
    assert lines[1] == "├── src"
    assert lines[-1] == "└── README.md"


def test_cli_summary_and_dry_run(tmp_path: Path, home: Path, listing_file: Path) -> None:
    """TC-05: --summary reports metrics; --dry-run leaves the disk untouched."""
    out = tmp_path / "never.json"
    result = run_cli([str(listing_file), "-o", str(out), "--dry-run", "--summary"], home)

    assert result.returncode == 0, result.stderr
    assert "Entries: 8" in result.stdout
    assert "DRY RUN" in result.stdout
    assert not out.exists()


def test_cli_dump_and_save_config(home: Path, listing_file: Path) -> None:
    """TC-06: Saved options are reused by later runs."""
    saved = run_cli([str(listing_file), "--indent", "0", "--save-config", "--dump-config"], home)
    assert saved.returncode == 0, saved.stderr
    assert json.loads(saved.stdout)["json_indent"] == 0

    reused = run_cli(["--dump-config"], home)
    cfg = json.loads(reused.stdout)
    assert cfg["json_indent"] == 0
    assert cfg["source"] == str(listing_file)

    ignored = run_cli(["--dump-config", "--use-defaults"], home)
    assert json.loads(ignored.stdout)["json_indent"] == 2


def test_cli_duplicate_error_policy(tmp_path: Path, home: Path) -> None:
    """TC-07: --on-duplicate error turns a repeated sibling into a failure."""
    f = tmp_path / "dup.txt"
    f.write_text("root\n├── a\n└── a\n", encoding="utf-8")

    result = run_cli([str(f), "--on-duplicate", "error"], home)

    assert result.returncode == 1
    assert "Duplicate entry" in result.stderr


def test_cli_rejects_bad_arguments(home: Path) -> None:
    """TC-08: argparse usage errors exit with code 2."""
    result = run_cli(["--on-duplicate", "merge"], home)
    assert result.returncode == 2
