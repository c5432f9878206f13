from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared sample listings in both decoration styles.
3. Isolation of the persisted configuration file and logging state.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def unicode_listing() -> str:
    """A canonical Unicode listing with two levels of nesting."""
    return (
        "project\n"
        "├── src\n"
        "│   ├── app.py\n"
        "│   └── utils\n"
        "│       └── helpers.py\n"
        "├── tests\n"
        "│   └── test_app.py\n"
        "└── README.md\n"
    )


@pytest.fixture
def ascii_listing() -> str:
    """The same structure as rendered by Windows `tree /A /F` (CRLF endings)."""
    return (
        "project\r\n"
        "+---src\r\n"
        "|   +---app.py\r\n"
        "|   \\---utils\r\n"
        "|       \\---helpers.py\r\n"
        "+---tests\r\n"
        "|   \\---test_app.py\r\n"
        "\\---README.md\r\n"
    )


@pytest.fixture
def expected_tree() -> Dict[str, Any]:
    return {
        "project": {
            "src": {"app.py": {}, "utils": {"helpers.py": {}}},
            "tests": {"test_app.py": {}},
            "README.md": {},
        }
    }


@pytest.fixture
def mock_config_dict(tmp_path: Path) -> Dict[str, Any]:
    """
    Return a valid, complete configuration dictionary for testing.

    Reflects the structure defined in 'tree2json.domain.config'.
    """
    return {
        "source": str(tmp_path / "tree.txt"),
        "encoding": "",
        "fetch_timeout": 30,
        "normalize_ascii": True,
        "on_duplicate": "overwrite",
        "legacy_root_reentry": False,
        "output_path": "",
        "json_indent": 2,
        "ensure_ascii": False,
        "save_error_log": False,
    }


@pytest.fixture(autouse=True)
def isolated_config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Redirect the persisted config.json into the test's temp directory."""
    from tree2json.domain import config as config_module

    target = tmp_path / "state" / "config.json"
    monkeypatch.setattr(config_module, "CONFIG_FILE", str(target))
    return target


@pytest.fixture(autouse=True)
def reset_logging() -> Any:
    """Tear down any queue listener installed during a test."""
    yield
    from tree2json.infra.logging import shutdown_logging

    shutdown_logging()
    logging.getLogger().setLevel(logging.WARNING)
