from __future__ import annotations

"""
Integration tests for the conversion pipeline.

Exercises the full chain (read -> decode -> normalize -> parse -> serialize
-> write) against real temporary files, with the network client mocked.
"""

import json
from pathlib import Path
from unittest.mock import patch

from tree2json.core.pipeline.engine import INLINE_SOURCE, run_pipeline
from tree2json.domain.errors import SourceFetchError


def test_local_unicode_file(tmp_path: Path, mock_config_dict, unicode_listing, expected_tree):
    source = Path(mock_config_dict["source"])
    source.write_text(unicode_listing, encoding="utf-8")

    result = run_pipeline(mock_config_dict)

    assert result.ok, result.error
    assert result.tree == expected_tree
    assert json.loads(result.json_text) == expected_tree
    assert result.encoding == "utf-8"
    assert result.summary["nodes"] == 8
    assert result.summary["depth"] == 4
    assert result.summary["lines"] == 8
    assert result.output_path == ""


def test_cp950_windows_listing(tmp_path: Path, mock_config_dict):
    listing = "C:.\r\n+---文件\r\n|   \\---報告.docx\r\n\\---圖片\r\n"
    Path(mock_config_dict["source"]).write_bytes(listing.encode("cp950"))

    result = run_pipeline(mock_config_dict)

    assert result.ok, result.error
    assert result.encoding == "cp950"
    assert result.tree == {"C:.": {"文件": {"報告.docx": {}}, "圖片": {}}}
    assert "報告.docx" in result.json_text


def test_normalization_can_be_disabled(mock_config_dict):
    Path(mock_config_dict["source"]).write_text("root\n+---a\n\\---b\n", encoding="utf-8")
    mock_config_dict["normalize_ascii"] = False

    result = run_pipeline(mock_config_dict)

    # Without translation the ASCII art is part of the names and every line is a root sibling
    assert result.ok
    assert list(result.tree) == ["root", "+---a", "\\---b"]


def test_missing_source_file_fails_without_tree(mock_config_dict):
    result = run_pipeline(mock_config_dict)

    assert result.ok is False
    assert "not found" in result.error
    assert result.tree == {}
    assert result.json_text == ""


def test_explicit_wrong_encoding_fails(mock_config_dict):
    Path(mock_config_dict["source"]).write_bytes("資料".encode("cp950"))
    mock_config_dict["encoding"] = "utf-8"

    result = run_pipeline(mock_config_dict)

    assert result.ok is False
    assert "utf-8" in result.error


def test_duplicate_error_policy_fails(mock_config_dict):
    Path(mock_config_dict["source"]).write_text("root\n├── a\n└── a\n", encoding="utf-8")
    mock_config_dict["on_duplicate"] = "error"

    result = run_pipeline(mock_config_dict)

    assert result.ok is False
    assert "Duplicate entry 'a'" in result.error


def test_output_is_written_and_protected(tmp_path: Path, mock_config_dict, unicode_listing, expected_tree):
    Path(mock_config_dict["source"]).write_text(unicode_listing, encoding="utf-8")
    out = tmp_path / "out" / "tree.json"
    mock_config_dict["output_path"] = str(out)

    first = run_pipeline(mock_config_dict)
    assert first.ok
    assert first.output_path == str(out)
    assert json.loads(out.read_text(encoding="utf-8")) == expected_tree

    second = run_pipeline(mock_config_dict)
    assert second.ok is False
    assert "already exists" in second.error

    third = run_pipeline(mock_config_dict, overwrite=True)
    assert third.ok


def test_dry_run_writes_nothing(tmp_path: Path, mock_config_dict, unicode_listing):
    Path(mock_config_dict["source"]).write_text(unicode_listing, encoding="utf-8")
    out = tmp_path / "dry.json"
    mock_config_dict["output_path"] = str(out)

    result = run_pipeline(mock_config_dict, dry_run=True)

    assert result.ok
    assert not out.exists()
    assert result.summary["dry_run"] is True
    assert result.summary["will_generate"] == str(out)


def test_inline_text_bypasses_acquisition(mock_config_dict):
    result = run_pipeline(mock_config_dict, text="root\n+---a")

    assert result.ok
    assert result.source == INLINE_SOURCE
    assert result.tree == {"root": {"a": {}}}


def test_url_source_uses_network_client(mock_config_dict):
    mock_config_dict["source"] = "https://example.com/tree.txt"
    mock_config_dict["fetch_timeout"] = 7

    with patch("tree2json.core.pipeline.engine.fetch_source_bytes", return_value="root\n└── a".encode("utf-8")) as fetch:
        result = run_pipeline(mock_config_dict)

    fetch.assert_called_once_with("https://example.com/tree.txt", timeout=7)
    assert result.ok
    assert result.tree == {"root": {"a": {}}}


def test_url_fetch_failure_is_reported(mock_config_dict):
    mock_config_dict["source"] = "http://example.com/missing.txt"

    with patch("tree2json.core.pipeline.engine.fetch_source_bytes", side_effect=SourceFetchError("Failed to fetch content from URL: 404")):
        result = run_pipeline(mock_config_dict)

    assert result.ok is False
    assert "404" in result.error
    assert result.tree == {}


def test_empty_source_path_is_rejected(mock_config_dict):
    mock_config_dict["source"] = "   "
    result = run_pipeline(mock_config_dict)

    assert result.ok is False
    assert "No source" in result.error
