from __future__ import annotations

"""
Unit tests for the Configuration Validation Service.

Ensures loose values are coerced with warnings in lenient mode and rejected
in strict mode.
"""

import pytest

from tree2json.core.pipeline.validator import validate_config
from tree2json.domain.config import get_default_config


def test_valid_config_passes_without_warnings(mock_config_dict):
    clean, warnings = validate_config(mock_config_dict)

    assert warnings == []
    assert clean == mock_config_dict


def test_non_dict_returns_defaults():
    clean, warnings = validate_config(["not", "a", "dict"])

    assert clean == get_default_config()
    assert len(warnings) == 1


def test_non_dict_strict_raises():
    with pytest.raises(TypeError):
        validate_config("nope", strict=True)


def test_missing_keys_are_filled_with_defaults():
    clean, _ = validate_config({"source": "listing.txt"})

    assert clean["source"] == "listing.txt"
    assert clean["json_indent"] == 2
    assert clean["on_duplicate"] == "overwrite"


def test_bool_and_int_coercion(mock_config_dict):
    mock_config_dict.update({
        "normalize_ascii": "no",
        "ensure_ascii": 1,
        "json_indent": "4",
    })
    clean, warnings = validate_config(mock_config_dict)

    assert clean["normalize_ascii"] is False
    assert clean["ensure_ascii"] is True
    assert clean["json_indent"] == 4
    assert len(warnings) == 3


def test_out_of_range_int_is_clamped(mock_config_dict):
    mock_config_dict["json_indent"] = 99
    clean, warnings = validate_config(mock_config_dict)

    assert clean["json_indent"] == 16
    assert any("out of range" in w for w in warnings)


def test_unknown_duplicate_policy_falls_back(mock_config_dict):
    mock_config_dict["on_duplicate"] = "Merge"
    clean, warnings = validate_config(mock_config_dict)

    assert clean["on_duplicate"] == "overwrite"
    assert warnings


def test_duplicate_policy_is_case_insensitive(mock_config_dict):
    mock_config_dict["on_duplicate"] = "SUFFIX"
    clean, _ = validate_config(mock_config_dict)
    assert clean["on_duplicate"] == "suffix"


def test_encoding_aliases_are_canonicalized(mock_config_dict):
    mock_config_dict["encoding"] = "UTF8"
    clean, _ = validate_config(mock_config_dict)
    assert clean["encoding"] == "utf-8"


def test_unknown_encoding_reverts_to_detection(mock_config_dict):
    mock_config_dict["encoding"] = "klingon-1"
    clean, warnings = validate_config(mock_config_dict)

    assert clean["encoding"] == ""
    assert warnings


@pytest.mark.parametrize("field, value, exc", [
    ("normalize_ascii", "yes", TypeError),
    ("json_indent", 3.5, TypeError),
    ("json_indent", -1, ValueError),
    ("on_duplicate", "merge", ValueError),
    ("encoding", "klingon-1", ValueError),
    ("source", 42, TypeError),
])
def test_strict_mode_rejects_invalid_values(mock_config_dict, field, value, exc):
    mock_config_dict[field] = value
    with pytest.raises(exc):
        validate_config(mock_config_dict, strict=True)
