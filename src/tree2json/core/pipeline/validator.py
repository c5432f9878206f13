from __future__ import annotations

"""
Configuration Validation Service.

Acts as the gatekeeper for the pipeline, ensuring that the configuration
dictionary conforms to the expected schema. Handles type coercion and
default value injection so untrusted CLI/HTTP input cannot destabilize a run.
"""

import codecs
import logging
from typing import Any, Dict, List, Tuple

from tree2json.domain.config import get_default_config
from tree2json.domain.constants import DUPLICATE_POLICIES

logger = logging.getLogger(__name__)

_STRING_FIELDS = ["source", "encoding", "output_path", "on_duplicate"]
_BOOL_FIELDS = ["normalize_ascii", "legacy_root_reentry", "ensure_ascii", "save_error_log"]
_INT_FIELDS = {"json_indent": (0, 16), "fetch_timeout": (1, 600)}

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Fills missing keys with domain defaults and coerces loosely typed values
    (e.g. "yes", "4") into the expected types.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions on invalid values instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and
                                          a list of warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    for field in _STRING_FIELDS:
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    for field in _BOOL_FIELDS:
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    for field, bounds in _INT_FIELDS.items():
        merged[field] = _as_int(merged.get(field), defaults[field], bounds, field, warnings, strict)

    merged["on_duplicate"] = _as_choice(
        merged["on_duplicate"].lower(), defaults["on_duplicate"], DUPLICATE_POLICIES,
        "on_duplicate", warnings, strict,
    )
    merged["encoding"] = _normalize_encoding(merged["encoding"], warnings, strict)

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs. Blank strings are legitimate here."""
    if value is None:
        return fallback
    if isinstance(value, str):
        return value.strip()

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_int(
        value: Any,
        fallback: int,
        bounds: Tuple[int, int],
        field: str,
        warnings: List[str],
        strict: bool,
) -> int:
    """Coerce to an integer and clamp it into the allowed range."""
    if value is None:
        return fallback

    if isinstance(value, bool) or not isinstance(value, (int, str)):
        msg = f"Invalid field '{field}': expected int, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    if isinstance(value, str):
        try:
            number = int(value.strip())
        except ValueError:
            msg = f"Invalid field '{field}': '{value}' is not an integer."
            if strict:
                raise ValueError(msg)
            warnings.append(f"{msg} Using fallback.")
            return fallback
        if strict:
            raise TypeError(f"Invalid field '{field}': expected int, received str.")
        warnings.append(f"Field '{field}' converted from '{value}' to {number}.")
    else:
        number = value

    low, high = bounds
    if not low <= number <= high:
        msg = f"Field '{field}' out of range [{low}, {high}]: {number}."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Clamped.")
        number = min(max(number, low), high)
    return number


def _as_choice(
        value: str,
        fallback: str,
        choices: Tuple[str, ...],
        field: str,
        warnings: List[str],
        strict: bool,
) -> str:
    if value in choices:
        return value

    msg = f"Invalid field '{field}': '{value}' not in {list(choices)}."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback

# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN NORMALIZATION
# -----------------------------------------------------------------------------

def _normalize_encoding(encoding: str, warnings: List[str], strict: bool) -> str:
    """Resolve codec aliases (e.g. 'UTF8', 'ms950') to canonical names; '' means detect."""
    if not encoding:
        return ""
    try:
        return codecs.lookup(encoding).name
    except LookupError:
        msg = f"Unknown encoding '{encoding}'."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Falling back to detection.")
        return ""
