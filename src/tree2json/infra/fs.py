from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform path resolution, source file acquisition and output
persistence. Acts as an abstraction over the 'os' module so that the parser
core never touches the filesystem itself.
"""

import logging
import os
from typing import Optional

from tree2json.domain.errors import OutputExistsError, SourceReadError

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "Tree2Json"
UNIX_APP_DIR_NAME = ".tree2json"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/Tree2Json
    - Linux/Mac: ~/.tree2json

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        logger.debug(f"Could not create data directory {path}: {e}")

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is blank.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip() or fallback
    return os.path.abspath(os.path.expandvars(os.path.expanduser(p)))

# -----------------------------------------------------------------------------
# SOURCE & OUTPUT API
# -----------------------------------------------------------------------------

def read_source_bytes(path: str) -> bytes:
    """
    Read a local tree listing as raw bytes.

    Args:
        path: Location of the tree text file.

    Returns:
        bytes: Undecoded file content.

    Raises:
        SourceReadError: If the file is missing, a directory, or unreadable.
    """
    resolved = normalize_path(path, path)
    if not os.path.isfile(resolved):
        raise SourceReadError(f"Source file not found: {resolved}")

    try:
        with open(resolved, "rb") as f:
            data = f.read()
    except OSError as e:
        raise SourceReadError(f"Failed to read source file {resolved}: {e}") from e

    logger.debug(f"Read {len(data)} bytes from {resolved}")
    return data


def write_output_text(path: str, text: str, overwrite: bool = False) -> str:
    """
    Persist serialized output as UTF-8, creating parent directories.

    Args:
        path: Destination file.
        text: Content to write.
        overwrite: Allow replacing an existing file.

    Returns:
        str: Absolute path of the written file.

    Raises:
        OutputExistsError: If the file exists and overwrite is False.
        OSError: If the directory or file cannot be written.
    """
    resolved = normalize_path(path, path)
    if os.path.exists(resolved) and not overwrite:
        raise OutputExistsError(f"Output file already exists: {resolved}")

    parent = os.path.dirname(resolved)
    if parent:
        os.makedirs(parent, exist_ok=True)

    with open(resolved, "w", encoding="utf-8", newline="\n") as f:
        f.write(text)
        if not text.endswith("\n"):
            f.write("\n")

    logger.info(f"Output written to {resolved}")
    return resolved
