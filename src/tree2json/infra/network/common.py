from __future__ import annotations

from tree2json.domain.constants import APP_VERSION, DEFAULT_FETCH_TIMEOUT, URL_SCHEMES

USER_AGENT = f"Tree2Json-Client/{APP_VERSION}"
DEFAULT_TIMEOUT = DEFAULT_FETCH_TIMEOUT
CHUNK_SIZE = 8192


def is_remote_source(source: str) -> bool:
    """Tell whether a source string designates an HTTP(S) resource."""
    return source.strip().lower().startswith(URL_SCHEMES)
