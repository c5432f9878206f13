from __future__ import annotations

import logging
from typing import Dict

import requests

from tree2json.domain.errors import SourceFetchError
from tree2json.infra.network.common import CHUNK_SIZE, DEFAULT_TIMEOUT, USER_AGENT

logger = logging.getLogger(__name__)


def fetch_source_bytes(url: str, timeout: float = DEFAULT_TIMEOUT) -> bytes:
    """
    Download a remote tree listing as raw bytes.

    The payload is returned undecoded; charset handling belongs to the
    decoder so that legacy codepages are treated the same as local files.

    Raises:
        SourceFetchError: On connection failures, timeouts or non-2xx status.
    """
    headers: Dict[str, str] = {"User-Agent": USER_AGENT}
    logger.info(f"Fetching tree source from {url}")

    try:
        with requests.get(url, headers=headers, stream=True, timeout=timeout) as response:
            response.raise_for_status()
            chunks = [chunk for chunk in response.iter_content(chunk_size=CHUNK_SIZE) if chunk]
    except requests.exceptions.RequestException as e:
        msg = f"Failed to fetch content from URL: {e}"
        logger.error(msg)
        raise SourceFetchError(msg) from e

    data = b"".join(chunks)
    logger.debug(f"Fetched {len(data)} bytes from {url}")
    return data
