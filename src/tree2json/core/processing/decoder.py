from __future__ import annotations

"""
Source Decoder.

Turns raw source bytes into Unicode text. Legacy tree dumps from
Traditional Chinese Windows locales arrive in CP950/Big5, so when no
encoding is configured a strict candidate probe is run before falling back
to lenient UTF-8.
"""

import codecs
import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from tree2json.domain.constants import ENCODING_CANDIDATES, FALLBACK_ENCODING
from tree2json.domain.errors import SourceDecodeError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecodedText:
    """
    Result of decoding a source payload.

    Attributes:
        text: Decoded Unicode content.
        encoding: Codec that produced the text.
        detected: True when the codec was chosen by probing.
    """
    text: str
    encoding: str
    detected: bool


def decode_bytes(
        data: bytes,
        encoding: Optional[str] = None,
        candidates: Iterable[str] = ENCODING_CANDIDATES,
) -> DecodedText:
    """
    Decode source bytes into text.

    Args:
        data: Raw payload from a file or HTTP response.
        encoding: Explicit codec name; empty/None enables detection.
        candidates: Codecs probed in order when detecting.

    Returns:
        DecodedText: The text and the codec that was used.

    Raises:
        SourceDecodeError: If an explicit encoding is unknown or fails.
    """
    if encoding:
        try:
            codec = codecs.lookup(encoding).name
        except LookupError as e:
            raise SourceDecodeError(f"Unknown encoding '{encoding}'.") from e
        try:
            return DecodedText(data.decode(codec), codec, False)
        except UnicodeDecodeError as e:
            raise SourceDecodeError(f"Source is not valid {codec}: {e}") from e

    if data.startswith(codecs.BOM_UTF8):
        return DecodedText(data[len(codecs.BOM_UTF8):].decode("utf-8", errors="replace"), "utf-8", True)

    detected = detect_encoding(data, candidates)
    if detected:
        logger.debug(f"Detected source encoding: {detected}")
        return DecodedText(data.decode(detected), detected, True)

    # No candidate matched: assume the content is already correctly encoded
    logger.warning(f"Could not detect source encoding; falling back to {FALLBACK_ENCODING}.")
    return DecodedText(data.decode(FALLBACK_ENCODING, errors="replace"), FALLBACK_ENCODING, False)


def detect_encoding(data: bytes, candidates: Iterable[str] = ENCODING_CANDIDATES) -> Optional[str]:
    """Return the first candidate codec that decodes the payload strictly."""
    for candidate in candidates:
        try:
            data.decode(candidate)
        except (UnicodeDecodeError, LookupError):
            continue
        return codecs.lookup(candidate).name
    return None
