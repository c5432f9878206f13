from __future__ import annotations

"""
Network Communication Infrastructure.

Facade over the HTTP clients used to acquire remote tree listings.
"""

from tree2json.infra.network.common import USER_AGENT, is_remote_source
from tree2json.infra.network.source_client import fetch_source_bytes

__all__ = [
    "USER_AGENT",
    "fetch_source_bytes",
    "is_remote_source",
]
