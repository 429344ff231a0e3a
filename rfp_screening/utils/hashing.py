"""
Hashing utilities — stable identifiers for screened RFP text.
"""

from __future__ import annotations

import hashlib


def sha256_hash(content: str | bytes) -> str:
    """Return the SHA-256 hex digest of *content* (str is UTF-8 encoded)."""
    if isinstance(content, str):
        content = content.encode("utf-8")
    return hashlib.sha256(content).hexdigest()


def short_hash(content: str | bytes, length: int = 12) -> str:
    """Prefix of the SHA-256 digest used in log lines and API responses."""
    return sha256_hash(content)[:length]
