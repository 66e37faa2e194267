"""Content digests for request bodies."""

from __future__ import annotations

import base64
import hashlib


def md5_base64(data: bytes) -> str:
    """Base64 encoded MD5 digest of data."""
    return base64.b64encode(hashlib.md5(data).digest()).decode("ascii")


def sha256_hex(data: bytes) -> str:
    """Hex encoded SHA-256 digest of data."""
    return hashlib.sha256(data).hexdigest()


class HashlibDigester:
    """Default digester backed by hashlib."""

    def md5_base64(self, data: bytes) -> str:
        return md5_base64(data)

    def sha256_hex(self, data: bytes) -> str:
        return sha256_hex(data)
