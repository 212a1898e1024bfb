"""
Crypto Module

Identifier type and digest functions shared by the tree builder,
the proof verifier and the local content store.
"""

from .hashing import (
    ContentId,
    COMBINE_DIGEST,
    CONTENT_DIGEST,
    sha256_hex,
    combine_hash,
    content_hash,
    is_hex_digest,
)

__all__ = [
    "ContentId",
    "COMBINE_DIGEST",
    "CONTENT_DIGEST",
    "sha256_hex",
    "combine_hash",
    "content_hash",
    "is_hex_digest",
]
