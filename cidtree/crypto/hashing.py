"""
Module 02 - Hashing Utilities
Identifier type and the two digest operations used by the tree.

This module provides:
- ContentId: the opaque identifier type used for every tree node
- combine_hash: the order-sensitive parent digest (SHA-256, hex)
- content_hash: the local content-addressing digest (BLAKE2b-256, hex)

Determinism Notes:
- combine_hash(a, b) = sha256((a + b).encode("utf-8")).hexdigest()
- Left operand always comes first; combine_hash(a, b) != combine_hash(b, a)
- content_hash and combine_hash use different algorithms and must never be
  substituted for one another
"""
from __future__ import annotations

import hashlib


# Opaque content fingerprint (hex digest, IPFS CID, ...). Compared by value.
ContentId = str

COMBINE_DIGEST = "sha256"
CONTENT_DIGEST = "blake2b-256"


def sha256_hex(data: bytes) -> str:
    """
    Compute the hex-encoded SHA-256 digest of raw bytes.

    Example:
        >>> sha256_hex(b"hello")
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).hexdigest()


def combine_hash(left: ContentId, right: ContentId) -> ContentId:
    """
    Compute the identifier of an internal node from its two children.

    The identifiers are concatenated left-then-right, UTF-8 encoded and
    hashed with SHA-256. Both the tree builder and the proof verifier go
    through this function; any divergence between the two breaks
    verification for legitimate leaves.

    Args:
        left: Identifier of the left child
        right: Identifier of the right child

    Returns:
        64-character lowercase hex digest
    """
    return sha256_hex((left + right).encode("utf-8"))


def content_hash(data: bytes) -> ContentId:
    """
    Content-address raw bytes for the local content store.

    Uses BLAKE2b with a 32-byte digest, a different algorithm from
    combine_hash, so hashing the concatenation of two identifiers as
    content never reproduces their parent identifier.

    Args:
        data: Raw bytes to address

    Returns:
        64-character lowercase hex digest
    """
    return hashlib.blake2b(data, digest_size=32).hexdigest()


def is_hex_digest(value: str, length: int = 64) -> bool:
    """Return True if ``value`` looks like a lowercase hex digest of ``length`` chars."""
    if len(value) != length:
        return False
    try:
        int(value, 16)
    except ValueError:
        return False
    return value == value.lower()


__all__ = [
    "ContentId",
    "COMBINE_DIGEST",
    "CONTENT_DIGEST",
    "sha256_hex",
    "combine_hash",
    "content_hash",
    "is_hex_digest",
]
