"""
Content Store Interface

The tree consumes content addressing only through this protocol:
hash() turns bytes into a ContentId, fetch() turns a ContentId back into
bytes. Implementations raise ContentStoreException (or a subclass) on
failure and never retry.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from cidtree.crypto.hashing import ContentId


@runtime_checkable
class ContentStore(Protocol):
    """Content-addressable storage capability."""

    def hash(self, data: bytes) -> ContentId:
        """Store ``data`` and return its content identifier."""
        ...

    def fetch(self, content_id: ContentId) -> bytes:
        """Return the data addressed by ``content_id``."""
        ...
