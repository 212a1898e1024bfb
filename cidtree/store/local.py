"""
In-memory content store.

Deterministic and dependency-free; identifiers are BLAKE2b-256 hex digests
of the stored bytes.
"""

from __future__ import annotations

import logging
import threading

from cidtree.crypto.hashing import ContentId, content_hash
from cidtree.schemas.errors import ContentNotFoundException


logger = logging.getLogger(__name__)


class LocalContentStore:
    """Content-addressed dict of blobs. Safe to call from worker threads."""

    def __init__(self) -> None:
        self._blobs: dict[ContentId, bytes] = {}
        self._lock = threading.Lock()

    def hash(self, data: bytes) -> ContentId:
        content_id = content_hash(data)
        with self._lock:
            self._blobs[content_id] = bytes(data)
        logger.debug(f"Stored {len(data)} bytes as {content_id}")
        return content_id

    def fetch(self, content_id: ContentId) -> bytes:
        with self._lock:
            data = self._blobs.get(content_id)
        if data is None:
            raise ContentNotFoundException(content_id)
        return data

    def __contains__(self, content_id: object) -> bool:
        with self._lock:
            return content_id in self._blobs

    def __len__(self) -> int:
        with self._lock:
            return len(self._blobs)
