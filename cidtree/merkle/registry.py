"""
Module 03 - Leaf Registry
Maps leaf identifiers to the leaf nodes created from them.

Only genuine leaves are registered. Padding duplicates created while
reducing odd-sized levels are never added, even when they carry the same
identifier as a registered leaf. Two genuine leaves with the same
identifier resolve last-write-wins.
"""
from __future__ import annotations

import logging
from typing import Iterator, Optional

from cidtree.crypto.hashing import ContentId
from cidtree.merkle.node_store import Node
from cidtree.schemas.errors import LeafNotFoundException, TreeSealedException


logger = logging.getLogger(__name__)


class LeafRegistry:
    """Identifier -> leaf node lookup, written during ingestion only."""

    def __init__(self) -> None:
        self._leaves: dict[ContentId, Node] = {}
        self._sealed = False

    def register(self, node: Node) -> None:
        if self._sealed:
            raise TreeSealedException("Leaf registry is sealed")
        if node.id in self._leaves:
            logger.warning(
                f"Duplicate leaf identifier {node.id}: "
                f"node {node.index} replaces node {self._leaves[node.id].index}"
            )
        self._leaves[node.id] = node

    @property
    def sealed(self) -> bool:
        return self._sealed

    def seal(self) -> None:
        self._sealed = True

    def lookup(self, content_id: ContentId) -> Node:
        """
        Return the leaf registered under ``content_id``.

        Raises:
            LeafNotFoundException: If no genuine leaf carries this identifier
        """
        node = self._leaves.get(content_id)
        if node is None:
            raise LeafNotFoundException(content_id)
        return node

    def get(self, content_id: ContentId) -> Optional[Node]:
        """Non-raising variant of lookup()."""
        return self._leaves.get(content_id)

    def ids(self) -> list[ContentId]:
        """Registered identifiers in registration order."""
        return list(self._leaves)

    def __contains__(self, content_id: object) -> bool:
        return content_id in self._leaves

    def __len__(self) -> int:
        return len(self._leaves)

    def __iter__(self) -> Iterator[ContentId]:
        return iter(self._leaves)
