"""
Module 03 - Tree Builder
Level-by-level Merkle tree construction over ordered leaf identifiers.

Construction Rules (Hard Contracts):
1. Leaf order is preserved; it fixes every left/right position
2. Padding: an odd-sized level gets a copy of its last node appended
   (the copy is not registered as a leaf)
3. Parent identifier: combine_hash(left.id, right.id)
4. Single leaf: the root is the leaf itself, no combine call
5. Empty input: EmptyInputException

Example: [a, b, c] -> [a, b, c, c'] -> [h(a,b), h(c,c)] -> [h(h(a,b), h(c,c))]
"""
from __future__ import annotations

import logging
from typing import Sequence

from cidtree.crypto.hashing import ContentId, combine_hash
from cidtree.merkle.node_store import Node, NodeStore
from cidtree.merkle.registry import LeafRegistry
from cidtree.schemas.errors import EmptyInputException


logger = logging.getLogger(__name__)


class TreeBuilder:
    """
    Builds one tree into a NodeStore and populates its LeafRegistry.

    A builder is single-use: build() seals both the store and the registry.
    """

    def __init__(self, store: NodeStore, registry: LeafRegistry) -> None:
        self.store = store
        self.registry = registry

    def build(self, leaf_ids: Sequence[ContentId]) -> Node:
        """
        Build the tree and return its root node.

        Args:
            leaf_ids: Ordered leaf identifiers

        Returns:
            Root node

        Raises:
            EmptyInputException: If leaf_ids is empty
        """
        if len(leaf_ids) == 0:
            raise EmptyInputException()

        current_level = self._ingest(leaf_ids)
        depth = 0

        while len(current_level) > 1:
            if len(current_level) % 2 == 1:
                current_level.append(self._pad(current_level[-1]))

            current_level = self._reduce(current_level)
            depth += 1
            logger.debug(f"Level {depth}: {len(current_level)} node(s)")

        root = current_level[0]
        self.store.seal()
        self.registry.seal()

        logger.info(
            f"Built tree over {len(leaf_ids)} leaves "
            f"(depth={depth}, nodes={len(self.store)}): root={root.id}"
        )
        return root

    def _ingest(self, leaf_ids: Sequence[ContentId]) -> list[Node]:
        level: list[Node] = []
        for content_id in leaf_ids:
            node = self.store.create(content_id)
            self.registry.register(node)
            level.append(node)
        return level

    def _pad(self, last: Node) -> Node:
        pad = self.store.create(last.id)
        logger.debug(f"Padding odd level with duplicate of {last.id}")
        return pad

    def _reduce(self, level: list[Node]) -> list[Node]:
        next_level: list[Node] = []
        for i in range(0, len(level), 2):
            left, right = level[i], level[i + 1]
            parent = self.store.create(combine_hash(left.id, right.id))
            self.store.link(parent, left, right)
            next_level.append(parent)
        return next_level


def count_nodes(leaf_count: int) -> int:
    """
    Number of nodes (leaves, pads and parents) a build over ``leaf_count``
    leaves creates.
    """
    if leaf_count < 1:
        raise ValueError("leaf_count must be positive")

    total = leaf_count
    size = leaf_count
    while size > 1:
        if size % 2 == 1:
            size += 1
            total += 1
        size //= 2
        total += size
    return total


def compute_tree_depth(leaf_count: int) -> int:
    """Number of combine levels between the leaves and the root."""
    if leaf_count < 1:
        raise ValueError("leaf_count must be positive")

    depth = 0
    size = leaf_count
    while size > 1:
        size = (size + 1) // 2
        depth += 1
    return depth
