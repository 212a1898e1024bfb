"""
Module 03 - Merkle Tree
A built tree: its arena, its leaf registry and its root, kept together.

Usage:
    from cidtree.merkle import build_tree

    tree = build_tree(["a", "b", "c"])
    leaf = tree.lookup("a")
    assert tree.verify(leaf) == tree.root_id
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

from cidtree.crypto.hashing import ContentId
from cidtree.merkle.node_store import Node, NodeStore
from cidtree.merkle.registry import LeafRegistry
from cidtree.merkle.tree_builder import TreeBuilder
from cidtree.merkle.verifier import ProofStep, build_proof_path, verify_leaf


logger = logging.getLogger(__name__)


class MerkleTree:
    """
    Immutable view over a built tree.

    Each instance owns its own store and registry, so independent trees
    never share lookup state.
    """

    def __init__(
        self,
        store: NodeStore,
        registry: LeafRegistry,
        root: Node,
        leaf_ids: Sequence[ContentId] = (),
    ) -> None:
        self._store = store
        self._registry = registry
        self._root = root
        self._leaf_ids = tuple(leaf_ids)

    @classmethod
    def build(cls, leaf_ids: Sequence[ContentId]) -> "MerkleTree":
        """
        Build a tree from ordered leaf identifiers.

        Raises:
            EmptyInputException: If leaf_ids is empty
        """
        store = NodeStore()
        registry = LeafRegistry()
        root = TreeBuilder(store, registry).build(leaf_ids)
        return cls(store, registry, root, leaf_ids)

    @property
    def root(self) -> Node:
        return self._root

    @property
    def root_id(self) -> ContentId:
        return self._root.id

    @property
    def store(self) -> NodeStore:
        return self._store

    @property
    def registry(self) -> LeafRegistry:
        return self._registry

    @property
    def leaf_ids(self) -> tuple[ContentId, ...]:
        """Leaf identifiers in build order, duplicates included."""
        return self._leaf_ids

    @property
    def leaf_count(self) -> int:
        """Number of distinct registered leaf identifiers."""
        return len(self._registry)

    def lookup(self, content_id: ContentId) -> Node:
        """
        Resolve a leaf identifier to its node.

        Raises:
            LeafNotFoundException: If the identifier was never ingested as a leaf
        """
        return self._registry.lookup(content_id)

    def get(self, content_id: ContentId) -> Optional[Node]:
        return self._registry.get(content_id)

    def node(self, index: int) -> Node:
        return self._store.get(index)

    def parent_of(self, node: Node) -> Optional[Node]:
        return self._store.parent_of(node)

    def children_of(self, node: Node) -> Optional[tuple[Node, Node]]:
        return self._store.children_of(node)

    def verify(self, leaf: Node) -> ContentId:
        """Recompute the root identifier from ``leaf``'s position and sibling path."""
        return verify_leaf(self._store, leaf)

    def verify_inclusion(
        self,
        content_id: ContentId,
        expected_root: Optional[ContentId] = None,
    ) -> bool:
        """
        Look up ``content_id`` and check that it recomputes the expected root.

        Args:
            content_id: Leaf identifier to check
            expected_root: Root to compare against (defaults to this tree's root)

        Returns:
            True if the recomputed root equals the expected root

        Raises:
            LeafNotFoundException: If the identifier was never ingested as a leaf
        """
        leaf = self.lookup(content_id)
        expected = expected_root if expected_root is not None else self.root_id
        recomputed = self.verify(leaf)
        ok = recomputed == expected
        if ok:
            logger.info(f"Leaf {content_id} verified against root {expected}")
        else:
            logger.warning(
                f"Leaf {content_id} recomputes root {recomputed}, expected {expected}"
            )
        return ok

    def proof_path(self, leaf: Node) -> list[ProofStep]:
        """Sibling path of ``leaf`` from the bottom level up to the root."""
        return build_proof_path(self._store, leaf)

    def __len__(self) -> int:
        return len(self._store)

    def __repr__(self) -> str:
        return f"MerkleTree(root={self.root_id!r}, leaves={self.leaf_count}, nodes={len(self)})"


def build_tree(leaf_ids: Sequence[ContentId]) -> MerkleTree:
    """Build a MerkleTree from ordered leaf identifiers."""
    return MerkleTree.build(leaf_ids)
