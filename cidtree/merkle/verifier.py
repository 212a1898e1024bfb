"""
Module 03 - Proof Verifier
Recomputes the root identifier by walking from a leaf to the root.

Verification Rules (Hard Contracts):
1. Start from the leaf's own identifier
2. At each parent: current is the left child -> combine_hash(current, sibling)
                   current is the right child -> combine_hash(sibling, current)
3. Stop at the node with no parent and return the running hash
4. combine_hash and its operand order are shared with the tree builder

The returned identifier equals the tree root only if the leaf is present,
unmodified, and at its recorded position. Comparing the two is up to the
caller.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Sequence

from cidtree.crypto.hashing import ContentId, combine_hash
from cidtree.merkle.node_store import Node, NodeStore


logger = logging.getLogger(__name__)


Side = Literal["left", "right"]


@dataclass(frozen=True)
class ProofStep:
    """
    One step of a sibling path.

    Attributes:
        sibling: Identifier of the sibling node at this level
        side: Which side of the pair the sibling occupies
    """
    sibling: ContentId
    side: Side


def verify_leaf(store: NodeStore, leaf: Node) -> ContentId:
    """
    Walk parent links from ``leaf`` and return the recomputed root identifier.

    Args:
        store: Arena that owns ``leaf``
        leaf: A node obtained from the tree's LeafRegistry

    Returns:
        Recomputed root identifier
    """
    if not store.owns(leaf):
        raise ValueError(f"Node {leaf.index} does not belong to this tree")

    current = leaf
    current_hash = leaf.id
    level = 0

    while current.parent is not None:
        parent = store.get(current.parent)
        if parent.left == current.index:
            sibling = store.get(parent.right)
            combined = combine_hash(current_hash, sibling.id)
        else:
            sibling = store.get(parent.left)
            combined = combine_hash(sibling.id, current_hash)

        level += 1
        logger.debug(
            f"Level {level}: current={current_hash} sibling={sibling.id} combined={combined}"
        )
        current_hash = combined
        current = parent

    return current_hash


def build_proof_path(store: NodeStore, leaf: Node) -> list[ProofStep]:
    """
    Collect the sibling path of ``leaf``, bottom-up.

    The path can be replayed with fold_proof() without access to the tree.
    """
    if not store.owns(leaf):
        raise ValueError(f"Node {leaf.index} does not belong to this tree")

    steps: list[ProofStep] = []
    current = leaf
    while current.parent is not None:
        parent = store.get(current.parent)
        if parent.left == current.index:
            steps.append(ProofStep(sibling=store.get(parent.right).id, side="right"))
        else:
            steps.append(ProofStep(sibling=store.get(parent.left).id, side="left"))
        current = parent
    return steps


def fold_proof(leaf_id: ContentId, steps: Sequence[ProofStep]) -> ContentId:
    """
    Recompute a root identifier from a leaf identifier and its sibling path.

    Example:
        >>> steps = [ProofStep("b", "right")]
        >>> fold_proof("a", steps) == combine_hash("a", "b")
        True
    """
    current_hash = leaf_id
    for step in steps:
        if step.side == "right":
            current_hash = combine_hash(current_hash, step.sibling)
        else:
            current_hash = combine_hash(step.sibling, current_hash)
    return current_hash
