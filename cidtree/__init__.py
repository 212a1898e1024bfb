"""
cidtree - Merkle trees over content identifiers.

Builds an authenticated binary hash tree over an ordered list of content
identifiers and verifies leaf inclusion by recomputing the root from a
leaf's position and sibling path.

Usage:
    from cidtree import build_tree

    tree = build_tree(["a", "b", "c"])
    assert tree.verify(tree.lookup("a")) == tree.root_id
"""

from cidtree.crypto.hashing import ContentId, combine_hash, content_hash
from cidtree.ingest import build_tree_from_inputs, hash_inputs
from cidtree.merkle import (
    LeafRegistry,
    MerkleTree,
    Node,
    NodeStore,
    ProofStep,
    build_tree,
    fold_proof,
    render_tree,
    verify_leaf,
)
from cidtree.schemas.errors import (
    CidTreeException,
    ContentStoreException,
    EmptyInputException,
    LeafNotFoundException,
)
from cidtree.schemas.inputs import IdInput, LiteralInput, PathInput

__version__ = "0.1.0"

__all__ = [
    "ContentId",
    "combine_hash",
    "content_hash",
    "build_tree_from_inputs",
    "hash_inputs",
    "LeafRegistry",
    "MerkleTree",
    "Node",
    "NodeStore",
    "ProofStep",
    "build_tree",
    "fold_proof",
    "render_tree",
    "verify_leaf",
    "CidTreeException",
    "ContentStoreException",
    "EmptyInputException",
    "LeafNotFoundException",
    "IdInput",
    "LiteralInput",
    "PathInput",
]
