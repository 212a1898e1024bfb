"""
Module 03 - Merkle Tree over Content Identifiers
Tree construction, leaf lookup and inclusion verification.

This module provides:
- Node / NodeStore: arena-allocated tree vertices linked by index
- LeafRegistry: identifier -> leaf node lookup (genuine leaves only)
- TreeBuilder / build_tree: level-by-level construction with duplicate-last padding
- verify_leaf: upward walk recomputing the root identifier
- ProofStep / build_proof_path / fold_proof: detachable sibling paths
- render_tree: indented diagnostic dump

Usage:
    from cidtree.merkle import build_tree

    tree = build_tree(leaf_ids)
    leaf = tree.lookup(leaf_ids[0])
    assert tree.verify(leaf) == tree.root_id
"""
from .node_store import Node, NodeStore
from .registry import LeafRegistry
from .tree_builder import TreeBuilder, compute_tree_depth, count_nodes
from .verifier import ProofStep, build_proof_path, fold_proof, verify_leaf
from .tree import MerkleTree, build_tree
from .render import render_tree


__all__ = [
    # Arena
    "Node",
    "NodeStore",
    # Registry
    "LeafRegistry",
    # Construction
    "TreeBuilder",
    "MerkleTree",
    "build_tree",
    "compute_tree_depth",
    "count_nodes",
    # Verification
    "ProofStep",
    "verify_leaf",
    "build_proof_path",
    "fold_proof",
    # Diagnostics
    "render_tree",
]
