"""
Diagnostic tree rendering.

Pre-order, left subtree before right, four spaces per level.
"""
from __future__ import annotations

from cidtree.merkle.tree import MerkleTree


INDENT = "    "


def render_tree(tree: MerkleTree) -> str:
    """Return the tree as indented text, one identifier per line."""
    lines: list[str] = []
    stack = [(tree.root, 0)]
    while stack:
        node, depth = stack.pop()
        lines.append(f"{INDENT * depth}{node.id}")
        children = tree.children_of(node)
        if children is not None:
            left, right = children
            stack.append((right, depth + 1))
            stack.append((left, depth + 1))
    return "\n".join(lines)
