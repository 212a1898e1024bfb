"""
Module 03 - Node Store
Arena that owns every node of a single tree.

Nodes reference each other by integer index into the arena instead of by
object reference, so parent and child links never form ownership cycles.

Lifecycle:
1. The tree builder creates leaves, padding nodes and parents
2. The builder seals the store once the root exists
3. After sealing the store is read-only; create/link calls raise
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from cidtree.crypto.hashing import ContentId
from cidtree.schemas.errors import TreeSealedException


@dataclass
class Node:
    """
    One vertex of the tree.

    Attributes:
        index: Position of this node in its NodeStore
        id: Leaf identifier, or combine_hash(left.id, right.id) for internal nodes
        left: Arena index of the left child (None for leaves)
        right: Arena index of the right child (None for leaves)
        parent: Arena index of the parent (None for the root)
    """
    index: int
    id: ContentId
    left: Optional[int] = None
    right: Optional[int] = None
    parent: Optional[int] = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    @property
    def is_root(self) -> bool:
        return self.parent is None


class NodeStore:
    """
    Indexed arena of nodes.

    Usage:
        store = NodeStore()
        a = store.create("a")
        b = store.create("b")
        root = store.link(store.create("ab"), a, b)
        store.seal()
    """

    def __init__(self) -> None:
        self._nodes: list[Node] = []
        self._sealed = False

    @property
    def sealed(self) -> bool:
        return self._sealed

    def seal(self) -> None:
        """Freeze the arena; no further nodes or links are accepted."""
        self._sealed = True

    def _check_open(self) -> None:
        if self._sealed:
            raise TreeSealedException()

    def create(self, content_id: ContentId) -> Node:
        """Append a new childless, parentless node and return it."""
        self._check_open()
        node = Node(index=len(self._nodes), id=content_id)
        self._nodes.append(node)
        return node

    def link(self, parent: Node, left: Node, right: Node) -> Node:
        """
        Attach ``left`` and ``right`` as the children of ``parent``.

        Both children must be parentless and distinct, and ``parent`` must
        not have children yet; this keeps every node at zero or two children
        and every child under exactly one parent.

        Returns:
            The parent node
        """
        self._check_open()
        if left.index == right.index:
            raise ValueError("A node cannot be both children of the same parent")
        if not parent.is_leaf:
            raise ValueError(f"Node {parent.index} already has children")
        for child in (left, right):
            if child.parent is not None:
                raise ValueError(f"Node {child.index} already has a parent")
            if child.index == parent.index:
                raise ValueError("A node cannot be its own child")

        parent.left = left.index
        parent.right = right.index
        left.parent = parent.index
        right.parent = parent.index
        return parent

    def get(self, index: int) -> Node:
        """Return the node at ``index``."""
        if index < 0 or index >= len(self._nodes):
            raise IndexError(f"Node index {index} out of range for {len(self._nodes)} nodes")
        return self._nodes[index]

    def parent_of(self, node: Node) -> Optional[Node]:
        if node.parent is None:
            return None
        return self._nodes[node.parent]

    def children_of(self, node: Node) -> Optional[tuple[Node, Node]]:
        if node.left is None or node.right is None:
            return None
        return self._nodes[node.left], self._nodes[node.right]

    def owns(self, node: Node) -> bool:
        """True if ``node`` is the very node stored at its index in this arena."""
        return 0 <= node.index < len(self._nodes) and self._nodes[node.index] is node

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)
