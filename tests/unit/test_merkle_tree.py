"""
Merkle Tree Unit Tests
Tests for cidtree/merkle/tree_builder.py and cidtree/merkle/tree.py

Covered:
1. Root determinism - same leaves -> same root across runs
2. Padding correctness - odd leaf count uses "duplicate last" rule
3. Single leaf - root equals leaf
4. Empty input - EmptyInputException
5. Position sensitivity and avalanche
6. Padding nodes are never registered
"""
import pytest

from cidtree.crypto.hashing import combine_hash, sha256_hex
from cidtree.merkle import (
    MerkleTree,
    build_tree,
    compute_tree_depth,
    count_nodes,
)
from cidtree.schemas.errors import (
    EmptyInputException,
    ErrorCodes,
    LeafNotFoundException,
    TreeSealedException,
)


def make_ids(count: int) -> list[str]:
    return [sha256_hex(f"leaf{i}".encode()) for i in range(count)]


class TestEmptyInput:
    """Tests for empty input behavior."""

    def test_empty_leaves_raises(self):
        with pytest.raises(EmptyInputException) as exc_info:
            build_tree([])

        assert exc_info.value.code == ErrorCodes.EMPTY_INPUT

    def test_empty_tuple_raises(self):
        with pytest.raises(EmptyInputException):
            MerkleTree.build(())


class TestSingleLeaf:
    """Tests for single leaf tree behavior."""

    def test_single_leaf_root_equals_leaf(self):
        tree = build_tree(["x"])

        assert tree.root_id == "x"

    def test_single_leaf_root_is_registered_leaf(self):
        tree = build_tree(["x"])

        assert tree.lookup("x") is tree.root
        assert tree.root.is_leaf
        assert tree.root.is_root

    def test_single_leaf_creates_one_node(self):
        tree = build_tree(["x"])

        assert len(tree) == 1

    def test_single_leaf_verifies_to_itself(self):
        tree = build_tree(["x"])

        assert tree.verify(tree.lookup("x")) == "x"


class TestRootDeterminism:
    """Tests for deterministic root computation."""

    def test_same_leaves_same_root(self):
        leaves = make_ids(5)

        roots = [build_tree(leaves).root_id for _ in range(10)]

        assert all(r == roots[0] for r in roots)

    def test_root_deterministic_different_runs(self):
        root1 = build_tree(make_ids(6)).root_id
        root2 = build_tree(make_ids(6)).root_id

        assert root1 == root2

    def test_root_is_hex_digest(self):
        root = build_tree(make_ids(4)).root_id

        assert len(root) == 64
        int(root, 16)


class TestPaddingCorrectness:
    """Tests for odd-number padding behavior."""

    def test_concrete_vector_abc(self):
        """[a, b, c] -> [a, b, c, c] -> [h(a,b), h(c,c)] -> root."""
        h1 = combine_hash("a", "b")
        h2 = combine_hash("c", "c")
        expected_root = combine_hash(h1, h2)

        tree = build_tree(["a", "b", "c"])

        assert tree.root_id == expected_root

    def test_padding_rule_five_leaves(self):
        """Five leaves pad at two levels."""
        a, b, c, d, e = make_ids(5)

        # Level 0: [a, b, c, d, e, e]
        # Level 1: [ab, cd, ee] -> [ab, cd, ee, ee]
        # Level 2: [abcd, eeee]
        ab = combine_hash(a, b)
        cd = combine_hash(c, d)
        ee = combine_hash(e, e)
        expected_root = combine_hash(combine_hash(ab, cd), combine_hash(ee, ee))

        assert build_tree([a, b, c, d, e]).root_id == expected_root

    def test_even_leaves_no_padding_needed(self):
        a, b, c, d = make_ids(4)
        expected_root = combine_hash(combine_hash(a, b), combine_hash(c, d))

        tree = build_tree([a, b, c, d])

        assert tree.root_id == expected_root
        assert len(tree) == 7

    def test_two_leaves(self):
        tree = build_tree(["l", "r"])

        assert tree.root_id == combine_hash("l", "r")

    @pytest.mark.parametrize("count", [1, 2, 3, 4, 5, 7, 8, 9, 16, 17])
    def test_node_count_matches_formula(self, count):
        tree = build_tree(make_ids(count))

        assert len(tree) == count_nodes(count)

    def test_padding_node_not_registered(self):
        tree = build_tree(["a", "b", "c"])
        original_c = tree.lookup("c")

        # The store holds a second node carrying "c": the pad
        c_nodes = [n for n in tree.store if n.id == "c"]
        assert len(c_nodes) == 2

        pad = next(n for n in c_nodes if n is not original_c)
        assert tree.lookup("c") is original_c
        assert tree.lookup("c") is not pad
        assert len(tree.registry) == 3

    def test_padding_node_sits_right_of_original(self):
        tree = build_tree(["a", "b", "c"])
        original_c = tree.lookup("c")

        parent = tree.parent_of(original_c)
        left, right = tree.children_of(parent)

        assert left is original_c
        assert right.id == "c"
        assert right is not original_c


class TestSensitivity:
    """Tests for order and content sensitivity."""

    def test_leaf_order_matters(self):
        leaves = make_ids(3)
        reversed_leaves = list(reversed(leaves))

        assert build_tree(leaves).root_id != build_tree(reversed_leaves).root_id

    def test_swapping_adjacent_leaves_changes_root(self):
        leaves = make_ids(6)
        for i in range(len(leaves) - 1):
            swapped = list(leaves)
            swapped[i], swapped[i + 1] = swapped[i + 1], swapped[i]

            assert build_tree(swapped).root_id != build_tree(leaves).root_id

    def test_changing_any_leaf_changes_root(self):
        leaves = make_ids(9)
        original_root = build_tree(leaves).root_id

        for i in range(len(leaves)):
            altered = list(leaves)
            altered[i] = sha256_hex(f"tampered{i}".encode())

            assert build_tree(altered).root_id != original_root

    def test_different_leaves_different_roots(self):
        assert build_tree(["a", "b"]).root_id != build_tree(["x", "y"]).root_id


class TestRegistry:
    """Tests for registry lookups through the tree."""

    def test_every_leaf_registered(self):
        leaves = make_ids(7)
        tree = build_tree(leaves)

        for leaf_id in leaves:
            node = tree.lookup(leaf_id)
            assert node.id == leaf_id
            assert node.is_leaf

    def test_unknown_lookup_raises(self, abc_tree):
        with pytest.raises(LeafNotFoundException) as exc_info:
            abc_tree.lookup("zzz")

        assert exc_info.value.code == ErrorCodes.LEAF_NOT_FOUND
        assert exc_info.value.details["content_id"] == "zzz"

    def test_internal_node_id_not_registered(self, abc_tree):
        with pytest.raises(LeafNotFoundException):
            abc_tree.lookup(abc_tree.root_id)

    def test_get_returns_none_for_unknown(self, abc_tree):
        assert abc_tree.get("zzz") is None

    def test_duplicate_identifier_last_write_wins(self):
        tree = build_tree(["a", "b", "a", "c"])

        node = tree.lookup("a")

        assert node.index == 2
        assert len(tree.registry) == 3
        assert tree.leaf_ids == ("a", "b", "a", "c")

    def test_independent_trees_do_not_share_registry(self):
        first = build_tree(["a", "b"])
        second = build_tree(["c", "d"])

        assert "a" in first.registry
        assert "a" not in second.registry
        with pytest.raises(LeafNotFoundException):
            second.lookup("a")


class TestStructure:
    """Tests for arena invariants of a built tree."""

    @pytest.mark.parametrize("count", [1, 2, 3, 6, 11])
    def test_full_binary_and_parent_agreement(self, count):
        tree = build_tree(make_ids(count))

        roots = [n for n in tree.store if n.parent is None]
        assert roots == [tree.root]

        for node in tree.store:
            assert (node.left is None) == (node.right is None)
            if node.parent is not None:
                parent = tree.node(node.parent)
                assert (parent.left == node.index) != (parent.right == node.index)

    @pytest.mark.parametrize("count", [2, 3, 5, 8])
    def test_internal_ids_are_combined_children(self, count):
        tree = build_tree(make_ids(count))

        for node in tree.store:
            children = tree.children_of(node)
            if children is not None:
                left, right = children
                assert node.id == combine_hash(left.id, right.id)

    def test_store_and_registry_sealed_after_build(self, abc_tree):
        assert abc_tree.store.sealed
        assert abc_tree.registry.sealed

        with pytest.raises(TreeSealedException):
            abc_tree.registry.register(abc_tree.lookup("a"))

    def test_repr_mentions_root(self, abc_tree):
        assert abc_tree.root_id in repr(abc_tree)


class TestTreeShape:
    """Tests for depth/node-count helpers."""

    @pytest.mark.parametrize(
        "count,depth",
        [(1, 0), (2, 1), (3, 2), (4, 2), (5, 3), (8, 3), (9, 4)],
    )
    def test_compute_tree_depth(self, count, depth):
        assert compute_tree_depth(count) == depth

    def test_count_nodes_rejects_zero(self):
        with pytest.raises(ValueError):
            count_nodes(0)

    def test_depth_rejects_zero(self):
        with pytest.raises(ValueError):
            compute_tree_depth(0)
