"""
Proof Verifier Unit Tests
Tests for cidtree/merkle/verifier.py

Covered:
1. Completeness - every registered leaf recomputes the root
2. Concrete vector walk for ["a", "b", "c"]
3. Sibling path extraction and replay
4. Tamper detection via expected-root comparison
"""
import pytest

from cidtree.crypto.hashing import combine_hash, sha256_hex
from cidtree.merkle import (
    NodeStore,
    ProofStep,
    build_proof_path,
    build_tree,
    fold_proof,
    verify_leaf,
)
from cidtree.schemas.errors import LeafNotFoundException


def make_ids(count: int) -> list[str]:
    return [sha256_hex(f"leaf{i}".encode()) for i in range(count)]


class TestCompleteness:
    """Every leaf of a built tree verifies against its root."""

    @pytest.mark.parametrize("count", [1, 2, 3, 4, 5, 6, 7, 8, 13, 32, 33])
    def test_every_leaf_verifies(self, count):
        leaves = make_ids(count)
        tree = build_tree(leaves)

        for leaf_id in leaves:
            assert tree.verify(tree.lookup(leaf_id)) == tree.root_id, (
                f"Leaf {leaf_id} failed for {count} leaves"
            )

    def test_verify_inclusion_true_for_members(self, leaf_ids):
        tree = build_tree(leaf_ids)

        assert all(tree.verify_inclusion(leaf_id) for leaf_id in leaf_ids)


class TestConcreteVector:
    """Walk-through of the ["a", "b", "c"] example."""

    def test_verify_a(self, abc_tree):
        h1 = combine_hash("a", "b")
        h2 = combine_hash("c", "c")
        root = combine_hash(h1, h2)

        assert abc_tree.root_id == root
        assert abc_tree.verify(abc_tree.lookup("a")) == root

    def test_verify_b_uses_a_as_left_operand(self, abc_tree):
        assert abc_tree.verify(abc_tree.lookup("b")) == combine_hash(
            combine_hash("a", "b"), combine_hash("c", "c")
        )

    def test_verify_c_pairs_with_its_pad(self, abc_tree):
        assert abc_tree.verify(abc_tree.lookup("c")) == abc_tree.root_id

    def test_path_for_a(self, abc_tree):
        path = abc_tree.proof_path(abc_tree.lookup("a"))

        assert path == [
            ProofStep(sibling="b", side="right"),
            ProofStep(sibling=combine_hash("c", "c"), side="right"),
        ]

    def test_path_for_b(self, abc_tree):
        path = abc_tree.proof_path(abc_tree.lookup("b"))

        assert path[0] == ProofStep(sibling="a", side="left")


class TestProofPath:
    """Sibling paths replay to the same root as the upward walk."""

    @pytest.mark.parametrize("count", [2, 3, 5, 9, 16])
    def test_fold_matches_verify(self, count):
        leaves = make_ids(count)
        tree = build_tree(leaves)

        for leaf_id in leaves:
            leaf = tree.lookup(leaf_id)
            steps = tree.proof_path(leaf)
            assert fold_proof(leaf_id, steps) == tree.verify(leaf)

    def test_path_length_equals_depth(self):
        tree = build_tree(make_ids(9))

        assert len(tree.proof_path(tree.lookup(make_ids(9)[0]))) == 4

    def test_single_leaf_path_is_empty(self):
        tree = build_tree(["x"])

        assert tree.proof_path(tree.root) == []
        assert fold_proof("x", []) == "x"

    def test_fold_with_wrong_side_fails(self, abc_tree):
        steps = abc_tree.proof_path(abc_tree.lookup("a"))
        flipped = [ProofStep(sibling=steps[0].sibling, side="left")] + steps[1:]

        assert fold_proof("a", flipped) != abc_tree.root_id


class TestTamperDetection:
    """Recomputed roots disagree with foreign or tampered roots."""

    def test_leaf_against_other_tree_root(self):
        tree = build_tree(["a", "b", "c"])
        other = build_tree(["a", "b", "d"])

        assert not tree.verify_inclusion("a", expected_root=other.root_id)

    def test_unknown_leaf_raises(self, abc_tree):
        with pytest.raises(LeafNotFoundException):
            abc_tree.verify_inclusion("zzz")

    def test_verify_inclusion_with_explicit_matching_root(self, abc_tree):
        assert abc_tree.verify_inclusion("b", expected_root=abc_tree.root_id)


class TestVerifyLeafFunction:
    """Direct use of verify_leaf/build_proof_path with a store."""

    def test_verify_leaf_matches_method(self, abc_tree):
        leaf = abc_tree.lookup("c")

        assert verify_leaf(abc_tree.store, leaf) == abc_tree.verify(leaf)

    def test_foreign_node_rejected(self, abc_tree):
        foreign = NodeStore().create("a")
        foreign.index = 99

        with pytest.raises(ValueError, match="does not belong"):
            verify_leaf(abc_tree.store, foreign)

    def test_node_from_other_tree_rejected(self, abc_tree):
        other = build_tree(["a", "b", "c"])

        with pytest.raises(ValueError):
            build_proof_path(abc_tree.store, other.lookup("a"))

    def test_verification_logs_intermediate_hashes(self, abc_tree, caplog):
        with caplog.at_level("DEBUG", logger="cidtree.merkle.verifier"):
            abc_tree.verify(abc_tree.lookup("a"))

        assert combine_hash("a", "b") in caplog.text
