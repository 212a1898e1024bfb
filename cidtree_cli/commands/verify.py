"""
CLI Verify Command

Build the tree from the given inputs, look up one leaf and recompute the
root from its position and sibling path.

Usage:
    cidtree verify --data a --data b --data c --leaf-data a [--root <cid>] [--json] [--debug]
    cidtree verify --id <cid1> --id <cid2> --leaf <cid1>

Exit codes:
    0  recomputed root equals the expected root
    1  runtime error
    2  leaf absent or root mismatch
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

from cidtree.ingest import build_tree_from_inputs, hash_inputs
from cidtree.merkle import MerkleTree
from cidtree.schemas.errors import ErrorCodes, LeafNotFoundException
from cidtree.schemas.inputs import LiteralInput, PathInput
from cidtree.store import ContentStore
from cidtree_cli.inputs import ingest_options, open_store


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class VerifySummary:
    """Summary of a leaf verification for CLI output."""
    leaf: str = ""
    present: bool = False
    recomputed_root: str = ""
    expected_root: str = ""
    tree_root: str = ""
    path: list[dict[str, str]] = field(default_factory=list)
    errors: list[dict[str, Any]] = field(default_factory=list)

    @property
    def verified(self) -> bool:
        return self.present and self.recomputed_root == self.expected_root

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["verified"] = self.verified
        if not d["path"]:
            del d["path"]
        if not d["errors"]:
            del d["errors"]
        return d


def resolve_leaf_id(args: Namespace, store: ContentStore, config) -> str:
    """Turn --leaf / --leaf-data / --leaf-file into a content identifier."""
    if args.leaf:
        return args.leaf
    if args.leaf_data is not None:
        item = LiteralInput.from_text(args.leaf_data)
    else:
        item = PathInput(path=Path(args.leaf_file))
    return hash_inputs([item], store, **ingest_options(config))[0]


def verify_in_tree(
    tree: MerkleTree,
    leaf_id: str,
    expected_root: Optional[str] = None,
    debug: bool = False,
) -> VerifySummary:
    summary = VerifySummary(
        leaf=leaf_id,
        tree_root=tree.root_id,
        expected_root=expected_root or tree.root_id,
    )

    try:
        leaf = tree.lookup(leaf_id)
    except LeafNotFoundException as e:
        summary.errors.append(e.to_error_model().model_dump())
        return summary

    summary.present = True
    summary.recomputed_root = tree.verify(leaf)
    if debug:
        summary.path = [
            {"sibling": step.sibling, "side": step.side}
            for step in tree.proof_path(leaf)
        ]
    if summary.recomputed_root != summary.expected_root:
        summary.errors.append({
            "code": ErrorCodes.ROOT_MISMATCH,
            "message": "Recomputed root does not match expected root",
        })
    return summary


def print_summary_human(summary: VerifySummary) -> None:
    print(f"leaf: {summary.leaf}")
    print(f"present: {str(summary.present).lower()}")
    if summary.present:
        print(f"recomputed_root: {summary.recomputed_root}")
    print(f"expected_root: {summary.expected_root}")
    print(f"verified: {str(summary.verified).lower()}")

    if summary.path:
        print(f"\npath ({len(summary.path)} steps):")
        for step in summary.path:
            print(f"  {step['side']:>5}  {step['sibling']}")

    if summary.errors:
        print(f"\nerrors ({len(summary.errors)}):")
        for err in summary.errors:
            print(f"  ✗ {err['code']}: {err['message']}")


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    inputs = args.inputs or []
    if not inputs:
        print("Error: at least one --data, --file or --id input is required", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    config = args.runtime_config
    with open_store(config) as store:
        tree = build_tree_from_inputs(inputs, store, **ingest_options(config))
        leaf_id = resolve_leaf_id(args, store, config)

    summary = verify_in_tree(tree, leaf_id, expected_root=args.root, debug=args.debug)

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    if summary.verified:
        logger.info("Verification passed")
        return EXIT_SUCCESS

    logger.warning("Verification failed")
    return EXIT_VERIFICATION_FAILED
