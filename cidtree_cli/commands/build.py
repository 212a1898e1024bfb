"""
CLI Build Command

Hash the given inputs, build the tree and print its root.

Usage:
    cidtree build --data hello --file notes.txt --id <cid> [--tree] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from typing import Any

from cidtree.ingest import build_tree_from_inputs
from cidtree.merkle import MerkleTree, compute_tree_depth, render_tree
from cidtree_cli.inputs import ingest_options, open_store


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


@dataclass
class BuildSummary:
    """Summary of a tree build for CLI output."""
    root: str = ""
    leaf_count: int = 0
    node_count: int = 0
    depth: int = 0
    leaves: list[str] = field(default_factory=list)
    tree: str = ""

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if not d["tree"]:
            del d["tree"]
        return d


def build_summary(tree: MerkleTree, leaves: list[str], show_tree: bool = False) -> BuildSummary:
    return BuildSummary(
        root=tree.root_id,
        leaf_count=len(leaves),
        node_count=len(tree),
        depth=compute_tree_depth(len(leaves)),
        leaves=leaves,
        tree=render_tree(tree) if show_tree else "",
    )


def print_summary_human(summary: BuildSummary) -> None:
    print(f"root: {summary.root}")
    print(f"leaves: {summary.leaf_count}")
    print(f"nodes: {summary.node_count}")
    print(f"depth: {summary.depth}")
    for i, leaf in enumerate(summary.leaves):
        print(f"  [{i}] {leaf}")
    if summary.tree:
        print()
        print(summary.tree)


def build_cmd(args: Namespace) -> int:
    """
    Execute the build command.

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

    leaves = list(tree.leaf_ids)
    summary = build_summary(tree, leaves, show_tree=args.tree)

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    return EXIT_SUCCESS
