"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m cidtree_cli build --data a --data b --file notes.txt [--tree] [--json]
    python -m cidtree_cli verify --data a --data b --leaf-data a [--root CID] [--json] [--debug]
    python -m cidtree_cli fetch <cid> [--out PATH]
    python -m cidtree_cli config --init | --show

Environment Variables:
    CIDTREE_STORE_BACKEND       Content store backend: local, ipfs (default: local)
    CIDTREE_IPFS_API_URL        IPFS HTTP API URL (default: http://127.0.0.1:5001)
    CIDTREE_MAX_WORKERS         Concurrent hashing workers (default: 8)
    CIDTREE_HASH_TIMEOUT        Per-input hashing timeout in seconds (default: 60)
    CIDTREE_LOG_LEVEL           Log level (default: INFO)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from cidtree.config.runtime import get_default_config_template
from cidtree.schemas.errors import CidTreeException
from cidtree_cli import __version__
from cidtree_cli.commands import build, fetch, verify
from cidtree_cli.config import load_config
from cidtree_cli.inputs import add_input_arguments


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="cidtree",
        description="Build Merkle trees over content identifiers and verify leaf inclusion.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: ./cidtree.yaml or ~/.config/cidtree/config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- build command ---
    build_parser = subparsers.add_parser(
        "build",
        help="Hash inputs and build a Merkle tree",
        description="Hash every input through the content store and print the tree root.",
    )
    add_input_arguments(build_parser)
    build_parser.add_argument(
        "--tree",
        action="store_true",
        default=False,
        help="Print the full tree, one node per line",
    )
    build_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    build_parser.set_defaults(func=build.build_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify that a leaf is included in the tree",
        description="Build the tree, look up one leaf and recompute the root from its sibling path.",
    )
    add_input_arguments(verify_parser)
    leaf_group = verify_parser.add_mutually_exclusive_group(required=True)
    leaf_group.add_argument(
        "--leaf",
        type=str,
        help="Identifier of the leaf to verify",
    )
    leaf_group.add_argument(
        "--leaf-data",
        type=str,
        help="Literal text whose identifier is the leaf to verify",
    )
    leaf_group.add_argument(
        "--leaf-file",
        type=str,
        help="File whose identifier is the leaf to verify",
    )
    verify_parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Expected root identifier (default: the root of the tree just built)",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON report",
    )
    verify_parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Include the sibling path in the output",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- fetch command ---
    fetch_parser = subparsers.add_parser(
        "fetch",
        help="Retrieve content by identifier",
        description="Fetch content from the configured content store.",
    )
    fetch_parser.add_argument(
        "content_id",
        type=str,
        help="Content identifier to fetch",
    )
    fetch_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write content to this file instead of stdout",
    )
    fetch_parser.set_defaults(func=fetch.fetch_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="cidtree.yaml",
        help="Path for config file (default: cidtree.yaml)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (CIDTREE_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.runtime_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: cidtree config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.logging.level
    setup_logging(level=log_level, log_file=config.logging.file)

    # Attach config to args for commands to use
    args.runtime_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except CidTreeException as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
