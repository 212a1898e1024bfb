"""
cidtree CLI

Command-line interface for building and verifying Merkle trees over
content identifiers.

Usage:
    python -m cidtree_cli build --data a --data b --data c
    python -m cidtree_cli verify --data a --data b --data c --leaf-data a
    python -m cidtree_cli fetch <cid>
"""

__version__ = "0.1.0"
