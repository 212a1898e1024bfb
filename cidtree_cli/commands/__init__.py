"""
CLI command modules.
"""

from cidtree_cli.commands import build, fetch, verify

__all__ = ["build", "fetch", "verify"]
