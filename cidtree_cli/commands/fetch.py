"""
CLI Fetch Command

Retrieve content from the configured store by identifier.

Usage:
    cidtree fetch <cid> [--out PATH]
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace
from pathlib import Path

from cidtree.schemas.errors import ContentStoreException
from cidtree_cli.inputs import open_store


logger = logging.getLogger(__name__)


EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def fetch_cmd(args: Namespace) -> int:
    """Execute the fetch command."""
    config = args.runtime_config
    try:
        with open_store(config) as store:
            data = store.fetch(args.content_id)
    except ContentStoreException as e:
        print(f"Error fetching {args.content_id}: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.out:
        out_path = Path(args.out)
        out_path.write_bytes(data)
        logger.info(f"Wrote {len(data)} bytes to {out_path}")
    else:
        sys.stdout.buffer.write(data)
        sys.stdout.flush()

    return EXIT_SUCCESS
