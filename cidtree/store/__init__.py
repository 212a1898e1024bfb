"""
Content Store Module

Content-addressable storage backends consumed by the ingestion layer.
"""

from __future__ import annotations

import logging

from cidtree.config.runtime import StoreConfig

from .base import ContentStore
from .ipfs import IpfsContentStore
from .local import LocalContentStore


logger = logging.getLogger(__name__)


def create_content_store(config: StoreConfig) -> ContentStore:
    """Instantiate the content store backend named in ``config``."""
    if config.backend == "ipfs":
        logger.info(f"Using IPFS content store at {config.api_url}")
        return IpfsContentStore(
            config.api_url,
            timeout=config.timeout,
            proxy=config.proxy,
        )
    if config.backend == "local":
        logger.info("Using in-memory content store")
        return LocalContentStore()
    raise ValueError(f"Unknown store backend: {config.backend!r}")


__all__ = [
    "ContentStore",
    "IpfsContentStore",
    "LocalContentStore",
    "create_content_store",
]
