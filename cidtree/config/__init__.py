"""
Runtime Configuration Module

Provides configuration loading and management for cidtree.
"""

from .runtime import (
    DEFAULT_IPFS_API_URL,
    STORE_BACKENDS,
    IngestConfig,
    LoggingConfig,
    RuntimeConfig,
    StoreConfig,
    get_default_config,
    get_default_config_template,
    set_default_config,
)

__all__ = [
    "DEFAULT_IPFS_API_URL",
    "STORE_BACKENDS",
    "IngestConfig",
    "LoggingConfig",
    "RuntimeConfig",
    "StoreConfig",
    "get_default_config",
    "get_default_config_template",
    "set_default_config",
]
