"""
CLI Configuration

Locates and loads the runtime configuration for the command-line harness.
Environment variables override file settings.
"""

from __future__ import annotations

import logging
from pathlib import Path

from cidtree.config.runtime import RuntimeConfig


logger = logging.getLogger(__name__)


def default_config_paths() -> list[Path]:
    """Locations searched when no --config is given, in priority order."""
    return [
        Path.cwd() / "cidtree.yaml",
        Path.cwd() / ".cidtree.yaml",
        Path.home() / ".config" / "cidtree" / "config.yaml",
    ]


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Args:
        config_path: Explicit config file; must exist if given

    Returns:
        Merged configuration
    """
    if config_path is not None:
        return RuntimeConfig.from_yaml(config_path).with_env_overrides()

    for default_path in default_config_paths():
        if default_path.exists():
            logger.debug(f"Loading configuration from {default_path}")
            return RuntimeConfig.from_yaml(default_path).with_env_overrides()

    return RuntimeConfig.from_env()
