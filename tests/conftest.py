"""
Pytest configuration and shared fixtures for cidtree tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent

if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from cidtree.config.runtime import set_default_config
from cidtree.crypto.hashing import sha256_hex
from cidtree.merkle import build_tree
from cidtree.store.local import LocalContentStore


_CIDTREE_ENV_VARS = [
    "CIDTREE_STORE_BACKEND",
    "CIDTREE_IPFS_API_URL",
    "CIDTREE_STORE_TIMEOUT",
    "CIDTREE_HTTP_PROXY",
    "CIDTREE_MAX_WORKERS",
    "CIDTREE_HASH_TIMEOUT",
    "CIDTREE_LOG_LEVEL",
    "CIDTREE_LOG_FILE",
]


# =============================================================================
# Factories
# =============================================================================

def make_leaf_ids(count: int, prefix: str = "leaf") -> list[str]:
    """Deterministic hex leaf identifiers."""
    return [sha256_hex(f"{prefix}{i}".encode()) for i in range(count)]


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate tests from CIDTREE_* variables in the developer's environment."""
    for name in _CIDTREE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    set_default_config(None)
    yield
    set_default_config(None)


@pytest.fixture
def abc_tree():
    """Tree over the opaque identifiers a, b, c."""
    return build_tree(["a", "b", "c"])


@pytest.fixture
def leaf_ids():
    """Seven deterministic leaf identifiers (odd count exercises padding twice)."""
    return make_leaf_ids(7)


@pytest.fixture
def local_store():
    return LocalContentStore()


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
