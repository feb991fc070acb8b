"""
Pytest configuration and shared fixtures for Merkle allowlist tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
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

from merkle_core.config.runtime import RuntimeConfig  # noqa: E402


# Hardhat default signer addresses
DEPLOY_ADDRESSES = [
    "0x70997970C51812dc3A010C7d01b50e0d17dc79C8",
    "0x90F79bf6EB2c4f870365E785982E1f101E93b906",
    "0x15d34AAf54267DB7D7c367839AAf71A00a2C6A65",
    "0x9965507D1a55bcC2695C58ba16FB37d819B0A4dc",
    "0x976EA74026E726554dB657fA54763abd0C3a0aa9",
]

SHORT_ADDRESSES = ["0x1", "0x2", "0x3", "0x4", "0x5"]


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def deploy_addresses():
    """Checksummed addresses, lower-cased as the caller would before building."""
    return [a.lower() for a in DEPLOY_ADDRESSES]


@pytest.fixture
def short_addresses():
    return list(SHORT_ADDRESSES)


@pytest.fixture(autouse=True)
def clean_merkle_env(monkeypatch):
    """Keep MERKLE_* variables from the developer's shell out of tests."""
    for name in (
        "MERKLE_SORT_LEAVES",
        "MERKLE_LOWERCASE",
        "MERKLE_LOG_LEVEL",
        "MERKLE_LOG_FILE",
        "MERKLE_OUTPUT_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def default_config():
    return RuntimeConfig()
