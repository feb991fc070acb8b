"""
Module 04 - Merkle Allowlist CLI

Command-line interface over the Merkle allowlist core.

Usage:
    python -m merkle_cli root --file whitelist.json
    python -m merkle_cli proof 0x3 0x1 0x2 0x3 0x4 0x5
    python -m merkle_cli verify 0x3 --proof-file proof.json
    python -m merkle_cli config --show
"""

__version__ = "0.1.0"
