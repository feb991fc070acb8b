"""
Core cryptographic utilities.

Module 01 provides keccak-256 hashing and hex helpers.
"""
from .hashing import (
    HASH_SIZE,
    keccak256,
    encode_domain_value,
    hash_leaf,
    hash_sorted_pair,
    to_hex,
    from_hex,
    to_move_hex,
    normalize_address,
    is_evm_address,
)

__all__ = [
    "HASH_SIZE",
    "keccak256",
    "encode_domain_value",
    "hash_leaf",
    "hash_sorted_pair",
    "to_hex",
    "from_hex",
    "to_move_hex",
    "normalize_address",
    "is_evm_address",
]
