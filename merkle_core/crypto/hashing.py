"""
Module 01 - Hashing Utilities
Keccak-256 hashing and hex helpers for Merkle allowlist commitments.

Owner: Protocol/Crypto Engineer
Module ID: M01

This module provides:
- Keccak-256 hashing for raw bytes
- Domain value encoding (hex strings decode to bytes, other text to UTF-8)
- Leaf hashing and sorted-pair node hashing
- Hex encoding/decoding with 0x prefix

Security/Determinism Notes:
- Always hash raw bytes exactly as specified
- Domain values are NOT normalized here; lower-casing is the caller's job
- All operations are deterministic
"""
from __future__ import annotations

import re

from eth_utils import is_hex_address, keccak


# Width of every leaf, node and root hash
HASH_SIZE: int = 32

_HEX_VALUE_RE = re.compile(r"0x[0-9a-fA-F]*")


def keccak256(data: bytes) -> bytes:
    """
    Compute Keccak-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte Keccak-256 digest

    Example:
        >>> keccak256(b"").hex()
        'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
    """
    return keccak(primitive=data)


def encode_domain_value(value: str | bytes) -> bytes:
    """
    Encode a domain value into the bytes that get hashed into a leaf.

    Rules:
    - bytes are used unchanged
    - a string of the form 0x<hex digits> is hex-decoded; an odd number
      of digits is left-padded with a single "0" ("0x3" -> b"\\x03")
    - any other string is UTF-8 encoded

    Args:
        value: Address string, arbitrary text, or raw bytes

    Returns:
        Encoded bytes

    Raises:
        TypeError: If value is neither str nor bytes
    """
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if not isinstance(value, str):
        raise TypeError(
            f"Domain value must be str or bytes, got {type(value).__name__}"
        )

    if _HEX_VALUE_RE.fullmatch(value):
        digits = value[2:]
        if len(digits) % 2 == 1:
            digits = "0" + digits
        return bytes.fromhex(digits)

    return value.encode("utf-8")


def hash_leaf(value: str | bytes) -> bytes:
    """
    Hash a domain value into a Merkle leaf.

    Rule: leaf = keccak256(encode_domain_value(value))

    Args:
        value: Domain value (typically a lower-cased address string)

    Returns:
        32-byte leaf hash
    """
    return keccak256(encode_domain_value(value))


def hash_sorted_pair(a: bytes, b: bytes) -> bytes:
    """
    Hash two node hashes under the canonical ordering rule.

    The lexicographically smaller byte string is always placed first,
    so hash_sorted_pair(a, b) == hash_sorted_pair(b, a).

    Args:
        a: First child hash
        b: Second child hash

    Returns:
        32-byte parent hash
    """
    if a <= b:
        return keccak256(a + b)
    return keccak256(b + a)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Args:
        hex_string: Hex string with 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


def to_move_hex(data: bytes) -> str:
    """Render bytes as a Move byte-string literal, e.g. x"deadbeef"."""
    return f'x"{data.hex()}"'


def normalize_address(address: str) -> str:
    """Strip surrounding whitespace and lower-case an address string."""
    return address.strip().lower()


def is_evm_address(value: str) -> bool:
    """Check that value is a 0x-prefixed 20-byte hex address."""
    return value.startswith("0x") and is_hex_address(value)


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
