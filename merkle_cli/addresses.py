"""
Module 04 - Address List Loading

Reads allowlist values from the command line or from a file and applies
the normalization configured for the tree. Files are read only; this tool
does not maintain the allowlist.

Supported file formats:
- JSON: a list of strings, or an object with an "addresses" list
- Text: one value per line, blank lines and "#" comments ignored
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Sequence

from merkle_core.crypto.hashing import is_evm_address, normalize_address


logger = logging.getLogger(__name__)


class AddressListError(ValueError):
    """Raised when an address list cannot be read or fails validation."""


def load_addresses(path: Path) -> list[str]:
    """Load allowlist values from a JSON or text file."""
    if not path.exists():
        raise AddressListError(f"Address file not found: {path}")

    content = path.read_text(encoding="utf-8")

    if path.suffix == ".json":
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise AddressListError(f"Invalid JSON in {path}: {e}") from e
        if isinstance(data, dict):
            data = data.get("addresses")
        if not isinstance(data, list) or not all(isinstance(a, str) for a in data):
            raise AddressListError(
                f"{path} must contain a list of strings or an 'addresses' list"
            )
        return list(data)

    addresses = []
    for line in content.splitlines():
        line = line.split("#", 1)[0].strip()
        if line:
            addresses.append(line)
    return addresses


def collect_addresses(
    inline: Sequence[str] | None,
    file: str | None,
) -> list[str]:
    """Combine values from a file (first) and the command line (after)."""
    addresses: list[str] = []
    if file:
        addresses.extend(load_addresses(Path(file)))
    if inline:
        addresses.extend(inline)
    logger.debug("Collected %d allowlist values", len(addresses))
    return addresses


def prepare_values(
    addresses: Sequence[str],
    *,
    lowercase: bool = True,
    strict: bool = False,
) -> list[str]:
    """
    Normalize values the same way for building, proving and verifying.

    Args:
        addresses: Raw values
        lowercase: Lower-case each value (whitespace is always stripped)
        strict: Require every value to be a 20-byte 0x address

    Raises:
        AddressListError: In strict mode, on the first invalid address
    """
    values = []
    for raw in addresses:
        value = normalize_address(raw) if lowercase else raw.strip()
        if strict and not is_evm_address(value):
            raise AddressListError(f"Invalid Ethereum address format: {raw}")
        values.append(value)
    return values


def value_for(address: str, *, lowercase: bool = True) -> str:
    """Normalize a single value (target of a proof or verification)."""
    return normalize_address(address) if lowercase else address.strip()
