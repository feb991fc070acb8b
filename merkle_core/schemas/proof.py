"""
Module 01 - Schemas
File: proof.py

Purpose: Boundary representation of inclusion proofs for CLI output and
cross-environment transfer (EVM calldata, Move test fixtures).
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

from merkle_core.crypto.hashing import from_hex, to_hex, to_move_hex
from merkle_core.merkle.merkle_proofs import MerkleProof, verify

_HASH_HEX_RE = re.compile(r"^0x[0-9a-f]{64}$")


def _check_hash_hex(value: str) -> str:
    value = value.lower()
    if not _HASH_HEX_RE.match(value):
        raise ValueError(f"Expected a 0x-prefixed 32-byte hex hash, got {value!r}")
    return value


class ProofExport(BaseModel):
    """
    A proof for one allowlist member, with every hash rendered as 0x hex.

    This is the form proofs take when handed to a verifying consumer.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    address: str = Field(..., description="Domain value the proof is for", min_length=1)
    leaf: str = Field(..., description="Leaf hash of the address")
    proof: list[str] = Field(default_factory=list, description="Sibling hashes, leaf-most first")
    root: str = Field(..., description="Merkle root the proof reconstructs")

    @field_validator("leaf", "root")
    @classmethod
    def _validate_hash(cls, v: str) -> str:
        return _check_hash_hex(v)

    @field_validator("proof")
    @classmethod
    def _validate_proof(cls, v: list[str]) -> list[str]:
        return [_check_hash_hex(item) for item in v]

    @classmethod
    def from_proof(cls, address: str, proof: MerkleProof) -> "ProofExport":
        return cls(
            address=address,
            leaf=to_hex(proof.leaf),
            proof=proof.hex_siblings(),
            root=to_hex(proof.root),
        )

    def verify(self) -> bool:
        """Re-check the exported proof against its own root."""
        return verify(self.root, self.address, self.proof)

    def to_move(self) -> str:
        """Render root and proof as Move literals for an Aptos test."""
        lines = [f"let merkle_root = {to_move_hex(from_hex(self.root))};"]
        lines.append("let proof = vector[")
        for item in self.proof:
            lines.append(f"    {to_move_hex(from_hex(item))},")
        lines.append("];")
        return "\n".join(lines)


class RootExport(BaseModel):
    """Root of an allowlist tree together with its shape."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    root: str = Field(..., description="Merkle root as 0x hex")
    leaf_count: int = Field(..., ge=1)
    depth: int = Field(..., ge=1)
    sorted_leaves: bool = Field(default=False)

    @field_validator("root")
    @classmethod
    def _validate_root(cls, v: str) -> str:
        return _check_hash_hex(v)


__all__ = [
    "ProofExport",
    "RootExport",
]
