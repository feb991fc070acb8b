"""
Merkle allowlist core.

Build a Merkle tree over allowlist values, generate inclusion proofs, and
verify (root, value, proof) triples without the tree.
"""

from merkle_core.merkle import (
    MerkleTree,
    MerkleProof,
    build_merkle_tree,
    prove,
    verify,
)
from merkle_core.schemas.errors import (
    EmptyLeafSetException,
    LeafNotFoundException,
    MalformedProofException,
)

__version__ = "0.1.0"

__all__ = [
    "MerkleTree",
    "MerkleProof",
    "build_merkle_tree",
    "prove",
    "verify",
    "EmptyLeafSetException",
    "LeafNotFoundException",
    "MalformedProofException",
]
