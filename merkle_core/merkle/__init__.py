"""
Modules 02/03 - Merkle Tree and Proofs
Deterministic Merkle tree construction + proof generation/verification.

Owner: Protocol/Crypto Engineer

This module provides:
- MerkleTree: immutable tree retaining all layers
- build_merkle_tree: Build a tree from domain values
- prove: Sibling path for a member value
- verify: Check a (root, value, proof) triple

Canonical Commitment Rules:
1. Leaf hashing: keccak256(encode_domain_value(value))
2. Parent hashing: keccak256(min(a, b) + max(a, b))
3. Odd node: carried to the next layer unchanged
4. Empty tree: rejected (EmptyLeafSetException)
5. Single leaf: root = leaf

Usage:
    from merkle_core.merkle import build_merkle_tree, prove, verify

    addresses = [a.lower() for a in raw_addresses]
    tree = build_merkle_tree(addresses)

    proof = prove(tree, addresses[2])
    assert verify(tree.root, addresses[2], proof)
"""
from .merkle_tree import (
    MerkleTree,
    merkle_parent,
    build_merkle_tree,
    build_merkle_tree_from_leaves,
    build_merkle_root,
    compute_tree_depth,
)

from .merkle_proofs import (
    HashLike,
    MerkleProof,
    build_merkle_proof,
    prove,
    process_proof,
    verify,
    verify_merkle_proof,
    validate_proof,
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "MerkleTree",
    "MerkleProof",
    "HashLike",
    # Construction
    "merkle_parent",
    "build_merkle_tree",
    "build_merkle_tree_from_leaves",
    "build_merkle_root",
    "compute_tree_depth",
    # Proofs
    "build_merkle_proof",
    "prove",
    "process_proof",
    "verify",
    "verify_merkle_proof",
    "validate_proof",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
