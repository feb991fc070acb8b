"""
Module 03 - Merkle Proof Generation and Verification

Owner: Protocol/Crypto Engineer
Module ID: M03

This module provides:
- MerkleProof: Dataclass representing an inclusion proof
- prove / build_merkle_proof: sibling path for a member value
- verify / verify_merkle_proof: recompute a root and compare
- MerkleProver / MerkleVerifier: class-based convenience wrappers

Proofs carry no left/right flags. Because parents are hashed over the
bytewise-sorted pair, the verifier folds each sibling in without knowing
the position of the node.

Verification never raises. Malformed input of any kind yields False.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence, Union

from merkle_core.crypto.hashing import HASH_SIZE, from_hex, hash_leaf, to_hex
from merkle_core.merkle.merkle_tree import MerkleTree, build_merkle_tree, merkle_parent
from merkle_core.schemas.errors import LeafNotFoundException, MalformedProofException


logger = logging.getLogger(__name__)

# A hash as raw bytes or as a 0x-prefixed hex string
HashLike = Union[bytes, str]


@dataclass(frozen=True)
class MerkleProof:
    """
    An inclusion proof for a single leaf.

    Attributes:
        leaf: The leaf hash being proven
        siblings: Sibling hashes, leaf-most first
        root: The Merkle root this proof is against
        index: 0-based position of the leaf in layer 0 (informational;
               verification does not use it)
    """
    leaf: bytes
    siblings: tuple[bytes, ...]
    root: bytes
    index: int = 0

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.index}")

    def hex_siblings(self) -> list[str]:
        return [to_hex(sibling) for sibling in self.siblings]


def _sibling_path(tree: MerkleTree, index: int) -> list[bytes]:
    siblings: list[bytes] = []
    for layer in tree.layers[:-1]:
        sibling_index = index ^ 1
        # A carried odd node has no sibling at this level
        if sibling_index < len(layer):
            siblings.append(layer[sibling_index])
        index //= 2
    return siblings


def build_merkle_proof(tree: MerkleTree, value: str | bytes) -> MerkleProof:
    """
    Generate a Merkle proof for a domain value.

    Algorithm:
    1. Hash the value and locate its first occurrence in layer 0
    2. At each layer below the root:
       - Record the sibling at index XOR 1, if it exists
       - Move up: index = index // 2

    Args:
        tree: Tree built over the same normalized values
        value: Domain value to prove

    Returns:
        MerkleProof with siblings ordered leaf-most first

    Raises:
        LeafNotFoundException: If the value is not a member of the tree
    """
    leaf = hash_leaf(value)
    index = tree.index_of(leaf)
    if index < 0:
        raise LeafNotFoundException(
            f"Value {value!r} is not a member of the tree",
            leaf=to_hex(leaf),
        )

    siblings = _sibling_path(tree, index)
    logger.debug("Proof for leaf %d has %d siblings", index, len(siblings))

    return MerkleProof(
        leaf=leaf,
        siblings=tuple(siblings),
        root=tree.root,
        index=index,
    )


def prove(tree: MerkleTree, value: str | bytes) -> list[bytes]:
    """
    Return the sibling hashes proving value's membership in tree.

    Raises:
        LeafNotFoundException: If the value is not a member of the tree
    """
    return list(build_merkle_proof(tree, value).siblings)


def process_proof(leaf: bytes, siblings: Sequence[bytes]) -> bytes:
    """
    Fold a leaf with each sibling in order and return the resulting root.

    Args:
        leaf: Starting leaf hash
        siblings: Sibling hashes, leaf-most first

    Returns:
        The reconstructed root
    """
    current = leaf
    for sibling in siblings:
        current = merkle_parent(current, sibling)
    return current


def _coerce_hash(value: HashLike) -> bytes | None:
    """Decode a hash given as bytes or 0x hex; None if it is not 32 bytes."""
    if isinstance(value, str):
        try:
            value = from_hex(value)
        except ValueError:
            return None
    if not isinstance(value, (bytes, bytearray)) or len(value) != HASH_SIZE:
        return None
    return bytes(value)


def verify(root: HashLike, value: str | bytes, proof: Sequence[HashLike]) -> bool:
    """
    Verify that value is a member of the tree committed to by root.

    Hashes the value, folds in every proof element in the order given,
    and compares the result byte for byte with root.

    Args:
        root: Claimed Merkle root (bytes or 0x hex)
        value: Domain value, normalized the same way as at build time
        proof: Sibling hashes (bytes or 0x hex), leaf-most first

    Returns:
        True only if the reconstructed root equals root
    """
    expected_root = _coerce_hash(root)
    if expected_root is None:
        logger.debug("Rejecting proof: root is not a %d-byte hash", HASH_SIZE)
        return False

    siblings: list[bytes] = []
    for element in proof:
        sibling = _coerce_hash(element)
        if sibling is None:
            logger.debug("Rejecting proof: element is not a %d-byte hash", HASH_SIZE)
            return False
        siblings.append(sibling)

    try:
        leaf = hash_leaf(value)
    except (TypeError, ValueError):
        return False

    return process_proof(leaf, siblings) == expected_root


def verify_merkle_proof(proof: MerkleProof) -> bool:
    """Verify a MerkleProof against the root it carries."""
    return process_proof(proof.leaf, proof.siblings) == proof.root


def validate_proof(proof: Sequence[HashLike]) -> list[bytes]:
    """
    Strictly decode a proof, rejecting elements that are not 32-byte hashes.

    Args:
        proof: Sibling hashes as bytes or 0x hex strings

    Returns:
        Decoded sibling hashes

    Raises:
        MalformedProofException: On the first malformed element
    """
    decoded: list[bytes] = []
    for position, element in enumerate(proof):
        sibling = _coerce_hash(element)
        if sibling is None:
            raise MalformedProofException(
                f"Proof element {position} is not a {HASH_SIZE}-byte hash",
                position=position,
            )
        decoded.append(sibling)
    return decoded


class MerkleProver:
    """
    Convenience class for generating Merkle proofs.

    Example:
        >>> tree = MerkleProver.build(["0x1", "0x2", "0x3"])
        >>> proof = MerkleProver.prove(tree, "0x2")
        >>> MerkleVerifier.verify(proof)
        True
    """

    @staticmethod
    def build(values: Sequence[str | bytes], sort_leaves: bool = False) -> MerkleTree:
        """Build a tree over domain values."""
        return build_merkle_tree(values, sort_leaves=sort_leaves)

    @staticmethod
    def prove(tree: MerkleTree, value: str | bytes) -> MerkleProof:
        """
        Generate a Merkle proof for value.

        Raises:
            LeafNotFoundException: If the value is not a member of the tree
        """
        return build_merkle_proof(tree, value)

    @staticmethod
    def prove_all(tree: MerkleTree, values: Sequence[str | bytes]) -> dict[str | bytes, MerkleProof]:
        """Generate proofs for several values against one tree."""
        return {value: build_merkle_proof(tree, value) for value in values}


class MerkleVerifier:
    """Convenience class for verifying Merkle proofs."""

    @staticmethod
    def verify(proof: MerkleProof) -> bool:
        return verify_merkle_proof(proof)

    @staticmethod
    def verify_value_in_root(
        value: str | bytes,
        siblings: Sequence[HashLike],
        root: HashLike,
    ) -> bool:
        """
        Verify a domain value is included in a Merkle root.

        Args:
            value: The domain value (hashed into a leaf)
            siblings: Sibling hashes, leaf-most first
            root: The claimed Merkle root

        Returns:
            True if the proof is valid, False otherwise
        """
        return verify(root, value, siblings)


__all__ = [
    "HashLike",
    "MerkleProof",
    "build_merkle_proof",
    "prove",
    "process_proof",
    "verify",
    "verify_merkle_proof",
    "validate_proof",
    "MerkleProver",
    "MerkleVerifier",
]
