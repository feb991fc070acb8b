"""
Module 02 - Merkle Tree Implementation
Deterministic Merkle tree construction over allowlist values.

Owner: Protocol/Crypto Engineer
Module ID: M02

This module provides:
- MerkleTree: immutable tree value retaining every layer
- Tree construction from domain values or pre-hashed leaves
- Standard carry rule for odd number of nodes

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = keccak256(encode_domain_value(value))
   - Implemented via merkle_core.crypto.hashing.hash_leaf()
2. Parent hashing: parent = keccak256(min(a, b) + max(a, b))
   - Children are ordered bytewise, never by position
3. Carry rule: an unpaired last node moves up unchanged (no duplication)
4. Empty leaves: rejected with EmptyLeafSetException
5. Single leaf: root = leaf (the leaf hash itself)

Determinism Notes:
- No randomness or non-deterministic ordering
- Leaf order is the input order unless sort_leaves=True
- Duplicate leaves are kept; deduplication belongs to the caller
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from merkle_core.crypto.hashing import (
    HASH_SIZE,
    hash_leaf,
    hash_sorted_pair,
    to_hex,
)
from merkle_core.schemas.errors import EmptyLeafSetException, MalformedLeafException


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MerkleTree:
    """
    An immutable Merkle tree.

    Attributes:
        layers: Every level of the tree, layers[0] being the leaf hashes
                and layers[-1] a single-element tuple holding the root
    """
    layers: tuple[tuple[bytes, ...], ...]

    @property
    def root(self) -> bytes:
        """The 32-byte Merkle root."""
        return self.layers[-1][0]

    @property
    def hex_root(self) -> str:
        """The root as a 0x-prefixed hex string."""
        return to_hex(self.root)

    @property
    def leaves(self) -> tuple[bytes, ...]:
        return self.layers[0]

    @property
    def leaf_count(self) -> int:
        return len(self.layers[0])

    @property
    def depth(self) -> int:
        """Number of layers, leaf layer and root layer included."""
        return len(self.layers)

    def index_of(self, leaf_hash: bytes) -> int:
        """
        Return the index of the first occurrence of leaf_hash in layer 0.

        Returns:
            0-based index, or -1 if the leaf is absent
        """
        try:
            return self.layers[0].index(leaf_hash)
        except ValueError:
            return -1

    def contains(self, value: str | bytes) -> bool:
        """Check whether a domain value is a member of this tree."""
        return self.index_of(hash_leaf(value)) >= 0


def merkle_parent(a: bytes, b: bytes) -> bytes:
    """
    Compute the parent hash of two child nodes.

    Parent hash is keccak256 of the bytewise-sorted concatenation,
    so merkle_parent(a, b) == merkle_parent(b, a).
    """
    return hash_sorted_pair(a, b)


def _next_layer(layer: Sequence[bytes]) -> tuple[bytes, ...]:
    """Fold one layer into the next, carrying an odd last node upward."""
    parents: list[bytes] = []
    for i in range(0, len(layer) - 1, 2):
        parents.append(merkle_parent(layer[i], layer[i + 1]))
    if len(layer) % 2 == 1:
        parents.append(layer[-1])
    return tuple(parents)


def build_merkle_tree_from_leaves(
    leaf_hashes: Sequence[bytes],
    *,
    sort_leaves: bool = False,
) -> MerkleTree:
    """
    Build a Merkle tree from pre-hashed leaves.

    Algorithm:
    1. Reject an empty sequence
    2. Optionally sort leaves bytewise
    3. Fold pairs left to right until a single node remains;
       an odd last node is carried up unchanged

    Example: [a, b, c] -> [parent(a,b), c] -> [parent(parent(a,b), c)]

    Args:
        leaf_hashes: Sequence of 32-byte leaf hashes.
                     Order matters unless sort_leaves is set.
        sort_leaves: Sort leaf hashes before folding, making the root
                     independent of input order

    Returns:
        MerkleTree with all layers retained

    Raises:
        EmptyLeafSetException: If leaf_hashes is empty
        MalformedLeafException: If any leaf is not a 32-byte hash
    """
    if len(leaf_hashes) == 0:
        raise EmptyLeafSetException()

    for position, leaf in enumerate(leaf_hashes):
        if not isinstance(leaf, (bytes, bytearray)) or len(leaf) != HASH_SIZE:
            raise MalformedLeafException(
                f"Leaf at position {position} is not a {HASH_SIZE}-byte hash",
                position=position,
            )

    current: tuple[bytes, ...] = tuple(bytes(leaf) for leaf in leaf_hashes)
    if sort_leaves:
        current = tuple(sorted(current))

    layers: list[tuple[bytes, ...]] = [current]
    while len(current) > 1:
        current = _next_layer(current)
        layers.append(current)

    tree = MerkleTree(layers=tuple(layers))
    logger.debug(
        "Built Merkle tree: %d leaves, %d layers, root %s",
        tree.leaf_count,
        tree.depth,
        tree.hex_root,
    )
    return tree


def build_merkle_tree(
    values: Iterable[str | bytes],
    *,
    sort_leaves: bool = False,
) -> MerkleTree:
    """
    Build a Merkle tree from domain values.

    Each value is hashed with hash_leaf() to form layer 0. The input is
    never mutated and duplicates are kept as separate leaves.

    Args:
        values: Domain values, normalized by the caller
        sort_leaves: Sort leaf hashes before folding

    Returns:
        MerkleTree

    Raises:
        EmptyLeafSetException: If values is empty
    """
    leaves = [hash_leaf(value) for value in values]
    return build_merkle_tree_from_leaves(leaves, sort_leaves=sort_leaves)


def build_merkle_root(
    values: Iterable[str | bytes],
    *,
    sort_leaves: bool = False,
) -> bytes:
    """Build a tree over values and return only its root."""
    return build_merkle_tree(values, sort_leaves=sort_leaves).root


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the number of layers of a tree with the given leaf count.

    A single leaf has depth 1, two leaves have depth 2, etc. Carried
    odd nodes do not add padding, so depth is 1 + ceil(log2(n)).

    Args:
        num_leaves: Number of leaves in the tree

    Returns:
        Tree depth (0 for empty tree)
    """
    if num_leaves == 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        depth += 1

    return depth


__all__ = [
    "MerkleTree",
    "merkle_parent",
    "build_merkle_tree",
    "build_merkle_tree_from_leaves",
    "build_merkle_root",
    "compute_tree_depth",
]
