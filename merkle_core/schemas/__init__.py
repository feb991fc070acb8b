"""
Schemas: error taxonomy and boundary models.
"""

from .errors import (
    ErrorCodes,
    MerkleError,
    MerkleException,
    EmptyLeafSetException,
    LeafNotFoundException,
    MalformedProofException,
    MalformedLeafException,
    ConfigException,
)

__all__ = [
    "ErrorCodes",
    "MerkleError",
    "MerkleException",
    "EmptyLeafSetException",
    "LeafNotFoundException",
    "MalformedProofException",
    "MalformedLeafException",
    "ConfigException",
]
