"""
Module 01 - Schemas
File: errors.py

Purpose: Standard error taxonomy for tree construction and proof handling.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Construction Errors
    EMPTY_LEAF_SET = "EMPTY_LEAF_SET"
    MALFORMED_LEAF = "MALFORMED_LEAF"

    # Proof Errors
    LEAF_NOT_FOUND = "LEAF_NOT_FOUND"
    MALFORMED_PROOF = "MALFORMED_PROOF"

    # Configuration Errors
    CONFIG_ERROR = "CONFIG_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class MerkleError(BaseModel):
    """
    Base error model for structured error communication.

    Used when an error has to cross a boundary as data (JSON CLI output)
    rather than as a raised exception.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.LEAF_NOT_FOUND],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "MerkleException":
        """
        Convert this error model to a raised exception.

        Known codes come back as their specific subclass; unknown codes
        as the base MerkleException.
        """
        exc_type = EXCEPTIONS_BY_CODE.get(self.code)
        if exc_type is not None:
            return exc_type(self.message, details=dict(self.details))
        return MerkleException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class MerkleException(Exception):
    """
    Base exception for all tree and proof errors.

    Carries structured error information and can be converted
    to/from MerkleError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "MERKLE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> MerkleError:
        """Convert this exception to a MerkleError model."""
        return MerkleError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EmptyLeafSetException(MerkleException):
    """Raised when a tree is requested over zero leaves."""

    def __init__(
        self,
        message: str = "Cannot build a Merkle tree from an empty leaf set",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_LEAF_SET,
            details=details,
            retryable=False,
        )


class LeafNotFoundException(MerkleException):
    """Raised when a proof is requested for a value absent from the tree."""

    def __init__(
        self,
        message: str,
        leaf: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaf:
            full_details["leaf"] = leaf
        super().__init__(
            message=message,
            code=ErrorCodes.LEAF_NOT_FOUND,
            details=full_details,
            retryable=False,
        )


class MalformedProofException(MerkleException):
    """Raised by strict proof validation when an element has the wrong shape."""

    def __init__(
        self,
        message: str,
        position: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if position is not None:
            full_details["position"] = position
        super().__init__(
            message=message,
            code=ErrorCodes.MALFORMED_PROOF,
            details=full_details,
            retryable=False,
        )


class MalformedLeafException(MerkleException):
    """Raised when a pre-hashed leaf is not a 32-byte hash."""

    def __init__(
        self,
        message: str,
        position: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if position is not None:
            full_details["position"] = position
        super().__init__(
            message=message,
            code=ErrorCodes.MALFORMED_LEAF,
            details=full_details,
            retryable=False,
        )


class ConfigException(MerkleException):
    """Raised when configuration cannot be loaded or is invalid."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIG_ERROR,
            details=details,
            retryable=False,
        )


# Exception type raised for each error code by MerkleError.to_exception()
EXCEPTIONS_BY_CODE: dict[str, type[MerkleException]] = {
    ErrorCodes.EMPTY_LEAF_SET: EmptyLeafSetException,
    ErrorCodes.MALFORMED_LEAF: MalformedLeafException,
    ErrorCodes.LEAF_NOT_FOUND: LeafNotFoundException,
    ErrorCodes.MALFORMED_PROOF: MalformedProofException,
    ErrorCodes.CONFIG_ERROR: ConfigException,
}
